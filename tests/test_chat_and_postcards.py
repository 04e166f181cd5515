"""Tests for the tour-guide chat and postcard caption flows."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from visit_nepal.flows import SchemaMismatchError, generate_virtual_postcard, tour_guide_chat
from visit_nepal.flows.tour_guide_chat import GREETING, format_history
from visit_nepal.models import ChatTurn


def test_format_history_labels_speakers_in_order():
    history = [
        ChatTurn(role="assistant", content=GREETING),
        ChatTurn(role="user", content="Is October good for trekking?"),
    ]
    lines = format_history(history).splitlines()
    assert lines[0].startswith("Pasang: Namaste!")
    assert lines[1] == "User: Is October good for trekking?"


@patch("visit_nepal.flows.base.llm_call", return_value="Pasang: October is perfect, clear skies!")
def test_chat_reply_is_stripped_of_speaker_prefix(mock_llm):
    result = tour_guide_chat(
        {
            "history": [{"role": "model", "content": GREETING}],
            "userMessage": "Is October good for trekking?",
        }
    )

    assert result.response == "October is perfect, clear skies!"
    prompt = mock_llm.call_args.args[0]
    assert "Current User Message:\nUser: Is October good for trekking?" in prompt
    assert prompt.rstrip().endswith("Pasang:")


@patch("visit_nepal.flows.base.llm_call", return_value="Namaste!")
def test_chat_with_empty_history(mock_llm):
    result = tour_guide_chat({"history": [], "userMessage": "Hello"})
    assert result.response == "Namaste!"
    assert "(no previous messages)" in mock_llm.call_args.args[0]


@patch("visit_nepal.flows.base.llm_call", return_value="Pasang:   ")
def test_chat_empty_reply_is_a_schema_mismatch(_mock_llm):
    with pytest.raises(SchemaMismatchError):
        tour_guide_chat({"history": [], "userMessage": "Hello"})


@patch("visit_nepal.flows.base.structured_call", return_value={"caption": '"Golden hour over Phewa Lake"'})
def test_postcard_caption_sends_image(mock_call, png_data_uri):
    result = generate_virtual_postcard(
        {"imageDataUri": png_data_uri, "location": "Pokhara", "description": "Sunset paddle"}
    )

    assert result.caption == "Golden hour over Phewa Lake"
    assert mock_call.call_args.kwargs["images"] == [png_data_uri]
    prompt = mock_call.call_args.args[0]
    assert "Location: Pokhara" in prompt
    assert "Description: Sunset paddle" in prompt


@patch("visit_nepal.flows.base.structured_call")
def test_postcard_without_image_is_rejected(mock_call):
    with pytest.raises(ValueError):
        generate_virtual_postcard({"imageDataUri": "", "location": "Pokhara"})
    mock_call.assert_not_called()
