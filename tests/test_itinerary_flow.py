"""Tests for the itinerary builder/modifier flow with a stubbed model."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from pydantic import ValidationError

from visit_nepal.flows import FlowError, SchemaMismatchError, ai_itinerary_tool
from visit_nepal.config import get_settings
from visit_nepal.flows.itinerary import (
    TOKENS_PER_DAY,
    itinerary_token_budget,
    render_itinerary_prompt,
    sequence_days,
)
from visit_nepal.llm import LLMError
from visit_nepal.models import ItineraryDay, ItineraryRequest


def _days(count: int, start: int = 1) -> list:
    return [
        {
            "day": start + i,
            "location": f"Stop {i + 1}",
            "activities": [f"Activity {i + 1}"],
            "hotelRecommendations": None,
        }
        for i in range(count)
    ]


def _request(**overrides) -> dict:
    data = dict(
        itineraryType="custom",
        interests="trekking and temples",
        duration=5,
        budget="$500 - $1000 USD",
        startPoint="Kathmandu",
    )
    data.update(overrides)
    return data


@patch("visit_nepal.flows.base.structured_call")
def test_custom_itinerary_returns_one_entry_per_day(mock_call):
    mock_call.return_value = {"itinerary": _days(5)}

    result = ai_itinerary_tool(_request())

    assert [d.day for d in result.itinerary] == [1, 2, 3, 4, 5]
    assert all(d.location and d.activities for d in result.itinerary)
    assert all(d.hotel_recommendations is None for d in result.itinerary)
    prompt = mock_call.call_args.args[0]
    assert "Custom Plan" in prompt
    assert "trekking and temples" in prompt
    assert mock_call.call_args.kwargs["tool_name"] == "ai_itinerary_tool"


@patch("visit_nepal.flows.base.structured_call")
def test_invalid_custom_request_never_calls_the_model(mock_call):
    with pytest.raises(ValueError):
        ai_itinerary_tool(_request(interests="short"))
    mock_call.assert_not_called()


@patch("visit_nepal.flows.base.structured_call")
def test_random_itinerary_prompt_ignores_interests(mock_call):
    mock_call.return_value = {"itinerary": _days(3)}

    ai_itinerary_tool(
        _request(itineraryType="random", duration=3, interests="secret interests", mustVisitPlaces="Lumbini")
    )

    prompt = mock_call.call_args.args[0]
    assert "Random Adventure" in prompt
    assert "secret interests" not in prompt
    assert "Lumbini" not in prompt


@patch("visit_nepal.flows.base.structured_call")
def test_out_of_order_days_are_renumbered(mock_call):
    days = _days(3, start=2)
    mock_call.return_value = {"itinerary": [days[2], days[0], days[1]]}

    result = ai_itinerary_tool(_request(duration=3))

    assert [d.day for d in result.itinerary] == [1, 2, 3]
    assert [d.location for d in result.itinerary] == ["Stop 1", "Stop 2", "Stop 3"]


@patch("visit_nepal.flows.base.structured_call")
def test_wrong_day_count_is_a_schema_mismatch(mock_call):
    mock_call.return_value = {"itinerary": _days(4)}

    with pytest.raises(SchemaMismatchError, match="Expected 5 day"):
        ai_itinerary_tool(_request())


@patch("visit_nepal.flows.base.structured_call")
def test_malformed_day_discards_the_whole_itinerary(mock_call):
    days = _days(5)
    days[3]["activities"] = []
    mock_call.return_value = {"itinerary": days}

    with pytest.raises(SchemaMismatchError):
        ai_itinerary_tool(_request())


@patch("visit_nepal.flows.base.structured_call", side_effect=LLMError("connection reset"))
def test_provider_failure_is_wrapped(_mock_call):
    with pytest.raises(FlowError, match="ai_itinerary_tool failed: connection reset"):
        ai_itinerary_tool(_request())


@patch("visit_nepal.flows.base.structured_call")
def test_modification_round_trip_keeps_days_sequential(mock_call):
    mock_call.return_value = {"itinerary": _days(5)}
    first = ai_itinerary_tool(_request())

    mock_call.return_value = {"itinerary": _days(6)}
    modified = ai_itinerary_tool(
        _request(
            previousItinerary=[d.to_json_dict() for d in first.itinerary],
            modificationRequest="Add an extra day of rafting on the Trishuli river",
        )
    )

    assert [d.day for d in modified.itinerary] == [1, 2, 3, 4, 5, 6]
    prompt = mock_call.call_args.args[0]
    assert "Modify an existing itinerary" in prompt
    assert "Trishuli" in prompt
    assert '"location": "Stop 5"' in prompt


def test_prompt_includes_optional_sections_only_when_present():
    with_end = render_itinerary_prompt(
        ItineraryRequest.model_validate(_request(endPoint="Pokhara", mustVisitPlaces="Bandipur"))
    )
    without_end = render_itinerary_prompt(ItineraryRequest.model_validate(_request()))

    assert "End Point: Pokhara" in with_end
    assert "Must-Visit Places/Regions: Bandipur" in with_end
    assert "End Point" not in without_end
    assert "Return exactly 5 day entries." in without_end


def test_sequence_days_rejects_duplicates():
    days = [ItineraryDay.model_validate(d) for d in _days(2)]
    days[1] = days[1].model_copy(update={"day": 1})
    with pytest.raises(SchemaMismatchError, match="duplicate"):
        sequence_days(days)


def test_invalid_budget_raises_validation_error():
    with pytest.raises(ValidationError):
        ai_itinerary_tool(_request(budget="cheap"))


@patch("visit_nepal.flows.base.structured_call")
def test_long_trip_gets_a_larger_token_budget(mock_call):
    mock_call.return_value = {"itinerary": _days(30)}

    ai_itinerary_tool(_request(duration=30))

    assert mock_call.call_args.kwargs["max_output_tokens"] >= 30 * TOKENS_PER_DAY


def test_short_trip_keeps_the_configured_minimum():
    req = ItineraryRequest.model_validate(_request(duration=2))
    assert itinerary_token_budget(req) == get_settings().max_output_tokens


def test_modification_budget_leaves_room_for_extra_days():
    previous = _days(12)
    req = ItineraryRequest.model_validate(
        _request(
            duration=10,
            previousItinerary=previous,
            modificationRequest="Add two more days of trekking near Langtang",
        )
    )
    assert itinerary_token_budget(req) >= 14 * TOKENS_PER_DAY


@patch(
    "visit_nepal.flows.base.structured_call",
    side_effect=LLMError("Model reply for ai_itinerary_tool was truncated (max_output_tokens)."),
)
def test_truncated_itinerary_surfaces_as_flow_error(_mock_call):
    with pytest.raises(FlowError, match="truncated"):
        ai_itinerary_tool(_request(duration=30))
