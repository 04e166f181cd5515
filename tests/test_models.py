"""Validation rules enforced before any model call."""

from __future__ import annotations

import base64

import pytest
from pydantic import ValidationError

from visit_nepal.models import (
    ChatRequest,
    HiddenGemsRequest,
    ItineraryDay,
    ItineraryRequest,
    PostcardRequest,
)


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


def _previous() -> list:
    return [
        {"day": 1, "location": "Kathmandu", "activities": ["Swayambhunath at sunrise"]},
        {"day": 2, "location": "Pokhara", "activities": ["Boating on Phewa Lake"]},
    ]


def test_custom_request_accepts_camel_case_payload():
    req = ItineraryRequest.model_validate(_request(endPoint="Pokhara"))
    assert req.itinerary_type == "custom"
    assert req.start_point == "Kathmandu"
    assert req.end_point == "Pokhara"
    assert not req.is_modification


def test_snake_case_and_type_alias_are_accepted():
    req = ItineraryRequest.model_validate(
        {
            "type": "random",
            "duration": 3,
            "budget": "budget_under_500",
            "start_point": "Pokhara",
        }
    )
    assert req.itinerary_type == "random"
    assert req.budget == "< $500 USD"


@pytest.mark.parametrize("interests", [None, "", "hiking"])
def test_custom_request_requires_ten_characters_of_interests(interests):
    with pytest.raises(ValidationError, match="Interests"):
        ItineraryRequest.model_validate(_request(interests=interests))


def test_random_request_clears_custom_fields():
    req = ItineraryRequest.model_validate(
        _request(
            itineraryType="random",
            interests="short",
            endPoint="Pokhara",
            mustVisitPlaces="Lumbini",
        )
    )
    assert req.interests is None
    assert req.end_point is None
    assert req.must_visit_places is None


def test_optional_fields_default_to_none_not_blank():
    req = ItineraryRequest.model_validate(_request(endPoint="", mustVisitPlaces="none"))
    assert req.end_point is None
    assert req.must_visit_places is None


@pytest.mark.parametrize("budget", ["cheap", "$500 - $1000", "medium"])
def test_budget_must_be_an_enumerated_label(budget):
    with pytest.raises(ValidationError, match="Invalid budget range"):
        ItineraryRequest.model_validate(_request(budget=budget))


@pytest.mark.parametrize("duration", [0, 31])
def test_duration_bounds(duration):
    with pytest.raises(ValidationError):
        ItineraryRequest.model_validate(_request(duration=duration))


@pytest.mark.parametrize("modification", ["too short", "x" * 501])
def test_modification_request_length_is_checked(modification):
    with pytest.raises(ValidationError, match="characters"):
        ItineraryRequest.model_validate(
            _request(previousItinerary=_previous(), modificationRequest=modification)
        )


def test_modification_without_previous_itinerary_is_rejected():
    with pytest.raises(ValidationError, match="previous itinerary"):
        ItineraryRequest.model_validate(
            _request(modificationRequest="Add a rafting day on the Trishuli river")
        )


def test_previous_itinerary_switches_to_modify_mode():
    req = ItineraryRequest.model_validate(
        _request(
            previousItinerary=_previous(),
            modificationRequest="Add a rafting day on the Trishuli river",
        )
    )
    assert req.is_modification
    assert req.previous_itinerary[1].location == "Pokhara"


def test_itinerary_day_cleans_activity_bullets():
    day = ItineraryDay.model_validate(
        {
            "day": 1,
            "location": " Bhaktapur ",
            "activities": ["- Durbar Square", "  "],
            "hotelRecommendations": [],
        }
    )
    assert day.location == "Bhaktapur"
    assert day.activities == ["Durbar Square"]
    assert day.hotel_recommendations is None


def test_itinerary_day_requires_an_activity():
    with pytest.raises(ValidationError):
        ItineraryDay.model_validate({"day": 1, "location": "Bhaktapur", "activities": ["   "]})


def test_hidden_gems_request_normalizes_district_and_preferences():
    req = HiddenGemsRequest.model_validate({"districtName": "kaski", "userPreferences": " "})
    assert req.district_name == "Kaski"
    assert req.user_preferences is None


def test_chat_turn_accepts_legacy_model_role():
    req = ChatRequest.model_validate(
        {
            "history": [{"role": "model", "content": "Namaste!"}],
            "userMessage": "Best time for Everest Base Camp?",
        }
    )
    assert req.history[0].role == "assistant"


def test_chat_request_rejects_blank_message():
    with pytest.raises(ValidationError):
        ChatRequest.model_validate({"history": [], "userMessage": "   "})


def test_postcard_request_accepts_png(png_data_uri):
    req = PostcardRequest.model_validate(
        {"imageDataUri": png_data_uri, "location": "Pokhara", "description": ""}
    )
    assert req.description is None


def test_postcard_request_rejects_unsupported_type():
    uri = "data:image/gif;base64," + base64.b64encode(b"GIF89a").decode()
    with pytest.raises(ValidationError, match="formats are supported"):
        PostcardRequest.model_validate({"imageDataUri": uri, "location": "Pokhara"})


def test_postcard_request_rejects_large_images():
    uri = "data:image/png;base64," + base64.b64encode(b"0" * (5 * 1024 * 1024 + 1)).decode()
    with pytest.raises(ValidationError, match="5MB"):
        PostcardRequest.model_validate({"imageDataUri": uri, "location": "Pokhara"})


def test_postcard_request_requires_location(png_data_uri):
    with pytest.raises(ValidationError, match="at least 3 characters"):
        PostcardRequest.model_validate({"imageDataUri": png_data_uri, "location": "Ka"})
