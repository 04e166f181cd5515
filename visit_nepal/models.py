"""Request and response models shared by the flows, the API and the CLI."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .districts import normalize_budget, normalize_district
from .utils import blank_to_none, clean_items, parse_data_uri


MIN_INTERESTS_LENGTH = 10
MIN_MODIFICATION_LENGTH = 10
MAX_MODIFICATION_LENGTH = 500
MAX_TRIP_DAYS = 30
MAX_POSTCARD_IMAGE_BYTES = 5 * 1024 * 1024
ACCEPTED_IMAGE_TYPES = ("image/jpeg", "image/jpg", "image/png", "image/webp")


class Schema(BaseModel):
    """Base model: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json_dict(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


# ---------------------------------------------------------------------------
# Itinerary
# ---------------------------------------------------------------------------


class ItineraryDay(Schema):
    day: int = Field(..., ge=1)
    location: str = Field(..., min_length=1)
    activities: List[str] = Field(..., min_length=1)
    hotel_recommendations: Optional[List[str]] = None

    @field_validator("location")
    @classmethod
    def _strip_location(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Each day needs a location.")
        return value

    @field_validator("activities", mode="after")
    @classmethod
    def _clean_activities(cls, value: List[str]) -> List[str]:
        cleaned = clean_items(value)
        if not cleaned:
            raise ValueError("Each day needs at least one activity.")
        return cleaned

    @field_validator("hotel_recommendations", mode="after")
    @classmethod
    def _clean_hotels(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        if value is None:
            return None
        return clean_items(value) or None


class ItineraryRequest(Schema):
    itinerary_type: Literal["custom", "random"] = Field(
        ...,
        validation_alias=AliasChoices("itineraryType", "itinerary_type", "type"),
        serialization_alias="itineraryType",
    )
    interests: Optional[str] = None
    duration: int = Field(..., ge=1, le=MAX_TRIP_DAYS)
    budget: str
    start_point: str = Field(..., min_length=1)
    end_point: Optional[str] = None
    must_visit_places: Optional[str] = None
    previous_itinerary: Optional[List[ItineraryDay]] = None
    modification_request: Optional[str] = None

    @field_validator("interests", "end_point", "must_visit_places", "modification_request", mode="before")
    @classmethod
    def _blank_optional(cls, value):
        if isinstance(value, str):
            return blank_to_none(value)
        return value

    @field_validator("start_point")
    @classmethod
    def _strip_start(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Please select a starting point.")
        return value

    @field_validator("budget")
    @classmethod
    def _check_budget(cls, value: str) -> str:
        return normalize_budget(value)

    @model_validator(mode="after")
    def _check_mode(self) -> "ItineraryRequest":
        if self.itinerary_type == "random":
            self.interests = None
            self.end_point = None
            self.must_visit_places = None
        elif not self.interests or len(self.interests) < MIN_INTERESTS_LENGTH:
            raise ValueError(
                f"Interests (min {MIN_INTERESTS_LENGTH} characters) are required for a custom itinerary."
            )

        if self.previous_itinerary is not None:
            if not self.previous_itinerary:
                raise ValueError("The previous itinerary to modify is empty.")
            request = self.modification_request or ""
            if len(request) < MIN_MODIFICATION_LENGTH:
                raise ValueError(
                    f"Please describe the changes you want (min {MIN_MODIFICATION_LENGTH} characters)."
                )
            if len(request) > MAX_MODIFICATION_LENGTH:
                raise ValueError(
                    f"Modification request cannot exceed {MAX_MODIFICATION_LENGTH} characters."
                )
        elif self.modification_request is not None:
            raise ValueError("A modification request needs the previous itinerary it applies to.")
        return self

    @property
    def is_modification(self) -> bool:
        return self.previous_itinerary is not None


class ItineraryResponse(Schema):
    itinerary: List[ItineraryDay] = Field(..., min_length=1)


# ---------------------------------------------------------------------------
# Districts
# ---------------------------------------------------------------------------


class DistrictRequest(Schema):
    district_name: str

    @field_validator("district_name")
    @classmethod
    def _known_district(cls, value: str) -> str:
        return normalize_district(value)


class DistrictDetailsResponse(Schema):
    name: str
    tagline: str = Field(..., min_length=1)
    attractions: List[str] = Field(..., min_length=1)
    accommodations: List[str] = Field(..., min_length=1)
    activities: List[str] = Field(..., min_length=1)
    food: List[str] = Field(..., min_length=1)

    @field_validator("attractions", "accommodations", "activities", "food", mode="after")
    @classmethod
    def _clean_lists(cls, value: List[str]) -> List[str]:
        cleaned = clean_items(value)
        if not cleaned:
            raise ValueError("List must contain at least one entry.")
        return cleaned


class HiddenGemsRequest(DistrictRequest):
    user_preferences: Optional[str] = None

    @field_validator("user_preferences", mode="before")
    @classmethod
    def _blank_preferences(cls, value):
        if isinstance(value, str):
            return blank_to_none(value)
        return value


class HiddenGemsResponse(Schema):
    hidden_gems: List[str] = Field(..., min_length=3, max_length=5)

    @field_validator("hidden_gems", mode="before")
    @classmethod
    def _clean_gems(cls, value):
        if isinstance(value, list):
            return clean_items(value)
        return value


class DistrictImageResponse(Schema):
    image_url: str = Field(..., pattern=r"^data:image/")


class DistrictOverview(Schema):
    details: DistrictDetailsResponse
    region: str
    image_url: Optional[str] = None


# ---------------------------------------------------------------------------
# Chat
# ---------------------------------------------------------------------------


class ChatTurn(Schema):
    role: Literal["user", "assistant"]
    content: str

    @field_validator("role", mode="before")
    @classmethod
    def _legacy_role(cls, value):
        if value == "model":
            return "assistant"
        return value


class ChatRequest(Schema):
    history: List[ChatTurn] = Field(default_factory=list)
    user_message: str = Field(..., min_length=1)

    @field_validator("user_message")
    @classmethod
    def _strip_message(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Message cannot be empty.")
        return value


class ChatResponse(Schema):
    response: str = Field(..., min_length=1)


# ---------------------------------------------------------------------------
# Postcards
# ---------------------------------------------------------------------------


class PostcardRequest(Schema):
    image_data_uri: str
    location: str
    description: Optional[str] = None

    @field_validator("image_data_uri")
    @classmethod
    def _check_image(cls, value: str) -> str:
        mime, payload = parse_data_uri(value)
        if mime not in ACCEPTED_IMAGE_TYPES:
            raise ValueError("Only .jpg, .jpeg, .png and .webp formats are supported.")
        if not payload:
            raise ValueError("Image is required.")
        if len(payload) > MAX_POSTCARD_IMAGE_BYTES:
            raise ValueError("Max image size is 5MB.")
        return value.strip()

    @field_validator("location")
    @classmethod
    def _check_location(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 3:
            raise ValueError("Location must be at least 3 characters.")
        return value

    @field_validator("description", mode="before")
    @classmethod
    def _blank_description(cls, value):
        if isinstance(value, str):
            return blank_to_none(value)
        return value


class PostcardResponse(Schema):
    caption: str = Field(..., min_length=1)
