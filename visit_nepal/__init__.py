"""Prompt flows behind the Visit Nepal travel guide."""

from .flows import (
    FlowError,
    SchemaMismatchError,
    ai_itinerary_tool,
    explore_district,
    generate_district_image,
    generate_virtual_postcard,
    get_district_details,
    suggest_hidden_gems,
    tour_guide_chat,
)
from .models import (
    ChatRequest,
    ChatTurn,
    HiddenGemsRequest,
    ItineraryDay,
    ItineraryRequest,
    ItineraryResponse,
    PostcardRequest,
)

__all__ = [
    "ChatRequest",
    "ChatTurn",
    "FlowError",
    "HiddenGemsRequest",
    "ItineraryDay",
    "ItineraryRequest",
    "ItineraryResponse",
    "PostcardRequest",
    "SchemaMismatchError",
    "ai_itinerary_tool",
    "explore_district",
    "generate_district_image",
    "generate_virtual_postcard",
    "get_district_details",
    "suggest_hidden_gems",
    "tour_guide_chat",
]
