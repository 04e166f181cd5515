from .base import FlowError, PromptFlow, SchemaMismatchError
from .district_details import get_district_details
from .district_image import generate_district_image
from .explore import explore_district
from .hidden_gems import suggest_hidden_gems
from .itinerary import ai_itinerary_tool
from .postcards import generate_virtual_postcard
from .tour_guide_chat import GREETING, tour_guide_chat

FLOWS = {
    "itinerary": ai_itinerary_tool,
    "district-details": get_district_details,
    "district-image": generate_district_image,
    "explore": explore_district,
    "hidden-gems": suggest_hidden_gems,
    "chat": tour_guide_chat,
    "postcard": generate_virtual_postcard,
}

__all__ = [
    "FLOWS",
    "FlowError",
    "GREETING",
    "PromptFlow",
    "SchemaMismatchError",
    "ai_itinerary_tool",
    "explore_district",
    "generate_district_image",
    "generate_virtual_postcard",
    "get_district_details",
    "suggest_hidden_gems",
    "tour_guide_chat",
]
