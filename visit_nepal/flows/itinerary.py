"""Itinerary builder and modifier.

- ``ai_itinerary_tool`` generates a day-by-day Nepal itinerary, or rewrites a
  previous one when the request carries ``previous_itinerary``.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Union

from ..config import get_settings
from ..models import ItineraryDay, ItineraryRequest, ItineraryResponse
from .base import PromptFlow, SchemaMismatchError, object_schema, string_list


logger = logging.getLogger(__name__)

ITINERARY_PARAMETERS = object_schema(
    {
        "itinerary": {
            "type": "array",
            "description": "The travel itinerary, one entry per day, ordered by day number.",
            "items": object_schema(
                {
                    "day": {"type": "integer", "description": "The day number, starting at 1."},
                    "location": {"type": "string", "description": "The main location for the day."},
                    "activities": string_list("Distinct activities planned for the day, one per item."),
                    "hotelRecommendations": string_list(
                        "2-3 specific hotel recommendations if staying overnight in this location."
                    ),
                },
                optional=["hotelRecommendations"],
            ),
        }
    }
)

CRITICAL_INSTRUCTIONS = """
**CRITICAL INSTRUCTIONS:**
1. **List activities as bullet points:** For the 'activities' field, provide an array of strings, where each string is a distinct activity or step for the day. DO NOT provide a single paragraph.
2. **Hotel Recommendations:** If the plan for the day involves staying overnight in a location (especially in cities or major towns), provide 2-3 *specific*, *realistic* hotel names in 'hotelRecommendations', with a brief category (e.g., "Hotel Yak & Yeti (Luxury)", "Thamel Eco Resort (Mid-Range)", "Zostel Kathmandu (Budget/Hostel)"). On trekking days spent in tea houses you may use null or just "Stay at a local tea house". Only include recommendations if an overnight stay is implied.
3. **Day numbers:** Number the days sequentially starting at 1 with no gaps.
""".strip()

# Generous per-day allowance: several activities plus 2-3 named hotels.
TOKENS_PER_DAY = 250

EXAMPLE_DAY = {
    "day": 3,
    "location": "Chitwan National Park",
    "activities": [
        "Embark on an early morning jeep safari adventure!",
        "Afternoon canoe ride on the Rapti River, spotting crocodiles and diverse birdlife.",
        "Evening cultural show by the local Tharu community.",
    ],
    "hotelRecommendations": [
        "Barahi Jungle Lodge (Luxury)",
        "Hotel Parkland (Mid-Range)",
        "Wild Horizons Guest House (Budget)",
    ],
}


def _preferences_block(req: ItineraryRequest) -> List[str]:
    lines = []
    if req.itinerary_type == "custom":
        lines.append(f"* Interests: {req.interests}")
    lines.extend(
        [
            f"* Duration: {req.duration} days",
            f"* Budget Range (Total Trip): {req.budget}",
            f"* Start Point: {req.start_point}",
        ]
    )
    if req.end_point:
        lines.append(f"* End Point: {req.end_point}")
    if req.must_visit_places:
        lines.append(f"* Must-Visit Places/Regions: {req.must_visit_places}")
    return lines


def render_itinerary_prompt(req: ItineraryRequest) -> str:
    sections = [
        "You are a creative and knowledgeable travel expert specializing in crafting exciting "
        "itineraries for Nepal.",
        CRITICAL_INSTRUCTIONS,
    ]

    if req.is_modification:
        previous = json.dumps(
            [day.to_json_dict() for day in req.previous_itinerary],
            indent=2,
            ensure_ascii=False,
        )
        sections.append(
            "**Task:** Modify an existing itinerary.\n\n"
            "**Original Trip Preferences:**\n" + "\n".join(_preferences_block(req))
        )
        sections.append(f"**Current Itinerary (JSON):**\n{previous}")
        sections.append(f"**Requested Changes:**\n{req.modification_request}")
        sections.append(
            "Apply the requested changes and return the COMPLETE updated itinerary, not just "
            "the changed days. Keep the days that the user did not ask to change, and "
            "renumber all days sequentially starting at 1. Follow the critical instructions above."
        )
    elif req.itinerary_type == "custom":
        sections.append(
            "**Itinerary Type:** Custom Plan\n\n"
            "**User Preferences:**\n" + "\n".join(_preferences_block(req))
        )
        sections.append(
            "Generate a personalized itinerary considering all these preferences. Ensure the plan "
            "flows logically and incorporates the must-visit locations if provided. Follow the "
            "critical instructions above, paying close attention to the budget range when "
            "suggesting activities and hotels."
        )
    else:
        sections.append(
            "**Itinerary Type:** Random Adventure\n\n"
            "**User Preferences:**\n" + "\n".join(_preferences_block(req))
        )
        sections.append(
            f"Generate a plausible and exciting random itinerary starting from {req.start_point} "
            f"for {req.duration} days, suitable for the specified total trip budget range: "
            f"{req.budget}. Focus on a balanced mix of popular highlights and some interesting "
            "lesser-known spots accessible from the route. Make it sound like a fun adventure! "
            "Follow the critical instructions above."
        )

    if not req.is_modification:
        sections.append(f"Return exactly {req.duration} day entries.")
    sections.append(
        "**Output Format:** Call the function with an 'itinerary' array. Example for one day:\n"
        + json.dumps(EXAMPLE_DAY, indent=2)
    )
    return "\n\n".join(sections)


def sequence_days(days: List[ItineraryDay]) -> List[ItineraryDay]:
    """Order days by their number and renumber them 1..n.

    Duplicate day numbers mean the model merged or repeated days, which cannot
    be repaired without guessing, so they are rejected.
    """

    numbers = [day.day for day in days]
    if len(set(numbers)) != len(numbers):
        raise SchemaMismatchError("Itinerary contains duplicate day numbers.")
    ordered = sorted(days, key=lambda d: d.day)
    if [d.day for d in ordered] != list(range(1, len(ordered) + 1)):
        logger.warning("Renumbering non-sequential itinerary days: %s", numbers)
    return [day.model_copy(update={"day": index}) for index, day in enumerate(ordered, start=1)]


def itinerary_token_budget(req: ItineraryRequest) -> int:
    """Scale the reply limit with the trip length so long itineraries are not cut off."""

    days = req.duration
    if req.is_modification:
        # The change may add days beyond the original trip.
        days = max(days, len(req.previous_itinerary)) + 2
    return max(get_settings().max_output_tokens, TOKENS_PER_DAY * days)


def _finalize_itinerary(req: ItineraryRequest, result: ItineraryResponse) -> ItineraryResponse:
    days = sequence_days(result.itinerary)
    if not req.is_modification and len(days) != req.duration:
        raise SchemaMismatchError(
            f"Expected {req.duration} day(s) in the itinerary but received {len(days)}."
        )
    return ItineraryResponse(itinerary=days)


itinerary_flow: PromptFlow[ItineraryRequest, ItineraryResponse] = PromptFlow(
    name="ai_itinerary_tool",
    request_model=ItineraryRequest,
    response_model=ItineraryResponse,
    render_prompt=render_itinerary_prompt,
    description="Return a day-by-day travel itinerary for Nepal.",
    parameters=ITINERARY_PARAMETERS,
    max_output_tokens=itinerary_token_budget,
    postprocess=_finalize_itinerary,
)


def ai_itinerary_tool(request: Union[ItineraryRequest, Dict[str, Any]]) -> ItineraryResponse:
    """Generate a new itinerary or modify ``previous_itinerary``."""

    return itinerary_flow.execute(request)
