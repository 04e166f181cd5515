"""District detail lookup: tagline, attractions, stays, activities and food."""

from __future__ import annotations

from typing import Any, Dict, Union

from ..models import DistrictDetailsResponse, DistrictRequest
from .base import PromptFlow, object_schema, string_list


DISTRICT_DETAILS_PARAMETERS = object_schema(
    {
        "name": {"type": "string", "description": "The name of the district."},
        "tagline": {"type": "string", "description": "A catchy and descriptive tagline for the district."},
        "attractions": string_list("3-5 top attractions in the district."),
        "accommodations": string_list(
            "2-4 common types of accommodations found in the district (e.g., Luxury Lodges, Homestays)."
        ),
        "activities": string_list("3-5 popular activities or events in the district."),
        "food": string_list("2-4 notable local dishes or food specialties."),
    }
)


def render_district_details_prompt(req: DistrictRequest) -> str:
    name = req.district_name
    return f"""
    You are a knowledgeable and enthusiastic Nepal travel expert. Provide detailed information about the district: {name}.

    Generate the following details:
    1. name: The exact district name: {name}.
    2. tagline: A short, catchy, and descriptive tagline (1-2 sentences) that captures the essence of the district.
    3. attractions: 3-5 specific and well-known attractions (e.g., temples, viewpoints, national parks, historical sites).
    4. accommodations: 2-4 general types or examples of accommodations available (e.g., Luxury Hotels, Tea Houses, Community Homestays, Budget Guesthouses).
    5. activities: 3-5 popular activities or notable events specific to the district (e.g., trekking routes starting here, rafting rivers, cultural tours, major local festivals with approximate timing if known).
    6. food: 2-4 famous local dishes, food specialties, or types of cuisine prominent in the district.

    Be concise and accurate. Focus on the most relevant and appealing information for a tourist.
    """


def _keep_requested_name(req: DistrictRequest, result: DistrictDetailsResponse) -> DistrictDetailsResponse:
    # The model sometimes alters the spelling; the request name is canonical.
    return result.model_copy(update={"name": req.district_name})


district_details_flow: PromptFlow[DistrictRequest, DistrictDetailsResponse] = PromptFlow(
    name="get_district_details",
    request_model=DistrictRequest,
    response_model=DistrictDetailsResponse,
    render_prompt=render_district_details_prompt,
    description="Return tourist information about a Nepalese district.",
    parameters=DISTRICT_DETAILS_PARAMETERS,
    postprocess=_keep_requested_name,
)


def get_district_details(request: Union[DistrictRequest, Dict[str, Any]]) -> DistrictDetailsResponse:
    return district_details_flow.execute(request)
