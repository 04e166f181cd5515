"""Generated landscape images for districts."""

from __future__ import annotations

import logging
from typing import Any, Dict, Union

from pydantic import ValidationError

from ..llm import LLMError, generate_image
from ..models import DistrictImageResponse, DistrictRequest
from .base import FlowError, SchemaMismatchError


logger = logging.getLogger(__name__)


def render_district_image_prompt(req: DistrictRequest) -> str:
    return (
        "Generate a realistic and appealing image representing the landscape or a famous landmark "
        f"of the {req.district_name} district in Nepal. Focus on natural beauty or cultural "
        "significance. Avoid text overlays on the image."
    )


def generate_district_image(request: Union[DistrictRequest, Dict[str, Any]]) -> DistrictImageResponse:
    """Return a PNG data URI depicting the district."""

    req = request if isinstance(request, DistrictRequest) else DistrictRequest.model_validate(request)
    name = req.district_name
    logger.info("Generating image for district: %s", name)
    try:
        image_url = generate_image(render_district_image_prompt(req))
    except LLMError as exc:
        raise FlowError(f"Failed to generate image for {name}. Reason: {exc}") from exc
    try:
        result = DistrictImageResponse(image_url=image_url)
    except ValidationError as exc:
        raise SchemaMismatchError(f"Image generation for {name} returned an invalid data URI.") from exc
    logger.info("Image generated successfully for %s", name)
    return result
