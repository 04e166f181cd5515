"""Captions for virtual postcards built from uploaded photos."""

from __future__ import annotations

from typing import Any, Dict, Union

from ..models import PostcardRequest, PostcardResponse
from ..utils import strip_wrapping_quotes
from .base import PromptFlow, object_schema


POSTCARD_PARAMETERS = object_schema(
    {"caption": {"type": "string", "description": "The generated caption for the virtual postcard."}}
)


def render_postcard_prompt(req: PostcardRequest) -> str:
    return f"""
    You are an AI assistant specializing in creating engaging captions for virtual postcards.

    Based on the attached image, location, and any additional description, generate a creative and captivating caption suitable for sharing on social media.

    Location: {req.location}
    Description: {req.description or 'None provided'}
    """


def _clean_caption(req: PostcardRequest, result: PostcardResponse) -> PostcardResponse:
    return PostcardResponse(caption=strip_wrapping_quotes(result.caption) or result.caption)


postcard_flow: PromptFlow[PostcardRequest, PostcardResponse] = PromptFlow(
    name="generate_virtual_postcard",
    request_model=PostcardRequest,
    response_model=PostcardResponse,
    render_prompt=render_postcard_prompt,
    description="Return a social-media caption for a travel photo.",
    parameters=POSTCARD_PARAMETERS,
    images=lambda req: [req.image_data_uri],
    postprocess=_clean_caption,
)


def generate_virtual_postcard(request: Union[PostcardRequest, Dict[str, Any]]) -> PostcardResponse:
    return postcard_flow.execute(request)
