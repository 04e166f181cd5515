"""OpenAI client helpers."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional, Sequence

import httpx
from openai import OpenAI, OpenAIError

from .config import get_settings


logger = logging.getLogger(__name__)

_client: Optional[OpenAI] = None


class LLMError(RuntimeError):
    """Raised when the model provider fails or returns an unusable reply."""


def _check_complete(response, what: str) -> None:
    if getattr(response, "status", None) == "incomplete":
        details = getattr(response, "incomplete_details", None)
        reason = getattr(details, "reason", None) or "max_output_tokens"
        raise LLMError(f"Model reply for {what} was truncated ({reason}).")


def get_client() -> OpenAI:
    """Provide a singleton OpenAI client."""

    global _client
    if _client is None:
        settings = get_settings()
        _client = OpenAI(
            api_key=settings.openai_api_key,
            timeout=httpx.Timeout(settings.request_timeout, connect=10.0),
            max_retries=0,
        )
    return _client


def reset_client() -> None:
    global _client
    _client = None


def _user_input(prompt: str, images: Sequence[str] = ()) -> list:
    if not images:
        return [{"role": "user", "content": prompt}]
    content: list = [{"type": "input_text", "text": prompt}]
    for image_url in images:
        content.append({"type": "input_image", "image_url": image_url})
    return [{"role": "user", "content": content}]


def llm_call(prompt: str, model: Optional[str] = None, max_output_tokens: Optional[int] = None) -> str:
    """Call the Responses API with sane defaults."""

    settings = get_settings()
    client = get_client()
    try:
        response = client.responses.create(
            model=model or settings.openai_model,
            input=prompt,
            temperature=settings.temperature,
            max_output_tokens=max_output_tokens or settings.max_output_tokens,
        )
    except OpenAIError as exc:
        raise LLMError(str(exc)) from exc
    _check_complete(response, "text reply")
    return response.output_text.strip()


def structured_call(
    prompt: str,
    tool_name: str,
    description: str,
    parameters: Dict[str, Any],
    *,
    images: Sequence[str] = (),
    temperature: Optional[float] = None,
    max_output_tokens: Optional[int] = None,
) -> Dict[str, Any]:
    """Force a single function call and return its decoded arguments.

    The JSON schema in ``parameters`` is sent in strict mode, so every property
    must be listed under ``required`` (optional ones are typed as nullable).
    """

    settings = get_settings()
    client = get_client()
    tools = [
        {
            "type": "function",
            "name": tool_name,
            "description": description,
            "parameters": parameters,
            "strict": True,
        }
    ]
    try:
        response = client.responses.create(
            model=settings.openai_model,
            input=_user_input(prompt, images),
            tools=tools,
            tool_choice={"type": "function", "name": tool_name},
            temperature=settings.temperature if temperature is None else temperature,
            max_output_tokens=max_output_tokens or settings.max_output_tokens,
        )
    except OpenAIError as exc:
        raise LLMError(str(exc)) from exc
    _check_complete(response, tool_name)

    tool_call = next(
        (
            item
            for item in response.output
            if item.type == "function_call" and item.name == tool_name
        ),
        None,
    )
    if tool_call is None:
        raise LLMError(f"Model did not return a {tool_name} function call.")
    try:
        data = json.loads(tool_call.arguments)
    except json.JSONDecodeError as exc:
        raise LLMError(f"Model returned malformed JSON for {tool_name}: {exc}") from exc
    if not isinstance(data, dict):
        raise LLMError(f"Model returned a non-object payload for {tool_name}.")
    return data


def generate_image(prompt: str) -> str:
    """Generate one image and return it as a base64 PNG data URI."""

    settings = get_settings()
    client = get_client()
    kwargs: Dict[str, Any] = {
        "model": settings.image_model,
        "prompt": prompt,
        "size": settings.image_size,
        "n": 1,
    }
    # DALL-E models default to hosted URLs; gpt-image models always return base64.
    if settings.image_model.startswith("dall-e"):
        kwargs["response_format"] = "b64_json"
    try:
        response = client.images.generate(**kwargs)
    except OpenAIError as exc:
        raise LLMError(str(exc)) from exc

    if not response.data or not response.data[0].b64_json:
        raise LLMError("Image generation failed, no image data returned.")
    logger.debug("Image generated with %s", settings.image_model)
    return f"data:image/png;base64,{response.data[0].b64_json}"
