"""Shared plumbing for prompt flows.

A flow validates a typed request, renders a prompt, makes exactly one model
call, validates the reply against a response model and optionally
post-processes it. Flows differ only in their models, prompt text and
post-processing, so each one is a ``PromptFlow`` instance rather than a
subclass.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Iterable, Optional, Sequence, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from ..llm import LLMError, llm_call, structured_call


logger = logging.getLogger(__name__)

RequestT = TypeVar("RequestT", bound=BaseModel)
ResponseT = TypeVar("ResponseT", bound=BaseModel)


class FlowError(RuntimeError):
    """A flow could not produce a result (provider failure or bad reply)."""


class SchemaMismatchError(FlowError):
    """The model replied, but not in the shape the flow declared."""


def string_list(description: str) -> Dict[str, Any]:
    return {"type": "array", "items": {"type": "string"}, "description": description}


def nullable(schema: Dict[str, Any]) -> Dict[str, Any]:
    schema = dict(schema)
    schema["type"] = [schema["type"], "null"]
    return schema


def object_schema(properties: Dict[str, Dict[str, Any]], optional: Iterable[str] = ()) -> Dict[str, Any]:
    """Build a strict-mode object schema.

    Strict function calling requires every property to be listed as required,
    so optional properties are expressed as nullable instead.
    """

    optional = set(optional)
    props = {
        key: nullable(value) if key in optional else value
        for key, value in properties.items()
    }
    return {
        "type": "object",
        "properties": props,
        "required": list(props),
        "additionalProperties": False,
    }


def _drop_nulls(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _drop_nulls(v) for k, v in value.items() if v is not None}
    if isinstance(value, list):
        return [_drop_nulls(v) for v in value]
    return value


@dataclass
class PromptFlow(Generic[RequestT, ResponseT]):
    name: str
    request_model: Type[RequestT]
    response_model: Type[ResponseT]
    render_prompt: Callable[[RequestT], str]
    description: str = ""
    # JSON schema of the reply; ``None`` means a plain-text reply stored in ``text_field``.
    parameters: Optional[Dict[str, Any]] = None
    text_field: str = ""
    images: Optional[Callable[[RequestT], Sequence[str]]] = None
    # Output token budget per request; ``None`` uses the configured default.
    max_output_tokens: Optional[Callable[[RequestT], int]] = None
    postprocess: Optional[Callable[[RequestT, ResponseT], ResponseT]] = None

    def validate_request(self, request: Union[RequestT, Dict[str, Any]]) -> RequestT:
        if isinstance(request, self.request_model):
            return request
        if isinstance(request, BaseModel):
            request = request.model_dump()
        return self.request_model.model_validate(request)

    def _call_model(self, req: RequestT, prompt: str) -> Dict[str, Any]:
        budget = self.max_output_tokens(req) if self.max_output_tokens else None
        if self.parameters is None:
            return {self.text_field: llm_call(prompt, max_output_tokens=budget)}
        return structured_call(
            prompt,
            tool_name=self.name,
            description=self.description,
            parameters=self.parameters,
            images=self.images(req) if self.images else (),
            max_output_tokens=budget,
        )

    def execute(self, request: Union[RequestT, Dict[str, Any]]) -> ResponseT:
        req = self.validate_request(request)
        prompt = self.render_prompt(req)
        logger.info("Running flow %s", self.name)

        try:
            raw = self._call_model(req, prompt)
        except LLMError as exc:
            raise FlowError(f"{self.name} failed: {exc}") from exc

        try:
            result = self.response_model.model_validate(_drop_nulls(raw))
        except ValidationError as exc:
            raise SchemaMismatchError(
                f"{self.name} returned data that does not match the expected schema "
                f"({exc.error_count()} error(s))."
            ) from exc

        if self.postprocess is not None:
            result = self.postprocess(req, result)
        logger.info("Flow %s completed", self.name)
        return result

    __call__ = execute
