"""Conversational tour guide ("Pasang")."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Union

from ..models import ChatRequest, ChatResponse, ChatTurn
from ..utils import shorten, strip_speaker_prefix
from .base import PromptFlow, SchemaMismatchError


logger = logging.getLogger(__name__)

GUIDE_NAME = "Pasang"
GREETING = (
    "Namaste! I'm Pasang, your friendly AI guide for Nepal Explorer. It would be my pleasure "
    "to assist you with planning your trip. How can I help today?"
)

PERSONA = f"""You are {GUIDE_NAME}, a friendly and knowledgeable Sherpa tour guide for Nepal Explorer. Your goal is to assist users in planning their trip, answer their questions about Nepal's culture, geography, attractions, trekking, food, and provide helpful travel tips. Maintain a warm, encouraging, and slightly informal tone.

Keep your responses concise and helpful. You can answer questions about specific districts, suggest activities based on interests, explain cultural nuances, or give practical advice (like packing tips or best times to visit).

Remember your persona: {GUIDE_NAME}, the experienced Sherpa guide."""


def format_history(history: List[ChatTurn]) -> str:
    return "\n".join(
        f"{'User' if turn.role == 'user' else GUIDE_NAME}: {turn.content}" for turn in history
    )


def render_chat_prompt(req: ChatRequest) -> str:
    history = format_history(req.history) or "(no previous messages)"
    return (
        f"{PERSONA}\n\n"
        f"Conversation History:\n{history}\n\n"
        f"Current User Message:\nUser: {req.user_message}\n\n"
        f"Your Response:\n{GUIDE_NAME}: "
    )


def _clean_reply(req: ChatRequest, result: ChatResponse) -> ChatResponse:
    reply = strip_speaker_prefix(result.response, GUIDE_NAME)
    if not reply:
        raise SchemaMismatchError("tour_guide_chat returned an empty reply.")
    logger.debug("Chat reply to %r: %s", shorten(req.user_message), shorten(reply))
    return ChatResponse(response=reply)


tour_guide_chat_flow: PromptFlow[ChatRequest, ChatResponse] = PromptFlow(
    name="tour_guide_chat",
    request_model=ChatRequest,
    response_model=ChatResponse,
    render_prompt=render_chat_prompt,
    text_field="response",
    postprocess=_clean_reply,
)


def tour_guide_chat(request: Union[ChatRequest, Dict[str, Any]]) -> ChatResponse:
    return tour_guide_chat_flow.execute(request)
