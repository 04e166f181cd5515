"""Utility helpers."""

import base64
import binascii
import re
from typing import Iterable, List, Optional, Tuple

DATA_URI_PATTERN = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<data>.+)$", re.DOTALL)
BULLET_PREFIX = re.compile(r"^\s*(?:[-*•]|\d+[.)])\s+")
EMPTY_SENTINELS = {"", "none"}


def blank_to_none(value: Optional[str]) -> Optional[str]:
    """Collapse blank form values (and the ``"none"`` select sentinel) to ``None``."""

    if value is None:
        return None
    cleaned = value.strip()
    if cleaned.lower() in EMPTY_SENTINELS:
        return None
    return cleaned


def clean_items(items: Iterable[str]) -> List[str]:
    """Strip bullet markers and whitespace, dropping empty entries."""

    cleaned: List[str] = []
    for item in items:
        text = BULLET_PREFIX.sub("", str(item)).strip()
        if text:
            cleaned.append(text)
    return cleaned


def strip_speaker_prefix(text: str, speaker: str) -> str:
    text = text.strip()
    prefix = f"{speaker}:"
    if text.lower().startswith(prefix.lower()):
        text = text[len(prefix):].strip()
    return text


def strip_wrapping_quotes(text: str) -> str:
    text = text.strip()
    for open_q, close_q in (('"', '"'), ("'", "'"), ("“", "”")):
        if len(text) >= 2 and text.startswith(open_q) and text.endswith(close_q):
            return text[1:-1].strip()
    return text


def parse_data_uri(uri: str) -> Tuple[str, bytes]:
    """Split a base64 data URI into its MIME type and decoded payload."""

    match = DATA_URI_PATTERN.match((uri or "").strip())
    if not match:
        raise ValueError("Image must be a base64 data URI (data:<mimetype>;base64,<data>).")
    try:
        payload = base64.b64decode(match.group("data"), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValueError("Image data URI does not contain valid base64 data.") from exc
    return match.group("mime").lower(), payload


def shorten(text: str, max_words: int = 12) -> str:
    """Single-line preview of free text for log messages."""

    words = text.replace("\n", " ").split()
    if len(words) > max_words:
        return " ".join(words[:max_words]) + "…"
    return " ".join(words)
