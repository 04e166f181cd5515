"""Shared fixtures; no test reaches the network."""

from __future__ import annotations

import base64

import pytest

from visit_nepal import llm
from visit_nepal.config import get_settings


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "test-key")
    get_settings.cache_clear()
    llm.reset_client()
    yield
    get_settings.cache_clear()
    llm.reset_client()


@pytest.fixture
def png_data_uri() -> str:
    payload = base64.b64encode(b"\x89PNG\r\n\x1a\nfake-image-bytes").decode()
    return f"data:image/png;base64,{payload}"

