"""Application configuration helpers."""

from dataclasses import dataclass
import logging
import os
from functools import lru_cache
from typing import List

from dotenv import load_dotenv


load_dotenv()


DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "https://localhost:3000",
    "https://127.0.0.1:3000",
]


@dataclass
class Settings:
    """Holds runtime configuration loaded from the environment."""

    openai_api_key: str
    openai_model: str = "gpt-4.1-mini"
    image_model: str = "gpt-image-1"
    image_size: str = "1024x1024"
    max_output_tokens: int = 1500
    temperature: float = 0.7
    request_timeout: float = 60.0


def get_cors_origins() -> List[str]:
    """Origins allowed to call the API; readable without an OpenAI key."""

    raw = os.getenv("VISIT_NEPAL_CORS_ORIGINS")
    if not raw:
        return list(DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load and cache settings so every module shares the same values."""

    api_key = os.getenv("OPENAI_API_KEY")
    if not api_key:
        raise ValueError(
            "Please set OPENAI_API_KEY in the environment (e.g., via a .env file)."
        )

    return Settings(
        openai_api_key=api_key,
        openai_model=os.getenv("OPENAI_MODEL", "gpt-4.1-mini"),
        image_model=os.getenv("OPENAI_IMAGE_MODEL", "gpt-image-1"),
        image_size=os.getenv("OPENAI_IMAGE_SIZE", "1024x1024"),
        max_output_tokens=int(os.getenv("VISIT_NEPAL_MAX_OUTPUT_TOKENS", "1500")),
        temperature=float(os.getenv("VISIT_NEPAL_TEMPERATURE", "0.7")),
        request_timeout=float(os.getenv("VISIT_NEPAL_REQUEST_TIMEOUT", "60")),
    )


def configure_logging(level: str = "") -> None:
    """Set up root logging once for the CLI and the API server."""

    level = level or os.getenv("VISIT_NEPAL_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
