# server/app/config.py
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_VARIANT = "simple"
DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class Settings:
    api_key: Optional[str]
    model: str = DEFAULT_MODEL
    variant: str = DEFAULT_VARIANT
    environment: str = "production"
    timeout: float = DEFAULT_TIMEOUT

    @property
    def is_development(self) -> bool:
        return self.environment != "production"


def _read_timeout() -> float:
    raw = os.getenv("GEMINI_TIMEOUT")
    if not raw:
        return DEFAULT_TIMEOUT
    try:
        return float(raw)
    except ValueError:
        return DEFAULT_TIMEOUT


def load_settings() -> Settings:
    """
    Build settings from the environment.
    Called per request so the API key is always the current one.
    """
    return Settings(
        api_key=(os.getenv("GEMINI_API_KEY") or "").strip() or None,
        model=os.getenv("GEMINI_MODEL") or DEFAULT_MODEL,
        variant=(os.getenv("TRANSLATE_VARIANT") or DEFAULT_VARIANT).strip().lower(),
        environment=(os.getenv("APP_ENV") or "production").strip().lower(),
        timeout=_read_timeout(),
    )
