import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_ORIGINS = ["http://localhost:5173"]


@dataclass
class Settings:
    api_key: Optional[str]
    model_name: str = DEFAULT_MODEL
    upload_dir: Path = Path("uploads")
    cors_origins: List[str] = field(default_factory=lambda: list(DEFAULT_ORIGINS))
    log_level: str = "INFO"
    session_ttl: float = 1800.0
    max_sessions: int = 1000


def load_settings() -> Settings:
    # .env first (mainly for the Gemini API key), real env vars win
    load_dotenv()

    api_key = os.getenv("GEMINI_API_KEY") or None
    if not api_key:
        # only a warning here, the first analysis request fails hard instead
        logger.warning("GEMINI_API_KEY is not set. Gemini API calls will fail until it is configured.")

    origins = os.getenv("CORS_ORIGINS")
    return Settings(
        api_key=api_key,
        model_name=os.getenv("GEMINI_MODEL") or DEFAULT_MODEL,
        upload_dir=Path(os.getenv("UPLOAD_DIR") or "uploads"),
        cors_origins=[o.strip() for o in origins.split(",") if o.strip()] if origins else list(DEFAULT_ORIGINS),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        session_ttl=float(os.getenv("SESSION_TTL_SECONDS") or 1800),
        max_sessions=int(os.getenv("MAX_SESSIONS") or 1000),
    )
