# explorer/config.py

import os
import logging
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

# MAX_UPLOAD_MB can lower the upload limit but never raise it past this
MAX_UPLOAD_MB = 10


@dataclass(frozen=True)
class Settings:
    """Runtime configuration pulled from the environment (or a local .env)."""

    openai_api_key: Optional[str] = None
    openai_base_url: Optional[str] = None
    openai_model: str = "gpt-4"

    supabase_url: Optional[str] = None
    supabase_anon_key: Optional[str] = None

    max_upload_mb: int = MAX_UPLOAD_MB
    log_verbosity: int = 1

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            openai_api_key=os.getenv("OPENAI_API_KEY") or None,
            openai_base_url=os.getenv("OPENAI_BASE_URL") or None,
            openai_model=os.getenv("OPENAI_MODEL", "gpt-4"),
            supabase_url=os.getenv("SUPABASE_URL") or None,
            supabase_anon_key=os.getenv("SUPABASE_ANON_KEY") or None,
            max_upload_mb=min(int(os.getenv("MAX_UPLOAD_MB", "10")), MAX_UPLOAD_MB),
            log_verbosity=int(os.getenv("LOG_VERBOSITY", "1")),
        )


def get_settings() -> Settings:
    return Settings.from_env()


def setup_logger(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(message)s", datefmt="%H:%M:%S")
