"""Process-wide settings, read once from the environment.

Every adapter (database, Gemini client, CORS) reads from the single
``settings`` instance built here at import time. Nothing re-reads the
environment per request.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Tuple

from dotenv import load_dotenv

load_dotenv()

_PRODUCTION_ORIGINS: Tuple[str, ...] = (
    "https://lsesuvelocity.com",
    "https://www.lsesuvelocity.com",
    "https://velocity-website-five.vercel.app",
)

_LOCAL_DEV_ORIGINS: Tuple[str, ...] = (
    "http://localhost:5173",      # Vite dev server
    "http://localhost:3000",
    "http://127.0.0.1:5173",
)


def _env_float(key: str, default: float) -> float:
    try:
        return float(os.getenv(key, str(default)))
    except ValueError:
        return default


def _env_int(key: str, default: int) -> int:
    try:
        return int(os.getenv(key, str(default)))
    except ValueError:
        return default


def _env_bool(key: str, default: bool = False) -> bool:
    return os.getenv(key, str(default)).strip().lower() in ("1", "true", "yes")


def _build_cors_origins(environment: str) -> Tuple[str, ...]:
    origins = list(_PRODUCTION_ORIGINS)

    vercel_url = os.getenv("VERCEL_URL", "").strip()
    if vercel_url:
        origins.append(f"https://{vercel_url}")

    extra = os.getenv("CORS_EXTRA_ORIGINS", "")
    origins.extend(o.strip() for o in extra.split(",") if o.strip())

    if environment != "production":
        origins.extend(_LOCAL_DEV_ORIGINS)

    # Preserve order, drop duplicates
    return tuple(dict.fromkeys(origins))


@dataclass(frozen=True)
class Settings:
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    database_url: str = "sqlite:///./velocity.db"

    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"
    gemini_image_model: str = "gemini-2.5-flash-image"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta/models"
    gemini_timeout: float = 90.0
    gemini_max_output_tokens: int = 8192
    gemini_temperature: float = 0.7

    history_limit: int = 20
    cors_origins: Tuple[str, ...] = field(default_factory=tuple)

    host: str = "127.0.0.1"
    port: int = 8000

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def expose_error_detail(self) -> bool:
        """Internal error causes are only sent to clients in debug, non-production runs."""
        return self.debug and not self.is_production

    @classmethod
    def from_env(cls) -> "Settings":
        environment = os.getenv("ENVIRONMENT", "development").strip().lower()
        return cls(
            environment=environment,
            debug=_env_bool("DEBUG"),
            log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper(),
            database_url=os.getenv("DATABASE_URL", cls.database_url),
            gemini_api_key=os.getenv("GEMINI_API_KEY", "").strip(),
            gemini_model=os.getenv("GEMINI_MODEL", cls.gemini_model).strip(),
            gemini_image_model=os.getenv("GEMINI_IMAGE_MODEL", cls.gemini_image_model).strip(),
            gemini_base_url=os.getenv("GEMINI_BASE_URL", cls.gemini_base_url).rstrip("/"),
            gemini_timeout=_env_float("GEMINI_REQUEST_TIMEOUT", cls.gemini_timeout),
            gemini_max_output_tokens=_env_int("GEMINI_MAX_OUTPUT_TOKENS", cls.gemini_max_output_tokens),
            gemini_temperature=_env_float("GEMINI_TEMPERATURE", cls.gemini_temperature),
            history_limit=_env_int("HISTORY_LIMIT", cls.history_limit),
            cors_origins=_build_cors_origins(environment),
            host=os.getenv("HOST", cls.host),
            port=_env_int("PORT", cls.port),
        )


settings = Settings.from_env()
