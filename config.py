"""
Service Configuration
Reads settings from environment variables (and a local .env file)
"""

import os
from dataclasses import dataclass, field
from typing import List
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

POLICIES = ("top_n", "best_of_day")

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",   # Next.js frontend
    "http://localhost:8080",   # Frontend dev server
    "http://127.0.0.1:5500",   # VS Code Live Server
]


def _database_url() -> str:
    url = os.getenv("DATABASE_URL")
    if url:
        return url
    # Build database URL from the individual DB_* variables
    return (
        f"postgresql://{os.getenv('DB_USER')}:{os.getenv('DB_PASSWORD')}"
        f"@{os.getenv('DB_HOST', 'localhost')}:{os.getenv('DB_PORT', '5432')}"
        f"/{os.getenv('DB_NAME', 'lift_log')}"
    )


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the history service."""
    database_url: str
    top_n: int = 3
    policy: str = "top_n"
    normalize_names: bool = False
    timezone: str = "UTC"
    log_level: str = "INFO"
    port: int = 8000
    cors_origins: List[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))

    def __post_init__(self):
        if self.top_n < 1:
            raise ValueError(f"HISTORY_TOP_N must be at least 1, got {self.top_n}")
        if self.policy not in POLICIES:
            raise ValueError(
                f"HISTORY_POLICY must be one of {', '.join(POLICIES)}, got '{self.policy}'"
            )
        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(
                f"Invalid timezone '{self.timezone}'. Use IANA timezone identifiers."
            )


def load_settings() -> Settings:
    """Build a Settings object from the current environment."""
    origins = os.getenv("CORS_ORIGINS")
    try:
        top_n = int(os.getenv("HISTORY_TOP_N", "3"))
        port = int(os.getenv("PORT", "8000"))
    except ValueError as e:
        raise ValueError(f"Invalid numeric setting: {e}")

    return Settings(
        database_url=_database_url(),
        top_n=top_n,
        policy=os.getenv("HISTORY_POLICY", "top_n").strip().lower(),
        normalize_names=_as_bool(os.getenv("HISTORY_NORMALIZE_NAMES", "false")),
        timezone=os.getenv("HISTORY_TIMEZONE", "UTC"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        port=port,
        cors_origins=(
            [o.strip() for o in origins.split(",") if o.strip()]
            if origins else list(DEFAULT_CORS_ORIGINS)
        ),
    )


settings = load_settings()
