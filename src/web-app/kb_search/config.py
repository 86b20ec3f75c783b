"""Knowledge search configuration — loads environment variables and validates required settings.

Usage:
    from kb_search.config import config
    print(config.api_endpoint)
"""

import os
import sys
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


def _find_env_file() -> Path | None:
    """Search for .env file starting from this file's directory, then up."""
    current = Path(__file__).resolve().parent.parent  # src/web-app/
    candidates = [
        current / ".env",
        current.parent.parent / ".env",  # repo root
    ]
    for candidate in candidates:
        if candidate.exists():
            return candidate
    return None


@dataclass(frozen=True)
class Config:
    """Typed configuration loaded from environment variables."""

    # Knowledge article REST endpoint (hosts searchArticles / incrementViewCount)
    api_endpoint: str
    api_token: str

    # Search behaviour
    search_limit: int
    debounce_ms: int

    log_level: str

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name, "")
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        print(f"Error: {name} must be an integer, got {raw!r}", file=sys.stderr)
        sys.exit(1)
    if value <= 0:
        print(f"Error: {name} must be positive, got {value}", file=sys.stderr)
        sys.exit(1)
    return value


def _load_config() -> Config:
    """Load and validate configuration from environment."""
    env_file = _find_env_file()
    if env_file:
        load_dotenv(env_file, override=False)

    required = {
        "KB_API_ENDPOINT": "api_endpoint",
    }

    missing = [var for var in required if not os.environ.get(var)]
    if missing:
        print(
            f"Error: Missing required environment variables: {', '.join(missing)}\n"
            f"Copy .env.sample to .env and fill in values.",
            file=sys.stderr,
        )
        sys.exit(1)

    return Config(
        api_endpoint=os.environ["KB_API_ENDPOINT"],
        api_token=os.environ.get("KB_API_TOKEN", ""),
        search_limit=_int_env("KB_SEARCH_LIMIT", 10),
        debounce_ms=_int_env("KB_SEARCH_DEBOUNCE_MS", 300),
        log_level=os.environ.get("KB_LOG_LEVEL", "INFO").upper(),
    )


# Singleton — imported as `from kb_search.config import config`
config = _load_config()
