"""Application settings — all configuration loaded from environment variables.

Usage:
    from config.settings import Settings
    settings = Settings()
    settings.validate()   # raises ValueError on a malformed endpoint or limits
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

DEFAULT_DB_PATH = Path(__file__).parent.parent / "data" / "preferences.db"


def _optional_float(name: str) -> Optional[float]:
    """Read a float env var, treating an unset or blank value as ``None``."""
    raw = os.environ.get(name, "").strip()
    return float(raw) if raw else None


@dataclass
class Settings:
    """Centralised application configuration.

    All values are read from environment variables at instantiation time
    so that tests can override them by patching ``os.environ``.
    """

    # ── Remote search ───────────────────────────────────────────────────────
    search_endpoint: str = field(
        default_factory=lambda: os.environ.get(
            "SEARCH_ENDPOINT", "https://hn.algolia.com/api/v1/search"
        )
    )
    #: Seconds before a search request is abandoned. ``None`` waits forever.
    request_timeout: Optional[float] = field(
        default_factory=lambda: _optional_float("REQUEST_TIMEOUT")
    )
    #: Connection-level retries handed to the httpx transport.
    max_retries: int = field(
        default_factory=lambda: int(os.environ.get("MAX_RETRIES", "0"))
    )

    # ── Search preference ───────────────────────────────────────────────────
    default_term: str = field(
        default_factory=lambda: os.environ.get("DEFAULT_SEARCH_TERM", "React")
    )
    preference_key: str = field(
        default_factory=lambda: os.environ.get("PREFERENCE_KEY", "search")
    )
    db_path: Path = field(
        default_factory=lambda: Path(os.environ["DB_PATH"])
        if os.environ.get("DB_PATH")
        else DEFAULT_DB_PATH
    )

    # ── Flask ───────────────────────────────────────────────────────────────
    debug: bool = field(
        default_factory=lambda: os.environ.get("FLASK_DEBUG", "0") == "1"
    )
    port: int = field(
        default_factory=lambda: int(os.environ.get("PORT", "5001"))
    )

    def validate(self) -> None:
        """Raise ``ValueError`` if any setting is unusable."""
        scheme = urlparse(self.search_endpoint).scheme
        if scheme not in ("http", "https"):
            raise ValueError(
                f"SEARCH_ENDPOINT must be an http(s) URL, got {self.search_endpoint!r}."
            )
        if self.max_retries < 0:
            raise ValueError("MAX_RETRIES must not be negative.")
        if self.request_timeout is not None and self.request_timeout <= 0:
            raise ValueError("REQUEST_TIMEOUT must be a positive number of seconds.")
