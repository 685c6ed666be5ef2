"""Client configuration, read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List

DEFAULT_API_URL = "http://localhost:3001"
DEFAULT_FALLBACKS = "http://localhost:3001,http://backend:3001"


def _env_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _split_urls(raw: str) -> List[str]:
    return [part.strip().rstrip("/") for part in raw.split(",") if part.strip()]


@dataclass
class ClientConfig:
    api_url: str = DEFAULT_API_URL
    fallback_urls: List[str] = field(default_factory=lambda: _split_urls(DEFAULT_FALLBACKS))
    poll_interval: float = 8.0
    timeout: float = 5.0

    @property
    def candidate_urls(self) -> List[str]:
        """Configured base URL first, then the fallbacks, without duplicates."""
        urls: List[str] = []
        for url in [self.api_url.rstrip("/"), *self.fallback_urls]:
            if url and url not in urls:
                urls.append(url)
        return urls

    @classmethod
    def from_env(cls) -> "ClientConfig":
        return cls(
            api_url=os.getenv("TASKS_API_URL", DEFAULT_API_URL).strip(),
            fallback_urls=_split_urls(os.getenv("TASKS_API_FALLBACKS", DEFAULT_FALLBACKS)),
            poll_interval=_env_float("TIME_POLL_INTERVAL", 8.0),
            timeout=_env_float("TASKS_HTTP_TIMEOUT", 5.0),
        )
