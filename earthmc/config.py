"""Client settings and environment loading utilities."""
from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from earthmc.rate_limit import DEFAULT_WINDOW_MS, RateLimitConfig

DEFAULT_BASE_URL = "https://api.earthmc.net/v3"
DEFAULT_SERVER = "aurora"


class ConfigError(RuntimeError):
    """Raised when an environment variable holds an unusable value."""


ENV_PREFIX = "EARTHMC_"


def _load_dotenv(env_path: Path = Path(".env")) -> None:
    """Copy ``EARTHMC_*`` entries from a dotenv file into unset environment variables."""

    if not env_path.is_file():
        return
    for raw in env_path.read_text().splitlines():
        entry = raw.strip().removeprefix("export ").strip()
        key, sep, value = entry.partition("=")
        key = key.strip()
        if not sep or not key.startswith(ENV_PREFIX):
            continue
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            value = value[1:-1]
        os.environ.setdefault(key, value)


def _positive_int(value: Optional[str], name: str, default: Optional[int]) -> Optional[int]:
    if value is None or value.strip() == "":
        return default
    try:
        parsed = int(value)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from exc
    if parsed <= 0:
        raise ConfigError(f"{name} must be positive, got {parsed}")
    return parsed


def _non_negative_int(value: Optional[str], name: str, default: int) -> int:
    if value is None or value.strip() == "":
        return default
    try:
        parsed = int(value)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from exc
    if parsed < 0:
        raise ConfigError(f"{name} must not be negative, got {parsed}")
    return parsed


def _positive_float(value: Optional[str], name: str, default: float) -> float:
    if value is None or value.strip() == "":
        return default
    try:
        parsed = float(value)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number, got {value!r}") from exc
    if parsed <= 0:
        raise ConfigError(f"{name} must be positive, got {parsed}")
    return parsed


@dataclass(frozen=True)
class Settings:
    """Client configuration, usable as-is or derived from environment variables."""

    server: str = DEFAULT_SERVER
    base_url: str = DEFAULT_BASE_URL
    max_requests_per_window: Optional[int] = None
    window_ms: int = DEFAULT_WINDOW_MS
    max_retries: int = 3
    timeout_seconds: float = 30.0
    origin_tag: str = "earthmc-py"

    @property
    def server_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/{self.server}"

    @property
    def rate_limit(self) -> RateLimitConfig:
        return RateLimitConfig(
            max_requests_per_window=self.max_requests_per_window,
            window_ms=self.window_ms,
        )

    @classmethod
    def from_env(cls) -> "Settings":
        _load_dotenv()

        server = os.getenv("EARTHMC_SERVER", "").strip() or DEFAULT_SERVER
        base_url = os.getenv("EARTHMC_BASE_URL", "").strip() or DEFAULT_BASE_URL
        max_requests = _positive_int(
            os.getenv("EARTHMC_MAX_REQUESTS_PER_WINDOW"), "EARTHMC_MAX_REQUESTS_PER_WINDOW", None
        )
        window_ms = _positive_int(os.getenv("EARTHMC_WINDOW_MS"), "EARTHMC_WINDOW_MS", DEFAULT_WINDOW_MS)
        max_retries = _non_negative_int(os.getenv("EARTHMC_MAX_RETRIES"), "EARTHMC_MAX_RETRIES", 3)
        timeout = _positive_float(os.getenv("EARTHMC_TIMEOUT_SECONDS"), "EARTHMC_TIMEOUT_SECONDS", 30.0)
        origin_tag = os.getenv("EARTHMC_ORIGIN_TAG", "").strip() or "earthmc-py"

        return cls(
            server=server,
            base_url=base_url,
            max_requests_per_window=max_requests,
            window_ms=window_ms,
            max_retries=max_retries,
            timeout_seconds=timeout,
            origin_tag=origin_tag,
        )


@lru_cache()
def get_settings() -> Settings:
    """Return cached settings read from the environment."""

    return Settings.from_env()
