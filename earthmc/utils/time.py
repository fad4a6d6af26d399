"""Time helpers."""
from __future__ import annotations

import random
import time
from datetime import UTC, datetime

from .coords import js_to_precision


def epoch_millis() -> int:
    return int(time.time() * 1000)


def cache_bust_token() -> str:
    """Return an ``{epochMillis}~{random}`` token for the ``no-cache-please`` parameter."""

    return f"{epoch_millis()}~{js_to_precision(random.random(), 2)}"


def from_epoch_millis(ms: int | float | None) -> datetime | None:
    """Convert an API timestamp into a timezone-aware UTC datetime."""

    if ms is None:
        return None
    return datetime.fromtimestamp(ms / 1000, tz=UTC)
