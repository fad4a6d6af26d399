"""Coordinate helpers."""
from __future__ import annotations

import math
from typing import Sequence

TOWN_BLOCK_SIZE = 16


def js_round(value: float) -> int:
    """Round to the nearest integer with halves going up, like ``Math.round``."""

    return math.floor(value + 0.5)


def format_location(coords: Sequence[float]) -> str:
    """Render an ``(x, z)`` pair as the ``x;z`` token used by location queries."""

    x, z = coords
    return f"{js_round(x)};{js_round(z)}"


def town_block_to_world(block: Sequence[int]) -> tuple[int, int]:
    """Convert a town block index pair into world coordinates."""

    x, z = block
    return x * TOWN_BLOCK_SIZE, z * TOWN_BLOCK_SIZE


def js_to_precision(value: float, digits: int) -> str:
    """Format ``value`` with ``digits`` significant digits, like ``Number.toPrecision``.

    Fixed notation is used unless the exponent is below -6 or reaches ``digits``.
    """

    mantissa, _, exp = f"{value:.{digits - 1}e}".partition("e")
    exponent = int(exp)
    if exponent < -6 or exponent >= digits:
        sign = "-" if exponent < 0 else "+"
        return f"{mantissa}e{sign}{abs(exponent)}"
    return f"{value:.{digits - 1 - exponent}f}"
