"""Utility helpers."""
from .coords import format_location, js_round, js_to_precision, town_block_to_world  # noqa: F401
from .time import cache_bust_token, epoch_millis, from_epoch_millis  # noqa: F401
