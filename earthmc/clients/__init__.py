"""HTTP clients."""
from .earthmc import EarthMCClient  # noqa: F401
