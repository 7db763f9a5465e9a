"""FastAPI dependency injection."""

from functools import lru_cache

from src.data.resolver import OverlayResolver


@lru_cache(maxsize=1)
def get_resolver() -> OverlayResolver:
    """One resolver (and so one dataset cache) per app session."""
    return OverlayResolver.from_files()
