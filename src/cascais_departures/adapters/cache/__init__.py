"""Cache adapters."""

from cascais_departures.adapters.cache.disappearance_cache import InMemoryDisappearanceCache

__all__ = ["InMemoryDisappearanceCache"]
