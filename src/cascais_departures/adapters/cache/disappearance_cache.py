"""In-memory disappearance cache implementation."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cascais_departures.domain.contracts.disappearance_cache import (
    DisappearanceCacheProtocol,
    DisappearanceKey,
)

if TYPE_CHECKING:
    from datetime import datetime

logger = logging.getLogger(__name__)


class InMemoryDisappearanceCache(DisappearanceCacheProtocol):
    """Process-lifetime map of frozen disappearance instants.

    Entries are written once and never overwritten. Mutation happens between
    awaits on the event loop, so no locking is needed.
    """

    def __init__(self) -> None:
        """Initialize the cache."""
        self._frozen: dict[DisappearanceKey, datetime] = {}

    def get(self, key: DisappearanceKey) -> datetime | None:
        """Get the frozen instant for a train/slot.

        Args:
            key: Train number and scheduled time.

        Returns:
            The frozen instant, or None if not frozen yet.
        """
        return self._frozen.get(key)

    def set_if_absent(self, key: DisappearanceKey, instant: datetime) -> datetime:
        """Freeze the instant for a train/slot unless one is already frozen.

        Args:
            key: Train number and scheduled time.
            instant: Candidate disappearance instant.

        Returns:
            The instant in effect after the call.
        """
        existing = self._frozen.get(key)
        if existing is not None:
            return existing
        self._frozen[key] = instant
        logger.debug(f"Froze disappearance of train {key[0]} ({key[1]}) at {instant:%H:%M:%S}")
        return instant

    def evict_before(self, cutoff: datetime) -> int:
        """Remove records frozen before cutoff.

        Args:
            cutoff: Records with an instant older than this are removed.

        Returns:
            Number of removed records.
        """
        stale = [key for key, instant in self._frozen.items() if instant < cutoff]
        for key in stale:
            del self._frozen[key]
        if stale:
            logger.debug(f"Evicted {len(stale)} stale disappearance record(s)")
        return len(stale)

    def __len__(self) -> int:
        return len(self._frozen)
