"""Protocol for the frozen disappearance instants of matched trains."""

from datetime import datetime
from typing import Protocol

DisappearanceKey = tuple[str, str]  # (train number, scheduled "HH:MM")


class DisappearanceCacheProtocol(Protocol):
    """Protocol for storing the instant after which a matched train is hidden."""

    def get(self, key: DisappearanceKey) -> datetime | None:
        """Get the frozen instant for a train/slot, or None if not frozen yet.

        Args:
            key: Train number and scheduled time.

        Returns:
            The frozen instant, or None.
        """
        ...

    def set_if_absent(self, key: DisappearanceKey, instant: datetime) -> datetime:
        """Freeze the instant for a train/slot unless one is already frozen.

        Args:
            key: Train number and scheduled time.
            instant: Candidate disappearance instant.

        Returns:
            The instant in effect after the call (the existing one, if any).
        """
        ...

    def evict_before(self, cutoff: datetime) -> int:
        """Remove records whose frozen instant is older than cutoff.

        Args:
            cutoff: Records frozen before this instant are removed.

        Returns:
            Number of removed records.
        """
        ...
