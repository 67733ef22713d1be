"""Direction of travel along the line."""

from enum import StrEnum


class Direction(StrEnum):
    """Travel sense, inferred from station order."""

    TO_ORIGIN = "to_origin"  # Toward the first station of the line (lower index)
    TO_TERMINUS = "to_terminus"  # Toward the last station of the line (higher index)

    @property
    def opposite(self) -> "Direction":
        """The other direction."""
        return Direction.TO_TERMINUS if self is Direction.TO_ORIGIN else Direction.TO_ORIGIN
