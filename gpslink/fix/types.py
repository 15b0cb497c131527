"""Position fix type."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Fix:
    """A validated geographic position ready for display.

    Attributes:
        latitude_degrees: Signed latitude, positive = North.
        longitude_degrees: Signed longitude, positive = East.
        valid: Navigation validity. Always True for fixes produced by
            ``FixExtractor``, which drops no-fix sentences instead of
            emitting invalid fixes.
    """

    latitude_degrees: float
    longitude_degrees: float
    valid: bool = True
