"""Extraction of rate-limited position fixes from decoded sentences.

Only GGA sentences reporting a fix are turned into a ``Fix``. Sign
resolution is deliberately lenient: any latitude hemisphere other than "N"
and any longitude hemisphere other than "E" negate the value, which
tolerates lower-case or padded hemisphere codes from cheap receivers.

Rate limiting:
    A map display gains nothing from more than one update per
    ``THROTTLE_INTERVAL``. A fix is emitted only if ``now`` has reached
    ``next_allowed_time``; emission moves ``next_allowed_time`` to
    ``now + THROTTLE_INTERVAL``. Fixes evaluated while the window is closed
    are dropped, never queued for later.
"""

import logging
import math
from collections.abc import Iterable

from gpslink.fix.types import Fix
from gpslink.nmea.gga import SENTENCE_TYPE as GGA
from gpslink.nmea.types import FixQuality, Sentence, StandardSentence

__all__ = ["THROTTLE_INTERVAL", "FixExtractor", "resolve_fix"]

logger = logging.getLogger(__name__)

THROTTLE_INTERVAL = 2.0  # seconds between emitted fixes

_NORTH = "N"
_EAST = "E"


def _signed(value: float | None, hemisphere: str | None, positive: str) -> float:
    magnitude = math.nan if value is None else value
    return magnitude if hemisphere == positive else -magnitude


def resolve_fix(sentence: Sentence) -> Fix | None:
    """Build a ``Fix`` from a sentence, ignoring rate limiting.

    Returns:
        A fix for a GGA sentence with a usable quality indicator and both
        coordinates present, otherwise None.
    """
    if not isinstance(sentence, StandardSentence) or sentence.sentence_type != GGA:
        return None

    fields = sentence.fields
    if fields.quality is FixQuality.INVALID:
        return None

    latitude = _signed(fields.latitude, fields.latitude_hemisphere, _NORTH)
    longitude = _signed(fields.longitude, fields.longitude_hemisphere, _EAST)
    if math.isnan(latitude) or math.isnan(longitude):
        logger.debug("Dropping GGA with missing coordinates: %s", fields)
        return None

    return Fix(latitude_degrees=latitude, longitude_degrees=longitude)


class FixExtractor:
    """Filters sentences down to throttled ``Fix`` values.

    One extractor belongs to one session; its limiter state is not shared.

    Args:
        interval: Minimum seconds between emitted fixes.
        start_time: Initial ``next_allowed_time``. The default lets the first
            qualifying sentence through immediately.
    """

    def __init__(
        self,
        interval: float = THROTTLE_INTERVAL,
        start_time: float = -math.inf,
    ) -> None:
        self._interval = interval
        self._next_allowed_time = start_time

    @property
    def next_allowed_time(self) -> float:
        return self._next_allowed_time

    def reset(self) -> None:
        """Reopen the throttle window immediately."""
        self._next_allowed_time = -math.inf

    def _emit(self, fix: Fix, now: float) -> Fix:
        self._next_allowed_time = now + self._interval
        return fix

    def consume(self, sentence: Sentence, now: float) -> Fix | None:
        """Evaluate one sentence at time ``now``.

        Args:
            sentence: Any decoded sentence.
            now: Current monotonic time in seconds.

        Returns:
            The fix if the sentence qualifies and the window is open.
        """
        fix = resolve_fix(sentence)
        if fix is None or now < self._next_allowed_time:
            return None
        return self._emit(fix, now)

    def consume_batch(self, sentences: Iterable[Sentence], now: float) -> Fix | None:
        """Evaluate all sentences decoded from one chunk at time ``now``.

        Every sentence is evaluated, but only the most recent qualifying fix
        is surfaced, and the limiter advances at most once.
        """
        latest = None
        for sentence in sentences:
            fix = resolve_fix(sentence)
            if fix is not None:
                latest = fix
        if latest is None or now < self._next_allowed_time:
            return None
        return self._emit(latest, now)
