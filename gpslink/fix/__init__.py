"""Fix extraction and throttling."""

from gpslink.fix.extractor import THROTTLE_INTERVAL, FixExtractor, resolve_fix
from gpslink.fix.types import Fix

__all__ = ["THROTTLE_INTERVAL", "Fix", "FixExtractor", "resolve_fix"]
