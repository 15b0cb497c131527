"""JSON formatting for map updates."""

import json

from gpslink.fix import Fix

__all__ = ["format_fix_message"]


def format_fix_message(fix: Fix) -> str:
    """Serialize a fix into a JSON string for WebSocket transmission."""
    return json.dumps({
        "type": "fix",
        "lat": fix.latitude_degrees,
        "lon": fix.longitude_degrees,
        "valid": fix.valid,
    })
