"""Background GPS session feeding the dashboard."""

import asyncio
import logging

from gpslink.fix import Fix
from gpslink.link import ConnectionSession, SessionEnd
from server.broadcaster import broadcast_message
from server.config import ServerConfig
from server.formatters import format_fix_message

__all__ = ["create_session", "publish_position", "run_gps_loop"]

logger = logging.getLogger(__name__)


def publish_position(latitude_degrees: float, longitude_degrees: float) -> None:
    """Map sink: broadcast a position to every connected browser."""
    fix = Fix(latitude_degrees=latitude_degrees, longitude_degrees=longitude_degrees)
    broadcast_message(format_fix_message(fix))


def create_session(
    loop: asyncio.AbstractEventLoop,
    config: ServerConfig,
) -> ConnectionSession:
    """Build a session whose fixes are published on *loop*."""
    return ConnectionSession(
        config.create_byte_source(),
        sink=publish_position,
        dispatch=loop.call_soon_threadsafe,
    )


def run_gps_loop(session: ConnectionSession) -> SessionEnd:
    """Run *session* to completion on the calling (worker) thread.

    The caller owns *session* and stops it with ``session.close()``. When the
    link drops the map simply stops updating.
    """
    reason = session.run()
    if reason is not SessionEnd.CANCELLED:
        logger.warning("GPS link ended: %s; map updates stopped", reason.value)
    return reason
