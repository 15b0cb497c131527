"""Dashboard server configuration read from the environment.

Variables:
    GPSLINK_HOST: Host of the NMEA TCP endpoint (default ``localhost``).
    GPSLINK_PORT: Port of the NMEA TCP endpoint (default ``10110``).
    GPSLINK_SERIAL_PORT: Serial device to read instead of TCP, e.g.
        ``/dev/rfcomm0``. Takes precedence over host/port when set.
    GPSLINK_BAUD_RATE: Serial line speed (default ``9600``).
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass

from gpslink.link import ByteSource, SerialByteSource, SocketByteSource

__all__ = ["ServerConfig"]

_DEFAULT_HOST = "localhost"
_DEFAULT_PORT = 10110  # registered NMEA 0183 over TCP port
_DEFAULT_BAUD_RATE = 9600


@dataclass(frozen=True)
class ServerConfig:
    """Where the dashboard reads its NMEA stream from."""

    host: str = _DEFAULT_HOST
    port: int = _DEFAULT_PORT
    serial_port: str | None = None
    baud_rate: int = _DEFAULT_BAUD_RATE

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> "ServerConfig":
        """Build a config from environment variables.

        Raises:
            ValueError: If a numeric variable is not an integer.
        """
        env = os.environ if environ is None else environ
        return cls(
            host=env.get("GPSLINK_HOST", _DEFAULT_HOST),
            port=int(env.get("GPSLINK_PORT", _DEFAULT_PORT)),
            serial_port=env.get("GPSLINK_SERIAL_PORT") or None,
            baud_rate=int(env.get("GPSLINK_BAUD_RATE", _DEFAULT_BAUD_RATE)),
        )

    def create_byte_source(self) -> ByteSource:
        if self.serial_port is not None:
            return SerialByteSource(self.serial_port, self.baud_rate)
        return SocketByteSource((self.host, self.port))
