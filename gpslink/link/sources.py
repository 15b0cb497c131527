"""Byte sources feeding a ``ConnectionSession``.

A byte source wraps one transport handle. The session drives it through a
fixed protocol:

* ``open(timeout)`` establishes the link; ``timeout`` bounds only this phase.
* ``read(size)`` blocks until at least one byte is available and returns up
  to ``size`` bytes. ``b""`` means end of stream; transport failures raise
  ``OSError``.
* ``abort()`` may be called from another thread and makes a pending
  ``read`` return promptly.
* ``close()`` releases the handle and is idempotent.

Device discovery (scanning for a receiver by name) is left to the caller,
which passes the resolved address or port in.
"""

import contextlib
import logging
import socket
import threading
from typing import Any, Protocol

import serial

__all__ = ["ByteSource", "SerialByteSource", "SocketByteSource"]

logger = logging.getLogger(__name__)

# --- defaults -----------------------------------------------------------------

_RFCOMM_CHANNEL = 1
_DEFAULT_BAUD_RATE = 9600


class ByteSource(Protocol):
    """Blocking, abortable source of raw bytes."""

    def open(self, timeout: float) -> None: ...

    def read(self, size: int) -> bytes: ...

    def abort(self) -> None: ...

    def close(self) -> None: ...


class SocketByteSource:
    """Byte source over a stream socket.

    Works with TCP endpoints such as a raw NMEA port or a serial-to-TCP
    bridge, and with Bluetooth RFCOMM serial-port services on platforms
    whose ``socket`` module supports ``AF_BLUETOOTH``::

        SocketByteSource(("localhost", 10110))
        SocketByteSource(("00:11:22:33:44:55", 1), family=socket.AF_BLUETOOTH)

    Args:
        address: ``(host, port)`` for TCP, ``(bdaddr, channel)`` for RFCOMM.
        family: Socket address family (default ``AF_INET``).
    """

    def __init__(
        self,
        address: tuple[str, int],
        family: int = socket.AF_INET,
    ) -> None:
        self._address = address
        self._family = family
        self._sock: socket.socket | None = None
        self._closed = False
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"SocketByteSource({self._address!r})"

    def _connect(self, timeout: float) -> socket.socket:
        if self._family != getattr(socket, "AF_BLUETOOTH", None):
            return socket.create_connection(self._address, timeout=timeout)

        sock = socket.socket(self._family, socket.SOCK_STREAM, socket.BTPROTO_RFCOMM)
        try:
            sock.settimeout(timeout)
            sock.connect(self._address)
        except OSError:
            sock.close()
            raise
        return sock

    def open(self, timeout: float) -> None:
        """Connect, giving up after ``timeout`` seconds.

        Raises:
            OSError: If the connection fails, times out, or the source was
                closed while connecting.
        """
        sock = self._connect(timeout)
        # Steady-state reads block until data arrives or abort() is called.
        sock.settimeout(None)
        with self._lock:
            if self._closed:
                sock.close()
                raise OSError("byte source closed while connecting")
            self._sock = sock
        logger.info("Connected to %s", self._address)

    def read(self, size: int) -> bytes:
        sock = self._sock
        if sock is None:
            raise OSError("byte source is not open")
        return sock.recv(size)

    def abort(self) -> None:
        """Shut the socket down so a blocked ``recv`` returns immediately."""
        sock = self._sock
        if sock is not None:
            with contextlib.suppress(OSError):
                sock.shutdown(socket.SHUT_RDWR)

    def close(self) -> None:
        with self._lock:
            self._closed = True
            sock, self._sock = self._sock, None
        if sock is not None:
            sock.close()


class SerialByteSource:
    """Byte source over a serial port, e.g. a bound ``/dev/rfcomm0``.

    Args:
        port: Serial device path or pyserial URL.
        baudrate: Line speed (default 9600, the NMEA 0183 standard rate).
        **serial_options: Extra keyword arguments for ``serial.serial_for_url``.
    """

    def __init__(
        self,
        port: str,
        baudrate: int = _DEFAULT_BAUD_RATE,
        **serial_options: Any,
    ) -> None:
        self.port = port
        self.baudrate = baudrate
        self._serial_options = serial_options
        self._serial: serial.SerialBase | None = None
        self._closed = False
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"SerialByteSource({self.port!r}, {self.baudrate})"

    def open(self, timeout: float) -> None:
        """Open the port. ``timeout`` bounds writes; reads stay blocking.

        Raises:
            serial.SerialException: If the port cannot be opened (an
                ``OSError`` subclass).
        """
        port = serial.serial_for_url(
            self.port,
            baudrate=self.baudrate,
            timeout=None,
            write_timeout=timeout,
            **self._serial_options,
        )
        with self._lock:
            if self._closed:
                port.close()
                raise OSError("byte source closed while connecting")
            self._serial = port
        logger.info("Opened %s at %d baud", self.port, self.baudrate)

    def read(self, size: int) -> bytes:
        port = self._serial
        if port is None:
            raise OSError("byte source is not open")
        # Block for the first byte, then take whatever else is already waiting.
        data = port.read(1)
        if not data:
            return b""
        waiting = min(port.in_waiting, size - 1)
        if waiting > 0:
            data += port.read(waiting)
        return data

    def abort(self) -> None:
        """Interrupt a blocked ``read``; it returns ``b""``."""
        port = self._serial
        if port is not None:
            with contextlib.suppress(OSError, AttributeError):
                port.cancel_read()

    def close(self) -> None:
        with self._lock:
            self._closed = True
            port, self._serial = self._serial, None
        if port is not None:
            port.close()
