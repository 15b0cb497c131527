"""ConnectionSession: the read loop from a byte source to a map sink.

A session owns one byte source, one ``FrameReassembler`` and one
``FixExtractor``. ``run()`` is blocking and is meant to be executed on a
worker thread (the dashboard server runs it in a ``ThreadPoolExecutor``)::

    session = ConnectionSession(
        SocketByteSource(("localhost", 10110)),
        sink=set_position,
        dispatch=loop.call_soon_threadsafe,
    )
    future = loop.run_in_executor(executor, session.run)
    ...
    session.close()

Error policy:
    * A frame that fails to decode is logged and skipped.
    * Connection failure, read failure and end of stream end the loop; the
      reason is returned by ``run()`` and kept in ``end_reason``.
    * Teardown never raises.

Cancellation:
    ``cancel()`` sets a flag checked between chunks and aborts the source so
    a read blocked in the transport returns promptly. An aborted read is
    never retried. ``close()`` cancels, waits briefly for the loop, and
    releases the source exactly once.
"""

import functools
import logging
import threading
import time
from collections.abc import Callable
from types import TracebackType

from gpslink.fix.extractor import FixExtractor
from gpslink.fix.types import Fix
from gpslink.link.sources import ByteSource
from gpslink.link.types import SessionEnd, SessionState
from gpslink.nmea.codec import parse_sentence
from gpslink.nmea.errors import ChecksumMismatchError, SentenceParseError
from gpslink.nmea.types import Sentence
from gpslink.stream.reassembler import FrameReassembler

__all__ = ["CONNECT_TIMEOUT", "READ_SIZE", "ConnectionSession"]

logger = logging.getLogger(__name__)

# --- defaults -----------------------------------------------------------------

CONNECT_TIMEOUT = 10.0  # seconds; bounds open() only
READ_SIZE = 16384
_CLOSE_TIMEOUT = 2.0  # how long close() waits for a running loop

Sink = Callable[[float, float], None]
Dispatch = Callable[[Callable[[], None]], object]


def _call_now(callback: Callable[[], None]) -> None:
    callback()


class ConnectionSession:
    """Drives one byte source through reassembly, decoding and throttling.

    Args:
        source: Byte source to read from. The session takes ownership and
            closes it on teardown.
        sink: Receives ``(latitude_degrees, longitude_degrees)`` per fix.
        dispatch: Schedules a zero-argument callback on the sink's execution
            context without blocking, e.g. ``loop.call_soon_threadsafe``.
            Defaults to calling the sink directly on the read thread.
        clock: Monotonic time source used for throttling.
        connect_timeout: Upper bound for ``source.open``.
        read_size: Read-size hint passed to ``source.read``.
        reassembler: Frame reassembler (a fresh one by default).
        extractor: Fix extractor (a fresh one by default).
    """

    def __init__(
        self,
        source: ByteSource,
        sink: Sink,
        *,
        dispatch: Dispatch | None = None,
        clock: Callable[[], float] = time.monotonic,
        connect_timeout: float = CONNECT_TIMEOUT,
        read_size: int = READ_SIZE,
        reassembler: FrameReassembler | None = None,
        extractor: FixExtractor | None = None,
    ) -> None:
        self._source = source
        self._sink = sink
        self._dispatch = dispatch if dispatch is not None else _call_now
        self._clock = clock
        self._connect_timeout = connect_timeout
        self._read_size = read_size
        self._reassembler = reassembler if reassembler is not None else FrameReassembler()
        self._extractor = extractor if extractor is not None else FixExtractor()

        self._lock = threading.Lock()
        self._cancelled = threading.Event()
        self._finished = threading.Event()
        self._state = SessionState.IDLE
        self._end_reason: SessionEnd | None = None
        self._started = False
        self._released = False
        self._run_thread: threading.Thread | None = None

        self.fixes_emitted = 0
        self.frames_rejected = 0

    # --- context manager ------------------------------------------------------

    def __enter__(self) -> "ConnectionSession":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    # --- observable state -----------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def end_reason(self) -> SessionEnd | None:
        """Why the session terminated, or None while it is still live."""
        return self._end_reason

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the session is closed; return False on timeout."""
        return self._finished.wait(timeout)

    # --- lifecycle ------------------------------------------------------------

    def run(self) -> SessionEnd:
        """Connect and read until cancelled, disconnected or failed.

        Returns:
            The reason the loop ended. Session-fatal conditions are reported
            here rather than raised.

        Raises:
            RuntimeError: If the session was already run or closed.
        """
        with self._lock:
            if self._started:
                raise RuntimeError("ConnectionSession can only be run once.")
            self._started = True
            self._run_thread = threading.current_thread()
            self._state = SessionState.CONNECTING

        reason = SessionEnd.READ_ERROR
        try:
            reason = self._connect_and_read()
        finally:
            self._shutdown(reason)
        return reason

    def cancel(self) -> None:
        """Request the read loop to stop. Thread safe and idempotent."""
        with self._lock:
            if self._cancelled.is_set():
                return
            self._cancelled.set()
        logger.debug("Cancelling GPS link session on %r", self._source)
        try:
            self._source.abort()
        except Exception as exc:
            logger.debug("Error aborting %r: %s", self._source, exc, exc_info=True)

    def close(self, timeout: float = _CLOSE_TIMEOUT) -> None:
        """Cancel if needed and release the byte source. Never raises.

        Safe to call repeatedly, from any thread, and on a session that was
        never run or never connected.
        """
        self.cancel()

        with self._lock:
            started = self._started
            self._started = True
            in_loop_thread = self._run_thread is threading.current_thread()

        if started and not in_loop_thread and not self._finished.wait(timeout):
            logger.warning("GPS link read loop did not stop within %.1fs; forcing close", timeout)

        self._release()

        if not started:
            self._state = SessionState.CLOSED
            self._end_reason = SessionEnd.CANCELLED
            self._finished.set()

    # --- read loop ------------------------------------------------------------

    def _connect_and_read(self) -> SessionEnd:
        if self._cancelled.is_set():
            return SessionEnd.CANCELLED

        logger.info("Connecting to %r (timeout %.1fs)", self._source, self._connect_timeout)
        try:
            self._source.open(self._connect_timeout)
        except Exception as exc:
            # pyserial reports bad port settings as ValueError
            if self._cancelled.is_set():
                return SessionEnd.CANCELLED
            logger.warning("Could not connect to %r: %s", self._source, exc)
            return SessionEnd.CONNECT_FAILED

        with self._lock:
            if self._cancelled.is_set():
                return SessionEnd.CANCELLED
            self._state = SessionState.CONNECTED

        return self._read_loop()

    def _read_loop(self) -> SessionEnd:
        logger.info("GPS link read loop started")
        while not self._cancelled.is_set():
            try:
                chunk = self._source.read(self._read_size)
            except OSError as exc:
                if self._cancelled.is_set():
                    return SessionEnd.CANCELLED
                logger.warning("Read error on %r: %s", self._source, exc)
                return SessionEnd.READ_ERROR

            if not chunk:
                if self._cancelled.is_set():
                    return SessionEnd.CANCELLED
                logger.warning("Stream ended on %r (EOF)", self._source)
                return SessionEnd.END_OF_STREAM

            self._process_chunk(chunk)
        return SessionEnd.CANCELLED

    def _decode(self, frame: str) -> Sentence | None:
        try:
            return parse_sentence(frame)
        except ChecksumMismatchError as exc:
            self.frames_rejected += 1
            logger.debug("Dropping frame %r: %s", frame, exc)
        except SentenceParseError as exc:
            self.frames_rejected += 1
            logger.debug("Dropping malformed frame %r: %s", frame, exc)
        return None

    def _process_chunk(self, chunk: bytes) -> None:
        sentences = []
        for frame in self._reassembler.feed(chunk):
            sentence = self._decode(frame)
            if sentence is not None:
                sentences.append(sentence)

        fix = self._extractor.consume_batch(sentences, self._clock())
        if fix is not None:
            self._deliver(fix)

    # --- fix delivery ---------------------------------------------------------

    def _call_sink(self, fix: Fix) -> None:
        try:
            self._sink(fix.latitude_degrees, fix.longitude_degrees)
        except Exception:
            logger.exception("Map sink failed for %s", fix)

    def _deliver(self, fix: Fix) -> None:
        self.fixes_emitted += 1
        logger.debug("Lat: %f Long: %f", fix.latitude_degrees, fix.longitude_degrees)
        try:
            self._dispatch(functools.partial(self._call_sink, fix))
        except Exception as exc:
            # e.g. RuntimeError once the target event loop is closed
            logger.warning("Could not dispatch fix: %s", exc)

    # --- teardown -------------------------------------------------------------

    def _release(self) -> None:
        with self._lock:
            if self._released:
                return
            self._released = True
        try:
            self._source.close()
        except Exception as exc:
            logger.debug("Error closing %r: %s", self._source, exc, exc_info=True)

    def _shutdown(self, reason: SessionEnd) -> None:
        with self._lock:
            # a link that never came up goes straight to CLOSED
            if self._state is not SessionState.CONNECTING:
                self._state = SessionState.CLOSING
            self._end_reason = reason
        self._release()
        self._state = SessionState.CLOSED
        self._finished.set()
        logger.info("GPS link session closed (%s)", reason.value)
