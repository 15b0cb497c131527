"""Pytest fixtures for session and byte source testing."""

import queue
import time
from collections.abc import Callable, Iterable

import pytest

_READ_TIMEOUT = 5.0


class ControlledByteSource:
    """In-memory byte source fed through a queue.

    Queue items are returned by ``read`` in order; exceptions are raised
    instead. ``abort`` enqueues ``b""`` so a pending read returns at once.
    """

    def __init__(
        self,
        chunks: Iterable[bytes | BaseException] = (),
        open_error: BaseException | None = None,
        close_error: BaseException | None = None,
    ) -> None:
        self.chunks: queue.Queue[bytes | BaseException] = queue.Queue()
        for chunk in chunks:
            self.chunks.put(chunk)
        self.open_error = open_error
        self.close_error = close_error
        self.abort_error: BaseException | None = None
        self.open_timeouts: list[float] = []
        self.read_sizes: list[int] = []
        self.abort_calls = 0
        self.close_calls = 0

    def open(self, timeout: float) -> None:
        self.open_timeouts.append(timeout)
        if self.open_error is not None:
            raise self.open_error

    def read(self, size: int) -> bytes:
        self.read_sizes.append(size)
        try:
            item = self.chunks.get(timeout=_READ_TIMEOUT)
        except queue.Empty as exc:
            raise OSError("controlled read timed out") from exc
        if isinstance(item, BaseException):
            raise item
        return item

    def abort(self) -> None:
        self.abort_calls += 1
        self.chunks.put(b"")
        if self.abort_error is not None:
            raise self.abort_error

    def close(self) -> None:
        self.close_calls += 1
        if self.close_error is not None:
            raise self.close_error


class RecordingSink:
    def __init__(self) -> None:
        self.positions: list[tuple[float, float]] = []

    def __call__(self, latitude_degrees: float, longitude_degrees: float) -> None:
        self.positions.append((latitude_degrees, longitude_degrees))


def wait_for(predicate: Callable[[], bool], timeout: float = 2.0) -> None:
    deadline = time.monotonic() + timeout
    while not predicate():
        if time.monotonic() > deadline:
            raise AssertionError("condition not met in time")
        time.sleep(0.005)


class SteppedClock:
    """Returns the given instants in order, then repeats the last one."""

    def __init__(self, *instants: float) -> None:
        self._instants = list(instants)

    def __call__(self) -> float:
        if len(self._instants) > 1:
            return self._instants.pop(0)
        return self._instants[0]


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()
