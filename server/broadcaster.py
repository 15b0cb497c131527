"""Manages WebSocket subscriber queues and fix broadcasting.

All functions run on the event loop thread; the GPS session dispatches
fixes onto the loop with ``call_soon_threadsafe`` before they get here.
"""

import asyncio

__all__ = [
    "add_subscriber",
    "broadcast_message",
    "latest_message",
    "remove_subscriber",
    "reset",
]

_subscriber_queues: list[asyncio.Queue[str]] = []
_latest_message: str | None = None


def _enqueue_message(queue: asyncio.Queue[str], message: str) -> None:
    if queue.full():
        queue.get_nowait()
    queue.put_nowait(message)


def add_subscriber(queue: asyncio.Queue[str]) -> None:
    """Register a queue and prime it with the most recent fix, if any."""
    _subscriber_queues.append(queue)
    if _latest_message is not None:
        _enqueue_message(queue, _latest_message)


def remove_subscriber(queue: asyncio.Queue[str]) -> None:
    """Remove a subscriber queue from the broadcast list."""
    _subscriber_queues.remove(queue)


def latest_message() -> str | None:
    return _latest_message


def broadcast_message(message: str) -> None:
    """Deliver a message to every subscriber, dropping their oldest if full."""
    global _latest_message
    _latest_message = message
    for queue in list(_subscriber_queues):
        _enqueue_message(queue, message)


def reset() -> None:
    """Forget all subscribers and the remembered fix."""
    global _latest_message
    _subscriber_queues.clear()
    _latest_message = None
