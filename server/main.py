"""FastAPI web server showing live GPS fixes on a map.

Start with::

    GPSLINK_HOST=gps-bridge.local uvicorn server.main:app --host 0.0.0.0 --port 8000

Then open ``http://<host>:8000/`` in a browser. WebSocket clients connect
to ``ws://<host>:8000/ws`` and receive one ``type="fix"`` JSON message per
throttled fix (at most one every 2 seconds).
"""

import asyncio
from collections.abc import AsyncIterator
from concurrent.futures import ThreadPoolExecutor
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.staticfiles import StaticFiles

from server import broadcaster
from server.config import ServerConfig
from server.tracker import create_session, run_gps_loop

_QUEUE_MAX_SIZE = 10
_TIMEOUT_SECONDS = 10.0  # several throttle windows without a fix
_STATIC_DIR = Path(__file__).parent / "static"


async def _send_messages_until_disconnect(
    queue: asyncio.Queue[str],
    websocket: WebSocket,
) -> None:
    try:
        while True:
            message = await asyncio.wait_for(queue.get(), timeout=_TIMEOUT_SECONDS)
            await websocket.send_text(message)
    except TimeoutError:
        await websocket.close(code=1001)
    except WebSocketDisconnect:
        pass


@asynccontextmanager
async def _lifespan(_application: FastAPI) -> AsyncIterator[None]:
    loop = asyncio.get_running_loop()
    session = create_session(loop, ServerConfig.from_environ())
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="gpslink")
    loop.run_in_executor(executor, run_gps_loop, session)
    try:
        yield
    finally:
        await asyncio.to_thread(session.close)
        executor.shutdown(wait=False)
        broadcaster.reset()


app = FastAPI(lifespan=_lifespan)


@app.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket) -> None:
    """Stream fix JSON messages to a connected WebSocket client.

    Each client gets its own bounded queue (max ``_QUEUE_MAX_SIZE`` messages)
    primed with the latest known fix. The oldest message is dropped when the
    queue is full so slow clients never hold up the GPS session. The
    connection closes, and the client should reconnect, if no fix arrives
    within ``_TIMEOUT_SECONDS``.

    Args:
        websocket: The incoming WebSocket connection.
    """
    await websocket.accept()
    queue: asyncio.Queue[str] = asyncio.Queue(maxsize=_QUEUE_MAX_SIZE)
    broadcaster.add_subscriber(queue)
    try:
        await _send_messages_until_disconnect(queue, websocket)
    finally:
        broadcaster.remove_subscriber(queue)


app.mount("/", StaticFiles(directory=_STATIC_DIR, html=True), name="static")
