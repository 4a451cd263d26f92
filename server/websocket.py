"""WebSocket receive loop bridging Starlette connections to the chat hooks."""

from __future__ import annotations

import logging

import anyio
from fastapi import WebSocket, WebSocketDisconnect

from roomcast.hooks import ChatHooks

log = logging.getLogger(__name__)


def frame_text(frame: dict) -> str | None:
    """Return the text of an inbound ASGI frame; binary frames are decoded as UTF-8."""
    if frame.get("text") is not None:
        return frame["text"]
    if frame.get("bytes") is not None:
        return frame["bytes"].decode("utf-8", errors="replace")
    return None


async def serve_connection(websocket: WebSocket, hooks: ChatHooks, username: str | None) -> None:
    """Run one chat session from upgrade until the peer goes away."""
    await websocket.accept()
    conn = await hooks.open(websocket, username)
    try:
        while True:
            frame = await websocket.receive()
            if frame["type"] == "websocket.disconnect":
                break
            text = frame_text(frame)
            if text is not None:
                await hooks.message(conn, text)
    except WebSocketDisconnect:
        pass
    except RuntimeError as e:
        # Starlette raises RuntimeError when receiving on a socket it already closed
        log.debug("WebSocket for %s ended: %s", conn.username, e)
    finally:
        # the ASGI server may be cancelling this task; cleanup must still finish
        with anyio.CancelScope(shield=True):
            await hooks.close(conn)
