"""FastAPI server for Roomcast."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI, Query, WebSocket
from fastapi.responses import PlainTextResponse

import roomcast
from roomcast.config import RoomcastConfig
from roomcast.hooks import ChatHooks
from server.websocket import serve_connection

load_dotenv()

log = logging.getLogger(__name__)

HTTP_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

INDEX_TEXT = "Simple WebSocket Server"
UPGRADE_ERROR_TEXT = "WebSocket upgrade error"


def create_app(config: RoomcastConfig | None = None, hooks: ChatHooks | None = None) -> FastAPI:
    """Build the app. One :class:`ChatHooks` (and its broadcaster) per app."""
    config = config or RoomcastConfig.from_env()
    hooks = hooks or ChatHooks(config=config)

    app = FastAPI(
        title="Roomcast",
        description="Real-time chat rooms over WebSockets.",
        version=roomcast.__version__,
    )
    app.state.config = config
    app.state.hooks = hooks

    @app.websocket(config.chat_path)
    async def chat(websocket: WebSocket, username: str | None = Query(None)):
        await serve_connection(websocket, hooks, username)

    @app.api_route(
        config.chat_path,
        methods=HTTP_METHODS,
        response_class=PlainTextResponse,
        include_in_schema=False,
    )
    def chat_without_upgrade():
        log.debug("Non-upgrade request on %s", config.chat_path)
        return PlainTextResponse(UPGRADE_ERROR_TEXT, status_code=400)

    @app.api_route(
        "/{path:path}",
        methods=HTTP_METHODS,
        response_class=PlainTextResponse,
        include_in_schema=False,
    )
    def index(path: str):
        return PlainTextResponse(INDEX_TEXT)

    return app


app = create_app()


# ------------------------------------------------------------------
# Entrypoint
# ------------------------------------------------------------------


def run():
    import uvicorn

    config: RoomcastConfig = app.state.config
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    log.info("Simple WebSocket server listening on %s:%s", config.host, config.port)
    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level.lower())


if __name__ == "__main__":
    run()
