"""FastAPI application serving the sync channel and a status page."""

from __future__ import annotations

import json
from pathlib import Path

import uvicorn
from fastapi import FastAPI, WebSocket
from fastapi.responses import HTMLResponse
from jinja2 import Environment, FileSystemLoader
from loguru import logger

from .protocol import SYNC_PATH
from .registry import ClientRegistry
from .router import MessageRouter
from .state import SessionState

TEMPLATE_DIR = Path(__file__).resolve().parents[1] / "templates"
STATUS_TEMPLATE = "status.html.j2"


class SyncHub:
    """Everything one server instance owns: session, clients and router."""

    def __init__(self, project_root: Path | None = None) -> None:
        root = (project_root or Path.cwd()).absolute()
        self.state = SessionState(project_root=str(root))
        self.registry = ClientRegistry()
        self.router = MessageRouter(self.state, self.registry)


def _environment() -> Environment:
    loader = FileSystemLoader(str(TEMPLATE_DIR))
    return Environment(loader=loader, autoescape=True)


def create_app(hub: SyncHub | None = None, *, host: str = "127.0.0.1", port: int = 1337) -> FastAPI:
    """Create the app. Each call without ``hub`` gets an independent session."""

    hub = hub or SyncHub()
    app = FastAPI(title="Mockup Sync Server")
    app.state.hub = hub
    status_template = _environment().get_template(STATUS_TEMPLATE)

    @app.get("/", response_class=HTMLResponse)
    async def status_page() -> HTMLResponse:
        html = status_template.render(
            state=hub.state,
            state_json=json.dumps(hub.state.snapshot(), indent=2),
            clients=len(hub.registry),
            host=host,
            port=port,
            sync_path=SYNC_PATH,
        )
        return HTMLResponse(html)

    @app.websocket(SYNC_PATH)
    async def sync_channel(websocket: WebSocket) -> None:
        await websocket.accept()
        client = hub.registry.connect(websocket)
        logger.debug("{} connected ({} total)", client, len(hub.registry))
        try:
            while True:
                message = await websocket.receive()
                if message["type"] == "websocket.disconnect":
                    break
                text = message.get("text")
                if text is None:
                    logger.warning("Discarding non-text frame from {}", client)
                    continue
                await hub.router.dispatch(client, text)
        finally:
            hub.registry.disconnect(client)
            logger.debug("{} disconnected ({} remaining)", client, len(hub.registry))

    return app


def run_server(
    host: str = "127.0.0.1",
    port: int = 1337,
    *,
    project_root: Path | None = None,
    log_level: str = "info",
) -> None:
    """Serve the sync channel until interrupted."""

    app = create_app(SyncHub(project_root), host=host, port=port)
    logger.info("Mockup server running at http://{}:{}/", host, port)
    uvicorn.run(app, host=host, port=port, log_level=log_level)


__all__ = ["SyncHub", "create_app", "run_server"]
