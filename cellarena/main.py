# cellarena/main.py
"""FastAPI application serving one arena session to a renderer."""

import logging
import random
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, WebSocket
from fastapi.middleware.cors import CORSMiddleware

from cellarena.api.routes import GameAPI
from cellarena.config.logging_config import configure_logging
from cellarena.config.settings import HOST, PORT, ArenaConfig
from cellarena.services.game_service import GameService
from cellarena.services.websocket_service import WebSocketService

logger = logging.getLogger(__name__)


def create_app(
    config: Optional[ArenaConfig] = None, rng: Optional[random.Random] = None
) -> FastAPI:
    """Build the app around a freshly seeded session."""
    game_service = GameService(config, rng)
    websocket_service = WebSocketService(game_service)
    game_api = GameAPI(game_service)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting arena game loop")
        websocket_service.start_background_tasks()
        yield
        logger.info("Stopping arena game loop")
        await websocket_service.stop_background_tasks()

    app = FastAPI(title="Cell Arena", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(game_api.router)

    @app.websocket("/ws")
    async def websocket_endpoint(websocket: WebSocket):
        await websocket_service.handle_connection(websocket)

    app.state.game_service = game_service
    app.state.websocket_service = websocket_service
    return app


app = create_app()


def run():
    import uvicorn

    configure_logging()
    uvicorn.run(app, host=HOST, port=PORT)


if __name__ == "__main__":
    run()
