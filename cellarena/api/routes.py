# cellarena/api/routes.py
"""API routes for the arena server."""

from fastapi import APIRouter

from cellarena.config.settings import get_game_config
from cellarena.services.game_service import GameService


class GameAPI:
    """Read-only API routes over the running session."""

    def __init__(self, game_service: GameService):
        self.game_service = game_service
        self.router = APIRouter()
        self._setup_routes()

    def _setup_routes(self):
        """Set up all API routes."""

        @self.router.get("/")
        async def root():
            """Root endpoint."""
            return {"message": "Cell Arena Server Running"}

        @self.router.get("/api/game/config")
        async def get_game_config_endpoint():
            """Get world size, grid size, population targets and tuning values."""
            return get_game_config(self.game_service.config)

        @self.router.get("/api/game/state")
        async def get_state():
            """Get the full frame: player, pellets, bots and display mass."""
            return self.game_service.get_state()

        @self.router.get("/api/game/pellets")
        async def get_pellets():
            """Get all current pellets."""
            return {"pellets": self.game_service.get_all_pellets()}

        @self.router.get("/api/game/bots")
        async def get_bots():
            """Get all current bots."""
            return {"bots": self.game_service.get_all_bots()}

        @self.router.get("/api/game/player")
        async def get_player():
            return {"player": self.game_service.get_player()}

        @self.router.get("/api/game/stats")
        async def get_game_stats():
            """Get game statistics."""
            return self.game_service.get_stats()
