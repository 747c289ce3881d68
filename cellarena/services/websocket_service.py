# cellarena/services/websocket_service.py
"""WebSocket connection management, input handling and the tick loop."""

import asyncio
import json
import logging
import math
from dataclasses import dataclass
from typing import Optional, Set, Tuple

from fastapi import WebSocket, WebSocketDisconnect

from cellarena.config.settings import UPDATE_RATE, get_game_config
from cellarena.models.entities import TickReport
from .camera import Camera
from .game_service import GameService

logger = logging.getLogger(__name__)


@dataclass
class PlayerControls:
    """Input gathered from clients between two ticks."""

    pointer: Tuple[float, float]
    boost_pending: bool = False
    paused: bool = False


class WebSocketService:
    """Drives the session clock and relays input and state over WebSockets."""

    def __init__(self, game_service: GameService):
        self.game_service = game_service
        self.connected_clients: Set[WebSocket] = set()
        player = game_service.player
        self.controls = PlayerControls(pointer=(player.x, player.y))
        self.camera = Camera(player.x, player.y)
        self._update_task: Optional[asyncio.Task] = None

    def start_background_tasks(self):
        """Start the game loop if it is not already running."""
        if not self._update_task:
            self._update_task = asyncio.create_task(self._game_loop())

    async def stop_background_tasks(self):
        if self._update_task:
            self._update_task.cancel()
            try:
                await self._update_task
            except asyncio.CancelledError:
                pass
            self._update_task = None

    def step(self, elapsed_time: float) -> TickReport:
        """Run one tick with the pending input, then let the camera catch up."""
        controls = self.controls
        report = self.game_service.tick(
            elapsed_time,
            controls.pointer,
            boost_trigger=controls.boost_pending,
            paused=controls.paused,
        )
        if not controls.paused:
            controls.boost_pending = False
            player = self.game_service.player
            self.camera.follow(player.x, player.y)
        for outcome in report.outcomes:
            logger.debug("Tick %d: %s", self.game_service.ticks, outcome.value)
        return report

    async def _game_loop(self):
        """Background task ticking the arena at UPDATE_RATE."""
        loop = asyncio.get_running_loop()
        last_update = loop.time()

        while True:
            await asyncio.sleep(1 / UPDATE_RATE)
            current_time = loop.time()
            dt = current_time - last_update
            last_update = current_time

            try:
                self.step(dt)
            except Exception:
                logger.exception("Arena tick failed")
                continue

            if self.connected_clients:
                try:
                    await self._broadcast_message(self._state_message())
                except Exception:
                    logger.exception("State broadcast failed")

    def _state_message(self) -> dict:
        return {
            "type": "state",
            "state": self.game_service.get_state(),
            "camera": self.camera.to_dict(),
            "paused": self.controls.paused,
        }

    async def handle_connection(self, websocket: WebSocket):
        """Handle a new WebSocket connection."""
        await websocket.accept()
        logger.info("WebSocket connection accepted for %s", websocket.client)
        try:
            await self._send_initial_state(websocket)
            self.connected_clients.add(websocket)
            await self._handle_client_messages(websocket)
        except WebSocketDisconnect:
            self._handle_disconnect(websocket)
        except Exception:
            logger.exception("WebSocket error for %s", websocket.client)
            self._handle_disconnect(websocket)

    async def _send_initial_state(self, websocket: WebSocket):
        """Send config and the current frame to a newly connected client."""
        initial_data = {
            "type": "init",
            "config": get_game_config(self.game_service.config),
            "state": self.game_service.get_state(),
            "camera": self.camera.to_dict(),
            "paused": self.controls.paused,
        }
        await websocket.send_json(initial_data)

    async def _handle_client_messages(self, websocket: WebSocket):
        """Handle incoming messages from a client."""
        while True:
            raw = await websocket.receive_text()
            try:
                data = json.loads(raw)
                reply = self._process_message(data)
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Rejected message from %s: %s", websocket.client, e)
                await websocket.send_json({"type": "error", "message": str(e)})
                continue
            if reply is not None:
                await websocket.send_json(reply)

    def _process_message(self, data: dict) -> Optional[dict]:
        """Apply one client message; returns a direct reply if there is one."""
        if not isinstance(data, dict):
            raise TypeError("message must be a JSON object")
        message_type = data.get("type")

        if message_type == "pointer":
            self._handle_pointer(data)
        elif message_type == "boost":
            self.controls.boost_pending = True
        elif message_type == "toggle_pause":
            self.controls.paused = not self.controls.paused
            return {"type": "paused", "paused": self.controls.paused}
        elif message_type == "pause":
            self.controls.paused = bool(data["paused"])
            return {"type": "paused", "paused": self.controls.paused}
        elif message_type == "get_state":
            return self._state_message()
        else:
            raise ValueError(f"unknown message type: {message_type!r}")
        return None

    def _handle_pointer(self, data: dict):
        """Store the pointer target, converting screen points through the camera."""
        x = float(data["x"])
        y = float(data["y"])
        space = data.get("space", "world")

        if space == "screen":
            viewport = data["viewport"]
            x, y = self.camera.screen_to_world(
                x, y, float(viewport["width"]), float(viewport["height"])
            )
        elif space != "world":
            raise ValueError(f"unknown coordinate space: {space!r}")
        if not (math.isfinite(x) and math.isfinite(y)):
            raise ValueError("pointer coordinates must be finite")
        self.controls.pointer = (x, y)

    def _handle_disconnect(self, websocket: WebSocket):
        """Handle client disconnection."""
        logger.info("Client %s disconnected", websocket.client)
        self.connected_clients.discard(websocket)

    async def _broadcast_message(self, message: dict):
        """Broadcast a message to all connected clients."""
        disconnected = set()

        for client in list(self.connected_clients):
            try:
                await client.send_json(message)
            except Exception as e:
                logger.info("Dropping client %s: %s", client.client, e)
                disconnected.add(client)

        # Clean up disconnected clients
        self.connected_clients -= disconnected
