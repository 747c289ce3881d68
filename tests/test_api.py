import asyncio
import random

import pytest
from fastapi.testclient import TestClient

from cellarena.config.settings import ArenaConfig
from cellarena.main import create_app


@pytest.fixture
def app():
    config = ArenaConfig(world_width=1200, world_height=1200, food_count=50, bot_count=3, bot_spawn_inset=150)
    return create_app(config, random.Random(11))


@pytest.fixture
def client(app):
    # No context manager: the background game loop stays off and tests tick by hand.
    return TestClient(app)


def test_root_and_config(client):
    assert client.get("/").status_code == 200

    response = client.get("/api/game/config")
    assert response.status_code == 200
    data = response.json()
    assert data["worldWidth"] == 1200
    assert data["foodCount"] == 50
    assert data["botCount"] == 3


def test_state_endpoints_match_session(client):
    state = client.get("/api/game/state").json()
    assert len(state["pellets"]) == 50
    assert len(state["bots"]) == 3
    assert state["displayMass"] == "10.0"

    assert len(client.get("/api/game/pellets").json()["pellets"]) == 50
    assert len(client.get("/api/game/bots").json()["bots"]) == 3
    assert client.get("/api/game/player").json()["player"]["mass"] == 100

    stats = client.get("/api/game/stats").json()
    assert stats["ticks"] == 0
    assert stats["totalBots"] == 3


def test_websocket_sends_initial_state(client):
    with client.websocket_connect("/ws") as websocket:
        message = websocket.receive_json()
        assert message["type"] == "init"
        assert message["config"]["worldWidth"] == 1200
        assert message["state"]["player"]["x"] == 600
        assert message["paused"] is False


def test_pointer_and_boost_drive_the_next_tick(app, client):
    service = app.state.websocket_service
    with client.websocket_connect("/ws") as websocket:
        websocket.receive_json()
        websocket.send_json({"type": "pointer", "x": 1200, "y": 600})
        websocket.send_json({"type": "boost"})
        websocket.send_json({"type": "get_state"})
        websocket.receive_json()

    assert service.controls.pointer == (1200.0, 600.0)
    assert service.controls.boost_pending

    app.state.game_service.bots.clear()
    service.step(0.02)

    player = app.state.game_service.player
    assert player.x > 600
    assert 0 < player.boost < 0.25
    assert not service.controls.boost_pending


def test_screen_pointer_goes_through_camera(app, client):
    service = app.state.websocket_service
    with client.websocket_connect("/ws") as websocket:
        websocket.receive_json()
        websocket.send_json(
            {
                "type": "pointer",
                "x": 0,
                "y": 0,
                "space": "screen",
                "viewport": {"width": 800, "height": 600},
            }
        )
        websocket.send_json({"type": "get_state"})
        websocket.receive_json()

    assert service.controls.pointer == (200.0, 300.0)


def test_pause_freezes_the_session(app, client):
    service = app.state.websocket_service
    with client.websocket_connect("/ws") as websocket:
        websocket.receive_json()
        websocket.send_json({"type": "toggle_pause"})
        assert websocket.receive_json() == {"type": "paused", "paused": True}

    before = app.state.game_service.get_state()
    camera = service.camera.to_dict()
    report = service.step(0.03)

    assert report.skipped
    assert app.state.game_service.get_state() == before
    assert service.camera.to_dict() == camera


def test_bad_messages_get_error_replies(client):
    with client.websocket_connect("/ws") as websocket:
        websocket.receive_json()

        websocket.send_text("not json")
        assert websocket.receive_json()["type"] == "error"

        websocket.send_json({"type": "teleport"})
        assert websocket.receive_json()["type"] == "error"

        websocket.send_json({"type": "pointer", "x": 5})
        assert websocket.receive_json()["type"] == "error"

        websocket.send_text('{"type": "pointer", "x": Infinity, "y": 600}')
        assert websocket.receive_json()["type"] == "error"

        websocket.send_text('{"type": "pointer", "x": 600, "y": NaN}')
        assert websocket.receive_json()["type"] == "error"

        # Connection survives bad input.
        websocket.send_json({"type": "pause", "paused": False})
        assert websocket.receive_json() == {"type": "paused", "paused": False}


def test_game_loop_broadcasts_state(app):
    with TestClient(app) as client:
        with client.websocket_connect("/ws") as websocket:
            assert websocket.receive_json()["type"] == "init"
            message = websocket.receive_json()
            assert message["type"] == "state"
            assert len(message["state"]["bots"]) >= 3


def test_non_finite_pointer_leaves_target_alone(app):
    service = app.state.websocket_service
    service._process_message({"type": "pointer", "x": 900, "y": 700})

    for x, y in [(float("inf"), 0), (0, float("-inf")), (float("nan"), 5)]:
        with pytest.raises(ValueError):
            service._process_message({"type": "pointer", "x": x, "y": y})
    assert service.controls.pointer == (900.0, 700.0)

    service.step(0.02)
    player = app.state.game_service.player
    assert player.x == player.x and player.y == player.y


def test_boost_pressed_while_paused_fires_after_resume(app):
    service = app.state.websocket_service
    app.state.game_service.bots.clear()
    service._process_message({"type": "pause", "paused": True})
    service._process_message({"type": "boost"})

    assert service.step(0.02).skipped
    assert service.controls.boost_pending
    assert app.state.game_service.player.boost == 0

    service._process_message({"type": "pause", "paused": False})
    service.step(0.02)
    assert 0 < app.state.game_service.player.boost < 0.25
    assert not service.controls.boost_pending


class FakeClient:
    def __init__(self, service, name, joins=None):
        self.service = service
        self.client = name
        self.joins = joins
        self.received = []

    async def send_json(self, message):
        await asyncio.sleep(0)
        self.received.append(message)
        if self.joins is not None:
            self.service.connected_clients.add(self.joins)


class BrokenClient(FakeClient):
    async def send_json(self, message):
        raise RuntimeError("socket closed")


def test_broadcast_survives_client_joining_mid_send(app):
    service = app.state.websocket_service
    late = FakeClient(service, "late")
    first = FakeClient(service, "first", joins=late)
    broken = BrokenClient(service, "broken")
    service.connected_clients = {first, broken}

    asyncio.run(service._broadcast_message({"type": "state"}))

    assert first.received == [{"type": "state"}]
    assert late in service.connected_clients
    assert broken not in service.connected_clients


def test_game_loop_keeps_running_when_a_broadcast_fails(app, monkeypatch):
    service = app.state.websocket_service
    service.connected_clients = {FakeClient(service, "watcher")}
    calls = []

    async def failing_broadcast(message):
        calls.append(message["type"])
        raise RuntimeError("broadcast blew up")

    monkeypatch.setattr(service, "_broadcast_message", failing_broadcast)

    async def run_loop():
        task = asyncio.create_task(service._game_loop())
        while len(calls) < 3:
            await asyncio.sleep(0.01)
            assert not task.done()
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    asyncio.run(asyncio.wait_for(run_loop(), timeout=5))
    assert calls == ["state"] * len(calls)
    assert app.state.game_service.ticks >= 3
