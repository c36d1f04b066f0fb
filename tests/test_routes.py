import pytest
from fastapi.testclient import TestClient

from config import MAX_DEPTH
from fractal_clock.clock import FractalClock
from main import create_app


@pytest.fixture
def app(small_clock: FractalClock):
    return create_app(clock=small_clock, use_framebuffer=False, frames_per_second=50)


@pytest.fixture
def client(app) -> TestClient:
    # No context manager: the frame loop stays off and frames are rendered on demand
    return TestClient(app)


def test_frame_is_unavailable_before_first_render(client: TestClient) -> None:
    response = client.get("/clock/frame.png")

    assert response.status_code == 503


def test_frame_is_served_as_png(app, client: TestClient) -> None:
    app.state.clock_manager.render_frame()

    response = client.get("/clock/frame.png")

    assert response.status_code == 200
    assert response.headers["content-type"] == "image/png"
    assert response.content.startswith(b"\x89PNG")


def test_settings_update_is_clamped(client: TestClient) -> None:
    response = client.put("/clock/settings", json={"depth": 50, "scale": 1.5, "line_color": [10, 20, 300]})

    assert response.status_code == 200
    body = response.json()
    assert body["depth"] == MAX_DEPTH
    assert body["scale"] == 1.0
    assert body["line_color"] == [10, 20, 255]
    assert body["is_paused"] is False


def test_settings_update_rejects_malformed_color(client: TestClient) -> None:
    response = client.put("/clock/settings", json={"line_color": [1, 2]})

    assert response.status_code == 422


def test_key_press_applies_binding(client: TestClient) -> None:
    response = client.post("/clock/key", json={"key": "5"})

    assert response.status_code == 200
    assert response.json()["depth"] == 5
    assert client.get("/clock/settings").json()["depth"] == 5


def test_unbound_key_is_rejected(client: TestClient) -> None:
    response = client.post("/clock/key", json={"key": "q"})

    assert response.status_code == 400


def test_pause_toggles(client: TestClient) -> None:
    assert client.post("/clock/pause").json() == {"is_paused": True}
    assert client.post("/clock/pause").json() == {"is_paused": False}


def test_random_color(client: TestClient) -> None:
    color = client.post("/clock/color/random").json()["line_color"]

    assert len(color) == 3
    assert client.get("/clock/settings").json()["line_color"] == color


def test_angles_endpoint(client: TestClient) -> None:
    assert set(client.get("/clock/angles").json()) == {"hour", "minute", "second"}


def test_resize(app, client: TestClient) -> None:
    assert client.post("/clock/resize", json={"width": 20, "height": 10}).json() == {"width": 20, "height": 10}
    assert client.post("/clock/resize", json={"width": -1, "height": 10}).status_code == 422


def test_websocket_sends_state_and_accepts_keys(client: TestClient) -> None:
    with client.websocket_connect("/ws") as websocket:
        initial = websocket.receive_json()
        assert initial["event"] == "settings"
        assert initial["data"]["depth"] == 3

        websocket.send_text("8")
        update = websocket.receive_json()
        assert update["data"]["depth"] == 8


def test_index_page(client: TestClient) -> None:
    response = client.get("/")

    assert response.status_code == 200
    assert "Fractal Clock" in response.text


def test_health_and_status_with_running_loop(app) -> None:
    with TestClient(app) as running:
        health = running.get("/health").json()
        status = running.get("/status").json()

    assert health["status"] == "healthy"
    assert status["is_running"] is True
    assert status["clock"]["width"] == 64
    assert "websocket_clients" in status
