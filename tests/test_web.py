import pytest

from rover_sim import params as params_module
from rover_sim.params import Parameters
from rover_sim.session import RoverSession
from rover_sim.web import WebServer, create_app


@pytest.fixture
async def client(aiohttp_client):
    return await aiohttp_client(create_app(params=Parameters()))


async def test_health(client):
    resp = await client.get("/health")
    assert resp.status == 200
    assert await resp.json() == {"status": "ok"}


class TestSimulation:
    async def test_runs_request(self, client, sample_request):
        resp = await client.post("/api/simulation", json=sample_request)
        assert resp.status == 200
        body = await resp.json()
        assert body["Battery"] == 34
        assert body["SamplesCollected"] == ["Fe"]

    async def test_validation_error_is_400(self, client, sample_request):
        sample_request["battery"] = -5
        resp = await client.post("/api/simulation", json=sample_request)
        assert resp.status == 400
        assert await resp.json() == {"error": "Battery must be a non-negative number"}

    async def test_malformed_json(self, client):
        resp = await client.post(
            "/api/simulation", data="{oops", headers={"Content-Type": "application/json"},
        )
        assert resp.status == 400
        assert "valid JSON" in (await resp.json())["error"]

    async def test_body_not_utf8(self, client):
        resp = await client.post(
            "/api/simulation", data=b"\xff\xfe{", headers={"Content-Type": "application/json"},
        )
        assert resp.status == 400
        assert "valid JSON" in (await resp.json())["error"]

    async def test_body_must_be_object(self, client):
        resp = await client.post("/api/simulation", json=[1, 2])
        assert resp.status == 400
        assert await resp.json() == {"error": "Input is required"}

    async def test_oversized_terrain(self, aiohttp_client, sample_request):
        client = await aiohttp_client(create_app(params=Parameters(max_grid_cells=4)))
        resp = await client.post("/api/simulation", json=sample_request)
        assert resp.status == 400
        assert "4 cells" in (await resp.json())["error"]

    async def test_too_many_commands(self, aiohttp_client, sample_request):
        client = await aiohttp_client(create_app(params=Parameters(max_commands=3)))
        resp = await client.post("/api/simulation", json=sample_request)
        assert resp.status == 400


async def test_path(client, sample_grid):
    resp = await client.post("/api/path", json={
        "terrain": sample_grid,
        "start": {"x": 0, "y": 0, "facing": "East"},
        "target": {"x": 2, "y": 0},
        "battery": 50,
    })
    assert await resp.json() == {"commands": ["F", "F"], "battery": 44, "success": True}


async def test_path_to_obstacle(client, sample_grid):
    resp = await client.post("/api/path", json={
        "terrain": sample_grid,
        "start": {"x": 0, "y": 0, "facing": "East"},
        "target": {"x": 2, "y": 1},
        "battery": 50,
    })
    assert resp.status == 400
    assert await resp.json() == {"error": "Target position cannot be an obstacle"}


async def test_mission(client, sample_grid):
    resp = await client.post("/api/mission", json={
        "terrain": sample_grid,
        "start": {"x": 0, "y": 0, "facing": "East"},
        "battery": 50,
    })
    body = await resp.json()
    assert body["success"] is True
    assert body["commands"][0] == "S"


class TestSession:
    async def test_status(self, client):
        body = await (await client.get("/api/session")).json()
        assert body["Battery"] == 50
        assert body["BackoffIndex"] == 0

    async def test_command_then_reset(self, client):
        resp = await client.post("/api/session/command", json={"command": "F"})
        body = await resp.json()
        assert body["ok"] is True
        assert body["FinalPosition"]["Location"] == {"X": 1, "Y": 0}

        resp = await client.post("/api/session/reset")
        body = await resp.json()
        assert body["FinalPosition"]["Location"] == {"X": 0, "Y": 0}
        assert body["Battery"] == 50

    async def test_unknown_command(self, client):
        resp = await client.post("/api/session/command", json={"command": "Z"})
        assert resp.status == 400

    async def test_commands(self, client):
        resp = await client.post("/api/session/commands", json={"commands": ["F", "S", "R", "F"]})
        assert (await resp.json())["Battery"] == 34

        body = await (await client.get("/api/session")).json()
        assert body["FinalPosition"]["Facing"] == "South"

    async def test_reset_with_new_terrain(self, client):
        resp = await client.post("/api/session/reset", json={
            "terrain": [["Zn", "Fe"]],
            "battery": 12,
            "initialPosition": {"location": {"x": 1, "y": 0}, "facing": "West"},
        })
        body = await resp.json()
        assert body["Terrain"] == [["Zn", "Fe"]]
        assert body["Battery"] == 12

    async def test_bad_reset_keeps_session(self, client):
        resp = await client.post("/api/session/reset", json={"terrain": [["Obs"]]})
        assert resp.status == 400
        body = await (await client.get("/api/session")).json()
        assert body["Terrain"][0] == ["Fe", "Fe", "Se"]

    async def test_path_and_mission(self, client):
        resp = await client.post("/api/session/path", json={"target": {"x": 1, "y": 1}})
        assert (await resp.json())["success"] is True

        resp = await client.post("/api/session/mission")
        assert (await resp.json())["success"] is True

    async def test_render(self, client):
        resp = await client.get("/api/session/render", params={"x": 1, "y": 1})
        assert resp.status == 200
        assert resp.content_type == "image/jpeg"
        assert (await resp.read())[:2] == b"\xff\xd8"

    async def test_render_bad_target(self, client):
        resp = await client.get("/api/session/render", params={"x": "a", "y": 1})
        assert resp.status == 400


class TestParams:
    async def test_get(self, client):
        body = await (await client.get("/api/params")).json()
        assert body["max_grid_cells"] == Parameters().max_grid_cells

    async def test_update_without_save(self, client, tmp_path, monkeypatch):
        monkeypatch.setattr(params_module, "PARAMS_FILE", tmp_path / "params.json")
        body = await (await client.post("/api/params", json={"render_cell_px": 16})).json()
        assert body["render_cell_px"] == 16
        assert not (tmp_path / "params.json").exists()

    async def test_zero_cell_size_rejected(self, client):
        body = await (await client.post("/api/params", json={"render_cell_px": 0})).json()
        assert body["render_cell_px"] == Parameters().render_cell_px

        resp = await client.get("/api/session/render")
        assert resp.status == 200

    async def test_update_with_save(self, client, tmp_path, monkeypatch):
        monkeypatch.setattr(params_module, "PARAMS_FILE", tmp_path / "params.json")
        await client.post("/api/params", json={"max_commands": 9, "_save": True})
        assert Parameters.load(tmp_path / "params.json").max_commands == 9


class BrokenSession(RoverSession):
    def status(self):
        raise RuntimeError("boom")


async def test_unexpected_error_is_500(aiohttp_client):
    server = WebServer(session=BrokenSession())
    client = await aiohttp_client(server.app)
    resp = await client.get("/api/session")
    assert resp.status == 500
    assert await resp.json() == {"error": "Internal Server Error", "message": "boom"}


async def test_unknown_route(client):
    resp = await client.get("/api/nowhere")
    assert resp.status == 404
