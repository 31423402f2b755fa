"""
Web server - aiohttp application exposing the simulator over HTTP.

Stateless endpoints take the whole problem in the request body and
run the core in the default executor, off the event loop. Session
endpoints drive one shared RoverSession and stay on the loop, so
requests never interleave inside a command.
"""

import asyncio
import functools
import logging

from aiohttp import web

from rover_sim.config import WEB_HOST, WEB_PORT
from rover_sim.params import Parameters
from rover_sim.session import RoverSession
from rover_sim.simulation import (
    ValidationError,
    find_path,
    generate_mission_plan,
    run_simulation,
    validate_battery,
    validate_position,
    validate_target,
    validate_terrain,
)
from rover_sim.terrain import TerrainMap
from rover_sim.terrain.visualizer import TerrainVisualizer

logger = logging.getLogger(__name__)


@web.middleware
async def error_middleware(request, handler):
    """Map input errors to 400 and anything unexpected to 500."""
    try:
        return await handler(request)
    except web.HTTPException:
        raise
    except ValidationError as e:
        return web.json_response({"error": str(e)}, status=400)
    except Exception as e:
        logger.error(f"Unhandled error on {request.method} {request.path}: {e}", exc_info=True)
        return web.json_response(
            {"error": "Internal Server Error", "message": str(e)}, status=500,
        )


class WebServer:
    """
    Simulator HTTP interface.

    Provides:
    - Stateless simulation, path and mission endpoints
    - Interactive session (step, reset, plan, render)
    - Runtime parameter tuning
    """

    def __init__(self, session: RoverSession | None = None, params: Parameters | None = None):
        """
        Args:
            session: Session for the /api/session endpoints (default terrain if None)
            params: Runtime parameters (defaults if None)
        """
        self.params = params or Parameters()
        self.session = session or RoverSession(battery=self.params.default_battery)
        self.app = web.Application(middlewares=[error_middleware])
        self._setup_routes()

    def _setup_routes(self):
        """Configure routes."""
        self.app.router.add_get("/health", self.health)

        # Stateless API
        self.app.router.add_post("/api/simulation", self.api_simulation)
        self.app.router.add_post("/api/path", self.api_path)
        self.app.router.add_post("/api/mission", self.api_mission)

        # Session API
        self.app.router.add_get("/api/session", self.api_session_status)
        self.app.router.add_post("/api/session/reset", self.api_session_reset)
        self.app.router.add_post("/api/session/command", self.api_session_command)
        self.app.router.add_post("/api/session/commands", self.api_session_commands)
        self.app.router.add_post("/api/session/path", self.api_session_path)
        self.app.router.add_post("/api/session/mission", self.api_session_mission)
        self.app.router.add_get("/api/session/render", self.api_session_render)

        # Runtime parameters
        self.app.router.add_get("/api/params", self.api_params_get)
        self.app.router.add_post("/api/params", self.api_params_set)

    async def health(self, request):
        return web.json_response({"status": "ok"})

    # --- Stateless endpoints ---

    async def api_simulation(self, request):
        """POST /api/simulation - Run a command sequence, return the result snapshot."""
        data = await self._read_json(request)
        terrain = self._checked_terrain(data.get("terrain"))
        commands = data.get("commands")
        if isinstance(commands, list) and len(commands) > self.params.max_commands:
            raise ValidationError(f"Commands must not exceed {self.params.max_commands} entries")

        result = await self._offload(
            run_simulation, terrain, data.get("battery"), commands, data.get("initialPosition"),
        )
        return web.json_response(result.to_dict())

    async def api_path(self, request):
        """POST /api/path - Shortest battery-feasible path between two cells."""
        data = await self._read_json(request)
        terrain = self._checked_terrain(data.get("terrain"))
        start = validate_position(data.get("start"), terrain)
        target = validate_target(data.get("target"), terrain)
        battery = validate_battery(data.get("battery"))

        result = await self._offload(find_path, terrain, start, target, battery)
        return web.json_response(result.to_dict())

    async def api_mission(self, request):
        """POST /api/mission - Plan a sample of every terrain type."""
        data = await self._read_json(request)
        terrain = self._checked_terrain(data.get("terrain"))
        start = validate_position(data.get("start"), terrain)
        battery = validate_battery(data.get("battery"))

        result = await self._offload(generate_mission_plan, terrain, start, battery)
        return web.json_response(result.to_dict())

    # --- Session endpoints ---

    async def api_session_status(self, request):
        return web.json_response(self.session.status())

    async def api_session_reset(self, request):
        """POST /api/session/reset - New robot; optionally new terrain, battery, start."""
        data = await self._read_json(request, allow_empty=True)
        terrain = data.get("terrain")
        terrain = self._checked_terrain(terrain) if terrain is not None else self.session.terrain
        battery = data.get("battery", self.session.initial_battery)
        position = data.get("initialPosition", self.session.initial_pose)

        # Old session stays in place if construction raises
        self.session = RoverSession(terrain, battery, position)
        logger.info("Session replaced via API")
        return web.json_response(self.session.status())

    async def api_session_command(self, request):
        """POST /api/session/command - One command on the live robot."""
        data = await self._read_json(request)
        ok = self.session.execute(data.get("command"))
        return web.json_response({"ok": ok, **self.session.status()})

    async def api_session_commands(self, request):
        """POST /api/session/commands - A sequence on the live robot."""
        data = await self._read_json(request)
        commands = data.get("commands")
        if isinstance(commands, list) and len(commands) > self.params.max_commands:
            raise ValidationError(f"Commands must not exceed {self.params.max_commands} entries")
        result = self.session.apply(commands)
        return web.json_response(result.to_dict())

    async def api_session_path(self, request):
        """POST /api/session/path - Path from the live robot to {target: {x, y}}."""
        data = await self._read_json(request)
        return web.json_response(self.session.find_path(data.get("target")).to_dict())

    async def api_session_mission(self, request):
        """POST /api/session/mission - Mission plan from the live robot."""
        return web.json_response(self.session.plan_mission().to_dict())

    async def api_session_render(self, request):
        """GET /api/session/render[?x=&y=] - JPEG of the session, optionally with a path."""
        path_cells = []
        if "x" in request.query and "y" in request.query:
            try:
                target = (int(request.query["x"]), int(request.query["y"]))
            except ValueError:
                raise ValidationError("Target must have valid x and y coordinates") from None
            path = self.session.find_path(target)
            if path.success:
                path_cells = self.session.commands_to_cells(path.commands)

        visualizer = TerrainVisualizer(
            cell_px=self.params.render_cell_px, quality=self.params.render_quality,
        )
        jpeg = visualizer.render(
            self.session.terrain,
            pose=self.session.pose,
            visited=self.session.robot.visited_cells,
            path_cells=path_cells,
        )
        return web.Response(body=jpeg, content_type="image/jpeg")

    # --- Runtime parameters ---

    async def api_params_get(self, request):
        """Get current tunable parameters."""
        return web.json_response(self.params.to_dict())

    async def api_params_set(self, request):
        """Update tunable parameters. Include _save=true to persist to disk."""
        data = await self._read_json(request)
        save = data.pop("_save", False)
        self.params.update(**data)

        if save:
            self.params.save()

        return web.json_response(self.params.to_dict())

    # --- Helpers ---

    async def _read_json(self, request, allow_empty: bool = False) -> dict:
        """Request body as a dict; ValidationError if it isn't one."""
        if allow_empty and not request.can_read_body:
            return {}
        try:
            data = await request.json()
        except ValueError:
            # Bad JSON or a body that isn't UTF-8
            raise ValidationError("Request body must be valid JSON") from None
        if not isinstance(data, dict):
            raise ValidationError("Input is required")
        return data

    async def _offload(self, func, *args):
        """Run a CPU-bound core call without blocking other requests."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, functools.partial(func, *args))

    def _checked_terrain(self, grid) -> TerrainMap:
        terrain = validate_terrain(grid)
        if terrain.cell_count > self.params.max_grid_cells:
            raise ValidationError(f"Terrain must not exceed {self.params.max_grid_cells} cells")
        return terrain


def create_app(session: RoverSession | None = None, params: Parameters | None = None) -> web.Application:
    """Create the web application."""
    server = WebServer(session, params)
    return server.app


async def run_server(session: RoverSession | None = None, params: Parameters | None = None, host=WEB_HOST, port=WEB_PORT):
    """Run the web server."""
    app = create_app(session, params)
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, host, port)
    await site.start()
    logger.info(f"Web server running at http://{host}:{port}")
    return runner


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    web.run_app(create_app(), host=WEB_HOST, port=WEB_PORT)
