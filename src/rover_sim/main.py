#!/usr/bin/env python3
"""
Rover simulator - Main Entry Point

Usage:
    rover-sim                                 # Run web interface
    rover-sim input.json                      # Simulate, print result
    rover-sim input.json output.json          # Simulate, write result
    rover-sim input.json --target 2 0         # Shortest path instead
    rover-sim input.json --mission            # Mission plan instead
    rover-sim input.json --web                # Web interface on the file's terrain

Input file (same shape as POST /api/simulation):
    {"terrain": [[...]], "battery": 50, "commands": [...],
     "initialPosition": {"location": {"x": 0, "y": 0}, "facing": "East"}}
"""

import argparse
import asyncio
import json
import logging
import sys

from rover_sim.config import WEB_HOST, WEB_PORT
from rover_sim.simulation import (
    ValidationError,
    find_path,
    generate_mission_plan,
    run_simulation_request,
    validate_battery,
    validate_position,
    validate_target,
    validate_terrain,
)

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Grid rover simulator")
    parser.add_argument("input", nargs="?", help="JSON input file")
    parser.add_argument("output", nargs="?", help="Write the JSON result here instead of stdout")
    parser.add_argument(
        "--web",
        action="store_true",
        help="Run the web interface (default when no input is given)",
    )
    parser.add_argument("--host", default=WEB_HOST, help="Web interface host")
    parser.add_argument("--port", type=int, default=WEB_PORT, help="Web interface port")

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--target",
        nargs=2,
        type=int,
        metavar=("X", "Y"),
        help="Find a path from initialPosition to (X, Y) instead of simulating",
    )
    mode.add_argument(
        "--mission",
        action="store_true",
        help="Plan a sample of every terrain type instead of simulating",
    )

    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    return parser


def main(argv=None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    # Setup logging
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    logging.getLogger("aiohttp.access").setLevel(logging.WARNING)

    try:
        payload = load_input(args.input) if args.input else None

        if args.web or payload is None:
            serve(payload, args.host, args.port)
            return 0

        result = compute(payload, target=args.target, mission=args.mission)
    except (ValidationError, OSError, json.JSONDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    text = json.dumps(result, indent=2)
    if args.output:
        try:
            with open(args.output, "w") as f:
                f.write(text + "\n")
        except OSError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        logger.info(f"Result written to {args.output}")
    else:
        print(text)
    return 0


def load_input(path: str) -> dict:
    with open(path) as f:
        payload = json.load(f)
    if not isinstance(payload, dict):
        raise ValidationError("Input is required")
    return payload


def compute(payload: dict, target=None, mission: bool = False) -> dict:
    """Simulate, path-find or plan from one input document."""
    if target is None and not mission:
        return run_simulation_request(payload)

    terrain = validate_terrain(payload.get("terrain"))
    start = validate_position(payload.get("initialPosition"), terrain)
    battery = validate_battery(payload.get("battery"))

    if mission:
        return generate_mission_plan(terrain, start, battery).to_dict()
    return find_path(terrain, start, validate_target(tuple(target), terrain), battery).to_dict()


def serve(payload, host: str, port: int) -> None:
    """Run the web interface until Ctrl+C."""
    from rover_sim.params import Parameters
    from rover_sim.session import RoverSession
    from rover_sim.web.server import run_server

    params = Parameters.load()
    if payload is None:
        session = RoverSession(battery=params.default_battery)
    else:
        session = RoverSession(
            payload.get("terrain"),
            payload.get("battery", params.default_battery),
            payload.get("initialPosition"),
        )

    async def run_web():
        runner = await run_server(session, params, host=host, port=port)
        logger.info("Press Ctrl+C to stop")
        try:
            while True:
                await asyncio.sleep(1)
        finally:
            await runner.cleanup()

    try:
        asyncio.run(run_web())
    except KeyboardInterrupt:
        logger.info("Web interface stopped")


if __name__ == "__main__":
    sys.exit(main())
