"""
Web layer - aiohttp HTTP interface.
"""

from .server import WebServer, create_app, run_server

__all__ = ["WebServer", "create_app", "run_server"]
