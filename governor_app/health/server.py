"""
Liveness endpoint.

Answers every GET with a fixed JSON status object. Runs on the governor's
own event loop through an ``AppRunner`` so it never blocks the tick loop.
"""

from typing import Any, Optional

import structlog
from aiohttp import web

from .. import __version__
from ..config.defaults import HealthParams

logger = structlog.get_logger(__name__)

STATUS_KEY = web.AppKey("status", dict)


def build_status(keys_detected: bool, params: Optional[HealthParams] = None) -> dict[str, Any]:
    """The status document served on every request."""
    params = params or HealthParams()
    return {
        "engine": params.engine_name,
        "version": f"{__version__}-PY",
        "keys_detected": keys_detected,
        "ai_active": True,
        "reinforcement_learning": "ENABLED",
    }


async def status_handler(request: web.Request) -> web.Response:
    return web.json_response(request.app[STATUS_KEY])


def create_app(keys_detected: bool, params: Optional[HealthParams] = None) -> web.Application:
    """Build the health application; any path answers with the status object."""
    app = web.Application()
    app[STATUS_KEY] = build_status(keys_detected, params)
    app.router.add_get("/{tail:.*}", status_handler)
    return app


async def start_health_server(
    keys_detected: bool,
    params: Optional[HealthParams] = None
) -> web.AppRunner:
    """
    Start the health server in the running loop.

    Args:
        keys_detected: Whether signing key and executor address are configured
        params: Bind host/port and engine name

    Returns:
        AppRunner instance (for cleanup)
    """
    params = params or HealthParams()
    runner = web.AppRunner(create_app(keys_detected, params))
    await runner.setup()

    site = web.TCPSite(runner, params.host, params.port)
    await site.start()

    logger.info("Health monitor active", host=params.host, port=params.port)
    return runner


async def stop_health_server(runner: web.AppRunner) -> None:
    """Stop the health server."""
    await runner.cleanup()
    logger.info("Health monitor stopped")
