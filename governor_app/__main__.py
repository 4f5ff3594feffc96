"""Process entry point: ``python -m governor_app``."""

import argparse
import asyncio
from pathlib import Path
from typing import Optional

import structlog
from dotenv import load_dotenv

from .config.loader import ConfigLoader, GovernorConfig
from .config.validation import ConfigValidator
from .engine import GovernorEngine
from .health.server import start_health_server, stop_health_server
from .logging.config import configure_logging

logger = structlog.get_logger("governor")


async def serve(config: GovernorConfig, max_ticks: Optional[int] = None) -> None:
    """Run the health server and the governor loop on one event loop."""
    runner = await start_health_server(config.keys_detected, config.health)
    engine = GovernorEngine.from_config(config)
    try:
        await engine.run(max_ticks=max_ticks)
    finally:
        await engine.shutdown()
        await stop_health_server(runner)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Multi-network execution governor")
    parser.add_argument("--config-dir", type=Path, default=None,
                        help="Directory containing governor.yaml")
    parser.add_argument("--max-ticks", type=int, default=None,
                        help="Stop after this many ticks (default: run forever)")
    parser.add_argument("--json-logs", action="store_true",
                        help="Render logs as JSON")
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    load_dotenv()

    config = ConfigLoader.create(args.config_dir).load()
    configure_logging(level=config.log_level, format_json=args.json_logs)

    errors = ConfigValidator.validate_config(config)
    if errors:
        for err in errors:
            logger.error("Invalid configuration", field=err.field, message=err.message, value=err.value)
        return 2

    try:
        asyncio.run(serve(config, max_ticks=args.max_ticks))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
