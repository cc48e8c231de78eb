"""
Server launcher for the SongLink backend.

Runs the FastAPI app (web/backend) under uvicorn using the host and port
from configuration.
"""

import argparse
import os
import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from .core.config import load_config
from .core.logging import setup_logging

# Project root detection (where pyproject.toml and web/ live)
PROJECT_ROOT = Path(__file__).parent.parent.parent


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="songlink", description="SongLink backend")
    parser.add_argument("--config", type=Path, help="Path to config.toml")
    parser.add_argument("--host", help="Override server.host")
    parser.add_argument("--port", type=int, help="Override server.port")
    parser.add_argument("--reload", action="store_true", help="Auto-reload on code changes")
    args = parser.parse_args(argv)

    if args.config:
        # Picked up again by the app process via get_config_path()
        os.environ["SONGLINK_CONFIG"] = str(args.config)

    try:
        config = load_config(args.config)
    except (ValueError, OSError) as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1

    setup_logging(config.logging)

    import uvicorn

    host = args.host or config.server.host
    port = args.port or config.server.port
    logger.info(f"SongLink backend starting on {host}:{port}")

    uvicorn.run(
        "web.backend.main:app",
        host=host,
        port=port,
        reload=args.reload,
        app_dir=str(PROJECT_ROOT),
        log_level=config.logging.level.lower(),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
