# user_directory/__main__.py
"""
Process entry point.

Usage:
    python -m user_directory serve      # Start every enabled transport
    python -m user_directory init-db    # Create the users table and indexes
"""

import argparse
import asyncio
import signal
import sys
from typing import List, Optional

import structlog

from user_directory.adapters.api.main import create_app
from user_directory.adapters.persistence import build_engine, init_db
from user_directory.adapters.transports import TransportManager, build_transport_configs
from user_directory.bootstrap import build_components
from user_directory.shared.config import Settings, get_settings
from user_directory.shared.logging_config import configure_logging

logger = structlog.get_logger()


async def serve(settings: Settings) -> None:
    components = build_components(settings)
    app = create_app(settings, components=components)
    manager = TransportManager(build_transport_configs(settings), app)

    stop_event = asyncio.Event()

    def request_stop(sig: signal.Signals) -> None:
        logger.info("exit_signal_received", signal=sig.name)
        stop_event.set()

    loop = asyncio.get_running_loop()
    for s in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(s, request_stop, s)

    try:
        await manager.start_all()
        logger.info("server_ready", transports=[t.name for t in manager.transports])
        await stop_event.wait()
    finally:
        await manager.stop_all()
        components.dispose()
        logger.info("server_shutdown_complete")


def init_database(settings: Settings) -> None:
    engine = build_engine(settings)
    try:
        init_db(engine)
    finally:
        engine.dispose()
    logger.info("database_initialized", database=engine.url.render_as_string(hide_password=True))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="user_directory", description="User Directory service")
    sub = parser.add_subparsers(dest="command", required=True)

    serve_parser = sub.add_parser("serve", help="Start the HTTP API and any enabled transports")
    serve_parser.add_argument("--host", help="Override HTTP_HOST")
    serve_parser.add_argument("--port", type=int, help="Override HTTP_PORT")

    sub.add_parser("init-db", help="Create database tables")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    settings = get_settings()
    if args.command == "serve":
        overrides = {}
        if args.host:
            overrides["HTTP_HOST"] = args.host
        if args.port:
            overrides["HTTP_PORT"] = args.port
        if overrides:
            settings = settings.model_copy(update=overrides)

    configure_logging(settings)

    if args.command == "init-db":
        init_database(settings)
        return 0

    try:
        asyncio.run(serve(settings))
    except Exception as e:
        logger.error("server_failed", error=str(e), exc_info=True)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
