"""Run the sponsors API with uvicorn: `python -m sponsors_api --cache-ttl 30m`."""

import argparse
import logging
import sys

import uvicorn

from sponsors_api.app import create_app
from sponsors_api.core.config import get_settings, parse_duration

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sponsors-api", description="Serve GitHub sponsor avatars for READMEs.")
    parser.add_argument("--cache-ttl", help="Sponsor cache duration, e.g. 1h, 30m, 90s (default: $CACHE_TTL or 1h)")
    parser.add_argument("--host", help="Listen address (default: $HOST or 0.0.0.0)")
    parser.add_argument("--port", type=int, help="Listen port (default: $PORT or 3000)")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = get_settings()

    overrides = {}
    if args.cache_ttl is not None:
        try:
            overrides["CACHE_TTL"] = parse_duration(args.cache_ttl)
        except ValueError as e:
            print(f"error parsing cache ttl: {e}", file=sys.stderr)
            return 2
    if args.host is not None:
        overrides["HOST"] = args.host
    if args.port is not None:
        overrides["PORT"] = args.port
    config = config.model_copy(update=overrides)

    logger.info("Listening on %s:%d", config.HOST, config.PORT)
    uvicorn.run(create_app(config), host=config.HOST, port=config.PORT, log_level=config.LOG_LEVEL.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
