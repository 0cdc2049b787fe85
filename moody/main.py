"""Entry: serve the song upload and mood lookup API (moody.api.app) with uvicorn.

Usage:
    python -m moody.main [--host HOST] [--port PORT] [--reload]

Host and port default to MOODY_API_HOST and MOODY_API_PORT.
"""
import argparse
import logging

import uvicorn

from moody.config import API_HOST, API_PORT


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Moody Player song API")
    parser.add_argument("--host", default=API_HOST)
    parser.add_argument("--port", type=int, default=API_PORT)
    parser.add_argument("--reload", action="store_true", help="Restart on code changes (development)")
    return parser.parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    uvicorn.run("moody.api.app:app", host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    main()
