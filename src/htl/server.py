"""Minimal static file server.

    $ python -m htl.server --dirs static:overrides --index /index.htl --dev

The index page is also mounted at "/", which catches every path that has no
file of its own.
"""

from __future__ import annotations

import argparse
import logging
import sys

import uvicorn
from starlette.applications import Starlette
from starlette.exceptions import HTTPException
from starlette.requests import Request
from starlette.responses import Response
from starlette.routing import Route

from .static import Handler, handlers_from_dirs

logger = logging.getLogger(__name__)


def build_routes(dirs: list[str], dev: bool = False, index: str | None = "/index.htl") -> dict[str, Handler]:
    routes = handlers_from_dirs(dirs, dev)
    for route in routes:
        logger.info("registered path: %s", route)
    if index and index in routes:
        routes["/"] = routes[index]
    return routes


def create_app(routes: dict[str, Handler]) -> Starlette:
    def serve(request: Request) -> Response:
        handler = routes.get(request.url.path) or routes.get("/")
        if handler is None:
            raise HTTPException(status_code=404)
        resource = handler()
        if resource is None:
            # The loader already logged why.
            return Response(status_code=500)
        return Response(resource.content, media_type=resource.content_type)

    return Starlette(routes=[Route("/{path:path}", serve, methods=["GET"])])


def parse_address(port: str) -> tuple[str, int]:
    """Accept ':8000', '8000' or 'host:8000'. No host means all interfaces."""
    host, _, number = port.rpartition(":")
    return host or "0.0.0.0", int(number)


def build_arg_parser() -> argparse.ArgumentParser:
    arg_parser = argparse.ArgumentParser(prog="htl-serve", description="Serve static files, compiling .htl to HTML.")
    arg_parser.add_argument("--port", default=":8000", help="Port, and maybe hostname, to listen to")
    arg_parser.add_argument("--dev", action="store_true", help="Reload and recompile files on every request")
    arg_parser.add_argument(
        "--dirs",
        default="static",
        help="Colon-separated directories containing static resources. Latter directories win on duplicate files.",
    )
    arg_parser.add_argument("--index", default="/index.htl", help="File also served at / and for unknown paths")
    return arg_parser


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        routes = build_routes(args.dirs.split(":"), dev=args.dev, index=args.index)
    except OSError as e:
        logger.error("%s", e)
        return 1

    host, port = parse_address(args.port)
    logger.info("listening on %s", args.port)
    uvicorn.run(create_app(routes), host=host, port=port, log_level="info")
    return 0


if __name__ == "__main__":
    sys.exit(main())
