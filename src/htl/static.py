"""Static resources, with .htl files compiled to HTML on load."""

from __future__ import annotations

import logging
import mimetypes
import os
from collections.abc import Callable
from dataclasses import dataclass

from .parser import parse
from .serialize import to_html
from .tokens import ParseError

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"
HTML_CONTENT_TYPE = "text/html"


@dataclass
class Resource:
    content_type: str
    content: bytes


class TransformError(OSError):
    """A resource could not be converted (for example, bad HTL markup)."""

    def __init__(self, filename: str, error: ParseError | UnicodeDecodeError) -> None:
        super().__init__(f"{filename}: {error}")
        self.path = filename
        self.error = error


def htl_to_html(resource: Resource, filename: str = "<htl>") -> None:
    try:
        text = resource.content.decode("utf-8")
    except UnicodeDecodeError as e:
        raise TransformError(filename, e) from e
    root, error = parse(text)
    if error is not None:
        raise TransformError(filename, error)
    resource.content_type = HTML_CONTENT_TYPE
    resource.content = to_html(root).encode("utf-8")


TRANSFORMERS: dict[str, Callable[[Resource, str], None]] = {
    ".htl": htl_to_html,
}


def guess_content_type(filename: str) -> str:
    content_type, _ = mimetypes.guess_type(filename)
    return content_type or DEFAULT_CONTENT_TYPE


def resource_from_file(filename: str) -> Resource:
    """Read filename, applying the transformer registered for its extension."""
    with open(filename, "rb") as f:
        content = f.read()
    resource = Resource(content_type=guess_content_type(filename), content=content)

    ext = os.path.splitext(filename)[1]
    transform = TRANSFORMERS.get(ext)
    if transform is not None:
        transform(resource, filename)
    return resource


Handler = Callable[[], "Resource | None"]


def handler_from_file(filename: str, dev: bool = False) -> Handler:
    """Build a handler returning the resource for filename.

    In dev mode the file is read and transformed on every call; failures are
    logged and the handler returns None. Otherwise the file is loaded once,
    failures propagate to the caller, and the cached resource is served.
    """
    if dev:

        def dev_handler() -> Resource | None:
            try:
                return resource_from_file(filename)
            except OSError as e:
                logger.error("Failed to load %s: %s", filename, e)
                return None

        return dev_handler

    resource = resource_from_file(filename)

    def cached_handler() -> Resource:
        return resource

    return cached_handler


def handlers_from_dirs(dirs: list[str], dev: bool = False) -> dict[str, Handler]:
    """Map "/sub/path" routes to handlers for every file below dirs.

    Later directories win when the same route shows up twice.
    """
    handlers: dict[str, Handler] = {}
    for directory in dirs:
        if not os.path.isdir(directory):
            raise FileNotFoundError(f"Static directory not found: {directory}")
        for dirpath, dirnames, filenames in os.walk(directory):
            dirnames.sort()
            for name in sorted(filenames):
                path = os.path.join(dirpath, name)
                subpath = os.path.relpath(path, directory).replace(os.sep, "/")
                route = "/" + subpath
                handlers[route] = handler_from_file(path, dev)
                logger.debug("Registered %s -> %s", route, path)
    return handlers
