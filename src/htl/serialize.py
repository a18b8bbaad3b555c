"""HTML serialization for HTL trees."""

from __future__ import annotations

from typing import Any

from .constants import NBSP_ENTITY, NBSP_TEXT, VOID_ELEMENTS
from .node import Node


def serialize_start_tag(name: str, attrs: dict[str, str] | None, *, self_closing: bool = False) -> str:
    parts: list[str] = ["<", name]
    if attrs:
        # Sorted so output never depends on insertion order. Values were
        # escaped (or deliberately left alone) by the parser.
        for key in sorted(attrs):
            parts.extend([" ", key, '="', attrs[key], '"'])
    parts.append("/>" if self_closing else ">")
    return "".join(parts)


def serialize_end_tag(name: str) -> str:
    return f"</{name}>"


def to_html(node: Node | None) -> str:
    """Convert node to an HTML string. A missing node renders as ''."""
    if node is None:
        return ""
    parts: list[str] = []
    _node_to_html(node, parts)
    return "".join(parts)


def _node_to_html(node: Any, parts: list[str]) -> None:
    """Append the rendering of node to parts."""
    if node.kind == Node.TEXT:
        data: str = node.data
        parts.append(NBSP_ENTITY if data == NBSP_TEXT else data)
        return

    name: str = node.tag
    children: list[Node] = node.children

    # Anonymous group (the synthetic root among others)
    if not name:
        for child in children:
            _node_to_html(child, parts)
        return

    attrs: dict[str, str] = node.attrs
    if not children:
        if name in VOID_ELEMENTS:
            parts.append(serialize_start_tag(name, attrs, self_closing=True))
        else:
            parts.append(serialize_start_tag(name, attrs))
            parts.append(serialize_end_tag(name))
        return

    parts.append(serialize_start_tag(name, attrs))
    for child in children:
        _node_to_html(child, parts)
    parts.append(serialize_end_tag(name))
