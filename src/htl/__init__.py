from .node import ElementNode, Node, TextNode
from .parser import HTL, Parser, parse
from .serialize import to_html
from .tokens import ParseError, StrictModeError

__all__ = [
    "HTL",
    "ElementNode",
    "Node",
    "ParseError",
    "Parser",
    "StrictModeError",
    "TextNode",
    "parse",
    "to_html",
]
