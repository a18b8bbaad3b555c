"""HTL syntax constants

Characters with a meaning to the parser, the escape tables applied inside
quoted strings, and the set of tags serialized without a closing tag.

Usage:
    from htl.constants import VOID_ELEMENTS, MAX_STACK_DEPTH
"""

# Maximum depth of the open element stack, synthetic root included.
MAX_STACK_DEPTH = 256

OPEN_PAREN = "("
CLOSE_PAREN = ")"
QUOTE = '"'
BACKSLASH = "\\"
KEYWORD_START = ":"
COMMENT_START = ";"
NEWLINE = "\n"

# Rendered as <tag k="v"/> when childless.
VOID_ELEMENTS = frozenset({"br", "hr", "link", "img", "meta"})

# Text payload rendered as a non-breaking space.
NBSP_TEXT = "_"
NBSP_ENTITY = "&nbsp;"

HTML_ESCAPES = {
    "<": "&lt;",
    ">": "&gt;",
    "&": "&amp;",
    "'": "&apos;",
    '"': "&quot;",
}

# Backslash escapes understood inside quoted strings. Any other escaped
# character (backslash and quote included) goes through HTML_ESCAPES.
BACKSLASH_ESCAPES = {
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
}

# Token separators below U+0100 plus the line and paragraph separators. Other
# space separators (category Zs) are matched by the parser.
SPACE_CHARS = frozenset("\t\n\v\f\r \x85\xa0\u2028\u2029")
