"""HTL parser: a single pass, character driven state machine.

    (a :href http://foo "body")

parses to an anonymous root holding ElementNode("a", {"href": "http://foo"})
with one TextNode("body") child, which renders as <a href="http://foo">body</a>.
"""

import logging
import unicodedata

from .constants import (
    BACKSLASH,
    BACKSLASH_ESCAPES,
    CLOSE_PAREN,
    COMMENT_START,
    HTML_ESCAPES,
    KEYWORD_START,
    MAX_STACK_DEPTH,
    NEWLINE,
    OPEN_PAREN,
    QUOTE,
    SPACE_CHARS,
)
from .node import ElementNode, TextNode
from .serialize import to_html
from .tokens import ParseError, StrictModeError

logger = logging.getLogger(__name__)


def is_space(char):
    """Unicode White_Space. The ASCII information separators are not spaces."""
    if char in SPACE_CHARS:
        return True
    return char > "\xff" and unicodedata.category(char) == "Zs"


def html_escape_char(char):
    return HTML_ESCAPES.get(char, char)


def unescape_then_html_escape(char):
    """Resolve the character following a backslash inside a quoted string."""
    escaped = BACKSLASH_ESCAPES.get(char)
    if escaped is not None:
        return escaped
    return html_escape_char(char)


class Parser:
    """Parse state for one input. Create a new Parser per document."""

    # Lexical contexts
    DEFAULT = 0
    TAG = 1
    AFTER_TAG = 2
    ATTR_KEY = 3
    AFTER_ATTR_KEY = 4
    ATTR_VALUE = 5
    CONTENT = 6

    # Eat behaviors. FAIL aborts the parse.
    FAIL = 0
    IDLE = 1
    SYMBOL = 2
    STRING = 3
    COMMENT = 4

    __slots__ = (
        "_failure",
        "context",
        "env_debug",
        "escaping",
        "key",
        "stack",
        "token",
    )

    def __init__(self, debug=False):
        self.env_debug = bool(debug)
        self.context = self.DEFAULT
        self.token = []
        self.key = ""
        self.escaping = False
        self.stack = []
        self._failure = None

    def debug(self, message):
        if self.env_debug:
            logger.debug("%s", message)

    def run(self, text):
        """Parse text and return (root, error). Exactly one is set, except for
        empty input which yields (None, None)."""
        if not text:
            return None, None

        root = ElementNode()
        self.stack = [root]
        self.context = self.DEFAULT
        self.token = []
        self.key = ""
        self.escaping = False
        self._failure = None

        eater = self.IDLE
        line = 1
        column = 0
        for char in text:
            eater = self._eat(eater, char)
            if char == NEWLINE:
                line += 1
                column = 0
            else:
                column += 1
            if eater == self.FAIL:
                code, message, kind = self._failure
                return None, ParseError(code, line=line, column=column, message=message, char=char, kind=kind)

        if eater == self.STRING:
            return None, ParseError(
                "unterminated-string",
                line=line,
                column=column,
                message="Quoted string is not terminated at end of input",
            )
        if len(self.stack) > 1:
            missing = len(self.stack) - 1
            return None, ParseError(
                "missing-closing-paren",
                line=line,
                column=column,
                message=f"Parser stack contains more than the root element. Perhaps {missing} closing parens are missing?",
            )
        return root, None

    # ---------------------
    # Helper methods
    # ---------------------

    def _fail(self, code, message, kind=ParseError.STRUCTURAL):
        self._failure = (code, message, kind)
        self.debug(f"failing with {code}: {message}")
        return self.FAIL

    def _current_node(self):
        return self.stack[-1]

    def _flush_token(self):
        token = "".join(self.token)
        self.token.clear()
        return token

    def _commit(self):
        context = self.context
        if context == self.TAG:
            self._current_node().tag = self._flush_token()
        elif context == self.ATTR_KEY:
            self.key = self._flush_token()
        elif context == self.ATTR_VALUE:
            key, self.key = self.key, ""
            self._current_node().set_attr(key, self._flush_token())
        elif context == self.CONTENT:
            self._current_node().append_child(TextNode(self._flush_token()))

    def _push(self):
        if len(self.stack) >= MAX_STACK_DEPTH:
            return self._fail("tree-too-deep", "Tree too deep", kind=ParseError.DEPTH_EXCEEDED)
        node = ElementNode()
        self._current_node().append_child(node)
        self.stack.append(node)
        self.context = self.TAG
        self.debug(f"push, depth {len(self.stack) - 1}")
        return self.SYMBOL

    def _pop(self):
        if len(self.stack) > 1:
            node = self.stack.pop()
            self.context = self.DEFAULT
            self.debug(f"pop <{node.tag}>, depth {len(self.stack) - 1}")
            return self.IDLE
        return self._fail("unexpected-closing-paren", "Unexpected closing paren")

    # ---------------------
    # Eat behaviors
    # ---------------------

    def _eat(self, eater, char):
        if eater == self.IDLE:
            return self._eat_idle(char)
        if eater == self.SYMBOL:
            return self._eat_symbol(char)
        if eater == self.STRING:
            return self._eat_string(char)
        if eater == self.COMMENT:
            return self._eat_comment(char)
        return self.FAIL

    def _eat_idle(self, char):
        """Between tokens."""
        if char == OPEN_PAREN:
            if self.context == self.AFTER_ATTR_KEY:
                return self._fail("unexpected-open-paren", "Unexpected open paren")
            return self._push()

        if char == CLOSE_PAREN:
            if self.context == self.AFTER_ATTR_KEY:
                return self._fail("unexpected-close-paren", "Unexpected close paren")
            return self._pop()

        if char == QUOTE:
            if self.context == self.AFTER_ATTR_KEY:
                self.context = self.ATTR_VALUE
            else:
                self.context = self.CONTENT
            return self.STRING

        if char == COMMENT_START:
            return self.COMMENT

        if char == KEYWORD_START:
            if self.context == self.AFTER_TAG:
                self.context = self.ATTR_KEY
                return self.SYMBOL
            return self._fail("unexpected-character", "Unexpected character")

        if char == BACKSLASH:
            return self._fail("backslash-escape-not-allowed", "Backslash-escaping not allowed here")

        if is_space(char):
            return self.IDLE

        self.token.append(char)
        if self.context == self.AFTER_ATTR_KEY:
            self.context = self.ATTR_VALUE
        else:
            self.context = self.CONTENT
        return self.SYMBOL

    def _eat_symbol(self, char):
        """Inside a bare token. Characters are kept verbatim, never escaped."""
        if char == OPEN_PAREN:
            if self.context == self.ATTR_KEY:
                return self._fail("unexpected-open-paren", "Unexpected open paren")
            self._commit()
            return self._push()

        if char == CLOSE_PAREN:
            if self.context == self.ATTR_KEY:
                return self._fail("unexpected-close-paren", "Unexpected close paren")
            self._commit()
            return self._pop()

        if char == QUOTE:
            self._commit()
            if self.context == self.ATTR_KEY:
                self.context = self.ATTR_VALUE
            else:
                self.context = self.CONTENT
            return self.STRING

        if char == BACKSLASH:
            return self._fail("backslash-escape-not-allowed", "Backslash-escaping is not allowed here")

        if is_space(char):
            self._commit()
            if self.context == self.ATTR_KEY:
                self.context = self.AFTER_ATTR_KEY
            else:
                self.context = self.AFTER_TAG
            return self.IDLE

        self.token.append(char)
        return self.SYMBOL

    def _eat_string(self, char):
        """Inside a double quoted literal."""
        if self.escaping:
            self.escaping = False
            self.token.append(unescape_then_html_escape(char))
            return self.STRING

        if char == QUOTE:
            self._commit()
            if self.context == self.ATTR_VALUE:
                self.context = self.AFTER_TAG
            else:
                self.context = self.DEFAULT
            return self.IDLE

        if char == BACKSLASH:
            self.escaping = True
            return self.STRING

        self.token.append(html_escape_char(char))
        return self.STRING

    def _eat_comment(self, char):
        # The context is left as it was before the comment.
        if char == NEWLINE:
            return self.IDLE
        return self.COMMENT


class HTL:
    """Parse an HTL document.

    root is the anonymous root element (None for empty input), error the
    ParseError if parsing failed. With strict=True a failure raises
    StrictModeError instead.
    """

    __slots__ = ("debug", "error", "root", "strict")

    def __init__(self, text, *, strict=False, debug=False):
        self.strict = bool(strict)
        self.debug = bool(debug)
        self.root, self.error = Parser(debug=self.debug).run(text or "")
        if self.error is not None:
            logger.debug("HTL parse failed: %s", self.error)
            if self.strict:
                raise StrictModeError(self.error)

    def to_html(self):
        return to_html(self.root)


def parse(text, *, debug=False):
    """Parse text into (root, error)."""
    return Parser(debug=debug).run(text)
