class ParseError:
    """Represents a parse error with location information.

    Errors are values, not exceptions: the parser stops at the first one and
    hands it back to the caller. Use HTL(..., strict=True) to have it raised
    as a StrictModeError instead.
    """

    __slots__ = ("char", "code", "column", "kind", "line", "message")

    STRUCTURAL = 0
    DEPTH_EXCEEDED = 1

    def __init__(self, code, line=None, column=None, message=None, char=None, kind=STRUCTURAL):
        self.code = code
        self.line = line
        self.column = column
        self.message = message or code
        self.char = char
        self.kind = kind

    def __repr__(self):
        if self.line is not None and self.column is not None:
            return f"ParseError({self.code!r}, line={self.line}, column={self.column}, char={self.char!r})"
        return f"ParseError({self.code!r})"

    def __str__(self):
        if self.line is not None and self.column is not None:
            where = f"({self.line},{self.column})"
            if self.char is not None:
                where = f"{where} at {self.char!r}"
            if self.message != self.code:
                return f"{where}: {self.code} - {self.message}"
            return f"{where}: {self.code}"
        if self.message != self.code:
            return f"{self.code} - {self.message}"
        return self.code

    def __eq__(self, other):
        if not isinstance(other, ParseError):
            return NotImplemented
        return (
            self.code == other.code
            and self.line == other.line
            and self.column == other.column
            and self.char == other.char
        )

    __hash__ = None  # Unhashable since we define __eq__


class StrictModeError(Exception):
    """Raised by strict parsing when the input does not parse."""

    def __init__(self, error):
        self.error = error
        super().__init__(str(error))
