from typing import Optional, Sequence


class BasicError(Exception):
    """Base exception for the front end."""

    pass


class ParseError(BasicError):
    """Raised when the source text does not match the grammar.

    ``line`` and ``column`` are 1-based and point at the furthest position the
    parser reached. ``expected`` describes the tokens that would have
    been accepted there, e.g. ``identifier`` or ``"="``.
    """

    def __init__(
        self,
        message: str,
        line: int,
        column: int,
        expected: Sequence[str] = (),
        context: Optional[str] = None,
    ):
        super().__init__(message)
        self.line = line
        self.column = column
        self.expected = tuple(sorted(expected))
        self.context = context

    def __str__(self) -> str:
        text = f"{self.args[0]} at line {self.line}, column {self.column}"
        if self.expected:
            text += f"; expected one of: {', '.join(self.expected)}"
        return text


class ResolverError(BasicError, AssertionError):
    """Raised when the precedence resolver receives a malformed operator run."""

    pass
