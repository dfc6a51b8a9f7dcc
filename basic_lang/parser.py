import logging
import os
import sys
from typing import List, Optional

from lark import Lark
from lark.lexer import PatternStr
from lark.exceptions import (
    UnexpectedCharacters,
    UnexpectedEOF,
    UnexpectedInput,
    UnexpectedToken,
    VisitError,
)

from .builder import AstBuilder
from .exceptions import BasicError, ParseError
from .grammar import BASIC_GRAMMAR
from .models import NullStmt, Stmt

logger = logging.getLogger(__name__)

SEPARATORS = (";", "\n")

# Terminals whose pattern is a regex get a name a reader understands.
_TERMINAL_DESCRIPTIONS = {
    "IDENT": "identifier",
    "NUMBER": "number",
    "STRING": "string",
    "OP": "operator",
    "_SEP": '";" or newline',
    "$END": "end of input",
    "<END-OF-FILE>": "end of input",
}


class BasicParser:
    """Parses program text straight into model nodes.

    The lark instance is built lazily and shared by every parse made through
    this object; a parse keeps no state between calls.
    """

    def __init__(self, grammar: str = BASIC_GRAMMAR):
        self.grammar = grammar
        self._lark: Optional[Lark] = None
        self._builder = AstBuilder()
        self._max_recursion = int(os.environ.get("BASIC_RECURSION_LIMIT", "5000"))

    @property
    def lark(self) -> Lark:
        if self._lark is None:
            logger.debug("Building LALR tables for the program grammar")
            self._lark = Lark(
                self.grammar,
                parser="lalr",
                lexer="basic",
                maybe_placeholders=True,
            )
        return self._lark

    def parse_program(self, source: str) -> List[Stmt]:
        """Parse a whole program into its list of top-level statements.

        Every line must end with a separator; a missing final newline is
        supplied here so that the last line of a file is accepted.
        """
        if source and not source.endswith(SEPARATORS):
            source += "\n"
        try:
            tree = self.lark.parse(source)
        except UnexpectedInput as e:
            raise self._translate(e, source) from None
        except RecursionError as e:
            raise _too_deep() from e

        try:
            sys.setrecursionlimit(max(sys.getrecursionlimit(), self._max_recursion))
        except (ValueError, RecursionError, OverflowError):
            logger.debug("Could not raise recursion limit to %s", self._max_recursion)
        try:
            return self._builder.transform(tree)
        except VisitError as e:
            if isinstance(e.orig_exc, RecursionError):
                raise _too_deep() from e
            raise e.orig_exc from e
        except RecursionError as e:
            raise _too_deep() from e

    def parse_line(self, text: str) -> List[Stmt]:
        """Parse one line of input, dropping the empty-line placeholders."""
        return [s for s in self.parse_program(text) if not isinstance(s, NullStmt)]

    def _translate(self, error: UnexpectedInput, source: str) -> ParseError:
        if isinstance(error, UnexpectedCharacters):
            message = f"Unexpected character {error.char!r}"
            expected = self._describe(error.allowed or ())
        elif isinstance(error, UnexpectedToken):
            if error.token.type == "$END":
                message = "Unexpected end of input"
            else:
                message = f"Unexpected token {str(error.token)!r}"
            expected = self._describe(error.expected or ())
        elif isinstance(error, UnexpectedEOF):
            message = "Unexpected end of input"
            expected = self._describe(error.expected or ())
        else:
            message = "Syntax error"
            expected = ()

        line, column = error.line, error.column
        if not isinstance(line, int) or not isinstance(column, int) or line < 1:
            line, column = _end_position(source)
        try:
            context = error.get_context(source)
        except (AssertionError, TypeError, IndexError):
            context = None

        logger.debug("Parse failed at %s:%s (%s)", line, column, message)
        return ParseError(message, line, column, expected, context)

    def _describe(self, names) -> List[str]:
        """Readable, de-duplicated descriptions of lark terminal names."""
        ignored = set(self.lark.ignore_tokens)
        found = set()
        for name in names:
            if name in ignored:
                continue
            description = _TERMINAL_DESCRIPTIONS.get(name)
            if description is None:
                try:
                    pattern = self.lark.get_terminal(name).pattern
                except KeyError:
                    pattern = None
                if isinstance(pattern, PatternStr):
                    description = f'"{pattern.value}"'
                else:
                    description = name
            found.add(description)
        return sorted(found)


def _too_deep() -> BasicError:
    return BasicError("Program is nested too deeply to build its tree")


def _end_position(source: str):
    lines = source.split("\n")
    return len(lines), len(lines[-1]) + 1


_DEFAULT_PARSER: Optional[BasicParser] = None


def get_parser() -> BasicParser:
    """Lazily construct and cache the shared parser."""
    global _DEFAULT_PARSER
    if _DEFAULT_PARSER is None:
        _DEFAULT_PARSER = BasicParser()
    return _DEFAULT_PARSER


def parse_program(source: str) -> List[Stmt]:
    return get_parser().parse_program(source)
