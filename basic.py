"""Basic entrypoint module exposing the public API and CLI."""

import argparse
import logging
import os
import sys

from basic_lang import (
    BASIC_GRAMMAR,
    BasicError,
    BasicParser,
    ConsoleIO,
    IOHandler,
    ParseError,
    dump,
    parse_program,
    unparse_program,
)

__all__ = [
    "BASIC_GRAMMAR",
    "BasicError",
    "BasicParser",
    "ConsoleIO",
    "IOHandler",
    "ParseError",
    "parse_program",
    "render",
    "run_repl",
    "main",
]

logger = logging.getLogger("basic")


def render(stmts, mode: str) -> str:
    if mode == "format":
        return unparse_program(stmts).rstrip("\n")
    if mode == "dump":
        return "\n".join(dump(s) for s in stmts)
    return "\n".join(repr(s) for s in stmts)


def run_repl(parser: BasicParser, io: IOHandler, mode: str = "repr"):
    io.emit("Basic front end. Each line is parsed and its tree echoed.")
    io.emit("Type 'exit' to leave.")
    while True:
        text = io.read_input(">> ")
        if text is None:
            break
        text = text.strip()
        if not text:
            continue
        if text in ("exit", "quit"):
            break
        try:
            stmts = parser.parse_line(text)
        except BasicError as e:
            io.error(f"PARSE ERROR: {e}")
            continue
        if stmts:
            io.emit(render(stmts, mode))


def _configure_logging(verbose: bool) -> None:
    level_name = "DEBUG" if verbose else os.environ.get("BASIC_LOG_LEVEL", "WARNING")
    logging.basicConfig(
        level=getattr(logging, level_name.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv=None):
    parser = argparse.ArgumentParser(description="Basic language front end")
    parser.add_argument("script", nargs="?", help="Path to the source file")
    output = parser.add_mutually_exclusive_group()
    output.add_argument(
        "--dump", action="store_true", help="Print an indented tree with positions"
    )
    output.add_argument(
        "--format", action="store_true", help="Print the program re-rendered as source"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log parser activity to stderr"
    )
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    mode = "dump" if args.dump else "format" if args.format else "repr"
    io = ConsoleIO()

    if not args.script:
        run_repl(BasicParser(), io, mode)
        return 0

    entry_path = os.path.abspath(args.script)
    logger.info("Parsing %s", entry_path)
    try:
        with open(entry_path, "r", encoding="utf-8") as f:
            source = f.read()
        stmts = parse_program(source)
    except ParseError as e:
        io.error(f"PARSE ERROR in {args.script}\n{e}")
        if e.context:
            io.error(e.context.rstrip("\n"))
        return 1
    except OSError as e:
        io.error(f"Cannot read {args.script}: {e}")
        return 1

    logger.info("Parsed %d top-level statements", len(stmts))
    if stmts:
        io.emit(render(stmts, mode))
    return 0


if __name__ == "__main__":
    sys.exit(main())
