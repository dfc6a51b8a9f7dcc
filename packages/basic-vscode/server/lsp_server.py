from __future__ import annotations

import logging
import sys
from pathlib import Path


def _fatal(msg: str) -> None:
    sys.stderr.write(msg + "\n")
    sys.stderr.flush()


try:
    try:
        from pygls.lsp.server import LanguageServer
    except ImportError:
        from pygls.server import LanguageServer
    from lsprotocol.types import (
        TEXT_DOCUMENT_DID_CHANGE,
        TEXT_DOCUMENT_DID_OPEN,
        Diagnostic,
        DiagnosticSeverity,
        Position,
        PublishDiagnosticsParams,
        Range,
    )
except ImportError as e:
    _fatal(f"Basic language server: failed to import LSP dependencies: {e}")
    raise

# --- PATH SETUP ---
# Ensure basic_lang is importable from ../../../
SERVER_DIR = Path(__file__).resolve().parent
ROOT_DIR = SERVER_DIR.parents[2]
if str(ROOT_DIR) not in sys.path:
    sys.path.append(str(ROOT_DIR))

try:
    from basic_lang import ParseError, get_parser
except ImportError:
    _fatal(
        "Basic language server: could not import 'basic_lang'. Ensure repo root is in PYTHONPATH."
    )
    raise

logging.basicConfig(
    stream=sys.stderr,
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(message)s",
)
logger = logging.getLogger("basic-lsp")

SERVER = LanguageServer("basic-server", "v0.1")


def _make_diag(line0: int, col0: int, msg: str) -> Diagnostic:
    start = Position(line=max(line0, 0), character=max(col0, 0))
    end = Position(line=max(line0, 0), character=max(col0, 0) + 1)
    return Diagnostic(
        range=Range(start=start, end=end),
        message=msg,
        severity=DiagnosticSeverity.Error,
        source="basic",
    )


def diagnose(source: str) -> list[Diagnostic]:
    try:
        get_parser().parse_program(source)
    except ParseError as e:
        return [_make_diag(e.line - 1, e.column - 1, str(e))]
    return []


def _publish(ls, uri: str, diags: list[Diagnostic]) -> None:
    # pygls 2.x dropped publish_diagnostics in favour of the generated LSP method.
    if hasattr(ls, "text_document_publish_diagnostics"):
        ls.text_document_publish_diagnostics(
            PublishDiagnosticsParams(uri=uri, diagnostics=diags)
        )
    else:
        ls.publish_diagnostics(uri, diags)


def validate(ls, uri: str) -> None:
    workspace = ls.workspace
    get_doc = getattr(workspace, "get_text_document", None) or workspace.get_document
    diags = diagnose(get_doc(uri).source)
    if diags:
        logger.info("%s: %s", uri, diags[0].message)
    _publish(ls, uri, diags)


@SERVER.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls, params):
    validate(ls, params.text_document.uri)


@SERVER.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls, params):
    validate(ls, params.text_document.uri)


if __name__ == "__main__":
    SERVER.start_io()
