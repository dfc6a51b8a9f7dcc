from __future__ import annotations

import importlib.util
import unittest
from dataclasses import dataclass
from pathlib import Path

import pytest

pytest.importorskip("pygls")
pytest.importorskip("lsprotocol")

ROOT = Path(__file__).resolve().parents[1]
LSP_PATH = ROOT / "packages" / "basic-vscode" / "server" / "lsp_server.py"


def _load_lsp_module():
    spec = importlib.util.spec_from_file_location("basic_lsp_server", LSP_PATH)
    if spec is None or spec.loader is None:
        raise RuntimeError(f"Failed to load module spec from {LSP_PATH}")
    mod = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(mod)
    return mod


@dataclass
class _Doc:
    source: str


class _Workspace:
    def __init__(self, text: str):
        self._doc = _Doc(text)

    def get_document(self, uri: str) -> _Doc:
        return self._doc


class _LS:
    def __init__(self, text: str):
        self.workspace = _Workspace(text)
        self.published: dict[str, list[object]] = {}

    def publish_diagnostics(self, uri: str, diagnostics: list[object]) -> None:
        self.published[uri] = diagnostics


class LspTests(unittest.TestCase):
    def setUp(self):
        self.lsp = _load_lsp_module()

    def test_clean_program_has_no_diagnostics(self) -> None:
        self.assertEqual(self.lsp.diagnose("let x = 1\nx + 1\n"), [])

    def test_parse_error_is_reported_zero_based(self) -> None:
        (diag,) = self.lsp.diagnose("let x = 1\nlet = 2\n")
        self.assertEqual(diag.range.start.line, 1)
        self.assertEqual(diag.range.start.character, 4)
        self.assertIn("Unexpected token", diag.message)

    def test_validate_publishes_for_document(self) -> None:
        ls = _LS("let if = 1")
        self.lsp.validate(ls, "file:///prog.bs")
        self.assertEqual(len(ls.published["file:///prog.bs"]), 1)

        ls = _LS("let iffy = 1")
        self.lsp.validate(ls, "file:///prog.bs")
        self.assertEqual(ls.published["file:///prog.bs"], [])


if __name__ == "__main__":
    unittest.main(verbosity=2)
