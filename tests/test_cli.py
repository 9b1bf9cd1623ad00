from __future__ import annotations

import contextlib
import io
import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from array_translate.cli import main


class CliTests(unittest.TestCase):
    def _run(self, argv: list[str], stdin: str = "") -> tuple[int, str, str]:
        out = io.StringIO()
        err = io.StringIO()
        with mock.patch("sys.stdin", io.StringIO(stdin)):
            with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
                code = main(argv)
        return code, out.getvalue(), err.getvalue()

    def test_translates_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "prog.apl"
            path.write_text("+/⍳1 2 ¯3 ⍝ sum\n", encoding="utf-8")
            code, out, _ = self._run(["--from", "apl", "--to", "j", str(path)])
        self.assertEqual(code, 0)
        self.assertEqual(out, "+/i.1 2 _3 NB. sum\n")

    def test_translates_stdin_with_modes(self) -> None:
        code, out, _ = self._run(["--from", "apl", "--to", "bqn"], stdin="⍳1 2")
        self.assertEqual((code, out), (0, "↕1‿2"))
        code, out, _ = self._run(["--from", "apl", "--to", "bqn", "--primitives-only"], stdin="⍳1 2")
        self.assertEqual((code, out), (0, "↕1 2"))
        code, out, _ = self._run(["--from", "apl", "--to", "bqn", "--literals-only"], stdin="⍳1 2")
        self.assertEqual((code, out), (0, "⍳1‿2"))

    def test_language_ids_are_normalized(self) -> None:
        code, out, _ = self._run(["--from", " APL", "--to", "BQN"], stdin="⍳3")
        self.assertEqual((code, out), (0, "↕3"))

    def test_unknown_language_exits_with_usage_code(self) -> None:
        code, out, err = self._run(["--from", "apl", "--to", "cobol"], stdin="⍳3")
        self.assertEqual(code, 2)
        self.assertEqual(out, "")
        self.assertIn("Unknown language 'cobol'", err)

    def test_missing_file_exits_with_usage_code(self) -> None:
        code, _, err = self._run(["--from", "apl", "--to", "bqn", "/nonexistent/prog.apl"])
        self.assertEqual(code, 2)
        self.assertIn("array-translate:", err)

    def test_list_json(self) -> None:
        code, out, _ = self._run(["--from", "apl", "--to", "kap", "--list", "--json"])
        self.assertEqual(code, 0)
        self.assertEqual(json.loads(out), [{"source": "∘.", "target": "⌻", "concept": "table"}])

    def test_list_text(self) -> None:
        code, out, _ = self._run(["--from", "j", "--to", "apl", "--list"])
        self.assertEqual(code, 0)
        self.assertIn("iota", out)
        self.assertIn("i. -> ⍳", out)

    def test_regions(self) -> None:
        code, out, _ = self._run(["--from", "apl", "--to", "bqn", "--regions"], stdin="⍳'a' ⍝ c")
        self.assertEqual(code, 0)
        self.assertEqual(out, "⍳'a' ⍝ c\ncsssc###\n")


if __name__ == "__main__":
    unittest.main()
