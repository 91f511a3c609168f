import io
import json
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

import main as cli

WORDS = ["temps", "tesor", "seau", "meau", "peau"]


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmpdir = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmpdir.name)
        self.lexicon = self.tmp / "words.tsv"
        self.lexicon.write_text("base\n" + "\n".join(WORDS) + "\n", encoding="utf-8")

    def tearDown(self) -> None:
        self._tmpdir.cleanup()

    def run_cli(self, *argv: str):
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            code = cli.main(list(argv))
        return code, buffer.getvalue()

    def test_preview_only(self) -> None:
        code, output = self.run_cli(
            "--pattern1", "TE__", "--pattern2", "__AU", "--pos1", "3", "--pos2", "1", "--preview-only"
        )
        self.assertEqual(code, 0)
        self.assertIn("T  E  _  _", output)

    def test_preview_only_reports_orientation_conflict(self) -> None:
        code, output = self.run_cli(
            "--pattern1", "TE__", "--pattern2", "__AU", "--dir2", "H",
            "--pos1", "3", "--pos2", "1", "--preview-only",
        )
        self.assertEqual(code, 1)
        self.assertIn("No preview", output)

    def test_solve_writes_json(self) -> None:
        out = self.tmp / "result.json"
        code, output = self.run_cli(
            "--lexicon", str(self.lexicon),
            "--pattern1", "TE__", "--pattern2", "__AU",
            "--pos1", "3", "--pos2", "1",
            "--output", str(out),
        )
        self.assertEqual(code, 0)
        self.assertIn("candidates: 2 / 3 | solutions: 2", output)
        payload = json.loads(out.read_text(encoding="utf-8"))
        self.assertEqual(payload["status"], "SOLVED")
        self.assertEqual(payload["solutions"], [["temps", "meau"], ["tesor", "seau"]])
        self.assertEqual(payload["candidate_counts"], [2, 3])

    def test_search_writes_table(self) -> None:
        out = self.tmp / "search.tsv"
        code, output = self.run_cli("--lexicon", str(self.lexicon), "--search", "-EAU*", "--output", str(out))
        self.assertEqual(code, 0)
        self.assertIn("3 result(s)", output)
        self.assertEqual(len(out.read_text(encoding="utf-8").splitlines()), 4)

    def test_missing_lexicon_file_is_reported(self) -> None:
        code, _ = self.run_cli(
            "--lexicon", str(self.tmp / "nope.tsv"),
            "--pattern1", "TE__", "--pattern2", "__AU", "--pos1", "3", "--pos2", "1",
        )
        self.assertEqual(code, 2)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
