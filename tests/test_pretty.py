import io
import unittest

from crossfinder.core.constants import Orientation, SolveStatus
from crossfinder.core.models import SlotConstraint, SolveResult, WordRecord
from crossfinder.engine.preview import build_preview
from crossfinder.utils.pretty import format_preview, format_solutions, format_stats, print_solve_report


def make_record(word: str) -> WordRecord:
    return WordRecord(key=word, display=word.lower(), normalized=word, length=len(word))


class PrettyTests(unittest.TestCase):
    def test_stats_line(self) -> None:
        result = SolveResult(
            status=SolveStatus.SOLVED,
            solutions=[(make_record("AB"), make_record("ABC"))],
            candidate_counts=(3, 3),
            max_solutions=1,
            truncated=True,
        )
        self.assertEqual(format_stats(result), "candidates: 3 / 3 | solutions: 1 (bound reached)")

    def test_stats_line_for_complete_search(self) -> None:
        result = SolveResult(
            status=SolveStatus.SOLVED,
            solutions=[(make_record("AB"), make_record("ABC"))],
            candidate_counts=(1, 1),
            max_solutions=1,
        )
        self.assertEqual(format_stats(result), "candidates: 1 / 1 | solutions: 1")

    def test_solutions_are_aligned(self) -> None:
        result = SolveResult(
            status=SolveStatus.SOLVED,
            solutions=[(make_record("TESOR"), make_record("SEAU")), (make_record("AB"), make_record("BEAU"))],
            candidate_counts=(2, 2),
        )
        self.assertEqual(format_solutions(result), "tesor  seau\nab     beau")
        self.assertEqual(format_solutions(result, limit=1), "tesor  seau")

    def test_preview_uses_absolute_coordinates(self) -> None:
        slots = [
            SlotConstraint("TE__", Orientation.HORIZONTAL, (3,)),
            SlotConstraint("__AU", Orientation.VERTICAL, (1,)),
        ]
        lines = format_preview(build_preview(slots)).splitlines()
        self.assertEqual(lines[0], "    10 11 12 13")
        self.assertEqual(lines[1], "    -----------")
        self.assertEqual(lines[2], "6 |  T  E  _  _")
        self.assertEqual(lines[5], "9 |  ·  ·  U  ·")

    def test_report_for_unready_request(self) -> None:
        stream = io.StringIO()
        result = SolveResult.empty(SolveStatus.ORIENTATION_CONFLICT, 2, "Pick different orientations.")
        print_solve_report(result, None, stream=stream)
        self.assertEqual(stream.getvalue(), "Not searched: Pick different orientations.\n")

    def test_report_includes_preview(self) -> None:
        slots = [
            SlotConstraint("TE__", Orientation.HORIZONTAL, (3,)),
            SlotConstraint("__AU", Orientation.VERTICAL, (1,)),
        ]
        stream = io.StringIO()
        result = SolveResult(status=SolveStatus.SOLVED, candidate_counts=(0, 0))
        print_solve_report(result, build_preview(slots), stream=stream)
        output = stream.getvalue()
        self.assertIn("--- Preview ---", output)
        self.assertIn("candidates: 0 / 0 | solutions: 0", output)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
