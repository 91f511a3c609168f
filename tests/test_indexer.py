import unittest

from crossfinder.core.models import WordRecord
from crossfinder.engine.indexer import index_by_pair, index_by_position


def make_record(word: str) -> WordRecord:
    return WordRecord(key=word, display=word.lower(), normalized=word, length=len(word))


class IndexByPositionTests(unittest.TestCase):
    def test_buckets_keep_input_order(self) -> None:
        words = [make_record(w) for w in ["SEAU", "BEAU", "SOLE", "PEAU", "SAC"]]
        index = index_by_position(words, 1)
        self.assertEqual([r.normalized for r in index["S"]], ["SEAU", "SOLE", "SAC"])
        self.assertEqual([r.normalized for r in index["B"]], ["BEAU"])
        self.assertEqual(list(index), ["S", "B", "P"])

    def test_short_candidates_are_excluded(self) -> None:
        words = [make_record(w) for w in ["AB", "ABCD", "XYZ"]]
        index = index_by_position(words, 3)
        self.assertEqual({k: [r.normalized for r in v] for k, v in index.items()}, {"C": ["ABCD"], "Z": ["XYZ"]})

    def test_position_must_be_one_based(self) -> None:
        with self.assertRaises(ValueError):
            index_by_position([make_record("AB")], 0)

    def test_empty_input(self) -> None:
        self.assertEqual(index_by_position([], 2), {})


class IndexByPairTests(unittest.TestCase):
    def test_pair_keys(self) -> None:
        words = [make_record(w) for w in ["BAD", "BAT", "HAD", "BID", "AB"]]
        index = index_by_pair(words, 1, 3)
        self.assertEqual([r.normalized for r in index[("B", "D")]], ["BAD", "BID"])
        self.assertEqual([r.normalized for r in index[("H", "D")]], ["HAD"])
        self.assertNotIn(("A", "B"), index)
        self.assertEqual(list(index), [("B", "D"), ("B", "T"), ("H", "D")])

    def test_candidate_must_reach_both_positions(self) -> None:
        index = index_by_pair([make_record("ABC")], 1, 4)
        self.assertEqual(index, {})


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
