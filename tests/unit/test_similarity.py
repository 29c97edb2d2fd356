import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from statcard_renderer.similarity import SIMILAR_THRESHOLD, hamming_distance, is_similar


class HammingDistanceTests(unittest.TestCase):
    def test_length_mismatch(self):
        self.assertEqual(hamming_distance("abc", "abcd"), -1)
        self.assertEqual(hamming_distance("", "a"), -1)

    def test_identical_is_zero(self):
        self.assertEqual(hamming_distance("8f3a90", "8f3a90"), 0.0)
        self.assertEqual(hamming_distance("", ""), 0.0)

    def test_all_different_is_hundred(self):
        self.assertEqual(hamming_distance("aaaa", "bbbb"), 100.0)

    def test_partial_and_symmetric(self):
        a, b = "0123456789", "0123456780"
        self.assertAlmostEqual(hamming_distance(a, b), 10.0)
        self.assertEqual(hamming_distance(a, b), hamming_distance(b, a))

    def test_similarity_policy(self):
        a = "0" * 100
        b = "1" * 9 + "0" * 91
        c = "1" * 10 + "0" * 90
        self.assertTrue(is_similar(a, b))
        self.assertFalse(is_similar(a, c))
        self.assertFalse(is_similar(a, a[:-1]))
        self.assertEqual(SIMILAR_THRESHOLD, 9.0)


if __name__ == "__main__":
    unittest.main()
