import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from statcard_renderer.deltas import (
    ARROWS,
    COUNTRY_RANK_DELTA,
    GLOBAL_RANK_DELTA,
    LEVEL_DELTA,
    SIGNS,
    SS_DELTA,
    DeltaFormatter,
    Direction,
    direction,
)
from statcard_renderer.formatting import abbreviate, format_count
from statcard_renderer.models import Polarity, StatSnapshot, polarity_of
from statcard_renderer.themes import Palette


class PolarityTests(unittest.TestCase):
    def test_rank_fields_are_lower_is_better(self):
        self.assertIs(polarity_of("pp_rank"), Polarity.LOWER_IS_BETTER)
        self.assertIs(polarity_of("pp_country_rank"), Polarity.LOWER_IS_BETTER)

    def test_score_fields_are_higher_is_better(self):
        for name in ("pp", "ranked_score", "total_hits", "play_count", "level", "accuracy", "count_a"):
            self.assertIs(polarity_of(name), Polarity.HIGHER_IS_BETTER, name)

    def test_unknown_field(self):
        with self.assertRaises(KeyError):
            polarity_of("nope")


class DeltaFormatterTests(unittest.TestCase):
    def setUp(self):
        self.formatter = DeltaFormatter(Palette(arrow_up="#00FF00", arrow_down="#FF0000"))

    def test_lower_is_better_improvement(self):
        out = self.formatter.format(80 - 100, Polarity.LOWER_IS_BETTER, ARROWS, format_count)
        self.assertEqual(out.text, "↑20")
        self.assertIs(out.direction, Direction.UP)
        self.assertEqual(out.color, "#00FF00")

    def test_higher_is_better_improvement(self):
        out = self.formatter.format(100 - 80, Polarity.HIGHER_IS_BETTER, ARROWS, format_count)
        self.assertEqual(out.text, "↑20")
        self.assertIs(out.direction, Direction.UP)

    def test_regressions(self):
        worse_rank = self.formatter.format(120 - 100, Polarity.LOWER_IS_BETTER, ARROWS, format_count)
        self.assertEqual(worse_rank.text, "↓20")
        self.assertEqual(worse_rank.color, "#FF0000")
        lower_score = self.formatter.format(-4500, Polarity.HIGHER_IS_BETTER, SIGNS, abbreviate)
        self.assertEqual(lower_score.text, "-4.50K")

    def test_zero_uses_increase_glyph(self):
        for polarity in Polarity:
            out = self.formatter.format(0, polarity, SIGNS, format_count)
            self.assertEqual(out.text, "+0")
            self.assertIs(out.direction, Direction.UP)
        self.assertIs(direction(0.0, Polarity.LOWER_IS_BETTER), Direction.UP)

    def test_default_magnitude_is_round2(self):
        out = self.formatter.format(-0.125, Polarity.HIGHER_IS_BETTER)
        self.assertEqual(out.text, "↓0.12")


class DeltaFieldTests(unittest.TestCase):
    def test_grouped_tiers_sum_both_sides(self):
        current = StatSnapshot(count_ss=10, count_ssh=5)
        baseline = StatSnapshot(count_ss=8, count_ssh=4)
        out = SS_DELTA.render(DeltaFormatter(), current, baseline)
        self.assertEqual(out.text, "(↑3)")
        self.assertFalse(SS_DELTA.colored)

    def test_rank_fields_take_rank_polarity(self):
        self.assertIs(GLOBAL_RANK_DELTA.polarity, Polarity.LOWER_IS_BETTER)
        self.assertIs(COUNTRY_RANK_DELTA.polarity, Polarity.LOWER_IS_BETTER)
        out = GLOBAL_RANK_DELTA.render(DeltaFormatter(), StatSnapshot(pp_rank=1500), StatSnapshot(pp_rank=1600))
        self.assertEqual(out.text, "(↑100)")

    def test_level_delta_uses_signs(self):
        out = LEVEL_DELTA.render(DeltaFormatter(), StatSnapshot(level=99.5), StatSnapshot(level=100.25))
        self.assertEqual(out.text, "-0.75")
        self.assertIs(out.direction, Direction.DOWN)


if __name__ == "__main__":
    unittest.main()
