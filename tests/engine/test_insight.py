"""Tests for the insight callout ratio."""

from src.engine.insight import format_insight_ratio
from src.models.zone import Grade, GradeAverages


class TestInsightRatio:
    def test_a_over_d(self):
        """105000 / 22500 = 4.666..."""
        grades = GradeAverages(A=105000, B=70000, C=40000, D=22500)
        assert format_insight_ratio(grades) == "4.7x"

    def test_canonical_zones(self):
        """99000 / 23800 = 4.1597..."""
        assert format_insight_ratio(GradeAverages(A=99000, D=23800)) == "4.2x"

    def test_exactly_one_decimal(self):
        assert format_insight_ratio(GradeAverages(A=300, D=100)) == "3.0x"
        assert format_insight_ratio(GradeAverages(A=1, D=3)) == "0.3x"

    def test_half_rounds_up(self):
        assert format_insight_ratio(GradeAverages(A=1.25, D=1)) == "1.3x"

    def test_missing_a(self):
        assert format_insight_ratio(GradeAverages(A=None, D=10)) is None

    def test_missing_d(self):
        assert format_insight_ratio(GradeAverages(A=10, D=None)) is None

    def test_zero_denominator(self):
        assert format_insight_ratio(GradeAverages(A=10, D=0)) is None

    def test_negative_and_tiny_denominators(self):
        assert format_insight_ratio(GradeAverages(A=10, D=-5)) is None
        assert format_insight_ratio(GradeAverages(A=10, D=1e-12)) is None

    def test_ignores_b_and_c(self):
        assert format_insight_ratio(GradeAverages(A=4, B=None, C=None, D=2)) == "2.0x"

    def test_reversed_orientation(self):
        """Health-style callout: D-zone burden relative to A-zone."""
        grades = GradeAverages(A=0.2, D=0.5)
        assert format_insight_ratio(grades, numerator=Grade.D, denominator=Grade.A) == "2.5x"
