"""Insight callout ratio between two grade averages."""

from src.engine.numeric import format_one_place
from src.models.zone import Grade, GradeAverages

# Denominators at or below this are treated as missing
MIN_DENOMINATOR = 1e-9


def format_insight_ratio(
    grades: GradeAverages,
    numerator: Grade = Grade.A,
    denominator: Grade = Grade.D,
) -> str | None:
    """Format numerator / denominator grade averages as e.g. "4.7x".

    Returns None when either average is missing or the denominator is zero,
    negative or vanishingly small.
    """
    top = grades.get(numerator)
    bottom = grades.get(denominator)
    if top is None or bottom is None or bottom <= MIN_DENOMINATOR:
        return None
    return f"{format_one_place(top / bottom)}x"
