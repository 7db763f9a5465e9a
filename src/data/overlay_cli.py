"""CLI for inspecting overlay statistics.

Usage:
    python -m src.data.overlay_cli income --zone 6284
    python -m src.data.overlay_cli health
    python -m src.data.overlay_cli race --crosswalk data/census-holc-crosswalk.json --zones data/holc-zones.json
"""

import argparse
import asyncio
import logging

from src.config import settings
from src.data.resolver import OverlayResolver
from src.models.overlay import Dataset, OverlayResult, ZoneOverlaySummary


def _fmt(value: float | None, unit: str) -> str:
    if value is None:
        return "N/A"
    if unit == "$":
        return f"${value:,.0f}"
    if unit == "%":
        return f"{value:.1f}%"
    return f"{value:.3f}"


def print_summary(summary: ZoneOverlaySummary, unit: str) -> None:
    grade = summary.grade.value if summary.grade else "ungraded"
    print(f"\n{'=' * 60}")
    print(f"  Zone {summary.zone_id} ({grade}): {summary.dataset.value}")
    print(f"{'=' * 60}")
    print(f"  Weighted value:   {_fmt(summary.weighted_value, unit)}")
    pct = f"{summary.percentile_rank}th" if summary.percentile_rank is not None else "N/A"
    print(f"  Percentile:       {pct}")
    print(f"  Color:            {summary.color.hex}")
    print(f"  Tracts used:      {summary.contributing_units} (weight {summary.total_weight:.2f})")
    print(f"  Years since HOLC: {summary.years_since_holc}")
    for m in summary.measures:
        print(f"    {m.name:>20}: {_fmt(m.value, m.unit)}")
    if summary.measure_grade_averages:
        print("  By grade (A / B / C / D):")
        for name, averages in summary.measure_grade_averages.items():
            cells = " / ".join(_fmt(v, "%") for v in averages.as_dict().values())
            print(f"    {name:>20}: {cells}")
    print()


def print_grades(result: OverlayResult) -> None:
    unit = result.definition.unit
    print(f"\n{'=' * 60}")
    print(f"  {result.definition.label} by HOLC grade")
    print(f"{'=' * 60}")
    for grade, avg in result.grade_averages.as_dict().items():
        print(f"  {grade}: {_fmt(avg, unit):>12}")
    d = result.definition
    ratio = result.insight_ratio or "N/A"
    print(f"\n  {d.ratio_numerator.value}/{d.ratio_denominator.value} ratio: {ratio}")
    valued = sum(1 for z in result.zones if z.weighted_value is not None)
    print(f"  Zones with data:  {valued}/{len(result.zones)}")
    print()


async def main() -> None:
    parser = argparse.ArgumentParser(description="HOLC overlay statistics CLI")
    parser.add_argument("dataset", choices=[d.value for d in Dataset], help="Overlay dataset")
    parser.add_argument("--zone", help="Zone (area_id) to summarize")
    parser.add_argument("--crosswalk", default=settings.crosswalk_path, help="Crosswalk JSON path")
    parser.add_argument("--zones", default=settings.zones_path, help="Zone grades JSON path")
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level")

    args = parser.parse_args()
    logging.basicConfig(level=args.log_level.upper())

    dataset = Dataset(args.dataset)
    resolver = OverlayResolver.from_files(args.crosswalk, args.zones)

    result = await resolver.get_overlay(dataset)
    print_grades(result)

    if args.zone:
        summary = await resolver.get_zone_summary(dataset, args.zone)
        if summary is None:
            parser.error(f"zone {args.zone} is not in the crosswalk")
        print_summary(summary, result.definition.unit)


if __name__ == "__main__":
    asyncio.run(main())
