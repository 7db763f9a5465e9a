"""Loaders for the HOLC-tract crosswalk and zone grade files."""

import json
import logging
from pathlib import Path
from typing import Any

from src.models.zone import CrosswalkRecord

logger = logging.getLogger(__name__)


def parse_crosswalk_rows(rows: list[dict[str, Any]]) -> list[CrosswalkRecord]:
    """Convert raw {area_id, GEOID, pct_tract} rows to CrosswalkRecords.

    Values pass through as-is; build_crosswalk_index decides what is usable.
    """
    return [
        CrosswalkRecord(
            zone_id=str(row.get("area_id", "")),
            sub_area_id=row.get("GEOID") or "",
            overlap_weight=row.get("pct_tract"),
        )
        for row in rows
    ]


def parse_zone_grades(rows: list[dict[str, Any]]) -> dict[str, str | None]:
    return {str(row["area_id"]): row.get("grade") for row in rows if "area_id" in row}


def load_crosswalk(path: str | Path) -> list[CrosswalkRecord]:
    with open(path, encoding="utf-8") as f:
        rows = json.load(f)
    records = parse_crosswalk_rows(rows)
    logger.info("Loaded %d crosswalk rows from %s", len(records), path)
    return records


def load_zone_grades(path: str | Path) -> dict[str, str | None]:
    with open(path, encoding="utf-8") as f:
        rows = json.load(f)
    grades = parse_zone_grades(rows)
    logger.info("Loaded %d zone grades from %s", len(grades), path)
    return grades
