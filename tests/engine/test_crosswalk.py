"""Tests for the zone -> sub-area crosswalk index."""

from src.engine.crosswalk import build_crosswalk_index
from src.models.zone import CrosswalkRecord


class TestBuildCrosswalkIndex:
    def test_groups_by_zone_with_weights(self, canonical_index):
        assert len(canonical_index) == 2
        assert canonical_index.sub_areas("6284") == [
            ("55079035100", 0.75),
            ("55079035200", 0.15),
            ("55079060200", 0.10),
        ]
        assert canonical_index.sub_areas("6300") == [
            ("55079010100", 0.60),
            ("55079010200", 0.40),
        ]

    def test_zone_order_is_first_occurrence(self):
        index = build_crosswalk_index([
            CrosswalkRecord("B", "t1", 0.5),
            CrosswalkRecord("A", "t2", 0.5),
            CrosswalkRecord("B", "t3", 0.5),
        ])
        assert index.zone_ids == ["B", "A"]
        assert index.sub_areas("B") == [("t1", 0.5), ("t3", 0.5)]

    def test_duplicate_pairs_are_both_kept(self):
        """A tract split across two fragments of one zone contributes twice."""
        index = build_crosswalk_index([
            CrosswalkRecord("Z", "t1", 0.2),
            CrosswalkRecord("Z", "t1", 0.3),
        ])
        assert index.sub_areas("Z") == [("t1", 0.2), ("t1", 0.3)]

    def test_malformed_records_are_dropped(self):
        index = build_crosswalk_index([
            CrosswalkRecord("Z", "", 0.5),
            CrosswalkRecord("Z", None, 0.5),  # type: ignore[arg-type]
            CrosswalkRecord("Z", "t1", "abc"),  # type: ignore[arg-type]
            CrosswalkRecord("Z", "t2", -0.1),
            CrosswalkRecord("Z", "t3", 0.4),
        ])
        assert index.sub_areas("Z") == [("t3", 0.4)]

    def test_zone_with_only_malformed_records_is_absent(self):
        index = build_crosswalk_index([CrosswalkRecord("Z", "", 1.0)])
        assert "Z" not in index
        assert len(index) == 0

    def test_weights_need_not_sum_to_one(self):
        index = build_crosswalk_index([
            CrosswalkRecord("Z", "t1", 0.7),
            CrosswalkRecord("Z", "t2", 0.7),
        ])
        assert sum(w for _, w in index.sub_areas("Z")) == 1.4

    def test_unknown_zone_returns_empty_list(self, canonical_index):
        assert canonical_index.sub_areas("nope") == []
