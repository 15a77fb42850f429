"""Tests for fan chart angle assignment."""

import pytest

from family_charts.graph.collectors import collect_ancestors
from family_charts.graph.fan_layout import calculate_fan_arcs, calculate_fan_layout


def _angles(fam, root_id, depth, **kwargs):
    state = collect_ancestors(root_id, depth, fam.person_map, fam.index)
    return calculate_fan_layout(root_id, state, fam.person_map, **kwargs)


class TestFanLayout:
    """Test radial subdivision of ancestor arcs."""

    def test_parents_split_full_circle(self, three_generations):
        """Father should take the first half and mother the second."""
        angles = _angles(three_generations, "root", 1)
        assert angles["father"] == pytest.approx(90.0)
        assert angles["mother"] == pytest.approx(270.0)
        assert angles["root"] == pytest.approx(180.0)

    def test_grandparents_subdivide(self, three_generations):
        """Grandparents should split their child's arc."""
        angles = _angles(three_generations, "root", 2)
        assert angles["ff"] == pytest.approx(45.0)
        assert angles["fm"] == pytest.approx(135.0)
        assert angles["mf"] == pytest.approx(225.0)
        assert angles["mm"] == pytest.approx(315.0)

    def test_root_spouse_shares_root_angle(self, three_generations):
        """Spouse of the root should sit at the root's angle."""
        angles = _angles(three_generations, "root", 1)
        assert angles["spouse"] == pytest.approx(angles["root"])

    def test_every_node_has_angle(self, three_generations):
        """All collected nodes should receive an angle."""
        fam = three_generations
        state = collect_ancestors("root", 2, fam.person_map, fam.index)
        angles = calculate_fan_layout("root", state, fam.person_map)
        assert set(angles) == set(state.node_ids)

    def test_custom_span(self, three_generations):
        """Half-circle fan should scale the angles."""
        angles = _angles(three_generations, "root", 1, span_degrees=180.0)
        assert angles["father"] == pytest.approx(45.0)
        assert angles["mother"] == pytest.approx(135.0)
        assert angles["root"] == pytest.approx(90.0)

    def test_start_offset(self, three_generations):
        """Start angle should shift the whole fan."""
        angles = _angles(three_generations, "root", 1, span_degrees=180.0, start_degrees=90.0)
        assert angles["father"] == pytest.approx(135.0)
        assert angles["mother"] == pytest.approx(225.0)

    def test_single_unknown_gender_parent(self, family):
        """Lone parent of unknown gender should take the first slot."""
        family.person("kid").person("parent_x").parent("parent_x", "kid")
        angles = _angles(family, "kid", 1)
        assert angles["parent_x"] == pytest.approx(90.0)

    def test_shared_ancestor_single_arc(self, cousin_marriage):
        """Collapsed pedigree should give each person one arc."""
        fam = cousin_marriage
        state = collect_ancestors("baby", 3, fam.person_map, fam.index)
        arcs = calculate_fan_arcs("baby", state, fam.person_map)
        # gpa is reached through cousin_a's line first
        low, high = arcs["gpa"]
        assert 0.0 <= low < high <= 180.0

    def test_arc_matches_generation_ring(self, uneven_lines):
        """Arc width should match the ring of the recorded generation."""
        fam = uneven_lines
        state = collect_ancestors("root", 3, fam.person_map, fam.index)
        arcs = calculate_fan_arcs("root", state, fam.person_map)
        for person_id, (low, high) in arcs.items():
            ring = abs(state.generations[person_id])
            assert high - low == pytest.approx(360.0 / 2 ** ring)

    def test_missing_root(self, three_generations):
        """Unknown root should give no arcs."""
        fam = three_generations
        state = collect_ancestors("root", 1, fam.person_map, fam.index)
        assert calculate_fan_arcs("nobody", state, fam.person_map) == {}
