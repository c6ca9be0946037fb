"""Tests for 2D deck placement."""
import math

import numpy as np
import pytest

from conftest import make_item, make_truck
from loadplanner.config import PlannerConfig
from loadplanner.model.deck_packer import DeckPacker, place_items
from loadplanner.model.entities import Placement, rects_overlap
from loadplanner.model.geometry import candidate_axis, find_overlaps, within_deck


class TestPlacement:
    def test_first_item_goes_front_left(self, flatbed):
        result = place_items([make_item("a", length=20, width=4)], flatbed)
        assert result.success
        placement = result.placements[0]
        assert (placement.x, placement.z) == (0.0, 0.0)
        assert not placement.rotated

    def test_many_items_without_overlap(self, flatbed):
        items = [make_item(f"i{n}", length=10, width=4, weight=1000) for n in range(8)]
        result = place_items(items, flatbed)
        assert result.success
        assert len(result.placements) == 8
        assert find_overlaps(result.placements) == []
        assert all(within_deck(p, flatbed.deck_length, flatbed.deck_width) for p in result.placements)

    def test_rotation_when_native_too_wide(self, flatbed):
        result = place_items([make_item("a", length=8, width=20)], flatbed)
        assert result.success
        placement = result.placements[0]
        assert placement.rotated
        assert (placement.length, placement.width) == (20, 8)

    def test_flush_against_neighbour_off_grid(self, flatbed):
        items = [make_item("a", length=20, width=4.3), make_item("b", length=20, width=4.2)]
        result = place_items(items, flatbed)
        assert result.success
        by_id = {p.item_id: p for p in result.placements}
        assert by_id["a"].z == pytest.approx(0.0)
        assert by_id["b"].x == pytest.approx(0.0)
        assert by_id["b"].z == pytest.approx(4.3)

    def test_full_deck_reports_unplaced(self):
        truck = make_truck(deck_length=10.0)
        result = place_items([make_item("a", length=10, width=8), make_item("b", length=10, width=8)], truck)
        assert not result.success
        assert [item.id for item in result.unplaced] == ["b"]
        assert len(result.placements) == 1

    def test_largest_footprint_placed_first(self, flatbed):
        small = make_item("small", length=5, width=4)
        large = make_item("large", length=30, width=8)
        result = place_items([small, large], flatbed)
        assert [p.item_id for p in result.placements] == ["large", "small"]

    def test_deterministic(self, flatbed):
        items = [make_item(f"i{n}", length=6 + n, width=3 + n % 3) for n in range(6)]
        assert place_items(items, flatbed).placements == place_items(items, flatbed).placements


class TestSearchBounds:
    def test_grid_step_coarsens_on_large_decks(self):
        config = PlannerConfig(max_grid_candidates=100)
        truck = make_truck(deck_length=1000.0, deck_width=500.0)
        step = DeckPacker(truck, config).grid_step(1.0, 1.0)
        assert step > config.grid_step
        cells = (math.floor(999 / step) + 1) * (math.floor(499 / step) + 1)
        assert cells <= 100

    def test_grid_step_unchanged_on_standard_deck(self, flatbed):
        assert DeckPacker(flatbed).grid_step(10.0, 4.0) == pytest.approx(0.5)

    def test_candidate_axis_includes_limit_and_extreme_points(self):
        coords = candidate_axis(8.5, 4.2, 0.5, [4.3, 20.0, -1.0])
        assert coords[0] == 0.0
        assert np.any(np.isclose(coords, 4.3))
        assert coords[-1] == pytest.approx(4.3)
        assert np.all(np.diff(coords) > 0)

    def test_candidate_axis_empty_when_item_too_long(self):
        assert candidate_axis(8.5, 9.0, 0.5, []).size == 0


class TestOverlap:
    def test_touching_edges_do_not_overlap(self):
        first = Placement("a", 0.0, 0.0, False, 10.0, 4.0)
        second = Placement("b", 10.0, 0.0, False, 10.0, 4.0)
        assert not first.overlaps(second)

    def test_overlap_detected(self):
        assert rects_overlap((0, 0, 10, 4), (5, 2, 10, 4))
