"""Tests for rebalancing and truck-type replanning."""
import pytest

from conftest import assert_plan_valid, make_item, make_truck
from loadplanner.model.deck_packer import place_items
from loadplanner.model.entities import Plan, TruckLoad
from loadplanner.model.rebalancer import rebalance_loads
from loadplanner.model.replan import replan_load
from loadplanner.model.solver import plan_loads


def make_load(load_id, items, truck):
    layout = place_items(items, truck)
    assert layout.success
    load = TruckLoad(id=load_id, items=list(items), truck=truck, placements=layout.placements)
    load.refresh_aggregates()
    return load


class TestRebalancer:
    def test_moves_lightest_item_from_hot_to_cold(self):
        truck = make_truck(max_cargo_weight=10000.0)
        hot = make_load("load-1", [make_item("big", weight=6000), make_item("small", weight=3500)], truck)
        cold = make_load("load-2", [make_item("tiny", weight=2000)], truck)

        loads = rebalance_loads([hot, cold])

        assert len(loads) == 2
        by_items = {tuple(sorted(item.id for item in load.items)): load for load in loads}
        assert ("big",) in by_items
        assert ("small", "tiny") in by_items
        assert by_items[("small", "tiny")].weight == pytest.approx(5500)
        assert_plan_valid(Plan(loads=loads))

    def test_inputs_not_mutated(self):
        truck = make_truck(max_cargo_weight=10000.0)
        hot = make_load("load-1", [make_item("big", weight=6000), make_item("small", weight=3500)], truck)
        cold = make_load("load-2", [make_item("tiny", weight=2000)], truck)
        rebalance_loads([hot, cold])
        assert [item.id for item in hot.items] == ["big", "small"]
        assert hot.weight == pytest.approx(9500)
        assert [item.id for item in cold.items] == ["tiny"]

    def test_emptied_load_is_dropped(self):
        hot = make_load("load-1", [make_item("solo", weight=9500)], make_truck(max_cargo_weight=10000.0))
        cold = make_load("load-2", [make_item("tiny", weight=1000)], make_truck("big", max_cargo_weight=20000.0))
        loads = rebalance_loads([hot, cold])
        assert len(loads) == 1
        assert loads[0].id == "load-1"
        assert sorted(item.id for item in loads[0].items) == ["solo", "tiny"]

    def test_respects_receiving_cap(self):
        truck = make_truck(max_cargo_weight=10000.0)
        hot = make_load("load-1", [make_item("a", weight=5000), make_item("b", weight=4600)], truck)
        cold = make_load("load-2", [make_item("c", weight=7500)], truck)
        loads = rebalance_loads([hot, cold])
        assert [load.weight for load in loads] == pytest.approx([9600, 7500])

    def test_never_adds_trucks(self):
        items = [make_item(f"coil-{n}", length=6, width=6, height=5, weight=w) for n, w in enumerate([30000, 14000, 9000, 4000, 2000])]
        plan = plan_loads(items, rebalance=False)
        loads = rebalance_loads(plan.loads)
        assert len(loads) <= len(plan.loads)
        assert sum(load.weight for load in loads) == pytest.approx(sum(load.weight for load in plan.loads))
        assert_plan_valid(Plan(loads=loads))


@pytest.fixture
def four_crate_plan():
    items = [make_item(f"crate-{n}", length=10, width=4, height=4, weight=10000) for n in range(4)]
    plan = plan_loads(items)
    assert plan.total_trucks == 1
    return plan


class TestReplan:
    def test_smaller_truck_splits_load(self, four_crate_plan, small_truck):
        result = replan_load(four_crate_plan, 0, small_truck)
        assert result.split_occurred
        assert result.new_load_count == 2
        assert result.plan.total_trucks == 2
        assert all(load.truck.id == small_truck.id for load in result.plan.loads)
        assert all(load.weight <= small_truck.max_cargo_weight for load in result.plan.loads)
        assert result.plan.total_weight == pytest.approx(40000)
        assert any("needs 2" in w for w in result.plan.warnings)
        assert_plan_valid(result.plan)

    def test_same_capacity_no_split(self, four_crate_plan, flatbed):
        result = replan_load(four_crate_plan, 0, flatbed)
        assert not result.split_occurred
        assert result.new_load_count == 1
        assert result.unfit_items == []

    def test_unfit_items_stay_on_original_truck(self, four_crate_plan, truck_factory):
        short = truck_factory("short", deck_length=8.0)
        original = four_crate_plan.loads[0]
        result = replan_load(four_crate_plan, 0, short)
        assert len(result.unfit_items) == 4
        assert result.new_load_count == 0
        assert not result.split_occurred
        load = result.plan.loads[0]
        assert load.truck.id == original.truck.id
        assert load.placements == original.placements
        assert any("does not fit" in w for w in result.plan.warnings)

    def test_other_loads_unchanged(self, small_truck):
        items = [make_item("a", length=40, width=5, weight=12000), make_item("b", length=40, width=5, weight=11000)]
        plan = plan_loads(items)
        assert plan.total_trucks == 2
        result = replan_load(plan, 1, make_truck("long", deck_length=48.0, max_cargo_weight=25000.0))
        assert result.plan.loads[0] == plan.loads[0]
        assert result.plan.loads[1].truck.id == "long"

    def test_summary_warnings_refreshed(self, four_crate_plan, small_truck):
        result = replan_load(four_crate_plan, 0, small_truck)
        assert "Load requires 2 trucks to transport all items" in result.plan.warnings
        assert result.plan.warnings.count("Load requires 2 trucks to transport all items") == 1

    def test_bad_index(self, four_crate_plan, small_truck):
        with pytest.raises(IndexError):
            replan_load(four_crate_plan, 3, small_truck)
        with pytest.raises(IndexError):
            replan_load(four_crate_plan, -1, small_truck)
