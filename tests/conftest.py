"""
Shared fixtures for planner tests: item factory, small custom trailers and a
plan validity check used across modules.
"""
import pytest

from loadplanner.model.catalog import get_truck_by_id
from loadplanner.model.entities import (
    EPS,
    CargoItem,
    LoadingMethod,
    Plan,
    TrailerCategory,
    TruckType,
)
from loadplanner.model.geometry import find_overlaps, within_deck


def make_item(item_id="item", length=10.0, width=4.0, height=4.0, weight=10000.0, **kwargs):
    kwargs.setdefault("description", f"Cargo {item_id}")
    return CargoItem(id=item_id, length=length, width=width, height=height, weight=weight, **kwargs)


def make_truck(truck_id="custom", deck_length=24.0, deck_width=8.5, deck_height=5.0, max_cargo_weight=25000.0, **kwargs):
    kwargs.setdefault("name", f"Custom {truck_id}")
    kwargs.setdefault("category", TrailerCategory.FLATBED)
    kwargs.setdefault("tare_weight", 15000.0)
    kwargs.setdefault("loading_method", LoadingMethod.CRANE)
    return TruckType(
        id=truck_id,
        deck_length=deck_length,
        deck_width=deck_width,
        deck_height=deck_height,
        max_cargo_weight=max_cargo_weight,
        **kwargs,
    )


def assert_plan_valid(plan: Plan):
    """Capacity, overlap and deck-bound checks every plan must pass."""
    for load in plan.loads:
        truck = load.truck
        assert load.items, f"{load.id} is empty"
        assert load.weight <= truck.max_cargo_weight + EPS
        assert len(load.placements) == len(load.items)
        assert {p.item_id for p in load.placements} == {item.id for item in load.items}
        assert find_overlaps(load.placements) == []
        for placement in load.placements:
            assert within_deck(placement, truck.deck_length, truck.deck_width)
    assert [load.id for load in plan.loads] == [f"load-{n}" for n in range(1, len(plan.loads) + 1)]


@pytest.fixture
def item_factory():
    return make_item


@pytest.fixture
def truck_factory():
    return make_truck


@pytest.fixture
def flatbed():
    return get_truck_by_id("flatbed-48")


@pytest.fixture
def small_truck():
    """24' deck, 25,000 lb capacity."""
    return make_truck()


@pytest.fixture
def wide_catalog():
    """A single extendable trailer with a 10' deck for over-width cargo."""
    return [
        make_truck(
            "extendable",
            deck_length=48.0,
            deck_width=10.0,
            deck_height=3.5,
            max_cargo_weight=40000.0,
            tare_weight=18000.0,
            category=TrailerCategory.STEP_DECK,
        )
    ]


@pytest.fixture
def capped_catalog():
    """Largest capacity 40,000 lbs."""
    return [
        make_truck("light", deck_length=48.0, max_cargo_weight=30000.0),
        make_truck("heavy", deck_length=48.0, max_cargo_weight=40000.0),
    ]
