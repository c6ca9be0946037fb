"""
Static trailer catalog.

Deck heights drive legality: total height = cargo height + deck height, which
must stay at or under 13.5 ft to run without an oversize permit.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from .entities import LoadingMethod, TrailerCategory, TruckType, UnknownTruckError

TRUCK_CATALOG: Tuple[TruckType, ...] = (
    TruckType(
        id="flatbed-48",
        name="Flatbed 48'",
        category=TrailerCategory.FLATBED,
        deck_length=48.0,
        deck_width=8.5,
        deck_height=5.0,
        max_cargo_weight=48000.0,
        tare_weight=15000.0,
        loading_method=LoadingMethod.CRANE,
        description="Standard 48-foot flatbed; most common choice for legal-dimension freight.",
    ),
    TruckType(
        id="flatbed-53",
        name="Flatbed 53'",
        category=TrailerCategory.FLATBED,
        deck_length=53.0,
        deck_width=8.5,
        deck_height=5.0,
        max_cargo_weight=45000.0,
        tare_weight=16000.0,
        loading_method=LoadingMethod.CRANE,
        description="Extended flatbed for longer cargo with slightly reduced capacity.",
    ),
    TruckType(
        id="step-deck",
        name="Step Deck",
        category=TrailerCategory.STEP_DECK,
        deck_length=48.0,
        deck_width=8.5,
        deck_height=3.5,
        max_cargo_weight=48000.0,
        tare_weight=16000.0,
        loading_method=LoadingMethod.DRIVE_ON,
        description="Two-level trailer; the lower main deck allows taller cargo.",
    ),
    TruckType(
        id="rgn",
        name="RGN (Removable Gooseneck)",
        category=TrailerCategory.RGN,
        deck_length=48.0,
        deck_width=8.5,
        deck_height=2.0,
        max_cargo_weight=42000.0,
        tare_weight=20000.0,
        loading_method=LoadingMethod.DRIVE_ON,
        description="Low deck with detachable gooseneck for front-loading equipment.",
    ),
    TruckType(
        id="rgn-3axle",
        name="RGN 3-Axle",
        category=TrailerCategory.RGN,
        deck_length=48.0,
        deck_width=8.5,
        deck_height=2.0,
        max_cargo_weight=52000.0,
        tare_weight=22000.0,
        loading_method=LoadingMethod.DRIVE_ON,
        description="Heavy-duty RGN with an extra axle.",
    ),
    TruckType(
        id="lowboy",
        name="Lowboy",
        category=TrailerCategory.LOWBOY,
        deck_length=48.0,
        deck_width=8.5,
        deck_height=1.5,
        max_cargo_weight=40000.0,
        tare_weight=20000.0,
        loading_method=LoadingMethod.CRANE,
        description="Lowest deck available for the tallest equipment.",
    ),
    TruckType(
        id="lowboy-3axle",
        name="Lowboy 3-Axle",
        category=TrailerCategory.LOWBOY,
        deck_length=48.0,
        deck_width=8.5,
        deck_height=1.5,
        max_cargo_weight=55000.0,
        tare_weight=25000.0,
        loading_method=LoadingMethod.CRANE,
        description="Heavy-duty lowboy for the heaviest tall loads.",
    ),
    TruckType(
        id="double-drop",
        name="Double Drop",
        category=TrailerCategory.DOUBLE_DROP,
        deck_length=48.0,
        deck_width=8.5,
        deck_height=2.0,
        max_cargo_weight=45000.0,
        tare_weight=18000.0,
        loading_method=LoadingMethod.CRANE,
        description="Low center well for tall, long machinery.",
    ),
    TruckType(
        id="landoll",
        name="Landoll (Tilt Bed)",
        category=TrailerCategory.LANDOLL,
        deck_length=48.0,
        deck_width=8.5,
        deck_height=2.5,
        max_cargo_weight=50000.0,
        tare_weight=18000.0,
        loading_method=LoadingMethod.TILT,
        description="Self-loading tilt bed.",
    ),
    TruckType(
        id="conestoga",
        name="Conestoga",
        category=TrailerCategory.CONESTOGA,
        deck_length=48.0,
        deck_width=8.5,
        deck_height=5.0,
        max_cargo_weight=44000.0,
        tare_weight=17000.0,
        loading_method=LoadingMethod.FORKLIFT,
        description="Flatbed with a retractable tarp system.",
    ),
)


def get_catalog() -> Tuple[TruckType, ...]:
    return TRUCK_CATALOG


def find_truck(truck_id: str, catalog: Optional[Sequence[TruckType]] = None) -> Optional[TruckType]:
    for truck in catalog if catalog is not None else TRUCK_CATALOG:
        if truck.id == truck_id:
            return truck
    return None


def get_truck_by_id(truck_id: str, catalog: Optional[Sequence[TruckType]] = None) -> TruckType:
    truck = find_truck(truck_id, catalog)
    if truck is None:
        raise UnknownTruckError(truck_id)
    return truck


def get_trucks_by_category(
    category: TrailerCategory, catalog: Optional[Sequence[TruckType]] = None
) -> List[TruckType]:
    category = TrailerCategory(category)
    return [truck for truck in (catalog if catalog is not None else TRUCK_CATALOG) if truck.category == category]


def get_categories(catalog: Optional[Sequence[TruckType]] = None) -> List[TrailerCategory]:
    categories: List[TrailerCategory] = []
    for truck in catalog if catalog is not None else TRUCK_CATALOG:
        if truck.category not in categories:
            categories.append(truck.category)
    return categories


def max_cargo_capacity(catalog: Optional[Sequence[TruckType]] = None) -> float:
    return max((truck.max_cargo_weight for truck in (catalog if catalog is not None else TRUCK_CATALOG)), default=0.0)
