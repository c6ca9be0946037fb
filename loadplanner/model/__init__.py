"""
Planning core - truck catalog, legality scoring, deck placement, splitting,
multi-truck assignment, rebalancing and replanning.

This module re-exports the public entry points from their respective modules:
- catalog: static trailer table and lookups
- evaluator: fit, legality and truck ranking
- deck_packer: 2D placement on a trailer deck
- splitter: division of oversized divisible items
- assigner / rebalancer / replan: multi-truck plan construction and edits
- solver: plan_loads, the top-level entry point
- report: text summaries and deck statistics
"""

from __future__ import annotations

from .entities import (
    CargoItem,
    DivisionMode,
    FitResult,
    InvalidItemError,
    LoadingMethod,
    Placement,
    PlacementResult,
    Plan,
    ReplanResult,
    SplitItemGroup,
    TrailerCategory,
    TruckLoad,
    TruckRecommendation,
    TruckType,
    UnknownTruckError,
    validate_item,
    validate_items,
)

from .catalog import (
    TRUCK_CATALOG,
    get_catalog,
    get_categories,
    get_truck_by_id,
    get_trucks_by_category,
    max_cargo_capacity,
)

from .evaluator import (
    can_share_truck,
    evaluate_truck,
    find_best_truck,
    physically_fits,
    rank_trucks,
)

from .deck_packer import DeckPacker, place_items
from .splitter import split_item
from .assigner import LoadAssigner
from .rebalancer import rebalance_loads
from .solver import LoadPlanner, plan_loads
from .replan import replan_load
from .report import deck_stats, loading_instructions, plan_summary

__all__ = [
    # Entities
    "CargoItem",
    "DivisionMode",
    "FitResult",
    "InvalidItemError",
    "LoadingMethod",
    "Placement",
    "PlacementResult",
    "Plan",
    "ReplanResult",
    "SplitItemGroup",
    "TrailerCategory",
    "TruckLoad",
    "TruckRecommendation",
    "TruckType",
    "UnknownTruckError",
    "validate_item",
    "validate_items",
    # Catalog
    "TRUCK_CATALOG",
    "get_catalog",
    "get_categories",
    "get_truck_by_id",
    "get_trucks_by_category",
    "max_cargo_capacity",
    # Evaluator
    "can_share_truck",
    "evaluate_truck",
    "find_best_truck",
    "physically_fits",
    "rank_trucks",
    # Planning
    "DeckPacker",
    "place_items",
    "split_item",
    "LoadAssigner",
    "rebalance_loads",
    "LoadPlanner",
    "plan_loads",
    "replan_load",
    # Reporting
    "deck_stats",
    "loading_instructions",
    "plan_summary",
]
