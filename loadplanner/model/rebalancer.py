from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from ..config import DEFAULT_CONFIG, PlannerConfig
from .deck_packer import place_items
from .entities import EPS, CargoItem, Placement, TruckLoad, clone_load, renumber_loads
from .evaluator import dimension_warnings, evaluate_truck, physically_fits, virtual_item

logger = logging.getLogger(__name__)


def refresh_load(load: TruckLoad, placements: List[Placement], config: PlannerConfig = DEFAULT_CONFIG) -> None:
    """Re-derive a load's aggregates and legality after its item list changed; the truck stays fixed."""
    load.placements = placements
    load.refresh_aggregates()
    if not load.items:
        load.permits_required = []
        load.warnings = []
        load.is_legal = True
        return
    fit = evaluate_truck(virtual_item(load.items), load.truck)
    load.score = fit.score
    load.is_legal = fit.is_legal
    load.permits_required = list(fit.permits)
    load.warnings = dimension_warnings(load.width, load.height, load.truck, config)


def _lightest_item(load: TruckLoad) -> CargoItem:
    # first of the lightest on ties
    return min(load.items, key=lambda item: item.effective_weight)


def _try_move(hot: TruckLoad, cold: TruckLoad, config: PlannerConfig) -> Optional[CargoItem]:
    item = _lightest_item(hot)
    if cold.weight + item.effective_weight > config.rebalance_cap * cold.truck.max_cargo_weight + EPS:
        return None
    if not physically_fits(item, cold.truck):
        return None

    cold_items = cold.items + [item]
    cold_layout = place_items(cold_items, cold.truck, config)
    if not cold_layout.success:
        return None
    hot_items = [existing for existing in hot.items if existing is not item]
    hot_layout = place_items(hot_items, hot.truck, config)
    if not hot_layout.success:
        return None

    hot.items = hot_items
    cold.items = cold_items
    refresh_load(hot, hot_layout.placements, config)
    refresh_load(cold, cold_layout.placements, config)
    return item


def rebalance_loads(loads: Sequence[TruckLoad], config: PlannerConfig = DEFAULT_CONFIG) -> List[TruckLoad]:
    """Shift the lightest items from loads above the hot threshold onto loads below the cold one.

    Works on copies and returns a new renumbered list. Moves never raise the truck
    count, never push a receiving load past the rebalance cap, and only commit when
    both decks can still be laid out without overlap.
    """
    work = [clone_load(load) for load in loads]
    order = sorted(range(len(work)), key=lambda index: (-work[index].utilization, index))

    for hot_index in order:
        hot = work[hot_index]
        if hot.utilization <= config.rebalance_hot:
            continue

        # coldest receivers first
        receivers = sorted(
            (index for index in range(len(work)) if index != hot_index and work[index].utilization < config.rebalance_cold),
            key=lambda index: (work[index].utilization, index),
        )
        for cold_index in receivers:
            if not hot.items or hot.utilization <= config.rebalance_hot:
                break
            cold = work[cold_index]
            if cold.utilization >= config.rebalance_cold:
                continue
            moved = _try_move(hot, cold, config)
            if moved is not None:
                logger.info(f"Rebalanced item {moved.id} from {hot.id} to {cold.id}")

    return renumber_loads([load for load in work if load.items])
