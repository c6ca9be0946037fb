from __future__ import annotations

import logging
from typing import List

from ..config import DEFAULT_CONFIG, PlannerConfig
from .deck_packer import place_items
from .entities import EPS, CargoItem, Plan, ReplanResult, TruckLoad, TruckType, clone_load
from .evaluator import physically_fits
from .rebalancer import refresh_load
from .solver import build_plan, item_warnings

logger = logging.getLogger(__name__)


def _first_fit_decreasing(items: List[CargoItem], truck: TruckType, config: PlannerConfig) -> List[TruckLoad]:
    loads: List[TruckLoad] = []
    ordered = [item for _, item in sorted(enumerate(items), key=lambda pair: (-pair[1].effective_weight, pair[0]))]
    for item in ordered:
        for load in loads:
            if load.weight + item.effective_weight > config.replan_cap * truck.max_cargo_weight + EPS:
                continue
            layout = place_items(load.items + [item], truck, config)
            if layout.success:
                load.items = load.items + [item]
                refresh_load(load, layout.placements, config)
                break
        else:
            # a lone item may use the full capacity; physically_fits already bounds it
            layout = place_items([item], truck, config)
            load = TruckLoad(id="", items=[item], truck=truck)
            refresh_load(load, layout.placements, config)
            loads.append(load)
    return loads


def replan_load(
    plan: Plan,
    load_index: int,
    new_truck: TruckType,
    config: PlannerConfig = DEFAULT_CONFIG,
) -> ReplanResult:
    """Move one load onto a different truck type, opening more trucks of that type as needed.

    Items that cannot physically ride the new truck stay on a residual load with the
    original truck and placements, and are reported as unfit. Every other load in
    the plan is carried over unchanged.
    """
    if not 0 <= load_index < len(plan.loads):
        raise IndexError(f"load index {load_index} out of range for a plan with {len(plan.loads)} load(s)")

    target = plan.loads[load_index]
    movable = [item for item in target.items if physically_fits(item, new_truck)]
    unfit = [item for item in target.items if not physically_fits(item, new_truck)]

    new_loads = _first_fit_decreasing(movable, new_truck, config)

    residual: List[TruckLoad] = []
    if unfit:
        unfit_ids = {item.id for item in unfit}
        kept = clone_load(target, items=list(unfit))
        refresh_load(kept, [p for p in target.placements if p.item_id in unfit_ids], config)
        residual.append(kept)

    warnings = item_warnings(plan)
    if len(new_loads) > 1:
        warnings.append(f"Load {target.id} needs {len(new_loads)} {new_truck.name} trucks after replanning")
    for item in unfit:
        warnings.append(f"Item \"{item.description}\" does not fit {new_truck.name}; kept on {target.truck.name}")

    loads = plan.loads[:load_index] + new_loads + residual + plan.loads[load_index + 1:]
    updated = build_plan(loads, plan.unassigned_items, plan.split_groups, warnings)
    logger.info(
        f"Replanned {target.id} onto {new_truck.id}: {len(new_loads)} load(s), {len(unfit)} unfit item(s)"
    )
    return ReplanResult(
        plan=updated,
        split_occurred=len(new_loads) > 1,
        new_load_count=len(new_loads),
        unfit_items=unfit,
    )
