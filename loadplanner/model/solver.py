from __future__ import annotations

from typing import List, Optional, Sequence

from ..config import DEFAULT_CONFIG, PlannerConfig
from ..logger import logger
from .assigner import LoadAssigner
from .catalog import TRUCK_CATALOG
from .entities import (
    CargoItem,
    Plan,
    SplitItemGroup,
    TruckLoad,
    TruckType,
    renumber_loads,
    validate_items,
)
from .rebalancer import rebalance_loads


def summary_warnings(loads: Sequence[TruckLoad], unassigned: Sequence[CargoItem]) -> List[str]:
    warnings: List[str] = []
    if len(loads) > 1:
        warnings.append(f"Load requires {len(loads)} trucks to transport all items")
    if unassigned:
        warnings.append(f"{len(unassigned)} item(s) could not be assigned to any truck")
    return warnings


def build_plan(
    loads: Sequence[TruckLoad],
    unassigned: Sequence[CargoItem],
    split_groups: Sequence[SplitItemGroup],
    item_warnings: Sequence[str],
) -> Plan:
    """Renumber loads and append the plan-level summary lines after the per-item warnings."""
    numbered = renumber_loads(loads)
    return Plan(
        loads=numbered,
        unassigned_items=list(unassigned),
        split_groups=list(split_groups),
        warnings=list(item_warnings) + summary_warnings(numbered, unassigned),
    )


def item_warnings(plan: Plan) -> List[str]:
    """A plan's warnings without its summary lines."""
    summary = set(summary_warnings(plan.loads, plan.unassigned_items))
    return [warning for warning in plan.warnings if warning not in summary]


class LoadPlanner:
    """Top-level planner: validate, split, assign, then rebalance."""

    def __init__(
        self,
        catalog: Optional[Sequence[TruckType]] = None,
        config: PlannerConfig = DEFAULT_CONFIG,
        rebalance: bool = True,
    ) -> None:
        self.catalog = tuple(catalog) if catalog is not None else TRUCK_CATALOG
        if not self.catalog:
            raise ValueError("truck catalog is empty")
        self.config = config
        self.rebalance = rebalance

    def solve(self, items: Sequence[CargoItem]) -> Plan:
        validate_items(items)
        if not items:
            return Plan()

        assigned = LoadAssigner(self.catalog, self.config).run(items)
        loads = assigned.loads
        if self.rebalance and len(loads) > 1:
            loads = rebalance_loads(loads, self.config)

        plan = build_plan(loads, assigned.unassigned, assigned.split_groups, assigned.warnings)
        logger.info(
            f"Planned {plan.total_items} item(s) on {plan.total_trucks} truck(s), "
            f"{len(plan.unassigned_items)} unassigned"
        )
        return plan


def plan_loads(
    items: Sequence[CargoItem],
    catalog: Optional[Sequence[TruckType]] = None,
    config: PlannerConfig = DEFAULT_CONFIG,
    rebalance: bool = True,
) -> Plan:
    return LoadPlanner(catalog, config, rebalance).solve(items)
