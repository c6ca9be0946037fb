from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence, Tuple

from ..config import DEFAULT_CONFIG, PlannerConfig
from .catalog import max_cargo_capacity
from .deck_packer import place_items
from .entities import (
    EPS,
    CargoItem,
    DivisionMode,
    FitResult,
    SplitItemGroup,
    TruckLoad,
    TruckType,
)
from .evaluator import (
    can_share_truck,
    dimension_warnings,
    evaluate_truck,
    find_best_truck,
    physically_fits,
    virtual_item,
)
from .splitter import needs_split, split_item

logger = logging.getLogger(__name__)


@dataclass
class AssignmentResult:
    loads: List[TruckLoad] = field(default_factory=list)
    unassigned: List[CargoItem] = field(default_factory=list)
    split_groups: List[SplitItemGroup] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


def describe_item(item: CargoItem) -> str:
    return (
        f"\"{item.description}\" ({item.length:g}'L x {item.width:g}'W x {item.height:g}'H, "
        f"{item.effective_weight:,.0f} lbs)"
    )


class LoadAssigner:
    """Greedy heaviest-first assignment of items to truckloads.

    Not an exact bin-packing solver: every item is committed once, so the
    truck count is feasible but not guaranteed minimal.
    """

    def __init__(self, catalog: Sequence[TruckType], config: PlannerConfig = DEFAULT_CONFIG) -> None:
        self.catalog = tuple(catalog)
        self.config = config
        self.result = AssignmentResult()
        self._next_load = 1

    def run(self, items: Sequence[CargoItem]) -> AssignmentResult:
        stream = self._expand_splits(items)
        ordered = [item for _, item in sorted(enumerate(stream), key=lambda pair: (-pair[1].effective_weight, pair[0]))]
        for item in ordered:
            self.assign_item(item)
        return self.result

    def _expand_splits(self, items: Sequence[CargoItem]) -> List[CargoItem]:
        max_capacity = max_cargo_capacity(self.catalog)
        stream: List[CargoItem] = []
        for item in items:
            if not needs_split(item, max_capacity):
                stream.append(item)
                continue

            parts = split_item(item, max_capacity)
            if not parts:
                mode = DivisionMode(item.divisible_by)
                minimum = (
                    f"{item.min_split_quantity} unit(s)"
                    if mode == DivisionMode.QUANTITY
                    else f"{item.min_split_weight:,.0f} lbs"
                )
                self.result.unassigned.append(item)
                self.result.warnings.append(
                    f"Item {describe_item(item)} cannot be split into parts of at least {minimum} "
                    f"that fit the largest truck ({max_capacity:,.0f} lbs)"
                )
                continue

            self.result.split_groups.append(
                SplitItemGroup(
                    original_id=item.id,
                    original=item,
                    parts=parts,
                    mode=DivisionMode(item.divisible_by),
                    total_parts=len(parts),
                )
            )
            self.result.warnings.append(f"Item \"{item.description}\" split into {len(parts)} parts across trucks")
            stream.extend(parts)
        return stream

    def assign_item(self, item: CargoItem) -> None:
        best = find_best_truck(item, self.catalog)
        if best is None:
            logger.warning(f"Item {item.id} exceeds every truck in the catalog")
            self.result.unassigned.append(item)
            self.result.warnings.append(f"Item {describe_item(item)} exceeds all truck capacities")
            return

        for load, limit in self._candidate_hosts(item):
            if self._try_host(load, item, limit):
                logger.debug(f"Item {item.id} added to {load.id} on {load.truck.id}")
                return

        self._open_load(item, best)

    def _candidate_hosts(self, item: CargoItem) -> Iterator[Tuple[TruckLoad, float]]:
        """Compatible loads paired with their band limit, lowest resulting utilization first.

        The soft target band comes before the hard cap band.
        """
        soft, hard = [], []
        for index, load in enumerate(self.result.loads):
            if not all(can_share_truck(existing, item, load.truck) for existing in load.items):
                continue
            resulting = (load.weight + item.effective_weight) / load.truck.max_cargo_weight
            if resulting <= self.config.soft_target + EPS:
                soft.append((resulting, index, load))
            elif resulting <= self.config.hard_cap + EPS:
                hard.append((resulting, index, load))
        for band, limit in ((soft, self.config.soft_target), (hard, self.config.hard_cap)):
            for _, _, load in sorted(band, key=lambda entry: (entry[0], entry[1])):
                yield load, limit

    def _try_host(self, load: TruckLoad, item: CargoItem, limit: float) -> bool:
        items = load.items + [item]
        aggregate = virtual_item(items)

        options: List[FitResult] = []
        upgraded = find_best_truck(aggregate, self.catalog)
        if upgraded is not None:
            options.append(upgraded)
        if upgraded is None or upgraded.truck.id != load.truck.id:
            options.append(evaluate_truck(aggregate, load.truck))

        for fit in options:
            if not physically_fits(aggregate, fit.truck):
                continue
            # a re-selected truck may carry less than the one the band was measured on
            if aggregate.effective_weight > limit * fit.truck.max_cargo_weight + EPS:
                continue
            placed = place_items(items, fit.truck, self.config)
            if not placed.success:
                continue
            load.items = items
            load.truck = fit.truck
            load.score = fit.score
            load.is_legal = fit.is_legal
            load.permits_required = list(fit.permits)
            load.placements = placed.placements
            load.refresh_aggregates()
            load.warnings = dimension_warnings(load.width, load.height, load.truck, self.config)
            return True
        return False

    def _open_load(self, item: CargoItem, best: FitResult) -> Optional[TruckLoad]:
        placed = place_items([item], best.truck, self.config)
        if not placed.success:
            self.result.unassigned.append(item)
            self.result.warnings.append(f"No valid deck position for item {describe_item(item)} on {best.truck.name}")
            return None

        load = TruckLoad(
            id=f"load-{self._next_load}",
            items=[item],
            truck=best.truck,
            score=best.score,
            placements=placed.placements,
            permits_required=list(best.permits),
            warnings=dimension_warnings(item.width, item.height, best.truck, self.config),
            is_legal=best.is_legal,
        )
        load.refresh_aggregates()
        self._next_load += 1
        self.result.loads.append(load)
        logger.debug(f"Opened {load.id} on {best.truck.id} for item {item.id}")
        return load
