from typing import List, Optional, Sequence

from loadplanner import schemas
from loadplanner.model.catalog import get_truck_by_id
from loadplanner.model.entities import (
    CargoItem,
    DivisionMode,
    Placement,
    Plan,
    SplitItemGroup,
    TruckLoad,
    TruckType,
)


def convert_item(item: schemas.CargoItemSchema) -> CargoItem:
    return CargoItem(
        id=item.id,
        description=item.description or item.id,
        length=item.length,
        width=item.width,
        height=item.height,
        weight=item.weight,
        quantity=item.quantity,
        stackable=item.stackable,
        divisible=item.divisible,
        divisible_by=DivisionMode(item.divisible_by),
        min_split_quantity=item.min_split_quantity,
        min_split_weight=item.min_split_weight,
        parent_id=item.parent_id,
        split_index=item.split_index,
        split_total=item.split_total,
    )


def convert_truck(truck: schemas.TruckTypeSchema) -> TruckType:
    return TruckType(**truck.model_dump())


def convert_load(load: schemas.TruckLoadSchema) -> TruckLoad:
    return TruckLoad(
        id=load.id,
        items=[convert_item(item) for item in load.items],
        truck=convert_truck(load.truck),
        length=load.length,
        width=load.width,
        height=load.height,
        weight=load.weight,
        score=load.score,
        placements=[Placement(**p.model_dump()) for p in load.placements],
        permits_required=list(load.permits_required),
        warnings=list(load.warnings),
        is_legal=load.is_legal,
    )


def convert_plan(plan: schemas.PlanSchema) -> Plan:
    """Rebuild a core Plan from its wire form, e.g. a plan posted back for replanning."""
    loads = [convert_load(load) for load in plan.loads]
    for load in loads:
        # weight is derived data; never trust the posted figure
        load.refresh_aggregates()
    return Plan(
        loads=loads,
        unassigned_items=[convert_item(item) for item in plan.unassigned_items],
        split_groups=[
            SplitItemGroup(
                original_id=group.original_id,
                original=convert_item(group.original),
                parts=[convert_item(part) for part in group.parts],
                mode=DivisionMode(group.mode),
                total_parts=group.total_parts,
            )
            for group in plan.split_groups
        ],
        warnings=list(plan.warnings),
    )


def resolve_catalog(truck_ids: Optional[Sequence[str]]) -> Optional[List[TruckType]]:
    """Catalog restricted to the given ids, in the order given; None keeps the full catalog."""
    if truck_ids is None:
        return None
    return [get_truck_by_id(truck_id) for truck_id in truck_ids]
