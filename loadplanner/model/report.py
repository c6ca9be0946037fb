"""
Plain-text plan reporting: the summary handed to dispatch, per-truck loading
sequences, and deck utilization figures.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

from ..config import LEGAL_HEIGHT_FT
from .entities import CargoItem, Plan, TruckLoad


@dataclass
class DeckStats:
    space_utilization: float  # percent of deck area covered
    volume_utilization: float  # percent of the legal-height envelope above the deck
    weight_utilization: float  # percent of max cargo weight
    balance: float  # -1 front heavy .. 1 rear heavy


def _items_by_id(load: TruckLoad) -> Dict[str, CargoItem]:
    return {item.id: item for item in load.items}


def deck_stats(load: TruckLoad) -> DeckStats:
    truck = load.truck
    covered = sum(p.length * p.width for p in load.placements)
    space = covered / truck.deck_area * 100 if truck.deck_area > 0 else 0.0

    items = _items_by_id(load)
    envelope = truck.deck_area * (LEGAL_HEIGHT_FT - truck.deck_height)
    filled = sum(p.length * p.width * items[p.item_id].height for p in load.placements if p.item_id in items)
    volume = filled / envelope * 100 if envelope > 0 else 0.0

    total = 0.0
    moment = 0.0
    for p in load.placements:
        item = items.get(p.item_id)
        if item is None:
            continue
        total += item.effective_weight
        moment += item.effective_weight * (p.x + p.length / 2)

    balance = 0.0
    if total > 0 and truck.deck_length > 0:
        half = truck.deck_length / 2
        balance = max(-1.0, min(1.0, (moment / total - half) / half))

    return DeckStats(
        space_utilization=space,
        volume_utilization=volume,
        weight_utilization=load.utilization * 100,
        balance=balance,
    )


def loading_instructions(load: TruckLoad) -> List[str]:
    """Loading order for one truck: rear of the deck first, then left to right."""
    items = _items_by_id(load)
    ordered = sorted(load.placements, key=lambda p: (-p.x, p.z))
    steps = []
    for number, p in enumerate(ordered, start=1):
        item = items[p.item_id]
        line = (
            f"{number}. {item.description}: {p.length:g}' x {p.width:g}' x {item.height:g}', "
            f"{item.effective_weight:,.0f} lbs at {p.x:g}' from front, {p.z:g}' from left"
        )
        if p.rotated:
            line += " (rotated 90 degrees)"
        steps.append(line)
    return steps


def plan_summary(plan: Plan) -> str:
    lines = [
        "LOAD PLAN SUMMARY",
        f"Trucks: {plan.total_trucks}",
        f"Items: {plan.total_items}",
        f"Total weight: {plan.total_weight:,.0f} lbs",
    ]

    for load in plan.loads:
        stats = deck_stats(load)
        status = "legal" if load.is_legal else "oversize/overweight"
        lines.append("")
        lines.append(f"{load.id}: {load.truck.name} ({status})")
        lines.append(
            f"  Cargo: {load.length:g}'L x {load.width:g}'W x {load.height:g}'H, "
            f"{load.weight:,.0f} lbs ({stats.weight_utilization:.0f}% of capacity)"
        )
        for item in load.items:
            qty = f" x{item.quantity}" if item.quantity > 1 else ""
            lines.append(
                f"  - {item.description}{qty}: {item.length:g}' x {item.width:g}' x {item.height:g}', "
                f"{item.effective_weight:,.0f} lbs"
            )
        for permit in load.permits_required:
            lines.append(f"  Permit: {permit}")
        for warning in load.warnings:
            lines.append(f"  Warning: {warning}")

    if plan.unassigned_items:
        lines.append("")
        lines.append("UNASSIGNED")
        for item in plan.unassigned_items:
            lines.append(f"  - {item.description} ({item.effective_weight:,.0f} lbs)")

    if plan.warnings:
        lines.append("")
        lines.append("WARNINGS")
        lines.extend(f"  - {warning}" for warning in plan.warnings)

    return "\n".join(lines)
