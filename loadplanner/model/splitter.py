from __future__ import annotations

import logging
import math
from typing import List

from .entities import EPS, CargoItem, DivisionMode, clone_item

logger = logging.getLogger(__name__)


def needs_split(item: CargoItem, max_capacity: float) -> bool:
    return item.divisible and item.effective_weight > max_capacity + EPS


def split_item(item: CargoItem, max_capacity: float) -> List[CargoItem]:
    """Divide a divisible item into parts no heavier than `max_capacity`.

    Returns an empty list when the item cannot be carved into parts that each
    reach the item's minimum split size and still fit the capacity. A final
    remainder under the minimum is merged into the previous part while that part
    stays within capacity; otherwise earlier parts give up enough to lift the
    remainder to the minimum.
    """
    if DivisionMode(item.divisible_by) == DivisionMode.WEIGHT:
        parts = _split_by_weight(item, max_capacity)
    else:
        parts = _split_by_quantity(item, max_capacity)

    total = len(parts)
    for part in parts:
        part.split_total = total
    if parts:
        logger.debug(f"Split {item.id} into {total} parts by {DivisionMode(item.divisible_by).value}")
    else:
        logger.info(f"Item {item.id} cannot be split under {max_capacity:,.0f} lbs per truck")
    return parts


def _carve(total, per_part, minimum, tolerance=0):
    """Chunk `total` into pieces of at most `per_part`, none under `minimum`.

    Returns an empty list when no such chunking exists from the greedy carve.
    """
    chunks = []
    remaining = total
    while remaining > tolerance:
        take = min(per_part, remaining)
        chunks.append(take)
        remaining -= take

    if len(chunks) < 2 or chunks[-1] >= minimum - tolerance:
        return chunks

    tail = chunks.pop()
    if chunks[-1] + tail <= per_part + tolerance:
        chunks[-1] += tail
        return chunks

    shortfall = minimum - tail
    for index in reversed(range(len(chunks))):
        give = min(shortfall, chunks[index] - minimum)
        if give > 0:
            chunks[index] -= give
            shortfall -= give
        if shortfall <= tolerance:
            break
    if shortfall > tolerance:
        return []
    chunks.append(minimum)
    return chunks


def _split_by_quantity(item: CargoItem, max_capacity: float) -> List[CargoItem]:
    units_per_truck = math.floor((max_capacity + EPS) / item.weight)
    if units_per_truck < item.min_split_quantity or units_per_truck < 1:
        return []

    quantities = _carve(item.quantity, units_per_truck, item.min_split_quantity)
    return [
        clone_item(
            item,
            id=f"{item.id}-part-{index}",
            description=f"{item.description} (Part {index})",
            quantity=quantity,
            divisible=False,
            parent_id=item.id,
            split_index=index,
        )
        for index, quantity in enumerate(quantities, start=1)
    ]


def _split_by_weight(item: CargoItem, max_capacity: float) -> List[CargoItem]:
    if max_capacity < item.min_split_weight - EPS or max_capacity <= 0:
        return []

    total_weight = item.effective_weight
    weights = _carve(total_weight, max_capacity, item.min_split_weight, EPS)

    parts = []
    for index, weight in enumerate(weights, start=1):
        pct = weight / total_weight * 100
        parts.append(
            clone_item(
                item,
                id=f"{item.id}-part-{index}",
                description=f"{item.description} ({pct:.0f}%)",
                weight=weight,
                quantity=1,
                divisible=False,
                parent_id=item.id,
                split_index=index,
            )
        )
    return parts
