from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence, Tuple

import numpy as np

from ..config import DEFAULT_CONFIG, PlannerConfig
from .entities import (
    ADJACENCY_TOLERANCE,
    EPS,
    CargoItem,
    Placement,
    PlacementResult,
    TruckType,
)
from .geometry import candidate_axis, placements_to_array, score_candidates_numba

logger = logging.getLogger(__name__)


class DeckPacker:
    """Greedy 2D placement of one truckload's items on the trailer deck.

    Items go largest footprint first. Each item tries its native orientation and,
    when not square, the 90 degree rotation, over a grid of front-left corners plus
    extreme points of the cargo already placed. The best scoring collision-free
    corner wins; an item with no such corner is reported as unplaced.
    """

    def __init__(self, truck: TruckType, config: PlannerConfig = DEFAULT_CONFIG) -> None:
        self.truck = truck
        self.config = config
        self.epsilon = EPS

    def pack(self, items: Sequence[CargoItem]) -> PlacementResult:
        ordered = [item for _, item in sorted(enumerate(items), key=lambda pair: (-pair[1].footprint, pair[0]))]
        result = PlacementResult()
        for item in ordered:
            placement = self.find_best_position(item, result.placements)
            if placement is None:
                logger.warning(f"No deck position for item {item.id} on {self.truck.id}")
                result.unplaced.append(item)
                continue
            result.placements.append(placement)
        return result

    def grid_step(self, item_length: float, item_width: float) -> float:
        """Coarsen the base step until one orientation's grid stays within the candidate budget."""
        step = self.config.grid_step
        span_x = max(self.truck.deck_length - item_length, 0.0)
        span_z = max(self.truck.deck_width - item_width, 0.0)
        while (math.floor(span_x / step) + 1) * (math.floor(span_z / step) + 1) > self.config.max_grid_candidates:
            step *= 2
        return step

    def _orientations(self, item: CargoItem) -> List[Tuple[float, float, bool]]:
        orientations = [(item.length, item.width, False)]
        if abs(item.length - item.width) > self.epsilon:
            orientations.append((item.width, item.length, True))
        return orientations

    def find_best_position(self, item: CargoItem, placed: Sequence[Placement]) -> Optional[Placement]:
        deck_length = self.truck.deck_length
        deck_width = self.truck.deck_width
        placed_data = placements_to_array(placed)

        best: Optional[Placement] = None
        best_score = -np.inf

        for length, width, rotated in self._orientations(item):
            if length > deck_length + self.epsilon or width > deck_width + self.epsilon:
                continue

            step = self.grid_step(length, width)
            x_points = [p.x + p.length for p in placed] + [p.x - length for p in placed]
            z_points = [p.z + p.width for p in placed] + [p.z - width for p in placed]
            xs = candidate_axis(deck_length, length, step, x_points)
            zs = candidate_axis(deck_width, width, step, z_points)
            if xs.size == 0 or zs.size == 0:
                continue

            scores = score_candidates_numba(
                xs,
                zs,
                float(length),
                float(width),
                float(deck_width),
                placed_data,
                self.epsilon,
                ADJACENCY_TOLERANCE,
            )
            flat_index = int(np.argmax(scores))
            score = float(scores.flat[flat_index])
            if not np.isfinite(score) or score <= best_score:
                continue

            i, j = np.unravel_index(flat_index, scores.shape)
            best_score = score
            best = Placement(
                item_id=item.id,
                x=float(xs[i]),
                z=float(zs[j]),
                rotated=rotated,
                length=float(length),
                width=float(width),
            )
        return best


def place_items(
    items: Sequence[CargoItem],
    truck: TruckType,
    config: PlannerConfig = DEFAULT_CONFIG,
) -> PlacementResult:
    return DeckPacker(truck, config).pack(items)
