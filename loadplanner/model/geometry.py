from __future__ import annotations

from typing import List, Sequence

import numpy as np
import numba

from .entities import EPS, Placement

DEPTH_PENALTY = 0.5
LATERAL_PENALTY = 0.3
SIDE_EDGE_BONUS = 5.0
FRONT_BONUS = 10.0
ADJACENT_EDGE_BONUS = 3.0


@numba.njit(cache=True)
def score_candidates_numba(
    xs: np.ndarray,
    zs: np.ndarray,
    item_length: float,
    item_width: float,
    deck_width: float,
    placed: np.ndarray,  # rows: [x, z, length, width]
    epsilon: float,
    adjacency_tolerance: float,
) -> np.ndarray:
    """Score every (x, z) front-left corner; colliding corners get -inf."""
    nx = xs.shape[0]
    nz = zs.shape[0]
    scores = np.empty((nx, nz), dtype=np.float64)

    for i in range(nx):
        x = xs[i]
        for j in range(nz):
            z = zs[j]
            score = -DEPTH_PENALTY * x - LATERAL_PENALTY * z
            if z <= adjacency_tolerance or z + item_width >= deck_width - adjacency_tolerance:
                score += SIDE_EDGE_BONUS
            if x <= adjacency_tolerance:
                score += FRONT_BONUS

            collides = False
            for k in range(placed.shape[0]):
                px = placed[k, 0]
                pz = placed[k, 1]
                pl = placed[k, 2]
                pw = placed[k, 3]
                x_span = x < px + pl - epsilon and x + item_length > px + epsilon
                z_span = z < pz + pw - epsilon and z + item_width > pz + epsilon
                if x_span and z_span:
                    collides = True
                    break
                if x_span:
                    if abs(z - (pz + pw)) <= adjacency_tolerance:
                        score += ADJACENT_EDGE_BONUS
                    if abs(z + item_width - pz) <= adjacency_tolerance:
                        score += ADJACENT_EDGE_BONUS
                if z_span:
                    if abs(x - (px + pl)) <= adjacency_tolerance:
                        score += ADJACENT_EDGE_BONUS
                    if abs(x + item_length - px) <= adjacency_tolerance:
                        score += ADJACENT_EDGE_BONUS

            scores[i, j] = -np.inf if collides else score
    return scores


def candidate_axis(
    deck_extent: float,
    item_extent: float,
    step: float,
    extreme_points: Sequence[float],
) -> np.ndarray:
    """Grid coordinates plus extreme points that keep the item inside [0, deck_extent]."""
    limit = deck_extent - item_extent
    if limit < -EPS:
        return np.empty(0, dtype=np.float64)
    limit = max(limit, 0.0)
    grid = np.arange(0.0, limit + EPS, step, dtype=np.float64)
    extras = [p for p in extreme_points if -EPS <= p <= limit + EPS]
    extras.append(limit)
    coords = np.concatenate([grid, np.clip(np.asarray(extras, dtype=np.float64), 0.0, limit)])
    # dedupe on a fine grid, keep ascending order
    rounded = np.round(coords / EPS).astype(np.int64)
    _, unique_idx = np.unique(rounded, return_index=True)
    return np.sort(coords[unique_idx])


def placements_to_array(placements: Sequence[Placement]) -> np.ndarray:
    if not placements:
        return np.empty((0, 4), dtype=np.float64)
    return np.array([[p.x, p.z, p.length, p.width] for p in placements], dtype=np.float64)


def find_overlaps(placements: Sequence[Placement], epsilon: float = EPS) -> List[tuple]:
    overlaps = []
    for i in range(len(placements)):
        for j in range(i + 1, len(placements)):
            if placements[i].overlaps(placements[j], epsilon):
                overlaps.append((placements[i].item_id, placements[j].item_id))
    return overlaps


def within_deck(placement: Placement, deck_length: float, deck_width: float, epsilon: float = EPS) -> bool:
    return (
        placement.x >= -epsilon
        and placement.z >= -epsilon
        and placement.x + placement.length <= deck_length + epsilon
        and placement.z + placement.width <= deck_width + epsilon
    )
