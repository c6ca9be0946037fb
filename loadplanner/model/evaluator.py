from __future__ import annotations

import re
from typing import List, Optional, Sequence

from ..config import (
    DEFAULT_CONFIG,
    LEGAL_GROSS_WEIGHT_LBS,
    LEGAL_HEIGHT_FT,
    LEGAL_WIDTH_FT,
    TRACTOR_WEIGHT_LBS,
    PlannerConfig,
)
from .catalog import TRUCK_CATALOG
from .entities import EPS, CargoItem, FitResult, LoadingMethod, TruckRecommendation, TruckType

SELF_PROPELLED_PATTERN = re.compile(r"excavator|dozer|loader|tractor|tracked", re.IGNORECASE)

BASE_SCORE = 100.0
PERMIT_PENALTY = 15.0
OVERKILL_CLEARANCE_FT = 4.0
OVERKILL_PENALTY = 10.0
IDEAL_CLEARANCE_FT = 2.0
IDEAL_FIT_BONUS = 10.0
DRIVE_ON_BONUS = 15.0
LEGAL_BONUS = 20.0


def physically_fits(item: CargoItem, truck: TruckType) -> bool:
    return (
        item.length <= truck.deck_length + EPS
        and item.width <= truck.deck_width + EPS
        and item.effective_weight <= truck.max_cargo_weight + EPS
    )


def fits_any_truck(item: CargoItem, catalog: Optional[Sequence[TruckType]] = None) -> bool:
    return any(physically_fits(item, truck) for truck in (catalog if catalog is not None else TRUCK_CATALOG))


def evaluate_truck(item: CargoItem, truck: TruckType) -> FitResult:
    """Score one truck for an item (or a load's virtual item) and list the permits it needs."""
    total_height = item.height + truck.deck_height
    total_weight = item.effective_weight + truck.tare_weight + TRACTOR_WEIGHT_LBS

    exceeds_height = total_height > LEGAL_HEIGHT_FT + EPS
    exceeds_width = item.width > LEGAL_WIDTH_FT + EPS
    exceeds_weight = total_weight > LEGAL_GROSS_WEIGHT_LBS + EPS
    is_legal = not (exceeds_height or exceeds_width or exceeds_weight)

    permits: List[str] = []
    if exceeds_height:
        permits.append(f"Oversize Height ({total_height:.1f}' > {LEGAL_HEIGHT_FT}')")
    if exceeds_width:
        permits.append(f"Oversize Width ({item.width:.1f}' > {LEGAL_WIDTH_FT}')")
    if exceeds_weight:
        permits.append(f"Overweight ({total_weight:,.0f} lbs > {LEGAL_GROSS_WEIGHT_LBS:,.0f} lbs)")

    score = BASE_SCORE - PERMIT_PENALTY * len(permits)
    clearance = LEGAL_HEIGHT_FT - total_height
    if clearance > OVERKILL_CLEARANCE_FT:
        score -= OVERKILL_PENALTY
    if 0 <= clearance <= IDEAL_CLEARANCE_FT:
        score += IDEAL_FIT_BONUS
    if truck.loading_method == LoadingMethod.DRIVE_ON and SELF_PROPELLED_PATTERN.search(item.description or ""):
        score += DRIVE_ON_BONUS
    if is_legal:
        score += LEGAL_BONUS

    return FitResult(
        truck=truck,
        score=score,
        is_legal=is_legal,
        permits=permits,
        total_height=total_height,
        total_weight=total_weight,
        height_clearance=clearance,
        exceeds_height=exceeds_height,
        exceeds_width=exceeds_width,
        exceeds_weight=exceeds_weight,
    )


def find_best_truck(item: CargoItem, catalog: Optional[Sequence[TruckType]] = None) -> Optional[FitResult]:
    """Highest scoring truck the item physically fits on; ties keep catalog order."""
    best: Optional[FitResult] = None
    for truck in catalog if catalog is not None else TRUCK_CATALOG:
        if not physically_fits(item, truck):
            continue
        result = evaluate_truck(item, truck)
        if best is None or result.score > best.score:
            best = result
    return best


def virtual_item(items: Sequence[CargoItem]) -> CargoItem:
    """A single item standing in for a whole truckload's bounding dimensions and weight."""
    return CargoItem(
        id="virtual",
        description="Load",
        length=max(item.length for item in items),
        width=max(item.width for item in items),
        height=max(item.height for item in items),
        weight=sum(item.effective_weight for item in items),
        quantity=1,
    )


def can_share_truck(first: CargoItem, second: CargoItem, truck: TruckType) -> bool:
    # side by side across the deck
    if first.width + second.width <= truck.deck_width + EPS and max(first.length, second.length) <= truck.deck_length + EPS:
        return True
    # end to end along the deck
    if first.length + second.length <= truck.deck_length + EPS and max(first.width, second.width) <= truck.deck_width + EPS:
        return True
    if first.stackable and second.stackable:
        base, top = (first, second) if first.effective_weight > second.effective_weight else (second, first)
        if top.length <= base.length + EPS and top.width <= base.width + EPS:
            stacked = first.height + second.height + truck.deck_height
            if stacked <= LEGAL_HEIGHT_FT + EPS:
                return True
    return False


def dimension_warnings(
    width: float,
    height: float,
    truck: TruckType,
    config: PlannerConfig = DEFAULT_CONFIG,
) -> List[str]:
    warnings: List[str] = []
    total_height = height + truck.deck_height
    if total_height > LEGAL_HEIGHT_FT + EPS:
        warnings.append(f"Total height {total_height:.1f}' exceeds {LEGAL_HEIGHT_FT}' legal limit")
    if width > LEGAL_WIDTH_FT + EPS:
        warnings.append(f"Width {width:.1f}' exceeds {LEGAL_WIDTH_FT}' legal limit")
    if width > config.escort_width + EPS:
        warnings.append(f"Width over {config.escort_width:g}' requires escort vehicles")
    if width > config.multi_escort_width + EPS:
        warnings.append(f"Width over {config.multi_escort_width:g}' typically requires multiple escorts")
    if total_height > config.route_survey_height + EPS:
        warnings.append(f"Height over {config.route_survey_height:g}' may require a route survey for bridges")
    return warnings


def _reason(fits: bool, fit: FitResult) -> str:
    if not fits:
        return "Cargo does not physically fit this trailer"
    if fit.is_legal:
        return f"Cargo fits legally with {fit.height_clearance:.1f}' height clearance"
    return f"Cargo fits but requires {len(fit.permits)} permit(s)"


def rank_trucks(
    item: CargoItem,
    catalog: Optional[Sequence[TruckType]] = None,
    config: PlannerConfig = DEFAULT_CONFIG,
) -> List[TruckRecommendation]:
    """Every catalog entry scored for one item, fitting trucks first, best first."""
    recommendations: List[TruckRecommendation] = []
    for truck in catalog if catalog is not None else TRUCK_CATALOG:
        fits = physically_fits(item, truck)
        fit = evaluate_truck(item, truck)
        recommendations.append(
            TruckRecommendation(
                truck=truck,
                fits=fits,
                score=fit.score,
                is_legal=fit.is_legal and fits,
                permits=fit.permits,
                reason=_reason(fits, fit),
                warnings=dimension_warnings(item.width, item.height, truck, config),
            )
        )
    recommendations.sort(key=lambda rec: (not rec.fits, -rec.score))
    if recommendations and recommendations[0].fits:
        recommendations[0].is_best_choice = True
    return recommendations
