from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional, Sequence, Tuple

EPS = 1e-6
ADJACENCY_TOLERANCE = 1e-3


class InvalidItemError(ValueError):
    """Raised when a cargo item carries dimensions or weights the planner cannot use."""

    def __init__(self, item_id: str, reason: str) -> None:
        super().__init__(f"invalid item {item_id!r}: {reason}")
        self.item_id = item_id
        self.reason = reason


class UnknownTruckError(KeyError):
    def __init__(self, truck_id: str) -> None:
        super().__init__(truck_id)
        self.truck_id = truck_id

    def __str__(self) -> str:
        return f"unknown truck type {self.truck_id!r}"


class TrailerCategory(str, Enum):
    FLATBED = "FLATBED"
    STEP_DECK = "STEP_DECK"
    RGN = "RGN"
    LOWBOY = "LOWBOY"
    DOUBLE_DROP = "DOUBLE_DROP"
    LANDOLL = "LANDOLL"
    CONESTOGA = "CONESTOGA"


class LoadingMethod(str, Enum):
    CRANE = "crane"
    DRIVE_ON = "drive-on"
    FORKLIFT = "forklift"
    RAMP = "ramp"
    TILT = "tilt"


class DivisionMode(str, Enum):
    QUANTITY = "quantity"
    WEIGHT = "weight"


@dataclass(frozen=True)
class TruckType:
    """Trailer reference data. Deck dimensions in feet, weights in pounds."""

    id: str
    name: str
    category: TrailerCategory
    deck_length: float
    deck_width: float
    deck_height: float
    max_cargo_weight: float
    tare_weight: float
    loading_method: LoadingMethod
    description: str = ""

    @property
    def deck_area(self) -> float:
        return self.deck_length * self.deck_width


@dataclass
class CargoItem:
    id: str
    description: str
    length: float
    width: float
    height: float
    weight: float  # per unit
    quantity: int = 1
    stackable: bool = False
    divisible: bool = False
    divisible_by: DivisionMode = DivisionMode.QUANTITY
    min_split_quantity: int = 1
    min_split_weight: float = 0.0
    # populated on generated split parts only
    parent_id: Optional[str] = None
    split_index: Optional[int] = None
    split_total: Optional[int] = None

    @property
    def effective_weight(self) -> float:
        return self.weight * self.quantity

    @property
    def footprint(self) -> float:
        return self.length * self.width

    @property
    def is_split_part(self) -> bool:
        return self.parent_id is not None


@dataclass(frozen=True)
class Placement:
    """Front-left corner of an item on the deck; x runs front to rear, z left to right."""

    item_id: str
    x: float
    z: float
    rotated: bool
    length: float
    width: float

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        return (self.x, self.z, self.x + self.length, self.z + self.width)

    def overlaps(self, other: "Placement", epsilon: float = EPS) -> bool:
        return rects_overlap(
            (self.x, self.z, self.length, self.width),
            (other.x, other.z, other.length, other.width),
            epsilon,
        )


def rects_overlap(
    a: Tuple[float, float, float, float],
    b: Tuple[float, float, float, float],
    epsilon: float = EPS,
) -> bool:
    """(x, z, length, width) rectangles; touching edges are not an overlap."""
    ax, az, al, aw = a
    bx, bz, bl, bw = b
    return (
        ax < bx + bl - epsilon
        and ax + al > bx + epsilon
        and az < bz + bw - epsilon
        and az + aw > bz + epsilon
    )


@dataclass
class PlacementResult:
    placements: List[Placement] = field(default_factory=list)
    unplaced: List[CargoItem] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.unplaced


@dataclass
class FitResult:
    truck: TruckType
    score: float
    is_legal: bool
    permits: List[str]
    total_height: float
    total_weight: float
    height_clearance: float
    exceeds_height: bool = False
    exceeds_width: bool = False
    exceeds_weight: bool = False


@dataclass
class TruckRecommendation:
    truck: TruckType
    fits: bool
    score: float
    is_legal: bool
    permits: List[str]
    reason: str
    warnings: List[str] = field(default_factory=list)
    is_best_choice: bool = False


@dataclass
class TruckLoad:
    id: str
    items: List[CargoItem]
    truck: TruckType
    length: float = 0.0
    width: float = 0.0
    height: float = 0.0
    weight: float = 0.0
    score: float = 0.0
    placements: List[Placement] = field(default_factory=list)
    permits_required: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    is_legal: bool = True

    @property
    def utilization(self) -> float:
        if self.truck.max_cargo_weight <= 0:
            return 0.0
        return self.weight / self.truck.max_cargo_weight

    def refresh_aggregates(self) -> None:
        """Recompute bounding dimensions and weight from the item list."""
        self.length = max((item.length for item in self.items), default=0.0)
        self.width = max((item.width for item in self.items), default=0.0)
        self.height = max((item.height for item in self.items), default=0.0)
        self.weight = sum(item.effective_weight for item in self.items)


@dataclass
class SplitItemGroup:
    original_id: str
    original: CargoItem
    parts: List[CargoItem]
    mode: DivisionMode
    total_parts: int


@dataclass
class Plan:
    loads: List[TruckLoad] = field(default_factory=list)
    unassigned_items: List[CargoItem] = field(default_factory=list)
    split_groups: List[SplitItemGroup] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def total_trucks(self) -> int:
        return len(self.loads)

    @property
    def total_weight(self) -> float:
        return sum(load.weight for load in self.loads)

    @property
    def total_items(self) -> int:
        return sum(len(load.items) for load in self.loads)


@dataclass
class ReplanResult:
    plan: Plan
    split_occurred: bool
    new_load_count: int
    unfit_items: List[CargoItem] = field(default_factory=list)


def validate_item(item: CargoItem) -> None:
    for name in ("length", "width", "height", "weight"):
        value = getattr(item, name)
        if value is None or not value > 0:
            raise InvalidItemError(item.id, f"{name} must be a positive number, got {value!r}")
    if item.quantity is None or item.quantity < 1:
        raise InvalidItemError(item.id, f"quantity must be at least 1, got {item.quantity!r}")
    if item.min_split_quantity < 1:
        raise InvalidItemError(item.id, "min_split_quantity must be at least 1")
    if item.min_split_weight < 0:
        raise InvalidItemError(item.id, "min_split_weight cannot be negative")
    try:
        DivisionMode(item.divisible_by)
    except ValueError:
        raise InvalidItemError(item.id, f"unknown division mode {item.divisible_by!r}") from None


def validate_items(items: Sequence[CargoItem]) -> None:
    seen = set()
    for item in items:
        validate_item(item)
        if item.id in seen:
            raise InvalidItemError(item.id, "duplicate item id")
        seen.add(item.id)


def clone_item(item: CargoItem, **changes) -> CargoItem:
    return replace(item, **changes)


def clone_load(load: TruckLoad, **changes) -> TruckLoad:
    """Copy a load with fresh lists so the copy can be edited without aliasing."""
    copied = replace(
        load,
        items=list(load.items),
        placements=list(load.placements),
        permits_required=list(load.permits_required),
        warnings=list(load.warnings),
    )
    return replace(copied, **changes) if changes else copied


def renumber_loads(loads: Sequence[TruckLoad]) -> List[TruckLoad]:
    return [replace(load, id=f"load-{index}") for index, load in enumerate(loads, start=1)]
