from typing import Optional

from pydantic import AliasChoices, BaseModel, Field

from loadplanner.model.entities import DivisionMode, LoadingMethod, TrailerCategory


def to_camel(string: str) -> str:
    """Helper function to convert snake_case to camelCase"""
    parts = string.split("_")
    return parts[0] + "".join(word.capitalize() for word in parts[1:])


class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        from_attributes = True
        populate_by_name = True


# ----Truck-----
class TruckTypeSchema(CamelModel):
    id: str
    name: str
    category: TrailerCategory
    deck_length: float = Field(gt=0)
    deck_width: float = Field(gt=0)
    deck_height: float = Field(ge=0)
    max_cargo_weight: float = Field(gt=0)
    tare_weight: float = Field(ge=0)
    loading_method: LoadingMethod
    description: str = ""


# ----Cargo-----
class CargoItemSchema(CamelModel):
    id: str
    description: str = ""
    length: float = Field(gt=0)
    width: float = Field(gt=0)
    height: float = Field(gt=0)
    weight: float = Field(gt=0)
    quantity: int = Field(default=1, ge=1)
    stackable: bool = False
    divisible: bool = False
    divisible_by: DivisionMode = Field(
        default=DivisionMode.QUANTITY,
        validation_alias=AliasChoices("divisibleBy", "divisible_by", "divisionMode"),
        serialization_alias="divisibleBy",
    )
    min_split_quantity: int = Field(default=1, ge=1)
    min_split_weight: float = Field(default=0.0, ge=0)
    parent_id: Optional[str] = None
    split_index: Optional[int] = None
    split_total: Optional[int] = None

    class Config:
        str_strip_whitespace = True
        coerce_numbers_to_str = True


class PlacementSchema(CamelModel):
    item_id: str
    x: float
    z: float
    rotated: bool = False
    length: float
    width: float


# ----Plan-----
class TruckLoadSchema(CamelModel):
    id: str
    items: list[CargoItemSchema]
    truck: TruckTypeSchema
    length: float = 0.0
    width: float = 0.0
    height: float = 0.0
    weight: float = 0.0
    score: float = 0.0
    placements: list[PlacementSchema] = []
    permits_required: list[str] = []
    warnings: list[str] = []
    is_legal: bool = True
    utilization: float = 0.0


class SplitItemGroupSchema(CamelModel):
    original_id: str
    original: CargoItemSchema
    parts: list[CargoItemSchema]
    mode: DivisionMode
    total_parts: int


class PlanSchema(CamelModel):
    loads: list[TruckLoadSchema] = []
    unassigned_items: list[CargoItemSchema] = []
    split_groups: list[SplitItemGroupSchema] = []
    warnings: list[str] = []
    total_trucks: int = 0
    total_weight: float = 0.0
    total_items: int = 0


class TruckRecommendationSchema(CamelModel):
    truck: TruckTypeSchema
    fits: bool
    score: float
    is_legal: bool
    permits: list[str] = []
    reason: str
    warnings: list[str] = []
    is_best_choice: bool = False


# ----Requests-----
class PlanRequest(CamelModel):
    items: list[CargoItemSchema]
    truck_ids: Optional[list[str]] = None
    rebalance: bool = True


class ReplanRequest(CamelModel):
    plan: PlanSchema
    load_index: int = Field(ge=0)
    truck_id: str


# ----Responses-----
class PlanResponse(CamelModel):
    plan: PlanSchema
    summary: str


class ReplanResponse(CamelModel):
    plan: PlanSchema
    split_occurred: bool
    new_load_count: int
    unfit_items: list[CargoItemSchema] = []
    summary: str
