"""
Cargo list import from CSV or Excel files.

Headers are matched loosely: case, surrounding spaces, underscores and a unit
suffix in parentheses are ignored, so "Length (ft)", "length_ft" and "LENGTH"
all land on the length column.
"""

import re
from typing import Any, BinaryIO, Dict, List, Optional

import numpy as np
import pandas as pd
from pydantic import ValidationError

from loadplanner import schemas, utils
from loadplanner.logger import logger
from loadplanner.model.entities import CargoItem, InvalidItemError, validate_items

COLUMN_ALIASES: Dict[str, tuple] = {
    "id": ("id", "item id", "itemid", "item no", "item number"),
    "description": ("description", "desc", "name", "item", "item name", "cargo"),
    "length": ("length", "length ft", "l"),
    "width": ("width", "width ft", "w"),
    "height": ("height", "height ft", "h"),
    "weight": ("weight", "weight lbs", "unit weight", "weight per unit"),
    "quantity": ("quantity", "qty", "count", "units"),
    "stackable": ("stackable", "stack", "can stack"),
    "divisible": ("divisible", "splittable", "can split"),
    "divisible_by": ("divisible by", "divisibleby", "division mode", "split by"),
    "min_split_quantity": ("min split quantity", "minsplitquantity", "min split qty"),
    "min_split_weight": ("min split weight", "minsplitweight"),
}

REQUIRED_COLUMNS = ("length", "width", "height", "weight")


class UnsupportedFileError(ValueError):
    pass


def normalize_header(header: Any) -> str:
    text = str(header).strip().lower().replace("_", " ")
    text = re.sub(r"\(.*?\)", " ", text)
    return re.sub(r"\s+", " ", text).strip()


def map_columns(columns) -> Dict[str, str]:
    """Source column name -> CargoItem field, for every recognised header."""
    lookup = {alias: field for field, aliases in COLUMN_ALIASES.items() for alias in aliases}
    mapping = {}
    for column in columns:
        field = lookup.get(normalize_header(column))
        if field is not None and field not in mapping.values():
            mapping[column] = field
    return mapping


def _clean_record(record: Dict[str, Any], row_number: int) -> Dict[str, Any]:
    """Drop empty cells and fill the defaults an uploaded row is allowed to omit."""
    clean = {}
    for key, value in record.items():
        if isinstance(value, np.generic):
            value = value.item()
        if value is None or (isinstance(value, str) and not value.strip()):
            continue
        clean[key] = value

    raw_id = clean.get("id")
    if isinstance(raw_id, float) and raw_id.is_integer():
        clean["id"] = int(raw_id)
    clean.setdefault("id", f"item-{row_number}")
    clean.setdefault("description", f"Item {row_number}")
    if isinstance(clean.get("divisible_by"), str):
        clean["divisible_by"] = clean["divisible_by"].strip().lower()
    return clean


def _row_to_item(record: Dict[str, Any], row_number: int) -> CargoItem:
    try:
        item = schemas.CargoItemSchema.model_validate(record)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in e.errors()
        )
        raise InvalidItemError(str(record.get("id")), f"row {row_number}: {problems}") from None
    return utils.convert_item(item)


def read_cargo_frame(df: pd.DataFrame) -> List[CargoItem]:
    mapping = map_columns(df.columns)
    missing = [field for field in REQUIRED_COLUMNS if field not in mapping.values()]
    if missing:
        raise UnsupportedFileError(f"Missing required column(s): {', '.join(missing)}")

    df_replaced = df.rename(columns=mapping)[list(mapping.values())].replace({np.nan: None})
    items = []
    # header is spreadsheet row 1
    for row_number, record in enumerate(df_replaced.to_dict(orient="records"), start=2):
        if all(value is None or str(value).strip() == "" for value in record.values()):
            continue
        items.append(_row_to_item(_clean_record(record, row_number), row_number))

    validate_items(items)
    logger.info(f"Imported {len(items)} cargo item(s)")
    return items


def load_cargo_file(file: BinaryIO, filename: Optional[str]) -> List[CargoItem]:
    name = (filename or "").lower()
    if name.endswith(".csv"):
        df = pd.read_csv(file)
    elif name.endswith(".xlsx") or name.endswith(".xls"):
        df = pd.read_excel(file)
    else:
        raise UnsupportedFileError("Invalid file type. Only CSV and Excel supported.")
    return read_cargo_frame(df)
