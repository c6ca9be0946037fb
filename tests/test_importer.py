"""Tests for spreadsheet cargo import."""
import io

import numpy as np
import pandas as pd
import pytest

from loadplanner.importer import (
    UnsupportedFileError,
    load_cargo_file,
    map_columns,
    normalize_header,
    read_cargo_frame,
)
from loadplanner.model.entities import DivisionMode, InvalidItemError


class TestHeaders:
    def test_normalize_strips_units_and_case(self):
        assert normalize_header("Length (ft)") == "length"
        assert normalize_header(" WEIGHT_LBS ") == "weight lbs"

    def test_map_columns_aliases(self):
        mapping = map_columns(["Item ID", "Qty", "Weight (lbs)", "Notes"])
        assert mapping == {"Item ID": "id", "Qty": "quantity", "Weight (lbs)": "weight"}


class TestReadFrame:
    def test_rows_become_items(self):
        df = pd.DataFrame(
            {
                "Item ID": ["A1", "A2"],
                "Description": ["Excavator", "Crate"],
                "Length (ft)": [30.0, 4.0],
                "Width (ft)": [10.0, 4.0],
                "Height (ft)": [10.5, 3.0],
                "Weight (lbs)": [85000.0, 500.0],
                "Qty": [np.nan, 6],
                "Stackable": ["no", "yes"],
            }
        )
        items = read_cargo_frame(df)
        assert [item.id for item in items] == ["A1", "A2"]
        assert items[0].quantity == 1
        assert items[1].quantity == 6
        assert items[1].stackable and not items[0].stackable
        assert items[0].length == pytest.approx(30.0)
        assert items[1].effective_weight == pytest.approx(3000.0)

    def test_defaults_for_missing_optional_columns(self):
        df = pd.DataFrame({"length": [10], "width": [4], "height": [4], "weight": [2000]})
        item = read_cargo_frame(df)[0]
        assert item.id == "item-2"
        assert item.description == "Item 2"
        assert item.divisible_by == DivisionMode.QUANTITY

    def test_division_mode_column(self):
        df = pd.DataFrame(
            {"length": [10], "width": [4], "height": [4], "weight": [90000], "divisible": ["yes"], "split by": ["Weight"]}
        )
        item = read_cargo_frame(df)[0]
        assert item.divisible
        assert item.divisible_by == DivisionMode.WEIGHT

    def test_non_positive_dimension_names_row(self):
        df = pd.DataFrame({"length": [10, 0], "width": [4, 4], "height": [4, 4], "weight": [100, 100]})
        with pytest.raises(InvalidItemError, match="row 3"):
            read_cargo_frame(df)

    def test_missing_dimension_cell(self):
        df = pd.DataFrame({"length": [10, np.nan], "width": [4, 4], "height": [4, 4], "weight": [100, 100]})
        with pytest.raises(InvalidItemError, match="row 3: length"):
            read_cargo_frame(df)

    def test_flags_parsed_like_the_json_api(self):
        df = pd.DataFrame(
            {"length": [10], "width": [4], "height": [4], "weight": [100], "stackable": ["off"], "divisible": ["on"]}
        )
        item = read_cargo_frame(df)[0]
        assert item.divisible
        assert not item.stackable

    def test_unrecognised_flag_rejected(self):
        df = pd.DataFrame({"length": [10], "width": [4], "height": [4], "weight": [100], "stackable": ["maybe"]})
        with pytest.raises(InvalidItemError, match="row 2: stackable"):
            read_cargo_frame(df)

    def test_fractional_quantity_rejected(self):
        df = pd.DataFrame({"length": [10], "width": [4], "height": [4], "weight": [100], "qty": [2.5]})
        with pytest.raises(InvalidItemError, match="quantity"):
            read_cargo_frame(df)

    def test_numeric_ids_kept_as_text(self):
        df = pd.DataFrame({"id": [101, 102], "length": [10, 10], "width": [4, 4], "height": [4, 4], "weight": [100, 100]})
        assert [item.id for item in read_cargo_frame(df)] == ["101", "102"]

    def test_missing_required_column(self):
        df = pd.DataFrame({"length": [10], "width": [4], "height": [4]})
        with pytest.raises(UnsupportedFileError, match="weight"):
            read_cargo_frame(df)

    def test_blank_rows_skipped(self):
        df = pd.DataFrame({"length": [10, np.nan], "width": [4, np.nan], "height": [4, np.nan], "weight": [100, np.nan]})
        assert len(read_cargo_frame(df)) == 1


class TestLoadFile:
    def test_csv(self):
        data = b"id,description,length,width,height,weight,qty\nP1,Pipe bundle,40,8,3,2000,4\n"
        items = load_cargo_file(io.BytesIO(data), "cargo.csv")
        assert len(items) == 1
        assert items[0].id == "P1"
        assert items[0].effective_weight == pytest.approx(8000)

    def test_unsupported_extension(self):
        with pytest.raises(UnsupportedFileError):
            load_cargo_file(io.BytesIO(b""), "cargo.txt")
