import unittest

import pandas as pd
import pytest

from row_reorder import DataFrameRowContainer, ListRowContainer, apply_row_order
from sort_errors import TableStructureError


class ListRowContainerTests(unittest.TestCase):
    def setUp(self):
        self.a = ["alpha", "3"]
        self.b = ["bravo", "1"]
        self.c = ["charlie", "2"]
        self.rows = [self.a, self.b, self.c]
        self.container = ListRowContainer(self.rows, headers=["name", "qty"])

    def test_reorders_the_same_list_in_place(self):
        apply_row_order(self.container, [self.b, self.c, self.a])
        self.assertEqual(self.rows, [self.b, self.c, self.a])
        self.assertIs(self.rows[0], self.b)
        self.assertIs(self.container.rows()[0], self.b)

    def test_reapplying_an_order_changes_nothing(self):
        order = [self.c, self.a, self.b]
        apply_row_order(self.container, order)
        first = list(self.rows)
        apply_row_order(self.container, order)
        self.assertEqual(self.rows, first)

    def test_rows_missing_from_order_stay_in_front(self):
        extra = ["delta", "0"]
        self.rows.append(extra)
        apply_row_order(self.container, [self.c, self.b, self.a])
        self.assertEqual(self.rows, [extra, self.c, self.b, self.a])

    def test_cells_reads_column_and_pads_short_rows(self):
        self.rows.append(["short"])
        cells = [cell for _, cell in self.container.cells(1)]
        self.assertEqual(cells, ["3", "1", "2", None])
        self.assertEqual(self.container.first_cell(0), "alpha")

    def test_headers_default_to_positions(self):
        container = ListRowContainer([["x", "y", "z"]])
        self.assertEqual(container.headers, ["0", "1", "2"])
        self.assertEqual(container.column_count, 3)


def test_list_container_without_columns_is_rejected():
    with pytest.raises(TableStructureError):
        ListRowContainer([])


def test_overrides_by_header_name_map_to_index():
    container = ListRowContainer(
        [["1,5", "x"]],
        headers=["price", "name"],
        overrides={"price": "number_comma_decimal", 1: "alpha_numeric", "missing": "number"},
    )
    assert container.overrides == {0: "number_comma_decimal", 1: "alpha_numeric"}


def test_dataframe_container_reorders_by_index_label():
    df = pd.DataFrame({"name": ["a", "b", "c"]}, index=[10, 20, 30])
    container = DataFrameRowContainer(df)
    apply_row_order(container, [30, 10, 20])
    assert list(container.df.index) == [30, 10, 20]
    assert container.df["name"].tolist() == ["c", "a", "b"]
    assert [row for row, _ in container.cells(0)] == [30, 10, 20]


def test_dataframe_container_skips_labels_no_longer_present():
    df = pd.DataFrame({"name": ["a", "b"]})
    container = DataFrameRowContainer(df)
    apply_row_order(container, [1, 7, 0])
    assert list(container.df.index) == [1, 0]


def test_dataframe_container_rejects_duplicate_index():
    df = pd.DataFrame({"name": ["a", "b"]}, index=[0, 0])
    with pytest.raises(TableStructureError):
        DataFrameRowContainer(df)


def test_dataframe_container_rejects_frames_without_columns():
    with pytest.raises(TableStructureError):
        DataFrameRowContainer(pd.DataFrame(index=[0, 1]))


def test_dataframe_first_cell_of_empty_frame_is_none():
    container = DataFrameRowContainer(pd.DataFrame({"a": []}))
    assert container.first_cell(0) is None
    assert container.rows() == []
