"""Tests for value and line rendering."""

import numpy as np
import pytest

from matrix_dump.decode.formatting import (
    format_double,
    format_float,
    format_range_line,
    format_row_body,
    format_row_header,
)
from matrix_dump.decode.types import DenseRow, SparseRow


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (0.5, "0.5"),
        (-1.25, "-1.25"),
        (1.0, "1.0"),
        (0.0, "0.0"),
        (-0.0, "-0.0"),
        (100.0, "100.0"),
        (0.001, "0.001"),
        (0.0001, "1.0E-4"),
        (1234567.0, "1234567.0"),
        (1e7, "1.0E7"),
        (12345678.9, "1.23456789E7"),
        (1.5e20, "1.5E20"),
        (-2.5e-10, "-2.5E-10"),
        (0.1, "0.1"),
        (float("nan"), "NaN"),
        (float("inf"), "Infinity"),
        (float("-inf"), "-Infinity"),
        (5e-324, "4.9E-324"),
        (-5e-324, "-4.9E-324"),
        (1e23, "1.0E23"),
        (0.3, "0.3"),
    ],
)
def test_format_double(value: float, expected: str) -> None:
    assert format_double(value) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (0.1, "0.1"),
        (2.0, "2.0"),
        (-3.75, "-3.75"),
        (1e10, "1.0E10"),
        (1e-5, "1.0E-5"),
        (float(np.float32(1.1)), "1.1"),
        (float(np.float32(1.4e-45)), "1.4E-45"),
        (float(np.finfo(np.float32).max), "3.4028235E38"),
    ],
)
def test_format_float_uses_single_precision_digits(value: float, expected: str) -> None:
    assert format_float(value) == expected


def test_format_range_line() -> None:
    assert format_range_line("T_FLOAT_DENSE", 10, 20, 30, 40) == (
        "rowType T_FLOAT_DENSE, partition range is [10, 20] to (30, 40)"
    )


def test_row_headers() -> None:
    dense = DenseRow(1, 2, 0, np.zeros(4, dtype=">i4"))
    sparse = SparseRow(1, 2, np.arange(3, dtype=">i4"), np.zeros(3, dtype=">i4"))
    tagged = SparseRow(
        1, 2, np.arange(3, dtype=">i4"), np.zeros(3, dtype=">i4"), "T_INT_SPARSE", 9
    )

    assert format_row_header(dense) == "rowId:1 clock:2 len:4"
    assert format_row_header(sparse) == "rowId:1 clock:2 size:3"
    assert format_row_header(tagged) == "rowId:1 clock:2 size:3 type:T_INT_SPARSE nnz:9"


def test_dense_body_is_indexed_from_start_column() -> None:
    row = DenseRow(0, 0, 5, np.array([1.5, -2.0], dtype=">f8"))
    assert format_row_body(row) == "5:1.5 6:-2.0 \n"


def test_empty_row_body_is_bare_newline() -> None:
    row = SparseRow(0, 0, np.array([], dtype=">i4"), np.array([], dtype=">f8"))
    assert format_row_body(row) == "\n"


def test_soft_break_after_every_tenth_entry() -> None:
    keys = np.arange(100, 122, dtype=">i4")
    row = SparseRow(0, 0, keys, np.ones(22, dtype=">i4"))
    body = format_row_body(row)

    lines = body.split("\n")
    # Breaks follow entries k=10 and k=20; the final newline ends the row.
    assert lines[0].split() == [f"{100 + k}:1" for k in range(11)]
    assert lines[1].split() == [f"{100 + k}:1" for k in range(11, 21)]
    assert lines[2] == "121:1 "
    assert lines[3] == ""


def test_no_soft_break_when_tenth_entry_is_last() -> None:
    row = DenseRow(0, 0, 0, np.arange(11, dtype=">i4"))
    assert format_row_body(row).count("\n") == 1


def test_legacy_dense_breaks_are_doubled() -> None:
    row = DenseRow(0, 0, 0, np.arange(12, dtype=">i4"))

    assert "10:10 \n11:11 \n" in format_row_body(row)
    assert "10:10 \n\n11:11 \n" in format_row_body(row, duplicate_dense_breaks=True)


def test_legacy_breaks_leave_sparse_rows_alone() -> None:
    keys = np.arange(12, dtype=">i4")
    row = SparseRow(0, 0, keys, keys.copy())
    assert format_row_body(row, duplicate_dense_breaks=True).count("\n") == 2
