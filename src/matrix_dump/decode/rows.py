"""Per-row-type readers for partition row records."""

from collections.abc import Callable, Iterator
from typing import TypeAlias

import numpy as np

from matrix_dump.decode.stream import DataInputStream
from matrix_dump.decode.types import (
    FLOAT32,
    FLOAT64,
    INT32,
    INT_DOUBLE_PAIR,
    INT_INT_PAIR,
    DenseRow,
    PartitionHeader,
    Row,
    RowType,
    SparseRow,
)
from matrix_dump.errors import MalformedPartition

RowReader: TypeAlias = Callable[[DataInputStream, PartitionHeader], Row]


def _read_length(source: DataInputStream) -> int:
    length = source.read_i32()
    if length < 0:
        raise MalformedPartition(
            f"negative row length {length} at offset {source.offset - 4} of {source.name}"
        )
    return length


def _read_pairs(source: DataInputStream, pair_dtype: np.dtype) -> np.ndarray:
    return source.read_array(pair_dtype, _read_length(source))


def read_double_sparse_row(source: DataInputStream, header: PartitionHeader) -> SparseRow:
    # The producer writes clock before the row index for this row type only.
    clock = source.read_i32()
    row_index = source.read_i32()
    pairs = _read_pairs(source, INT_DOUBLE_PAIR)
    return SparseRow(row_index, clock, pairs["key"], pairs["value"])


def read_int_sparse_row(source: DataInputStream, header: PartitionHeader) -> SparseRow:
    row_index = source.read_i32()
    clock = source.read_i32()
    pairs = _read_pairs(source, INT_INT_PAIR)
    return SparseRow(row_index, clock, pairs["key"], pairs["value"])


def _dense_reader(dtype: np.dtype) -> RowReader:
    def read_dense_row(source: DataInputStream, header: PartitionHeader) -> DenseRow:
        row_index = source.read_i32()
        clock = source.read_i32()
        values = source.read_array(dtype, header.width)
        return DenseRow(row_index, clock, header.start_col, values)

    return read_dense_row


def read_int_arbitrary_row(source: DataInputStream, header: PartitionHeader) -> Row:
    """Read a row whose dense or sparse shape is tagged per row."""
    row_index = source.read_i32()
    clock = source.read_i32()
    inner_type = source.read_utf()

    if inner_type == RowType.T_INT_DENSE:
        values = source.read_array(INT32, header.width)
        return DenseRow(row_index, clock, header.start_col, values, inner_type=inner_type)

    if inner_type == RowType.T_INT_SPARSE:
        nnz = source.read_i32()
        pairs = _read_pairs(source, INT_INT_PAIR)
        return SparseRow(
            row_index,
            clock,
            pairs["key"],
            pairs["value"],
            inner_type=inner_type,
            nnz=nnz,
        )

    raise MalformedPartition(
        f"row {row_index} of {source.name} has inner type {inner_type!r}, "
        f"expected {RowType.T_INT_DENSE} or {RowType.T_INT_SPARSE}"
    )


ROW_READERS: dict[str, RowReader] = {
    RowType.T_DOUBLE_SPARSE: read_double_sparse_row,
    RowType.T_INT_SPARSE: read_int_sparse_row,
    RowType.T_DOUBLE_DENSE: _dense_reader(FLOAT64),
    RowType.T_FLOAT_DENSE: _dense_reader(FLOAT32),
    RowType.T_INT_DENSE: _dense_reader(INT32),
    RowType.T_INT_ARBITRARY: read_int_arbitrary_row,
}


def get_row_reader(row_type: str) -> RowReader:
    """Look up the reader for a row type, rejecting unknown tags."""
    try:
        return ROW_READERS[row_type]
    except KeyError:
        raise MalformedPartition(f"unknown row type {row_type!r}") from None


def iter_rows(source: DataInputStream, header: PartitionHeader) -> Iterator[Row]:
    """Yield the declared number of rows; trailing bytes are never read."""
    reader = get_row_reader(header.row_type)
    for _ in range(header.row_count):
        yield reader(source, header)
