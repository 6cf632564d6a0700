"""Shared type definitions for partition decoding."""

from dataclasses import dataclass
from enum import StrEnum
from typing import TypeAlias

import numpy as np


class RowType(StrEnum):
    """Binary row encodings a partition file can declare."""

    T_DOUBLE_SPARSE = "T_DOUBLE_SPARSE"
    T_INT_SPARSE = "T_INT_SPARSE"
    T_DOUBLE_DENSE = "T_DOUBLE_DENSE"
    T_FLOAT_DENSE = "T_FLOAT_DENSE"
    T_INT_DENSE = "T_INT_DENSE"
    T_INT_ARBITRARY = "T_INT_ARBITRARY"


# Big-endian element types as stored on disk.
INT32 = np.dtype(">i4")
FLOAT32 = np.dtype(">f4")
FLOAT64 = np.dtype(">f8")

# Interleaved (key, value) pairs of sparse rows.
INT_DOUBLE_PAIR = np.dtype([("key", ">i4"), ("value", ">f8")])
INT_INT_PAIR = np.dtype([("key", ">i4"), ("value", ">i4")])


@dataclass(frozen=True, slots=True)
class PartitionHeader:
    """Fixed fields at the start of every partition file."""

    matrix_id: int
    partition_count: int
    start_row: int
    start_col: int
    end_row: int
    end_col: int
    row_type: str
    row_count: int

    @property
    def width(self) -> int:
        """Number of values in each dense row."""
        return self.end_col - self.start_col


@dataclass(frozen=True, slots=True)
class DenseRow:
    """A row holding one value per column of the partition range."""

    row_index: int
    clock: int
    start_col: int
    values: np.ndarray
    inner_type: str | None = None


@dataclass(frozen=True, slots=True)
class SparseRow:
    """A row holding explicit (key, value) pairs."""

    row_index: int
    clock: int
    keys: np.ndarray
    values: np.ndarray
    inner_type: str | None = None
    nnz: int | None = None


Row: TypeAlias = DenseRow | SparseRow
