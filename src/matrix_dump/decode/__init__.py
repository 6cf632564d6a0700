"""Decoding of binary matrix partition files."""

from matrix_dump.decode.partition import decode_partition, read_header
from matrix_dump.decode.stream import DataInputStream
from matrix_dump.decode.types import DenseRow, PartitionHeader, RowType, SparseRow

__all__ = [
    "DataInputStream",
    "DenseRow",
    "PartitionHeader",
    "RowType",
    "SparseRow",
    "decode_partition",
    "read_header",
]
