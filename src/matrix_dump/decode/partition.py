"""Partition decoding: binary partition file in, text description out."""

import logging
from typing import TextIO

from matrix_dump.decode.formatting import format_range_line, format_row_body, format_row_header
from matrix_dump.decode.rows import iter_rows
from matrix_dump.decode.stream import DataInputStream
from matrix_dump.decode.types import PartitionHeader
from matrix_dump.errors import IOFailure, MalformedPartition

logger = logging.getLogger(__name__)


def read_header(source: DataInputStream, sink: TextIO | None = None) -> PartitionHeader:
    """
    Read and sanity-check the fixed partition header.

    With a sink, each header line is written as soon as its fields have been
    read, so a truncated header leaves the lines it completed.
    """

    def emit(line: str) -> None:
        if sink is not None:
            sink.write(line + "\n")

    matrix_id = source.read_i32()
    emit(f"matrixId:{matrix_id}")
    partition_count = source.read_i32()
    emit(f"partSize:{partition_count}")

    start_row = source.read_i32()
    start_col = source.read_i32()
    end_row = source.read_i32()
    end_col = source.read_i32()
    row_type = source.read_utf()
    range_line = format_range_line(row_type, start_row, start_col, end_row, end_col)
    emit(range_line)
    logger.info("%s: %s", source.name, range_line)

    row_count = source.read_i32()
    emit(f"rowNum:{row_count}")
    logger.info("%s: rowNum=%d", source.name, row_count)

    if end_col < start_col or end_row < start_row:
        raise MalformedPartition(f"inverted partition range in {source.name}: {range_line}")
    if row_count < 0:
        raise MalformedPartition(f"negative row count {row_count} in {source.name}")

    return PartitionHeader(
        matrix_id=matrix_id,
        partition_count=partition_count,
        start_row=start_row,
        start_col=start_col,
        end_row=end_row,
        end_col=end_col,
        row_type=row_type,
        row_count=row_count,
    )


def decode_partition(
    source: DataInputStream,
    sink: TextIO,
    duplicate_dense_breaks: bool = False,
) -> PartitionHeader:
    """
    Decode one partition file and write its text description to `sink`.

    Output is written as the input is consumed: each header line once its
    fields are read, each row once it has been read in full. A failure part
    way through leaves the lines produced so far in the sink.
    """
    try:
        header = read_header(source, sink)
        for row in iter_rows(source, header):
            sink.write(format_row_header(row) + "\n")
            sink.write(format_row_body(row, duplicate_dense_breaks))
    except OSError as exc:
        raise IOFailure(f"write of {source.name} dump failed: {exc}") from exc

    return header
