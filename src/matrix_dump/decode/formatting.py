"""Text rendering of partition headers, rows and values."""

import math
from collections.abc import Callable, Iterable
from decimal import ROUND_HALF_EVEN, Decimal

import numpy as np

from matrix_dump.decode.types import DenseRow, Row

# A cosmetic line break follows every tenth entry of a row.
ENTRIES_PER_BREAK = 10

# Fixed notation is used for magnitudes in [1e-3, 1e7).
_FIXED_MIN_EXPONENT = -3
_FIXED_MAX_EXPONENT = 7


def _java_style(shortest: str) -> str:
    """Re-lay shortest round-trip digits the way the JVM prints floats."""
    sign, digit_tuple, exponent = Decimal(shortest).as_tuple()
    digits = "".join(str(d) for d in digit_tuple).rstrip("0") or "0"
    exponent += len(digit_tuple) - len(digits)
    prefix = "-" if sign else ""
    sci_exponent = len(digits) - 1 + exponent

    if _FIXED_MIN_EXPONENT <= sci_exponent < _FIXED_MAX_EXPONENT:
        if exponent >= 0:
            return f"{prefix}{digits}{'0' * exponent}.0"
        point = len(digits) + exponent
        if point > 0:
            return f"{prefix}{digits[:point]}.{digits[point:]}"
        return f"{prefix}0.{'0' * -point}{digits}"

    return f"{prefix}{digits[0]}.{digits[1:] or '0'}E{sci_exponent}"


def _special(value: float) -> str | None:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0.0:
        return "-0.0" if math.copysign(1.0, value) < 0 else "0.0"
    return None


def _widen_single_digit(shortest: str, value: float, parse: Callable[[str], float]) -> str:
    """
    Prefer the closest two-digit decimal when the shortest form has one digit.

    The JVM picks among decimals of length 1 or 2 the one nearest the exact
    binary value, which only differs from the one-digit form for values with
    very few significant bits (`4.9E-324`, `1.4E-45`).
    """
    if len(Decimal(shortest).normalize().as_tuple().digits) > 1:
        return shortest
    exact = Decimal(value)
    candidate = str(exact.quantize(Decimal(1).scaleb(exact.adjusted() - 1), ROUND_HALF_EVEN))
    if parse(candidate) == value:
        return candidate
    return shortest


def _parse_float32(text: str) -> float:
    return float(np.float32(float(text)))


def format_double(value: float) -> str:
    """Render a 64-bit float (`0.5`, `1.0`, `1.0E-4`)."""
    value = float(value)
    return _special(value) or _java_style(_widen_single_digit(repr(value), value, float))


def format_float(value: float) -> str:
    """Render a 32-bit float using the shortest digits that round-trip in 32 bits."""
    single = float(np.float32(value))
    return _special(single) or _java_style(
        _widen_single_digit(str(np.float32(single)), single, _parse_float32)
    )


def format_int(value: int) -> str:
    return str(int(value))


def value_formatter(values: np.ndarray) -> Callable[[float], str]:
    """Pick the renderer matching an array's element type."""
    if values.dtype.kind in "iu":
        return format_int
    if values.dtype.itemsize == 4:
        return format_float
    return format_double


def format_range_line(
    row_type: str, start_row: int, start_col: int, end_row: int, end_col: int
) -> str:
    """The header line naming the row type and the partition's row/column range."""
    return (
        f"rowType {row_type}, partition range is "
        f"[{start_row}, {start_col}] to ({end_row}, {end_col})"
    )


def format_row_header(row: Row) -> str:
    if isinstance(row, DenseRow):
        line = f"rowId:{row.row_index} clock:{row.clock} len:{len(row.values)}"
        if row.inner_type is not None:
            line += f" type:{row.inner_type}"
        return line

    line = f"rowId:{row.row_index} clock:{row.clock} size:{len(row.values)}"
    if row.inner_type is not None:
        line += f" type:{row.inner_type} nnz:{row.nnz}"
    return line


def _format_entries(
    indices: Iterable[int],
    values: np.ndarray,
    breaks_per_wrap: int,
) -> str:
    render = value_formatter(values)
    length = len(values)
    parts = []
    for k, (index, value) in enumerate(zip(indices, values.tolist(), strict=True)):
        parts.append(f"{index}:{render(value)} ")
        if k != 0 and k % ENTRIES_PER_BREAK == 0 and k != length - 1:
            parts.append("\n" * breaks_per_wrap)
    parts.append("\n")
    return "".join(parts)


def format_row_body(row: Row, duplicate_dense_breaks: bool = False) -> str:
    """
    Render a row's `index:value` entries, newline terminated.

    Dense rows are indexed from the partition's first column, sparse rows by
    their stored keys. With `duplicate_dense_breaks` the cosmetic break in
    dense rows is written twice, matching legacy dumps byte for byte.
    """
    if isinstance(row, DenseRow):
        indices = range(row.start_col, row.start_col + len(row.values))
        return _format_entries(indices, row.values, 2 if duplicate_dense_breaks else 1)
    return _format_entries(row.keys.tolist(), row.values, 1)
