"""
fritz_cli.table
===============
Generic console table rendering.

Any object exposing ``columns()`` – an ordered list of ``(name, value)``
pairs for exactly one row – can be rendered.  Record types get that for
free by mixing in :class:`DataclassRow`; ad-hoc rows use
:class:`MappingRow`.
"""

from dataclasses import fields
from typing import List, Mapping, Protocol, Sequence, Tuple, Union, runtime_checkable

Cell = Union[str, bool, int]


@runtime_checkable
class TableRow(Protocol):
    def columns(self) -> List[Tuple[str, Cell]]:
        ...


class DataclassRow:
    """Mixin for dataclasses: one column per field, in declaration order."""

    def columns(self) -> List[Tuple[str, Cell]]:
        return [(f.name, getattr(self, f.name)) for f in fields(self)]


class MappingRow:
    """A row built from an ordered mapping of column name → value."""

    def __init__(self, cells: Mapping[str, Cell]) -> None:
        self._cells = list(cells.items())

    def columns(self) -> List[Tuple[str, Cell]]:
        return list(self._cells)


def format_cell(value: Cell) -> str:
    # bool first: bool is a subclass of int
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    raise TypeError(f"Unsupported cell type {type(value).__name__}: {value!r}")


def render(rows: Sequence[TableRow], column_spacing: int = 2) -> str:
    """
    Render *rows* as aligned text.

    The column set is taken from the first row; all rows must share it.
    Each column is as wide as its longest header or cell (counted in code
    points) and every cell, the last one included, is followed by at least
    *column_spacing* spaces.  Returns "" for no rows.
    """
    if column_spacing < 0:
        raise ValueError(f"column_spacing must be >= 0, got {column_spacing}")
    if not rows:
        return ""

    headers = [name.upper() for name, _ in rows[0].columns()]
    body = [[format_cell(value) for _, value in row.columns()] for row in rows]

    widths = [len(h) for h in headers]
    for cells in body:
        for i, text in enumerate(cells):
            if len(text) > widths[i]:
                widths[i] = len(text)

    def line(cells: List[str]) -> str:
        return "".join(
            text + " " * (widths[i] - len(text) + column_spacing)
            for i, text in enumerate(cells)
        ) + "\n"

    return line(headers) + "".join(line(cells) for cells in body)
