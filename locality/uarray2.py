"""A two-dimensional unboxed array stored in a single flat list."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

ApplyFun = Callable[[int, int, "UArray2", Any], None]


class UArray2:
    """A width x height grid of elements, indexed by ``(col, row)``.

    ``size`` records the nominal size in bytes of one element; it does not
    limit what may be stored. Cells start out as ``None``.
    """

    __slots__ = ("_width", "_height", "_size", "_cells")

    def __init__(self, width: int, height: int, size: int) -> None:
        if width < 0 or height < 0:
            raise ValueError("width and height must not be negative")
        if size <= 0:
            raise ValueError("element size must be positive")
        self._width = width
        self._height = height
        self._size = size
        self._cells: list[Any] = [None] * (width * height)

    @property
    def width(self) -> int:
        """Number of columns."""
        return self._width

    @property
    def height(self) -> int:
        """Number of rows."""
        return self._height

    @property
    def size(self) -> int:
        """Nominal size in bytes of one element."""
        return self._size

    def _index(self, key: tuple[int, int]) -> int:
        try:
            col, row = key
        except (TypeError, ValueError):
            raise TypeError("index must be a (col, row) pair") from None
        if not (0 <= col < self._width and 0 <= row < self._height):
            raise IndexError(
                f"({col}, {row}) is outside a {self._width}x{self._height} array"
            )
        return row * self._width + col

    def __getitem__(self, key: tuple[int, int]) -> Any:
        return self._cells[self._index(key)]

    def __setitem__(self, key: tuple[int, int], value: Any) -> None:
        self._cells[self._index(key)] = value

    def row_major(self) -> Iterator[tuple[int, int, Any]]:
        """Yield ``(col, row, value)`` with the column index varying fastest."""
        for row in range(self._height):
            for col in range(self._width):
                yield col, row, self._cells[row * self._width + col]

    def col_major(self) -> Iterator[tuple[int, int, Any]]:
        """Yield ``(col, row, value)`` with the row index varying fastest."""
        for col in range(self._width):
            for row in range(self._height):
                yield col, row, self._cells[row * self._width + col]

    def map_row_major(self, apply: ApplyFun) -> None:
        """Call ``apply(col, row, array, value)`` for every cell, row by row."""
        if apply is None:
            raise TypeError("apply must be callable")
        for col, row, value in self.row_major():
            apply(col, row, self, value)

    def map_col_major(self, apply: ApplyFun) -> None:
        """Call ``apply(col, row, array, value)`` for every cell, column by column."""
        if apply is None:
            raise TypeError("apply must be callable")
        for col, row, value in self.col_major():
            apply(col, row, self, value)

    def __repr__(self) -> str:
        return f"UArray2(width={self._width}, height={self._height}, size={self._size})"