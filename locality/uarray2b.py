"""A two-dimensional array laid out in square blocks for locality."""

from __future__ import annotations

import math
from collections.abc import Callable, Iterator
from typing import Any

ApplyFun = Callable[[int, int, "UArray2b", Any], None]

_BYTES_IN_64K = 64 * 1024


class UArray2b:
    """A width x height grid stored block by block.

    ``blocksize`` is the side length of each square block; every cell of one
    block is stored contiguously. Cells start out as ``None``.
    """

    __slots__ = ("_width", "_height", "_size", "_blocksize", "_blocks_wide", "_cells")

    def __init__(self, width: int, height: int, size: int, blocksize: int) -> None:
        if blocksize < 1:
            raise ValueError("blocksize must be at least 1")
        if width < 0 or height < 0:
            raise ValueError("width and height must not be negative")
        if size <= 0:
            raise ValueError("element size must be positive")
        self._width = width
        self._height = height
        self._size = size
        self._blocksize = blocksize
        self._blocks_wide = -(-width // blocksize)
        blocks_high = -(-height // blocksize)
        self._cells: list[Any] = [None] * (
            self._blocks_wide * blocks_high * blocksize * blocksize
        )

    @classmethod
    def new_64k_block(cls, width: int, height: int, size: int) -> UArray2b:
        """Create an array whose blocks are as large as fit in 64 KB, at least 1."""
        if width < 0 or height < 0:
            raise ValueError("width and height must not be negative")
        if size <= 0:
            raise ValueError("element size must be positive")
        if size > _BYTES_IN_64K:
            return cls(width, height, size, 1)
        blocksize = max(1, math.isqrt(_BYTES_IN_64K // size))
        return cls(width, height, size, blocksize)

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

    @property
    def blocksize(self) -> int:
        """Side length of each square block."""
        return self._blocksize

    def _offset(self, col: int, row: int) -> int:
        bs = self._blocksize
        block = (row // bs) * self._blocks_wide + col // bs
        return block * bs * bs + (row % bs) * bs + col % bs

    def _index(self, key: tuple[int, int]) -> int:
        try:
            col, row = key
        except (TypeError, ValueError):
            raise TypeError("index must be a (col, row) pair") from None
        if not (0 <= col < self._width and 0 <= row < self._height):
            raise IndexError(
                f"({col}, {row}) is outside a {self._width}x{self._height} array"
            )
        return self._offset(col, row)

    def __getitem__(self, key: tuple[int, int]) -> Any:
        return self._cells[self._index(key)]

    def __setitem__(self, key: tuple[int, int], value: Any) -> None:
        self._cells[self._index(key)] = value

    def block_major(self) -> Iterator[tuple[int, int, Any]]:
        """Yield ``(col, row, value)``, finishing each block before the next."""
        bs = self._blocksize
        blocks_high = -(-self._height // bs)
        for block_row in range(blocks_high):
            for block_col in range(self._blocks_wide):
                for row in range(block_row * bs, min((block_row + 1) * bs, self._height)):
                    for col in range(
                        block_col * bs, min((block_col + 1) * bs, self._width)
                    ):
                        yield col, row, self._cells[self._offset(col, row)]

    def map(self, apply: ApplyFun) -> None:
        """Call ``apply(col, row, array, value)`` for every cell in block order."""
        if apply is None:
            raise TypeError("apply must be callable")
        for col, row, value in self.block_major():
            apply(col, row, self, value)

    def __repr__(self) -> str:
        return (
            f"UArray2b(width={self._width}, height={self._height}, "
            f"size={self._size}, blocksize={self._blocksize})"
        )