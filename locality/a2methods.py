"""Method suites that let callers use plain and blocked 2D arrays interchangeably."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Optional, Union

from locality.uarray2 import UArray2
from locality.uarray2b import UArray2b

Array2 = Union[UArray2, UArray2b]
ApplyFun = Callable[[int, int, Any, Any], None]
SmallApplyFun = Callable[[Any], None]
MapFun = Callable[[Any, ApplyFun], None]
SmallMapFun = Callable[[Any, SmallApplyFun], None]


@dataclass(frozen=True)
class A2Methods:
    """A table of operations over one kind of 2D array.

    Mapping entries that the array kind does not support are ``None``.
    Every full mapping function is called as ``map(array, apply)`` with
    ``apply(col, row, array, value)``; every small one as
    ``small_map(array, apply)`` with ``apply(value)``.
    """

    name: str
    factory: Callable[[int, int, int], Any]
    blocked_factory: Callable[[int, int, int, int], Any]
    blocksize_of: Callable[[Any], int]
    map_row_major: Optional[MapFun] = None
    map_col_major: Optional[MapFun] = None
    map_block_major: Optional[MapFun] = None
    map_default: Optional[MapFun] = None
    small_map_row_major: Optional[SmallMapFun] = None
    small_map_col_major: Optional[SmallMapFun] = None
    small_map_block_major: Optional[SmallMapFun] = None
    small_map_default: Optional[SmallMapFun] = None

    def new(self, width: int, height: int, size: int) -> Any:
        """Create an array using this suite's preferred layout."""
        return self.factory(width, height, size)

    def new_with_blocksize(
        self, width: int, height: int, size: int, blocksize: int
    ) -> Any:
        """Create an array with the given block size, where blocks apply."""
        return self.blocked_factory(width, height, size, blocksize)

    def blocksize(self, array: Any) -> int:
        """Return the block side length of ``array``."""
        return self.blocksize_of(array)


def _plain_new_with_blocksize(
    width: int, height: int, size: int, blocksize: int
) -> UArray2:
    del blocksize  # plain arrays have no blocks
    return UArray2(width, height, size)


def _plain_blocksize(array: UArray2) -> int:
    del array
    return 1


def _plain_map_row_major(array: UArray2, apply: ApplyFun) -> None:
    array.map_row_major(apply)


def _plain_map_col_major(array: UArray2, apply: ApplyFun) -> None:
    array.map_col_major(apply)


def _plain_small_map_row_major(array: UArray2, apply: SmallApplyFun) -> None:
    if apply is None:
        raise TypeError("apply must be callable")
    for _col, _row, value in array.row_major():
        apply(value)


def _plain_small_map_col_major(array: UArray2, apply: SmallApplyFun) -> None:
    if apply is None:
        raise TypeError("apply must be callable")
    for _col, _row, value in array.col_major():
        apply(value)


def _blocked_blocksize(array: UArray2b) -> int:
    return array.blocksize


def _blocked_map_block_major(array: UArray2b, apply: ApplyFun) -> None:
    array.map(apply)


def _blocked_small_map_block_major(array: UArray2b, apply: SmallApplyFun) -> None:
    if apply is None:
        raise TypeError("apply must be callable")
    for _col, _row, value in array.block_major():
        apply(value)


uarray2_methods_plain = A2Methods(
    name="plain",
    factory=UArray2,
    blocked_factory=_plain_new_with_blocksize,
    blocksize_of=_plain_blocksize,
    map_row_major=_plain_map_row_major,
    map_col_major=_plain_map_col_major,
    map_block_major=None,
    map_default=_plain_map_row_major,
    small_map_row_major=_plain_small_map_row_major,
    small_map_col_major=_plain_small_map_col_major,
    small_map_block_major=None,
    small_map_default=_plain_small_map_row_major,
)

uarray2_methods_blocked = A2Methods(
    name="blocked",
    factory=UArray2b.new_64k_block,
    blocked_factory=UArray2b,
    blocksize_of=_blocked_blocksize,
    map_row_major=None,
    map_col_major=None,
    map_block_major=_blocked_map_block_major,
    map_default=_blocked_map_block_major,
    small_map_row_major=None,
    small_map_col_major=None,
    small_map_block_major=_blocked_small_map_block_major,
    small_map_default=_blocked_small_map_block_major,
)


def has_minimum_methods(methods: A2Methods) -> bool:
    """True if the suite can create arrays and report their block size."""
    return all(
        callable(op)
        for op in (methods.factory, methods.blocked_factory, methods.blocksize_of)
    )


def has_small_plain_methods(methods: A2Methods) -> bool:
    """True if the suite offers small row- and column-major mapping."""
    return (
        methods.small_map_default is not None
        and methods.small_map_row_major is not None
        and methods.small_map_col_major is not None
    )


def has_plain_methods(methods: A2Methods) -> bool:
    """True if the suite offers full row- and column-major mapping."""
    return (
        methods.map_default is not None
        and methods.map_row_major is not None
        and methods.map_col_major is not None
    )


def has_small_blocked_methods(methods: A2Methods) -> bool:
    """True if the suite offers small block-major mapping."""
    return (
        methods.small_map_default is not None
        and methods.small_map_block_major is not None
    )


def has_blocked_methods(methods: A2Methods) -> bool:
    """True if the suite offers full block-major mapping."""
    return methods.map_default is not None and methods.map_block_major is not None