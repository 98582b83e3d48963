import pytest

from locality.uarray2b import UArray2b


def test_64k_block_fill_and_map():
    width, height, size = 5, 4, 4
    array = UArray2b.new_64k_block(width, height, size)
    assert array.blocksize == 128
    for row in range(height):
        for col in range(width):
            array[col, row] = row * col
    seen = []
    array.map(lambda col, row, a, elem: seen.append((col, row, elem)))
    # One block covers the whole array, so block order is row-major.
    assert seen == [(c, r, r * c) for r in range(height) for c in range(width)]


def test_64k_block_huge_elements_use_blocksize_one():
    array = UArray2b.new_64k_block(2, 2, 64 * 1024 + 1)
    assert array.blocksize == 1


def test_64k_block_exact_fit():
    array = UArray2b.new_64k_block(2, 2, 64 * 1024)
    assert array.blocksize == 1


def test_dimensions_are_kept():
    array = UArray2b(13, 15, 4, 4)
    assert (array.width, array.height, array.size, array.blocksize) == (13, 15, 4, 4)


def test_block_order_with_partial_blocks():
    array = UArray2b(3, 3, 4, 2)
    coords = [(c, r) for c, r, _ in array.block_major()]
    assert coords == [
        (0, 0), (1, 0), (0, 1), (1, 1),
        (2, 0), (2, 1),
        (0, 2), (1, 2),
        (2, 2),
    ]


def test_every_cell_round_trips():
    array = UArray2b(13, 15, 4, 4)
    for i in range(13):
        for j in range(15):
            array[i, j] = 1000 * i + j
    for i in range(13):
        for j in range(15):
            assert array[i, j] == 1000 * i + j


def test_map_visits_each_cell_once_with_its_value():
    array = UArray2b(7, 5, 4, 3)
    for r in range(5):
        for c in range(7):
            array[c, r] = (c, r)
    seen = []

    def check(col, row, a, value):
        assert a is array
        assert value == (col, row)
        seen.append((col, row))

    array.map(check)
    assert sorted(seen) == sorted((c, r) for c in range(7) for r in range(5))
    assert len(seen) == 35


def test_blocks_are_visited_contiguously():
    bs = 3
    array = UArray2b(8, 7, 4, bs)
    blocks = [(c // bs, r // bs) for c, r, _ in array.block_major()]
    finished = set()
    current = blocks[0]
    for block in blocks[1:]:
        if block != current:
            assert block not in finished
            finished.add(current)
            current = block


def test_map_can_write_cells():
    array = UArray2b(4, 4, 4, 2)

    def fill(col, row, a, value):
        a[col, row] = col + 10 * row

    array.map(fill)
    assert all(value == c + 10 * r for c, r, value in array.block_major())


def test_empty_array_maps_nothing():
    array = UArray2b(0, 0, 4, 2)
    calls = []
    array.map(lambda *args: calls.append(args))
    assert calls == []


@pytest.mark.parametrize("key", [(-1, 0), (0, -1), (5, 0), (0, 4)])
def test_out_of_bounds_raises(key):
    array = UArray2b(5, 4, 4, 2)
    for c in range(5):
        for r in range(4):
            array[c, r] = c + 10 * r
    with pytest.raises(IndexError):
        array[key]
    with pytest.raises(IndexError):
        array[key] = 0
    cells = sorted((c, r, value) for c, r, value in array.block_major())
    assert cells == [(c, r, c + 10 * r) for c in range(5) for r in range(4)]


@pytest.mark.parametrize(
    "args", [(2, 2, 4, 0), (-1, 2, 4, 2), (2, -1, 4, 2), (2, 2, 0, 2)]
)
def test_invalid_construction_raises(args):
    with pytest.raises(ValueError):
        UArray2b(*args)


def test_invalid_64k_construction_raises():
    with pytest.raises(ValueError):
        UArray2b.new_64k_block(2, 2, 0)