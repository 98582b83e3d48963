# locality

Two-dimensional arrays with different memory layouts, and a command that
uses them to rotate and flip PPM images while it measures the CPU time each
layout takes.

## Installing

```
pip install .
```

Install with the `test` extra (`pip install .[test]`) to run the tests with
pytest.

## The `ppmtrans` command

```
ppmtrans [-rotate <angle>] [-flip horizontal|vertical] [-{row,col,block}-major] [-time time_file] [filename]
```

The same command can be run as `python -m locality.ppmtrans`.

- `-rotate` takes 0, 90, 180 or 270 degrees. Any other value is refused.
- `-flip` mirrors the image `horizontal`ly or `vertical`ly. It cannot be
  combined with a non-zero rotation.
- `-row-major` and `-col-major` store the image in a plain array and visit
  its pixels row by row or column by column. `-block-major` stores it in a
  blocked array and visits it block by block. Row-major is the default.
- `-time` appends a line `Time taken per pixel N nanoseconds` to the named
  file, giving the CPU time of the transformation divided by the number of
  pixels.
- Without a file name the image is read from standard input. It may be a
  plain (P3) or raw (P6) PPM. The result is always written to standard
  output as a raw (P6) PPM. With no rotation and no flip the image is
  written back unchanged.
- A bad command line prints a message and the usage line to standard error;
  an unreadable file or malformed image prints a message. In every error
  case the exit status is 1.

Example:

```
ppmtrans -rotate 90 -block-major -time timings.txt photo.ppm > rotated.ppm
```

## The library

- `locality.uarray2.UArray2(width, height, size)`: a 2D array stored row by
  row and indexed as `array[col, row]`. Cells start out as `None`.
  `row_major()` and `col_major()` yield `(col, row, value)`;
  `map_row_major(apply)` and `map_col_major(apply)` call
  `apply(col, row, array, value)` for every cell. Out-of-range indexes raise
  `IndexError`.
- `locality.uarray2b.UArray2b(width, height, size, blocksize)`: a 2D array
  stored in square blocks of side `blocksize`. `block_major()` and
  `map(apply)` visit every cell of one block before moving to the next.
  `UArray2b.new_64k_block(width, height, size)` picks the largest block
  whose cells, at `size` bytes each, fit in 64 KB (at least 1).
- `locality.a2methods`: the `A2Methods` suites `uarray2_methods_plain` and
  `uarray2_methods_blocked` give one interface (`new`, `new_with_blocksize`,
  `blocksize` and the `map_*` / `small_map_*` entries, `None` where a
  layout does not support an order) over both arrays. The functions
  `has_minimum_methods`, `has_plain_methods`, `has_small_plain_methods`,
  `has_blocked_methods` and `has_small_blocked_methods` report which
  entries a suite provides.
- `locality.pnm`: `read_ppm(stream, methods)` reads a P3 or P6 image from a
  binary stream into a `Pixmap` of `Rgb` pixels, raising `BadFormatError`
  on malformed input; `write_ppm(stream, pixmap)` writes a P6 image.
- `locality.cputiming.CPUTimer`: measures process CPU time in nanoseconds,
  through `start()` and `stop()` or as a context manager that stores the
  result in `elapsed`.
- `locality.ppmtrans`: `parse_args`, `transform` and `write_timing` are the
  pieces of the command, usable on their own.

```python
from locality.uarray2b import UArray2b
from locality.cputiming import CPUTimer

grid = UArray2b(5, 4, 4, 2)
grid[2, 3] = 42

with CPUTimer() as timer:
    cells = list(grid.block_major())
print(timer.elapsed)
```

## What it does not do

Only PPM colour images are read; PBM, PGM and other image formats are not.
Pixels are held as Python objects, so the `size` of an array is a recorded
number of bytes per element rather than real storage.