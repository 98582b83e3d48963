"""Rotate or flip a PPM image, optionally timing the transformation."""

from __future__ import annotations

import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Optional

from locality.a2methods import (
    A2Methods,
    MapFun,
    uarray2_methods_blocked,
    uarray2_methods_plain,
)
from locality.cputiming import CPUTimer
from locality.pnm import RGB_SIZE, BadFormatError, Pixmap, read_ppm, write_ppm

PROGNAME = "ppmtrans"
ROTATIONS = (0, 90, 180, 270)
FLIPS = ("horizontal", "vertical")

# option -> (method suite, name of its mapping entry, description)
_MAJOR_OPTIONS = {
    "-row-major": (uarray2_methods_plain, "map_row_major", "row-major"),
    "-col-major": (uarray2_methods_plain, "map_col_major", "column-major"),
    "-block-major": (uarray2_methods_blocked, "map_block_major", "block-major"),
}

# Where the pixel at (col, row) of a width x height image lands.
_Destination = Callable[[int, int, int, int], "tuple[int, int]"]
_DESTINATIONS: dict[Any, _Destination] = {
    90: lambda col, row, width, height: (height - row - 1, col),
    180: lambda col, row, width, height: (width - col - 1, height - row - 1),
    270: lambda col, row, width, height: (row, width - col - 1),
    "horizontal": lambda col, row, width, height: (width - col - 1, row),
    "vertical": lambda col, row, width, height: (col, height - row - 1),
}


class UsageError(Exception):
    """Raised when the command line cannot be accepted."""

    def __init__(self, message: str = "", *, show_usage: bool = True) -> None:
        super().__init__(message)
        self.message = message
        self.show_usage = show_usage


@dataclass(frozen=True)
class Options:
    """What the command line asked for."""

    rotation: int = 0
    flip: Optional[str] = None
    methods: A2Methods = uarray2_methods_plain
    mapfun: MapFun = uarray2_methods_plain.map_default  # type: ignore[assignment]
    time_file: Optional[str] = None
    filename: Optional[str] = None


def usage_text(progname: str = PROGNAME) -> str:
    """Return the one-line usage message."""
    return (
        f"Usage: {progname} [-rotate <angle>] [-{{row,col,block}}-major] "
        f"[-time time_file] [filename]"
    )


def parse_args(argv: Sequence[str]) -> Options:
    """Parse command-line arguments (without the program name) into ``Options``."""
    rotation = 0
    flip: Optional[str] = None
    methods = uarray2_methods_plain
    mapfun = methods.map_default
    time_file: Optional[str] = None
    filename: Optional[str] = None

    args = iter(argv)
    for arg in args:
        if arg in _MAJOR_OPTIONS:
            methods, entry, what = _MAJOR_OPTIONS[arg]
            mapfun = getattr(methods, entry)
            if mapfun is None:
                raise UsageError(
                    f"{PROGNAME} does not support {what} mapping", show_usage=False
                )
        elif arg == "-rotate":
            value = next(args, None)
            if value is None:
                raise UsageError()
            try:
                rotation = int(value, 10)
            except ValueError:
                raise UsageError() from None
            if rotation not in ROTATIONS:
                raise UsageError("Rotation must be 0, 90 180 or 270")
        elif arg == "-flip":
            value = next(args, None)
            if value is None:
                raise UsageError()
            if value not in FLIPS:
                raise UsageError("Flip must be 'horizontal' or 'vertical'")
            flip = value
        elif arg == "-time":
            value = next(args, None)
            if value is None:
                raise UsageError()
            time_file = value
        elif arg.startswith("-"):
            raise UsageError(f"{PROGNAME}: unknown option '{arg}'")
        else:
            if next(args, None) is not None:
                raise UsageError("Too many arguments")
            filename = arg
            break

    if rotation != 0 and flip is not None:
        raise UsageError("Too many arguments", show_usage=False)

    assert mapfun is not None
    return Options(rotation, flip, methods, mapfun, time_file, filename)


def transform(
    image: Pixmap, rotation: int, flip: Optional[str], mapfun: MapFun
) -> Pixmap:
    """Return ``image`` rotated or flipped, visiting its pixels with ``mapfun``.

    A rotation of 0 with no flip returns ``image`` itself.
    """
    if rotation not in ROTATIONS:
        raise ValueError(f"rotation must be one of {ROTATIONS}, not {rotation}")
    if flip is not None and flip not in FLIPS:
        raise ValueError(f"flip must be one of {FLIPS}, not {flip!r}")
    if flip is not None and rotation != 0:
        raise ValueError("cannot both rotate and flip")
    if flip is None and rotation == 0:
        return image

    methods = image.methods
    width, height = image.width, image.height
    if rotation in (90, 270):
        new_width, new_height = height, width
    else:
        new_width, new_height = width, height

    target = methods.new_with_blocksize(
        new_width, new_height, RGB_SIZE, methods.blocksize(image.pixels)
    )
    destination = _DESTINATIONS[flip if flip is not None else rotation]

    def apply(col: int, row: int, array: Any, value: Any) -> None:
        target[destination(col, row, array.width, array.height)] = value

    mapfun(image.pixels, apply)
    return Pixmap(new_width, new_height, image.denominator, target, methods)


def write_timing(path: str, time_used: float, width: int, height: int) -> None:
    """Append the time per pixel, in nanoseconds, to the file at ``path``."""
    pixels = width * height
    if pixels <= 0:
        raise ValueError("image has no pixels")
    with open(path, "a", encoding="ascii") as out:
        out.write("Time taken per pixel %.0f nanoseconds\n" % (time_used / pixels))


def _read_image(options: Options) -> Pixmap:
    if options.filename is None:
        return read_ppm(sys.stdin.buffer, options.methods)
    with open(options.filename, "rb") as stream:
        return read_ppm(stream, options.methods)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the command; return the exit status."""
    if argv is None:
        argv = sys.argv[1:]
    try:
        options = parse_args(argv)
    except UsageError as err:
        if err.message:
            print(err.message, file=sys.stderr)
        if err.show_usage:
            print(usage_text(), file=sys.stderr)
        return 1

    try:
        image = _read_image(options)
    except OSError:
        print("cannot open file", file=sys.stderr)
        return 1
    except BadFormatError as err:
        print(f"{PROGNAME}: {err}", file=sys.stderr)
        return 1

    try:
        timer = CPUTimer()
        timer.start()
        result = transform(image, options.rotation, options.flip, options.mapfun)
        time_used = timer.stop()
        if options.time_file is not None:
            write_timing(options.time_file, time_used, image.width, image.height)
        write_ppm(sys.stdout.buffer, result)
        sys.stdout.buffer.flush()
    except (ValueError, OSError) as err:
        print(f"{PROGNAME}: {err}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())