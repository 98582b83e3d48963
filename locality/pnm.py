"""Read and write colour PPM images into 2D arrays of RGB pixels."""

from __future__ import annotations

import struct
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, BinaryIO

from locality.a2methods import A2Methods

_WHITESPACE = b" \t\n\r\v\f"
_DIGITS = b"0123456789"
_MAX_DENOMINATOR = 65535
RGB_SIZE = 12  # three unsigned 32-bit samples


class BadFormatError(Exception):
    """Raised when the input is not a well-formed PPM image."""


@dataclass(frozen=True)
class Rgb:
    """A coloured pixel as scaled integers over the image's denominator."""

    red: int
    green: int
    blue: int


@dataclass
class Pixmap:
    """An image: its size, sample denominator and a 2D array of ``Rgb``."""

    width: int
    height: int
    denominator: int
    pixels: Any
    methods: A2Methods


class _Scanner:
    def __init__(self, data: bytes) -> None:
        self.data = data
        self.pos = 0

    def skip_space(self) -> None:
        data = self.data
        while self.pos < len(data):
            if data[self.pos] in _WHITESPACE:
                self.pos += 1
            elif data[self.pos : self.pos + 1] == b"#":
                end = data.find(b"\n", self.pos)
                self.pos = len(data) if end < 0 else end + 1
            else:
                break

    def integer(self, what: str) -> int:
        self.skip_space()
        start = self.pos
        while self.pos < len(self.data) and self.data[self.pos] in _DIGITS:
            self.pos += 1
        if start == self.pos:
            raise BadFormatError(f"expected {what}")
        return int(self.data[start : self.pos])


def _triples(samples: Iterator[int], maxval: int) -> Iterator[Rgb]:
    for red, green, blue in zip(samples, samples, samples):
        if red > maxval or green > maxval or blue > maxval:
            raise BadFormatError(f"sample exceeds maximum value {maxval}")
        yield Rgb(red, green, blue)


def read_ppm(stream: BinaryIO, methods: A2Methods) -> Pixmap:
    """Read a P3 or P6 image from a binary stream into arrays made by ``methods``."""
    scanner = _Scanner(stream.read())
    magic = scanner.data[:2]
    if magic not in (b"P3", b"P6"):
        raise BadFormatError("not a PPM file")
    scanner.pos = 2
    width = scanner.integer("width")
    height = scanner.integer("height")
    maxval = scanner.integer("maximum value")
    if not 1 <= maxval <= _MAX_DENOMINATOR:
        raise BadFormatError(f"maximum value {maxval} out of range")

    count = width * height * 3
    if magic == b"P3":
        samples = iter([scanner.integer("sample") for _ in range(count)])
    else:
        if scanner.pos >= len(scanner.data) or scanner.data[scanner.pos] not in _WHITESPACE:
            raise BadFormatError("missing whitespace before raster")
        start = scanner.pos + 1
        sample_width = 1 if maxval < 256 else 2
        raster = scanner.data[start : start + count * sample_width]
        if len(raster) < count * sample_width:
            raise BadFormatError("raster is truncated")
        if sample_width == 1:
            samples = iter(raster)
        else:
            samples = iter(struct.unpack(f">{count}H", raster))

    pixels = methods.new(width, height, RGB_SIZE)
    pixel_iter = _triples(samples, maxval)
    for row in range(height):
        for col in range(width):
            pixels[col, row] = next(pixel_iter)
    return Pixmap(width, height, maxval, pixels, methods)


def write_ppm(stream: BinaryIO, pixmap: Pixmap) -> None:
    """Write ``pixmap`` to a binary stream as a P6 image."""
    if pixmap.width == 0 or pixmap.height == 0:
        raise ValueError("cannot write an empty pixmap")
    denominator = pixmap.denominator
    if not 1 <= denominator <= _MAX_DENOMINATOR:
        raise ValueError(f"denominator {denominator} out of range")

    samples: list[int] = []
    for row in range(pixmap.height):
        for col in range(pixmap.width):
            pixel = pixmap.pixels[col, row]
            for value in (pixel.red, pixel.green, pixel.blue):
                if not 0 <= value <= denominator:
                    raise ValueError(
                        f"sample {value} at ({col}, {row}) exceeds {denominator}"
                    )
                samples.append(value)

    header = f"P6\n{pixmap.width} {pixmap.height}\n{denominator}\n".encode("ascii")
    if denominator < 256:
        raster = bytes(samples)
    else:
        raster = struct.pack(f">{len(samples)}H", *samples)
    stream.write(header + raster)