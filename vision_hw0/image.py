from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

PIXEL_MAX = 255


@dataclass
class Image:
    """Float image backed by a flat channel-planar list.

    Sample (x, y, k) lives at ``x + y*w + k*w*h``.
    """

    w: int
    h: int
    c: int
    data: list[float]

    @classmethod
    def from_dimensions(cls, w: int, h: int, c: int, fill: float = 0.0) -> "Image":
        if w < 0 or h < 0 or c < 0:
            raise ValueError("Image dimensions must not be negative")
        return cls(w, h, c, [float(fill)] * (w * h * c))

    @classmethod
    def from_data(cls, w: int, h: int, c: int, data: Iterable[float]) -> "Image":
        samples = [float(value) for value in data]
        if w < 0 or h < 0 or c < 0:
            raise ValueError("Image dimensions must not be negative")
        if len(samples) != w * h * c:
            raise ValueError("Sample data does not match provided dimensions")
        return cls(w, h, c, samples)

    def copy(self) -> "Image":
        return Image(self.w, self.h, self.c, list(self.data))

    def get_pixel(self, x: int, y: int, c: int) -> float:
        """Read a sample, clamping each coordinate to the nearest edge."""
        if not self.data:
            raise IndexError("Cannot read a pixel from an empty image")
        x = _clamp_index(x, self.w)
        y = _clamp_index(y, self.h)
        c = _clamp_index(c, self.c)
        return self.data[self.offset(x, y, c)]

    def set_pixel(self, x: int, y: int, c: int, value: float) -> None:
        """Write a sample; out-of-range coordinates are ignored."""
        if 0 <= x < self.w and 0 <= y < self.h and 0 <= c < self.c:
            self.data[self.offset(x, y, c)] = float(value)

    def offset(self, x: int, y: int, c: int) -> int:
        return x + y * self.w + c * self.w * self.h

    def to_pillow_image(self):
        from PIL import Image as PILImage

        if self.c == 1:
            mode = "L"
        elif self.c == 3:
            mode = "RGB"
        else:
            raise ValueError(f"Cannot convert a {self.c}-channel image to Pillow")
        plane = self.w * self.h
        raw = bytearray(plane * self.c)
        for k in range(self.c):
            base = k * plane
            for i in range(plane):
                raw[i * self.c + k] = _quantize(self.data[base + i])
        return PILImage.frombytes(mode, (self.w, self.h), bytes(raw))

    @classmethod
    def from_pillow_image(cls, image) -> "Image":
        if image.mode != "L":
            image = image.convert("RGB")
        channels = 1 if image.mode == "L" else 3
        raw = image.tobytes()
        plane = image.width * image.height
        data = [0.0] * (plane * channels)
        for i in range(plane):
            for k in range(channels):
                data[k * plane + i] = raw[i * channels + k] / PIXEL_MAX
        return cls(image.width, image.height, channels, data)


def make_image(w: int, h: int, c: int) -> Image:
    return Image.from_dimensions(w, h, c)


def _clamp_index(index: int, size: int) -> int:
    if index < 0:
        return 0
    if index >= size:
        return size - 1
    return index


def _quantize(value: float) -> int:
    return max(0, min(PIXEL_MAX, int(round(value * PIXEL_MAX))))
