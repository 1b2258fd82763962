from __future__ import annotations

import logging
import math

from .image import Image, make_image

logger = logging.getLogger(__name__)

LUMA_WEIGHTS = (0.299, 0.587, 0.114)


class ChannelCountError(ValueError):
    pass


def _require_channels(image: Image, expected: int, operation: str) -> None:
    if image.c != expected:
        raise ChannelCountError(
            f"{operation} expects {expected} channels, got {image.c}"
        )


def rgb_to_grayscale(image: Image) -> Image:
    _require_channels(image, 3, "rgb_to_grayscale")
    logger.debug("Converting %dx%d image to grayscale", image.w, image.h)
    weight_r, weight_g, weight_b = LUMA_WEIGHTS
    gray = make_image(image.w, image.h, 1)
    for y in range(image.h):
        for x in range(image.w):
            r = image.get_pixel(x, y, 0)
            g = image.get_pixel(x, y, 1)
            b = image.get_pixel(x, y, 2)
            gray.set_pixel(x, y, 0, weight_r * r + weight_g * g + weight_b * b)
    return gray


def shift_image(image: Image, channel: int, amount: float) -> None:
    """Add ``amount`` to every sample of one channel. Results are not clamped."""
    logger.debug("Shifting channel %d by %s", channel, amount)
    for y in range(image.h):
        for x in range(image.w):
            image.set_pixel(x, y, channel, image.get_pixel(x, y, channel) + amount)


def scale_image(image: Image, channel: int, factor: float) -> None:
    """Multiply every sample of one channel by ``factor``. Results are not clamped."""
    logger.debug("Scaling channel %d by %s", channel, factor)
    for y in range(image.h):
        for x in range(image.w):
            image.set_pixel(x, y, channel, image.get_pixel(x, y, channel) * factor)


def clamp_image(image: Image) -> None:
    for k in range(image.c):
        for y in range(image.h):
            for x in range(image.w):
                value = image.get_pixel(x, y, k)
                if value < 0:
                    image.set_pixel(x, y, k, 0.0)
                elif value > 1:
                    image.set_pixel(x, y, k, 1.0)


def three_way_max(a: float, b: float, c: float) -> float:
    return max(a, b, c)


def three_way_min(a: float, b: float, c: float) -> float:
    return min(a, b, c)


def compute_chroma(max_value: float, min_value: float) -> float:
    return max_value - min_value


def rgb_to_hsv(image: Image) -> None:
    """
    Convert an RGB image to HSV in place.
    When several channels share the maximum, the first of R, G, B picks the hue formula.
    """
    _require_channels(image, 3, "rgb_to_hsv")
    logger.debug("Converting %dx%d image from RGB to HSV", image.w, image.h)
    for y in range(image.h):
        for x in range(image.w):
            r = image.get_pixel(x, y, 0)
            g = image.get_pixel(x, y, 1)
            b = image.get_pixel(x, y, 2)
            hue, saturation, value = _pixel_rgb_to_hsv(r, g, b)
            image.set_pixel(x, y, 0, hue)
            image.set_pixel(x, y, 1, saturation)
            image.set_pixel(x, y, 2, value)


def hsv_to_rgb(image: Image) -> None:
    """Convert an HSV image back to RGB in place."""
    _require_channels(image, 3, "hsv_to_rgb")
    logger.debug("Converting %dx%d image from HSV to RGB", image.w, image.h)
    for y in range(image.h):
        for x in range(image.w):
            hue = image.get_pixel(x, y, 0)
            saturation = image.get_pixel(x, y, 1)
            value = image.get_pixel(x, y, 2)
            r, g, b = _pixel_hsv_to_rgb(hue, saturation, value)
            image.set_pixel(x, y, 0, r)
            image.set_pixel(x, y, 1, g)
            image.set_pixel(x, y, 2, b)


def _pixel_rgb_to_hsv(r: float, g: float, b: float) -> tuple[float, float, float]:
    value = three_way_max(r, g, b)
    chroma = compute_chroma(value, three_way_min(r, g, b))
    saturation = chroma / value if value > 0 else 0.0

    if chroma == 0:
        h = 0.0
    elif r == value:
        h = math.fmod((g - b) / chroma, 6)
    elif g == value:
        h = (b - r) / chroma + 2
    else:
        h = (r - g) / chroma + 4

    hue = h / 6 + 1 if h < 0 else h / 6
    return hue, saturation, value


def _pixel_hsv_to_rgb(hue: float, saturation: float, value: float) -> tuple[float, float, float]:
    chroma = value * saturation
    h = hue * 6
    x = chroma * (1 - abs(math.fmod(h, 2) - 1))
    m = value - chroma
    sector = int(h) % 6
    if sector == 0:
        r, g, b = chroma, x, 0.0
    elif sector == 1:
        r, g, b = x, chroma, 0.0
    elif sector == 2:
        r, g, b = 0.0, chroma, x
    elif sector == 3:
        r, g, b = 0.0, x, chroma
    elif sector == 4:
        r, g, b = x, 0.0, chroma
    else:
        r, g, b = chroma, 0.0, x
    return r + m, g + m, b + m
