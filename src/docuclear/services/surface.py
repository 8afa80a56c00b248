"""RGBA pixel surface shared by every pipeline stage."""

from __future__ import annotations

import numpy as np

from docuclear.constants import LUMA_B, LUMA_G, LUMA_R

CHANNELS = 4


def luminance(rgb: np.ndarray) -> np.ndarray:
    """Weighted luminance of an ``(..., 3)`` array, as float64."""
    rgb = rgb.astype(np.float64, copy=False)
    return LUMA_R * rgb[..., 0] + LUMA_G * rgb[..., 1] + LUMA_B * rgb[..., 2]


def premultiplied_rgb(pixels: np.ndarray) -> np.ndarray:
    """RGB of an ``(..., 4)`` RGBA array scaled by its alpha, as float64.

    Transparent pixels read as black, the way they show on an empty canvas.
    """
    alpha = pixels[..., 3].astype(np.float64) / 255.0
    return pixels[..., :3].astype(np.float64) * alpha[..., None]


class PixelSurface:
    """An owned ``width x height`` buffer of 8-bit RGBA samples.

    The buffer is a ``(height, width, 4)`` uint8 array. ``flat`` exposes the
    same memory as ``(width * height, 4)`` so a pixel lives at
    ``index(x, y) = y * width + x``.
    """

    __slots__ = ("pixels",)

    def __init__(self, pixels: np.ndarray) -> None:
        if pixels.ndim != 3 or pixels.shape[2] != CHANNELS:
            raise ValueError(f"Expected a (height, width, 4) array, got shape {pixels.shape}")
        if pixels.dtype != np.uint8:
            raise ValueError(f"Expected uint8 samples, got {pixels.dtype}")
        self.pixels = np.ascontiguousarray(pixels)

    @classmethod
    def blank(
        cls, width: int, height: int, fill: tuple[int, int, int, int] = (0, 0, 0, 0)
    ) -> PixelSurface:
        """Allocate a surface filled with one RGBA value."""
        if width <= 0 or height <= 0:
            raise ValueError(f"Surface dimensions must be positive, got {width}x{height}")
        pixels = np.empty((height, width, CHANNELS), dtype=np.uint8)
        pixels[...] = fill
        return cls(pixels)

    @classmethod
    def from_array(cls, array: np.ndarray) -> PixelSurface:
        """Build a surface from a gray, RGB or RGBA uint8 array (copied)."""
        array = np.asarray(array)
        if array.dtype != np.uint8:
            raise ValueError(f"Expected uint8 samples, got {array.dtype}")
        if array.ndim == 2:
            array = np.repeat(array[:, :, None], 3, axis=2)
        if array.ndim == 3 and array.shape[2] == 3:
            alpha = np.full(array.shape[:2] + (1,), 255, dtype=np.uint8)
            array = np.concatenate([array, alpha], axis=2)
        return cls(array.copy())

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def flat(self) -> np.ndarray:
        return self.pixels.reshape(-1, CHANNELS)

    def index(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} surface")
        return y * self.width + x

    def get_pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        r, g, b, a = self.flat[self.index(x, y)]
        return int(r), int(g), int(b), int(a)

    def set_pixel(self, x: int, y: int, rgba: tuple[int, int, int, int]) -> None:
        self.flat[self.index(x, y)] = rgba

    def copy(self) -> PixelSurface:
        return PixelSurface(self.pixels.copy())

    def __repr__(self) -> str:
        return f"PixelSurface({self.width}x{self.height})"
