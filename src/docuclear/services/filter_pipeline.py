"""Tone and sharpness filters for the rectified page.

Per pixel, in a fixed order: grayscale (GRAYSCALE/BINARY), luminance tone
curve (ENHANCED), brightness/contrast, binary threshold (BINARY), clamp.
An optional 5-tap sharpen runs afterwards. Alpha is never modified.
"""

import logging

import numpy as np

from docuclear.services.settings import FilterMode, ProcessorSettings
from docuclear.services.surface import PixelSurface, luminance

logger = logging.getLogger(__name__)

# Tone curve knees for ENHANCED mode
_HIGHLIGHT_KNEE = 180.0
_HIGHLIGHT_GAIN = 1.2
_SHADOW_KNEE = 100.0
_SHADOW_GAIN = 0.5

# Brightness/contrast slider scaling
_SLIDER_GAIN = 1.5


def contrast_factor(contrast: float) -> float:
    """Standard contrast correction factor for a slider value in [-100, 100]."""
    c = contrast * _SLIDER_GAIN
    return (259.0 * (c + 255.0)) / (255.0 * (259.0 - c))


def _tone_curve(rgb: np.ndarray) -> np.ndarray:
    """Darken shadows and whiten highlights on luminance, preserving hue."""
    lum = luminance(rgb)
    new_lum = np.where(
        lum > _HIGHLIGHT_KNEE,
        np.minimum(255.0, lum + (lum - _HIGHLIGHT_KNEE) * _HIGHLIGHT_GAIN),
        np.where(
            lum < _SHADOW_KNEE,
            np.maximum(0.0, lum - (_SHADOW_KNEE - lum) * _SHADOW_GAIN),
            lum,
        ),
    )
    ratio = np.ones_like(lum)
    np.divide(new_lum, lum, out=ratio, where=lum > 0)
    return rgb * ratio[..., None]


def _tone_pass(rgb: np.ndarray, settings: ProcessorSettings) -> np.ndarray:
    """Per-pixel tone transform on a float RGB array; returns clamped floats."""
    mode = settings.mode

    if mode in (FilterMode.GRAYSCALE, FilterMode.BINARY):
        gray = luminance(rgb)
        rgb = np.repeat(gray[..., None], 3, axis=-1)
    elif mode is FilterMode.ENHANCED:
        rgb = _tone_curve(rgb)

    factor = contrast_factor(settings.contrast)
    brightness = settings.brightness * _SLIDER_GAIN
    rgb = factor * (rgb - 128.0) + 128.0 + brightness

    if mode is FilterMode.BINARY:
        avg = rgb.mean(axis=-1)
        level = np.where(avg >= settings.threshold, 255.0, 0.0)
        rgb = np.repeat(level[..., None], 3, axis=-1)

    return np.clip(rgb, 0.0, 255.0)


def sharpen(surface: PixelSurface, amount: float) -> None:
    """Blend a 5-tap sharpen into the interior of ``surface`` in place.

    Kernel: center 5, the four axis neighbours -1. The 1-px border ring is
    left as is.

    Args:
        surface: Surface to modify
        amount: Blend weight in [0, 1]; 0 is a no-op
    """
    if amount <= 0 or surface.width < 3 or surface.height < 3:
        return

    src = surface.pixels[:, :, :3].astype(np.float64)
    center = src[1:-1, 1:-1]
    convolved = (
        5.0 * center
        - src[1:-1, :-2]
        - src[1:-1, 2:]
        - src[:-2, 1:-1]
        - src[2:, 1:-1]
    )
    blended = center + (convolved - center) * amount
    surface.pixels[1:-1, 1:-1, :3] = np.rint(np.clip(blended, 0.0, 255.0)).astype(np.uint8)


def apply_filters(surface: PixelSurface, settings: ProcessorSettings) -> None:
    """Apply the tone pipeline and optional sharpening to ``surface`` in place.

    Args:
        surface: Page surface to modify
        settings: Immutable processing settings
    """
    rgb = surface.pixels[:, :, :3].astype(np.float64)
    surface.pixels[:, :, :3] = np.rint(_tone_pass(rgb, settings)).astype(np.uint8)

    if settings.sharpness > 0:
        sharpen(surface, settings.sharpness / 100.0)

    logger.debug(
        f"Filters applied to {surface.width}x{surface.height}: mode={settings.mode.value}, "
        f"brightness={settings.brightness}, contrast={settings.contrast}, "
        f"sharpness={settings.sharpness}"
    )
