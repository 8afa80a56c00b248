"""Page rotation and margin layout ahead of the tone filters."""

import logging

import cv2
import numpy as np

from docuclear.services.filter_pipeline import apply_filters
from docuclear.services.settings import VALID_ROTATIONS, ProcessorSettings
from docuclear.services.surface import PixelSurface

logger = logging.getLogger(__name__)

# Exact (cos, sin) per quarter turn keeps 90-degree steps free of resampling error
_QUARTER_TURNS = {0: (1.0, 0.0), 90: (0.0, 1.0), 180: (-1.0, 0.0), 270: (0.0, -1.0)}


def render_layout(surface: PixelSurface, rotation: int, margin: int) -> PixelSurface:
    """Draw ``surface`` onto a fresh canvas, rotated and shrunk by ``margin``.

    The canvas swaps width and height for 90/270 degrees. The content is
    rotated clockwise about the canvas center and scaled by
    ``1 - margin / 100``; uncovered canvas stays transparent.

    Args:
        surface: Rectified page (not modified)
        rotation: Clockwise rotation in degrees, one of 0/90/180/270
        margin: Margin percentage in [0, 100)

    Returns:
        New surface holding the laid-out page.
    """
    if rotation not in VALID_ROTATIONS:
        raise ValueError(f"Rotation must be one of {VALID_ROTATIONS}, got {rotation}")

    w, h = surface.width, surface.height
    if rotation % 180 == 0:
        canvas_w, canvas_h = w, h
    else:
        canvas_w, canvas_h = h, w

    if rotation == 0 and margin == 0:
        return surface.copy()

    scale = 1.0 - margin / 100.0
    cos_a, sin_a = _QUARTER_TURNS[rotation]

    # Forward map: dst = scale * R * (src - src_center) + dst_center, on pixel centers
    src_cx, src_cy = (w - 1) / 2.0, (h - 1) / 2.0
    dst_cx, dst_cy = (canvas_w - 1) / 2.0, (canvas_h - 1) / 2.0
    a, b = scale * cos_a, -scale * sin_a
    c, d = scale * sin_a, scale * cos_a
    matrix = np.array(
        [
            [a, b, dst_cx - a * src_cx - b * src_cy],
            [c, d, dst_cy - c * src_cx - d * src_cy],
        ],
        dtype=np.float64,
    )

    canvas = cv2.warpAffine(
        surface.pixels,
        matrix,
        (canvas_w, canvas_h),
        flags=cv2.INTER_LINEAR,
        borderMode=cv2.BORDER_CONSTANT,
        borderValue=(0, 0, 0, 0),
    )
    logger.debug(
        f"Laid out page {w}x{h} -> {canvas_w}x{canvas_h} "
        f"(rotation={rotation}, scale={scale:.2f})"
    )
    return PixelSurface(canvas)


def process_page(rectified: PixelSurface, settings: ProcessorSettings) -> PixelSurface:
    """Lay out the rectified page and run the tone filters on the result.

    The input surface is left untouched, so new settings can be applied to
    the same rectified page again.
    """
    page = render_layout(rectified, settings.rotation, settings.margin)
    apply_filters(page, settings)
    return page
