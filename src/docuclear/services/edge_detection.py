"""Document boundary detection for photographed pages.

The detector works on a downscaled grayscale copy of the photo:
  1. Downscale so the larger side is at most 512 px (area resampling).
  2. Grayscale of the alpha-premultiplied colour, then 3x3 box blur to
     suppress paper and table texture.
  3. Sobel gradient magnitude with an adaptive threshold derived from the
     image's own mean gradient.
  4. The strong-edge pixels that are extremal along the two diagonals
     (x+y and x-y) become the four corners.

The result is only a candidate; callers run validate_detection() before
trusting it and fall back to default_crop() otherwise.
"""

import logging

import cv2
import numpy as np

from docuclear.constants import (
    DEFAULT_CROP_PADDING,
    DETECTION_MAX_DIM,
    EDGE_THRESHOLD_MULTIPLIER,
    MAX_DETECTION_AREA_RATIO,
    MIN_DETECTION_AREA_RATIO,
    MIN_EDGE_PIXEL_RATIO,
    MIN_EDGE_THRESHOLD,
    SCAN_MARGIN_RATIO,
)
from docuclear.services.geometry import Point, Quadrilateral
from docuclear.services.surface import PixelSurface, luminance, premultiplied_rgb

logger = logging.getLogger(__name__)


def _downscale(surface: PixelSurface) -> tuple[np.ndarray, float]:
    """Shrink the surface so its larger side fits DETECTION_MAX_DIM.

    Returns:
        Tuple of (RGBA array, scale factor applied)
    """
    w, h = surface.width, surface.height
    scale = min(1.0, DETECTION_MAX_DIM / max(w, h))
    if scale >= 1.0:
        return surface.pixels, 1.0

    sw = max(1, int(w * scale))
    sh = max(1, int(h * scale))
    small = cv2.resize(surface.pixels, (sw, sh), interpolation=cv2.INTER_AREA)
    return small, scale


def _box_blur(gray: np.ndarray) -> np.ndarray:
    """3x3 mean filter on the interior; the 1-px ring keeps its input value."""
    blurred = gray.copy()
    h, w = gray.shape
    if h < 3 or w < 3:
        return blurred

    acc = np.zeros((h - 2, w - 2), dtype=np.float64)
    for dy in range(3):
        for dx in range(3):
            acc += gray[dy : dy + h - 2, dx : dx + w - 2]
    blurred[1:-1, 1:-1] = acc / 9.0
    return blurred


def _sobel_magnitude(img: np.ndarray) -> tuple[np.ndarray, float]:
    """Sobel gradient magnitude on the interior.

    Returns:
        Tuple of (magnitude map with a zero border, mean interior magnitude)
    """
    h, w = img.shape
    magnitude = np.zeros((h, w), dtype=np.float64)
    if h < 3 or w < 3:
        return magnitude, 0.0

    tl, tc, tr = img[:-2, :-2], img[:-2, 1:-1], img[:-2, 2:]
    ml, mr = img[1:-1, :-2], img[1:-1, 2:]
    bl, bc, br = img[2:, :-2], img[2:, 1:-1], img[2:, 2:]

    # Gx: [-1 0 1; -2 0 2; -1 0 1]   Gy: [-1 -2 -1; 0 0 0; 1 2 1]
    gx = (tr + 2 * mr + br) - (tl + 2 * ml + bl)
    gy = (bl + 2 * bc + br) - (tl + 2 * tc + tr)

    interior = np.hypot(gx, gy)
    magnitude[1:-1, 1:-1] = interior
    return magnitude, float(interior.mean())


def detect_document_edges(surface: PixelSurface) -> Quadrilateral | None:
    """Detect the four corners of a document inside a photo.

    Args:
        surface: Full-resolution source image

    Returns:
        Corners in source coordinates ordered TL, TR, BR, BL, or None when
        too few strong edges were found.
    """
    small, scale = _downscale(surface)
    sh, sw = small.shape[:2]

    gray = _box_blur(luminance(premultiplied_rgb(small)))
    magnitude, avg_gradient = _sobel_magnitude(gray)

    # Relative to image complexity: weak texture edges fall below it
    threshold = max(MIN_EDGE_THRESHOLD, avg_gradient * EDGE_THRESHOLD_MULTIPLIER)

    # Skip a safety margin so the image frame itself is never taken as the page edge
    margin = int(min(sw, sh) * SCAN_MARGIN_RATIO)
    region = magnitude[margin : sh - margin, margin : sw - margin]
    logger.debug(
        f"Edge scan {sw}x{sh} (scale={scale:.3f}): avg_gradient={avg_gradient:.2f}, "
        f"threshold={threshold:.2f}, margin={margin}"
    )
    if region.size == 0:
        return None

    ys, xs = np.nonzero(region > threshold)
    found = len(xs)
    if found == 0 or found < region.size * MIN_EDGE_PIXEL_RATIO:
        logger.debug(f"Only {found} edge pixels in {region.size} scanned, no document found")
        return None

    # nonzero() yields row-major order and argmin/argmax keep the first hit,
    # so ties resolve to the first pixel met in a top-to-bottom scan.
    xs = xs + margin
    ys = ys + margin
    sums = xs + ys
    diffs = xs - ys
    picks = (
        int(np.argmin(sums)),  # top-left
        int(np.argmax(diffs)),  # top-right
        int(np.argmax(sums)),  # bottom-right
        int(np.argmin(diffs)),  # bottom-left
    )

    unscale = 1.0 / scale
    quad = Quadrilateral(*(Point(float(xs[i]) * unscale, float(ys[i]) * unscale) for i in picks))
    logger.debug(
        f"Detected corners: TL=({quad.top_left.x:.0f},{quad.top_left.y:.0f}), "
        f"TR=({quad.top_right.x:.0f},{quad.top_right.y:.0f}), "
        f"BR=({quad.bottom_right.x:.0f},{quad.bottom_right.y:.0f}), "
        f"BL=({quad.bottom_left.x:.0f},{quad.bottom_left.y:.0f}) from {found} edge pixels"
    )
    return quad


def validate_detection(quad: Quadrilateral, width: float, height: float) -> bool:
    """Check that a detected quadrilateral covers a plausible part of the image.

    Tiny areas are noise; near-full coverage means the background was never
    separated from the page.
    """
    image_area = width * height
    if image_area <= 0:
        return False
    ratio = quad.area() / image_area
    return MIN_DETECTION_AREA_RATIO < ratio < MAX_DETECTION_AREA_RATIO


def default_crop(width: float, height: float) -> Quadrilateral:
    """Centered rectangle inset by DEFAULT_CROP_PADDING of each dimension."""
    pad_x = width * DEFAULT_CROP_PADDING
    pad_y = height * DEFAULT_CROP_PADDING
    return Quadrilateral.from_rect(pad_x, pad_y, width - pad_x, height - pad_y)
