"""Perspective rectification by inverse mapping and bilinear sampling.

Every destination pixel is mapped back into the source photo through the
homography. Pixels landing outside the photo become white paper instead of
an error: after correction a document rarely fills the whole rectangle.
"""

import logging

import numpy as np

from docuclear.constants import A4_RATIO, DEFAULT_TARGET_WIDTH
from docuclear.services.geometry import HomographyMatrix, Quadrilateral
from docuclear.services.homography import solve_homography
from docuclear.services.surface import PixelSurface, premultiplied_rgb

logger = logging.getLogger(__name__)


def a4_target_size(target_width: int = DEFAULT_TARGET_WIDTH) -> tuple[int, int]:
    """Portrait A4 output size for a given width."""
    if target_width <= 0:
        raise ValueError(f"Target width must be positive, got {target_width}")
    return target_width, round(target_width / A4_RATIO)


def warp_perspective(
    source: PixelSurface,
    homography: HomographyMatrix,
    target_width: int,
    target_height: int,
) -> PixelSurface:
    """Resample ``source`` into a new surface through ``homography``.

    Args:
        source: Full-resolution source image
        homography: Map from destination pixel coordinates to source coordinates
        target_width: Output width in pixels
        target_height: Output height in pixels

    Returns:
        Opaque output surface; out-of-projection pixels are white.
    """
    h0, h1, h2, h3, h4, h5, h6, h7, _ = homography.coefficients
    src_w, src_h = source.width, source.height

    ys, xs = np.mgrid[0:target_height, 0:target_width].astype(np.float64)
    with np.errstate(divide="ignore", invalid="ignore"):
        w = h6 * xs + h7 * ys + 1.0
        src_x = (h0 * xs + h1 * ys + h2) / w
        src_y = (h3 * xs + h4 * ys + h5) / w

    # NaN/Inf compare False, so degenerate denominators fall outside too
    inside = (src_x >= 0) & (src_x < src_w - 1) & (src_y >= 0) & (src_y < src_h - 1)

    out = np.full((target_height, target_width, 4), 255, dtype=np.uint8)
    if not np.any(inside):
        logger.debug("Projection misses the source image entirely")
        return PixelSurface(out)

    sx = src_x[inside]
    sy = src_y[inside]
    x0 = np.floor(sx).astype(np.intp)
    y0 = np.floor(sy).astype(np.intp)
    wx = (sx - x0)[:, None]
    wy = (sy - y0)[:, None]

    rgb = source.pixels[:, :, :3]
    if np.any(source.pixels[:, :, 3] < 255):
        rgb = premultiplied_rgb(source.pixels)
    sampled = (
        rgb[y0, x0] * ((1 - wx) * (1 - wy))
        + rgb[y0, x0 + 1] * (wx * (1 - wy))
        + rgb[y0 + 1, x0] * ((1 - wx) * wy)
        + rgb[y0 + 1, x0 + 1] * (wx * wy)
    )
    out[inside, :3] = np.clip(np.rint(sampled), 0, 255).astype(np.uint8)

    coverage = float(np.count_nonzero(inside)) / inside.size
    logger.debug(
        f"Warped {src_w}x{src_h} -> {target_width}x{target_height}, "
        f"{coverage:.1%} of output sampled from source"
    )
    return PixelSurface(out)


def rectify(
    source: PixelSurface,
    quad: Quadrilateral,
    target_width: int = DEFAULT_TARGET_WIDTH,
    target_height: int | None = None,
) -> PixelSurface:
    """Map the document inside ``quad`` onto an upright rectangle.

    The height defaults to the A4 portrait ratio for ``target_width``.

    Raises:
        DegenerateTransformError: If the corners cannot define a transform.
    """
    if target_height is None:
        target_width, target_height = a4_target_size(target_width)

    # Inverse mapping needs destination -> source, so the target rectangle is the "src" side
    target = Quadrilateral.from_rect(0.0, 0.0, float(target_width), float(target_height))
    homography = solve_homography(target, quad)
    logger.info(f"Rectifying document to {target_width}x{target_height}")
    return warp_perspective(source, homography, target_width, target_height)
