"""
DocuClear - Numeric Constants

Simple numeric constants with ZERO internal imports to avoid circular dependencies.
For application-level constants (strings, paths), use config.py.
"""

from typing import Final

# ============================================================================
# Page Geometry
# ============================================================================

A4_RATIO: Final[float] = 210 / 297
DEFAULT_TARGET_WIDTH: Final[int] = 1240  # A4 @ ~150 dpi

# ============================================================================
# Edge Detection
# ============================================================================

DETECTION_MAX_DIM: Final[int] = 512
MIN_EDGE_THRESHOLD: Final[float] = 30.0
EDGE_THRESHOLD_MULTIPLIER: Final[float] = 2.5
SCAN_MARGIN_RATIO: Final[float] = 0.05
MIN_EDGE_PIXEL_RATIO: Final[float] = 0.001

# Area ratio gate for accepting a detection
MIN_DETECTION_AREA_RATIO: Final[float] = 0.05
MAX_DETECTION_AREA_RATIO: Final[float] = 0.98

# Fallback crop inset (fraction of each dimension)
DEFAULT_CROP_PADDING: Final[float] = 0.1

# ============================================================================
# Homography
# ============================================================================

PIVOT_EPSILON: Final[float] = 1e-10

# ============================================================================
# Luminance Weights (ITU-R BT.601)
# ============================================================================

LUMA_R: Final[float] = 0.299
LUMA_G: Final[float] = 0.587
LUMA_B: Final[float] = 0.114

# ============================================================================
# Encoding Defaults
# ============================================================================

DEFAULT_IMAGE_QUALITY: Final[int] = 90
