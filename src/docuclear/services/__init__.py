"""
DocuClear - Services Package

Detection, rectification and page processing services.
"""

from docuclear.services.edge_detection import (
    default_crop,
    detect_document_edges,
    validate_detection,
)
from docuclear.services.filter_pipeline import apply_filters
from docuclear.services.geometry import HomographyMatrix, Point, Quadrilateral
from docuclear.services.homography import solve_homography
from docuclear.services.perspective_warp import rectify, warp_perspective
from docuclear.services.scanner import DocumentScanner, perform_warp
from docuclear.services.settings import FilterMode, ProcessorSettings
from docuclear.services.surface import PixelSurface

__all__ = [
    "DocumentScanner",
    "FilterMode",
    "HomographyMatrix",
    "PixelSurface",
    "Point",
    "ProcessorSettings",
    "Quadrilateral",
    "apply_filters",
    "default_crop",
    "detect_document_edges",
    "perform_warp",
    "rectify",
    "solve_homography",
    "validate_detection",
    "warp_perspective",
]
