"""
Document scanning pipeline.

Detection -> validation (or default crop) -> rectification -> layout and
tone filters. Every stage works on its own surface; the rectified page is
kept unmodified so settings can be re-applied to it from scratch.
"""

import logging
from dataclasses import dataclass

from docuclear.constants import DEFAULT_IMAGE_QUALITY, DEFAULT_TARGET_WIDTH
from docuclear.services.codec import encode_image
from docuclear.services.edge_detection import (
    default_crop,
    detect_document_edges,
    validate_detection,
)
from docuclear.services.geometry import Quadrilateral
from docuclear.services.page_layout import process_page
from docuclear.services.perspective_warp import rectify
from docuclear.services.settings import ProcessorSettings
from docuclear.services.surface import PixelSurface

logger = logging.getLogger(__name__)


def perform_warp(
    image: PixelSurface,
    quad: Quadrilateral,
    target_width: int = DEFAULT_TARGET_WIDTH,
    image_format: str = "PNG",
    quality: int = DEFAULT_IMAGE_QUALITY,
) -> bytes:
    """Rectify the document inside ``quad`` onto an A4 page and encode it.

    Raises:
        DegenerateTransformError: If the corners cannot define a transform.
        EncodeError: If the page cannot be encoded.
    """
    return encode_image(rectify(image, quad, target_width), image_format, quality)


@dataclass(frozen=True)
class DetectionResult:
    """Corners chosen for a photo and whether they came from detection."""

    quad: Quadrilateral
    detected: bool


class DocumentScanner:
    """
    Turns a document photo into a processed A4 page.

    Example:
        scanner = DocumentScanner()
        located = scanner.locate(photo)
        page = scanner.rectify(photo, located.quad)
        printable = scanner.process(page, ProcessorSettings(mode=FilterMode.BINARY))
    """

    def __init__(self, target_width: int = DEFAULT_TARGET_WIDTH):
        """
        Initialize the scanner.

        Args:
            target_width: Width of the rectified page in pixels; the height
                          follows from the A4 aspect ratio.
        """
        if target_width <= 0:
            raise ValueError(f"Target width must be positive, got {target_width}")
        self.target_width = target_width

    def locate(self, image: PixelSurface) -> DetectionResult:
        """Detect the document corners, falling back to the default crop."""
        quad = detect_document_edges(image)
        if quad is not None and validate_detection(quad, image.width, image.height):
            logger.info("Document boundary detected")
            return DetectionResult(quad, detected=True)

        if quad is None:
            logger.warning("No document boundary found, using default crop")
        else:
            logger.warning("Detected boundary is implausible, using default crop")
        return DetectionResult(default_crop(image.width, image.height), detected=False)

    def rectify(self, image: PixelSurface, quad: Quadrilateral) -> PixelSurface:
        """Perspective-correct the document inside ``quad``."""
        return rectify(image, quad, self.target_width)

    def process(self, rectified: PixelSurface, settings: ProcessorSettings) -> PixelSurface:
        """Apply layout and tone settings to a copy of the rectified page."""
        return process_page(rectified, settings)

    def scan(
        self,
        image: PixelSurface,
        settings: ProcessorSettings,
        quad: Quadrilateral | None = None,
    ) -> PixelSurface:
        """Run the whole pipeline on one photo.

        Args:
            image: Source photo
            settings: Tone and layout settings
            quad: Optional corners; detected (with fallback) when omitted

        Raises:
            DegenerateTransformError: If the corners cannot define a transform.
        """
        if quad is None:
            quad = self.locate(image).quad
        return self.process(self.rectify(image, quad), settings)
