"""Print-ready A4 PDF output for a processed page.

The page has no printer margin; the image is centered and scaled to fit
the sheet while keeping its aspect ratio, the way a borderless print of
the page would look.
"""

import logging
import os

from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from docuclear.config import APP_NAME
from docuclear.services.codec import flatten_on_white
from docuclear.services.surface import PixelSurface
from docuclear.utils.exceptions import EncodeError

logger = logging.getLogger(__name__)


def fit_on_page(
    image_width: float, image_height: float, page_width: float, page_height: float
) -> tuple[float, float, float, float]:
    """Largest centered placement of an image inside a page.

    Returns:
        Tuple of (x, y, width, height) in page units, origin bottom-left.
    """
    factor = min(page_width / image_width, page_height / image_height)
    draw_w = image_width * factor
    draw_h = image_height * factor
    return (page_width - draw_w) / 2.0, (page_height - draw_h) / 2.0, draw_w, draw_h


def export_pdf(surface: PixelSurface, output_path: str | os.PathLike, title: str = "") -> str:
    """Write ``surface`` as a single A4 page PDF.

    Landscape surfaces get a landscape sheet. Transparent areas (such as
    layout margins) print as white paper.

    Args:
        surface: Processed page
        output_path: Destination PDF path
        title: Optional document title metadata

    Returns:
        The output path.

    Raises:
        EncodeError: If the PDF cannot be written.
    """
    page_size = landscape(A4) if surface.width > surface.height else A4
    page_w, page_h = page_size
    x, y, draw_w, draw_h = fit_on_page(surface.width, surface.height, page_w, page_h)

    try:
        pdf = canvas.Canvas(str(output_path), pagesize=page_size)
        pdf.setCreator(APP_NAME)
        if title:
            pdf.setTitle(title)
        pdf.drawImage(ImageReader(flatten_on_white(surface)), x, y, width=draw_w, height=draw_h)
        pdf.showPage()
        pdf.save()
    except OSError as e:
        raise EncodeError("PDF", str(e)) from e

    logger.info(f"Saved A4 page PDF to {output_path}")
    return str(output_path)
