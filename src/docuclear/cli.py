#!/usr/bin/env python3
"""
DocuClear CLI — document photo to print-ready page from the terminal.

Usage:
    python -m docuclear <command> [options]

Commands:
    detect      Detect document corners in a photo
    scan        Detect, rectify and process a photo into an A4 page
    filter      Apply layout and tone settings to an already rectified page

Examples:
    # Corners as JSON
    docuclear-cli detect photo.jpg --json

    # Full pipeline to PNG or to a printable A4 PDF
    docuclear-cli scan photo.jpg -o page.png
    docuclear-cli scan photo.jpg -o page.pdf --mode binary --threshold 140

    # Manual corners (TL, TR, BR, BL)
    docuclear-cli scan photo.jpg -o page.png --corners 120,80,1900,95,1950,2600,90,2580

    # Re-process a rectified page
    docuclear-cli filter page.png -o page-gray.png --mode grayscale --rotation 90
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from docuclear import __version__
from docuclear.config import APP_DESCRIPTION
from docuclear.utils.exceptions import ConfigurationError, DocuClearError
from docuclear.utils.i18n import _

# ---------------------------------------------------------------------------
# Argument helpers (shared)
# ---------------------------------------------------------------------------

_SETTING_FLAGS = ("threshold", "sharpness", "brightness", "contrast", "rotation", "margin", "mode")


def _parse_corners(text: str):
    """Parse "x1,y1,x2,y2,x3,y3,x4,y4" (TL, TR, BR, BL) into a Quadrilateral.

    Args:
        text: Comma-separated coordinates.

    Returns:
        The parsed Quadrilateral.

    Raises:
        ConfigurationError: If the list does not hold 8 numbers.
    """
    from docuclear.services.geometry import Quadrilateral

    parts = [p.strip() for p in text.split(",") if p.strip()]
    if len(parts) != 8:
        raise ConfigurationError(
            "corners",
            f"Invalid corner specification '{text}'. "
            "Expected 8 comma-separated numbers: TL, TR, BR, BL as x,y pairs.",
        )
    try:
        values = [float(p) for p in parts]
    except ValueError:
        raise ConfigurationError(
            "corners", f"Invalid corner specification '{text}'. Coordinates must be numbers."
        ) from None
    return Quadrilateral.from_points(zip(values[0::2], values[1::2], strict=True))


def _resolve_settings(args, config):
    """Merge saved processor defaults with the command line overrides."""
    from docuclear.services.settings import ProcessorSettings

    values = config.section("processor")
    for name in _SETTING_FLAGS:
        override = getattr(args, name, None)
        if override is not None:
            values[name] = override
    return ProcessorSettings.from_dict(values)


def _write_output(page, output: Path, quality: int, logger) -> None:
    """Write a processed page as a PDF or an image, chosen by suffix."""
    if output.suffix.lower() == ".pdf":
        from docuclear.services.pdf_export import export_pdf

        export_pdf(page, output, title=output.stem)
    else:
        from docuclear.services.codec import save_image

        save_image(page, output, quality=quality)
    logger.info(_("Page written to {0}").format(output))


# ---------------------------------------------------------------------------
# Argument parser construction
# ---------------------------------------------------------------------------


def _add_setting_arguments(parser: argparse.ArgumentParser) -> None:
    group = parser.add_argument_group(_("Page settings (default: saved configuration)"))
    group.add_argument(
        "--mode",
        choices=["original", "grayscale", "binary", "enhanced"],
        default=None,
        help=_("Visual mode."),
    )
    group.add_argument("--threshold", type=int, default=None, help=_("Binary threshold 0-255."))
    group.add_argument("--sharpness", type=int, default=None, help=_("Sharpness 0-100."))
    group.add_argument("--brightness", type=int, default=None, help=_("Brightness -100 to 100."))
    group.add_argument("--contrast", type=int, default=None, help=_("Contrast -100 to 100."))
    group.add_argument(
        "--rotation",
        type=int,
        choices=[0, 90, 180, 270],
        default=None,
        help=_("Clockwise rotation in degrees."),
    )
    group.add_argument("--margin", type=int, default=None, help=_("Page margin 0-50 percent."))
    group.add_argument(
        "--quality", type=int, default=None, help=_("Quality for lossy image formats (1-100).")
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with subcommands."""
    p = argparse.ArgumentParser(
        prog="docuclear-cli",
        description=APP_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("-v", "--verbose", action="store_true", help=_("Verbose logging (DEBUG)"))
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument(
        "--config", type=Path, default=None, help=_("Path to a JSON settings file.")
    )

    sub = p.add_subparsers(dest="command", help=_("Available commands"))

    # --- detect ---
    det_p = sub.add_parser("detect", help=_("Detect document corners in a photo"))
    det_p.add_argument("input", type=Path, help=_("Input image"))
    det_p.add_argument("--json", action="store_true", help=_("Print the result as JSON."))

    # --- scan ---
    scan_p = sub.add_parser("scan", help=_("Rectify and process a document photo"))
    scan_p.add_argument("input", type=Path, help=_("Input image"))
    scan_p.add_argument(
        "-o", "--output", type=Path, required=True, help=_("Output image or .pdf file")
    )
    scan_p.add_argument(
        "--corners",
        type=str,
        default=None,
        help=_("Document corners TL,TR,BR,BL as 'x1,y1,...,x4,y4'. Default: auto-detect."),
    )
    scan_p.add_argument(
        "--width", type=int, default=None, help=_("Rectified page width in pixels.")
    )
    _add_setting_arguments(scan_p)

    # --- filter ---
    filt_p = sub.add_parser("filter", help=_("Process an already rectified page"))
    filt_p.add_argument("input", type=Path, help=_("Input image"))
    filt_p.add_argument(
        "-o", "--output", type=Path, required=True, help=_("Output image or .pdf file")
    )
    _add_setting_arguments(filt_p)

    return p


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


def _cmd_detect(args, config, logger) -> int:
    """Handle the 'detect' command."""
    from docuclear.services.codec import load_image
    from docuclear.services.edge_detection import detect_document_edges, validate_detection

    image = load_image(args.input)
    quad = detect_document_edges(image)
    valid = quad is not None and validate_detection(quad, image.width, image.height)

    if args.json:
        result = {
            "width": image.width,
            "height": image.height,
            "found": quad is not None,
            "valid": valid,
            "corners": [[p.x, p.y] for p in quad] if quad is not None else None,
        }
        print(json.dumps(result, indent=2))
        return 0

    print(f"Image:      {image.width}x{image.height}")
    if quad is None:
        print("Corners:    not found")
        return 0
    for label, p in zip(("Top-left", "Top-right", "Bottom-right", "Bottom-left"), quad, strict=True):
        print(f"{label + ':':<12}({p.x:.1f}, {p.y:.1f})")
    print(f"Valid:      {'Yes' if valid else 'No'}")
    return 0


def _cmd_scan(args, config, logger) -> int:
    """Handle the 'scan' command."""
    from docuclear.services.codec import load_image
    from docuclear.services.scanner import DocumentScanner

    settings = _resolve_settings(args, config)
    quad = _parse_corners(args.corners) if args.corners else None
    width = args.width if args.width is not None else config.get("output.target_width")
    quality = args.quality if args.quality is not None else config.get("output.image_quality")

    image = load_image(args.input)
    logger.info(f"Loaded {args.input.name}: {image.width}x{image.height}")
    page = DocumentScanner(target_width=width).scan(image, settings, quad=quad)
    _write_output(page, args.output, quality, logger)
    return 0


def _cmd_filter(args, config, logger) -> int:
    """Handle the 'filter' command."""
    from docuclear.services.codec import load_image
    from docuclear.services.page_layout import process_page

    settings = _resolve_settings(args, config)
    quality = args.quality if args.quality is not None else config.get("output.image_quality")

    page = process_page(load_image(args.input), settings)
    _write_output(page, args.output, quality, logger)
    return 0


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    from docuclear.utils.config_manager import ConfigManager
    from docuclear.utils.logger import setup_logger

    setup_logger(logging.DEBUG if args.verbose else logging.INFO)
    logger = logging.getLogger("docuclear.cli")

    if not args.input.exists():
        print(_("Error: {0} not found").format(args.input), file=sys.stderr)
        return 1

    config = ConfigManager(str(args.config) if args.config else None)

    handlers = {
        "detect": _cmd_detect,
        "scan": _cmd_scan,
        "filter": _cmd_filter,
    }

    handler = handlers.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    try:
        return handler(args, config, logger)
    except (DocuClearError, ValueError) as e:
        logger.error(f"{args.command} failed: {e}")
        print(_("Error: {0}").format(e), file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
