"""
DocuClear - Python package for turning document photos into print-ready pages

This package detects a document inside a photo, rectifies its perspective
onto an A4 page and applies tone/sharpness filters for printing.
"""

__version__ = "1.0.0"
__author__ = "DocuClear Team"
__license__ = "GPL-3.0"


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the command line tool.

    Returns:
        The process exit code.
    """
    from docuclear.cli import main as cli_main

    return cli_main(argv)


__all__ = ["main", "__version__", "__author__", "__license__"]
