"""
DocuClear - Utils Package

Utility modules for the application.
"""

from docuclear.utils.exceptions import (
    ConfigurationError,
    DecodeError,
    DegenerateTransformError,
    DocuClearError,
    EncodeError,
)
from docuclear.utils.i18n import _

__all__ = [
    "_",
    "ConfigurationError",
    "DecodeError",
    "DegenerateTransformError",
    "DocuClearError",
    "EncodeError",
]
