#!/usr/bin/env python3
"""
DocuClear - Internationalization Module

This module initializes gettext for the command line messages.
"""

import gettext
import locale
import os
import sys
from collections.abc import Callable

TEXT_DOMAIN = "docuclear"


def _dummy_translate(text: str) -> str:
    """Fallback translation function that returns the original text.

    Args:
        text: The text to translate.

    Returns:
        The original text unchanged.
    """
    return text


# Initialize _ with the fallback function
_: Callable[[str], str] = _dummy_translate

try:
    try:
        locale.setlocale(locale.LC_ALL, "")
        # Decimal separators in corner lists are always dots
        locale.setlocale(locale.LC_NUMERIC, "C")
    except locale.Error:
        locale.setlocale(locale.LC_ALL, "C")

    locale_dirs = [
        "/usr/share/locale",
        os.path.join(sys.prefix, "share", "locale"),
        os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "locale"),
    ]

    for locale_dir in locale_dirs:
        if os.path.exists(locale_dir):
            gettext.bindtextdomain(TEXT_DOMAIN, locale_dir)

    gettext.textdomain(TEXT_DOMAIN)
    _ = gettext.gettext

except Exception:
    # Keep using the dummy function if there's an error
    pass
