"""
DocuClear - Image Codec Service

Decoding photos into pixel surfaces and encoding surfaces into portable
image containers, both through Pillow.
"""

import base64
import io
import logging
import os

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from docuclear.constants import DEFAULT_IMAGE_QUALITY
from docuclear.services.surface import PixelSurface
from docuclear.utils.exceptions import DecodeError, EncodeError

logger = logging.getLogger(__name__)

# Formats that cannot carry an alpha channel are flattened onto white paper
_OPAQUE_FORMATS = {"JPEG", "BMP"}
_MIME_TYPES = {"PNG": "image/png", "JPEG": "image/jpeg", "WEBP": "image/webp", "BMP": "image/bmp"}
_FORMAT_ALIASES = {"JPG": "JPEG", "TIF": "TIFF"}


def normalize_format(image_format: str) -> str:
    fmt = image_format.upper().lstrip(".")
    return _FORMAT_ALIASES.get(fmt, fmt)


def decode_image(source: bytes | str | os.PathLike) -> PixelSurface:
    """Decode encoded image bytes or a file path into an RGBA surface.

    EXIF orientation is applied so the surface matches what a viewer shows.

    Raises:
        DecodeError: If the data is missing or not a readable image.
    """
    label = f"<{len(source)} bytes>" if isinstance(source, bytes) else str(source)
    stream = io.BytesIO(source) if isinstance(source, bytes) else source
    try:
        with Image.open(stream) as img:
            img = ImageOps.exif_transpose(img)
            rgba = img.convert("RGBA")
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        raise DecodeError(label, str(e)) from e

    surface = PixelSurface(np.array(rgba, dtype=np.uint8))
    logger.debug(f"Decoded {label} into {surface.width}x{surface.height} surface")
    return surface


def load_image(path: str | os.PathLike) -> PixelSurface:
    """Decode an image file."""
    if not os.path.isfile(path):
        raise DecodeError(str(path), "file not found")
    return decode_image(path)


def flatten_on_white(surface: PixelSurface) -> Image.Image:
    """Composite the surface over opaque white and return an RGB image."""
    rgba = Image.fromarray(surface.pixels)
    background = Image.new("RGBA", rgba.size, (255, 255, 255, 255))
    return Image.alpha_composite(background, rgba).convert("RGB")


def encode_image(
    surface: PixelSurface,
    image_format: str = "PNG",
    quality: int = DEFAULT_IMAGE_QUALITY,
) -> bytes:
    """Encode a surface into an image container.

    Args:
        surface: Surface to encode
        image_format: Pillow format name (PNG, JPEG, WEBP, ...)
        quality: Quality for lossy formats (1-100)

    Raises:
        EncodeError: If Pillow cannot write the format.
    """
    fmt = normalize_format(image_format)
    if not 1 <= quality <= 100:
        raise EncodeError(fmt, f"quality {quality} outside [1, 100]")

    if fmt in _OPAQUE_FORMATS:
        img = flatten_on_white(surface)
    else:
        img = Image.fromarray(surface.pixels)

    buffer = io.BytesIO()
    try:
        if fmt in ("JPEG", "WEBP"):
            img.save(buffer, format=fmt, quality=quality)
        else:
            img.save(buffer, format=fmt)
    except (KeyError, OSError, ValueError) as e:
        raise EncodeError(fmt, str(e)) from e

    data = buffer.getvalue()
    logger.debug(f"Encoded {surface.width}x{surface.height} surface as {fmt} ({len(data)} bytes)")
    return data


def to_data_uri(
    surface: PixelSurface,
    image_format: str = "PNG",
    quality: int = DEFAULT_IMAGE_QUALITY,
) -> str:
    """Encode a surface as a base64 ``data:`` URI."""
    fmt = normalize_format(image_format)
    payload = base64.b64encode(encode_image(surface, fmt, quality)).decode("ascii")
    mime = _MIME_TYPES.get(fmt, f"image/{fmt.lower()}")
    return f"data:{mime};base64,{payload}"


def save_image(
    surface: PixelSurface,
    path: str | os.PathLike,
    quality: int = DEFAULT_IMAGE_QUALITY,
) -> str:
    """Encode a surface using the format implied by the file suffix."""
    suffix = os.path.splitext(str(path))[1]
    if not suffix:
        raise EncodeError("<none>", f"cannot infer an image format from '{path}'")
    data = encode_image(surface, suffix, quality)
    try:
        with open(path, "wb") as f:
            f.write(data)
    except OSError as e:
        raise EncodeError(normalize_format(suffix), str(e)) from e
    logger.info(f"Saved page image to {path}")
    return str(path)
