"""Tests for image decoding and encoding."""

import base64
import io

import numpy as np
import pytest
from PIL import Image

from docuclear.services.codec import (
    decode_image,
    encode_image,
    flatten_on_white,
    load_image,
    normalize_format,
    save_image,
    to_data_uri,
)
from docuclear.services.surface import PixelSurface
from docuclear.utils.exceptions import DecodeError, EncodeError


class TestNormalizeFormat:
    def test_aliases(self):
        assert normalize_format("jpg") == "JPEG"
        assert normalize_format(".tif") == "TIFF"

    def test_passthrough(self):
        assert normalize_format("png") == "PNG"


class TestDecodeImage:
    """Tests for decode_image and load_image."""

    def test_png_round_trip_keeps_alpha(self, noise_surface):
        noise_surface.pixels[0, 0, 3] = 17
        decoded = decode_image(encode_image(noise_surface, "PNG"))
        np.testing.assert_array_equal(decoded.pixels, noise_surface.pixels)

    def test_rgb_source_becomes_opaque(self):
        buffer = io.BytesIO()
        Image.new("RGB", (3, 2), (10, 20, 30)).save(buffer, format="PNG")
        surface = decode_image(buffer.getvalue())
        assert (surface.width, surface.height) == (3, 2)
        assert surface.get_pixel(2, 1) == (10, 20, 30, 255)

    def test_garbage_bytes(self):
        with pytest.raises(DecodeError, match="bytes"):
            decode_image(b"definitely not an image")

    def test_load_from_path(self, tmp_path, noise_surface):
        path = tmp_path / "page.png"
        path.write_bytes(encode_image(noise_surface))
        assert load_image(path).width == noise_surface.width

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(DecodeError, match="file not found"):
            load_image(tmp_path / "missing.png")

    def test_decompression_bomb_rejected(self, monkeypatch, noise_factory):
        data = encode_image(noise_factory(64, 64))
        # Pillow raises its bomb error above twice the pixel limit
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 1000)
        with pytest.raises(DecodeError, match="bytes"):
            decode_image(data)


class TestEncodeImage:
    """Tests for encode_image and helpers."""

    def test_png_signature(self, noise_surface):
        assert encode_image(noise_surface, "png").startswith(b"\x89PNG")

    def test_jpeg_flattens_transparency_on_white(self):
        surface = PixelSurface.blank(8, 8, fill=(0, 0, 0, 0))
        data = encode_image(surface, "jpg", quality=95)
        assert data.startswith(b"\xff\xd8")
        decoded = decode_image(data)
        assert decoded.pixels[:, :, :3].min() >= 250

    def test_flatten_on_white_blends(self):
        surface = PixelSurface.blank(2, 2, fill=(0, 0, 0, 128))
        rgb = flatten_on_white(surface)
        assert rgb.mode == "RGB"
        assert abs(rgb.getpixel((0, 0))[0] - 127) <= 1

    def test_unknown_format(self, noise_surface):
        with pytest.raises(EncodeError):
            encode_image(noise_surface, "NOPE")

    @pytest.mark.parametrize("quality", [0, 101])
    def test_invalid_quality(self, noise_surface, quality):
        with pytest.raises(EncodeError, match="quality"):
            encode_image(noise_surface, "JPEG", quality=quality)

    def test_data_uri(self, noise_surface):
        uri = to_data_uri(noise_surface)
        prefix = "data:image/png;base64,"
        assert uri.startswith(prefix)
        assert base64.b64decode(uri[len(prefix) :]).startswith(b"\x89PNG")

    def test_jpeg_data_uri_mime(self, noise_surface):
        assert to_data_uri(noise_surface, "jpg").startswith("data:image/jpeg;base64,")


class TestSaveImage:
    def test_format_from_suffix(self, tmp_path, noise_surface):
        path = save_image(noise_surface, tmp_path / "page.jpg")
        with open(path, "rb") as f:
            assert f.read(2) == b"\xff\xd8"

    def test_missing_suffix(self, tmp_path, noise_surface):
        with pytest.raises(EncodeError, match="infer"):
            save_image(noise_surface, tmp_path / "page")

    def test_unwritable_path(self, tmp_path, noise_surface):
        with pytest.raises(EncodeError):
            save_image(noise_surface, tmp_path / "no" / "such" / "dir" / "page.png")
