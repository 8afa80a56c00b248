"""Tests for the exception hierarchy."""

import pytest

from docuclear.utils.exceptions import (
    ConfigurationError,
    DecodeError,
    DegenerateTransformError,
    DocuClearError,
    EncodeError,
)


class TestDocuClearError:
    def test_message_only(self):
        assert str(DocuClearError("boom")) == "boom"

    def test_message_with_details(self):
        err = DocuClearError("boom", details="extra")
        assert str(err) == "boom (extra)"
        assert err.details == "extra"


class TestSubclasses:
    @pytest.mark.parametrize(
        "error",
        [
            DegenerateTransformError(step=3, pivot=0.0),
            DecodeError("photo.jpg", "truncated"),
            EncodeError("PNG"),
            ConfigurationError("mode", "bad"),
        ],
    )
    def test_all_derive_from_base(self, error):
        assert isinstance(error, DocuClearError)

    def test_degenerate_transform_fields(self):
        err = DegenerateTransformError(step=5, pivot=1e-14)
        assert err.step == 5
        assert err.pivot == 1e-14
        assert "step=5" in str(err)

    def test_decode_error_message(self):
        err = DecodeError("photo.jpg", "truncated")
        assert str(err) == "Could not decode image: photo.jpg - truncated"

    def test_encode_error_without_reason(self):
        assert str(EncodeError("WEBP")) == "Could not encode image as WEBP"

    def test_configuration_error_message(self):
        err = ConfigurationError("threshold", "300 is outside [0, 255]")
        assert err.setting_name == "threshold"
        assert str(err) == "Configuration error for 'threshold': 300 is outside [0, 255]"

    def test_configuration_error_without_setting(self):
        assert str(ConfigurationError()) == "Configuration error"
