"""Tests for the tone and sharpness filters."""

import numpy as np
import pytest

from docuclear.services.filter_pipeline import (
    _tone_pass,
    apply_filters,
    contrast_factor,
    sharpen,
)
from docuclear.services.settings import FilterMode, ProcessorSettings
from docuclear.services.surface import PixelSurface

NEUTRAL = ProcessorSettings(sharpness=0, brightness=0, contrast=0, mode=FilterMode.ORIGINAL)


def _gray(value, width=4, height=4):
    return PixelSurface.blank(width, height, fill=(value, value, value, 255))


class TestContrastFactor:
    def test_zero_is_neutral(self):
        assert contrast_factor(0) == 1.0

    def test_positive_increases(self):
        assert contrast_factor(20) > 1.0

    def test_negative_decreases(self):
        assert 0.0 < contrast_factor(-20) < 1.0


class TestApplyFilters:
    """Tests for apply_filters."""

    def test_neutral_original_is_identity(self, noise_surface):
        before = noise_surface.pixels.copy()
        apply_filters(noise_surface, NEUTRAL)
        np.testing.assert_array_equal(noise_surface.pixels, before)

    def test_brightness_never_wraps(self, noise_factory):
        # Clamping must saturate instead of wrapping around 8 bits
        surface = noise_factory(32, 32, seed=3)
        before = surface.pixels[:, :, :3].copy()
        apply_filters(surface, NEUTRAL.replace(brightness=100))
        assert np.all(surface.pixels[:, :, :3] >= before)

    @pytest.mark.parametrize("mode", list(FilterMode))
    def test_extreme_contrast_saturates(self, mode):
        settings = ProcessorSettings(contrast=100, sharpness=100, mode=mode)
        light, dark = _gray(200), _gray(50)
        apply_filters(light, settings)
        apply_filters(dark, settings)
        assert np.all(light.pixels[:, :, :3] == 255)
        assert np.all(dark.pixels[:, :, :3] == 0)

    def test_brightness_saturates_at_white(self):
        surface = _gray(250)
        apply_filters(surface, NEUTRAL.replace(brightness=100))
        assert np.all(surface.pixels[:, :, :3] == 255)

    def test_negative_brightness_saturates_at_black(self):
        surface = _gray(5)
        apply_filters(surface, NEUTRAL.replace(brightness=-100))
        assert np.all(surface.pixels[:, :, :3] == 0)

    @pytest.mark.parametrize("sharpness", [0, 20, 100])
    def test_binary_output_is_pure(self, noise_factory, sharpness):
        surface = noise_factory(40, 30, seed=7)
        apply_filters(surface, ProcessorSettings(mode=FilterMode.BINARY, sharpness=sharpness))
        rgb = surface.pixels[:, :, :3]
        assert np.all(rgb[:, :, 0] == rgb[:, :, 1])
        assert np.all(rgb[:, :, 1] == rgb[:, :, 2])
        assert set(np.unique(rgb).tolist()) <= {0, 255}

    def test_binary_threshold(self):
        settings = NEUTRAL.replace(mode=FilterMode.BINARY)
        dark = _gray(100)
        apply_filters(dark, settings.replace(threshold=101))
        assert np.all(dark.pixels[:, :, :3] == 0)

        light = _gray(100)
        apply_filters(light, settings.replace(threshold=99))
        assert np.all(light.pixels[:, :, :3] == 255)

    def test_grayscale_equalizes_channels(self, noise_surface):
        apply_filters(noise_surface, NEUTRAL.replace(mode=FilterMode.GRAYSCALE))
        rgb = noise_surface.pixels[:, :, :3]
        assert np.all(rgb[:, :, 0] == rgb[:, :, 2])

    def test_grayscale_uses_luminance_weights(self):
        surface = PixelSurface.blank(3, 3, fill=(255, 0, 0, 255))
        apply_filters(surface, NEUTRAL.replace(mode=FilterMode.GRAYSCALE))
        assert surface.get_pixel(1, 1)[:3] == (76, 76, 76)

    def test_enhanced_tone_curve(self):
        black, mid, shadow, white = _gray(0), _gray(140), _gray(50), _gray(255)
        settings = NEUTRAL.replace(mode=FilterMode.ENHANCED)
        for s in (black, mid, shadow, white):
            apply_filters(s, settings)
        assert black.get_pixel(0, 0)[:3] == (0, 0, 0)
        assert mid.get_pixel(0, 0)[:3] == (140, 140, 140)
        assert abs(shadow.get_pixel(0, 0)[0] - 25) <= 1
        assert white.get_pixel(0, 0)[:3] == (255, 255, 255)

    def test_enhanced_whitens_paper(self):
        surface = _gray(200)
        apply_filters(surface, NEUTRAL.replace(mode=FilterMode.ENHANCED))
        assert surface.get_pixel(0, 0)[0] == 224

    def test_alpha_untouched(self, noise_surface):
        rng = np.random.default_rng(1)
        noise_surface.pixels[:, :, 3] = rng.integers(0, 256, size=noise_surface.pixels.shape[:2])
        alpha = noise_surface.pixels[:, :, 3].copy()
        apply_filters(noise_surface, ProcessorSettings(mode=FilterMode.BINARY, sharpness=50))
        np.testing.assert_array_equal(noise_surface.pixels[:, :, 3], alpha)

    def test_sharpness_zero_keeps_tone_output(self, noise_factory):
        settings = ProcessorSettings(sharpness=0)
        surface = noise_factory(20, 20, seed=5)
        expected = np.rint(_tone_pass(surface.pixels[:, :, :3].astype(np.float64), settings))

        apply_filters(surface, settings)
        np.testing.assert_array_equal(surface.pixels[:, :, :3], expected.astype(np.uint8))

    def test_deterministic(self, noise_factory):
        a, b = noise_factory(16, 16, seed=2), noise_factory(16, 16, seed=2)
        apply_filters(a, ProcessorSettings())
        apply_filters(b, ProcessorSettings())
        np.testing.assert_array_equal(a.pixels, b.pixels)


class TestSharpen:
    """Tests for sharpen."""

    def test_zero_amount_is_noop(self, noise_surface):
        before = noise_surface.pixels.copy()
        sharpen(noise_surface, 0.0)
        np.testing.assert_array_equal(noise_surface.pixels, before)

    def test_flat_area_unchanged(self):
        surface = _gray(90, 6, 6)
        sharpen(surface, 1.0)
        assert np.all(surface.pixels[:, :, :3] == 90)

    def test_border_ring_unchanged(self, noise_surface):
        before = noise_surface.pixels.copy()
        sharpen(noise_surface, 0.8)
        np.testing.assert_array_equal(noise_surface.pixels[0], before[0])
        np.testing.assert_array_equal(noise_surface.pixels[-1], before[-1])
        np.testing.assert_array_equal(noise_surface.pixels[:, 0], before[:, 0])
        np.testing.assert_array_equal(noise_surface.pixels[:, -1], before[:, -1])

    def test_boosts_isolated_peak(self):
        surface = _gray(100, 5, 5)
        surface.set_pixel(2, 2, (120, 120, 120, 255))
        sharpen(surface, 0.5)
        # 120 + (5*120 - 4*100 - 120) * 0.5
        assert surface.get_pixel(2, 2)[0] == 160
        # Neighbour: 100 + (5*100 - 3*100 - 120 - 100) * 0.5
        assert surface.get_pixel(2, 1)[0] == 90

    def test_tiny_surface_ignored(self):
        surface = _gray(10, 2, 2)
        sharpen(surface, 1.0)
        assert np.all(surface.pixels[:, :, :3] == 10)
