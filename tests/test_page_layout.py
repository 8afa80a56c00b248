"""Tests for page rotation, margins and the page processing entry point."""

import numpy as np
import pytest

from docuclear.services.page_layout import process_page, render_layout
from docuclear.services.settings import FilterMode, ProcessorSettings
from docuclear.services.surface import PixelSurface


class TestRenderLayout:
    """Tests for render_layout."""

    def test_no_change_returns_copy(self, noise_surface):
        out = render_layout(noise_surface, 0, 0)
        assert out is not noise_surface
        np.testing.assert_array_equal(out.pixels, noise_surface.pixels)
        out.set_pixel(0, 0, (1, 2, 3, 4))
        assert noise_surface.get_pixel(0, 0) != (1, 2, 3, 4)

    @pytest.mark.parametrize("rotation,turns", [(90, -1), (180, 2), (270, 1)])
    def test_quarter_turns_are_exact(self, noise_factory, rotation, turns):
        src = noise_factory(4, 2, seed=11)
        out = render_layout(src, rotation, 0)
        np.testing.assert_array_equal(out.pixels, np.rot90(src.pixels, k=turns))

    def test_rotation_swaps_dimensions(self, noise_factory):
        out = render_layout(noise_factory(30, 20), 90, 10)
        assert (out.width, out.height) == (20, 30)

    def test_clockwise_turn_moves_top_left_to_top_right(self):
        src = PixelSurface.blank(6, 4, fill=(0, 0, 0, 255))
        src.set_pixel(0, 0, (255, 0, 0, 255))
        out = render_layout(src, 90, 0)
        assert out.get_pixel(out.width - 1, 0) == (255, 0, 0, 255)
        assert out.get_pixel(0, 0) == (0, 0, 0, 255)

    def test_margin_leaves_transparent_border(self):
        src = PixelSurface.blank(10, 10, fill=(255, 255, 255, 255))
        out = render_layout(src, 0, 50)
        assert (out.width, out.height) == (10, 10)
        assert out.get_pixel(0, 0)[3] == 0
        assert out.get_pixel(9, 9)[3] == 0
        assert out.get_pixel(4, 4) == (255, 255, 255, 255)
        assert out.get_pixel(5, 5) == (255, 255, 255, 255)

    def test_invalid_rotation(self, noise_surface):
        with pytest.raises(ValueError, match="Rotation"):
            render_layout(noise_surface, 45, 0)

    def test_input_untouched(self, noise_surface):
        before = noise_surface.pixels.copy()
        render_layout(noise_surface, 180, 20)
        np.testing.assert_array_equal(noise_surface.pixels, before)


class TestProcessPage:
    """Tests for process_page."""

    def test_does_not_modify_rectified_page(self, noise_surface):
        before = noise_surface.pixels.copy()
        process_page(noise_surface, ProcessorSettings(mode=FilterMode.BINARY))
        np.testing.assert_array_equal(noise_surface.pixels, before)

    def test_rotation_applied_before_filters(self, noise_factory):
        out = process_page(noise_factory(30, 20), ProcessorSettings(rotation=270))
        assert (out.width, out.height) == (20, 30)

    def test_reprocessing_is_repeatable(self, noise_surface):
        settings = ProcessorSettings(margin=10, rotation=90, mode=FilterMode.GRAYSCALE)
        first = process_page(noise_surface, settings)
        second = process_page(noise_surface, settings)
        np.testing.assert_array_equal(first.pixels, second.pixels)

    def test_neutral_settings_return_same_pixels(self, noise_surface):
        settings = ProcessorSettings(sharpness=0, brightness=0, contrast=0, mode="original")
        out = process_page(noise_surface, settings)
        np.testing.assert_array_equal(out.pixels, noise_surface.pixels)
