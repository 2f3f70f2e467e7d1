"""
Test swatch synthesis.
"""
import numpy as np
import pytest

from palette_finder.services.palette.swatches import (
    cell_shape, swatch_dimensions, settings_swatch_dimensions,
    synthesize_swatch, synthesize_for_settings
)
from palette_finder.settings import Settings

from generate_test_images import TILE_COLORS, read_cell_colors


class TestGeometry:
    """Cell and swatch dimensions"""

    def test_cell_shape_swaps_with_orientation(self):
        assert cell_shape(128, 139, vertical=True) == (128, 139)
        assert cell_shape(128, 139, vertical=False) == (139, 128)

    def test_default_settings_dimensions(self):
        assert settings_swatch_dimensions(Settings()) == (128, 139 * 5)
        assert settings_swatch_dimensions(Settings(vertical=False)) == (139 * 5, 128)

    @pytest.mark.parametrize("k", [2, 3, 6, 9])
    @pytest.mark.parametrize("vertical", [True, False])
    def test_k_minus_one_cells_match_prediction(self, k, vertical):
        settings = Settings(n_clusters=k, color_w=12, color_h=7, vertical=vertical)
        colors = np.linspace(0, 255, (k - 1) * 3).reshape(k - 1, 3)

        swatch = synthesize_for_settings(colors, settings)

        assert swatch.cell_count == k - 1
        assert swatch.dims == settings_swatch_dimensions(settings)
        assert swatch.dims == swatch_dimensions(12, 7, k - 1, vertical)
        assert swatch.image.shape == (swatch.dims[1], swatch.dims[0], 3)
        assert swatch.image.dtype == np.uint8


class TestSynthesizeSwatch:
    """Cell fill and ordering"""

    def test_vertical_cells_top_to_bottom(self):
        swatch = synthesize_swatch(TILE_COLORS, 10, 6, vertical=True, reverse=False)
        assert read_cell_colors(swatch) == TILE_COLORS
        assert (swatch.cell_width, swatch.cell_height) == (10, 6)

    def test_horizontal_cells_left_to_right(self):
        swatch = synthesize_swatch(TILE_COLORS, 10, 6, vertical=False, reverse=False)
        assert read_cell_colors(swatch) == TILE_COLORS
        assert (swatch.cell_width, swatch.cell_height) == (6, 10)
        assert swatch.dims == (30, 10)

    def test_reverse_flips_cell_order(self):
        swatch = synthesize_swatch(TILE_COLORS, 10, 6, vertical=True, reverse=True)
        assert read_cell_colors(swatch) == TILE_COLORS[::-1]

    @pytest.mark.parametrize("vertical", [True, False])
    def test_reverse_is_an_involution(self, vertical):
        plain = synthesize_swatch(TILE_COLORS, 9, 5, vertical, reverse=False)
        twice = synthesize_swatch(TILE_COLORS[::-1], 9, 5, vertical, reverse=True)
        np.testing.assert_array_equal(plain.image, twice.image)

    def test_cells_are_solid(self):
        swatch = synthesize_swatch(TILE_COLORS, 10, 6, vertical=True, reverse=False)
        first_cell = swatch.image[:6, :10]
        assert np.all(first_cell == TILE_COLORS[0])

    def test_float_colors_rounded(self):
        swatch = synthesize_swatch([(12.6, 0.2, 254.5)], 4, 4, vertical=True, reverse=False)
        # 254.5 rounds half to even
        assert tuple(swatch.image[0, 0].tolist()) == (13, 0, 254)

    def test_deterministic(self):
        first = synthesize_swatch(TILE_COLORS, 8, 8, vertical=False, reverse=True)
        second = synthesize_swatch(TILE_COLORS, 8, 8, vertical=False, reverse=True)
        np.testing.assert_array_equal(first.image, second.image)

    def test_empty_colors(self):
        with pytest.raises(ValueError, match="Empty color list"):
            synthesize_swatch([], 8, 8, vertical=True, reverse=False)
