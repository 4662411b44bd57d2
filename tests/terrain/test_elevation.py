"""Tests for elevation synthesis."""

import numpy as np
import pytest

from ascent.exceptions import InvalidDimensionsError
from ascent.terrain.config import MAX_GRID_SIZE, Band, ElevationConfig
from ascent.terrain.elevation import (
    check_dimensions,
    choose_anchors,
    make_elevation,
    north_gradient,
    radial_falloff,
)


class TestCheckDimensions:
    """Tests for grid size limits."""

    @pytest.mark.parametrize("width,height", [(1, 1), (MAX_GRID_SIZE, 1), (200, 150)])
    def test_accepted(self, width: int, height: int) -> None:
        """Sizes from 1x1 to the maximum edge are accepted."""
        check_dimensions(width, height)

    @pytest.mark.parametrize(
        "width,height", [(0, 10), (10, 0), (-1, 5), (MAX_GRID_SIZE + 1, 10)]
    )
    def test_rejected(self, width: int, height: int) -> None:
        """Empty, negative and oversized grids are rejected."""
        with pytest.raises(InvalidDimensionsError):
            check_dimensions(width, height)


class TestChooseAnchors:
    """Tests for peak anchor placement."""

    def test_fixed_anchor(self, rng: np.random.Generator) -> None:
        """Fixed fractions map to tile coordinates."""
        config = ElevationConfig(fixed_anchors=[(0.5, 0.2)])
        assert choose_anchors(100, 50, config, rng) == [(50, 10)]

    def test_fixed_anchor_clamped(self, rng: np.random.Generator) -> None:
        """Anchors on the far edge are clamped inside the grid."""
        config = ElevationConfig(fixed_anchors=[(1.0, 1.0)])
        assert choose_anchors(10, 10, config, rng) == [(9, 9)]

    def test_random_anchors_in_band(self, rng: np.random.Generator) -> None:
        """Random anchors respect count range and band."""
        config = ElevationConfig(
            anchor_count_min=2,
            anchor_count_max=4,
            anchor_band=Band(x_min=0.1, x_max=0.9, y_min=0.0, y_max=0.25),
        )
        anchors = choose_anchors(100, 80, config, rng)
        assert 2 <= len(anchors) <= 4
        for x, y in anchors:
            assert 10 <= x <= 90
            assert 0 <= y <= 20


class TestRadialFalloff:
    """Tests for the peak contribution field."""

    def test_peak_at_anchor(self) -> None:
        """Contribution is 1 at the anchor and falls off with distance."""
        field = radial_falloff(20, 20, [(10, 10)], steepness=1.6)
        assert field[10, 10] == pytest.approx(1.0)
        assert field[10, 15] < field[10, 12] < field[10, 10]

    def test_far_tiles_zero(self) -> None:
        """Steep falloff leaves distant tiles at 0."""
        field = radial_falloff(20, 20, [(0, 0)], steepness=10.0)
        assert field[19, 19] == 0.0

    def test_sum_clamped(self) -> None:
        """Summed anchors never exceed 1."""
        field = radial_falloff(20, 20, [(5, 5), (6, 5)], steepness=1.0)
        assert field.max() <= 1.0

    def test_nearest_mode(self) -> None:
        """Nearest mode equals the single-anchor field for the closer anchor."""
        both = radial_falloff(30, 10, [(2, 5), (27, 5)], 2.0, sum_anchors=False)
        single = radial_falloff(30, 10, [(2, 5)], 2.0)
        assert both[5, 2] == pytest.approx(single[5, 2])


class TestNorthGradient:
    """Tests for the north edge bias."""

    def test_linear_north_to_south(self) -> None:
        """Strength on the northern row, zero on the southern row."""
        gradient = north_gradient(4, 5, 0.3)
        np.testing.assert_allclose(gradient[0], 0.3, rtol=1e-6)
        np.testing.assert_allclose(gradient[-1], 0.0, atol=1e-7)
        assert np.all(np.diff(gradient[:, 0]) <= 0)

    def test_single_row(self) -> None:
        """A 1-row grid gets the full bias."""
        gradient = north_gradient(3, 1, 0.2)
        assert gradient.shape == (1, 3)
        np.testing.assert_allclose(gradient, 0.2, rtol=1e-6)


class TestMakeElevation:
    """Tests for the combined elevation field."""

    def test_shape_and_range(self, rng: np.random.Generator) -> None:
        """Field has (height, width) shape and values in [0, 1]."""
        config = ElevationConfig()
        elevation = make_elevation(60, 40, [(30, 5)], config, rng)
        assert elevation.shape == (40, 60)
        assert elevation.dtype == np.float32
        assert elevation.min() >= 0.0
        assert elevation.max() <= 1.0

    def test_no_noise_matches_falloff(self, rng: np.random.Generator) -> None:
        """Without noise or gradient the field is the falloff alone."""
        config = ElevationConfig(gradient_strength=0.0, noise_amplitude=0.0)
        elevation = make_elevation(20, 20, [(10, 3)], config, rng)
        expected = radial_falloff(20, 20, [(10, 3)], config.steepness)
        np.testing.assert_allclose(elevation, expected, atol=1e-6)

    def test_summit_higher_than_coast(self, rng: np.random.Generator) -> None:
        """Peak region is higher than the southern coast on average."""
        config = ElevationConfig()
        elevation = make_elevation(100, 80, [(50, 8)], config, rng)
        assert elevation[:10].mean() > elevation[-10:].mean()

    def test_single_tile(self, rng: np.random.Generator) -> None:
        """1x1 grids are supported."""
        elevation = make_elevation(1, 1, [(0, 0)], ElevationConfig(), rng)
        assert elevation.shape == (1, 1)

    def test_invalid_size(self, rng: np.random.Generator) -> None:
        """Oversized grids fail before allocating."""
        with pytest.raises(InvalidDimensionsError):
            make_elevation(MAX_GRID_SIZE + 1, 10, [(0, 0)], ElevationConfig(), rng)
