import numpy as np
import pytest

from greeksurface.core.errors import InvalidParameter
from greeksurface.core.grid import (
    GRID_DIVISIONS, build_grid, check_grid_size, grid_shape, step_range,
)


class TestStepRange:
    def test_includes_stop_when_hit(self):
        np.testing.assert_allclose(step_range(0.0, 1.0, 0.25), [0.0, 0.25, 0.5, 0.75, 1.0])

    def test_stops_before_overshoot(self):
        np.testing.assert_allclose(step_range(0.0, 1.0, 0.3), [0.0, 0.3, 0.6, 0.9])

    def test_rounding_does_not_drop_stop(self):
        axis = step_range(0.0, 0.7, 0.007)
        assert len(axis) == 101
        assert axis[-1] == pytest.approx(0.7)


class TestBuildGrid:
    def test_at_the_money_is_square(self):
        g = build_grid(100.0, 100.0, 1.0)
        assert g.shape == (GRID_DIVISIONS + 1, GRID_DIVISIONS + 1)
        assert g.spot_axis[0] == 50.0
        assert g.spot_axis[-1] == pytest.approx(150.0)
        assert g.time_axis[0] == 0.0
        assert g.time_axis[-1] == pytest.approx(1.0)

    def test_strike_above_spot_widens_to_strike(self):
        g = build_grid(100.0, 130.0, 1.0)
        assert g.spot_axis[0] == 65.0
        assert g.spot_axis[-1] == pytest.approx(195.0)
        assert g.spot_step == pytest.approx(1.0)
        assert g.shape == (101, 131)

    def test_spot_above_strike_widens_to_spot(self):
        g = build_grid(130.0, 100.0, 0.5)
        step = 1.3
        assert g.spot_axis[0] == 50.0
        assert g.spot_axis[-1] <= 1.5 * 130.0 + 1e-9
        assert g.spot_axis[-1] >= 1.5 * 130.0 - step
        assert g.time_step == pytest.approx(0.005)

    @pytest.mark.parametrize("S0,K,T", [(100, 100, 1), (42.5, 80, 0.37), (250, 90, 3.0), (20, 60, 0.01)])
    def test_mesh_invariants(self, S0, K, T):
        g = build_grid(S0, K, T)
        assert g.spot_mesh.shape == g.time_mesh.shape == (len(g.time_axis), len(g.spot_axis))
        assert len(g.time_axis) == 101
        np.testing.assert_array_equal(g.spot_mesh[7], g.spot_axis)
        np.testing.assert_array_equal(g.time_mesh[:, 3], g.time_axis)
        assert g.spot_axis.min() == K / 2
        assert g.spot_axis.max() >= 1.5 * max(S0, K) - S0 / 100 - 1e-9
        assert np.all(np.diff(g.spot_axis) > 0)
        assert np.all(np.diff(g.time_axis) > 0)

    def test_arrays_are_read_only(self):
        g = build_grid(100.0, 100.0, 1.0)
        with pytest.raises(ValueError):
            g.spot_mesh[0, 0] = 1.0
        with pytest.raises(ValueError):
            g.time_axis[0] = 1.0

    def test_nearest(self):
        g = build_grid(100.0, 130.0, 1.0)
        i, j = g.nearest(100.2, 0.999)
        assert g.spot_axis[j] == 100.0
        assert g.time_axis[i] == pytest.approx(1.0)


class TestGridSize:
    @pytest.mark.parametrize("S0,K,T", [(100, 100, 1), (100, 130, 1), (42.5, 80, 0.37), (250, 90, 3.0)])
    def test_grid_shape_matches_build_grid(self, S0, K, T):
        assert grid_shape(S0, K, T) == build_grid(S0, K, T).shape

    def test_grid_shape_for_far_strike(self):
        assert grid_shape(1.0, 1000.0, 1.0) == (101, 100001)

    def test_check_grid_size_within_limit(self):
        check_grid_size(100.0, 130.0, 1.0, max_nodes=101 * 131)

    def test_check_grid_size_rejects(self):
        with pytest.raises(InvalidParameter) as info:
            check_grid_size(100.0, 130.0, 1.0, max_nodes=101 * 131 - 1)
        assert info.value.field == "strike"
