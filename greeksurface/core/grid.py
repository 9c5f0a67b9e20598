import logging
from dataclasses import dataclass

import numpy as np

from .errors import InvalidParameter

logger = logging.getLogger(__name__)

GRID_DIVISIONS = 100  # steps per axis
_RANGE_TOL = 1e-10


@dataclass(frozen=True)
class EvaluationGrid:
    spot_axis: np.ndarray
    time_axis: np.ndarray
    spot_mesh: np.ndarray   # rows = time samples, columns = spot samples
    time_mesh: np.ndarray

    @property
    def shape(self):
        return self.spot_mesh.shape

    @property
    def spot_step(self) -> float:
        return float(self.spot_axis[1] - self.spot_axis[0])

    @property
    def time_step(self) -> float:
        return float(self.time_axis[1] - self.time_axis[0])

    def nearest(self, spot, time):
        """(row, col) of the node closest to (spot, time)."""
        i = int(np.argmin(np.abs(self.time_axis - time)))
        j = int(np.argmin(np.abs(self.spot_axis - spot)))
        return i, j


def _step_count(start, stop, step):
    return int(np.floor((stop - start) / step * (1 + _RANGE_TOL) + _RANGE_TOL)) + 1


def step_range(start, stop, step):
    """start, start+step, ... not exceeding stop (stop kept if hit up to rounding)."""
    return start + np.arange(_step_count(start, stop, step)) * step


def _spot_bounds(spot0, strike):
    # Upper spot bound widens toward whichever of spot/strike is larger
    spot_stop = 1.5 * spot0 if spot0 >= strike else 1.5 * strike
    return strike / 2, spot_stop, spot0 / GRID_DIVISIONS


def grid_shape(spot0, strike, expiry):
    """(time samples, spot samples) build_grid would produce, without building it."""
    start, stop, step = _spot_bounds(spot0, strike)
    return (_step_count(0.0, expiry, expiry / GRID_DIVISIONS), _step_count(start, stop, step))


def check_grid_size(spot0, strike, expiry, max_nodes):
    rows, cols = grid_shape(spot0, strike, expiry)
    if rows * cols > max_nodes:
        raise InvalidParameter(
            f"strike={strike:g} with spot0={spot0:g} needs a {rows}x{cols} grid, "
            f"more than the {max_nodes} node limit",
            field="strike",
        )


def _frozen(a):
    a.setflags(write=False)
    return a


def build_grid(spot0, strike, expiry) -> EvaluationGrid:
    spot_axis = step_range(*_spot_bounds(spot0, strike))

    time_axis = step_range(0.0, expiry, expiry / GRID_DIVISIONS)

    spot_mesh, time_mesh = np.meshgrid(spot_axis, time_axis, indexing="xy")
    logger.debug("grid built: S0=%g K=%g T=%g shape=%s", spot0, strike, expiry, spot_mesh.shape)
    return EvaluationGrid(
        spot_axis=_frozen(spot_axis),
        time_axis=_frozen(time_axis),
        spot_mesh=_frozen(spot_mesh),
        time_mesh=_frozen(time_mesh),
    )
