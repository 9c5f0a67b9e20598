"""European option object: a validated contract plus its evaluation grid.

Instances are immutable. Changing a parameter means building a new option
with `replace` (or one of the `with_*` helpers); the grid is rebuilt only when
spot0, strike or expiry change.
"""
import logging

from . import bsm
from .contract import OptionContract, create as create_contract
from .grid import build_grid, check_grid_size

logger = logging.getLogger(__name__)

_GRID_FIELDS = frozenset(("spot0", "strike", "expiry"))


class EuropeanOption:
    """Black-Scholes-Merton price and greek surfaces over (spot, time).

    Usage:
        >>> opt = EuropeanOption(100, 130, 0.05, 1.0, 0.2, "call")
        >>> spot, time, value, label = opt.price()
    """

    def __init__(self, spot0, strike, rate, expiry, volatility, kind, *, _grid=None):
        self._contract = OptionContract(spot0, strike, rate, expiry, volatility, kind)
        c = self._contract
        self._grid = _grid if _grid is not None else build_grid(c.spot0, c.strike, c.expiry)

    @classmethod
    def from_contract(cls, contract: OptionContract, grid=None) -> "EuropeanOption":
        c = contract
        return cls(c.spot0, c.strike, c.rate, c.expiry, c.volatility, c.kind, _grid=grid)

    # --- parameters ---------------------------------------------------------
    @property
    def contract(self) -> OptionContract:
        return self._contract

    @property
    def grid(self):
        return self._grid

    @property
    def spot0(self):
        return self._contract.spot0

    @property
    def strike(self):
        return self._contract.strike

    @property
    def rate(self):
        return self._contract.rate

    @property
    def expiry(self):
        return self._contract.expiry

    @property
    def volatility(self):
        return self._contract.volatility

    @property
    def kind(self):
        return self._contract.kind

    def replace(self, **changes) -> "EuropeanOption":
        contract = self._contract.replace(**changes)
        if _GRID_FIELDS.intersection(changes):
            return EuropeanOption.from_contract(contract)
        return EuropeanOption.from_contract(contract, grid=self._grid)

    def with_spot0(self, value):
        return self.replace(spot0=value)

    def with_strike(self, value):
        return self.replace(strike=value)

    def with_expiry(self, value):
        return self.replace(expiry=value)

    def with_rate(self, value):
        return self.replace(rate=value)

    def with_volatility(self, value):
        return self.replace(volatility=value)

    def with_kind(self, value):
        return self.replace(kind=value)

    # --- surfaces -----------------------------------------------------------
    def surface(self, quantity) -> bsm.GreekSurface:
        return bsm.compute_surface(self._contract, self._grid, quantity)

    def surfaces(self) -> dict:
        return {q: self.surface(q) for q in bsm.QUANTITIES}

    def price(self):
        return self.surface("price")

    def delta(self):
        return self.surface("delta")

    def gamma(self):
        return self.surface("gamma")

    def vega(self):
        return self.surface("vega")

    def theta(self):
        return self.surface("theta")

    def rho(self):
        return self.surface("rho")

    def value_at(self, quantity, spot=None, time=None) -> float:
        """Value at the grid node nearest (spot, time); defaults to (spot0, expiry)."""
        spot = self.spot0 if spot is None else spot
        time = self.expiry if time is None else time
        i, j = self._grid.nearest(spot, time)
        return float(self.surface(quantity).values[i, j])

    # --- rendering hand-off -------------------------------------------------
    def show(self, quantity, renderer=None):
        surface = self.surface(quantity)
        if renderer is None:
            from ..render import show_surface as renderer
        renderer(surface)
        return surface

    def show_price(self, renderer=None):
        return self.show("price", renderer)

    def show_delta(self, renderer=None):
        return self.show("delta", renderer)

    def show_gamma(self, renderer=None):
        return self.show("gamma", renderer)

    def show_vega(self, renderer=None):
        return self.show("vega", renderer)

    def show_theta(self, renderer=None):
        return self.show("theta", renderer)

    def show_rho(self, renderer=None):
        return self.show("rho", renderer)

    def __repr__(self):
        c = self._contract
        return (f"EuropeanOption(spot0={c.spot0!r}, strike={c.strike!r}, rate={c.rate!r}, "
                f"expiry={c.expiry!r}, volatility={c.volatility!r}, kind={c.kind.value!r})")


def bounded(spot0, strike, rate, expiry, volatility, kind, *, max_nodes) -> EuropeanOption:
    """Like EuropeanOption(...), but refuse grids above `max_nodes` before allocating them."""
    contract = OptionContract(spot0, strike, rate, expiry, volatility, kind)
    check_grid_size(contract.spot0, contract.strike, contract.expiry, max_nodes)
    return EuropeanOption.from_contract(contract)


def create(*args, **kwargs) -> EuropeanOption:
    """Build an option from exactly six parameters (see `contract.create`)."""
    return EuropeanOption.from_contract(create_contract(*args, **kwargs))
