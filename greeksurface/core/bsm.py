import logging
from typing import NamedTuple

import numpy as np
from numpy import log, sqrt, exp
from scipy.stats import norm

from .errors import UnknownQuantity

logger = logging.getLogger(__name__)

QUANTITIES = ("price", "delta", "gamma", "vega", "theta", "rho")
LABELS = {
    "price": "Option value",
    "delta": "Delta",
    "gamma": "Gamma",
    "vega": "Vega",
    "theta": "Theta",
    "rho": "Rho",
}


def norm_cdf(x):
    return norm.cdf(x)


def norm_pdf(x):
    return norm.pdf(x)


class GreekSurface(NamedTuple):
    spot_mesh: np.ndarray
    time_mesh: np.ndarray
    values: np.ndarray
    label: str


class SharedTerms(NamedTuple):
    d_plus: np.ndarray
    d_minus: np.ndarray
    sigma_sqrt_t: np.ndarray
    discounted_strike: np.ndarray


def shared_terms(contract, grid) -> SharedTerms:
    """d+, d-, sigma*sqrt(t) and K*exp(-r*t) over the whole grid."""
    S, t = grid.spot_mesh, grid.time_mesh
    K, r, sigma = contract.strike, contract.rate, contract.volatility

    sigma_sqrt_t = sigma * sqrt(t)
    discounted_strike = K * exp(-r * t)
    # t == 0 gives x/0 (+-inf) off the money and 0/0 at the money
    with np.errstate(divide="ignore", invalid="ignore"):
        d_plus = (1 / sigma_sqrt_t) * (log(S / K) + t * (r + sigma**2 / 2))
    d_plus[np.isnan(d_plus)] = 0.0
    d_minus = d_plus - sigma_sqrt_t
    return SharedTerms(d_plus, d_minus, sigma_sqrt_t, discounted_strike)


def _surface(grid, values, quantity):
    return GreekSurface(grid.spot_mesh, grid.time_mesh, values, LABELS[quantity])


def price(contract, grid) -> GreekSurface:
    d = shared_terms(contract, grid)
    S = grid.spot_mesh
    if contract.is_call:
        v = S * norm_cdf(d.d_plus) - d.discounted_strike * norm_cdf(d.d_minus)
    else:
        v = d.discounted_strike * norm_cdf(-d.d_minus) - S * norm_cdf(-d.d_plus)
    return _surface(grid, v, "price")


def delta(contract, grid) -> GreekSurface:
    d = shared_terms(contract, grid)
    v = norm_cdf(d.d_plus) if contract.is_call else norm_cdf(-d.d_plus)
    return _surface(grid, v, "delta")


def gamma(contract, grid) -> GreekSurface:
    d = shared_terms(contract, grid)
    S, t = grid.spot_mesh, grid.time_mesh
    with np.errstate(divide="ignore", invalid="ignore"):
        v = norm_pdf(d.d_plus) / (S * contract.volatility * sqrt(t))
    v[np.isnan(v)] = 0.0
    return _surface(grid, v, "gamma")


def vega(contract, grid) -> GreekSurface:
    d = shared_terms(contract, grid)
    v = grid.spot_mesh * sqrt(grid.time_mesh) * norm_pdf(d.d_plus)
    return _surface(grid, v, "vega")


def theta(contract, grid) -> GreekSurface:
    d = shared_terms(contract, grid)
    S, t = grid.spot_mesh, grid.time_mesh
    r, K = contract.rate, contract.strike
    v = -(S * contract.volatility * norm_pdf(d.d_plus) / 2 * sqrt(t))
    if contract.is_call:
        v = v - r * K * norm_cdf(d.d_minus)
    else:
        v = v + r * K * norm_cdf(-d.d_minus)
    return _surface(grid, v, "theta")


def rho(contract, grid) -> GreekSurface:
    d = shared_terms(contract, grid)
    t = grid.time_mesh
    K, r = contract.strike, contract.rate
    if contract.is_call:
        v = K * t * exp(-r * t) * norm_cdf(d.d_minus)
    else:
        v = -K * t * exp(-r * t) * norm_cdf(-d.d_minus)
    return _surface(grid, v, "rho")


_DISPATCH = {
    "price": price,
    "delta": delta,
    "gamma": gamma,
    "vega": vega,
    "theta": theta,
    "rho": rho,
}


def compute_surface(contract, grid, quantity) -> GreekSurface:
    key = str(quantity).strip().lower()
    try:
        fn = _DISPATCH[key]
    except KeyError:
        raise UnknownQuantity(
            f"quantity must be one of {', '.join(QUANTITIES)}, got {quantity!r}",
            field="quantity",
        ) from None
    logger.debug("computing %s surface for %s", key, contract.kind.value)
    return fn(contract, grid)
