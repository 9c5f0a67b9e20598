import math

import pytest

from greeksurface.core.option import EuropeanOption


def _N(x):
    return 0.5 * (1.0 + math.erf(x / math.sqrt(2.0)))


def _n(x):
    return math.exp(-0.5 * x * x) / math.sqrt(2.0 * math.pi)


def bs_reference(S, K, r, t, sigma, kind):
    """Scalar closed form (t > 0) written independently of the package."""
    sst = sigma * math.sqrt(t)
    d1 = (math.log(S / K) + (r + 0.5 * sigma**2) * t) / sst
    d2 = d1 - sst
    disc = math.exp(-r * t)
    out = {
        "gamma": _n(d1) / (S * sst),
        "vega": S * math.sqrt(t) * _n(d1),
    }
    theta_common = -(S * sigma * _n(d1) / 2 * math.sqrt(t))
    if kind == "call":
        out["price"] = S * _N(d1) - K * disc * _N(d2)
        out["delta"] = _N(d1)
        out["theta"] = theta_common - r * K * _N(d2)
        out["rho"] = K * t * disc * _N(d2)
    else:
        out["price"] = K * disc * _N(-d2) - S * _N(-d1)
        out["delta"] = _N(-d1)
        out["theta"] = theta_common + r * K * _N(-d2)
        out["rho"] = -K * t * disc * _N(-d2)
    return out


@pytest.fixture
def otm_call():
    return EuropeanOption(100, 130, 0.05, 1.0, 0.2, "call")


@pytest.fixture
def atm_call():
    return EuropeanOption(100, 100, 0.05, 1.0, 0.2, "call")


@pytest.fixture
def atm_put():
    return EuropeanOption(100, 100, 0.05, 1.0, 0.2, "put")
