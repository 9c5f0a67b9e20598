import math
from dataclasses import dataclass, fields, replace as dc_replace
from enum import Enum
from numbers import Real

from .errors import InvalidArity, InvalidOptionKind, InvalidParameter

NUMERIC_FIELDS = ("spot0", "strike", "rate", "expiry", "volatility")
PARAMETERS = NUMERIC_FIELDS + ("kind",)


class OptionKind(str, Enum):
    CALL = "call"
    PUT = "put"

    @classmethod
    def parse(cls, value):
        """Accept an OptionKind or a case-insensitive 'call'/'put' string."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise InvalidOptionKind(
            f"Option type must be 'call' or 'put', got {value!r}", field="kind"
        )


def _positive(name, value):
    # bool is a Real; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidParameter(f"{name} must be a number, got {value!r}", field=name)
    value = float(value)
    if not value > 0 or math.isinf(value):
        raise InvalidParameter(f"{name} must be > 0, got {value!r}", field=name)
    return value


@dataclass(frozen=True)
class OptionContract:
    """Static inputs of a European option under Black-Scholes-Merton.

    spot0      : current price of the underlying
    strike     : exercise price
    rate       : annualized continuously compounded risk-free rate
    expiry     : time to expiration, in years
    volatility : annualized volatility of the underlying's log returns
    kind       : OptionKind.CALL or OptionKind.PUT ('call'/'put' accepted)
    """
    spot0: float
    strike: float
    rate: float
    expiry: float
    volatility: float
    kind: OptionKind = OptionKind.CALL

    def __post_init__(self):
        for name in NUMERIC_FIELDS:
            object.__setattr__(self, name, _positive(name, getattr(self, name)))
        object.__setattr__(self, "kind", OptionKind.parse(self.kind))

    @property
    def is_call(self) -> bool:
        return self.kind is OptionKind.CALL

    def replace(self, **changes) -> "OptionContract":
        """Return a validated copy with `changes` applied; self is untouched."""
        unknown = set(changes) - set(PARAMETERS)
        if unknown:
            raise InvalidArity(
                f"Unknown parameter(s): {', '.join(sorted(unknown))}",
                field=sorted(unknown)[0],
            )
        return dc_replace(self, **changes)

    def as_dict(self) -> dict:
        out = {f.name: getattr(self, f.name) for f in fields(self)}
        out["kind"] = self.kind.value
        return out


def create(*args, **kwargs) -> OptionContract:
    """Build a contract from exactly six parameters, positional or named.

    Order: spot0, strike, rate, expiry, volatility, kind.
    """
    if len(args) > len(PARAMETERS):
        raise InvalidArity(
            f"Wrong number of input parameters: expected 6, got {len(args) + len(kwargs)}"
        )
    params = dict(zip(PARAMETERS, args))
    for name, value in kwargs.items():
        if name not in PARAMETERS:
            raise InvalidArity(f"Unknown parameter: {name}", field=name)
        if name in params:
            raise InvalidArity(f"Parameter given twice: {name}", field=name)
        params[name] = value
    if len(params) != len(PARAMETERS):
        missing = [p for p in PARAMETERS if p not in params]
        raise InvalidArity(
            f"Wrong number of input parameters: missing {', '.join(missing)}",
            field=missing[0],
        )
    return OptionContract(**params)
