# greeksurface/__init__.py

from .core.contract import OptionContract, OptionKind
from .core.grid import EvaluationGrid, build_grid
from .core.bsm import GreekSurface, QUANTITIES, LABELS, compute_surface, shared_terms
from .core.option import EuropeanOption, create
from .core.errors import (
    OptionError, InvalidParameter, InvalidOptionKind, InvalidArity, UnknownQuantity,
)

__all__ = [
    "OptionContract", "OptionKind",
    "EvaluationGrid", "build_grid",
    "GreekSurface", "QUANTITIES", "LABELS", "compute_surface", "shared_terms",
    "EuropeanOption", "create",
    "OptionError", "InvalidParameter", "InvalidOptionKind", "InvalidArity", "UnknownQuantity",
]

__version__ = "0.1.0"
