import logging
import math
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import List, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .config import get_settings
from .core.bsm import QUANTITIES
from .core.errors import OptionError
from .core.option import EuropeanOption, bounded
from .logging_config import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    setup_logging(get_settings().log_level)
    yield

app = FastAPI(title="BSM greek surfaces API", lifespan=lifespan)


@lru_cache(maxsize=1)
def _default_session_factory():
    from .db.db import init_db, make_engine, make_session_factory
    engine = make_engine()
    init_db(engine)
    return make_session_factory(engine)


def get_session_factory():
    """Session factory when persistence is on, else None."""
    if not get_settings().persist:
        return None
    return _default_session_factory()


class ContractReq(BaseModel):
    spot0: float; strike: float; rate: float; expiry: float; volatility: float
    kind: str = "call"

    def build(self) -> EuropeanOption:
        return bounded(self.spot0, self.strike, self.rate, self.expiry, self.volatility,
                       self.kind, max_nodes=get_settings().max_grid_nodes)

class SurfaceReq(ContractReq):
    quantity: str = "price"  # checked by compute_surface, case-insensitive

class SurfaceResp(BaseModel):
    quantity: str; label: str
    spot: List[float]; time: List[float]
    Z: List[List[Optional[float]]]  # rows = time, columns = spot; null where not finite

class QuoteResp(BaseModel):
    kind: str; spot: float; time: float
    price: float; delta: float; gamma: float; vega: float; theta: float; rho: float


@app.exception_handler(OptionError)
def option_error_handler(request: Request, exc: OptionError):
    logger.info("rejected %s: %s", request.url.path, exc)
    return JSONResponse(status_code=422, content={"detail": str(exc), "field": exc.field})


def _finite_or_none(values):
    return [[v if math.isfinite(v) else None for v in row] for row in values.tolist()]


def _surface_resp(opt: EuropeanOption, quantity: str, session_factory) -> dict:
    surface = opt.surface(quantity)
    quantity = quantity.strip().lower()
    if session_factory is not None:
        _persist(session_factory, opt, quantity, surface)
    return {
        "quantity": quantity,
        "label": surface.label,
        "spot": opt.grid.spot_axis.tolist(),
        "time": opt.grid.time_axis.tolist(),
        "Z": _finite_or_none(surface.values),
    }


def _persist(session_factory, opt, quantity, surface):
    from .db.store import save_surface
    try:
        with session_factory() as db:
            save_surface(db, opt, quantity, surface, get_settings().persist_target_points)
    except Exception:
        # storage is best effort; the computed surface is still returned
        logger.warning("could not persist %s surface", quantity, exc_info=True)


@app.get("/health")
def health():
    return {"status": "ok"}

@app.post("/surface", response_model=SurfaceResp)
def surface_endpoint(req: SurfaceReq, session_factory=Depends(get_session_factory)):
    opt = req.build()
    logger.info("surface %s for %r", req.quantity, opt)
    return _surface_resp(opt, req.quantity, session_factory)

@app.post("/surfaces", response_model=List[SurfaceResp])
def surfaces_endpoint(req: ContractReq, session_factory=Depends(get_session_factory)):
    opt = req.build()
    logger.info("all surfaces for %r", opt)
    return [_surface_resp(opt, q, session_factory) for q in QUANTITIES]

@app.post("/quote", response_model=QuoteResp)
def quote_endpoint(req: ContractReq):
    opt = req.build()
    i, j = opt.grid.nearest(opt.spot0, opt.expiry)
    out = {q: opt.value_at(q) for q in QUANTITIES}
    return {"kind": opt.kind.value,
            "spot": float(opt.grid.spot_axis[j]), "time": float(opt.grid.time_axis[i]), **out}
