import logging
import math

from .models import Calculation, SurfacePoint

logger = logging.getLogger(__name__)


def _stride(shape, target_points):
    n = shape[0] * shape[1]
    return max(1, int(math.sqrt(n / max(1, target_points))))


def save_surface(db, option, quantity, surface, target_points=2000) -> Calculation:
    """Store the contract and a strided sub-sample of `surface`; commits `db`."""
    c = option.contract
    calc = Calculation(
        spot=c.spot0, strike=c.strike, risk_free_rate=c.rate,
        time_to_expiry=c.expiry, volatility=c.volatility,
        kind=c.kind.value, quantity=quantity, label=surface.label,
    )
    db.add(calc)
    db.flush()

    stride = _stride(surface.values.shape, target_points)
    rows = []
    for i in range(0, surface.values.shape[0], stride):
        for j in range(0, surface.values.shape[1], stride):
            v = float(surface.values[i, j])
            rows.append(
                SurfacePoint(
                    calculation_id=calc.id,
                    spot=float(surface.spot_mesh[i, j]),
                    time=float(surface.time_mesh[i, j]),
                    value=v if math.isfinite(v) else None,
                )
            )
    if rows:
        db.bulk_save_objects(rows)
    db.commit()
    logger.debug("stored %s surface: calculation %s, %d points", quantity, calc.id, len(rows))
    return calc
