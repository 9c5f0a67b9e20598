# greeksurface/ui.py

import logging
from typing import Tuple

import numpy as np
import pandas as pd
import streamlit as st

from greeksurface.config import get_settings
from greeksurface.core.bsm import LABELS, QUANTITIES, GreekSurface
from greeksurface.core.errors import OptionError
from greeksurface.core.option import EuropeanOption, bounded
from greeksurface.logging_config import setup_logging
from greeksurface.render import surface_figure

logger = logging.getLogger(__name__)


# --- Optional persistence -----------------------------------------------------
@st.cache_resource(show_spinner=False)
def session_factory():
    from greeksurface.db.db import init_db, make_engine, make_session_factory
    engine = make_engine()
    init_db(engine)
    return make_session_factory(engine)


# --- Cache: one surface per input set -----------------------------------------
@st.cache_data(show_spinner=False)
def compute_surface(
    S: float,
    K: float,
    r: float,
    T: float,
    sigma: float,
    kind: str,
    quantity: str,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray, str, dict]:
    """
    Returns: (spot_axis, time_axis, Z, label, quote) where quote holds every
    quantity at the node nearest (S, T).
    """
    opt = bounded(S, K, r, T, sigma, kind, max_nodes=get_settings().max_grid_nodes)
    surface = opt.surface(quantity)
    quote = {q: opt.value_at(q) for q in QUANTITIES}
    return opt.grid.spot_axis, opt.grid.time_axis, surface.values, surface.label, quote


def surface_table(spot_axis: np.ndarray, time_axis: np.ndarray, Z: np.ndarray) -> pd.DataFrame:
    return pd.DataFrame(Z, index=pd.Index(time_axis, name="time"), columns=pd.Index(spot_axis, name="spot"))


def quote_table(quote: dict) -> pd.DataFrame:
    data = {LABELS[q]: quote[q] for q in QUANTITIES}
    return pd.DataFrame([data]).round(6)


# --- Main UI ------------------------------------------------------------------
def main():
    settings = get_settings()
    setup_logging(settings.log_level)
    st.set_page_config(page_title="Black–Scholes greek surfaces", layout="wide")
    st.title("Black–Scholes–Merton price & greek surfaces")

    with st.sidebar:
        st.subheader("Inputs")
        S = st.number_input("Spot (S0)", value=100.0, min_value=0.0, step=1.0)
        K = st.number_input("Strike (K)", value=130.0, min_value=0.0, step=1.0)
        T = st.number_input("Time to expiry (years)", value=1.0, min_value=0.0, step=0.05, format="%.6f")
        r_pct = st.number_input("Risk-free r (%)", value=5.0, step=0.25, format="%.6f")
        sigma_pct = st.number_input("Volatility σ (%)", value=20.0, min_value=0.0, step=0.25, format="%.6f")
        kind = st.radio("Option type", ["call", "put"], horizontal=True)
        quantity = st.selectbox("Surface", QUANTITIES, format_func=lambda q: LABELS[q])

        calc_btn = st.button("Calculate", type="primary")

    if not calc_btn:
        st.info("Set inputs in the sidebar and click **Calculate**.")
        return

    r = r_pct / 100.0
    sigma = sigma_pct / 100.0

    try:
        spot_axis, time_axis, Z, label, quote = compute_surface(S, K, r, T, sigma, kind, quantity)
    except OptionError as e:
        st.error(str(e))
        return

    if settings.persist:
        from greeksurface.db.store import save_surface
        try:
            opt = EuropeanOption(S, K, r, T, sigma, kind)
            with session_factory()() as db:
                save_surface(db, opt, quantity, opt.surface(quantity), settings.persist_target_points)
        except Exception:
            logger.warning("could not persist %s surface", quantity, exc_info=True)

    left, right = st.columns([3, 1])
    with right:
        st.caption(f"Quote at S={S:g}, T={T:g} ({kind})")
        st.table(quote_table(quote))
    with left:
        spot_mesh, time_mesh = np.meshgrid(spot_axis, time_axis)
        surface = GreekSurface(spot_mesh, time_mesh, Z, label)
        st.plotly_chart(surface_figure(surface), use_container_width=True)

    st.download_button(
        label=f"Download {label} surface (CSV)",
        data=surface_table(spot_axis, time_axis, Z).to_csv().encode("utf-8"),
        file_name=f"surface_{quantity}_{kind}_{int(S)}_{int(K)}.csv",
        mime="text/csv",
    )


if __name__ == "__main__":
    main()
