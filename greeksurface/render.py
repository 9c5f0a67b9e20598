"""Plotly 3-D surface rendering for greek surfaces."""

import numpy as np
import plotly.graph_objects as go

X_TITLE = "Spot price"
Y_TITLE = "Time to expiration"

VIEW_AZIMUTH = -125.0   # degrees
VIEW_ELEVATION = 30.0
CAMERA_DISTANCE = 2.2


def camera_eye(azimuth=VIEW_AZIMUTH, elevation=VIEW_ELEVATION, distance=CAMERA_DISTANCE):
    """Camera position for an azimuth/elevation pair (azimuth 0 looks along +y)."""
    az, el = np.radians(azimuth), np.radians(elevation)
    return dict(
        x=float(distance * np.sin(az) * np.cos(el)),
        y=float(-distance * np.cos(az) * np.cos(el)),
        z=float(distance * np.sin(el)),
    )


def spot_gradient(surface) -> np.ndarray:
    """dZ/dSpot over the mesh, used as the surface color."""
    z = _finite(surface.values)
    spots = surface.spot_mesh[0, :]
    if z.shape[1] < 2:
        return np.zeros_like(z)
    return np.gradient(z, spots[1] - spots[0], axis=1)


def _finite(values):
    z = np.array(values, dtype=float)
    z[~np.isfinite(z)] = np.nan
    return z


def surface_figure(surface, *, height: int = 720) -> go.Figure:
    z = _finite(surface.values)
    trace = go.Surface(
        x=surface.spot_mesh,
        y=surface.time_mesh,
        z=z,
        surfacecolor=spot_gradient(surface),
        colorscale="Viridis",
        opacity=0.6,
        lighting=dict(ambient=0.5, diffuse=0.8, specular=0.4, roughness=0.4, fresnel=0.2),
        colorbar=dict(title=f"d({surface.label})/dS"),
        hovertemplate=("S=%{x:.6g}<br>t=%{y:.6g}<br>"
                       + surface.label + "=%{z:.6g}<extra></extra>"),
        name=surface.label,
    )
    fig = go.Figure(data=trace)
    fig.update_layout(
        template="plotly_white",
        scene=dict(
            xaxis=dict(title=dict(text=X_TITLE)),
            yaxis=dict(title=dict(text=Y_TITLE)),
            zaxis=dict(title=dict(text=surface.label)),
            camera=dict(eye=camera_eye()),
        ),
        margin=dict(l=10, r=10, t=30, b=10),
        height=height,
    )
    return fig


def show_surface(surface) -> None:
    surface_figure(surface).show()
