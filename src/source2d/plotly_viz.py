from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np

try:
    import plotly.graph_objects as go
    _PLOTLY = True
except Exception:  # pragma: no cover
    _PLOTLY = False

from .elements import SingularityElement
from .viz import element_arrays


@dataclass(slots=True)
class PlotlyElementsConfig:
    domain: tuple[float, float, float, float] | None = None
    marker_size: float = 10.0
    show_radius: bool = True
    title: str = "Sources and sinks"


def _circle_segments(x: np.ndarray, r: np.ndarray, n: int = 48) -> tuple[list[Any], list[Any]]:
    """x, y for all blob circles as one Scatter trace separated by None."""
    th = np.linspace(0.0, 2.0 * np.pi, n)
    xs: list[Any] = []
    ys: list[Any] = []
    for (cx, cy), ri in zip(x, r):
        if ri <= 0.0:
            continue
        xs.extend((cx + ri * np.cos(th)).tolist() + [None])
        ys.extend((cy + ri * np.sin(th)).tolist() + [None])
    return xs, ys


def plot_elements_interactive(
    elements: Sequence[SingularityElement],
    *,
    config: PlotlyElementsConfig | None = None,
    save_html: str | None = None,
) -> Any:
    """Interactive snapshot of a collection with Plotly (hover shows flux). Returns the Figure."""
    if not _PLOTLY:
        raise RuntimeError("plotly is not installed. `pip install plotly`")

    cfg = config or PlotlyElementsConfig()
    x, q, r = element_arrays(elements)
    colors = np.where(q >= 0.0, "blue", "red")

    fig = go.Figure(
        data=[
            go.Scatter(
                x=x[:, 0], y=x[:, 1], mode="markers",
                marker=dict(size=cfg.marker_size, color=colors, line=dict(width=0.5, color="black")),
                customdata=q,
                hovertemplate="z = %{x:.4g} + %{y:.4g}i<br>Q = %{customdata:.4g}<extra></extra>",
                name="elements",
            )
        ]
    )
    if cfg.show_radius and r is not None:
        cx, cy = _circle_segments(x, r)
        fig.add_trace(go.Scatter(x=cx, y=cy, mode="lines", line=dict(width=1, dash="dash"), name="blob radius"))

    layout: dict[str, Any] = dict(
        title=f"{cfg.title} — N = {len(elements)}",
        xaxis_title="x [m]",
        yaxis_title="y [m]",
        xaxis=dict(scaleanchor="y", scaleratio=1),
        template="plotly_white",
        legend=dict(x=0.01, y=0.99),
    )
    if cfg.domain is not None:
        xmin, xmax, ymin, ymax = cfg.domain
        layout["xaxis"]["range"] = [xmin, xmax]
        layout["yaxis"] = dict(range=[ymin, ymax])
    fig.update_layout(**layout)

    if save_html:
        fig.write_html(save_html, include_plotlyjs="cdn")
    return fig
