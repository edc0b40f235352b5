from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray
import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.patches import Circle

from .dual import primal
from .elements import SingularityElement, fluxes, positions


def element_arrays(
    elements: Sequence[SingularityElement],
) -> tuple[NDArray[np.float64], NDArray[np.float64], NDArray[np.float64] | None]:
    """Primal (N,2) positions, (N,) fluxes and, for blobs, (N,) radii."""
    z = np.asarray([primal(p) for p in positions(elements)], dtype=np.complex128)
    x = np.stack([z.real, z.imag], axis=1) if z.size else np.zeros((0, 2))
    q = np.asarray([primal(f) for f in fluxes(elements)], dtype=np.float64)
    r = None
    if elements and all(hasattr(e, "radius") for e in elements):
        r = np.asarray([e.radius for e in elements], dtype=np.float64)  # type: ignore[attr-defined]
    return x, q, r


@dataclass(slots=True)
class ElementPlotConfig:
    domain: tuple[float, float, float, float] | None = None  # None -> autoscale
    figsize: tuple[float, float] = (6.0, 6.0)
    max_marker: float = 80.0
    min_marker: float = 10.0
    show_radius: bool = True
    title: str = "Sources and sinks"


def plot_elements(
    elements: Sequence[SingularityElement],
    *,
    ax: Axes | None = None,
    config: ElementPlotConfig | None = None,
) -> Axes:
    """Scatter the collection: blue sources, red sinks, marker area ~ |flux|.

    Regularized elements also get a dashed circle of their blob radius.
    """
    cfg = config or ElementPlotConfig()
    if ax is None:
        _, ax = plt.subplots(figsize=cfg.figsize)

    x, q, r = element_arrays(elements)
    q_abs = np.abs(q)
    s = (cfg.max_marker - cfg.min_marker) * (q_abs / (q_abs.max(initial=0.0) + 1e-15)) + cfg.min_marker
    colors = np.where(q >= 0.0, "tab:blue", "tab:red")
    ax.scatter(x[:, 0], x[:, 1], s=s, c=colors, edgecolors="k", linewidths=0.3, alpha=0.85)

    if cfg.show_radius and r is not None:
        for (xi, yi), ri, ci in zip(x, r, colors):
            if ri > 0.0:
                ax.add_patch(Circle((xi, yi), ri, fill=False, ls="--", lw=0.8, ec=ci))

    if cfg.domain is not None:
        xmin, xmax, ymin, ymax = cfg.domain
        ax.set_xlim(xmin, xmax)
        ax.set_ylim(ymin, ymax)
    ax.set_aspect("equal", adjustable="datalim")
    ax.set_title(f"{cfg.title} — N = {len(elements)}, ΣQ = {float(q.sum()):.4g}")
    ax.set_xlabel("x [m]")
    ax.set_ylabel("y [m]")
    ax.grid(True, alpha=0.2)
    return ax
