from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Literal

import numpy as np
from numpy.typing import NDArray

from .dual import Dual
from .elements import E
from .seeding import DegreeOfFreedom, degrees_of_freedom, dualize, seeded_variants

logger = logging.getLogger(__name__)


# ----------------------
# Configuration objects
# ----------------------

@dataclass(slots=True)
class JacobianConfig:
    """Which element inputs become Jacobian columns, and in what order.

    order="variable" groups columns by quantity (all x, all y, all flux);
    order="element" groups them by element (x, y, flux of element 0, then 1, ...).
    """
    positions: bool = True
    strengths: bool = True
    order: Literal["variable", "element"] = "variable"

    def __post_init__(self) -> None:
        if self.order not in {"variable", "element"}:
            raise ValueError(f"Unknown order: {self.order}")
        if not (self.positions or self.strengths):
            raise ValueError("At least one of positions/strengths must be selected.")

    def dofs(self, n: int) -> list[DegreeOfFreedom]:
        return degrees_of_freedom(n, positions=self.positions, strengths=self.strengths, order=self.order)


@dataclass(slots=True)
class JacobianResult:
    values: NDArray[Any]            # (m,) primal outputs
    matrix: NDArray[Any]            # (m, n_dofs) d output / d input
    dofs: list[DegreeOfFreedom] = field(default_factory=list)


# ----------------------
# Forward-mode driver
# ----------------------

def _flatten(out: Any) -> list[Any]:
    return list(np.asarray(out, dtype=object).ravel())


def jacobian(
    func: Callable[[list[E]], Any],
    elements: Sequence[E],
    *,
    scalar_type: type = Dual,
    config: JacobianConfig | None = None,
) -> JacobianResult:
    """Jacobian of ``func(elements)`` with respect to element positions and fluxes.

    ``func`` is evaluated once on the dualized collection for the primal
    outputs and once per degree of freedom on its seeded collection. It may
    return a scalar or an array-like of scalars.
    """
    cfg = config or JacobianConfig()
    dofs = cfg.dofs(len(elements))
    variants = seeded_variants(scalar_type, elements, dofs)
    logger.debug("jacobian sweep over %d degrees of freedom", len(dofs))

    T = scalar_type
    values = np.asarray([T.value_of(v) for v in _flatten(func(dualize(T, elements)))])
    columns = []
    for _, seeded in variants:
        columns.append([T.derivative_of(v) for v in _flatten(func(seeded))])
    if columns:
        matrix = np.asarray(columns).T
    else:
        matrix = np.zeros((values.shape[0], 0), dtype=values.dtype)
    return JacobianResult(values=values, matrix=matrix, dofs=dofs)
