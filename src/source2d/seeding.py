"""Dualization and one-hot seeding of element collections.

Forward-mode Jacobian assembly runs an evaluation once per column, each time
with exactly one scalar degree of freedom carrying a unit derivative. The
functions here build those input collections for any element kind exposing
``position``, ``flux`` and ``replace(position=..., flux=...)``; regularized
elements keep their radius through ``replace``.

Column convention for positions: a complex position has two real degrees of
freedom, seeded by separate calls with unit ``1`` (x) and ``1j`` (y).
"""
from __future__ import annotations

import logging
import numbers
import operator
from collections.abc import Iterable, Iterator, Sequence
from typing import Any, Literal, NamedTuple

from .dual import ScalarType
from .elements import E
from .errors import ScalarTypeMismatch, SeedIndexError

logger = logging.getLogger(__name__)

Quantity = Literal["x", "y", "flux"]

_POSITION_UNITS: dict[str, complex] = {"x": 1.0, "y": 1j}
_QUANTITIES = frozenset({"x", "y", "flux"})


class DegreeOfFreedom(NamedTuple):
    """One scalar input: ``quantity`` of the element at ``index``."""
    index: int
    quantity: Quantity


# ---------------------------
# Checks (run before any element is rebuilt)
# ---------------------------
def _check_scalar_type(T: Any, elements: Sequence[E]) -> None:
    if not isinstance(T, type) or not isinstance(T, ScalarType):
        raise ScalarTypeMismatch(f"{T!r} is not a scalar type providing lift() and seed()")
    for k, e in enumerate(elements):
        for name, v in (("position", e.position), ("flux", e.flux)):
            if not isinstance(v, numbers.Number) and type(v) is not T:
                raise ScalarTypeMismatch(
                    f"element {k} {name} is {type(v).__name__}, incompatible with {T.__name__}"
                )


def _check_index(i: int, elements: Sequence[E]) -> int:
    i = operator.index(i)
    n = len(elements)
    if not 0 <= i < n:
        raise SeedIndexError(i, n)
    return i


# ---------------------------
# Seeding operations
# ---------------------------
def dualize(T: type, elements: Sequence[E]) -> list[E]:
    """Lift every position and flux into ``T`` without any perturbation."""
    _check_scalar_type(T, elements)
    logger.debug("dualize %d elements as %s", len(elements), T.__name__)
    return [e.replace(position=T.lift(e.position), flux=T.lift(e.flux)) for e in elements]


def seed_position(
    T: type,
    elements: Sequence[E],
    i: int,
    component: Literal["x", "y"] = "x",
) -> list[E]:
    """Lift all positions into ``T`` and seed the ``component`` of position ``i``.

    Fluxes are left as they are.
    """
    if component not in _POSITION_UNITS:
        raise ValueError(f"component must be 'x' or 'y', got {component!r}")
    _check_scalar_type(T, elements)
    i = _check_index(i, elements)
    unit = _POSITION_UNITS[component]
    logger.debug("seed position %s of element %d/%d as %s", component, i, len(elements), T.__name__)
    return [
        e.replace(position=T.seed(e.position, unit) if k == i else T.lift(e.position))
        for k, e in enumerate(elements)
    ]


def seed_strength(T: type, elements: Sequence[E], i: int) -> list[E]:
    """Lift all fluxes into ``T`` and seed flux ``i``. Positions are left as they are."""
    _check_scalar_type(T, elements)
    i = _check_index(i, elements)
    logger.debug("seed flux of element %d/%d as %s", i, len(elements), T.__name__)
    return [
        e.replace(flux=T.seed(e.flux) if k == i else T.lift(e.flux))
        for k, e in enumerate(elements)
    ]


def seed(T: type, elements: Sequence[E], dof: DegreeOfFreedom) -> list[E]:
    if dof.quantity == "flux":
        return seed_strength(T, elements, dof.index)
    return seed_position(T, elements, dof.index, component=dof.quantity)


# ---------------------------
# Degree-of-freedom families
# ---------------------------
def degrees_of_freedom(
    n: int,
    *,
    positions: bool = True,
    strengths: bool = True,
    order: Literal["variable", "element"] = "variable",
) -> list[DegreeOfFreedom]:
    """Enumerate the scalar inputs of ``n`` elements in Jacobian column order.

    order="variable": x_0..x_{n-1}, y_0.., flux_0..
    order="element":  x_0, y_0, flux_0, x_1, ...
    """
    quantities: list[Quantity] = []
    if positions:
        quantities += ["x", "y"]
    if strengths:
        quantities.append("flux")
    if order == "variable":
        return [DegreeOfFreedom(k, q) for q in quantities for k in range(n)]
    if order == "element":
        return [DegreeOfFreedom(k, q) for k in range(n) for q in quantities]
    raise ValueError(f"Unknown order: {order}")


def seeded_variants(
    T: type,
    elements: Sequence[E],
    dofs: Iterable[DegreeOfFreedom] | None = None,
) -> Iterator[tuple[DegreeOfFreedom, list[E]]]:
    """Lazily yield ``(dof, seeded collection)`` for every requested degree of freedom.

    Scalar type and indices are validated up front, before anything is yielded.
    """
    _check_scalar_type(T, elements)
    if dofs is None:
        dofs = degrees_of_freedom(len(elements))
    dofs = list(dofs)
    for dof in dofs:
        if dof.quantity not in _QUANTITIES:
            raise ValueError(f"quantity must be one of {sorted(_QUANTITIES)}, got {dof.quantity!r}")
        _check_index(dof.index, elements)
    return ((dof, seed(T, elements, dof)) for dof in dofs)
