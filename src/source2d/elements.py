from __future__ import annotations

import numbers
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Protocol, TypeVar

from .dual import primal

Scalar = Any  # plain float/complex or a dual scalar


# ---------------------------
# Utility
# ---------------------------
def _as_complex(z: Scalar) -> Scalar:
    """Promote real positions to complex; complex and dual values pass through."""
    if isinstance(z, numbers.Real):
        return complex(z)
    return z


def _imaginary(q: Scalar) -> Scalar:
    """Strength ``0 + i·q`` in the scalar type of ``q``."""
    if isinstance(q, numbers.Real):
        return complex(0.0, q)
    return q * 1j


# ---------------------------
# Element kinds
# ---------------------------
class SingularityElement(Protocol):
    """What the seeding engine needs from an element kind."""

    @property
    def position(self) -> Scalar: ...

    @property
    def strength(self) -> Scalar: ...

    @property
    def flux(self) -> Scalar: ...

    @property
    def circulation(self) -> float: ...

    def replace(self, *, position: Scalar | None = None, flux: Scalar | None = None) -> Any: ...


E = TypeVar("E", bound=SingularityElement)


@dataclass(frozen=True, slots=True, init=False, repr=False)
class SourcePoint:
    """Point source (flux > 0) or sink (flux < 0) at complex ``position``.

    The strength is stored as ``circulation + i·flux`` with zero circulation.

    >>> p = SourcePoint(1.0, 1.0)
    >>> p
    SourcePoint((1+0j), 1.0)
    >>> p.replace(flux=2.0)
    SourcePoint((1+0j), 2.0)
    """
    position: Scalar
    strength: Scalar

    def __init__(self, position: Scalar, flux: Scalar) -> None:
        object.__setattr__(self, "position", _as_complex(position))
        object.__setattr__(self, "strength", _imaginary(flux))

    @classmethod
    def from_strength(cls, position: Scalar, strength: Scalar) -> SourcePoint:
        p = cls.__new__(cls)
        object.__setattr__(p, "position", _as_complex(position))
        object.__setattr__(p, "strength", strength)
        return p

    @property
    def flux(self) -> Scalar:
        return self.strength.imag

    @property
    def circulation(self) -> float:
        return 0.0

    def replace(self, *, position: Scalar | None = None, flux: Scalar | None = None) -> SourcePoint:
        """Copy with the given fields overridden; no arguments gives an equal element."""
        return SourcePoint.from_strength(
            self.position if position is None else position,
            self.strength if flux is None else _imaginary(flux),
        )

    def __repr__(self) -> str:
        if primal(self.strength.real) == 0:
            return f"SourcePoint({self.position!r}, {self.flux!r})"
        return f"SourcePoint.from_strength({self.position!r}, {self.strength!r})"


@dataclass(frozen=True, slots=True, init=False, repr=False)
class SourceBlob:
    """Regularized source of blob radius ``radius``.

    The radius is a plain float: dualization and seeding carry it over unchanged.

    >>> b = SourceBlob(1.0, 1.0, 0.1)
    >>> b.replace(flux=2.0, radius=0.01)
    SourceBlob((1+0j), 2.0, 0.01)
    """
    position: Scalar
    strength: Scalar
    radius: float

    def __init__(self, position: Scalar, flux: Scalar, radius: float) -> None:
        object.__setattr__(self, "position", _as_complex(position))
        object.__setattr__(self, "strength", _imaginary(flux))
        object.__setattr__(self, "radius", float(radius))

    @classmethod
    def from_strength(cls, position: Scalar, strength: Scalar, radius: float) -> SourceBlob:
        b = cls.__new__(cls)
        object.__setattr__(b, "position", _as_complex(position))
        object.__setattr__(b, "strength", strength)
        object.__setattr__(b, "radius", float(radius))
        return b

    @property
    def flux(self) -> Scalar:
        return self.strength.imag

    @property
    def circulation(self) -> float:
        return 0.0

    def replace(
        self,
        *,
        position: Scalar | None = None,
        flux: Scalar | None = None,
        radius: float | None = None,
    ) -> SourceBlob:
        """Copy with the given fields overridden; no arguments gives an equal element."""
        return SourceBlob.from_strength(
            self.position if position is None else position,
            self.strength if flux is None else _imaginary(flux),
            self.radius if radius is None else radius,
        )

    def __repr__(self) -> str:
        if primal(self.strength.real) == 0:
            return f"SourceBlob({self.position!r}, {self.flux!r}, {self.radius!r})"
        return f"SourceBlob.from_strength({self.position!r}, {self.strength!r}, {self.radius!r})"


# ---------------------------
# Accessors
# ---------------------------
def position(e: SingularityElement) -> Scalar:
    return e.position


def flux(e: SingularityElement) -> Scalar:
    return e.flux


def circulation(e: SingularityElement) -> float:
    return e.circulation


def radius(e: SourceBlob) -> float:
    return e.radius


def positions(elements: Sequence[SingularityElement]) -> list[Scalar]:
    return [e.position for e in elements]


def fluxes(elements: Sequence[SingularityElement]) -> list[Scalar]:
    return [e.flux for e in elements]
