from __future__ import annotations

import math
import numbers
from typing import Any, Protocol, runtime_checkable

import numpy as np
from numpy.typing import NDArray

from .errors import ScalarTypeMismatch


@runtime_checkable
class ScalarType(Protocol):
    """Capabilities a target scalar class must offer to the seeding engine.

    lift: embed a plain number (or a value already of this type) with zero derivative.
    seed: same embedding, plus ``unit`` added to the derivative.
    value_of / derivative_of: read back the primal and derivative parts of a
    result, passing plain numbers through (zero derivative).
    """

    @classmethod
    def lift(cls, x: Any) -> Any: ...

    @classmethod
    def seed(cls, x: Any, unit: complex = 1.0) -> Any: ...

    @classmethod
    def value_of(cls, x: Any) -> Any: ...

    @classmethod
    def derivative_of(cls, x: Any) -> Any: ...


class Dual:
    """Forward-mode dual number ``value + partials·ε`` with ``ε² = 0``.

    ``value`` may be real or complex; derivatives are taken along a real
    parameter, so a complex value carries a complex derivative. Comparison
    and hashing use the primal value only. Mixing two different dual
    classes raises ``ScalarTypeMismatch``.
    """

    __slots__ = ("value", "partials")
    # numpy scalars defer binary operators to us instead of building object arrays
    __array_ufunc__ = None

    def __init__(self, value: Any, partials: Any = (0.0,)) -> None:
        if isinstance(value, Dual):
            raise ScalarTypeMismatch("nested dual values are not supported")
        self.value = value
        self.partials: NDArray[Any] = np.atleast_1d(np.asarray(partials))

    # -------- protocol --------
    @classmethod
    def lift(cls, x: Any) -> Dual:
        if type(x) is cls:
            return x
        if isinstance(x, numbers.Number):
            return cls(x, np.zeros(1))
        raise ScalarTypeMismatch(f"cannot lift {type(x).__name__} into {cls.__name__}")

    @classmethod
    def seed(cls, x: Any, unit: complex = 1.0) -> Dual:
        d = cls.lift(x)
        return cls(d.value, d.partials + unit)

    @classmethod
    def value_of(cls, x: Any) -> Any:
        return primal(x)

    @classmethod
    def derivative_of(cls, x: Any) -> Any:
        return derivative(x)

    # -------- helpers --------
    def _coerce(self, other: Any) -> Dual | None:
        if type(other) is type(self):
            return other
        if isinstance(other, Dual):
            raise ScalarTypeMismatch(
                f"cannot combine {type(self).__name__} with {type(other).__name__}"
            )
        if isinstance(other, numbers.Number):
            return type(self)(other, np.zeros_like(self.partials))
        return None

    @property
    def real(self) -> Dual:
        return type(self)(self.value.real, self.partials.real)

    @property
    def imag(self) -> Dual:
        return type(self)(self.value.imag, self.partials.imag)

    def conjugate(self) -> Dual:
        return type(self)(self.value.conjugate(), self.partials.conj())

    # -------- ring operations --------
    def __add__(self, other: Any) -> Dual:
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return type(self)(self.value + o.value, self.partials + o.partials)

    __radd__ = __add__

    def __sub__(self, other: Any) -> Dual:
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return type(self)(self.value - o.value, self.partials - o.partials)

    def __rsub__(self, other: Any) -> Dual:
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return o - self

    def __mul__(self, other: Any) -> Dual:
        if isinstance(other, numbers.Number):
            return type(self)(self.value * other, self.partials * other)
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return type(self)(
            self.value * o.value,
            self.partials * o.value + self.value * o.partials,
        )

    __rmul__ = __mul__

    def __truediv__(self, other: Any) -> Dual:
        if isinstance(other, numbers.Number):
            return type(self)(self.value / other, self.partials / other)
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return type(self)(
            self.value / o.value,
            (self.partials * o.value - self.value * o.partials) / (o.value * o.value),
        )

    def __rtruediv__(self, other: Any) -> Dual:
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return o / self

    def __pow__(self, n: Any) -> Dual:
        if not isinstance(n, numbers.Real):
            return NotImplemented
        if n == 0:
            return type(self)(self.value ** 0, np.zeros_like(self.partials))
        return type(self)(self.value ** n, n * self.value ** (n - 1) * self.partials)

    def __neg__(self) -> Dual:
        return type(self)(-self.value, -self.partials)

    def __pos__(self) -> Dual:
        return self

    def __abs__(self) -> Dual:
        v = self.value
        if isinstance(v, numbers.Real):
            return type(self)(abs(v), math.copysign(1.0, v) * self.partials)
        r = abs(v)
        if r == 0:
            # |z| is not differentiable at 0; take the one-sided slope along the seed
            return type(self)(r, np.abs(self.partials))
        return type(self)(r, (v.conjugate() * self.partials).real / r)

    # -------- comparison (primal only) --------
    def __eq__(self, other: object) -> bool:
        if isinstance(other, Dual):
            return bool(self.value == other.value)
        if isinstance(other, numbers.Number):
            return bool(self.value == other)
        return NotImplemented

    def __ne__(self, other: object) -> bool:
        eq = self.__eq__(other)
        return eq if eq is NotImplemented else not eq

    def __hash__(self) -> int:
        return hash(self.value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.value!r}, {self.partials.tolist()!r})"


def primal(x: Any) -> Any:
    """Value part of a dual, or the number itself."""
    return x.value if isinstance(x, Dual) else x


def derivative(x: Any, k: int = 0) -> Any:
    """``k``-th derivative component of a dual; plain numbers have zero derivative."""
    if isinstance(x, Dual):
        return x.partials[k].item()
    return 0.0 if isinstance(x, numbers.Real) else 0j
