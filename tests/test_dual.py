from __future__ import annotations

import numpy as np
import pytest

from source2d import Dual, ScalarTypeMismatch, derivative, primal


class TaggedDual(Dual):
    """A distinct dual class; must not mix with Dual."""


def test_lift_has_zero_derivative():
    d = Dual.lift(2.0)
    assert primal(d) == 2.0
    assert derivative(d) == 0.0
    assert Dual.lift(d) is d


def test_seed_adds_unit():
    d = Dual.seed(2.0)
    assert derivative(d) == 1.0
    z = Dual.seed(1.0 + 2.0j, 1j)
    assert primal(z) == 1.0 + 2.0j
    assert derivative(z) == 1j


def test_product_and_quotient_rules():
    x = Dual.seed(3.0)
    assert derivative(x * x) == pytest.approx(6.0)
    assert derivative(1.0 / x) == pytest.approx(-1.0 / 9.0)
    assert derivative((x - 1.0) / (x + 1.0)) == pytest.approx(2.0 / 16.0)
    assert derivative(x**3) == pytest.approx(27.0)
    assert derivative(-x + 2 * x) == pytest.approx(1.0)


def test_numpy_scalars_defer_to_dual():
    x = Dual.seed(2.0)
    y = np.float64(3.0) * x
    assert isinstance(y, Dual)
    assert derivative(y) == pytest.approx(3.0)
    assert isinstance(np.float64(1.0) + x, Dual)


def test_complex_parts_and_conjugate():
    # z = x + i y with a y-seed: d|z|^2/dy = 2y
    z = Dual.seed(1.0 + 2.0j, 1j)
    r2 = z * z.conjugate()
    assert derivative(r2.real) == pytest.approx(4.0)
    assert derivative(z.imag) == 1.0
    assert derivative(z.real) == 0.0
    assert derivative(abs(z)) == pytest.approx(2.0 / np.sqrt(5.0))


def test_equality_uses_primal():
    assert Dual.seed(1.0) == 1.0
    assert Dual.seed(1.0) == Dual.lift(1.0)
    assert Dual.seed(1.0) != 2.0
    assert hash(Dual.lift(1.5)) == hash(1.5)


def test_plain_numbers_have_zero_derivative():
    assert derivative(2.0) == 0.0
    assert derivative(1.0 + 1.0j) == 0j
    assert primal(2.0) == 2.0


def test_mixing_dual_classes_rejected():
    with pytest.raises(ScalarTypeMismatch):
        Dual.seed(1.0) + TaggedDual.seed(1.0)
    with pytest.raises(ScalarTypeMismatch):
        TaggedDual.lift(Dual.lift(1.0))
    with pytest.raises(ScalarTypeMismatch):
        Dual(Dual.lift(1.0))
    with pytest.raises(TypeError):
        Dual.lift("1.0")


def test_abs_at_complex_zero_is_finite():
    z = Dual.seed(0j, 1j)
    a = abs(z)
    assert primal(a) == 0.0
    assert derivative(a) == 1.0
    assert np.isfinite(a.partials).all()
