from __future__ import annotations

import numpy as np
import pytest

from source2d import (
    DegreeOfFreedom,
    Dual,
    ScalarTypeMismatch,
    SeedIndexError,
    SourceBlob,
    SourcePoint,
    degrees_of_freedom,
    derivative,
    dualize,
    primal,
    seed_position,
    seed_strength,
    seeded_variants,
)


class TaggedDual(Dual):
    pass


def points() -> list[SourcePoint]:
    return [SourcePoint(0.0, 1.0), SourcePoint(1.0, 1.0), SourcePoint(2.0, 1.0)]


def blobs() -> list[SourceBlob]:
    return [SourceBlob(0.1j, 1.0, 0.05), SourceBlob(1.0, -0.5, 0.1), SourceBlob(2.0 - 1j, 2.0, 0.0)]


COLLECTIONS = [points, blobs]


def _assert_no_perturbation(v) -> None:
    if isinstance(v, Dual):
        assert not np.any(v.partials)


@pytest.mark.parametrize("make", COLLECTIONS)
def test_dualize_is_neutral(make) -> None:
    c = make()
    d = dualize(Dual, c)
    assert len(d) == len(c)
    for orig, lifted in zip(c, d):
        assert isinstance(lifted.position, Dual)
        assert isinstance(lifted.flux, Dual)
        assert primal(lifted.position) == orig.position
        assert primal(lifted.flux) == orig.flux
        assert derivative(lifted.position) == 0.0
        assert derivative(lifted.flux) == 0.0
        assert lifted.circulation == 0.0
        if isinstance(orig, SourceBlob):
            assert lifted.radius == orig.radius
            assert type(lifted.radius) is float
    # input untouched
    assert c == make()


def test_dualize_is_idempotent() -> None:
    d = dualize(Dual, points())
    dd = dualize(Dual, d)
    for a, b in zip(d, dd):
        assert a.position is b.position


@pytest.mark.parametrize("make", COLLECTIONS)
@pytest.mark.parametrize("component,unit", [("x", 1.0), ("y", 1j)])
@pytest.mark.parametrize("i", [0, 1, 2])
def test_seed_position_is_localized(make, component: str, unit: complex, i: int) -> None:
    c = make()
    base = dualize(Dual, c)
    seeded = seed_position(Dual, c, i, component=component)
    for k, (b, s, orig) in enumerate(zip(base, seeded, c)):
        assert primal(s.position) == primal(b.position)
        assert primal(s.flux) == primal(b.flux)
        # fluxes stay as they were
        assert s.strength == orig.strength
        _assert_no_perturbation(s.flux)
        if k == i:
            assert derivative(s.position) == unit
        else:
            assert derivative(s.position) == 0.0
        if isinstance(orig, SourceBlob):
            assert s.radius == orig.radius


@pytest.mark.parametrize("make", COLLECTIONS)
@pytest.mark.parametrize("i", [0, 1, 2])
def test_seed_strength_is_localized(make, i: int) -> None:
    c = make()
    base = dualize(Dual, c)
    seeded = seed_strength(Dual, c, i)
    for k, (b, s, orig) in enumerate(zip(base, seeded, c)):
        assert primal(s.position) == primal(b.position)
        assert primal(s.flux) == primal(b.flux)
        assert s.position == orig.position
        assert derivative(s.flux) == (1.0 if k == i else 0.0)
        assert s.circulation == 0.0
        if isinstance(orig, SourceBlob):
            assert s.radius == orig.radius


def test_three_sources_seed_middle_flux() -> None:
    seeded = seed_strength(Dual, points(), 1)
    assert [primal(e.flux) for e in seeded] == [1.0, 1.0, 1.0]
    assert [derivative(e.flux) for e in seeded] == [0.0, 1.0, 0.0]
    assert [e.position for e in seeded] == [0j, 1 + 0j, 2 + 0j]


def test_single_blob_dualized() -> None:
    (e,) = dualize(Dual, [SourceBlob(1.0 + 0.0j, 2.0, 0.1)])
    assert e.radius == 0.1
    assert primal(e.flux) == 2.0
    assert derivative(e.flux) == 0.0
    assert primal(e.position) == 1.0 + 0.0j


@pytest.mark.parametrize("i", [-1, 3, 10])
def test_out_of_range_index_rejected(i: int) -> None:
    c = points()
    with pytest.raises(SeedIndexError):
        seed_position(Dual, c, i)
    with pytest.raises(SeedIndexError):
        seed_strength(Dual, c, i)
    # still catchable as the builtin
    with pytest.raises(IndexError):
        seed_strength(Dual, c, i)


def test_empty_collection() -> None:
    assert dualize(Dual, []) == []
    with pytest.raises(SeedIndexError):
        seed_strength(Dual, [], 0)


def test_scalar_type_must_support_seeding() -> None:
    with pytest.raises(ScalarTypeMismatch):
        dualize(float, points())
    with pytest.raises(ScalarTypeMismatch):
        seed_strength(Dual.seed(1.0), points(), 0)  # type: ignore[arg-type]


def test_already_dualized_collection_with_other_type_rejected() -> None:
    d = dualize(Dual, blobs())
    with pytest.raises(ScalarTypeMismatch):
        seed_position(TaggedDual, d, 0)
    with pytest.raises(ScalarTypeMismatch):
        dualize(TaggedDual, d)
    # same type is fine; the seed lands on top of the lifted value
    s = seed_strength(Dual, d, 2)
    assert derivative(s[2].flux) == 1.0


def test_invalid_component() -> None:
    with pytest.raises(ValueError):
        seed_position(Dual, points(), 0, component="z")  # type: ignore[arg-type]


def test_degrees_of_freedom_order() -> None:
    assert degrees_of_freedom(2) == [
        DegreeOfFreedom(0, "x"), DegreeOfFreedom(1, "x"),
        DegreeOfFreedom(0, "y"), DegreeOfFreedom(1, "y"),
        DegreeOfFreedom(0, "flux"), DegreeOfFreedom(1, "flux"),
    ]
    assert degrees_of_freedom(2, positions=False, order="element") == [
        DegreeOfFreedom(0, "flux"), DegreeOfFreedom(1, "flux"),
    ]
    assert degrees_of_freedom(1, order="element") == [
        DegreeOfFreedom(0, "x"), DegreeOfFreedom(0, "y"), DegreeOfFreedom(0, "flux"),
    ]
    with pytest.raises(ValueError):
        degrees_of_freedom(2, order="random")  # type: ignore[arg-type]


def test_seeded_variants_one_per_dof() -> None:
    c = blobs()
    variants = list(seeded_variants(Dual, c))
    assert len(variants) == 3 * len(c)
    for dof, seeded in variants:
        units = {"x": 1.0, "y": 1j}
        for k, e in enumerate(seeded):
            hot = k == dof.index
            if dof.quantity == "flux":
                assert derivative(e.flux) == (1.0 if hot else 0.0)
            else:
                assert derivative(e.position) == (units[dof.quantity] if hot else 0.0)
            assert e.radius == c[k].radius


def test_seeded_variants_validates_up_front() -> None:
    with pytest.raises(SeedIndexError):
        seeded_variants(Dual, points(), [DegreeOfFreedom(0, "x"), DegreeOfFreedom(5, "flux")])


def test_seeded_variants_rejects_unknown_quantity_before_yielding() -> None:
    dofs = [DegreeOfFreedom(0, "flux"), DegreeOfFreedom(1, "z")]  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        seeded_variants(Dual, points(), dofs)
