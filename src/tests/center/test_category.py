"""
Test: Center Category Arithmetic
================================

Uses the toric-code anyons 1, e, m, f of Z(Vec_Z2) and the semion of the
double semion Z(Vec_Z2^ω) over Q(i).

  C1: central projection is idempotent and fixes central morphisms
  C2: Hom-spaces between simples (Schur)
  C3: tensor, dual, direct sum keep the hexagon
  C4: braiding round trip and monodromy
  C5: simple cache (add_simple, NotSimpleError, nested requests)
  C6: induction I(X) = ⊕ S*⊗X⊗S, no search
  C7: kernels and cokernels of central morphisms

Oct 2026
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

import pytest
import sympy

from category_core.abstracts import end, hom, decompose, is_isomorphic, kernel, cokernel
from category_core.errors import NotSimpleError
from center import search
from center.category import (
    Center, CenterCategory, braiding, central_projection, half_braiding, induction,
    verify_hexagon,
)


@pytest.fixture(scope='module')
def semion(double_semion):
    return next(X for X in double_semion if X.gamma[1].matrix[0, 0] == sympy.I)


# =============================================================================
# C1: CENTRAL PROJECTION
# =============================================================================

def test_projection_is_idempotent(anyons):
    X = anyons["1"].dsum(anyons["e"])[0]
    for f in hom(X.object, X.object).basis:
        P = central_projection(X, X, f)
        assert central_projection(X, X, P) == P


def test_projection_fixes_central_morphisms(anyons):
    X, incl, proj = anyons["m"].dsum(anyons["f"])
    for i, p in zip(incl, proj):
        assert central_projection(i.domain, X, i.m) == i.m
        assert central_projection(X, p.codomain, p.m) == p.m


def test_associator_is_central(anyons):
    e, m, f = anyons["e"], anyons["m"], anyons["f"]
    a = Center(e.parent.category).associator(e, m, f)
    assert central_projection(a.domain, a.codomain, a.m) == a.m


# =============================================================================
# C2: HOM-SPACES
# =============================================================================

def test_schur(anyons):
    names = ["1", "e", "m", "f"]
    for a in names:
        for b in names:
            assert hom(anyons[a], anyons[b]).dim == (1 if a == b else 0)


def test_end_of_sum(anyons):
    X = anyons["1"].dsum(anyons["e"])[0]
    assert end(X).dim == 2
    Y = anyons["e"].dsum(anyons["e"])[0]
    assert end(Y).dim == 4


def test_decompose(vec_z2, anyons, toric_code):
    X = anyons["e"].dsum(anyons["e"])[0].dsum(anyons["m"])[0]
    counts = {k: m for S, m in decompose(X) for k, T in anyons.items() if hom(S, T).dim}
    assert counts == {"e": 2, "m": 1}


def test_dimensions(vec_z2, toric_code):
    Z = Center(vec_z2)
    assert Z.dim() == 4
    assert Z.is_fusion()
    assert Z.zero().dim() == 0
    assert Z.one().dim() == 1


def test_direct_sum_of_morphisms(anyons):
    X, incl, proj = anyons["1"].dsum(anyons["e"])
    split = incl[0] @ proj[0] + incl[1] @ proj[1]
    assert split.m == X.object.id()
    assert (incl[0].scale(2) - incl[0] - incl[0]).is_zero()


# =============================================================================
# C3: TENSOR, DUAL, SUM
# =============================================================================

def test_fusion_e_times_m_is_f(anyons):
    em = anyons["e"].tensor(anyons["m"])
    assert verify_hexagon(em)
    flag, iso = is_isomorphic(em, anyons["f"])
    assert flag
    assert iso.domain.object == em.object


def test_duals_keep_hexagon(anyons, semion):
    for X in list(anyons.values()) + [semion]:
        dX = X.dual()
        assert verify_hexagon(dX)
        assert hom(dX, X).dim == 1


def test_semion_squares_to_unit(semion):
    ss = semion.tensor(semion)
    assert verify_hexagon(ss)
    assert hom(ss, semion.parent.one()).dim == 1


def test_direct_sum_keeps_hexagon(anyons):
    assert verify_hexagon(anyons["e"].dsum(anyons["f"])[0])


def test_ev_coev_are_central(semion):
    for m in (semion.ev(), semion.coev()):
        assert central_projection(m.domain, m.codomain, m.m) == m.m


# =============================================================================
# C4: BRAIDING
# =============================================================================

def test_fermion_round_trip(anyons):
    f = anyons["f"]
    c = braiding(f, f)
    assert c.m == -f.object.tensor(f.object).id()
    assert (c @ c).m == f.object.tensor(f.object).id()


def test_charge_flux_monodromy(anyons):
    e, m = anyons["e"], anyons["m"]
    monodromy = braiding(m, e) @ braiding(e, m)
    assert monodromy.m == -(e.object.tensor(m.object).id())


def test_braiding_is_central(anyons):
    e, m = anyons["e"], anyons["m"]
    c = braiding(e, m)
    assert central_projection(c.domain, c.codomain, c.m) == c.m


def test_half_braiding_accessor(anyons):
    gamma = half_braiding(anyons["e"])
    assert len(gamma) == 2
    assert gamma[1].matrix[0, 0] == -1


# =============================================================================
# C5: SIMPLE CACHE
# =============================================================================

def test_add_simple(vec_z2, anyons):
    Z = CenterCategory(vec_z2)
    with pytest.raises(NotSimpleError):
        Z.add_simple(anyons["1"].dsum(anyons["e"])[0])
    Z.add_simple(anyons["e"])
    Z.add_simple(anyons["e"])
    Z.add_simple(anyons["m"])
    assert len(Z.simples()) == 2


def test_simples_requested_inside_search(vec_z2, monkeypatch):
    """C5: the cache lock is reentrant; a nested request fails instead of hanging."""
    Z = CenterCategory(vec_z2)
    monkeypatch.setattr(search, "center_simples", lambda C, center=None: center.simples())
    with pytest.raises(RuntimeError, match="own search"):
        Z.simples()
    assert Z._simples is None
    assert not Z._searching


# =============================================================================
# C6: INDUCTION
# =============================================================================

def _names(X, anyons):
    return {k: m for S, m in decompose(X) for k, T in anyons.items() if hom(S, T).dim}


def test_induction_of_unit(vec_z2, anyons):
    """C6: I(δ_0) = δ_0 ⊕ δ_0 with γ_g swapping the summands, i.e. 1 ⊕ e."""
    I_one = induction(vec_z2.one())
    assert I_one.object.degrees == (vec_z2.group.identity,) * 2
    assert verify_hexagon(I_one)
    assert I_one.dim() == 2
    assert _names(I_one, anyons) == {"1": 1, "e": 1}


def test_induction_of_flux(vec_z2, anyons):
    g = vec_z2.group.elements[1]
    I_g = induction(vec_z2.simple(g))
    assert verify_hexagon(I_g)
    assert _names(I_g, anyons) == {"m": 1, "f": 1}


def test_induction_with_twisted_associator(semion_base, semion):
    """I(δ_g) over Vec_Z2^ω splits into the semion and its conjugate."""
    g = semion_base.group.elements[1]
    I_g = induction(semion_base.simple(g))
    assert verify_hexagon(I_g)
    assert end(I_g).dim == 2
    assert hom(semion, I_g).dim == 1


# =============================================================================
# C7: KERNELS AND COKERNELS
# =============================================================================

def test_kernel_of_projection_is_unit(anyons):
    W, incl, proj = anyons["1"].dsum(anyons["e"])
    K, k = kernel(proj[1])
    assert verify_hexagon(K)
    assert end(K).dim == 1
    assert hom(K, anyons["1"]).dim == 1
    assert (proj[1] @ k).is_zero()


def test_cokernel_of_inclusion_is_charge(anyons):
    W, incl, proj = anyons["1"].dsum(anyons["e"])
    Q, q = cokernel(incl[0])
    assert verify_hexagon(Q)
    assert hom(Q, anyons["e"]).dim == 1
    assert (q @ incl[0]).is_zero()


def test_kernel_of_isomorphism_is_zero(anyons):
    K, k = kernel(anyons["m"].id())
    assert K.dim() == 0
    assert len(K.object.degrees) == 0
