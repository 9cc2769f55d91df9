"""
Test: Solution Enumerator and Assembler
=======================================

  S1: branching on one free unknown where only y = 1 survives
  S2: positive-dimensional half-braiding variety on δ_0 ⊕ δ_0
  S3: every assembled object satisfies the hexagon and normalization
  S4: empty variety gives no central objects
  S5: half-braidings over a subset of the simples
  S6: back-end failures are reported with the candidate

Oct 2026
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

import pytest
from sympy import QQ

from category_core import polynomial_backend
from category_core.abstracts import end, hom
from category_core.errors import SolverError
from category_core.graded import GradedVectorSpaces
from category_core.groups import cyclic_group, symmetric_group
from category_core.polynomial_backend import PolynomialRing, Ideal, recover_solutions
from center.category import Center, CenterObject, verify_hexagon
from center.ideal import build_center_ideal
from center.solver import (
    branch_ideal, guess_solutions, braidings_from_ideal, half_braidings,
)


# =============================================================================
# S1: SINGLE FREE UNKNOWN
# =============================================================================

def test_branching_finds_single_point():
    """
    S1: x1(x1 + 1)x2 = 2 is a curve with free unknown x1.
    x1 = 0 and x1 = -1 are inconsistent, x1 = 1 forces x2 = 1.
    """
    R = PolynomialRing(QQ, 2)
    x1, x2 = R.gens
    I = Ideal(R, [x1 * (x1 + 1) * x2 - 2])
    assert I.dimension() == 1
    assert I.free_variables() == (x1,)

    branches = branch_ideal(I)
    assert len(branches) == 1
    assert branches[0].dimension() == 0
    assert recover_solutions(branches[0]) == [(1, 1)]


def test_branching_zero_dimensional_input_is_terminal():
    R = PolynomialRing(QQ, 1)
    (x1,) = R.gens
    assert branch_ideal(Ideal(R, [x1 - 2])) == []


# =============================================================================
# S2-S3: δ_0 ⊕ δ_0 IN Vec_Z2
# =============================================================================

@pytest.fixture(scope='module')
def doubled_unit(vec_z2):
    """γ_g on δ_0 ⊕ δ_0 is any involution M (M² = 1): a 2-dimensional family."""
    e, _ = vec_z2.group.elements
    return vec_z2.object((e, e))


def test_doubled_unit_is_positive_dimensional(doubled_unit):
    I = build_center_ideal(doubled_unit)
    assert I.ring.ngens == 8
    assert I.dimension() == 2


def test_guess_solutions_on_family(doubled_unit):
    I = build_center_ideal(doubled_unit)
    found = guess_solutions(doubled_unit, I)
    assert len(found) > 0
    for X in found:
        assert isinstance(X, CenterObject)
        assert X.gamma[0] == doubled_unit.id()
        assert verify_hexagon(X)


def test_half_braidings_deduplicates(doubled_unit):
    results = half_braidings(doubled_unit)
    assert len(results) > 0
    for a, X in enumerate(results):
        assert verify_hexagon(X)
        for Y in results[a + 1:]:
            assert X.parent.hom(X, Y).dim == 0


def test_solutions_passed_in_are_extended(doubled_unit):
    I = build_center_ideal(doubled_unit)
    sentinel = ["already found"]
    out = guess_solutions(doubled_unit, I, solutions=sentinel)
    assert out is sentinel
    assert out[0] == "already found"


# =============================================================================
# S3-S4: ASSEMBLY
# =============================================================================

def test_assembled_objects_are_coherent(vec_z2):
    e, g = vec_z2.group.elements
    Z = vec_z2.simple(g)
    results = braidings_from_ideal(Z, build_center_ideal(Z))
    assert len(results) == 2
    assert sorted(X.gamma[1].matrix[0, 0] for X in results) == [-1, 1]
    assert all(verify_hexagon(X) for X in results)


def test_assembly_requires_zero_dimension(doubled_unit):
    with pytest.raises(SolverError) as info:
        braidings_from_ideal(doubled_unit, build_center_ideal(doubled_unit))
    assert info.value.candidate == doubled_unit
    assert info.value.n_unknowns == 8


def test_assembly_checks_unknown_count(vec_z2, doubled_unit):
    with pytest.raises(ValueError, match="unknowns"):
        braidings_from_ideal(doubled_unit, build_center_ideal(vec_z2.one()))


def test_no_half_braiding_on_noncentral_carrier():
    """
    S4: over {e, σ, σ²} in Vec_S3, δ_τ has no unknowns at σ^{±1}, but
    σ⊗σ² = e ties γ_e to them: the normalization cannot hold.
    """
    C = GradedVectorSpaces(symmetric_group(3))
    tau = next(g for g in C.group.elements if g.order() == 2)
    sigma = next(g for g in C.group.elements if g.order() == 3)
    Z = C.simple(tau)
    simples = [C.one(), C.simple(sigma), C.simple(sigma ** 2)]
    assert build_center_ideal(Z, simples).dimension() == -1
    assert half_braidings(Z, simples) == []


# =============================================================================
# S5: BRAIDING WITH A SUBSET OF THE SIMPLES
# =============================================================================

def test_subset_of_simples_gives_sign_solutions():
    """
    S5: in Vec_Z4, δ_0 braided only with {δ_0, δ_2} has γ_2 = ±1. The two
    solutions keep their own index set and are told apart by commutation.
    """
    C = GradedVectorSpaces(cyclic_group(4))
    g2 = C.group.elements[2]
    simples = [C.one(), C.simple(g2)]
    results = half_braidings(C.one(), simples)
    assert len(results) == 2
    assert sorted(X.gamma[1].matrix[0, 0] for X in results) == [-1, 1]
    for X in results:
        assert X.simples == simples
        assert verify_hexagon(X)
    assert hom(results[0], results[1]).dim == 0
    assert end(results[0]).dim == 1


def test_subset_objects_tensor_over_shared_simples():
    C = GradedVectorSpaces(cyclic_group(4))
    g2 = C.group.elements[2]
    simples = [C.one(), C.simple(g2)]
    minus = next(X for X in half_braidings(C.one(), simples) if X.gamma[1].matrix[0, 0] == -1)
    square = minus.tensor(minus)
    assert square.simples == simples
    assert square.gamma[1].matrix[0, 0] == 1
    assert hom(square, Center(C).one()).dim == 1


# =============================================================================
# S6: BACK-END FAILURES CARRY THE CANDIDATE
# =============================================================================

def test_refused_dimension_names_candidate(vec_z2, monkeypatch):
    monkeypatch.setattr(polynomial_backend, "MAX_INDEPENDENT_SET_VARIABLES", 0)
    Z = vec_z2.simple(vec_z2.group.elements[1])
    R = PolynomialRing(QQ, 2)
    x1, x2 = R.gens
    with pytest.raises(SolverError, match="refused") as info:
        half_braidings(Z, ideal=Ideal(R, [x1 * x2 - 1]))
    assert info.value.candidate == Z
    assert info.value.n_unknowns == 2
