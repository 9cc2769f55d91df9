"""
Center Ideal Builder
====================

Turns the half-braiding coherence condition on a candidate object Z into a
polynomial ideal over the unknown coefficients of γ.

UNKNOWNS:
    γ_k : Z⊗S_k → S_k⊗Z is written in the basis of Hom(Z⊗S_k, S_k⊗Z):

        γ_k = Σ_a x_{k,a} B_{k,a}

    One ring unknown per basis vector, numbered consecutively over k in the
    order of the simples. Zero Hom-spaces get no unknowns.

HEXAGON (one equation per triple (k, i, j) and basis morphism t: S_k → S_i⊗S_j):

    a(S_i,S_j,Z) ∘ (t⊗id_Z) ∘ γ_k
        = (id_{S_i}⊗γ_j) ∘ a(S_i,Z,S_j) ∘ (γ_i⊗id_{S_j}) ∘ a⁻¹(Z,S_i,S_j) ∘ (id_Z⊗t)

    Both sides live in Hom(Z⊗S_k, S_i⊗(S_j⊗Z)). The left side is linear in
    x_k, the right side bilinear in (x_i, x_j). Expressed in a basis of that
    Hom-space every coordinate gives one polynomial.

NORMALIZATION:
    γ at the unit simple is id_Z, i.e. x_{unit} = coordinates of id_Z.

Since t runs over a basis of every Hom(S_k, S_i⊗S_j), naturality of γ on
S_i⊗S_j ≅ ⊕ S_k is encoded together with the hexagon.
"""

import logging
from itertools import product
from typing import List

from category_core.abstracts import associator, hom, compose
from category_core.errors import NotSemisimpleError
from category_core.polynomial_backend import PolynomialRing, Ideal

logger = logging.getLogger(__name__)


def hexagon_lhs(Z, Si, Sj, t, gamma_k):
    """a(S_i,S_j,Z) ∘ (t⊗id_Z) ∘ γ_k."""
    return compose(gamma_k, t.tensor(Z.id()), associator(Si, Sj, Z))


def hexagon_rhs(Z, Si, Sj, t, gamma_i, gamma_j):
    """(id⊗γ_j) ∘ a(S_i,Z,S_j) ∘ (γ_i⊗id) ∘ a⁻¹(Z,S_i,S_j) ∘ (id_Z⊗t)."""
    return compose(
        Z.id().tensor(t),
        associator(Z, Si, Sj).inv(),
        gamma_i.tensor(Sj.id()),
        associator(Si, Z, Sj),
        Si.id().tensor(gamma_j),
    )


def half_braiding_spaces(Z, simples) -> list:
    """[Hom(Z⊗S_k, S_k⊗Z) for S_k in simples]."""
    return [hom(Z.tensor(S), S.tensor(Z)) for S in simples]


def unit_index(C, simples) -> int:
    one = C.one()
    for k, S in enumerate(simples):
        if S == one:
            return k
    raise ValueError(f"The unit object of {C} is missing from the simples {simples}")


def build_center_ideal(Z, simples=None) -> Ideal:
    """
    Ideal of all half-braidings on Z.

    Args:
        Z: object of a semisimple category
        simples: simples to braid with (default: all simples, unit included)

    Returns:
        Ideal in sum(dim Hom(Z⊗S_k, S_k⊗Z)) unknowns over the base field

    Raises:
        NotSemisimpleError: base category is not semisimple
        ValueError: unit object not among the simples
    """
    C = Z.parent
    if not C.is_semisimple:
        raise NotSemisimpleError(f"{C} is not semisimple")
    if simples is None:
        simples = C.simples()

    homs = half_braiding_spaces(Z, simples)
    n = sum(H.dim for H in homs)
    R = PolynomialRing(C.base_ring, n)

    variables: List[tuple] = []
    offset = 0
    for H in homs:
        variables.append(R.gens[offset:offset + H.dim])
        offset += H.dim

    equations = []
    indices = range(len(simples))
    for k, i, j in product(indices, repeat=3):
        Sk, Si, Sj = simples[k], simples[i], simples[j]
        T = hom(Sk, Si.tensor(Sj))
        if T.dim == 0:
            continue
        target = hom(Z.tensor(Sk), Si.tensor(Sj.tensor(Z)))
        if target.dim == 0:
            continue
        for t in T.basis:
            eq = [0] * target.dim
            for x, B in zip(variables[k], homs[k].basis):
                coords = target.express(hexagon_lhs(Z, Si, Sj, t, B))
                for m, c in enumerate(coords):
                    if c != 0:
                        eq[m] += c * x
            for (xi, Bi), (xj, Bj) in product(zip(variables[i], homs[i].basis),
                                               zip(variables[j], homs[j].basis)):
                coords = target.express(hexagon_rhs(Z, Si, Sj, t, Bi, Bj))
                for m, c in enumerate(coords):
                    if c != 0:
                        eq[m] -= c * xj * xi
            equations.extend(eq)

    u = unit_index(C, simples)
    identity = homs[u].express(Z.id())
    equations.extend(x - c for x, c in zip(variables[u], identity))

    I = Ideal(R, equations)
    logger.debug("center ideal of %s: %d unknowns, %d generators", Z, n, len(I))
    return I
