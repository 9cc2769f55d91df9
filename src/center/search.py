"""
Simple-Object Search
====================

Finds the simple objects of Z(C) by trying candidate carriers

    X = ⊕_i S_i^{c_i}

for multiplicity vectors c, smallest and sparsest first.

BUDGET:
    Σ_{simple (X,γ)} dim(X)² = dim Z(C) = dim(C)²

    The search stops as soon as the accepted simples exhaust the budget.

PRUNING:
    - budget:   skip c when Σ (c_i d_i)² exceeds what is left
    - coverage: skip c when it dominates (componentwise ≥) a vector already
                tried successfully

CENTRALITY PRE-CHECK:
    X⊗S ≅ S⊗X for every simple S, then dim V(I(X)) >= 0.
    Passing is necessary, not sufficient; half_braidings decides.

Running out of candidates with budget left emits IncompleteSearchWarning.

Usage:
    python -m center.search      # prints the simples of Z(Vec_Z/2)
"""

import logging
import warnings
from itertools import product
from typing import List

import numpy as np
import sympy

from category_core.abstracts import dsum, end, hom, is_isomorphic, is_zero_scalar
from category_core.errors import NotSemisimpleError, IncompleteSearchWarning

from .category import Center
from .ideal import build_center_ideal
from .solver import half_braidings

logger = logging.getLogger(__name__)


# =============================================================================
# CENTRALITY PRE-CHECK
# =============================================================================

def commutes_with_simples(X, simples) -> bool:
    """X⊗S ≅ S⊗X for every S (fusion-rule level only)."""
    return all(is_isomorphic(X.tensor(S), S.tensor(X))[0] for S in simples)


def is_central(X, simples=None, ideal=None) -> bool:
    """
    Admission filter for candidate carriers.

    True does NOT mean a half-braiding exists over the base field; it means
    the fusion rules commute and the center ideal is not the unit ideal.
    """
    if simples is None:
        simples = X.parent.simples()
    if not commutes_with_simples(X, simples):
        return False
    if ideal is None:
        ideal = build_center_ideal(X, simples)
    return ideal.dimension() >= 0


# =============================================================================
# CANDIDATES
# =============================================================================

def multiplicity_vectors(k: int, bound: int) -> List[np.ndarray]:
    """
    All c ∈ {0..bound}^k except 0, ordered by (Σc, nonzero count).

    Ties keep the earlier simples first, so the unit S_0 is tried first.
    """
    vectors = [np.array(c, dtype=int) for c in product(range(bound + 1), repeat=k) if any(c)]
    vectors.sort(key=lambda c: (int(c.sum()), int(np.count_nonzero(c)), tuple(-c)))
    return vectors


def simples_covered(c: np.ndarray, covered: List[np.ndarray]) -> bool:
    """True if c dominates some covered vector componentwise."""
    return any(np.all(w <= c) for w in covered)


def _exceeds(a, b) -> bool:
    diff = sympy.sympify(a - b)
    positive = diff.is_positive
    if positive is None:
        return float(sympy.N(diff)) > 0
    return bool(positive)


def _unit_first(found, center) -> list:
    one = center.one()
    return sorted(found, key=lambda X: hom(one, X).dim == 0)


def center_simples(C, simples=None, center=None) -> list:
    """
    The simple objects of Z(C).

    Args:
        C: semisimple base category
        simples: simples of C (default C.simples(), unit first)
        center: CenterCategory the results are attached to

    Returns:
        list of CenterObjects, pairwise non-isomorphic, End of dimension 1

    Raises:
        NotSemisimpleError: C is not semisimple
    """
    if not C.is_semisimple:
        raise NotSemisimpleError(f"{C} is not semisimple")
    if simples is None:
        simples = C.simples()
    if center is None:
        center = Center(C)

    D = C.dim()
    remaining = sympy.expand(D ** 2)
    bound = int(sympy.floor(D))
    dims = np.array([S.dim() for S in simples], dtype=object)

    found = []
    covered: List[np.ndarray] = []

    for c in multiplicity_vectors(len(simples), bound):
        contribution = sum((c * dims) ** 2)
        if _exceeds(contribution, remaining) or simples_covered(c, covered):
            continue

        X = dsum(*[S.power(int(m)) for S, m in zip(simples, c) if m > 0])
        if not commutes_with_simples(X, simples):
            continue
        ideal = build_center_ideal(X, simples)
        if ideal.dimension() < 0:
            continue

        logger.debug("candidate %s: %d unknowns", tuple(c), ideal.ring.ngens)
        for Y in half_braidings(X, simples, ideal=ideal, center=center):
            if end(Y).dim != 1:
                continue
            if any(hom(Y, F).dim > 0 for F in found):
                continue
            found.append(Y)
            remaining = sympy.expand(remaining - Y.dim() ** 2)
        covered.append(c)

        logger.debug("accepted %d simples, remaining budget %s", len(found), remaining)
        if is_zero_scalar(remaining):
            return _unit_first(found, center)

    warnings.warn(f"Simple-object search for the center of {C} ended with budget {remaining} "
                  f"left; {len(found)} simples found", IncompleteSearchWarning)
    return _unit_first(found, center)


if __name__ == "__main__":
    from category_core.graded import GradedVectorSpaces
    from category_core.groups import cyclic_group

    print("=" * 60)
    print("SIMPLES OF Z(Vec_Z/2)")
    print("=" * 60)

    C = GradedVectorSpaces(cyclic_group(2))
    simples = center_simples(C)
    for k, X in enumerate(simples):
        gamma = [g.matrix.tolist() for g in X.gamma]
        print(f"  [{k}] {X.object}: dim = {X.dim()}, γ = {gamma}")
    print(f"\n  Σ dim² = {sum(X.dim() ** 2 for X in simples)} (expected {C.dim() ** 2})")
