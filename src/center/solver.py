"""
Solution Enumerator and Central-Object Assembler
================================================

half_braidings(Z) finds the central objects carried by Z.

ALGORITHM:
    I = build_center_ideal(Z), d = dim V(I)

        d < 0   no half-braiding on Z
        d == 0  finitely many; recover them and assemble (Z, γ)
        d > 0   branch: a positive-dimensional family has no canonical
                points, only the special ones where coefficients lie in
                {-1, 0, 1}

BRANCHING (explicit worklist, no recursion):
    pop I; for each free unknown y of I:
        J = I + <y(y² - 1)>
        dim J <  0   y cannot be forced here, try the next unknown
        dim J == 0   J is a terminal branch, stop at this level
        dim J >  0   push J (y is no longer free in J), stop at this level

    Forcing only the roots {-1, 0, 1} can miss solutions. A
    positive-dimensional ideal that yields no branch at all is reported with
    IncompleteSearchWarning.
"""

import logging
import warnings
from typing import List

from category_core.abstracts import linear_combination, unique_simples
from category_core.errors import SolverError, IncompleteSearchWarning
from category_core.polynomial_backend import Ideal, recover_solutions, branch_polynomial

from .category import Center, CenterObject
from .ideal import build_center_ideal, half_braiding_spaces

logger = logging.getLogger(__name__)


def braidings_from_ideal(Z, ideal: Ideal, simples=None, center=None) -> List[CenterObject]:
    """
    Central objects from a zero-dimensional center ideal of Z.

    Args:
        Z: carrier object
        ideal: build_center_ideal(Z, simples), or a branch of it
        simples: simples the ideal was built over
        center: CenterCategory to attach to (default: Center(parent of Z))

    Raises:
        SolverError: ideal not zero-dimensional, or recovery failed
    """
    C = Z.parent
    if simples is None:
        simples = C.simples()
    if center is None:
        center = Center(C)

    homs = half_braiding_spaces(Z, simples)
    n = sum(H.dim for H in homs)
    if n != ideal.ring.ngens:
        raise ValueError(f"Ideal has {ideal.ring.ngens} unknowns, the half-braidings of {Z} need {n}")

    try:
        solutions = recover_solutions(ideal, C.base_ring)
    except SolverError as e:
        raise SolverError(e.message, candidate=Z, n_unknowns=n) from e

    objects = []
    for solution in solutions:
        gamma = []
        offset = 0
        for S, H in zip(simples, homs):
            coefficients = solution[offset:offset + H.dim]
            offset += H.dim
            gamma.append(linear_combination(coefficients, H.basis, Z.tensor(S), S.tensor(Z)))
        objects.append(CenterObject(center, Z, gamma, simples))
    return objects


def branch_ideal(ideal: Ideal) -> List[Ideal]:
    """
    Zero-dimensional branches of a positive-dimensional ideal.

    Returns:
        list of ideals J ⊇ I of dimension 0, in discovery order
    """
    branches = []
    stack = [ideal]
    while stack:
        I = stack.pop()
        for y in I.free_variables():
            J = I + Ideal(I.ring, [branch_polynomial(y)])
            d2 = J.dimension()
            logger.debug("branch on %s: dimension %d", y, d2)
            if d2 < 0:
                continue
            if d2 == 0:
                branches.append(J)
            else:
                stack.append(J)
            break
    return branches


def guess_solutions(Z, ideal: Ideal, simples=None, solutions=None, center=None) -> List[CenterObject]:
    """
    Central objects on the special points of a positive-dimensional ideal.

    Args:
        Z: carrier object
        ideal: center ideal of Z
        simples: simples the ideal was built over
        solutions: results found so far; new ones are appended
        center: CenterCategory to attach to

    Returns:
        solutions, extended by every terminal branch
    """
    if solutions is None:
        solutions = []
    for J in branch_ideal(ideal):
        solutions.extend(braidings_from_ideal(Z, J, simples, center=center))
    return solutions


def half_braidings(Z, simples=None, ideal: Ideal = None, center=None) -> List[CenterObject]:
    """
    All central objects (Z, γ), one per isomorphism class.

    Args:
        Z: object of a semisimple category
        simples: simples to braid with (default: all simples of Z.parent)
        ideal: precomputed build_center_ideal(Z, simples)
        center: CenterCategory to attach results to

    Raises:
        NotSemisimpleError: base category not semisimple
        SolverError: back end failed on the ideal
    """
    if simples is None:
        simples = Z.parent.simples()
    if ideal is None:
        ideal = build_center_ideal(Z, simples)

    try:
        d = ideal.dimension()
    except SolverError as e:
        raise SolverError(e.message, candidate=Z, n_unknowns=ideal.ring.ngens) from e
    logger.debug("half-braidings on %s: variety dimension %d", Z, d)

    if d < 0:
        return []
    if d == 0:
        results = braidings_from_ideal(Z, ideal, simples, center=center)
    else:
        results = guess_solutions(Z, ideal, simples, center=center)
        if not results:
            warnings.warn(f"Positive-dimensional half-braiding variety on {Z} (dimension {d}) "
                          f"has no solutions with coefficients in {{-1, 0, 1}}",
                          IncompleteSearchWarning)
    return unique_simples(results)
