"""
Polynomial / Ideal Back End
===========================

Thin layer over sympy's Groebner bases exposing exactly what the half-braiding
search needs:

    PolynomialRing(field, n, order)  - n unknowns x1..xn over a sympy domain
    Ideal(ring, generators)          - I + J for ideal sums
    Ideal.dimension()                - Krull dimension of the variety (-1 = empty)
    Ideal.free_variables()           - a maximal independent set of unknowns
    recover_solutions(I, field)      - finite solution tuples, dim(I) == 0 only

DIMENSION THEOREM:
    For any global monomial order, dim V(I) = dim V(in(I)) where in(I) is
    generated by the leading monomials of a Groebner basis. For a monomial
    ideal the dimension is the size of the largest set U of unknowns such
    that no leading monomial is supported inside U. Such a U is an
    independent set: its unknowns are algebraically independent mod I.

    GB = [1]  ⇔  V(I) = ∅  ⇔  dim = -1.

    If every unknown has a pure power x_k^e among the leading monomials,
    dim = 0 without any subset search.

Coefficient arithmetic is left to sympy's domain inference (QQ for rational
data, QQ<i> or EX otherwise); `field` is the field solutions are recovered in.
"""

from itertools import combinations
from typing import List, Sequence, Tuple

import sympy
from sympy.polys.polyerrors import CoercionFailed, PolynomialError

from .constants import (
    MONOMIAL_ORDER, VARIABLE_PREFIX, BRANCH_ROOTS, MAX_INDEPENDENT_SET_VARIABLES,
)
from .errors import SolverError


class PolynomialRing:
    """
    Multivariate polynomial ring k[x1, ..., xn].

    Args:
        field: sympy domain the solutions are recovered in
        n: number of unknowns
        order: monomial order used for Groebner bases
        prefix: unknown name prefix
    """

    def __init__(self, field, n: int, order: str = MONOMIAL_ORDER, prefix: str = VARIABLE_PREFIX):
        if n < 0:
            raise ValueError(f"n must be >= 0, got {n}")
        self.field = field
        self.order = order
        self.gens = tuple(sympy.Symbol(f"{prefix}{k}") for k in range(1, n + 1))

    @property
    def ngens(self) -> int:
        return len(self.gens)

    def ideal(self, generators) -> "Ideal":
        return Ideal(self, generators)

    def __repr__(self):
        return f"Polynomial ring in {self.ngens} unknowns over {self.field}"


class Ideal:
    """
    Ideal of a PolynomialRing given by generators.

    Zero generators are dropped and duplicates removed (first occurrence
    wins). The Groebner basis, dimension and independent set are computed on
    first use and cached; ideals are immutable.
    """

    def __init__(self, ring: PolynomialRing, generators: Sequence):
        self.ring = ring
        expanded = (sympy.expand(g) for g in generators)
        self.generators = tuple(dict.fromkeys(g for g in expanded if g != 0))
        self._groebner = None
        self._dimension = None

    def __add__(self, other: "Ideal") -> "Ideal":
        if other.ring is not self.ring:
            raise ValueError("Ideal sum needs both ideals in the same ring")
        return Ideal(self.ring, self.generators + other.generators)

    def __len__(self):
        return len(self.generators)

    def groebner(self) -> sympy.GroebnerBasis:
        if self._groebner is None:
            if not self.generators:
                raise ValueError("The zero ideal has no Groebner basis to compute")
            try:
                self._groebner = sympy.groebner(list(self.generators), *self.ring.gens,
                                                order=self.ring.order)
            except (PolynomialError, NotImplementedError) as e:
                raise SolverError(f"Groebner basis computation failed: {e}",
                                  n_unknowns=self.ring.ngens) from e
        return self._groebner

    def _independent_set(self) -> Tuple[int, Tuple[sympy.Symbol, ...]]:
        n = self.ring.ngens
        if not self.generators:
            return n, self.ring.gens
        G = self.groebner()
        if any(p.is_ground for p in G.polys):
            return -1, ()

        supports = []
        for p in G.polys:
            lead = p.monoms(order=self.ring.order)[0]
            supports.append(frozenset(k for k, e in enumerate(lead) if e > 0))

        # a pure power of every unknown among the leading monomials: finitely many points
        pure_powers = {next(iter(s)) for s in supports if len(s) == 1}
        if len(pure_powers) == n:
            return 0, ()

        if n > MAX_INDEPENDENT_SET_VARIABLES:
            raise SolverError(f"Independent set search over {n} unknowns refused "
                              f"(limit {MAX_INDEPENDENT_SET_VARIABLES})", n_unknowns=n)

        for size in range(n, -1, -1):
            for U in combinations(range(n), size):
                Uset = set(U)
                if not any(s <= Uset for s in supports):
                    return size, tuple(self.ring.gens[k] for k in U)
        return -1, ()

    def dimension(self) -> int:
        """Krull dimension of V(I); -1 for the empty variety."""
        if self._dimension is None:
            self._dimension = self._independent_set()
        return self._dimension[0]

    def free_variables(self) -> Tuple[sympy.Symbol, ...]:
        """Unknowns of a maximal independent set, in ring order."""
        self.dimension()
        return self._dimension[1]

    def __repr__(self):
        return f"Ideal with {len(self.generators)} generators in {self.ring}"


def in_field(value, field) -> bool:
    """True if the exact number lies in the sympy domain `field`."""
    try:
        field.from_sympy(sympy.nsimplify(value) if value.is_Float else value)
    except (CoercionFailed, ValueError, NotImplementedError):
        return False
    return True


def recover_solutions(ideal: Ideal, field=None) -> List[tuple]:
    """
    All points of a zero-dimensional variety whose coordinates lie in `field`.

    Args:
        ideal: Ideal with dimension() == 0
        field: sympy domain (default: the ring's field)

    Returns:
        sorted list of tuples, one entry per ring unknown

    Raises:
        SolverError: if the ideal is not zero-dimensional or sympy fails
    """
    if field is None:
        field = ideal.ring.field
    d = ideal.dimension()
    if d != 0:
        raise SolverError(f"Solutions can only be recovered from a zero-dimensional ideal, got dim {d}",
                          n_unknowns=ideal.ring.ngens)
    if not ideal.generators:
        return [()]

    G = ideal.groebner()
    try:
        points = sympy.solve_poly_system(list(G.exprs), *ideal.ring.gens)
    except (PolynomialError, NotImplementedError) as e:
        raise SolverError(f"Solving failed: {e}", n_unknowns=ideal.ring.ngens) from e
    if points is None:
        raise SolverError("Solver returned no answer for a zero-dimensional ideal",
                          n_unknowns=ideal.ring.ngens)

    solutions = []
    for point in points:
        point = tuple(sympy.nsimplify(sympy.expand(v)) if v.is_Float else sympy.expand(v) for v in point)
        if all(in_field(v, field) for v in point):
            solutions.append(point)
    return sorted(set(solutions), key=sympy.default_sort_key)


def branch_polynomial(y, roots=BRANCH_ROOTS):
    """prod(y - r), the generator that forces y into `roots`: y*(y**2 - 1) by default."""
    result = sympy.Integer(1)
    for r in roots:
        result *= (y - r)
    return sympy.expand(result)
