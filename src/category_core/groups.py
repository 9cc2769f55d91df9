"""
Finite Groups and 3-Cocycles
============================

Gradings for Vec_G^ω. Groups come from sympy.combinatorics permutation
groups; elements are sympy Permutations (hashable, multiplied with *).

COCYCLE CONDITION:
    ω(b,c,d) ω(a,bc,d) ω(a,b,c) = ω(ab,c,d) ω(a,b,cd)

    Normalized: ω(a,b,c) = 1 whenever one argument is the identity.

CYCLIC COCYCLES:
    H³(Z/n, C^×) = Z/n, represented by

        ω_p(a,b,c) = ζ_n^(p·a)   if b + c >= n
                   = 1           otherwise

    with a, b, c ∈ {0..n-1} the exponents of the generator.
    For n = 2, p = 1 this is the double-semion cocycle ω(1,1,1) = -1.
"""

from itertools import product
from typing import Callable, Dict, List

import sympy
from sympy.combinatorics.named_groups import CyclicGroup, SymmetricGroup

from .abstracts import is_zero_scalar


class FiniteGroup:
    """
    Finite group with a fixed element order (identity first).

    Args:
        elements: list of hashable elements, identity first
        name: display name
    """

    def __init__(self, elements: list, name: str = "G"):
        self.elements = list(elements)
        self.name = name
        self.identity = self.elements[0]
        self._index = {g: k for k, g in enumerate(self.elements)}
        if len(self._index) != len(self.elements):
            raise ValueError(f"Duplicate group elements in {name}")

    @property
    def order(self) -> int:
        return len(self.elements)

    def mul(self, g, h):
        return g * h

    def inv(self, g):
        return ~g

    def index(self, g) -> int:
        return self._index[g]

    def __repr__(self):
        return self.name


def from_permutation_group(G, name: str = None) -> FiniteGroup:
    """Wrap a sympy PermutationGroup, identity first, the rest by array form."""
    identity = G.identity
    rest = sorted((g for g in G.generate() if g != identity),
                  key=lambda g: (g.order(), g.array_form))
    return FiniteGroup([identity] + rest, name=name or f"PermutationGroup(order={G.order()})")


def cyclic_group(n: int) -> FiniteGroup:
    """Z/n with elements ordered as powers g^0, g^1, ..., g^(n-1) of a generator."""
    if n < 1:
        raise ValueError(f"n must be >= 1, got {n}")
    G = CyclicGroup(n)
    g = G.generators[0]
    return FiniteGroup([g ** k for k in range(n)], name=f"Z/{n}")


def symmetric_group(n: int) -> FiniteGroup:
    if n < 1:
        raise ValueError(f"n must be >= 1, got {n}")
    return from_permutation_group(SymmetricGroup(n), name=f"S{n}")


# =============================================================================
# 3-COCYCLES
# =============================================================================

def trivial_cocycle(group: FiniteGroup) -> Callable:
    one = sympy.Integer(1)
    return lambda a, b, c: one


def cyclic_cocycle(group: FiniteGroup, p: int) -> Callable:
    """
    The cocycle ω_p on a group built by cyclic_group(n).

    Values are exact roots of unity (sympy radicals / I).
    """
    n = group.order
    values: Dict[int, sympy.Expr] = {
        k: sympy.expand_complex(sympy.exp(2 * sympy.pi * sympy.I * p * k / n))
        for k in range(n)
    }
    one = sympy.Integer(1)

    def omega(a, b, c):
        ia, ib, ic = group.index(a), group.index(b), group.index(c)
        if ib + ic >= n:
            return values[(p * ia) % n]
        return one

    return omega


def cocycle_violations(group: FiniteGroup, omega: Callable) -> List[str]:
    """
    List every failure of normalization or of the cocycle condition.

    Empty list means ω is a normalized 3-cocycle.
    """
    errors = []
    e = group.identity
    G = group.elements
    mul = group.mul

    for a, b in product(G, repeat=2):
        for args in ((e, a, b), (a, e, b), (a, b, e)):
            if not is_zero_scalar(omega(*args) - 1):
                errors.append(f"not normalized at {args}")

    for a, b, c, d in product(G, repeat=4):
        lhs = omega(b, c, d) * omega(a, mul(b, c), d) * omega(a, b, c)
        rhs = omega(mul(a, b), c, d) * omega(a, b, mul(c, d))
        if not is_zero_scalar(lhs - rhs):
            errors.append(f"cocycle condition fails at {(a, b, c, d)}")
    return errors
