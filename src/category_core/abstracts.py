"""
Category Interface
==================

Abstract capability set shared by every semisimple tensor category in the
package: the base categories (e.g. graded vector spaces) and the Drinfeld
center built on top of them.

A category supplies:
    simples()            - ordered list of simple objects, unit first
    one(), zero()        - unit and zero objects
    associator(X, Y, Z)  - (X⊗Y)⊗Z → X⊗(Y⊗Z)
    hom(X, Y)            - HomSpace with a finite basis
    zero_morphism(X, Y)
    is_isomorphic(X, Y)  - (flag, isomorphism or None)
    kernel(f), cokernel(f) - (object, inclusion) and (object, projection)
    base_ring            - sympy domain of scalars (QQ, QQ<i>, GF(p), ...)

Objects supply tensor/dual/ev/coev/id/spherical/dsum, morphisms supply
composition (f @ g = f after g), tensor product, inverse, linear structure
and a coordinate vector used for exact linear algebra.

Conventions are documented in constants.py.
"""

from abc import ABC, abstractmethod
from functools import reduce
from typing import List, Sequence, Tuple

import sympy

from .errors import NotSemisimpleError


def is_zero_scalar(x) -> bool:
    """Exact zero test for sympy scalars (expands radicals and I)."""
    x = sympy.sympify(x)
    if x.is_Rational:
        return x == 0
    return sympy.expand(x) == 0 or sympy.simplify(x) == 0


def normalize_scalar(x):
    x = sympy.sympify(x)
    if x.is_Rational:
        return x
    return sympy.expand(x)


# =============================================================================
# INTERFACE
# =============================================================================

class Category(ABC):
    """Semisimple k-linear tensor category."""

    base_ring = sympy.QQ

    @property
    def is_semisimple(self) -> bool:
        return False

    @abstractmethod
    def simples(self) -> list:
        ...

    @abstractmethod
    def one(self) -> "Object":
        ...

    @abstractmethod
    def zero(self) -> "Object":
        ...

    @abstractmethod
    def associator(self, X, Y, Z) -> "Morphism":
        ...

    @abstractmethod
    def hom(self, X, Y) -> "HomSpace":
        ...

    @abstractmethod
    def zero_morphism(self, X, Y) -> "Morphism":
        ...

    @abstractmethod
    def is_isomorphic(self, X, Y) -> Tuple[bool, "Morphism"]:
        ...

    @abstractmethod
    def kernel(self, f) -> Tuple["Object", "Morphism"]:
        ...

    @abstractmethod
    def cokernel(self, f) -> Tuple["Object", "Morphism"]:
        ...

    def trace(self, f):
        """
        Left (pivotal) trace of an endomorphism, as a scalar.

            tr(f) = ev_{V*} ∘ ((ψ_V ∘ f) ⊗ id_{V*}) ∘ coev_V

        where ψ_V : V → V** is the spherical structure.
        """
        V = f.domain
        if f.codomain != V:
            raise ValueError(f"Trace needs an endomorphism, got {f.domain} → {f.codomain}")
        if V == self.zero():
            return sympy.Integer(0)
        dV = V.dual()
        m = compose(V.coev(), (V.spherical() @ f).tensor(dV.id()), dV.ev())
        return self.hom(self.one(), self.one()).express(m)[0]

    def dim(self):
        """Global dimension dim(C) = Σ dim(S)²."""
        return normalize_scalar(sum((s.dim() ** 2 for s in self.simples()), sympy.Integer(0)))

    def is_fusion(self) -> bool:
        return self.is_semisimple and self.hom(self.one(), self.one()).dim == 1


class Object(ABC):
    """Object of a Category. Subclasses set self.parent."""

    parent: Category

    @abstractmethod
    def tensor(self, other) -> "Object":
        ...

    @abstractmethod
    def dual(self) -> "Object":
        ...

    @abstractmethod
    def ev(self) -> "Morphism":
        """Evaluation X*⊗X → 1."""

    @abstractmethod
    def coev(self) -> "Morphism":
        """Coevaluation 1 → X⊗X*."""

    @abstractmethod
    def id(self) -> "Morphism":
        ...

    @abstractmethod
    def spherical(self) -> "Morphism":
        """Pivotal structure X → X**."""

    @abstractmethod
    def dsum(self, other) -> Tuple["Object", List["Morphism"], List["Morphism"]]:
        """Direct sum with inclusions [ix, iy] and projections [px, py]."""

    def dim(self):
        return self.parent.trace(self.id())

    def power(self, n: int) -> "Object":
        """n-fold direct sum X^n (the zero object for n = 0)."""
        if n < 0:
            raise ValueError(f"n must be >= 0, got {n}")
        if n == 0:
            return self.parent.zero()
        return dsum(*([self] * n))


class Morphism(ABC):
    """Morphism of a Category. Subclasses set self.domain and self.codomain."""

    domain: Object
    codomain: Object

    @abstractmethod
    def __matmul__(self, other) -> "Morphism":
        """self ∘ other."""

    @abstractmethod
    def tensor(self, other) -> "Morphism":
        ...

    @abstractmethod
    def inv(self) -> "Morphism":
        ...

    @abstractmethod
    def __add__(self, other) -> "Morphism":
        ...

    @abstractmethod
    def scale(self, c) -> "Morphism":
        ...

    @abstractmethod
    def dsum(self, other) -> "Morphism":
        ...

    @abstractmethod
    def to_vector(self) -> sympy.Matrix:
        """Coordinate column vector in a fixed ambient coordinate system."""

    def is_zero(self) -> bool:
        return all(is_zero_scalar(x) for x in self.to_vector())

    def __mul__(self, c):
        return self.scale(c)

    def __rmul__(self, c):
        return self.scale(c)

    def __neg__(self):
        return self.scale(-1)

    def __sub__(self, other):
        return self + other.scale(-1)

    def __eq__(self, other):
        if not isinstance(other, Morphism):
            return NotImplemented
        if self.domain != other.domain or self.codomain != other.codomain:
            return False
        return (self - other).is_zero()

    __hash__ = None


class HomSpace:
    """
    Finite-dimensional Hom-space with an explicit basis.

    Args:
        domain, codomain: objects
        basis: list of morphisms domain → codomain, linearly independent
        coordinates: optional fast path f ↦ coefficient list. When absent,
                     coefficients are found by exact linear solve.
    """

    def __init__(self, domain, codomain, basis: Sequence[Morphism], coordinates=None):
        self.domain = domain
        self.codomain = codomain
        self.basis = list(basis)
        self._coordinates = coordinates

    @property
    def dim(self) -> int:
        return len(self.basis)

    def __len__(self):
        return len(self.basis)

    def __iter__(self):
        return iter(self.basis)

    def express(self, f: Morphism) -> list:
        """Coefficients of f in the basis. Raises ValueError if f is not in the span."""
        if f.domain != self.domain or f.codomain != self.codomain:
            raise ValueError(f"Morphism {f.domain} → {f.codomain} is not in Hom({self.domain}, {self.codomain})")
        if self._coordinates is not None:
            return self._coordinates(f)
        if not self.basis:
            if f.is_zero():
                return []
            raise ValueError("Nonzero morphism in a zero Hom-space")
        B = sympy.Matrix.hstack(*[b.to_vector() for b in self.basis])
        v = f.to_vector()
        sol, params = B.gauss_jordan_solve(v)
        if params.shape[0] > 0:
            sol = sol.subs({p: 0 for p in params})
        return [normalize_scalar(x) for x in sol]

    def __repr__(self):
        return f"Hom({self.domain}, {self.codomain}) of dimension {self.dim}"


# =============================================================================
# FREE FUNCTIONS (dispatch through the parent category)
# =============================================================================

def compose(*morphisms: Morphism) -> Morphism:
    """Diagrammatic composition: compose(f, g, h) = h ∘ g ∘ f."""
    if not morphisms:
        raise ValueError("compose needs at least one morphism")
    return reduce(lambda acc, g: g @ acc, morphisms[1:], morphisms[0])


def associator(X, Y, Z) -> Morphism:
    return X.parent.associator(X, Y, Z)


def hom(X, Y) -> HomSpace:
    return X.parent.hom(X, Y)


def end(X) -> HomSpace:
    return hom(X, X)


def zero_morphism(X, Y) -> Morphism:
    return X.parent.zero_morphism(X, Y)


def is_isomorphic(X, Y) -> Tuple[bool, Morphism]:
    return X.parent.is_isomorphic(X, Y)


def kernel(f: Morphism) -> Tuple[Object, Morphism]:
    return f.domain.parent.kernel(f)


def cokernel(f: Morphism) -> Tuple[Object, Morphism]:
    return f.domain.parent.cokernel(f)


def trace(f: Morphism):
    return f.domain.parent.trace(f)


def dsum(*objects: Object) -> Object:
    """Direct sum of one or more objects (left fold)."""
    if not objects:
        raise ValueError("dsum needs at least one object")
    return reduce(lambda acc, Y: acc.dsum(Y)[0], objects[1:], objects[0])


def linear_combination(coefficients, basis: Sequence[Morphism], domain=None, codomain=None) -> Morphism:
    """Σ c_i b_i, the zero morphism when the basis is empty."""
    if not basis:
        return zero_morphism(domain, codomain)
    result = basis[0].scale(coefficients[0])
    for c, b in zip(coefficients[1:], basis[1:]):
        result = result + b.scale(c)
    return result


def dual_basis(incl: Sequence[Morphism], proj: Sequence[Morphism], S) -> List[Morphism]:
    """
    Rebase proj ⊂ Hom(Y, S) so that proj'_k ∘ incl_l = δ_kl · id_S.

    Used to split Y into copies of the simple S: Σ_k incl_k ∘ proj'_k is the
    projector onto the S-isotypic part of Y.
    """
    if len(incl) != len(proj):
        raise ValueError(f"Hom(S, Y) and Hom(Y, S) differ in dimension: {len(incl)} vs {len(proj)}")
    if not incl:
        return []
    End_S = end(S)
    if End_S.dim != 1:
        raise ValueError(f"{S} is not simple: dim End = {End_S.dim}")
    n = len(incl)
    G = sympy.Matrix(n, n, lambda k, l: End_S.express(proj[k] @ incl[l])[0])
    G_inv = G.inv()
    return [linear_combination([G_inv[l, k] for k in range(n)], proj) for l in range(n)]


def unique_simples(simples: Sequence[Object]) -> List[Object]:
    """Keep one representative per isomorphism class (nonzero Hom = same class)."""
    unique = []
    for s in simples:
        if all(hom(s, u).dim == 0 for u in unique):
            unique.append(s)
    return unique


def decompose(X: Object, simples=None) -> List[Tuple[Object, int]]:
    """Multiplicities [(S, dim Hom(X, S))] of the simples occurring in X."""
    C = X.parent
    if not C.is_semisimple:
        raise NotSemisimpleError(f"{C} is not semisimple")
    if simples is None:
        simples = C.simples()
    dims = [(s, hom(X, s).dim) for s in simples]
    return [(s, d) for s, d in dims if d > 0]
