"""
Center Category Arithmetic
==========================

The Drinfeld center Z(C) of a semisimple tensor category C.

OBJECTS:
    CenterObject(parent, object, gamma, simples) with
    gamma[k] : X⊗S_k → S_k⊗X, one component per entry of `simples`
    (default: all simples of C, in the order of C.simples()).

MORPHISMS:
    CenterMorphism wraps a morphism of C. Only morphisms commuting with the
    half-braidings are central. Between objects braided with every simple
    of C, Hom-spaces are cut out by central projection; otherwise by the
    commutation equations over the simples both objects braid with.

CENTRAL PROJECTION (f : X → Y in C):

    P(f) = (1/dim C) Σ_i d_i ·
           [ X → X⊗(S_i⊗S_i*) → (X⊗S_i)⊗S_i* →γ^X→ (S_i⊗X)⊗S_i* →f→ (S_i⊗Y)⊗S_i*
               → S_i⊗(Y⊗S_i*) →γ^Y→ S_i⊗(S_i*⊗Y) → (S_i⊗S_i*)⊗Y → Y ]

    The last step closes the S_i-loop with ev_{S_i*} ∘ (ψ_{S_i} ⊗ id).
    P is idempotent with image Hom_{Z(C)}(X, Y).

BRAIDING:
    c_{X,Y} = Σ_S Σ_l (ι_l ⊗ id_X) ∘ γ^X_S ∘ (id_X ⊗ π_l)

    over copies ι_l : S → Y with dual projections π_l (π_k ∘ ι_l = δ_kl).

TENSOR:
    γ^{X⊗Y}_S = a(S,X,Y) ∘ (γ^X_S⊗id) ∘ a⁻¹(X,S,Y) ∘ (id⊗γ^Y_S) ∘ a(X,Y,S)

DUAL:
    γ^{X*}_S = (ev_X⊗id)⊗id ∘ a⁻¹ ∘ (id⊗(γ^X_S)⁻¹)⊗id ∘ a ∘ a⁻¹ ∘ id⊗coev_X

INDUCTION (no search):
    I(X) = ⊕_i (S_i*⊗X)⊗S_i, with γ_W mapping summand i to summand j by

        φ_α ⊗ id_X ⊗ π_α     for π_α : S_i⊗W → S_j dual to ι_α : S_j → S_i⊗W

    where φ_α : S_i* → W⊗S_j* is the mate of ι_α (coev_{S_j}, then ev_{S_i}).

The trace, dimensions and pivotal structure are those of C.
"""

import threading
import weakref
from itertools import product
from typing import List, Tuple

import sympy

from category_core.abstracts import (
    Category, Object, Morphism, HomSpace,
    compose, associator, hom, end, zero_morphism,
    linear_combination, dual_basis, decompose, kernel, cokernel,
)
from category_core.errors import NotSemisimpleError, NotSimpleError


class CenterCategory(Category):
    """
    Z(C) for a semisimple tensor category C.

    The simples are computed by the simple-object search on first request
    and cached for the lifetime of the category.
    """

    def __init__(self, category: Category):
        self.category = category
        self.base_ring = category.base_ring
        self._simples = None
        self._searching = False
        self._lock = threading.RLock()

    def __eq__(self, other):
        if not isinstance(other, CenterCategory):
            return NotImplemented
        return self.category is other.category

    def __hash__(self):
        return hash(("center", id(self.category)))

    @property
    def is_semisimple(self) -> bool:
        return self.category.is_semisimple

    @property
    def base_simples(self) -> list:
        """Simples of C, the default index set of a half-braiding."""
        return self.category.simples()

    def simples(self) -> List["CenterObject"]:
        """
        Raises:
            RuntimeError: requested from inside the search that computes them
        """
        with self._lock:
            if self._simples is None:
                if self._searching:
                    raise RuntimeError(f"Simples of {self} requested during their own search")
                from .search import center_simples
                self._searching = True
                try:
                    self._simples = center_simples(self.category, center=self)
                finally:
                    self._searching = False
            return list(self._simples)

    def add_simple(self, X: "CenterObject"):
        """
        Register X as a simple of Z(C) unless an isomorphic one is known.

        Raises:
            NotSimpleError: End(X) is not one-dimensional
        """
        d = end(X).dim
        if d != 1:
            raise NotSimpleError(f"{X} is not simple: dim End = {d}")
        with self._lock:
            if self._simples is None:
                self._simples = []
            if all(hom(X, S).dim == 0 for S in self._simples):
                self._simples.append(X)

    def one(self) -> "CenterObject":
        return CenterObject(self, self.category.one(), [S.id() for S in self.base_simples])

    def zero(self) -> "CenterObject":
        Z = self.category.zero()
        return CenterObject(self, Z, [zero_morphism(Z.tensor(S), S.tensor(Z)) for S in self.base_simples])

    def associator(self, X, Y, Z) -> "CenterMorphism":
        return CenterMorphism(X.tensor(Y).tensor(Z), X.tensor(Y.tensor(Z)),
                              associator(X.object, Y.object, Z.object))

    def _braids_with_all(self, X) -> bool:
        return len(X.simples) == len(self.base_simples) and all(S in X.simples for S in self.base_simples)

    def hom(self, X, Y) -> HomSpace:
        """Central morphisms X → Y, row reduced in the basis of Hom_C(X, Y)."""
        H = hom(X.object, Y.object)
        if H.dim == 0:
            return HomSpace(X, Y, [])
        if self._braids_with_all(X) and self._braids_with_all(Y):
            M = sympy.Matrix([H.express(central_projection(X, Y, f)) for f in H.basis])
        else:
            M = _commuting_coefficients(X, Y, H)
        if M.rows == 0:
            return HomSpace(X, Y, [])
        R, pivots = M.rref(simplify=True)
        basis = [CenterMorphism(X, Y, linear_combination(list(R.row(r)), H.basis))
                 for r in range(len(pivots))]
        return HomSpace(X, Y, basis)

    def zero_morphism(self, X, Y) -> "CenterMorphism":
        return CenterMorphism(X, Y, zero_morphism(X.object, Y.object))

    def is_isomorphic(self, X, Y) -> Tuple[bool, "CenterMorphism"]:
        """
        Simple objects: compared by Hom(X, Y), returning a basis isomorphism.
        Otherwise compared by multiplicities of the center simples; no
        isomorphism is constructed in that case.
        """
        if end(X).dim == 1 and end(Y).dim == 1:
            H = hom(X, Y)
            if H.dim == 1:
                return True, H.basis[0]
            return False, None
        mX = [m for _, m in decompose(X)]
        mY = [m for _, m in decompose(Y)]
        return mX == mY, None

    def kernel(self, f) -> Tuple["CenterObject", "CenterMorphism"]:
        """Kernel of a central morphism, braided by restricting γ of the domain."""
        X = f.domain
        K, incl = kernel(f.m)
        r = incl.left_inverse()
        gamma = [compose(incl.tensor(S.id()), g, S.id().tensor(r))
                 for S, g in zip(X.simples, X.gamma)]
        Kc = CenterObject(self, K, gamma, X.simples)
        return Kc, CenterMorphism(Kc, X, incl)

    def cokernel(self, f) -> Tuple["CenterObject", "CenterMorphism"]:
        """Cokernel of a central morphism, braided through a section of the projection."""
        Y = f.codomain
        Q, proj = cokernel(f.m)
        s = proj.right_inverse()
        gamma = [compose(s.tensor(S.id()), g, S.id().tensor(proj))
                 for S, g in zip(Y.simples, Y.gamma)]
        Qc = CenterObject(self, Q, gamma, Y.simples)
        return Qc, CenterMorphism(Y, Qc, proj)

    def trace(self, f):
        return self.category.trace(f.m)

    def __repr__(self):
        return f"Drinfeld center of {self.category}"


_centers = weakref.WeakKeyDictionary()
_centers_lock = threading.Lock()


def Center(C: Category) -> CenterCategory:
    """
    The (shared) center category of C.

    Raises:
        NotSemisimpleError: C is not semisimple
    """
    if not C.is_semisimple:
        raise NotSemisimpleError(f"{C} is not semisimple; its center is not computed")
    with _centers_lock:
        Z = _centers.get(C)
        if Z is None:
            Z = CenterCategory(C)
            _centers[C] = Z
        return Z


class CenterObject(Object):
    """
    Central object (X, γ).

    Args:
        parent: CenterCategory
        object: object X of the base category
        gamma: list of morphisms X⊗S_k → S_k⊗X, one per entry of simples
        simples: simples of C that gamma is indexed by (default: all of them)
    """

    def __init__(self, parent: CenterCategory, object: Object, gamma: list, simples=None):
        if simples is None:
            simples = parent.base_simples
        if len(simples) != len(gamma):
            raise ValueError(f"γ has {len(gamma)} components for {len(simples)} simples")
        self.parent = parent
        self.object = object
        self.gamma = list(gamma)
        self.simples = list(simples)

    def __eq__(self, other):
        if not isinstance(other, CenterObject):
            return NotImplemented
        return (self.parent == other.parent and self.object == other.object
                and self.simples == other.simples
                and all(g == h for g, h in zip(self.gamma, other.gamma)))

    __hash__ = None

    def half_braiding(self) -> list:
        return list(self.gamma)

    def component(self, S) -> Morphism:
        """γ_S : X⊗S → S⊗X."""
        for T, g in zip(self.simples, self.gamma):
            if T == S:
                return g
        raise ValueError(f"{self} has no half-braiding component at {S}")

    def tensor(self, other) -> "CenterObject":
        X, Y = self.object, other.object
        simples, gamma = [], []
        for S, gX, gY in _common_components(self, other):
            simples.append(S)
            gamma.append(compose(
                associator(X, Y, S),
                X.id().tensor(gY),
                associator(X, S, Y).inv(),
                gX.tensor(Y.id()),
                associator(S, X, Y),
            ))
        return CenterObject(self.parent, X.tensor(Y), gamma, simples)

    def dsum(self, other):
        Z, (ix, iy), (px, py) = self.object.dsum(other.object)
        simples, gamma = [], []
        for S, gX, gY in _common_components(self, other):
            simples.append(S)
            gamma.append(compose(px.tensor(S.id()), gX, S.id().tensor(ix))
                         + compose(py.tensor(S.id()), gY, S.id().tensor(iy)))
        W = CenterObject(self.parent, Z, gamma, simples)
        incl = [CenterMorphism(self, W, ix), CenterMorphism(other, W, iy)]
        proj = [CenterMorphism(W, self, px), CenterMorphism(W, other, py)]
        return W, incl, proj

    def dual(self) -> "CenterObject":
        X = self.object
        dX = X.dual()
        gamma = []
        for S, g in zip(self.simples, self.gamma):
            dXS = dX.tensor(S)
            gamma.append(compose(
                dXS.id().tensor(X.coev()),
                associator(dXS, X, dX).inv(),
                associator(dX, S, X).tensor(dX.id()),
                dX.id().tensor(g.inv()).tensor(dX.id()),
                associator(dX, X, S).inv().tensor(dX.id()),
                X.ev().tensor(S.id()).tensor(dX.id()),
            ))
        return CenterObject(self.parent, dX, gamma, self.simples)

    def ev(self) -> "CenterMorphism":
        return CenterMorphism(self.dual().tensor(self), self.parent.one(), self.object.ev())

    def coev(self) -> "CenterMorphism":
        return CenterMorphism(self.parent.one(), self.tensor(self.dual()), self.object.coev())

    def id(self) -> "CenterMorphism":
        return CenterMorphism(self, self, self.object.id())

    def spherical(self) -> "CenterMorphism":
        return CenterMorphism(self, self.dual().dual(), self.object.spherical())

    def __repr__(self):
        return f"Central object on {self.object}"


class CenterMorphism(Morphism):

    def __init__(self, domain: CenterObject, codomain: CenterObject, m: Morphism):
        self.domain = domain
        self.codomain = codomain
        self.m = m

    def __matmul__(self, other) -> "CenterMorphism":
        if self.domain.object != other.codomain.object:
            raise ValueError(f"Cannot compose: {other.codomain} ≠ {self.domain}")
        return CenterMorphism(other.domain, self.codomain, self.m @ other.m)

    def tensor(self, other) -> "CenterMorphism":
        return CenterMorphism(self.domain.tensor(other.domain),
                              self.codomain.tensor(other.codomain),
                              self.m.tensor(other.m))

    def inv(self) -> "CenterMorphism":
        return CenterMorphism(self.codomain, self.domain, self.m.inv())

    def __add__(self, other) -> "CenterMorphism":
        return CenterMorphism(self.domain, self.codomain, self.m + other.m)

    def scale(self, c) -> "CenterMorphism":
        return CenterMorphism(self.domain, self.codomain, self.m.scale(c))

    def dsum(self, other) -> "CenterMorphism":
        return CenterMorphism(self.domain.dsum(other.domain)[0],
                              self.codomain.dsum(other.codomain)[0],
                              self.m.dsum(other.m))

    def to_vector(self) -> sympy.Matrix:
        return self.m.to_vector()

    def __repr__(self):
        return f"Central morphism {self.domain} → {self.codomain}: {self.m}"


# =============================================================================
# BRAIDING AND PROJECTION
# =============================================================================

def half_braiding(X: CenterObject) -> list:
    return X.half_braiding()


def _common_components(X: CenterObject, Y: CenterObject) -> list:
    """(S, γ^X_S, γ^Y_S) for the simples both X and Y braid with, in the order of X."""
    result = []
    for S, gX in zip(X.simples, X.gamma):
        for T, gY in zip(Y.simples, Y.gamma):
            if T == S:
                result.append((S, gX, gY))
                break
    return result


def _commuting_coefficients(X: CenterObject, Y: CenterObject, H: HomSpace) -> sympy.Matrix:
    """
    Rows spanning the coefficient vectors (in H.basis) of the f : X → Y with

        (id_S⊗f) ∘ γ^X_S = γ^Y_S ∘ (f⊗id_S)

    for every simple S both objects braid with.
    """
    columns = []
    for b in H.basis:
        parts = [(compose(gX, S.id().tensor(b)) - compose(b.tensor(S.id()), gY)).to_vector()
                 for S, gX, gY in _common_components(X, Y)]
        columns.append(sympy.Matrix.vstack(*parts) if parts else sympy.zeros(0, 1))
    M = sympy.Matrix.hstack(*columns)
    if M.rows == 0:
        return sympy.eye(H.dim)
    null = M.nullspace(simplify=True)
    if not null:
        return sympy.zeros(0, H.dim)
    return sympy.Matrix.hstack(*null).T


def _split(Y, S) -> Tuple[list, list]:
    """Inclusions S → Y and their dual projections Y → S."""
    incl = hom(S, Y).basis
    proj = dual_basis(incl, hom(Y, S).basis, S)
    return incl, proj


def braiding(X: CenterObject, Y: CenterObject) -> CenterMorphism:
    """
    c_{X,Y} : X⊗Y → Y⊗X from the half-braiding of X.

    Raises:
        ValueError: Y contains a simple X does not braid with
    """
    x, y = X.object, Y.object
    c = zero_morphism(x.tensor(y), y.tensor(x))
    for S in X.parent.base_simples:
        incl, proj = _split(y, S)
        if not incl:
            continue
        g = X.component(S)
        for i, p in zip(incl, proj):
            c = c + compose(x.id().tensor(p), g, i.tensor(x.id()))
    return CenterMorphism(X.tensor(Y), Y.tensor(X), c)


def central_projection(X: CenterObject, Y: CenterObject, f: Morphism, simples=None) -> Morphism:
    """
    Project f : X.object → Y.object onto the morphisms commuting with γ.

    Returns:
        morphism X.object → Y.object of the base category

    Raises:
        ValueError: X or Y has no half-braiding component at some simple
    """
    C = X.parent.category
    if simples is None:
        simples = X.parent.base_simples
    x, y = X.object, Y.object
    D = C.dim()

    result = zero_morphism(x, y)
    for S in simples:
        dS = S.dual()
        gX, gY = X.component(S), Y.component(dS)
        loop = compose(S.spherical().tensor(dS.id()), dS.ev())
        term = compose(
            x.id().tensor(S.coev()),
            associator(x, S, dS).inv(),
            gX.tensor(dS.id()),
            S.id().tensor(f).tensor(dS.id()),
            associator(S, y, dS),
            S.id().tensor(gY),
            associator(S, dS, y).inv(),
            loop.tensor(y.id()),
        )
        result = result + term.scale(S.dim())
    return result.scale(1 / D)


def verify_hexagon(X: CenterObject, simples=None) -> bool:
    """
    True if γ^X satisfies every hexagon equation.

    Args:
        X: central object
        simples: simples to check over (default: the index set of X.gamma)
    """
    from .ideal import hexagon_lhs, hexagon_rhs

    if simples is None:
        simples = X.simples
    gamma = [X.component(S) for S in simples]
    Z = X.object
    indices = range(len(simples))
    for k, i, j in product(indices, repeat=3):
        Sk, Si, Sj = simples[k], simples[i], simples[j]
        for t in hom(Sk, Si.tensor(Sj)).basis:
            lhs = hexagon_lhs(Z, Si, Sj, t, gamma[k])
            rhs = hexagon_rhs(Z, Si, Sj, t, gamma[i], gamma[j])
            if lhs != rhs:
                return False
    return True


# =============================================================================
# INDUCTION
# =============================================================================

def _dsum_with_maps(objects: list) -> Tuple[Object, list, list]:
    """Direct sum of several objects with one inclusion and projection per summand."""
    Z = objects[0]
    incl, proj = [Z.id()], [Z.id()]
    for Y in objects[1:]:
        Z, (ix, iy), (px, py) = Z.dsum(Y)
        incl = [ix @ i for i in incl] + [iy]
        proj = [p @ px for p in proj] + [py]
    return Z, incl, proj


def _induction_block(X, Si, Sj, W, iota, pi) -> Morphism:
    """((S_i*⊗X)⊗S_i)⊗W → W⊗((S_j*⊗X)⊗S_j) for ι : S_j → S_i⊗W and its dual π."""
    dSi, dSj = Si.dual(), Sj.dual()
    A = dSi.tensor(X)
    phi = compose(
        dSi.id().tensor(Sj.coev()),
        dSi.id().tensor(iota.tensor(dSj.id())),
        associator(dSi, Si.tensor(W), dSj).inv(),
        associator(dSi, Si, W).inv().tensor(dSj.id()),
        Si.ev().tensor(W.id()).tensor(dSj.id()),
    )
    return compose(
        associator(A, Si, W),
        A.id().tensor(pi),
        phi.tensor(X.id()).tensor(Sj.id()),
        associator(W.tensor(dSj), X, Sj),
        associator(W, dSj, X.tensor(Sj)),
        W.id().tensor(associator(dSj, X, Sj).inv()),
    )


def induction(X: Object, simples=None) -> CenterObject:
    """
    Induced central object I(X) = ⊕_S (S*⊗X)⊗S with its canonical
    half-braiding. No polynomial system is solved.

    Args:
        X: object of a semisimple category C
        simples: simples of C to sum and braid over (default: all)

    Raises:
        NotSemisimpleError: C is not semisimple
    """
    C = X.parent
    if not C.is_semisimple:
        raise NotSemisimpleError(f"{C} is not semisimple")
    if simples is None:
        simples = C.simples()

    Z, incl, proj = _dsum_with_maps([S.dual().tensor(X).tensor(S) for S in simples])
    gamma = []
    for W in simples:
        g = zero_morphism(Z.tensor(W), W.tensor(Z))
        for (i, Si), (j, Sj) in product(enumerate(simples), repeat=2):
            iotas, pis = _split(Si.tensor(W), Sj)
            for iota, pi in zip(iotas, pis):
                block = _induction_block(X, Si, Sj, W, iota, pi)
                g = g + compose(proj[i].tensor(W.id()), block, W.id().tensor(incl[j]))
        gamma.append(g)
    return CenterObject(Center(C), Z, gamma, simples)
