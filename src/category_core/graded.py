"""
Graded Vector Spaces Vec_G^ω
============================

The fusion category of finite-dimensional G-graded vector spaces with
associator twisted by a normalized 3-cocycle ω.

OBJECTS:
    A tuple of group elements, one per basis vector (its degree).
    Simples are δ_g = (g,). The unit is δ_e, the zero object is ().

MORPHISMS:
    A sympy Matrix of shape (dim Y, dim X); entry (r, c) may be nonzero only
    when Y[r] == X[c] (degree preserving).

STRUCTURE (Kronecker bases, see constants.py):
    X⊗Y         degrees (x*y for x in X for y in Y)
    f⊗g         Kronecker product
    a_{X,Y,Z}   diagonal, entry ω(x, y, z)
    X*          degrees x⁻¹, same order
    ev_X        X*⊗X → 1, entry 1 on (i, i)
    coev_X      1 → X⊗X*, entry ω(x, x⁻¹, x)⁻¹ on (i, i)
    ψ_X         X → X** = X, diagonal ω(x, x⁻¹, x)

ZIGZAG:
    (id_X ⊗ ev_X) ∘ a_{X,X*,X} ∘ (coev_X ⊗ id_X) = id_X
    holds entrywise since coev carries ω(x, x⁻¹, x)⁻¹.

    The pivotal structure ψ makes dim δ_g = 1 for every g (pseudo-unitary
    normalization), so dim(Vec_G^ω) = |G|.

SEMISIMPLICITY (Maschke):
    semisimple iff char(k) does not divide |G|.
"""

from collections import Counter
from itertools import product
from typing import Callable, List, Tuple

import sympy

from .abstracts import (
    Category, Object, Morphism, HomSpace,
    is_zero_scalar, normalize_scalar,
)
from .groups import FiniteGroup, trivial_cocycle, cocycle_violations


def _kron(A: sympy.Matrix, B: sympy.Matrix) -> sympy.Matrix:
    p, q = B.rows, B.cols
    M = sympy.zeros(A.rows * p, A.cols * q)
    for i, j in product(range(A.rows), range(A.cols)):
        a = A[i, j]
        if a == 0:
            continue
        for k, l in product(range(p), range(q)):
            b = B[k, l]
            if b != 0:
                M[i * p + k, j * q + l] = normalize_scalar(a * b)
    return M


def _block_diag(A: sympy.Matrix, B: sympy.Matrix) -> sympy.Matrix:
    M = sympy.zeros(A.rows + B.rows, A.cols + B.cols)
    for i, j in product(range(A.rows), range(A.cols)):
        M[i, j] = A[i, j]
    for i, j in product(range(B.rows), range(B.cols)):
        M[A.rows + i, A.cols + j] = B[i, j]
    return M


def _normalize(M: sympy.Matrix) -> sympy.Matrix:
    return M.applyfunc(normalize_scalar)


def _block_nullspace(M: sympy.Matrix, rows: list, cols: list) -> list:
    """Null vectors of the submatrix M[rows, cols], as lists over cols."""
    if not cols:
        return []
    if not rows:
        return [[1 if a == b else 0 for b in range(len(cols))] for a in range(len(cols))]
    block = M.extract(rows, cols)
    return [list(v) for v in block.nullspace(simplify=True)]


def _left_inverse(M: sympy.Matrix) -> sympy.Matrix:
    """
    L with L·M = 1 for M of full column rank.

    L is supported on a set of pivot rows of M. For a degree-preserving M
    the square pivot block is block diagonal by degree, so L is degree
    preserving too.
    """
    if M.cols == 0:
        return sympy.zeros(0, M.rows)
    _, pivots = M.T.rref(simplify=True)
    if len(pivots) != M.cols:
        raise ValueError(f"Matrix of rank {len(pivots)} with {M.cols} columns has no left inverse")
    rows = list(pivots)
    inv = M.extract(rows, list(range(M.cols))).inv()
    L = sympy.zeros(M.cols, M.rows)
    for a, r in enumerate(rows):
        for b in range(M.cols):
            L[b, r] = inv[b, a]
    return L


def _degree_label(g) -> str:
    cycles = getattr(g, "cyclic_form", None)
    if cycles is None:
        return str(g)
    if not cycles:
        return "e"
    return "".join("(" + " ".join(str(i) for i in c) + ")" for c in cycles)


class GradedVectorSpaces(Category):
    """
    Vec_G^ω over a sympy base field.

    Args:
        group: FiniteGroup (identity first)
        cocycle: callable ω(a, b, c); default trivial
        base_ring: sympy domain (default QQ; use QQ.algebraic_field(I) when
                   half-braidings need i, e.g. for the double semion)
        check_cocycle: verify normalization and the cocycle condition

    Raises:
        ValueError: if ω is not a normalized 3-cocycle
    """

    def __init__(self, group: FiniteGroup, cocycle: Callable = None,
                 base_ring=sympy.QQ, check_cocycle: bool = True):
        self.group = group
        self.omega = cocycle if cocycle is not None else trivial_cocycle(group)
        self.base_ring = base_ring
        if check_cocycle:
            errors = cocycle_violations(group, self.omega)
            if errors:
                raise ValueError(f"Not a normalized 3-cocycle on {group}: {errors[:3]}")
        self._simples = [GradedObject(self, (g,)) for g in group.elements]

    @property
    def is_semisimple(self) -> bool:
        p = self.base_ring.characteristic()
        return p == 0 or self.group.order % p != 0

    def simples(self) -> List["GradedObject"]:
        return list(self._simples)

    def simple(self, g) -> "GradedObject":
        return GradedObject(self, (g,))

    def object(self, degrees) -> "GradedObject":
        return GradedObject(self, tuple(degrees))

    def one(self) -> "GradedObject":
        return GradedObject(self, (self.group.identity,))

    def zero(self) -> "GradedObject":
        return GradedObject(self, ())

    def associator(self, X, Y, Z) -> "GradedMorphism":
        dom = X.tensor(Y).tensor(Z)
        cod = X.tensor(Y.tensor(Z))
        diag = [self.omega(x, y, z) for x in X.degrees for y in Y.degrees for z in Z.degrees]
        return GradedMorphism(dom, cod, sympy.diag(*diag) if diag else sympy.zeros(0, 0))

    def hom(self, X, Y) -> HomSpace:
        positions = [(r, c) for r, c in product(range(len(Y.degrees)), range(len(X.degrees)))
                     if Y.degrees[r] == X.degrees[c]]
        basis = []
        for r, c in positions:
            M = sympy.zeros(len(Y.degrees), len(X.degrees))
            M[r, c] = 1
            basis.append(GradedMorphism(X, Y, M))

        def coordinates(f):
            return [f.matrix[r, c] for r, c in positions]

        return HomSpace(X, Y, basis, coordinates=coordinates)

    def zero_morphism(self, X, Y) -> "GradedMorphism":
        return GradedMorphism(X, Y, sympy.zeros(len(Y.degrees), len(X.degrees)))

    def is_isomorphic(self, X, Y) -> Tuple[bool, "GradedMorphism"]:
        """Same degree multiset; the isomorphism matches basis vectors in order."""
        if Counter(X.degrees) != Counter(Y.degrees):
            return False, None
        M = sympy.zeros(len(Y.degrees), len(X.degrees))
        used = set()
        for c, g in enumerate(X.degrees):
            r = next(r for r, h in enumerate(Y.degrees) if h == g and r not in used)
            used.add(r)
            M[r, c] = 1
        return True, GradedMorphism(X, Y, M)

    def kernel(self, f) -> Tuple["GradedObject", "GradedMorphism"]:
        """Kernel K and inclusion K → domain, solved one degree at a time."""
        X, Y = f.domain, f.codomain
        degrees, columns = [], []
        for g in dict.fromkeys(X.degrees):
            cols = [c for c, h in enumerate(X.degrees) if h == g]
            rows = [r for r, h in enumerate(Y.degrees) if h == g]
            for v in _block_nullspace(f.matrix, rows, cols):
                vec = sympy.zeros(len(X.degrees), 1)
                for c, x in zip(cols, v):
                    vec[c] = x
                degrees.append(g)
                columns.append(vec)
        K = GradedObject(self, tuple(degrees))
        M = sympy.Matrix.hstack(*columns) if columns else sympy.zeros(len(X.degrees), 0)
        return K, GradedMorphism(K, X, _normalize(M))

    def cokernel(self, f) -> Tuple["GradedObject", "GradedMorphism"]:
        """Cokernel Q and projection codomain → Q."""
        X, Y = f.domain, f.codomain
        degrees, rows_out = [], []
        for g in dict.fromkeys(Y.degrees):
            rows = [r for r, h in enumerate(Y.degrees) if h == g]
            cols = [c for c, h in enumerate(X.degrees) if h == g]
            for v in _block_nullspace(f.matrix.T, cols, rows):
                vec = sympy.zeros(1, len(Y.degrees))
                for r, x in zip(rows, v):
                    vec[r] = x
                degrees.append(g)
                rows_out.append(vec)
        Q = GradedObject(self, tuple(degrees))
        M = sympy.Matrix.vstack(*rows_out) if rows_out else sympy.zeros(0, len(Y.degrees))
        return Q, GradedMorphism(Y, Q, _normalize(M))

    def __repr__(self):
        return f"Vec_{self.group} over {self.base_ring}"


class GradedObject(Object):

    def __init__(self, parent: GradedVectorSpaces, degrees: tuple):
        self.parent = parent
        self.degrees = tuple(degrees)

    def __eq__(self, other):
        if not isinstance(other, GradedObject):
            return NotImplemented
        return self.parent is other.parent and self.degrees == other.degrees

    def __hash__(self):
        return hash((id(self.parent), self.degrees))

    def __len__(self):
        return len(self.degrees)

    def tensor(self, other) -> "GradedObject":
        mul = self.parent.group.mul
        return GradedObject(self.parent, tuple(mul(x, y) for x in self.degrees for y in other.degrees))

    def dual(self) -> "GradedObject":
        inv = self.parent.group.inv
        return GradedObject(self.parent, tuple(inv(x) for x in self.degrees))

    def _pivotal_factors(self):
        G, omega = self.parent.group, self.parent.omega
        return [omega(x, G.inv(x), x) for x in self.degrees]

    def ev(self) -> "GradedMorphism":
        n = len(self.degrees)
        M = sympy.zeros(1, n * n)
        for i in range(n):
            M[0, i * n + i] = 1
        return GradedMorphism(self.dual().tensor(self), self.parent.one(), M)

    def coev(self) -> "GradedMorphism":
        n = len(self.degrees)
        M = sympy.zeros(n * n, 1)
        for i, w in enumerate(self._pivotal_factors()):
            M[i * n + i, 0] = normalize_scalar(1 / w)
        return GradedMorphism(self.parent.one(), self.tensor(self.dual()), M)

    def id(self) -> "GradedMorphism":
        return GradedMorphism(self, self, sympy.eye(len(self.degrees)))

    def spherical(self) -> "GradedMorphism":
        factors = self._pivotal_factors()
        M = sympy.diag(*factors) if factors else sympy.zeros(0, 0)
        return GradedMorphism(self, self.dual().dual(), M)

    def dsum(self, other):
        Z = GradedObject(self.parent, self.degrees + other.degrees)
        m, n = len(self.degrees), len(other.degrees)
        ix = sympy.zeros(m + n, m)
        iy = sympy.zeros(m + n, n)
        for i in range(m):
            ix[i, i] = 1
        for j in range(n):
            iy[m + j, j] = 1
        incl = [GradedMorphism(self, Z, ix), GradedMorphism(other, Z, iy)]
        proj = [GradedMorphism(Z, self, ix.T), GradedMorphism(Z, other, iy.T)]
        return Z, incl, proj

    def __repr__(self):
        if not self.degrees:
            return "0"
        return " ⊕ ".join(f"δ_{_degree_label(g)}" for g in self.degrees)


class GradedMorphism(Morphism):

    def __init__(self, domain: GradedObject, codomain: GradedObject, matrix: sympy.Matrix):
        if matrix.shape != (len(codomain.degrees), len(domain.degrees)):
            raise ValueError(f"Matrix shape {matrix.shape} does not match "
                             f"{len(codomain.degrees)}×{len(domain.degrees)}")
        self.domain = domain
        self.codomain = codomain
        self.matrix = matrix

    def __matmul__(self, other) -> "GradedMorphism":
        if self.domain != other.codomain:
            raise ValueError(f"Cannot compose: {other.codomain} ≠ {self.domain}")
        return GradedMorphism(other.domain, self.codomain, _normalize(self.matrix * other.matrix))

    def tensor(self, other) -> "GradedMorphism":
        return GradedMorphism(self.domain.tensor(other.domain),
                              self.codomain.tensor(other.codomain),
                              _kron(self.matrix, other.matrix))

    def inv(self) -> "GradedMorphism":
        return GradedMorphism(self.codomain, self.domain, _normalize(self.matrix.inv()))

    def __add__(self, other) -> "GradedMorphism":
        if self.domain != other.domain or self.codomain != other.codomain:
            raise ValueError(f"Cannot add morphisms {self.domain} → {self.codomain} "
                             f"and {other.domain} → {other.codomain}")
        return GradedMorphism(self.domain, self.codomain, _normalize(self.matrix + other.matrix))

    def scale(self, c) -> "GradedMorphism":
        return GradedMorphism(self.domain, self.codomain, _normalize(self.matrix * sympy.sympify(c)))

    def dsum(self, other) -> "GradedMorphism":
        return GradedMorphism(self.domain.dsum(other.domain)[0],
                              self.codomain.dsum(other.codomain)[0],
                              _block_diag(self.matrix, other.matrix))

    def left_inverse(self) -> "GradedMorphism":
        """r with r ∘ self = id, for a monomorphism."""
        return GradedMorphism(self.codomain, self.domain, _normalize(_left_inverse(self.matrix)))

    def right_inverse(self) -> "GradedMorphism":
        """s with self ∘ s = id, for an epimorphism."""
        return GradedMorphism(self.codomain, self.domain, _normalize(_left_inverse(self.matrix.T).T))

    def to_vector(self) -> sympy.Matrix:
        entries = list(self.matrix)
        return sympy.Matrix(len(entries), 1, entries)

    def is_zero(self) -> bool:
        return all(is_zero_scalar(x) for x in self.matrix)

    def __repr__(self):
        return f"Morphism {self.domain} → {self.codomain}: {self.matrix.tolist()}"
