"""
category_core - semisimple tensor categories and the polynomial back end.

Modules:
    abstracts           Category / Object / Morphism interface, HomSpace
    graded              Vec_G^ω, G-graded vector spaces twisted by a 3-cocycle
    groups              finite groups and 3-cocycles
    polynomial_backend  polynomial rings, ideals, dimension, solution recovery
    constants           algorithmic settings and conventions
    errors              exception and warning types
"""

from .errors import (
    CategoryError, NotSemisimpleError, NotSimpleError, SolverError,
    IncompleteSearchWarning,
)
from .abstracts import (
    Category, Object, Morphism, HomSpace,
    compose, associator, hom, end, zero_morphism, is_isomorphic, trace,
    dsum, linear_combination, dual_basis, unique_simples, decompose, kernel, cokernel,
)
from .groups import FiniteGroup, cyclic_group, symmetric_group, trivial_cocycle, cyclic_cocycle
from .graded import GradedVectorSpaces, GradedObject, GradedMorphism
from .polynomial_backend import PolynomialRing, Ideal, recover_solutions, branch_polynomial
