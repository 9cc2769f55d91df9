"""
Global constants for category_core
===================================

All algorithmic settings in ONE place.
"""

# Monomial order used for Groebner bases when deciding variety dimension.
# Any global order gives the same Krull dimension; grevlex is the cheap one.
MONOMIAL_ORDER = "grevlex"

# Prefix of the polynomial ring unknowns: x1, x2, ...
VARIABLE_PREFIX = "x"

# Values a free half-braiding coefficient is forced to while branching.
# The branching generator is prod(y - r for r in BRANCH_ROOTS) = y*(y**2 - 1).
BRANCH_ROOTS = (-1, 0, 1)

# Free-variable search: independent sets are looked for among subsets of the
# unknowns, largest first. Beyond this many unknowns the search is refused.
MAX_INDEPENDENT_SET_VARIABLES = 24

# =============================================================================
# CATEGORY CONVENTIONS
# =============================================================================
#
# COMPOSITION:
#   f @ g  means "f after g" (matrix order).
#   compose(g, f) means "g first, then f" (diagrammatic order).
#
# TENSOR PRODUCT BASIS:
#   basis of X⊗Y is ordered (x, y) with y varying fastest (Kronecker order).
#   With this order (X⊗Y)⊗Z and X⊗(Y⊗Z) share one basis, so every
#   associator is a diagonal matrix.
#
# UNIT:
#   X⊗1 and 1⊗X are literally X. Unitors are identities.
#
# HALF-BRAIDING:
#   gamma[i] : Z⊗S_i → S_i⊗Z, one component per simple S_i, in the order of
#   Category.simples(). The unit object is simples()[0].
#
