"""
center - the Drinfeld center Z(C) of a semisimple tensor category C.

Modules:
    ideal     hexagon equations as a polynomial ideal
    solver    dimension-driven enumeration and branching of half-braidings
    search    simple-object search over multiplicity vectors
    category  CenterCategory / CenterObject / CenterMorphism, braiding
    modular   twists, S- and T-matrices
"""

from .category import (
    CenterCategory, CenterObject, CenterMorphism, Center,
    half_braiding, braiding, central_projection, verify_hexagon, induction,
)
from .ideal import build_center_ideal
from .solver import half_braidings, guess_solutions, braidings_from_ideal, branch_ideal
from .search import center_simples, is_central, multiplicity_vectors
from .modular import twist, twists, smatrix, tmatrix, is_modular
