"""
Drinfeld Center Source Code
===========================

Modules:
    category_core - tensor category interface, Vec_G^ω, polynomial back end
    center        - half-braiding search and the center category Z(C)
    tests         - Test suite

Requirements:
    Python >= 3.9
    numpy >= 1.20
    sympy >= 1.12
"""

import sys

# Python version check
if sys.version_info < (3, 9):
    raise ImportError(f"drinfeld-center requires Python >= 3.9, got {sys.version}")

# sympy version check (Groebner bases over algebraic fields, solve_poly_system)
import sympy
_sympy_version = tuple(int(p) for p in sympy.__version__.split('.')[:2] if p.isdigit())
if _sympy_version < (1, 12):
    raise ImportError(f"drinfeld-center requires sympy >= 1.12, got {sympy.__version__}")

# numpy version check
import numpy as np
_numpy_version = tuple(int(p) for p in np.__version__.split('.')[:2] if p.isdigit())
if _numpy_version < (1, 20):
    raise ImportError(f"drinfeld-center requires numpy >= 1.20, got {np.__version__}")
