"""
Modular Data of Z(C)
====================

    θ_X    = tr(c_{X,X}) / dim X               (twist of a simple X)
    S_{XY} = tr(c_{Y,X} ∘ c_{X,Y})             (unnormalized S-matrix)
    T      = diag(θ_X)

Z(C) of a spherical fusion category C is modular: S is invertible.

EXAMPLES:
    Z(Vec_Z/2)            toric code, θ = (1, 1, 1, -1)
    Z(Vec_Z/2^ω), ω ≠ 1   double semion, θ = (1, 1, i, -i)
"""

from typing import List

import sympy

from category_core.abstracts import trace, is_zero_scalar, normalize_scalar

from .category import braiding


def twist(X):
    """θ_X for a simple central object X."""
    d = X.dim()
    if is_zero_scalar(d):
        raise ValueError(f"{X} has dimension 0; its twist is undefined")
    return normalize_scalar(trace(braiding(X, X)) / d)


def twists(simples) -> List:
    return [twist(X) for X in simples]


def smatrix(simples) -> sympy.Matrix:
    """Unnormalized S-matrix over the given central simples."""
    n = len(simples)
    S = sympy.zeros(n, n)
    for a, X in enumerate(simples):
        for b, Y in enumerate(simples):
            S[a, b] = normalize_scalar(trace(braiding(Y, X) @ braiding(X, Y)))
    return S


def tmatrix(simples) -> sympy.Matrix:
    return sympy.diag(*twists(simples))


def is_modular(simples) -> bool:
    """Non-degenerate braiding: det S ≠ 0."""
    return not is_zero_scalar(smatrix(simples).det())
