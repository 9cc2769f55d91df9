"""
Fixtures for the center tests.

The centers are session-scoped and shared through Center(C): Z(Vec_Z2) and
the double semion over Q(i) are searched once, then every test module reads
the same cached simples.
"""
import sys
from pathlib import Path

import pytest

SRC = Path(__file__).resolve().parents[2]
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import sympy

from category_core.graded import GradedVectorSpaces
from category_core.groups import cyclic_group, cyclic_cocycle
from center.category import Center


@pytest.fixture(scope='session')
def vec_z2():
    return GradedVectorSpaces(cyclic_group(2))


@pytest.fixture(scope='session')
def toric_code(vec_z2):
    """Simples of Z(Vec_Z2): unit first, the rest in search order."""
    return Center(vec_z2).simples()


@pytest.fixture(scope='session')
def anyons(toric_code):
    """Toric-code simples by name, read off from γ at the nontrivial simple."""
    named = {}
    for X in toric_code:
        flux = X.object.degrees[0] != X.parent.category.group.identity
        charge = X.gamma[1].matrix[0, 0] == -1
        named[{(False, False): "1", (False, True): "e",
               (True, False): "m", (True, True): "f"}[(flux, charge)]] = X
    return named


@pytest.fixture(scope='session')
def semion_base():
    G = cyclic_group(2)
    return GradedVectorSpaces(G, cyclic_cocycle(G, 1), base_ring=sympy.QQ.algebraic_field(sympy.I))


@pytest.fixture(scope='session')
def double_semion(semion_base):
    return Center(semion_base).simples()
