import pytest

from solver import MinimaxSolver
from ttt_state import encode_empty


@pytest.fixture(scope="session")
def solver():
    solver = MinimaxSolver()
    solver.solve(encode_empty())
    return solver
