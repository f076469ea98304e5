from collections.abc import Mapping
from typing import Optional, Sequence

import numpy as np

from ttt_state import (
    CROSS,
    EMPTY,
    NO_MOVE,
    NOUGHT,
    cells,
    empty_cells,
    set_cell,
    state_to_numpy,
    toggle_turn,
    whose_turn,
)
from utils import make_rng

UNRESOLVED = 0
TIE = 4

WIN_LINES = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)

OUTCOME_MESSAGES = {
    CROSS: "Crosses won!",
    NOUGHT: "Noughts won!",
    TIE: "Draw!",
}

SYMBOL_CHARS = {
    EMPTY: ".",
    CROSS: "X",
    NOUGHT: "O",
}


class UnsolvedStateError(KeyError):
    """Raised when the memo table has no entry for a queried state."""

    def __init__(self, state):
        super().__init__(state)
        self.state = state

    def __str__(self):
        return f"state {self.state:#010x} has not been solved"


def evaluate(state: int) -> int:
    """Returns the winning symbol, TIE for a full board, or UNRESOLVED."""
    board = cells(state)
    for a, b, c in WIN_LINES:
        if board[a] != EMPTY and board[a] == board[b] == board[c]:
            return board[a]
    if EMPTY not in board:
        return TIE
    return UNRESOLVED


def is_terminal(state: int) -> bool:
    return evaluate(state) != UNRESOLVED


def outcome_message(outcome: int) -> str:
    if outcome not in OUTCOME_MESSAGES:
        raise ValueError(f"game is not over (outcome {outcome})")
    return OUTCOME_MESSAGES[outcome]


def render(state: int) -> str:
    board = state_to_numpy(state)
    return (
        f'To move: {SYMBOL_CHARS[whose_turn(state)]}\n'
        + "\n".join("".join(SYMBOL_CHARS[c] for c in row) for row in board.tolist())
        + "\n"
    )


def take_turn(state: int, position: int) -> int:
    return toggle_turn(set_cell(state, position, whose_turn(state)))


def optimal_move(state: int, memo: Mapping) -> int:
    if state not in memo:
        raise UnsolvedStateError(state)
    move, _ = memo[state]
    if move == NO_MOVE:
        raise ValueError("no move to make from a finished game")
    return move


def random_move(state: int, rng: np.random.Generator) -> int:
    options = empty_cells(state)
    if not options:
        raise ValueError("no empty cell to play")
    return int(rng.choice(options))


class Policy:
    def __call__(self, state):
        raise NotImplementedError


class OptimalPolicy(Policy):
    def __init__(self, memo: Mapping):
        self.memo = memo

    def __call__(self, state):
        return optimal_move(state, self.memo)


class RandomPolicy(Policy):
    def __init__(self, rng: Optional[np.random.Generator] = None):
        self.rng = rng if rng is not None else make_rng()

    def __call__(self, state):
        return random_move(state, self.rng)


class MultiPolicy(Policy):
    def __init__(
        self,
        policies: Sequence[Policy],
        probabilities: Sequence[float],
        rng: Optional[np.random.Generator] = None,
    ):
        assert len(policies) == len(probabilities)
        self.policies = policies
        self.probabilities = probabilities
        self.rng = rng if rng is not None else make_rng()

    def __call__(self, state):
        return self.policies[
            self.rng.choice(len(self.policies), p=self.probabilities)
        ](state)
