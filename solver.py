from collections.abc import Mapping
from typing import Dict, List, NamedTuple, Optional

from ttt_env import TIE, UNRESOLVED, UnsolvedStateError, evaluate
from ttt_state import (
    NO_MOVE,
    NUM_SQUARES,
    EMPTY,
    encode_empty,
    get_cell,
    set_cell,
    toggle_turn,
    whose_turn,
)

# Distinct encoded states reachable from the empty board, terminal ones included.
REACHABLE_STATES = 5478


class MemoEntry(NamedTuple):
    move: int
    value: int


class MinimaxSolver(Mapping):
    """Exhaustive negamax over the packed game tree.

    Every state reached from the root passed to :meth:`solve` gets a memo
    entry holding the best move for the player to move (lowest position
    wins ties) and its value from that player's point of view:
    +1 win, 0 draw, -1 loss.
    """

    def __init__(self):
        self.memo: Dict[int, MemoEntry] = {}

    def solve(self, state: Optional[int] = None) -> MemoEntry:
        if state is None:
            state = encode_empty()
        entry = self.memo.get(state)
        if entry is not None:
            return entry

        outcome = evaluate(state)
        if outcome != UNRESOLVED:
            if outcome == TIE:
                value = 0
            elif outcome == whose_turn(state):
                value = 1
            else:
                value = -1
            entry = MemoEntry(NO_MOVE, value)
            self.memo[state] = entry
            return entry

        player = whose_turn(state)
        best_pos = NO_MOVE
        best_value = -2
        for pos in range(NUM_SQUARES):
            if get_cell(state, pos) != EMPTY:
                continue
            new_state = toggle_turn(set_cell(state, pos, player))
            value = -self.solve(new_state).value
            if value > best_value:
                best_value = value
                best_pos = pos
        entry = MemoEntry(best_pos, best_value)
        self.memo[state] = entry
        return entry

    def __getitem__(self, state: int) -> MemoEntry:
        try:
            return self.memo[state]
        except KeyError:
            raise UnsolvedStateError(state) from None

    def __iter__(self):
        return iter(self.memo)

    def __len__(self):
        return len(self.memo)

    def __contains__(self, state):
        return state in self.memo

    def lookup(self, state: int) -> MemoEntry:
        return self[state]

    def value(self, state: int) -> int:
        return self[state].value

    def best_move(self, state: int) -> int:
        return self[state].move

    def best_successor(self, state: int) -> Optional[int]:
        move = self.best_move(state)
        if move == NO_MOVE:
            return None
        return toggle_turn(set_cell(state, move, whose_turn(state)))

    def principal_variation(self, state: int) -> List[int]:
        line = [state]
        next_state = self.best_successor(state)
        while next_state is not None:
            line.append(next_state)
            next_state = self.best_successor(next_state)
        return line
