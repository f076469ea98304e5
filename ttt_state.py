"""
Packed board state.

A state is a 32 bit unsigned int. The top 18 bits hold the nine cells,
two bits each, row-major from the most significant end
(00 = empty, 01 = cross, 11 = nought). Bit 13 is 0 when cross is to move
and 1 when nought is to move. Everything else is zero.
"""
from typing import Optional, Sequence, Tuple

import numpy as np

EMPTY = 0b00
CROSS = 0b01
UNUSED = 0b10
NOUGHT = 0b11

NUM_SQUARES = 9
POS_SHIFTS = tuple(30 - 2 * pos for pos in range(NUM_SQUARES))
POS_MASKS = tuple(0b11 << shift for shift in POS_SHIFTS)
TURN_SHIFT = 13
TURN_MASK = 1 << TURN_SHIFT

# Move recorded for states with no move left to make.
NO_MOVE = -1


def _check_position(position):
    if position < 0 or position >= NUM_SQUARES:
        raise ValueError(f"position must be in [0, {NUM_SQUARES - 1}], got {position}")


def encode_empty() -> int:
    return 0


def get_cell(state: int, position: int) -> int:
    _check_position(position)
    return (state >> POS_SHIFTS[position]) & 0b11


def set_cell(state: int, position: int, symbol: int) -> int:
    _check_position(position)
    if symbol not in (CROSS, NOUGHT):
        raise ValueError(f"cannot place symbol {symbol:#04b}")
    if get_cell(state, position) != EMPTY:
        raise ValueError(f"position {position} is already occupied")
    return state | (POS_MASKS[position] & (symbol << POS_SHIFTS[position]))


def toggle_turn(state: int) -> int:
    return state ^ TURN_MASK


def whose_turn(state: int) -> int:
    return NOUGHT if (state >> TURN_SHIFT) & 1 else CROSS


def other_player(symbol: int) -> int:
    return NOUGHT if symbol == CROSS else CROSS


def cells(state: int) -> Tuple[int, ...]:
    return tuple(get_cell(state, pos) for pos in range(NUM_SQUARES))


def empty_cells(state: int):
    return [pos for pos in range(NUM_SQUARES) if get_cell(state, pos) == EMPTY]


def from_cells(values: Sequence[int], turn: Optional[int] = None) -> int:
    """Builds a state from nine cell values.

    When ``turn`` is omitted it is derived from the move count: cross moves
    when both sides have placed the same number of symbols.
    """
    if len(values) != NUM_SQUARES:
        raise ValueError(f"expected {NUM_SQUARES} cells, got {len(values)}")
    state = encode_empty()
    for pos, symbol in enumerate(values):
        if symbol != EMPTY:
            state = set_cell(state, pos, symbol)
    if turn is None:
        crosses = sum(1 for v in values if v == CROSS)
        noughts = sum(1 for v in values if v == NOUGHT)
        turn = CROSS if crosses == noughts else NOUGHT
    if turn == NOUGHT:
        state = toggle_turn(state)
    return state


def state_to_numpy(state: int) -> np.ndarray:
    return np.array(cells(state), dtype=np.uint8).reshape(3, 3)
