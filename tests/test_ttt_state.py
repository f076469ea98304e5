"""
Tests for the packed board state.
"""

import numpy as np
import pytest

from ttt_state import (
    CROSS,
    EMPTY,
    NOUGHT,
    cells,
    empty_cells,
    encode_empty,
    from_cells,
    get_cell,
    other_player,
    set_cell,
    state_to_numpy,
    toggle_turn,
    whose_turn,
)

X, O, _ = CROSS, NOUGHT, EMPTY


class TestEncoding:
    """Bit layout of the packed state."""

    def test_empty_board_is_zero(self):
        assert encode_empty() == 0
        assert cells(encode_empty()) == (EMPTY,) * 9
        assert whose_turn(encode_empty()) == CROSS

    def test_first_cell_uses_top_bits(self):
        state = set_cell(encode_empty(), 0, CROSS)
        assert state == 0x40000000
        state = set_cell(encode_empty(), 0, NOUGHT)
        assert state == 0xC0000000

    def test_last_cell_and_turn_bit(self):
        state = set_cell(encode_empty(), 8, NOUGHT)
        assert state == 0x0000C000
        assert toggle_turn(encode_empty()) == 0x00002000

    def test_state_fits_in_32_bits(self):
        state = from_cells([O] * 9, turn=NOUGHT)
        assert 0 <= state < 2**32


class TestCells:
    """Reading and writing single cells."""

    def test_set_then_get(self):
        state = encode_empty()
        state = set_cell(state, 4, CROSS)
        state = set_cell(state, 2, NOUGHT)
        assert get_cell(state, 4) == CROSS
        assert get_cell(state, 2) == NOUGHT
        assert get_cell(state, 0) == EMPTY

    def test_set_does_not_touch_original(self):
        state = encode_empty()
        new_state = set_cell(state, 3, CROSS)
        assert state == 0
        assert new_state != state

    def test_setting_occupied_cell_raises(self):
        state = set_cell(encode_empty(), 5, CROSS)
        with pytest.raises(ValueError):
            set_cell(state, 5, NOUGHT)
        with pytest.raises(ValueError):
            set_cell(state, 5, CROSS)

    @pytest.mark.parametrize("position", [-1, 9, 100])
    def test_bad_position_raises(self, position):
        with pytest.raises(ValueError):
            get_cell(encode_empty(), position)
        with pytest.raises(ValueError):
            set_cell(encode_empty(), position, CROSS)

    def test_bad_symbol_raises(self):
        with pytest.raises(ValueError):
            set_cell(encode_empty(), 0, EMPTY)
        with pytest.raises(ValueError):
            set_cell(encode_empty(), 0, 0b10)

    def test_empty_cells_ascending(self):
        state = from_cells([X, _, O, _, X, _, _, _, O])
        assert empty_cells(state) == [1, 3, 5, 6, 7]


class TestTurn:
    """Turn bit handling."""

    def test_toggle_flips_turn(self):
        state = encode_empty()
        assert whose_turn(toggle_turn(state)) == NOUGHT
        assert toggle_turn(toggle_turn(state)) == state

    def test_toggle_keeps_cells(self):
        state = from_cells([X, O, _, _, X, _, _, _, _])
        assert cells(toggle_turn(state)) == cells(state)

    def test_other_player(self):
        assert other_player(CROSS) == NOUGHT
        assert other_player(NOUGHT) == CROSS

    def test_from_cells_derives_turn(self):
        assert whose_turn(from_cells([X, _, _, _, _, _, _, _, _])) == NOUGHT
        assert whose_turn(from_cells([X, O, _, _, _, _, _, _, _])) == CROSS
        assert whose_turn(from_cells([X, O, _, _, _, _, _, _, _], turn=NOUGHT)) == NOUGHT

    def test_from_cells_wrong_length(self):
        with pytest.raises(ValueError):
            from_cells([X, O])


def test_state_to_numpy():
    board = state_to_numpy(from_cells([X, _, _, _, O, _, _, _, X]))
    assert board.shape == (3, 3)
    np.testing.assert_array_equal(np.diag(board), [X, O, X])
    assert np.count_nonzero(board) == 3
