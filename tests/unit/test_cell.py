"""
Unit tests for Cell class.

Tests cell state transitions for opening, flagging and reset.
"""
import pytest
from minesweeper import Cell, CellState


# ============================================================================
# Cell Initialization Tests
# ============================================================================

class TestCellInitialization:
    """Test cell creation and default values."""

    def test_default_cell_has_no_bomb(self) -> None:
        """New cell should not hold a bomb by default."""
        cell = Cell()
        assert cell.has_bomb is False

    def test_default_cell_is_closed(self) -> None:
        """New cell should be closed by default."""
        cell = Cell()
        assert cell.state == CellState.CLOSED
        assert cell.is_closed is True
        assert cell.is_revealed is False

    def test_bomb_cell_creation(self) -> None:
        """Can create a cell that holds a bomb."""
        cell = Cell(has_bomb=True)
        assert cell.has_bomb is True


# ============================================================================
# Open Tests
# ============================================================================

class TestCellOpen:
    """Test open_or_detonate and open_or_defuse."""

    def test_open_safe_cell(self, closed_cell: Cell) -> None:
        """Opening a safe cell moves it to OPENED."""
        assert closed_cell.open_or_detonate() is True
        assert closed_cell.state == CellState.OPENED
        assert closed_cell.is_opened is True

    def test_defuse_on_safe_cell_opens_it(self, closed_cell: Cell) -> None:
        """open_or_defuse on a safe cell also lands in OPENED."""
        assert closed_cell.open_or_defuse() is True
        assert closed_cell.state == CellState.OPENED

    def test_open_bomb_detonates(self, bomb_cell: Cell) -> None:
        """Opening a bomb with open_or_detonate detonates it."""
        assert bomb_cell.open_or_detonate() is True
        assert bomb_cell.state == CellState.DETONATED

    def test_open_bomb_defuses(self, bomb_cell: Cell) -> None:
        """Opening a bomb with open_or_defuse defuses it."""
        assert bomb_cell.open_or_defuse() is True
        assert bomb_cell.state == CellState.DEFUSED

    def test_open_flagged_cell(self, bomb_cell: Cell) -> None:
        """Flagged cells can still be opened."""
        bomb_cell.toggle_flag()
        assert bomb_cell.open_or_detonate() is True
        assert bomb_cell.state == CellState.DETONATED

    @pytest.mark.parametrize("has_bomb", [False, True])
    def test_second_open_is_noop(self, has_bomb: bool) -> None:
        """Revealed cells never change again."""
        cell = Cell(has_bomb=has_bomb)
        cell.open_or_detonate()
        state = cell.state
        assert cell.open_or_detonate() is False
        assert cell.open_or_defuse() is False
        assert cell.toggle_flag() is False
        assert cell.state == state
        assert cell.is_revealed is True


# ============================================================================
# Cell Flag Tests
# ============================================================================

class TestCellFlag:
    """Test cell flagging behavior."""

    def test_flag_closed_cell(self, closed_cell: Cell) -> None:
        """Flagging a closed cell should succeed."""
        assert closed_cell.toggle_flag() is True
        assert closed_cell.state == CellState.FLAGGED_AS_BOMB
        assert closed_cell.is_flagged is True

    def test_unflag_returns_to_closed(self, closed_cell: Cell) -> None:
        """Unflagging a cell should return it to closed."""
        closed_cell.toggle_flag()
        assert closed_cell.toggle_flag() is True
        assert closed_cell.is_closed is True

    def test_flag_does_not_touch_bomb(self, bomb_cell: Cell) -> None:
        """Flags are a visible mark only."""
        bomb_cell.toggle_flag()
        assert bomb_cell.has_bomb is True


# ============================================================================
# Cell Reset Tests
# ============================================================================

class TestCellReset:
    """Test cell reset behavior."""

    def test_reset_closed_cell_reports_no_change(self, bomb_cell: Cell) -> None:
        """Removing a bomb from a closed cell is not a visible change."""
        assert bomb_cell.reset() is False
        assert bomb_cell.has_bomb is False
        assert bomb_cell.is_closed is True

    def test_reset_detonated_cell(self, bomb_cell: Cell) -> None:
        """Reset closes a detonated cell and removes its bomb."""
        bomb_cell.open_or_detonate()
        assert bomb_cell.reset() is True
        assert bomb_cell.state == CellState.CLOSED
        assert bomb_cell.has_bomb is False

    def test_reset_flagged_cell(self, closed_cell: Cell) -> None:
        """Reset removes flags."""
        closed_cell.toggle_flag()
        assert closed_cell.reset() is True
        assert closed_cell.is_closed is True
