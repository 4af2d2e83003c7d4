"""
Cell module for Minesweeper game.

Represents individual cells on the game board with their visible state
(closed/opened/flagged/defused/detonated) and bomb presence.
"""
from enum import Enum, auto
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visual states of a cell."""

    CLOSED = auto()
    OPENED = auto()
    FLAGGED_AS_BOMB = auto()
    DEFUSED = auto()
    DETONATED = auto()


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the Minesweeper grid.

    OPENED, DEFUSED and DETONATED are terminal: once reached, the cell
    does not change again until reset().

    Attributes:
        has_bomb: Whether this cell contains a bomb. Set by the board's
            placement pass only.
        state: Current visual state.
    """

    has_bomb: bool = False
    state: CellState = CellState.CLOSED

    def open_or_detonate(self) -> bool:
        """
        Open this cell, detonating it if it holds a bomb.

        Returns:
            True if the state changed, False if the cell was already
            opened, defused or detonated.
        """
        return self._open_or_mark_bomb(CellState.DETONATED)

    def open_or_defuse(self) -> bool:
        """
        Open this cell, defusing it if it holds a bomb.

        Returns:
            True if the state changed, False otherwise.
        """
        return self._open_or_mark_bomb(CellState.DEFUSED)

    def _open_or_mark_bomb(self, bomb_state: CellState) -> bool:
        if self.state not in (CellState.CLOSED, CellState.FLAGGED_AS_BOMB):
            return False
        self.state = bomb_state if self.has_bomb else CellState.OPENED
        return True

    def toggle_flag(self) -> bool:
        """
        Toggle the bomb flag on this cell.

        Returns:
            True if flag was toggled, False if cell is already revealed.
        """
        if self.state == CellState.CLOSED:
            self.state = CellState.FLAGGED_AS_BOMB
        elif self.state == CellState.FLAGGED_AS_BOMB:
            self.state = CellState.CLOSED
        else:
            return False
        return True

    def reset(self) -> bool:
        """
        Remove the bomb and close the cell.

        Returns:
            True if the visible state changed.
        """
        self.has_bomb = False
        if self.state == CellState.CLOSED:
            return False
        self.state = CellState.CLOSED
        return True

    @property
    def is_closed(self) -> bool:
        """Check if cell is closed."""
        return self.state == CellState.CLOSED

    @property
    def is_opened(self) -> bool:
        """Check if cell is opened without a bomb."""
        return self.state == CellState.OPENED

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged as a bomb."""
        return self.state == CellState.FLAGGED_AS_BOMB

    @property
    def is_revealed(self) -> bool:
        """Check if cell reached a terminal visible state."""
        return self.state in (
            CellState.OPENED,
            CellState.DEFUSED,
            CellState.DETONATED,
        )
