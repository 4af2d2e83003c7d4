"""
Board module for Minesweeper game.

Implements the game board with bomb placement, cell opening and flood
fill, flagging, and game phase management. Visible changes are pushed
to an external observer through two optional callbacks.

Callbacks are invoked synchronously from inside board operations and
must not call back into the board.
"""
import logging
import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable, Iterable, Iterator, List, Optional, Tuple

from .cell import Cell, CellState


logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GamePhase(Enum):
    """Possible phases of the game."""

    READY = auto()
    RUNNING = auto()
    WON = auto()
    LOST = auto()


class PlacementRule(Enum):
    """Adjacency constraints applied while placing bombs."""

    NO_ADJACENT = auto()
    NOT_SURROUNDED = auto()


class OutOfBoundsError(IndexError):
    """Raised when a coordinate lies outside the board."""

    def __init__(self, row: int, col: int, size: int) -> None:
        super().__init__(
            f"Cell ({row}, {col}) is outside a {size}x{size} board"
        )
        self.row = row
        self.col = col
        self.size = size


@dataclass
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        size: Side length of the square grid.
        bomb_count: Number of bombs requested.
        placement_rule: Adjacency constraint used during placement.
    """

    size: int = 9
    bomb_count: int = 10
    placement_rule: PlacementRule = PlacementRule.NO_ADJACENT

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.size < 1:
            raise ValueError("Board size must be positive")
        if self.bomb_count < 0:
            raise ValueError("Number of bombs cannot be negative")
        max_bombs = self.size * self.size - 1
        if self.bomb_count > max_bombs:
            raise ValueError(f"Too many bombs (max {max_bombs})")


@dataclass(frozen=True)
class CellData:
    """
    Externally visible view of a cell.

    Attributes:
        state: Visual state of the cell.
        adjacent_bombs: Bombs among the neighbors, set only for
            opened cells.
    """

    state: CellState
    adjacent_bombs: Optional[int] = None

    def to_observation(self) -> int:
        """
        Convert to a numeric observation value.

        Returns:
            -1: Closed cell
            -2: Flagged cell
            0-8: Opened cell with adjacent bomb count (0 if unset)
            9: Detonated bomb
            10: Defused bomb
        """
        if self.state == CellState.CLOSED:
            return -1
        if self.state == CellState.FLAGGED_AS_BOMB:
            return -2
        if self.state == CellState.DETONATED:
            return 9
        if self.state == CellState.DEFUSED:
            return 10
        return self.adjacent_bombs or 0


CellChangedCallback = Callable[[int, int, CellData], None]
PhaseChangedCallback = Callable[[GamePhase], None]


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minesweeper game board.

    Manages the grid of cells, bomb placement, opening and flagging
    logic, and win/lose conditions. Bombs are placed on construction
    and on every restart.
    """

    config: BoardConfig = field(default_factory=lambda: BoardConfig())
    rng: random.Random = field(default_factory=random.Random, repr=False)
    on_cell_changed: Optional[CellChangedCallback] = field(
        default=None, repr=False
    )
    on_phase_changed: Optional[PhaseChangedCallback] = field(
        default=None, repr=False
    )
    _grid: List[List[Cell]] = field(init=False, repr=False)
    _phase: GamePhase = field(init=False, default=GamePhase.READY)
    _bombs_placed: int = field(init=False, default=0)

    def __post_init__(self) -> None:
        """Create the grid and place bombs."""
        self._grid = [
            [Cell() for _ in range(self.config.size)]
            for _ in range(self.config.size)
        ]
        self._place_bombs()

    # ========================================================================
    # Bomb Placement (Low-level)
    # ========================================================================

    def _place_bombs(self) -> None:
        """
        Place bombs at random positions allowed by the placement rule.

        Gives up after size*size failed attempts, leaving the board with
        fewer bombs than requested.
        """
        size = self.config.size
        placed = 0
        attempts_left = size * size

        while placed < self.config.bomb_count and attempts_left:
            row = self.rng.randrange(size)
            col = self.rng.randrange(size)
            if self._can_place_bomb(row, col):
                self._grid[row][col].has_bomb = True
                placed += 1
            else:
                attempts_left -= 1

        self._bombs_placed = placed
        if placed < self.config.bomb_count:
            logger.warning(
                "Placed %d of %d bombs on %dx%d board",
                placed, self.config.bomb_count, size, size,
            )
        else:
            logger.debug("Placed %d bombs on %dx%d board", placed, size, size)

    def _can_place_bomb(self, row: int, col: int) -> bool:
        """Check the placement rule for a candidate bomb position."""
        cell = self._grid[row][col]
        if cell.has_bomb:
            return False

        if self.config.placement_rule == PlacementRule.NO_ADJACENT:
            return not any(
                self._grid[r][c].has_bomb for r, c in self.neighbors(row, col)
            )

        if self._all_neighbors_have_bombs(row, col):
            return False
        # Tentatively place the bomb to see whether it encloses a neighbor.
        cell.has_bomb = True
        try:
            return not any(
                self._grid[r][c].has_bomb and self._all_neighbors_have_bombs(r, c)
                for r, c in self.neighbors(row, col)
            )
        finally:
            cell.has_bomb = False

    def _all_neighbors_have_bombs(self, row: int, col: int) -> bool:
        return all(
            self._grid[r][c].has_bomb for r, c in self.neighbors(row, col)
        )

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def neighbors(self, row: int, col: int) -> Iterator[Tuple[int, int]]:
        """
        Yield neighboring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Yields:
            (row, col) tuples of up to 8 neighbors, clipped at the edges.
        """
        last = self.config.size - 1
        for neighbor_row in range(max(row - 1, 0), min(row + 1, last) + 1):
            for neighbor_col in range(max(col - 1, 0), min(col + 1, last) + 1):
                if neighbor_row == row and neighbor_col == col:
                    continue
                yield neighbor_row, neighbor_col

    def count_adjacent_bombs(self, row: int, col: int) -> int:
        """Count bombs adjacent to a specific cell."""
        self._check_position(row, col)
        return self._adjacent_bombs(row, col)

    def _adjacent_bombs(self, row: int, col: int) -> int:
        return sum(
            1 for r, c in self.neighbors(row, col) if self._grid[r][c].has_bomb
        )

    def _is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.config.size and 0 <= col < self.config.size

    def _check_position(self, row: int, col: int) -> None:
        if not self._is_valid_position(row, col):
            raise OutOfBoundsError(row, col, self.config.size)

    def _positions(self) -> Iterator[Tuple[int, int]]:
        for row in range(self.config.size):
            for col in range(self.config.size):
                yield row, col

    # ========================================================================
    # Notifications
    # ========================================================================

    def _notify_cell_changed(self, row: int, col: int) -> None:
        if self.on_cell_changed is not None:
            self.on_cell_changed(row, col, self.get_cell_data(row, col))

    def _set_phase(self, phase: GamePhase) -> None:
        if phase == self._phase:
            return
        logger.debug("Game phase %s -> %s", self._phase.name, phase.name)
        self._phase = phase
        if self.on_phase_changed is not None:
            self.on_phase_changed(phase)

    def _start_if_ready(self) -> bool:
        """Move READY to RUNNING; report whether input is accepted."""
        if self._phase == GamePhase.READY:
            self._set_phase(GamePhase.RUNNING)
        return self._phase == GamePhase.RUNNING

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def open_cell(self, row: int, col: int) -> None:
        """
        Open the cell at the given position.

        A bomb ends the game as lost and reveals the whole board. A cell
        with no adjacent bombs opens its neighbors, cascading through the
        connected empty region. Ignored once the game is over.

        Args:
            row: Row index to open.
            col: Column index to open.

        Raises:
            OutOfBoundsError: If the position is outside the board.
        """
        self._check_position(row, col)
        if not self._start_if_ready():
            return

        cell = self._grid[row][col]
        if not cell.open_or_detonate():
            return
        self._notify_cell_changed(row, col)

        if cell.state == CellState.DETONATED:
            self._set_loss()
            return

        self._flood_open(row, col)
        self._set_win_if_needed()

    def _flood_open(self, row: int, col: int) -> None:
        """Open neighbors of empty cells starting from an opened cell."""
        stack = [(row, col)]
        while stack:
            current_row, current_col = stack.pop()
            if self._adjacent_bombs(current_row, current_col):
                continue
            for neighbor_row, neighbor_col in self.neighbors(
                current_row, current_col
            ):
                if self._grid[neighbor_row][neighbor_col].open_or_detonate():
                    self._notify_cell_changed(neighbor_row, neighbor_col)
                    stack.append((neighbor_row, neighbor_col))

    def toggle_flag(self, row: int, col: int) -> None:
        """
        Toggle the bomb flag on a cell.

        Args:
            row: Row index.
            col: Column index.

        Raises:
            OutOfBoundsError: If the position is outside the board.
        """
        self._check_position(row, col)
        if not self._start_if_ready():
            return
        if not self._grid[row][col].toggle_flag():
            return
        self._notify_cell_changed(row, col)
        self._set_win_if_needed()

    def _set_loss(self) -> None:
        """Reveal every cell, detonating all bombs, and lose the game."""
        for row, col in self._positions():
            if self._grid[row][col].open_or_detonate():
                self._notify_cell_changed(row, col)
        self._set_phase(GamePhase.LOST)

    def _set_win_if_needed(self) -> None:
        """Win when nothing is closed and every flag marks a bomb."""
        if self._phase != GamePhase.RUNNING:
            return
        for row, col in self._positions():
            cell = self._grid[row][col]
            if cell.is_closed or (cell.is_flagged and not cell.has_bomb):
                return

        for row, col in self._positions():
            if self._grid[row][col].open_or_defuse():
                self._notify_cell_changed(row, col)
        self._set_phase(GamePhase.WON)

    def restart(self) -> None:
        """Close every cell, re-place bombs and return to READY."""
        self._reset_cells()
        self._place_bombs()
        self._set_phase(GamePhase.READY)

    def set_bombs(self, positions: Iterable[Tuple[int, int]]) -> None:
        """
        Restart with bombs at exactly the given positions.

        Bypasses the random source and the placement rule, which makes
        hand-built scenarios reproducible.

        Args:
            positions: (row, col) tuples to hold bombs.

        Raises:
            OutOfBoundsError: If a position is outside the board.
        """
        positions = list(positions)
        for row, col in positions:
            self._check_position(row, col)

        self._reset_cells()
        for row, col in positions:
            self._grid[row][col].has_bomb = True
        self._bombs_placed = sum(
            1 for row, col in self._positions() if self._grid[row][col].has_bomb
        )
        self._set_phase(GamePhase.READY)

    def _reset_cells(self) -> None:
        for row, col in self._positions():
            if self._grid[row][col].reset():
                self._notify_cell_changed(row, col)

    def seed(self, value: Optional[int]) -> None:
        """Reseed the random source used for bomb placement."""
        self.rng.seed(value)

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def size(self) -> int:
        """Side length of the grid."""
        return self.config.size

    @property
    def bomb_count(self) -> int:
        """Number of bombs actually placed."""
        return self._bombs_placed

    @property
    def flag_count(self) -> int:
        """Number of cells currently flagged."""
        return sum(
            1 for row, col in self._positions() if self._grid[row][col].is_flagged
        )

    @property
    def phase(self) -> GamePhase:
        """Get current game phase."""
        return self._phase

    @property
    def is_ready(self) -> bool:
        """Check if no move has been made yet."""
        return self._phase == GamePhase.READY

    @property
    def is_running(self) -> bool:
        """Check if game is in progress."""
        return self._phase == GamePhase.RUNNING

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self._phase == GamePhase.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self._phase == GamePhase.LOST

    @property
    def is_over(self) -> bool:
        """Check if game has ended."""
        return self._phase in (GamePhase.WON, GamePhase.LOST)

    def get_cell(self, row: int, col: int) -> Cell:
        """Get cell at position."""
        self._check_position(row, col)
        return self._grid[row][col]

    def get_cell_data(self, row: int, col: int) -> CellData:
        """
        Get the externally visible data of a cell.

        The adjacent bomb count is only exposed for opened cells.

        Raises:
            OutOfBoundsError: If the position is outside the board.
        """
        cell = self.get_cell(row, col)
        if cell.state == CellState.OPENED:
            return CellData(cell.state, self._adjacent_bombs(row, col))
        return CellData(cell.state)

    def get_valid_actions(self) -> List[Tuple[int, int]]:
        """
        Get list of cells that can still be opened.

        Returns:
            List of (row, col) positions that are closed or flagged.
        """
        return [
            (row, col)
            for row, col in self._positions()
            if self._grid[row][col].state
            in (CellState.CLOSED, CellState.FLAGGED_AS_BOMB)
        ]
