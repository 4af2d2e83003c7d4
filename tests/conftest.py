"""
Pytest configuration and shared fixtures.
"""
import random
import sys
from pathlib import Path
from typing import Callable, List, Optional, Tuple

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minesweeper import Board, BoardConfig, Cell, CellData, GamePhase


# ============================================================================
# Notification Recorder
# ============================================================================

class Recorder:
    """Collects board notifications in the order they were emitted."""

    def __init__(self) -> None:
        self.cells: List[Tuple[int, int, CellData]] = []
        self.phases: List[GamePhase] = []

    def on_cell_changed(self, row: int, col: int, data: CellData) -> None:
        self.cells.append((row, col, data))

    def on_phase_changed(self, phase: GamePhase) -> None:
        self.phases.append(phase)

    def clear(self) -> None:
        self.cells.clear()
        self.phases.clear()


@pytest.fixture
def recorder() -> Recorder:
    """Create an empty notification recorder."""
    return Recorder()


def make_board(
    size: int,
    bomb_count: int = 0,
    seed: int = 0,
    recorder: Optional[Recorder] = None,
    bombs: Optional[List[Tuple[int, int]]] = None,
) -> Board:
    """Create a seeded board, optionally wired to a recorder."""
    board = Board(BoardConfig(size, bomb_count), rng=random.Random(seed))
    if recorder is not None:
        board.on_cell_changed = recorder.on_cell_changed
        board.on_phase_changed = recorder.on_phase_changed
    if bombs is not None:
        board.set_bombs(bombs)
    if recorder is not None:
        recorder.clear()
    return board


@pytest.fixture
def board_factory(recorder: Recorder) -> Callable[..., Board]:
    """Factory for seeded boards wired to the shared recorder."""
    def factory(
        size: int,
        bomb_count: int = 0,
        seed: int = 0,
        bombs: Optional[List[Tuple[int, int]]] = None,
    ) -> Board:
        return make_board(size, bomb_count, seed, recorder, bombs)

    return factory


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_board() -> Board:
    """Create a seeded default 9x9 board."""
    return Board(rng=random.Random(42))


@pytest.fixture
def empty_board() -> Board:
    """Create a 5x5 board with no bombs for cascade testing."""
    return make_board(5)


@pytest.fixture
def center_bomb_board(recorder: Recorder) -> Board:
    """Create a 3x3 board with a single bomb in the middle."""
    return make_board(3, 1, recorder=recorder, bombs=[(1, 1)])


@pytest.fixture
def corner_bomb_board(recorder: Recorder) -> Board:
    """Create a 3x3 board with a single bomb in the top-left corner."""
    return make_board(3, 1, recorder=recorder, bombs=[(0, 0)])


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def closed_cell() -> Cell:
    """Create a closed cell."""
    return Cell()


@pytest.fixture
def bomb_cell() -> Cell:
    """Create a cell containing a bomb."""
    return Cell(has_bomb=True)
