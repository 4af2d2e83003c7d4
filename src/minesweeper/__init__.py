"""
Minesweeper game module.

Provides core game logic including board management and cell state.
"""
from .cell import Cell, CellState
from .board import (
    Board,
    BoardConfig,
    CellData,
    GamePhase,
    OutOfBoundsError,
    PlacementRule,
)
from .environment import MinesweeperEnv, make_vec_env

__all__ = [
    "Cell",
    "CellState",
    "Board",
    "BoardConfig",
    "CellData",
    "GamePhase",
    "OutOfBoundsError",
    "PlacementRule",
    "MinesweeperEnv",
    "make_vec_env",
]
