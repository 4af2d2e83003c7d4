"""
Gymnasium environment wrapper for Minesweeper.

Provides a standard RL interface on top of the board, keeping its
observation in sync through the board's change notifications.
"""
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import Board, BoardConfig, CellData, GamePhase


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D array where:
        - -1 = closed cell
        - -2 = flagged cell
        - 0-8 = opened cell with adjacent bomb count
        - 9 = detonated bomb
        - 10 = defused bomb

    Actions:
        Discrete action space of size 2 * size * size.
        Action i < size * size opens cell (i // size, i % size);
        the remaining actions toggle the flag on the same layout.

    Rewards:
        - +1 for opening a safe cell
        - 0 for toggling a flag
        - +10 for winning the game
        - -10 for hitting a bomb
        - -0.1 for an action that changes nothing
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Board configuration (default: 9x9 with 10 bombs).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or BoardConfig()
        self.render_mode = render_mode
        size = self.config.size

        self._observation = np.full((size, size), -1, dtype=np.int8)
        self._changed_cells = 0
        self._phase_changes = []

        self.board = Board(
            self.config,
            on_cell_changed=self._on_cell_changed,
            on_phase_changed=self._on_phase_changed,
        )

        self.observation_space = spaces.Box(
            low=-2,
            high=10,
            shape=(size, size),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(2 * size * size)

        self._steps = 0

    # ========================================================================
    # Board Notifications
    # ========================================================================

    def _on_cell_changed(self, row: int, col: int, data: CellData) -> None:
        self._observation[row, col] = data.to_observation()
        self._changed_cells += 1

    def _on_phase_changed(self, phase: GamePhase) -> None:
        self._phase_changes.append(phase)

    def _resync_observation(self) -> None:
        """Rebuild the observation from the board's read accessor."""
        for row in range(self.config.size):
            for col in range(self.config.size):
                data = self.board.get_cell_data(row, col)
                self._observation[row, col] = data.to_observation()

    # ========================================================================
    # Gymnasium API
    # ========================================================================

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for reproducible bomb placement.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        if seed is not None:
            self.board.seed(seed)
        self.board.restart()
        self._resync_observation()
        self._steps = 0
        self._phase_changes = []

        return self._observation.copy(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Open or flag action index.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        self._steps += 1
        reward = self._apply_action(int(action))

        terminated = self.board.is_over
        truncated = False

        return (
            self._observation.copy(),
            reward,
            terminated,
            truncated,
            self._get_info(),
        )

    def _action_to_position(self, action: int) -> Tuple[bool, int, int]:
        """Convert action index to (is_flag, row, col)."""
        cells = self.config.size * self.config.size
        is_flag = action >= cells
        row, col = divmod(action % cells, self.config.size)
        return is_flag, row, col

    def _apply_action(self, action: int) -> float:
        """
        Apply an action to the board and compute its reward.

        Args:
            action: Action index.

        Returns:
            Reward value.
        """
        is_flag, row, col = self._action_to_position(action)
        self._changed_cells = 0

        if is_flag:
            self.board.toggle_flag(row, col)
        else:
            self.board.open_cell(row, col)

        if self._changed_cells == 0:
            return -0.1
        if self.board.is_won:
            return 10.0
        if self.board.is_lost:
            return -10.0
        if is_flag:
            return 0.0
        return 1.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        opened = int(np.count_nonzero(self._observation >= 0))

        return {
            "steps": self._steps,
            "opened": opened,
            "bombs": self.board.bomb_count,
            "flags": self.board.flag_count,
            "game_phase": self.board.phase.name,
            "phase_changes": [phase.name for phase in self._phase_changes],
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return self._render_ansi()
        if self.render_mode == "human":
            print(self._render_ansi())
        return None

    def _render_ansi(self) -> str:
        """Render board as ASCII string."""
        symbols = {-1: ".", -2: "F", 0: " ", 9: "*", 10: "+"}
        lines = []
        for row in range(self.config.size):
            row_str = ""
            for col in range(self.config.size):
                val = int(self._observation[row, col])
                row_str += symbols.get(val, str(val)) + " "
            lines.append(row_str)

        return "\n".join(lines)

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of actions that can change the board.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        if self.board.is_over:
            return mask
        cells = self.config.size * self.config.size
        flat = self._observation.flatten()
        mask[:cells] = flat < 0
        mask[cells:] = flat < 0
        return mask


# ============================================================================
# Vectorized Environment Factory
# ============================================================================

def make_vec_env(
    n_envs: int = 4,
    config: Optional[BoardConfig] = None,
    asynchronous: bool = True,
) -> gym.vector.VectorEnv:
    """
    Create a batch of Minesweeper environments sharing one configuration.

    Args:
        n_envs: Number of boards played side by side.
        config: Board configuration for every board.
        asynchronous: Run each board in its own worker process; when
            False all boards step in the calling process.

    Returns:
        Vectorized environment with observations of shape
        (n_envs, size, size).
    """
    config = config or BoardConfig()

    def make_env() -> MinesweeperEnv:
        return MinesweeperEnv(config=config)

    env_fns = [make_env for _ in range(n_envs)]
    if asynchronous:
        return gym.vector.AsyncVectorEnv(env_fns)
    return gym.vector.SyncVectorEnv(env_fns)
