#!/usr/bin/env python3
"""
Minesweeper - Main entry point.

Usage:
    python main.py play [--size N] [--bombs K] [--seed S]
    python main.py simulate [--games G] [--size N] [--bombs K] [--seed S]
"""
import argparse
import logging
import random
import sys

import numpy as np

from src.minesweeper import (
    Board,
    BoardConfig,
    CellData,
    CellState,
    GamePhase,
    MinesweeperEnv,
    OutOfBoundsError,
    PlacementRule,
)


HELP_TEXT = "Commands: o ROW COL (open), f ROW COL (flag), r (restart), q (quit)"

SYMBOLS = {
    CellState.CLOSED: ".",
    CellState.FLAGGED_AS_BOMB: "F",
    CellState.DETONATED: "*",
    CellState.DEFUSED: "+",
}


def setup_logging(verbose: bool) -> None:
    """Setup application logging."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def build_config(args: argparse.Namespace) -> BoardConfig:
    """Create a board configuration from command line arguments."""
    rule = PlacementRule[args.rule.upper().replace("-", "_")]
    return BoardConfig(size=args.size, bomb_count=args.bombs, placement_rule=rule)


def cell_symbol(data: CellData) -> str:
    """Text symbol for a cell."""
    if data.state == CellState.OPENED:
        return str(data.adjacent_bombs) if data.adjacent_bombs else " "
    return SYMBOLS[data.state]


def render_board(board: Board) -> str:
    """Render board as text with row and column indices."""
    header = "   " + " ".join(str(col % 10) for col in range(board.size))
    lines = [header]
    for row in range(board.size):
        cells = " ".join(
            cell_symbol(board.get_cell_data(row, col))
            for col in range(board.size)
        )
        lines.append(f"{row:>2} {cells}")
    return "\n".join(lines)


def play(args: argparse.Namespace) -> None:
    """Play an interactive game in the terminal."""
    logger = logging.getLogger(__name__)
    config = build_config(args)

    def on_phase_changed(phase: GamePhase) -> None:
        if phase == GamePhase.WON:
            print("*** WIN! ***")
        elif phase == GamePhase.LOST:
            print("*** LOST (hit a bomb) ***")

    board = Board(
        config,
        rng=random.Random(args.seed),
        on_phase_changed=on_phase_changed,
    )
    logger.info(
        "New %dx%d game with %d bombs", board.size, board.size, board.bomb_count
    )
    print(HELP_TEXT)

    while True:
        print(render_board(board))
        try:
            line = input("> ").strip().lower()
        except EOFError:
            break
        if not line:
            continue

        parts = line.split()
        command = parts[0]
        if command == "q":
            break
        if command == "r":
            board.restart()
            logger.info("Restarted with %d bombs", board.bomb_count)
            continue
        if command not in ("o", "f") or len(parts) != 3:
            print(HELP_TEXT)
            continue

        try:
            row, col = int(parts[1]), int(parts[2])
            if command == "o":
                board.open_cell(row, col)
            else:
                board.toggle_flag(row, col)
        except ValueError:
            print("Row and column must be integers")
        except OutOfBoundsError as e:
            print(e)


def simulate(args: argparse.Namespace) -> None:
    """Play random games through the environment and report results."""
    logger = logging.getLogger(__name__)
    config = build_config(args)
    env = MinesweeperEnv(config=config)
    rng = np.random.default_rng(args.seed)

    wins = 0
    losses = 0
    for game in range(args.games):
        seed = None if args.seed is None else args.seed + game
        obs, info = env.reset(seed=seed)
        cells = config.size * config.size
        done = False

        while not done:
            closed = np.flatnonzero(obs.flatten() == -1)
            if len(closed) == 0:
                break
            if len(closed) + info["flags"] == info["bombs"]:
                # Every remaining closed cell holds a bomb.
                action = cells + int(closed[0])
            else:
                action = int(rng.choice(closed))
            obs, _, terminated, truncated, info = env.step(action)
            done = terminated or truncated

        if info.get("game_phase") == GamePhase.WON.name:
            wins += 1
        else:
            losses += 1
        logger.debug("Game %d finished: %s", game + 1, info.get("game_phase"))

    print(f"Played {args.games} games on {config.size}x{config.size}")
    print(f"  Wins: {wins}")
    print(f"  Losses: {losses}")


def add_board_arguments(parser: argparse.ArgumentParser) -> None:
    """Add board configuration arguments to a subcommand parser."""
    parser.add_argument("--size", type=int, default=9, help="Board size (NxN)")
    parser.add_argument("--bombs", type=int, default=10, help="Number of bombs")
    parser.add_argument(
        "--rule",
        choices=["no-adjacent", "not-surrounded"],
        default="no-adjacent",
        help="Bomb adjacency rule used during placement",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(description="Minesweeper rule engine")
    parser.add_argument(
        "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    add_board_arguments(play_parser)

    simulate_parser = subparsers.add_parser(
        "simulate", help="Play random games and report results"
    )
    add_board_arguments(simulate_parser)
    simulate_parser.add_argument(
        "--games", type=int, default=100, help="Number of games to play"
    )

    args = parser.parse_args()
    setup_logging(args.verbose)

    try:
        if args.command == "play":
            play(args)
        elif args.command == "simulate":
            simulate(args)
        else:
            parser.print_help()
    except ValueError as e:
        parser.error(str(e))


if __name__ == "__main__":
    main()
