#!/usr/bin/env python3
# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Interactive Battleship client.

Lets a human pick a board size and play a game in the terminal.
"""

import argparse
import logging
from typing import Callable, Dict, List, Optional, Sequence

from battleship.battleship_game import BattleshipGame, GuessOutcome
from battleship.config import load_config, setup_logging, ship_table
from battleship.render import TITLE_BANNER, VICTORY_BANNER, render_board


logger = logging.getLogger(__name__)

CLEAR_SCREEN = "\033[2J\033[H"

ReadLine = Callable[[str], str]
Write = Callable[[str], None]


def print_help(write: Write, quit_token: str) -> None:
    """Print help message."""
    write(f"""
Battleship Commands:
  <coordinate>  - Fire at coordinate (e.g., A1, B3)
  status        - Show game status
  help          - Show this help
  {quit_token:<13} - Exit game

Coordinate format: Letter (row) + Number (column)
""")


def choose_board_size(sizes: Sequence[int], read_line: ReadLine, write: Write) -> Optional[int]:
    """
    Ask the player to pick one of ``sizes`` from a numbered menu.

    Returns:
        The chosen size, or None if the player cancels.
    """
    for index, size in enumerate(sizes, start=1):
        write(f"[{index}] {size}x{size}")
    write("[0] CANCEL\n")

    choices = ", ".join(str(i) for i in range(1, len(sizes) + 1))
    while True:
        try:
            answer = read_line(f"Choose grid size [{choices}, 0]: ").strip()
        except (KeyboardInterrupt, EOFError):
            return None

        if answer == "0":
            return None
        if answer.isdecimal() and 1 <= int(answer) <= len(sizes):
            return sizes[int(answer) - 1]
        write(f"Please enter one of {choices} or 0 to cancel.")


def play(
    game: BattleshipGame,
    glyphs: Dict[str, str],
    read_line: ReadLine = input,
    write: Write = print,
    clear_screen: bool = True,
) -> None:
    """Run the turn loop until the game is won or the player quits."""

    def clear() -> None:
        if clear_screen:
            write(CLEAR_SCREEN)

    clear()
    write("Grid created. Here is your empty grid:")
    write(render_board(game.board, set(), glyphs))
    write("\nLet's start the game!")

    message = ""
    while not game.is_game_over():
        clear()
        write(render_board(game.board, game.revealed, glyphs))
        write(message)
        message = ""

        try:
            line = read_line(f'Enter coordinates (e.g., A1) or type "{game.quit_token}" to quit: ')
        except (KeyboardInterrupt, EOFError):
            game.quit()
            write("\nGoodbye!")
            return

        command = line.strip().lower()
        if command == "help":
            print_help(write, game.quit_token)
            continue
        if command == "status":
            status = game.get_game_status()
            message = (
                f"Ships remaining: {status['ships_remaining']}/{status['total_ships']} | "
                f"Shots: {status['shots_fired']} | Hits: {status['hits']} | "
                f"Misses: {status['misses']}"
            )
            continue

        result = game.submit(line)
        if result is None:
            write("Exiting game...")
            return

        message = result.message
        if result.outcome is GuessOutcome.HIT_AND_SUNK and result.class_cleared:
            message += f" All {result.ship.ship_class.name.lower()} ships destroyed."

    clear()
    write(VICTORY_BANNER)
    write(render_board(game.board, game.revealed, glyphs))

    status = game.get_game_status()
    write(f"\nShots fired: {status['shots_fired']}")
    write(f"Accuracy: {status['accuracy'] * 100:.1f}%")


def run(
    args: argparse.Namespace,
    read_line: ReadLine = input,
    write: Write = print,
) -> None:
    """Load config, set up a game from ``args`` and play it."""
    config = load_config(args.config)
    setup_logging(config, verbose=args.verbose)

    ships = ship_table(config)
    sizes = sorted(ships)

    write(TITLE_BANNER)

    size = args.size
    if size is None:
        size = choose_board_size(sizes, read_line, write)
    if size is None:
        write("Exiting...")
        return
    if size not in ships:
        write(f"Unsupported grid size {size}. Choose from {sizes}.")
        return

    game = BattleshipGame(
        size=size,
        seed=args.seed,
        ships=ships,
        max_placement_attempts=config['game']['max_placement_attempts'],
        quit_token=config['game']['quit_token'],
    )
    logger.debug(f"Game initialized (size: {size}, seed: {args.seed})")

    play(
        game,
        config['display']['glyphs'],
        read_line=read_line,
        write=write,
        clear_screen=config['display']['clear_screen'] and not args.no_clear,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play console Battleship")
    parser.add_argument(
        '--size',
        type=int,
        default=None,
        help='Board size (skips the size menu)'
    )
    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help='Random seed for reproducible ship placement'
    )
    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help='Path to a YAML configuration file'
    )
    parser.add_argument(
        '--no-clear',
        action='store_true',
        help='Do not clear the screen between turns'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable debug logging'
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Run interactive Battleship game."""
    args = build_parser().parse_args(argv)
    run(args)


if __name__ == "__main__":
    main()
