# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Battleship game logic module.

Provides the game state engine for console Battleship:
- Guess resolution with hit/sunk/miss/repeat detection
- The game session state machine (setup, playing, won, quit)
- Coordinate parsing and formatting
- Game statistics
"""

import logging
import random
import string
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence, Set

from battleship.board import Board, CellState, Coordinate, ShipClass
from battleship.placement import (
    DEFAULT_MAX_ATTEMPTS,
    PlacedShip,
    ShipSpec,
    place_all_ships,
    place_ships_deterministic,
)
from battleship.registry import ShipKey, ShipRegistry


logger = logging.getLogger(__name__)

# Ships placed for each supported board size
SHIPS_BY_SIZE: Dict[int, List[ShipSpec]] = {
    4: [ShipSpec(length=2, count=1), ShipSpec(length=3, count=1)],
    5: [ShipSpec(length=2, count=2), ShipSpec(length=3, count=1)],
    6: [ShipSpec(length=2, count=2), ShipSpec(length=3, count=2)],
}

BOARD_SIZES = sorted(SHIPS_BY_SIZE)
QUIT_TOKEN = "exit"
ROW_LABELS = string.ascii_uppercase


class GuessOutcome(Enum):
    """Result of a single guess."""
    HIT = "hit"
    HIT_AND_SUNK = "hit_and_sunk"
    MISS = "miss"
    ALREADY_GUESSED = "already_guessed"
    INVALID_INPUT = "invalid_input"


OUTCOME_MESSAGES = {
    GuessOutcome.HIT: "Hit!",
    GuessOutcome.HIT_AND_SUNK: "Hit and sunk!",
    GuessOutcome.MISS: "Miss.",
    GuessOutcome.ALREADY_GUESSED: "Already guessed that location.",
    GuessOutcome.INVALID_INPUT: "Invalid coordinates. Try again.",
}


class GamePhase(Enum):
    """Lifecycle phase of a game session."""
    SETUP = "setup"
    PLAYING = "playing"
    WON = "won"
    QUIT = "quit"


@dataclass
class GuessResult:
    """Outcome of a guess plus what it touched."""
    outcome: GuessOutcome
    coordinate: Optional[Coordinate] = None
    ship: Optional[ShipKey] = None
    class_cleared: bool = False

    @property
    def valid(self) -> bool:
        """Whether the guess changed the game state."""
        return self.outcome in (GuessOutcome.HIT, GuessOutcome.HIT_AND_SUNK, GuessOutcome.MISS)

    @property
    def message(self) -> str:
        return OUTCOME_MESSAGES[self.outcome]


@dataclass
class GameState:
    """Everything one game owns: board, ships, revealed cells, remaining classes."""
    board: Board
    registry: ShipRegistry
    revealed: Set[Coordinate] = field(default_factory=set)
    remaining: Set[ShipClass] = field(default_factory=set)

    @classmethod
    def from_placement(cls, board: Board, placed_ships: Sequence[PlacedShip]) -> "GameState":
        registry = ShipRegistry(placed_ships)
        return cls(board=board, registry=registry, remaining=registry.remaining_classes())


def resolve_guess(state: GameState, coord: Coordinate) -> GuessResult:
    """
    Resolve a guess at an in-bounds coordinate and update ``state``.

    Args:
        state: Game state to mutate.
        coord: Target cell, already validated to be on the board.

    Returns:
        GuessResult describing the outcome.
    """
    coord = Coordinate(*coord)
    if not state.board.is_within_bounds(*coord):
        raise ValueError(f"{coord} is outside the board")

    cell = state.board.cell_state(*coord)

    if cell is CellState.MISS or state.registry.is_hit(coord):
        return GuessResult(GuessOutcome.ALREADY_GUESSED, coordinate=coord)

    if cell.is_ship:
        ship = state.registry.ship_at(coord)
        state.registry.register_hit(ship.key, coord)
        state.revealed.add(coord)

        if not ship.is_sunk:
            return GuessResult(GuessOutcome.HIT, coordinate=coord, ship=ship.key)

        cleared = state.registry.is_class_cleared(ship.key.ship_class)
        if cleared:
            state.remaining.discard(ship.key.ship_class)
        return GuessResult(
            GuessOutcome.HIT_AND_SUNK,
            coordinate=coord,
            ship=ship.key,
            class_cleared=cleared,
        )

    state.board.mark_miss(*coord)
    state.revealed.add(coord)
    return GuessResult(GuessOutcome.MISS, coordinate=coord)


class BattleshipGame:
    """
    Single game session.

    The board is N x N with rows labeled from 'A' and columns from 1.
    Ships are placed when the game is created; the player guesses until
    every ship is sunk or quits.
    """

    def __init__(
        self,
        size: int = 4,
        seed: Optional[int] = None,
        ships: Optional[Dict[int, List[ShipSpec]]] = None,
        max_placement_attempts: int = DEFAULT_MAX_ATTEMPTS,
        quit_token: str = QUIT_TOKEN,
    ):
        """
        Initialize a new game.

        Args:
            size: Board size, one of the sizes in the ship table.
            seed: Random seed for reproducible ship placement.
            ships: Ship table keyed by board size (defaults to SHIPS_BY_SIZE).
            max_placement_attempts: Random attempts per ship before placement
                falls back to scanning free slots.
            quit_token: Input that ends the game.
        """
        ships = ships or SHIPS_BY_SIZE
        if size not in ships:
            raise ValueError(f"Unsupported board size {size}. Choose from {sorted(ships)}.")
        if size > len(ROW_LABELS):
            raise ValueError(f"Board size {size} exceeds {len(ROW_LABELS)} row labels")

        self.size = size
        self.seed = seed
        self.rng = random.Random(seed)
        self.ship_specs = list(ships[size])
        self.max_placement_attempts = max_placement_attempts
        self.quit_token = quit_token.lower()
        self.phase = GamePhase.SETUP

        # Game statistics
        self.shots_fired = 0
        self.hits = 0
        self.misses = 0

        self._setup()

    @property
    def board(self) -> Board:
        return self.state.board

    @property
    def registry(self) -> ShipRegistry:
        return self.state.registry

    @property
    def revealed(self) -> Set[Coordinate]:
        return self.state.revealed

    @property
    def remaining(self) -> Set[ShipClass]:
        return self.state.remaining

    def _setup(self) -> None:
        board = Board(self.size)
        placed = place_all_ships(board, self.ship_specs, self.rng, self.max_placement_attempts)
        self._start(board, placed)

    def _start(self, board: Board, placed: List[PlacedShip]) -> None:
        self.state = GameState.from_placement(board, placed)
        self.phase = GamePhase.PLAYING
        logger.info(
            f"Game started on {self.size}x{self.size} board with {len(self.registry)} ship(s)"
        )

    def place_ships_deterministic(self, placements: List[dict]) -> None:
        """
        Replace the random layout with ships at specific positions.

        Args:
            placements: List of dicts with 'length' (2 or 3), 'start'
                (e.g., 'A1') and 'horizontal' (bool).
        """
        if self.phase is not GamePhase.PLAYING or self.shots_fired:
            raise RuntimeError("Ships can only be re-placed before the first shot of a game in play")
        if not placements:
            raise ValueError("At least one ship must be placed")

        board = Board(self.size)
        placed = place_ships_deterministic(board, [
            dict(placement, start=self.parse_coordinate(placement["start"]))
            for placement in placements
        ])
        self._start(board, placed)

    def parse_coordinate(self, coord: str) -> Coordinate:
        """
        Parse a coordinate string like 'A1' into (row, col).

        Args:
            coord: Coordinate string, case-insensitive.

        Returns:
            Coordinate with 0-based row and col.

        Raises:
            ValueError: If the coordinate is malformed or off the board.
        """
        coord = coord.strip().upper()

        if len(coord) < 2:
            raise ValueError(f"Invalid coordinate format: {coord!r}")

        row_char = coord[0]
        col_str = coord[1:]
        row_labels = ROW_LABELS[:self.size]

        if row_char not in row_labels:
            raise ValueError(f"Invalid row '{row_char}'. Must be A-{row_labels[-1]}.")

        if not (col_str.isascii() and col_str.isdigit()):
            raise ValueError(f"Invalid column '{col_str}'. Must be 1-{self.size}.")

        col_num = int(col_str)
        if not (1 <= col_num <= self.size):
            raise ValueError(f"Column {col_num} out of range. Must be 1-{self.size}.")

        return Coordinate(row_labels.index(row_char), col_num - 1)

    def format_coordinate(self, row: int, col: int) -> str:
        """Convert (row, col) indices to a coordinate string like 'A1'."""
        return f"{ROW_LABELS[row]}{col + 1}"

    def is_quit_command(self, line: str) -> bool:
        return line.strip().lower() == self.quit_token

    def submit(self, line: str) -> Optional[GuessResult]:
        """
        Handle one line of player input.

        Returns:
            The GuessResult, or None if the line was the quit token.
        """
        if self.is_quit_command(line):
            self.quit()
            return None
        return self.make_shot(line)

    def make_shot(self, coord: str) -> GuessResult:
        """
        Make a shot at the given coordinate string.

        Invalid and repeated guesses leave the game state untouched.
        """
        if self.phase is not GamePhase.PLAYING:
            raise RuntimeError(f"Cannot shoot, game is {self.phase.value}")

        try:
            target = self.parse_coordinate(coord)
        except ValueError as e:
            logger.debug(f"Rejected guess {coord!r}: {e}")
            return GuessResult(GuessOutcome.INVALID_INPUT)

        result = resolve_guess(self.state, target)
        if not result.valid:
            return result

        self.shots_fired += 1
        if result.outcome is GuessOutcome.MISS:
            self.misses += 1
        else:
            self.hits += 1

        if result.outcome is GuessOutcome.HIT_AND_SUNK:
            logger.info(f"{result.ship.label} sunk at {self.format_coordinate(*target)}")

        if not self.remaining:
            self.phase = GamePhase.WON
            self.reveal_all()
            logger.info(f"Game won after {self.shots_fired} shots")

        return result

    def quit(self) -> None:
        if self.phase is GamePhase.PLAYING:
            self.phase = GamePhase.QUIT
            logger.info(f"Game quit after {self.shots_fired} shots")

    def reveal_all(self) -> None:
        """Disclose every cell to the renderer."""
        self.revealed.update(self.board.coordinates())

    def is_game_over(self) -> bool:
        """Check if the game reached a terminal phase."""
        return self.phase in (GamePhase.WON, GamePhase.QUIT)

    def is_won(self) -> bool:
        return self.phase is GamePhase.WON

    def get_game_status(self) -> dict:
        """
        Get current game status.

        Returns:
            Dict with game statistics and status.
        """
        ships = list(self.registry.ships.values())
        ships_sunk = sum(1 for ship in ships if ship.is_sunk)

        return {
            "phase": self.phase.value,
            "game_over": self.is_game_over(),
            "ships_remaining": len(ships) - ships_sunk,
            "ships_sunk": ships_sunk,
            "total_ships": len(ships),
            "shots_fired": self.shots_fired,
            "hits": self.hits,
            "misses": self.misses,
            "accuracy": self.hits / self.shots_fired if self.shots_fired else 0.0,
            "sunk_ships": [ship.key.label for ship in ships if ship.is_sunk],
        }
