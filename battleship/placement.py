# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Ship placement for the console Battleship game.

Ships are placed one at a time in the order given. Each placement
samples an orientation and a start position at random and retries on
overlap; once the retry budget is spent, the remaining valid slots are
enumerated and one is picked uniformly so placement always terminates.
"""

import logging
import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from battleship.board import Board, Coordinate, ShipClass


logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 1000


class PlacementInfeasible(RuntimeError):
    """Raised when a ship has no free slot left on the board."""


@dataclass(frozen=True)
class ShipSpec:
    """How many ships of a given length to place."""
    length: int
    count: int

    @property
    def ship_class(self) -> ShipClass:
        return ShipClass.from_length(self.length)


@dataclass(frozen=True)
class PlacedShip:
    """Placement result for one ship instance."""
    ship_class: ShipClass
    ordinal: int
    coordinates: List[Coordinate]


def ship_coordinates(start: Coordinate, length: int, horizontal: bool) -> List[Coordinate]:
    """Cells covered by a ship starting at ``start``."""
    row, col = start
    if horizontal:
        return [Coordinate(row, col + i) for i in range(length)]
    return [Coordinate(row + i, col) for i in range(length)]


def _candidate_slots(board: Board, length: int) -> List[List[Coordinate]]:
    """Every slot of ``length`` cells that is currently free."""
    slots = []
    for horizontal in (True, False):
        max_row = board.size if horizontal else board.size - length + 1
        max_col = board.size - length + 1 if horizontal else board.size
        for row in range(max(max_row, 0)):
            for col in range(max(max_col, 0)):
                coords = ship_coordinates(Coordinate(row, col), length, horizontal)
                if board.can_place(coords):
                    slots.append(coords)
    return slots


def place_ship(
    board: Board,
    ship_class: ShipClass,
    rng: random.Random,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> List[Coordinate]:
    """
    Place a single ship at a random free slot.

    Args:
        board: Board to mutate.
        ship_class: Class of the ship to place.
        rng: Random source.
        max_attempts: Rejection-sampling attempts before falling back to
            enumerating free slots.

    Returns:
        The ordered coordinates the ship occupies.

    Raises:
        PlacementInfeasible: If no free slot exists.
    """
    length = ship_class.length
    if length <= board.size:
        for attempt in range(1, max_attempts + 1):
            horizontal = rng.random() < 0.5
            row = rng.randrange(board.size if horizontal else board.size - length + 1)
            col = rng.randrange(board.size - length + 1 if horizontal else board.size)
            coords = ship_coordinates(Coordinate(row, col), length, horizontal)

            if board.can_place(coords):
                board.place_ship(coords, ship_class)
                logger.debug(f"Placed {ship_class.name} ship at {coords} after {attempt} attempt(s)")
                return coords

        logger.debug(f"Rejection sampling exhausted for {ship_class.name} ship, scanning free slots")

    slots = _candidate_slots(board, length)
    if not slots:
        raise PlacementInfeasible(
            f"No room for a {ship_class.name} ship of length {length} "
            f"on a {board.size}x{board.size} board"
        )

    coords = rng.choice(slots)
    board.place_ship(coords, ship_class)
    logger.debug(f"Placed {ship_class.name} ship at {coords} from {len(slots)} free slot(s)")
    return coords


def place_all_ships(
    board: Board,
    specs: Sequence[ShipSpec],
    rng: Optional[random.Random] = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> List[PlacedShip]:
    """
    Place every ship described by ``specs`` in order.

    Returns:
        One PlacedShip per instance, ordinals counted per ship class.
    """
    rng = rng or random.Random()
    ordinals: Dict[ShipClass, int] = {}
    placed = []

    for spec in specs:
        if spec.count < 1:
            raise ValueError(f"Ship count must be positive, got {spec.count}")
        ship_class = spec.ship_class
        for _ in range(spec.count):
            coords = place_ship(board, ship_class, rng, max_attempts)
            ordinal = ordinals.get(ship_class, 0)
            ordinals[ship_class] = ordinal + 1
            placed.append(PlacedShip(ship_class=ship_class, ordinal=ordinal, coordinates=coords))

    return placed


def place_ships_deterministic(board: Board, placements: List[dict]) -> List[PlacedShip]:
    """
    Place ships at explicit positions.

    Args:
        board: Empty board to mutate.
        placements: Dicts with 'length' (2 or 3), 'start' (Coordinate or
            (row, col)) and 'horizontal' (bool).

    Raises:
        ValueError: If a ship goes out of bounds or overlaps another ship.
    """
    ordinals: Dict[ShipClass, int] = {}
    placed = []

    for placement in placements:
        ship_class = ShipClass.from_length(placement["length"])
        start = Coordinate(*placement["start"])
        coords = ship_coordinates(start, ship_class.length, placement["horizontal"])

        for row, col in coords:
            if not board.is_within_bounds(row, col):
                raise ValueError(f"{ship_class.name} ship at {start} goes out of bounds")
        if not board.can_place(coords):
            raise ValueError(f"{ship_class.name} ship at {start} overlaps with another ship")

        board.place_ship(coords, ship_class)
        ordinal = ordinals.get(ship_class, 0)
        ordinals[ship_class] = ordinal + 1
        placed.append(PlacedShip(ship_class=ship_class, ordinal=ordinal, coordinates=coords))

    return placed
