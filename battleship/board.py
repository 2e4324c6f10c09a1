# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Board representation for the console Battleship game.

The board is a square numpy array of cell state codes. It only stores
water, misses and which ship class occupies a cell; hit tracking for ship
cells lives in the ship registry.
"""

from enum import Enum, IntEnum
from typing import Iterable, Iterator, NamedTuple

import numpy as np


class Coordinate(NamedTuple):
    """Zero-based (row, col) position on the board."""
    row: int
    col: int


class ShipClass(Enum):
    """Supported ship classes. The value is the ship length."""
    SMALL = 2
    LARGE = 3

    @property
    def length(self) -> int:
        return self.value

    @property
    def cell_state(self) -> "CellState":
        return CellState.SMALL_SHIP if self is ShipClass.SMALL else CellState.LARGE_SHIP

    @classmethod
    def from_length(cls, length: int) -> "ShipClass":
        """Look up the ship class for a ship length."""
        try:
            return cls(length)
        except ValueError:
            raise ValueError(f"Unsupported ship length: {length}. Must be 2 or 3.")


class CellState(IntEnum):
    """State code stored in each board cell."""
    WATER = 0
    MISS = 1
    SMALL_SHIP = 2
    LARGE_SHIP = 3

    @property
    def is_ship(self) -> bool:
        return self in (CellState.SMALL_SHIP, CellState.LARGE_SHIP)

    @property
    def ship_class(self) -> ShipClass:
        if self is CellState.SMALL_SHIP:
            return ShipClass.SMALL
        if self is CellState.LARGE_SHIP:
            return ShipClass.LARGE
        raise ValueError(f"{self.name} cell holds no ship")


class Board:
    """
    N x N grid of cell states addressed by (row, col).

    Created all water, populated once by ship placement, then only
    mutated by turning water cells into misses.
    """

    def __init__(self, size: int):
        """
        Create an empty board.

        Args:
            size: Number of rows and columns.
        """
        self.size = size
        self.grid = np.full((size, size), CellState.WATER, dtype=np.int8)

    def is_within_bounds(self, row: int, col: int) -> bool:
        """Check whether (row, col) lies on the board."""
        return 0 <= row < self.size and 0 <= col < self.size

    def cell_state(self, row: int, col: int) -> CellState:
        """Return the state of the cell at (row, col)."""
        if not self.is_within_bounds(row, col):
            raise IndexError(f"Cell ({row}, {col}) is outside a {self.size}x{self.size} board")
        return CellState(int(self.grid[row, col]))

    def mark_miss(self, row: int, col: int) -> None:
        """Turn a water cell into a miss."""
        state = self.cell_state(row, col)
        if state is not CellState.WATER:
            raise ValueError(f"Cannot mark {state.name} cell ({row}, {col}) as a miss")
        self.grid[row, col] = CellState.MISS

    def can_place(self, coords: Iterable[Coordinate]) -> bool:
        """Check that every coordinate is on the board and still water."""
        return all(
            self.is_within_bounds(row, col) and self.grid[row, col] == CellState.WATER
            for row, col in coords
        )

    def place_ship(self, coords: Iterable[Coordinate], ship_class: ShipClass) -> None:
        """Mark the given cells as occupied by a ship of ``ship_class``."""
        coords = list(coords)
        if not self.can_place(coords):
            raise ValueError(f"Cannot place {ship_class.name} ship at {coords}")
        for row, col in coords:
            self.grid[row, col] = ship_class.cell_state

    def count(self, state: CellState) -> int:
        """Number of cells currently in ``state``."""
        return int(np.count_nonzero(self.grid == state))

    def coordinates(self) -> Iterator[Coordinate]:
        """Iterate over every coordinate in row-major order."""
        for row in range(self.size):
            for col in range(self.size):
                yield Coordinate(row, col)
