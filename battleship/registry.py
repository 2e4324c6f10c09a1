# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Ship registry: per-instance sections and hits.

Built from the placement result so that two ships of the same class are
always told apart by the cells they were placed on.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, NamedTuple, Optional, Set

from battleship.board import Coordinate, ShipClass
from battleship.placement import PlacedShip


class ShipKey(NamedTuple):
    """Identifies a ship instance: its class and ordinal within that class."""
    ship_class: ShipClass
    ordinal: int

    @property
    def label(self) -> str:
        return f"{self.ship_class.name.title()} ship #{self.ordinal + 1}"


@dataclass
class Ship:
    """Represents a ship instance on the board."""
    key: ShipKey
    sections: List[Coordinate] = field(default_factory=list)
    hits: Set[Coordinate] = field(default_factory=set)

    @property
    def is_sunk(self) -> bool:
        """Check if all sections have been hit."""
        return len(self.hits) == len(self.sections)

    def hit(self, position: Coordinate) -> bool:
        """Record a hit at the given position. Returns True if it is a new hit."""
        if position not in self.sections:
            raise ValueError(f"{position} is not a section of {self.key.label}")
        if position in self.hits:
            return False
        self.hits.add(position)
        return True


class ShipRegistry:
    """Tracks every placed ship instance and which of its sections are hit."""

    def __init__(self, placed_ships: Iterable[PlacedShip]):
        self.ships: Dict[ShipKey, Ship] = {}
        self._ship_positions: Dict[Coordinate, Ship] = {}

        for placed in placed_ships:
            key = ShipKey(placed.ship_class, placed.ordinal)
            if key in self.ships:
                raise ValueError(f"Duplicate ship instance {key}")
            ship = Ship(key=key, sections=list(placed.coordinates))
            for pos in ship.sections:
                if pos in self._ship_positions:
                    raise ValueError(f"{key.label} overlaps another ship at {pos}")
                self._ship_positions[pos] = ship
            self.ships[key] = ship

    def register_hit(self, key: ShipKey, coord: Coordinate) -> bool:
        return self.ships[key].hit(Coordinate(*coord))

    def is_sunk(self, key: ShipKey) -> bool:
        return self.ships[key].is_sunk

    def ship_at(self, coord: Coordinate) -> Optional[Ship]:
        """Ship occupying ``coord``, or None for water."""
        return self._ship_positions.get(Coordinate(*coord))

    def is_hit(self, coord: Coordinate) -> bool:
        ship = self.ship_at(coord)
        return ship is not None and Coordinate(*coord) in ship.hits

    def is_class_cleared(self, ship_class: ShipClass) -> bool:
        """True once every instance of ``ship_class`` is sunk."""
        return all(ship.is_sunk for key, ship in self.ships.items() if key.ship_class is ship_class)

    def remaining_classes(self) -> Set[ShipClass]:
        """Ship classes that still have at least one unsunk instance."""
        return {key.ship_class for key, ship in self.ships.items() if not ship.is_sunk}

    def all_sunk(self) -> bool:
        return all(ship.is_sunk for ship in self.ships.values())

    def __len__(self) -> int:
        return len(self.ships)
