# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Console Battleship game core module.
"""

from .battleship_game import BattleshipGame, GuessOutcome, GuessResult
from .board import Board, CellState, Coordinate, ShipClass
from .placement import PlacementInfeasible, ShipSpec

__all__ = [
    'BattleshipGame',
    'GuessOutcome',
    'GuessResult',
    'Board',
    'CellState',
    'Coordinate',
    'ShipClass',
    'PlacementInfeasible',
    'ShipSpec',
]
