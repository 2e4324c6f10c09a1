# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Text rendering of the board.

A cell shows its true content only once revealed. Misses are always shown;
every other cell looks like water.
"""

from typing import Dict, Iterable, Optional

from battleship.board import Board, CellState, Coordinate
from battleship.battleship_game import ROW_LABELS
from battleship.config import DEFAULT_CONFIG


CELL_WIDTH = 4

TITLE_BANNER = r"""
    _____       ___   _____   _____   _       _____   _____   _   _   _   _____
   |  _  |     /   | |_   _| |_   _| | |     | ____| /  ___/ | | | | | | |  _  |
   | |_| |    / /| |   | |     | |   | |     | |__   | |___  | |_| | | | | |_| |
   |  _ {    / / | |   | |     | |   | |     |  __|  |___    |  _  | | | |  ___/
   | |_| |  / /  | |   | |     | |   | |___  | |___   ___| | | | | | | | | |
   |_____/ /_/   |_|   |_|     |_|   |_____| |_____| /_____/ |_| |_| |_| |_|
"""

VICTORY_BANNER = r"""
========
__   _______ _   _   _    _ _____ _   _
\ \ / /  _  | | | | | |  | |_   _| \ | |
 \ V /| | | | | | | | |  | | | | |  \| |
  \ / | | | | | | | | |/\| | | | | . ' |
  | | \ \_/ / |_| | \  / \ /_| |_| |\  |
  \_/  \___/ \___/   \/  \/ \___/\_| \_|
========
"""


def cell_glyph(
    board: Board,
    revealed: Iterable[Coordinate],
    row: int,
    col: int,
    glyphs: Dict[str, str],
) -> str:
    """Glyph for one cell as the player is allowed to see it."""
    state = board.cell_state(row, col)
    if state is CellState.MISS:
        return glyphs['miss']
    if Coordinate(row, col) not in revealed:
        return glyphs['water']
    if state is CellState.SMALL_SHIP:
        return glyphs['small']
    if state is CellState.LARGE_SHIP:
        return glyphs['large']
    return glyphs['water']


def render_board(
    board: Board,
    revealed: Iterable[Coordinate],
    glyphs: Optional[Dict[str, str]] = None,
) -> str:
    """
    Render the board as a boxed grid.

    Args:
        board: Board to draw.
        revealed: Coordinates whose true content may be shown.
        glyphs: Mapping with 'water', 'miss', 'small' and 'large' glyphs.

    Returns:
        Multi-line string with column numbers on top and row letters on the left.
    """
    glyphs = glyphs or DEFAULT_CONFIG['display']['glyphs']
    revealed = set(revealed)

    header = "   " + " ".join(f"{i:>{CELL_WIDTH}}" for i in range(1, board.size + 1))
    border = "  " + "─" * len(header)
    lines = [border, header]

    for row in range(board.size):
        cells = "".join(
            f"│ {cell_glyph(board, revealed, row, col, glyphs):>{CELL_WIDTH - 1}} "
            for col in range(board.size)
        )
        lines.append(f"│{ROW_LABELS[row]} {cells}│")
        lines.append(border)

    return "\n".join(lines)
