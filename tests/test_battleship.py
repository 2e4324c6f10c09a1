# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Unit tests for Battleship game logic.
"""

import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from battleship.battleship_game import (
    SHIPS_BY_SIZE,
    BattleshipGame,
    GamePhase,
    GameState,
    GuessOutcome,
    resolve_guess,
)
from battleship.board import Board, CellState, Coordinate, ShipClass
from battleship.placement import ShipSpec, place_ships_deterministic
from battleship.render import render_board


GLYPHS = {'water': '.', 'miss': '*', 'small': '#', 'large': '@'}


def scenario_game():
    """Size 4 game with a small ship at A1-A2 and a large ship at B1-B3."""
    game = BattleshipGame(size=4, seed=0)
    game.place_ships_deterministic([
        {"length": 2, "start": "A1", "horizontal": True},
        {"length": 3, "start": "B1", "horizontal": True},
    ])
    return game


def snapshot(game):
    return (
        game.board.grid.copy(),
        {key: set(ship.hits) for key, ship in game.registry.ships.items()},
        set(game.revealed),
        set(game.remaining),
        (game.shots_fired, game.hits, game.misses),
    )


def assert_same_snapshot(before, after):
    assert (before[0] == after[0]).all()
    assert before[1:] == after[1:]


class TestResolveGuess:
    """Tests for the guess resolver."""

    @pytest.fixture
    def state(self):
        board = Board(4)
        placed = place_ships_deterministic(board, [
            {"length": 2, "start": (0, 0), "horizontal": True},
            {"length": 3, "start": (1, 0), "horizontal": True},
        ])
        return GameState.from_placement(board, placed)

    def test_initial_remaining(self, state):
        """Test remaining classes start with every placed class."""
        assert state.remaining == {ShipClass.SMALL, ShipClass.LARGE}
        assert state.revealed == set()

    def test_hit(self, state):
        """Test a hit on an unsunk ship."""
        result = resolve_guess(state, Coordinate(1, 1))

        assert result.outcome is GuessOutcome.HIT
        assert result.ship == (ShipClass.LARGE, 0)
        assert Coordinate(1, 1) in state.revealed
        assert state.board.cell_state(1, 1) is CellState.LARGE_SHIP

    def test_miss(self, state):
        """Test a miss marks the board."""
        result = resolve_guess(state, Coordinate(3, 3))

        assert result.outcome is GuessOutcome.MISS
        assert state.board.cell_state(3, 3) is CellState.MISS
        assert Coordinate(3, 3) in state.revealed

    def test_already_guessed(self, state):
        """Test repeated hits and misses."""
        resolve_guess(state, Coordinate(0, 0))
        resolve_guess(state, Coordinate(3, 3))

        assert resolve_guess(state, Coordinate(0, 0)).outcome is GuessOutcome.ALREADY_GUESSED
        assert resolve_guess(state, Coordinate(3, 3)).outcome is GuessOutcome.ALREADY_GUESSED

    def test_out_of_bounds_is_caller_error(self, state):
        """Test the resolver refuses off-board coordinates."""
        with pytest.raises(ValueError):
            resolve_guess(state, Coordinate(4, 0))


class TestBattleshipGame:
    """Tests for BattleshipGame class."""

    def test_game_creation(self):
        """Test creating a new game."""
        game = BattleshipGame(size=6, seed=42)

        assert game.phase is GamePhase.PLAYING
        assert len(game.registry) == 4
        assert game.remaining == {ShipClass.SMALL, ShipClass.LARGE}
        assert game.shots_fired == 0

    def test_unsupported_size(self):
        """Test that only sizes from the ship table are allowed."""
        with pytest.raises(ValueError, match="Unsupported board size"):
            BattleshipGame(size=7)

    def test_game_deterministic_with_seed(self):
        """Test that same seed produces same board."""
        game1 = BattleshipGame(size=5, seed=123)
        game2 = BattleshipGame(size=5, seed=123)

        assert (game1.board.grid == game2.board.grid).all()

    @pytest.mark.parametrize("size", [4, 5, 6])
    def test_ship_cells_match_table(self, size):
        """Test every size gets the ships from its table."""
        game = BattleshipGame(size=size, seed=7)

        for spec in SHIPS_BY_SIZE[size]:
            assert game.board.count(spec.ship_class.cell_state) == spec.length * spec.count

    def test_parse_coordinate_valid(self):
        """Test parsing valid coordinates."""
        game = BattleshipGame(size=4, seed=0)

        assert game.parse_coordinate("A1") == (0, 0)
        assert game.parse_coordinate("D4") == (3, 3)
        assert game.parse_coordinate("a1") == (0, 0)
        assert game.parse_coordinate("c2") == (2, 1)
        assert game.parse_coordinate(" B3 ") == (1, 2)

    @pytest.mark.parametrize("coord", [
        "E1", "A0", "A5", "AA", "", "A", "1A", "A1.5", "A-1", "Z9", "A١", "B２",
    ])
    def test_parse_coordinate_invalid(self, coord):
        """Test parsing invalid coordinates."""
        game = BattleshipGame(size=4, seed=0)

        with pytest.raises(ValueError):
            game.parse_coordinate(coord)

    def test_format_coordinate(self):
        """Test formatting coordinates."""
        game = BattleshipGame(size=6, seed=0)

        assert game.format_coordinate(0, 0) == "A1"
        assert game.format_coordinate(5, 5) == "F6"
        assert game.format_coordinate(2, 3) == "C4"

    def test_scenario(self):
        """Test hit, sink, repeat and miss on a known layout."""
        game = scenario_game()

        result = game.make_shot("A1")
        assert result.outcome is GuessOutcome.HIT
        assert result.message == "Hit!"

        result = game.make_shot("A2")
        assert result.outcome is GuessOutcome.HIT_AND_SUNK
        assert result.class_cleared
        assert ShipClass.SMALL not in game.remaining
        assert ShipClass.LARGE in game.remaining

        result = game.make_shot("A1")
        assert result.outcome is GuessOutcome.ALREADY_GUESSED
        assert not result.valid

        result = game.make_shot("C1")
        assert result.outcome is GuessOutcome.MISS
        assert game.board.cell_state(2, 0) is CellState.MISS

        rendered = render_board(game.board, set(), GLYPHS)
        assert rendered.count("*") == 1
        assert game.phase is GamePhase.PLAYING

    def test_invalid_input_changes_nothing(self):
        """Test that an off-board guess leaves the state untouched."""
        game = scenario_game()
        game.make_shot("A1")
        before = snapshot(game)

        result = game.make_shot("Z9")

        assert result.outcome is GuessOutcome.INVALID_INPUT
        assert result.message == "Invalid coordinates. Try again."
        assert result.coordinate is None
        assert_same_snapshot(before, snapshot(game))

    def test_repeat_guess_changes_nothing(self):
        """Test that every repeated guess is a no-op."""
        game = BattleshipGame(size=5, seed=11)

        for coord in list(game.board.coordinates())[:12]:
            text = game.format_coordinate(*coord)
            game.make_shot(text)
            if game.is_game_over():
                break
            before = snapshot(game)

            result = game.make_shot(text)

            assert result.outcome is GuessOutcome.ALREADY_GUESSED
            assert_same_snapshot(before, snapshot(game))

    def test_sink_one_of_two_same_class(self):
        """Test a class stays remaining until all its ships are sunk."""
        game = BattleshipGame(size=5, seed=0)
        game.place_ships_deterministic([
            {"length": 2, "start": "A1", "horizontal": True},
            {"length": 2, "start": "C1", "horizontal": False},
            {"length": 3, "start": "E1", "horizontal": True},
        ])

        game.make_shot("A1")
        result = game.make_shot("A2")
        assert result.outcome is GuessOutcome.HIT_AND_SUNK
        assert not result.class_cleared
        assert ShipClass.SMALL in game.remaining

        game.make_shot("C1")
        result = game.make_shot("D1")
        assert result.outcome is GuessOutcome.HIT_AND_SUNK
        assert result.class_cleared
        assert game.remaining == {ShipClass.LARGE}

    @pytest.mark.parametrize("size", [4, 5, 6])
    def test_game_won(self, size):
        """Test that sinking every ship wins the game and reveals the board."""
        game = BattleshipGame(size=size, seed=42)

        assert not game.is_game_over()

        for ship in list(game.registry.ships.values()):
            for pos in ship.sections:
                game.make_shot(game.format_coordinate(*pos))

        assert game.remaining == set()
        assert game.is_won()
        assert game.is_game_over()
        assert game.revealed == set(game.board.coordinates())

        for ship in game.registry.ships.values():
            assert ship.hits == set(ship.sections)

    def test_no_shots_after_game_over(self):
        """Test that a finished game rejects guesses."""
        game = scenario_game()
        game.submit("exit")

        with pytest.raises(RuntimeError):
            game.make_shot("C3")

    def test_quit_token(self):
        """Test the quit token, case-insensitive."""
        game = scenario_game()

        assert game.submit("A1").outcome is GuessOutcome.HIT
        assert game.submit("  EXIT ") is None
        assert game.phase is GamePhase.QUIT
        assert game.is_game_over()
        assert not game.is_won()

    def test_custom_quit_token(self):
        """Test a configured quit token."""
        game = BattleshipGame(size=4, seed=0, quit_token="Q")

        assert game.submit("exit").outcome is GuessOutcome.INVALID_INPUT
        assert game.submit("q") is None

    def test_custom_ship_table(self):
        """Test a game built from a custom ship table."""
        game = BattleshipGame(size=3, seed=0, ships={3: [ShipSpec(length=3, count=2)]})

        assert game.board.count(CellState.LARGE_SHIP) == 6
        assert game.remaining == {ShipClass.LARGE}

    def test_get_game_status(self):
        """Test game status reporting."""
        game = scenario_game()

        status = game.get_game_status()
        assert status["game_over"] is False
        assert status["ships_remaining"] == 2
        assert status["total_ships"] == 2
        assert status["accuracy"] == 0.0
        assert status["sunk_ships"] == []

        game.make_shot("A1")
        game.make_shot("A2")
        game.make_shot("D4")
        game.make_shot("D4")
        game.make_shot("Z9")

        status = game.get_game_status()
        assert status["shots_fired"] == 3
        assert status["hits"] == 2
        assert status["misses"] == 1
        assert status["ships_sunk"] == 1
        assert status["sunk_ships"] == ["Small ship #1"]
        assert status["accuracy"] == pytest.approx(2 / 3)

    def test_replace_after_shots_rejected(self):
        """Test ships cannot be moved mid-game."""
        game = scenario_game()
        game.make_shot("D4")

        with pytest.raises(RuntimeError):
            game.place_ships_deterministic([{"length": 2, "start": "A1", "horizontal": True}])

    def test_replace_after_quit_rejected(self):
        """Test a quit game stays quit."""
        game = scenario_game()
        game.submit("exit")

        with pytest.raises(RuntimeError):
            game.place_ships_deterministic([{"length": 2, "start": "C1", "horizontal": True}])
        assert game.phase is GamePhase.QUIT

    def test_replace_with_no_ships_rejected(self):
        """Test an empty layout is refused and the current one kept."""
        game = scenario_game()

        with pytest.raises(ValueError, match="At least one ship"):
            game.place_ships_deterministic([])

        assert len(game.registry) == 2
        assert game.make_shot("D4").outcome is GuessOutcome.MISS
        assert game.phase is GamePhase.PLAYING


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
