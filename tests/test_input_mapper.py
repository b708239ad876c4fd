"""Tests for the input command mapper."""

import pytest

from connexe.core.grid import Cell, Direction
from connexe.core.input_mapper import DEFAULT_BINDINGS, InputCommandMapper


@pytest.fixture
def mapper(session, spanning_maze):
    session.start(spanning_maze)
    return InputCommandMapper(session)


class TestTranslate:
    """Tests for command translation."""

    @pytest.mark.parametrize(
        "command, expected",
        [
            ("up", Direction.UP),
            ("DOWN", Direction.DOWN),
            (" Left ", Direction.LEFT),
            ("east", Direction.RIGHT),
            ("w", Direction.UP),
            ("d", Direction.RIGHT),
            (Direction.DOWN, Direction.DOWN),
        ],
    )
    def test_known_commands(self, mapper, command, expected):
        assert mapper.translate(command) is expected

    @pytest.mark.parametrize("command", ["jump", "", "upp", None, 3, ("up",)])
    def test_unknown_commands(self, mapper, command):
        assert mapper.translate(command) is None

    def test_custom_bindings(self, session):
        mapper = InputCommandMapper(session, {"K": Direction.UP, "J": Direction.DOWN})

        assert mapper.translate("k") is Direction.UP
        assert mapper.translate("j") is Direction.DOWN
        assert mapper.translate("up") is None

    def test_default_bindings_cover_every_direction(self):
        assert set(DEFAULT_BINDINGS.values()) == set(Direction)


class TestDispatch:
    """Tests for forwarding commands to the session."""

    def test_dispatch_moves_player(self, mapper, session):
        result = mapper.dispatch("right")

        assert result.status == "moved"
        assert session.current_cell == Cell(0, 1)

    def test_dispatch_reports_blocked_move(self, mapper, session):
        result = mapper.dispatch("up")

        assert result.status == "blocked"
        assert session.current_cell == Cell(0, 0)

    def test_unrecognized_command_is_ignored(self, mapper, session):
        before = session.snapshot()

        assert mapper.dispatch("teleport") is None
        assert session.snapshot() is before

    def test_dispatch_full_route(self, mapper, session):
        for command in ["d", "d", "s", "s"]:
            mapper.dispatch(command)

        assert session.won
        assert session.move_count == 4
