"""Tests for maze generation, the generation log and chaos."""

import pytest

from connexe.core.errors import InvalidCell, InvalidDimension, InvalidEdge
from connexe.core.grid import Cell
from connexe.core.maze import Maze, normalize_edge
from connexe.core.maze_generator import (
    Connect,
    Disconnect,
    GenerationAlgorithm,
    GenerationLog,
    GenerationResult,
    SetEndpoints,
    UnionFind,
    generate,
    generate_with_log,
    introduce_chaos,
)
from connexe.core.maze_solver import solve


ALGORITHMS = list(GenerationAlgorithm)
SIZES = [(1, 1), (1, 6), (6, 1), (2, 2), (3, 3), (4, 7), (9, 5)]


def count_simple_paths(maze: Maze, source: Cell, destination: Cell) -> int:
    """Count every simple path between two cells by exhaustive search."""
    def walk(cell: Cell, visited: set) -> int:
        if cell == destination:
            return 1
        total = 0
        for other in maze.open_neighbors(cell):
            if other not in visited:
                total += walk(other, visited | {other})
        return total

    return walk(source, {source})


class TestUnionFind:
    """Tests for the disjoint-set arena."""

    def test_union_and_find(self):
        components = UnionFind(5)

        assert components.union(0, 1)
        assert components.union(3, 4)
        assert components.connected(0, 1)
        assert not components.connected(1, 3)
        assert components.components == 3

    def test_union_same_component_returns_false(self):
        components = UnionFind(3)
        components.union(0, 1)
        components.union(1, 2)

        assert not components.union(0, 2)
        assert components.components == 1
        assert components.find(0) == components.find(2)


class TestGenerate:
    """Tests for perfect maze generation."""

    @pytest.mark.parametrize("algorithm", ALGORITHMS)
    @pytest.mark.parametrize("rows, cols", SIZES)
    @pytest.mark.parametrize("seed", [0, 1, 42])
    def test_generated_maze_is_spanning_tree(self, algorithm, rows, cols, seed):
        """Test that every algorithm opens rows*cols - 1 walls and connects all cells."""
        maze = generate(rows, cols, seed, algorithm)

        assert maze.rows == rows
        assert maze.cols == cols
        assert maze.edge_count == rows * cols - 1
        assert maze.is_connected()
        assert maze.is_perfect()

    @pytest.mark.parametrize("algorithm", ALGORITHMS)
    def test_unique_simple_path_between_all_pairs(self, algorithm):
        """Test that exactly one simple path joins any two cells."""
        maze = generate(3, 4, seed=7, algorithm=algorithm)
        cells = list(maze.cells())

        for a in cells:
            for b in cells:
                assert count_simple_paths(maze, a, b) == 1

    @pytest.mark.parametrize("algorithm", ALGORITHMS)
    def test_generation_is_deterministic(self, algorithm):
        """Test that the same seed gives the same maze."""
        first = generate(12, 9, seed=1234, algorithm=algorithm)
        second = generate(12, 9, seed=1234, algorithm=algorithm)

        assert first == second
        assert first.sorted_edges() == second.sorted_edges()

    def test_different_seeds_give_different_mazes(self):
        assert generate(15, 15, seed=1).edges != generate(15, 15, seed=2).edges

    def test_algorithm_accepts_name(self):
        assert generate(5, 5, 3, "dfs") == generate(5, 5, 3, GenerationAlgorithm.DFS)

    def test_endpoints_are_opposite_corners(self):
        maze = generate(4, 6, seed=9)
        assert maze.start == Cell(0, 0)
        assert maze.end == Cell(3, 5)

    @pytest.mark.parametrize("rows, cols", [(0, 5), (5, 0), (-3, 2)])
    def test_invalid_dimension(self, rows, cols):
        with pytest.raises(InvalidDimension):
            generate(rows, cols, seed=1)

    @pytest.mark.parametrize("seed", [None, "42", 1.5, True])
    def test_seed_must_be_integer(self, seed):
        with pytest.raises(TypeError, match="seed must be an integer"):
            generate(3, 3, seed)

    def test_unknown_algorithm_raises_error(self):
        with pytest.raises(ValueError):
            generate(3, 3, 1, "eller")


class TestGenerationLog:
    """Tests for replaying generation step by step."""

    def test_kruskal_log_contents(self):
        result = generate_with_log(4, 5, seed=11)
        events = list(result.log)

        assert len(result.log) == 4 * 5 - 1 + 1
        assert all(isinstance(event, Connect) for event in events[:-1])
        assert events[-1] == SetEndpoints(Cell(0, 0), Cell(3, 4))

    @pytest.mark.parametrize("algorithm", ALGORITHMS)
    def test_build_maze_replays_log(self, algorithm):
        result = generate_with_log(6, 6, seed=5, algorithm=algorithm)
        assert result.log.build_maze() == result.maze

    def test_build_maze_until(self):
        result = generate_with_log(3, 3, seed=2)
        log = result.log

        initial = log.build_maze_until(0)
        assert initial.edge_count == 0
        assert initial.start is None

        halfway = log.build_maze_until(4)
        assert halfway.edge_count == 4
        assert halfway.edges <= result.maze.edges

    @pytest.mark.parametrize("index", [-1, 100])
    def test_build_maze_until_out_of_range(self, index):
        log = generate_with_log(3, 3, seed=2).log
        with pytest.raises(ValueError, match="max_event_index must be in"):
            log.build_maze_until(index)

    def test_manual_log(self):
        log = GenerationLog(1, 3)
        log.add(Connect(Cell(0, 0), Cell(0, 1)))
        log.add(Connect(Cell(0, 1), Cell(0, 2)))
        log.add(Disconnect(Cell(0, 1), Cell(0, 0)))

        maze = log.build_maze()
        assert maze.sorted_edges() == [(Cell(0, 1), Cell(0, 2))]
        assert log[2] == Disconnect(Cell(0, 1), Cell(0, 0))

    def test_log_rejects_non_adjacent_event(self):
        log = GenerationLog(3, 3)
        log.add(Connect(Cell(0, 0), Cell(2, 2)))
        with pytest.raises(InvalidEdge, match="not adjacent"):
            log.build_maze()

    def test_log_str(self):
        log = generate_with_log(2, 2, seed=0).log
        text = str(log)

        assert text.startswith("GenerationLog [2x2] 4 events:")
        assert "SetEndpoints" in text

    def test_log_invalid_dimension(self):
        with pytest.raises(InvalidDimension):
            GenerationLog(0, 3)


class TestIntroduceChaos:
    """Tests for turning perfect mazes into imperfect ones."""

    def test_chaos_changes_maze_but_keeps_route(self):
        original = generate_with_log(8, 8, seed=3)
        route = solve(original.maze, original.maze.start, original.maze.end)

        result = introduce_chaos(original, 0.2, seed=4)

        assert result.maze != original.maze
        assert len(result.log) > len(original.log)
        for a, b in zip(route.cells, route.cells[1:]):
            assert result.maze.is_open(a, b)
        solve(result.maze, result.maze.start, result.maze.end)

    def test_chaos_leaves_original_untouched(self):
        original = generate_with_log(5, 5, seed=3)
        edges_before = original.maze.edges
        events_before = len(original.log)

        introduce_chaos(original, 0.5, seed=1)

        assert original.maze.edges == edges_before
        assert len(original.log) == events_before

    def test_full_probability_toggles_every_free_wall(self):
        """Test that probability 1 flips every wall except the protected route."""
        original = generate_with_log(4, 4, seed=8)
        maze = original.maze
        route = solve(maze, maze.start, maze.end).cells
        protected = {normalize_edge(a, b) for a, b in zip(route, route[1:])}
        closed = set(maze.grid.adjacent_pairs()) - maze.edges

        result = introduce_chaos(original, 1.0, seed=0)

        assert result.maze.edges == protected | closed

    def test_chaos_is_deterministic(self):
        original = generate_with_log(6, 6, seed=3)
        assert (
            introduce_chaos(original, 0.3, seed=5).maze
            == introduce_chaos(original, 0.3, seed=5).maze
        )

    def test_chaos_log_replays_to_chaotic_maze(self):
        result = introduce_chaos(generate_with_log(5, 5, seed=2), 0.3, seed=9)
        assert result.log.build_maze() == result.maze

    def test_chaos_without_room_returns_same_result(self):
        """Test that a maze whose only wall is on the route is left as is."""
        original = generate_with_log(1, 2, seed=1)
        assert introduce_chaos(original, 1.0, seed=1) is original

    def test_chaos_on_single_cell_returns_same_result(self):
        original = generate_with_log(1, 1, seed=1)
        assert introduce_chaos(original, 0.5, seed=1) is original

    def test_chaos_requires_endpoints(self):
        original = generate_with_log(3, 3, seed=1)
        no_endpoints = GenerationResult(
            maze=original.maze.with_endpoints(None, None), log=original.log
        )
        with pytest.raises(InvalidCell, match="start and end"):
            introduce_chaos(no_endpoints, 0.5, seed=1)
