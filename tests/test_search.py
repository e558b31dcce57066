from __future__ import annotations

import pytest

from crucible.domain.errors import DeadlineExceeded, InvalidStart, NoPathFound
from crucible.domain.motion import MotionPolicy
from crucible.domain.path import calculate_path_cost, get_path_directions, get_straight_runs, validate_path
from crucible.domain.search import ConstrainedPathSearch, minimum_cost, solve
from crucible.domain.types import Grid, SearchConfig, SearchStatus
from crucible.utils.grid_factory import generate_random_grid, parse_grid

from reference_solvers import brute_force_min_cost, plain_dijkstra, relaxation_min_cost

POLICIES = [
    MotionPolicy(1, 3),
    MotionPolicy(1, 2),
    MotionPolicy(2, 3),
    MotionPolicy(2, 4),
    MotionPolicy(3, 5),
    MotionPolicy(1, None),
]


def _rows(grid: Grid) -> list[list[int]]:
    return grid.costs.tolist()


def _assert_path_consistent(result, grid: Grid, policy: MotionPolicy, start, goal) -> None:
    path = result.path
    assert path[0] == start
    assert path[-1] == goal
    assert calculate_path_cost(path, grid) == result.cost
    assert validate_path(path, grid, policy)

    directions = get_path_directions(path)
    for previous, current in zip(directions, directions[1:]):
        assert not current.is_reverse_of(previous)

    for _, length in get_straight_runs(path):
        if policy.max_run_before_forced_turn is not None:
            assert length <= policy.max_run_before_forced_turn
        assert length >= policy.min_run_before_turn


# Published example scenarios


@pytest.mark.parametrize("heuristic", ["zero", "manhattan"])
def test_sample_crucible(sample_grid: Grid, heuristic: str) -> None:
    result = solve(sample_grid, (0, 0), (12, 12), MotionPolicy.crucible(), SearchConfig(heuristic=heuristic))
    assert result.status is SearchStatus.FOUND
    assert result.cost == 102
    _assert_path_consistent(result, sample_grid, MotionPolicy.crucible(), (0, 0), (12, 12))


@pytest.mark.parametrize("heuristic", ["zero", "manhattan"])
def test_sample_ultra_crucible(sample_grid: Grid, heuristic: str) -> None:
    policy = MotionPolicy.ultra_crucible()
    result = solve(sample_grid, (0, 0), None, policy, SearchConfig(heuristic=heuristic))
    assert result.cost == 94
    _assert_path_consistent(result, sample_grid, policy, (0, 0), (12, 12))


def test_ultra_sample_must_coast_to_a_stop(ultra_sample_grid: Grid) -> None:
    policy = MotionPolicy.ultra_crucible()
    result = solve(ultra_sample_grid, (0, 0), policy=policy)
    assert result.cost == 71
    assert result.end_state.run_length >= 4
    _assert_path_consistent(result, ultra_sample_grid, policy, (0, 0), (4, 11))


def test_minimum_cost(sample_grid: Grid) -> None:
    assert minimum_cost(sample_grid, (0, 0)) == 102


# Stop rule and unreachable goals


def test_goal_reached_with_too_short_run_is_rejected() -> None:
    grid = parse_grid(["1111"])
    result = solve(grid, (0, 0), (0, 3), MotionPolicy(4, 10))
    assert result.status is SearchStatus.NO_PATH
    assert result.cost is None
    assert result.path is None

    with pytest.raises(NoPathFound):
        minimum_cost(grid, (0, 0), (0, 3), MotionPolicy(4, 10))


def test_goal_reached_after_exact_min_run() -> None:
    grid = parse_grid(["11111"])
    result = solve(grid, (0, 0), (0, 4), MotionPolicy(4, 10))
    assert result.cost == 4
    assert result.path == [(0, 0), (0, 1), (0, 2), (0, 3), (0, 4)]


def test_min_run_longer_than_grid_makes_every_other_cell_unreachable() -> None:
    grid = generate_random_grid(4, 4, seed=11)
    policy = MotionPolicy(5, 6)
    for row in range(4):
        for col in range(4):
            if (row, col) == (0, 0):
                continue
            assert solve(grid, (0, 0), (row, col), policy).status is SearchStatus.NO_PATH


def test_start_on_goal_costs_nothing() -> None:
    grid = parse_grid(["59", "95"])
    result = solve(grid, (1, 1), (1, 1), MotionPolicy.ultra_crucible())
    assert result.cost == 0
    assert result.path == [(1, 1)]


def test_goal_predicate() -> None:
    grid = parse_grid(["123", "456", "789"])
    result = solve(grid, (0, 0), lambda coord: coord[0] == 2, MotionPolicy.crucible())
    assert result.cost == 11
    assert result.path == [(0, 0), (1, 0), (2, 0)]


def test_goal_predicate_with_default_config_uses_dijkstra_ordering(sample_grid: Grid) -> None:
    result = solve(sample_grid, (0, 0), lambda coord: coord == (12, 12), MotionPolicy.crucible(), SearchConfig())
    assert result.cost == 102


def test_goal_predicate_rejects_manhattan() -> None:
    grid = parse_grid(["12", "34"])
    with pytest.raises(ValueError):
        solve(grid, (0, 0), lambda coord: True, config=SearchConfig(heuristic="manhattan"))


@pytest.mark.parametrize("start", [(5, 5), (-1, 0), (0, 2)])
def test_invalid_start(start) -> None:
    grid = parse_grid(["12", "34"])
    with pytest.raises(InvalidStart):
        solve(grid, start)


def test_goal_out_of_bounds() -> None:
    grid = parse_grid(["12", "34"])
    with pytest.raises(ValueError):
        solve(grid, (0, 0), (2, 0))


# Budgets


def test_expansion_budget(sample_grid: Grid) -> None:
    result = solve(sample_grid, (0, 0), config=SearchConfig(max_expansions=1))
    assert result.status is SearchStatus.DEADLINE_EXCEEDED
    assert result.nodes_explored == 1
    assert result.cost is None

    with pytest.raises(DeadlineExceeded):
        minimum_cost(sample_grid, (0, 0), config=SearchConfig(max_expansions=1))


@pytest.mark.parametrize("budget", [{"max_expansions": 0}, {"max_expansions": -3}, {"deadline_seconds": -1.0}])
def test_invalid_budgets_are_rejected(budget: dict) -> None:
    with pytest.raises(ValueError):
        SearchConfig(**budget)


def test_single_expansion_budget_can_still_finish_on_start() -> None:
    grid = parse_grid(["12", "34"])
    result = solve(grid, (0, 0), (0, 0), config=SearchConfig(max_expansions=1))
    assert result.status is SearchStatus.FOUND
    assert result.nodes_explored == 1


def test_time_budget(sample_grid: Grid) -> None:
    result = solve(sample_grid, (0, 0), config=SearchConfig(deadline_seconds=0.0))
    assert result.status is SearchStatus.DEADLINE_EXCEEDED


def test_generous_budget_does_not_change_answer(sample_grid: Grid) -> None:
    config = SearchConfig(max_expansions=1_000_000, deadline_seconds=600.0)
    assert solve(sample_grid, (0, 0), config=config).cost == 102


# Engine mechanics


def test_step_by_step(sample_grid: Grid) -> None:
    search = ConstrainedPathSearch()
    search.initialize(sample_grid, (0, 0), (12, 12), MotionPolicy.crucible())
    assert search.frontier_size == 1

    result = None
    steps = 0
    while result is None:
        result = search.step()
        steps += 1

    assert search.is_complete()
    assert result.cost == 102
    assert result.nodes_explored == steps
    assert search.step() is result


def test_step_requires_initialize() -> None:
    with pytest.raises(ValueError):
        ConstrainedPathSearch().step()


def test_same_cell_tracked_per_motion_state(sample_grid: Grid) -> None:
    search = ConstrainedPathSearch()
    search.initialize(sample_grid, (0, 0), (12, 12), MotionPolicy.crucible())
    search.run_complete()
    motions_at = {}
    for node in search.best_cost:
        motions_at.setdefault(node.coord, set()).add(node.motion)
    assert max(len(motions) for motions in motions_at.values()) > 1


def test_path_reconstruction_can_be_disabled(sample_grid: Grid) -> None:
    result = solve(sample_grid, (0, 0), config=SearchConfig(reconstruct_path=False))
    assert result.cost == 102
    assert result.path is None
    assert result.success


def test_repeat_runs_are_deterministic(sample_grid: Grid) -> None:
    first = solve(sample_grid, (0, 0), policy=MotionPolicy.ultra_crucible())
    second = solve(sample_grid, (0, 0), policy=MotionPolicy.ultra_crucible())
    assert first.path == second.path


# Optimality against independent solvers


@pytest.mark.parametrize("seed", range(4))
@pytest.mark.parametrize("policy", POLICIES[:4] + POLICIES[5:])
def test_matches_brute_force_on_tiny_grids(seed: int, policy: MotionPolicy) -> None:
    grid = generate_random_grid(3, 3, min_cost=1, max_cost=9, seed=seed)
    expected = brute_force_min_cost(_rows(grid), (0, 0), (2, 2),
                                    policy.min_run_before_turn, policy.max_run_before_forced_turn)
    result = solve(grid, (0, 0), (2, 2), policy)
    assert result.cost == expected


@pytest.mark.parametrize("seed", range(6))
@pytest.mark.parametrize("policy", POLICIES)
@pytest.mark.parametrize("heuristic", ["zero", "manhattan"])
def test_matches_exhaustive_relaxation(seed: int, policy: MotionPolicy, heuristic: str) -> None:
    grid = generate_random_grid(5, 5, min_cost=0, max_cost=9, seed=100 + seed)
    goal = (4, 4) if seed % 2 == 0 else (2, 3)
    expected = relaxation_min_cost(_rows(grid), (0, 0), goal,
                                   policy.min_run_before_turn, policy.max_run_before_forced_turn)

    result = solve(grid, (0, 0), goal, policy, SearchConfig(heuristic=heuristic))

    if expected is None:
        assert result.status is SearchStatus.NO_PATH
    else:
        assert result.cost == expected
        _assert_path_consistent(result, grid, policy, (0, 0), goal)


@pytest.mark.parametrize("seed", range(5))
def test_unrestricted_policy_matches_plain_dijkstra(seed: int) -> None:
    grid = generate_random_grid(7, 6, min_cost=0, max_cost=9, seed=200 + seed)
    for goal in [(6, 5), (3, 2), (0, 5)]:
        expected = plain_dijkstra(_rows(grid), (1, 1), goal)
        assert solve(grid, (1, 1), goal, MotionPolicy.unrestricted()).cost == expected
