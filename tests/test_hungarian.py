import itertools

import numpy as np
import pytest

from roommates.hungarian import assignment_cost, hungarian_algorithm, solve

INF = float("inf")


def _brute_force_min(cost: np.ndarray) -> float:
    n = cost.shape[0]
    return min(sum(cost[i, p[i]] for i in range(n)) for p in itertools.permutations(range(n)))


def _assert_permutation(assignments, n):
    assert len(assignments) == n
    assert sorted(r for r, _ in assignments) == list(range(n))
    assert sorted(c for _, c in assignments) == list(range(n))


def test_three_participant_cycle():
    # A-B 90%, A-C 40%, B-C 60%
    cost = [
        [INF, 10, 60],
        [10, INF, 40],
        [60, 40, INF],
    ]
    assignments = solve(cost)
    assert assignments == [(0, 1), (1, 2), (2, 0)]
    assert assignment_cost(cost, assignments) == 110


def test_two_by_two_swaps():
    cost = [[INF, 12], [12, INF]]
    assert solve(cost) == [(0, 1), (1, 0)]
    assert assignment_cost(cost, solve(cost)) == 24


def test_single_finite_cell():
    assert solve([[5.0]]) == [(0, 0)]


def test_classic_textbook_matrix():
    cost = [
        [4, 1, 3],
        [2, 0, 5],
        [3, 2, 2],
    ]
    assignments = solve(cost)
    _assert_permutation(assignments, 3)
    assert assignment_cost(cost, assignments) == 5


@pytest.mark.parametrize("n", [2, 3, 4, 5, 6])
@pytest.mark.parametrize("seed", range(8))
def test_matches_brute_force_with_forbidden_diagonal(n, seed):
    rng = np.random.default_rng(seed * 100 + n)
    cost = rng.integers(0, 101, size=(n, n)).astype(float)
    np.fill_diagonal(cost, np.inf)

    assignments = solve(cost)

    _assert_permutation(assignments, n)
    assert all(r != c for r, c in assignments)
    assert assignment_cost(cost, assignments) == _brute_force_min(cost)


@pytest.mark.parametrize("n", [1, 2, 3, 4, 5, 6])
@pytest.mark.parametrize("seed", range(5))
def test_matches_brute_force_on_general_matrices(n, seed):
    rng = np.random.default_rng(seed + 1000 * n)
    cost = rng.integers(0, 10, size=(n, n)).astype(float)

    assignments = solve(cost)

    _assert_permutation(assignments, n)
    assert assignment_cost(cost, assignments) == _brute_force_min(cost)


def test_ties_resolve_row_major_and_deterministically():
    cost = np.ones((4, 4))
    np.fill_diagonal(cost, np.inf)
    first = solve(cost)
    assert first == [(0, 1), (1, 0), (2, 3), (3, 2)]
    assert solve(cost) == first


def test_input_is_not_mutated():
    cost = np.array([[INF, 3.0, 7.0], [3.0, INF, 1.0], [7.0, 1.0, INF]])
    before = cost.copy()
    solve(cost)
    assert np.array_equal(cost, before)


def test_asymmetric_matrix():
    cost = [
        [INF, 1, 50],
        [50, INF, 1],
        [1, 50, INF],
    ]
    assert solve(cost) == [(0, 1), (1, 2), (2, 0)]


def test_alias():
    assert hungarian_algorithm is solve


@pytest.mark.parametrize(
    "bad",
    [
        [],
        [[]],
        [1, 2, 3],
        [[1, 2, 3], [4, 5, 6]],
        [[INF]],
        [[float("nan"), 1], [1, 1]],
        [[-INF, 1], [1, 1]],
    ],
)
def test_rejects_invalid_shapes(bad):
    with pytest.raises(ValueError):
        solve(bad)


def test_rejects_matrix_without_finite_assignment():
    cost = [
        [1, INF, INF],
        [1, INF, INF],
        [1, 1, 1],
    ]
    with pytest.raises(ValueError):
        solve(cost)
