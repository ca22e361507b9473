"""
Hungarian (Munkres) algorithm for the square assignment problem.

Finds the row -> column permutation with minimal total cost in O(n^3). The
solver runs the classic six-step state machine over a private copy of the cost
matrix:

1. Reduce: subtract each row minimum, then each column minimum.
2. Star zeros, scanning row-major, at most one per row and column.
3. Cover every column holding a star; all columns covered means done.
4. Prime an uncovered zero. If its row has a star, cover the row and uncover
   the star's column and repeat; otherwise go to 5. No uncovered zero: go to 6.
5. Augment along the alternating prime/star series, then clear covers and
   primes and go back to 3.
6. Add the smallest uncovered value to covered rows, subtract it from
   uncovered columns and go back to 4.

Scans are row-major everywhere, so ties between equally cheap assignments are
always resolved the same way.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

logger = logging.getLogger(__name__)

Assignment = List[Tuple[int, int]]
CostInput = Union[np.ndarray, Sequence[Sequence[float]]]

DONE = 7


@dataclass
class _MunkresState:
    matrix: np.ndarray
    starred: np.ndarray
    primed: np.ndarray
    row_cover: np.ndarray
    col_cover: np.ndarray
    # last zero primed in step 4, where step 5 starts its series
    path_start: Optional[Tuple[int, int]] = None

    @classmethod
    def from_costs(cls, costs: np.ndarray) -> "_MunkresState":
        n = costs.shape[0]
        return cls(
            matrix=costs.copy(),
            starred=np.zeros((n, n), dtype=bool),
            primed=np.zeros((n, n), dtype=bool),
            row_cover=np.zeros(n, dtype=bool),
            col_cover=np.zeros(n, dtype=bool),
        )

    def clear_covers(self) -> None:
        self.row_cover[:] = False
        self.col_cover[:] = False


def validate_cost_matrix(cost_matrix: CostInput) -> np.ndarray:
    """Return `cost_matrix` as a float array or raise ValueError if it is not square and non-empty."""
    costs = np.array(cost_matrix, dtype=float)
    if costs.ndim != 2:
        raise ValueError(f"Cost matrix must be 2-dimensional, got {costs.ndim} dimension(s).")
    rows, cols = costs.shape
    if rows == 0 or cols == 0:
        raise ValueError("Cost matrix is empty.")
    if rows != cols:
        raise ValueError(f"Cost matrix must be square, got {rows}x{cols}.")
    if np.isnan(costs).any() or np.isneginf(costs).any():
        raise ValueError("Cost matrix must not contain NaN or -inf.")
    finite = np.isfinite(costs)
    if not finite.any(axis=1).all() or not finite.any(axis=0).all():
        raise ValueError("Every row and column of the cost matrix needs at least one finite cost.")
    return costs


def _reduce(state: _MunkresState) -> int:
    m = state.matrix
    m -= m.min(axis=1, keepdims=True)
    m -= m.min(axis=0, keepdims=True)
    return 2


def _star_zeros(state: _MunkresState) -> int:
    n = state.matrix.shape[0]
    for i in range(n):
        for j in range(n):
            if state.matrix[i, j] == 0 and not state.row_cover[i] and not state.col_cover[j]:
                state.starred[i, j] = True
                state.row_cover[i] = True
                state.col_cover[j] = True
    state.clear_covers()
    return 3


def _cover_starred_columns(state: _MunkresState) -> int:
    state.col_cover[:] = state.starred.any(axis=0)
    if state.col_cover.all():
        return DONE
    return 4


def _find_uncovered_zero(state: _MunkresState) -> Optional[Tuple[int, int]]:
    n = state.matrix.shape[0]
    for i in range(n):
        if state.row_cover[i]:
            continue
        for j in range(n):
            if state.matrix[i, j] == 0 and not state.col_cover[j]:
                return i, j
    return None


def _star_in_row(state: _MunkresState, row: int) -> Optional[int]:
    cols = np.flatnonzero(state.starred[row])
    return int(cols[0]) if cols.size else None


def _star_in_col(state: _MunkresState, col: int) -> Optional[int]:
    rows = np.flatnonzero(state.starred[:, col])
    return int(rows[0]) if rows.size else None


def _prime_in_row(state: _MunkresState, row: int) -> Optional[int]:
    cols = np.flatnonzero(state.primed[row])
    return int(cols[0]) if cols.size else None


def _prime_uncovered_zero(state: _MunkresState) -> int:
    while True:
        zero = _find_uncovered_zero(state)
        if zero is None:
            return 6
        row, col = zero
        state.primed[row, col] = True
        star_col = _star_in_row(state, row)
        if star_col is None:
            state.path_start = (row, col)
            return 5
        state.row_cover[row] = True
        state.col_cover[star_col] = False


def _augment_path(state: _MunkresState) -> int:
    if state.path_start is None:
        raise RuntimeError("Augment step reached without a primed zero to start from.")
    series = [state.path_start]
    star_row = _star_in_col(state, series[-1][1])
    while star_row is not None:
        series.append((star_row, series[-1][1]))
        prime_col = _prime_in_row(state, star_row)
        if prime_col is None:
            break
        series.append((star_row, prime_col))
        star_row = _star_in_col(state, prime_col)

    for row, col in series:
        state.starred[row, col] = not state.starred[row, col]

    state.clear_covers()
    state.primed[:, :] = False
    state.path_start = None
    return 3


def _adjust_matrix(state: _MunkresState) -> int:
    uncovered = state.matrix[np.ix_(~state.row_cover, ~state.col_cover)]
    smallest = uncovered.min() if uncovered.size else np.inf
    if not np.isfinite(smallest):
        raise ValueError("Cost matrix admits no assignment with finite cost.")
    state.matrix[state.row_cover, :] += smallest
    state.matrix[:, ~state.col_cover] -= smallest
    return 4


_STEPS = {
    1: _reduce,
    2: _star_zeros,
    3: _cover_starred_columns,
    4: _prime_uncovered_zero,
    5: _augment_path,
    6: _adjust_matrix,
}


def solve(cost_matrix: CostInput) -> Assignment:
    """Find the minimum-cost assignment for a square cost matrix.

    Args:
        cost_matrix: N x N costs. Entries may be +inf to forbid a cell, but
            at least one finite permutation must exist.

    Returns:
        N (row, col) pairs, one per row in row order, forming a permutation.

    Raises:
        ValueError: If the matrix is empty, not square, contains NaN, or has
            no finite assignment.
    """
    costs = validate_cost_matrix(cost_matrix)
    state = _MunkresState.from_costs(costs)

    step = 1
    iterations = 0
    while step != DONE:
        step = _STEPS[step](state)
        iterations += 1
    logger.debug("Munkres finished %dx%d in %d steps", costs.shape[0], costs.shape[1], iterations)

    return [(int(i), int(j)) for i, j in np.argwhere(state.starred)]


hungarian_algorithm = solve


def assignment_cost(cost_matrix: CostInput, assignments: Assignment) -> float:
    """Total cost of `assignments` against the unreduced input matrix."""
    costs = np.asarray(cost_matrix, dtype=float)
    return float(sum(costs[row, col] for row, col in assignments))
