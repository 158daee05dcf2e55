import numpy as np
from scipy.optimize import linear_sum_assignment


SOLVERS = ("munkres", "scipy")


def munkres(cost):
    """
    Munkres' variant of the Hungarian algorithm on a square cost matrix.

    Args:
        cost (numpy.ndarray): shape (K, K), finite real entries.

    Returns:
        stars (numpy.ndarray, bool): shape (K, K), exactly one True per row
            and per column, selecting a minimum-cost perfect matching.
    """
    cost = np.asarray(cost)
    if cost.ndim != 2 or cost.shape[0] != cost.shape[1]:
        raise ValueError(f"cost must be a square matrix, got shape {cost.shape}")
    if cost.dtype.kind not in "iuf":
        raise ValueError(f"cost must be real-valued, got dtype {cost.dtype}")
    if cost.dtype.kind == "f" and not np.all(np.isfinite(cost)):
        raise ValueError("cost must only contain finite values")

    K = cost.shape[0]
    if K == 0:
        return np.zeros((0, 0), dtype=bool)

    # work on a private copy, ints widened so dual updates never wrap
    if cost.dtype.kind == "f":
        cost = cost.astype(np.float64, copy=True)
    else:
        cost = cost.astype(np.int64, copy=True)

    # step 1: subtract row minima, every row now has a zero
    cost -= cost.min(axis=1, keepdims=True)

    # step 2: star zeros greedily in row-major order
    stars = _initial_stars(cost)

    # step 3: cover all columns containing a starred zero
    col_cover = stars.any(axis=0)

    while not col_cover.all():
        row_cover = np.zeros(K, dtype=bool)
        primes = np.zeros((K, K), dtype=bool)

        while True:
            # step 4: find a noncovered zero and prime it
            zero = _find_uncovered_zero(cost, row_cover, col_cover)
            if zero is None:
                # step 6: no uncovered zero left, create a new one
                _create_zero(cost, row_cover, col_cover)
                continue

            zi, zj = zero
            primes[zi, zj] = True
            star_col = np.flatnonzero(stars[zi])
            if star_col.size == 0:
                break  # go to step 5
            # cover the row, uncover the starred column
            row_cover[zi] = True
            col_cover[star_col[0]] = False

        # step 5: alternate primes and stars starting from (zi, zj)
        _augment(stars, primes, zi, zj)
        col_cover = stars.any(axis=0)

    return stars


def _initial_stars(cost):
    K = cost.shape[0]
    row_starred = np.zeros(K, dtype=bool)
    col_starred = np.zeros(K, dtype=bool)
    stars = np.zeros(cost.shape, dtype=bool)

    for r, c in np.argwhere(cost == 0):  # argwhere scans row-major
        if not row_starred[r] and not col_starred[c]:
            stars[r, c] = True
            row_starred[r] = True
            col_starred[c] = True
    return stars


def _find_uncovered_zero(cost, row_cover, col_cover):
    Z = (cost == 0) & ~row_cover[:, np.newaxis] & ~col_cover[np.newaxis, :]
    if not Z.any():
        return None
    zi, zj = np.unravel_index(np.argmax(Z), Z.shape)  # first in row-major order
    return int(zi), int(zj)


def _create_zero(cost, row_cover, col_cover):
    uncovered = np.ix_(~row_cover, ~col_cover)
    min_val = cost[uncovered].min()

    # add to doubly covered entries, subtract from uncovered ones
    cost[np.ix_(row_cover, col_cover)] += min_val
    cost[uncovered] -= min_val


def _augment(stars, primes, zi, zj):
    """
    Start with the primed zero Z0 at (zi, zj). Find a starred zero Z1 in the
    column of Z0, star Z0 and unstar Z1. Find the primed zero Z2 in the row of
    Z1 and repeat with Z0 = Z2 until Z0's column holds no starred zero.
    """
    while True:
        star_row = np.flatnonzero(stars[:, zj])
        stars[zi, zj] = True
        if star_row.size == 0:
            break
        zi = star_row[0]
        stars[zi, zj] = False
        zj = np.flatnonzero(primes[zi])[0]


def matching_to_pairs(stars):
    """(K, K) bool matching -> (K, 2) int64 array of (row, col), sorted by row."""
    return np.argwhere(stars).astype(np.int64)


def linear_assignment(cost, solver="munkres"):
    """
    Solve the square assignment problem with the selected solver.

    Returns:
        stars (numpy.ndarray, bool): shape (K, K) perfect matching.
    """
    if solver == "munkres":
        return munkres(cost)
    elif solver == "scipy":
        cost = np.asarray(cost)
        if cost.ndim != 2 or cost.shape[0] != cost.shape[1]:
            raise ValueError(f"cost must be a square matrix, got shape {cost.shape}")
        x, y = linear_sum_assignment(cost)
        stars = np.zeros(cost.shape, dtype=bool)
        stars[x, y] = True
        return stars
    else:
        raise ValueError(f"unknown solver '{solver}', expected one of {SOLVERS}")


if __name__ == "__main__":
    cost = np.array([[15, 6, 12, 8],
                     [10, 16, 8, 12],
                     [30, 25, 11, 9],
                     [13, 7, 20, 17],])
    stars = munkres(cost)
    print(matching_to_pairs(stars))
    print(cost[stars].sum())
