import warnings

import numpy as np


class ValidationError(ValueError):
    """Raised when the inputs of an assignment problem are malformed."""


def check_cost_matrix(cost_matrix):
    cost_matrix = np.asarray(cost_matrix)
    if cost_matrix.ndim != 2:
        raise ValidationError(f"'cost_matrix' must be 2-D, got {cost_matrix.ndim}-D")
    _check_dtype(cost_matrix.dtype, "cost_matrix")
    if cost_matrix.dtype.kind == "f":
        if np.isnan(cost_matrix).any():
            raise ValidationError("'cost_matrix' must not contain NaN")
        if np.isneginf(cost_matrix).any():
            raise ValidationError("'cost_matrix' must not contain -inf, use +inf for forbidden pairs")
    elif cost_matrix.size:
        # row reduction and dual updates run in int64
        span = int(cost_matrix.max()) - int(cost_matrix.min())
        if span > int(np.iinfo(np.int64).max) // 4:
            raise ValidationError(f"'cost_matrix' values span {span}, too wide for int64 arithmetic")
    return cost_matrix


def check_unassigned_cost(value, length, dtype, name):
    """
    Validate a scalar or vector unassigned cost and broadcast it to `length`.

    numpy arrays and scalars must share `dtype` with the cost matrix. Plain
    python numbers and lists carry no width, so they are cast to `dtype`
    unless that would turn a float into an integer.
    """
    if isinstance(value, (np.ndarray, np.generic)):
        value = np.asarray(value)
        if value.dtype != dtype:
            raise ValidationError(
                f"'{name}' has dtype {value.dtype}, all inputs must be of the same class ({dtype})")
    else:
        value = np.asarray(value)
        _check_dtype(value.dtype, name)
        if value.dtype.kind == "f" and dtype.kind in "iu":
            raise ValidationError(
                f"'{name}' is floating point while 'cost_matrix' is {dtype}, "
                f"all inputs must be of the same class")
        cast = value.astype(dtype)
        if dtype.kind in "iu" and np.any(cast.astype(np.int64) != value):
            raise ValidationError(f"'{name}' does not fit into {dtype}")
        value = cast

    if value.ndim > 1:
        raise ValidationError(f"'{name}' must be a scalar or a vector, got shape {value.shape}")
    if value.dtype.kind == "f" and not np.all(np.isfinite(value)):
        raise ValidationError(f"'{name}' must only contain finite values")

    if value.size == 1:
        return np.full(length, value.reshape(-1)[0], dtype=dtype)
    if value.size != length:
        raise ValidationError(
            f"'{name}' must be a scalar or have {length} elements, got {value.size}")
    return value.reshape(-1).copy()


def _check_dtype(dtype, name):
    if dtype.kind not in "iuf":
        raise ValidationError(f"'{name}' must be a real numeric array, got dtype {dtype}")
    if dtype == np.uint64:
        raise ValidationError(f"'{name}' of dtype uint64 is not supported")


def get_sentinel(cost_matrix, unassigned_track_cost, unassigned_detection_cost):
    """
    A cost larger than any matching that avoids it can reach.

    The matching that leaves every track and detection unassigned always
    exists and costs at most K * hi, while any matching that uses one
    sentinel entry costs at least sentinel + (K - 1) * lo.
    """
    K = cost_matrix.shape[0] + cost_matrix.shape[1]
    values = [cost_matrix[np.isfinite(cost_matrix)], unassigned_track_cost, unassigned_detection_cost]
    finite = np.concatenate([np.asarray(v).reshape(-1) for v in values])

    if cost_matrix.dtype.kind == "f":
        hi = max(0.0, float(finite.max())) if finite.size else 0.0
        lo = min(0.0, float(finite.min())) if finite.size else 0.0
        limit = float(np.finfo(np.float64).max) / 4
    else:
        # python ints do not overflow
        hi = max(0, int(finite.max())) if finite.size else 0
        lo = min(0, int(finite.min())) if finite.size else 0
        limit = int(np.iinfo(np.int64).max) // 4

    sentinel = 2 * (K * hi - (K - 1) * lo) + 1
    if not sentinel < limit:  # also catches float overflow to inf
        warnings.warn(f"cost range too wide, unassignable cost clamped to {limit}", RuntimeWarning)
        sentinel = limit
    return sentinel


def get_padded_cost(cost_matrix, unassigned_track_cost, unassigned_detection_cost):
    """
    Build the (M+N, M+N) cost matrix with dummy rows and columns accounting
    for tracks and detections that stay unassigned.

    Args:
        cost_matrix (numpy.ndarray): shape (M, N), +inf marks forbidden pairs.
        unassigned_track_cost (numpy.ndarray): shape (M,).
        unassigned_detection_cost (numpy.ndarray): shape (N,).

    Returns:
        padded_cost (numpy.ndarray): shape (M+N, M+N), float64 for floating
            inputs and int64 for integer inputs.
    """
    M, N = cost_matrix.shape
    work_dtype = np.float64 if cost_matrix.dtype.kind == "f" else np.int64
    sentinel = get_sentinel(cost_matrix, unassigned_track_cost, unassigned_detection_cost)

    # replace infinities with the sentinel
    cost = cost_matrix.astype(work_dtype)
    if cost_matrix.dtype.kind == "f":
        cost[np.isinf(cost_matrix)] = sentinel

    padded_cost = np.full((M + N, M + N), sentinel, dtype=work_dtype)
    padded_cost[:M, :N] = cost

    # track i -> dummy detection N + i, detection j -> dummy track M + j
    padded_cost[np.arange(M), N + np.arange(M)] = unassigned_track_cost
    padded_cost[M + np.arange(N), np.arange(N)] = unassigned_detection_cost

    # dummy to dummy is free
    padded_cost[M:, N:] = 0
    return padded_cost
