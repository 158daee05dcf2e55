import numpy as np

from .cost_padding import ValidationError, check_cost_matrix, check_unassigned_cost, get_padded_cost
from .hungarian_algorithm import SOLVERS, linear_assignment


def partition_matching(stars, num_tracks, num_detections, forbidden=None):
    """
    Interpret a perfect matching on the padded matrix in terms of the
    original tracks and detections.

    Args:
        stars (numpy.ndarray, bool): shape (M+N, M+N) perfect matching.
        num_tracks (int): M.
        num_detections (int): N.
        forbidden (numpy.ndarray, bool or None): shape (M, N), pairs that
            must never be matched. A matched forbidden pair is split into
            an unassigned track and an unassigned detection.

    Returns:
        matches (numpy.ndarray): shape (L, 2), (track_idx, detection_idx),
            sorted by track index.
        unassigned_tracks (numpy.ndarray): shape (P,).
        unassigned_detections (numpy.ndarray): shape (Q,).
    """
    rows, cols = np.nonzero(stars)  # row-major, so rows come out sorted
    is_track = rows < num_tracks
    is_detection = cols < num_detections

    matches = np.stack([rows, cols], axis=1)[is_track & is_detection]
    unassigned_tracks = rows[is_track & ~is_detection]
    unassigned_detections = cols[~is_track & is_detection]
    # dummy paired with dummy carries no meaning

    if forbidden is not None and len(matches):
        # a clamped sentinel can lose against huge unassigned costs
        bad = np.asarray(forbidden, dtype=bool)[matches[:, 0], matches[:, 1]]
        unassigned_tracks = np.concatenate([unassigned_tracks, matches[bad, 0]])
        unassigned_detections = np.concatenate([unassigned_detections, matches[bad, 1]])
        matches = matches[~bad]

    unassigned_tracks = np.sort(unassigned_tracks)
    unassigned_detections = np.sort(unassigned_detections)

    return (matches.astype(np.uint32).reshape(-1, 2),
            unassigned_tracks.astype(np.uint32),
            unassigned_detections.astype(np.uint32))


def assign_detections_to_tracks(cost_matrix, unassigned_track_cost, unassigned_detection_cost=None,
                                solver="munkres"):
    """
    Assign detections to tracks by minimizing the total cost, where any
    track or detection may stay unassigned at its own cost.

    Args:
        cost_matrix (array_like): shape (M, N), cost of assigning detection j
            to track i. +inf forbids the pair.
        unassigned_track_cost (scalar or array_like): shape (M,), finite.
        unassigned_detection_cost (scalar or array_like): shape (N,), finite.
            Defaults to `unassigned_track_cost`, which must be a scalar then.
        solver (str): 'munkres' or 'scipy'.

    Returns:
        matches (numpy.ndarray, uint32): shape (L, 2), (track_idx, detection_idx).
        unassigned_tracks (numpy.ndarray, uint32): shape (P,).
        unassigned_detections (numpy.ndarray, uint32): shape (Q,).

    All indices are 0-based.
    """
    if solver not in SOLVERS:
        raise ValueError(f"unknown solver '{solver}', expected one of {SOLVERS}")

    cost_matrix = check_cost_matrix(cost_matrix)
    M, N = cost_matrix.shape
    if unassigned_detection_cost is None:
        if np.size(unassigned_track_cost) != 1:
            raise ValidationError(
                "'unassigned_track_cost' must be a scalar when 'unassigned_detection_cost' is not given")
        unassigned_detection_cost = unassigned_track_cost
    track_cost = check_unassigned_cost(unassigned_track_cost, M, cost_matrix.dtype, "unassigned_track_cost")
    detection_cost = check_unassigned_cost(unassigned_detection_cost, N, cost_matrix.dtype,
                                           "unassigned_detection_cost")

    padded_cost = get_padded_cost(cost_matrix, track_cost, detection_cost)
    stars = linear_assignment(padded_cost, solver=solver)
    forbidden = np.isposinf(cost_matrix) if cost_matrix.dtype.kind == "f" else None
    return partition_matching(stars, M, N, forbidden=forbidden)


def total_cost(cost_matrix, matches, unassigned_tracks, unassigned_detections,
               unassigned_track_cost, unassigned_detection_cost=None):
    """Objective value of an assignment, i.e. what the solver minimizes."""
    cost_matrix = np.asarray(cost_matrix, dtype=np.float64)
    M, N = cost_matrix.shape
    if unassigned_detection_cost is None:
        unassigned_detection_cost = unassigned_track_cost
    track_cost = np.broadcast_to(np.asarray(unassigned_track_cost, dtype=np.float64), (M,))
    detection_cost = np.broadcast_to(np.asarray(unassigned_detection_cost, dtype=np.float64), (N,))

    matches = np.asarray(matches, dtype=np.int64).reshape(-1, 2)
    unassigned_tracks = np.asarray(unassigned_tracks, dtype=np.int64)
    unassigned_detections = np.asarray(unassigned_detections, dtype=np.int64)
    return float(cost_matrix[matches[:, 0], matches[:, 1]].sum()
                 + track_cost[unassigned_tracks].sum()
                 + detection_cost[unassigned_detections].sum())


class Assigner(object):
    """
    Detection-to-track assigner holding the costs of non-assignment.

    Args:
        unassigned_track_cost (float or numpy.ndarray):
            Default cost of a track staying unassigned. Default: 1.0.
        unassigned_detection_cost (float, numpy.ndarray or None):
            Default cost of a detection staying unassigned, the track cost
            is reused when None. Default: None.
        solver (str):
            'munkres' for the built-in solver, 'scipy' for
            scipy.optimize.linear_sum_assignment. Default: 'munkres'.
        verbose (bool):
            Print a summary of every assignment. Default: False.

    It keeps no track identities between calls, that is up to the tracker.
    """
    def __init__(self, unassigned_track_cost=1.0, unassigned_detection_cost=None,
                 solver="munkres", verbose=False, **kwargs):
        if solver not in SOLVERS:
            raise ValueError(f"unknown solver '{solver}', expected one of {SOLVERS}")
        self.unassigned_track_cost = unassigned_track_cost
        self.unassigned_detection_cost = unassigned_detection_cost
        self.solver = solver
        self.verbose = verbose
        self.call_count = 0

        if self.verbose and kwargs:
            print(f"ignored Assigner parameters: {sorted(kwargs)}")

    def assign(self, cost_matrix, unassigned_track_cost=None, unassigned_detection_cost=None):
        if unassigned_track_cost is None:
            unassigned_track_cost = self.unassigned_track_cost
        if unassigned_detection_cost is None:
            unassigned_detection_cost = self.unassigned_detection_cost

        matches, unassigned_tracks, unassigned_detections = assign_detections_to_tracks(
            cost_matrix, unassigned_track_cost, unassigned_detection_cost, solver=self.solver)
        self.call_count += 1

        if self.verbose:
            M, N = np.shape(cost_matrix)
            print(f"======assignment({self.call_count}-th call, {M} tracks x {N} detections)======")
            print(f"matched num: {len(matches)}")
            print(f"unassigned tracks: {unassigned_tracks.tolist()}")
            print(f"unassigned detections: {unassigned_detections.tolist()}")

        return matches, unassigned_tracks, unassigned_detections
