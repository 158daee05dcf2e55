import numpy as np
import pytest

from track_assign import assign_detections_to_tracks
from track_assign.utils import cxcywh2xyxy, euclidean_cost, gate_cost, iou_batch, iou_cost


def test_cxcywh2xyxy():
    boxes = np.array([[10.0, 20.0, 4.0, 6.0]])
    assert cxcywh2xyxy(boxes).tolist() == [[8.0, 17.0, 12.0, 23.0]]


def test_iou_batch():
    a = np.array([[0.0, 0.0, 2.0, 2.0]])
    b = np.array([[0.0, 0.0, 2.0, 2.0],   # identical
                  [1.0, 0.0, 2.0, 2.0],   # half overlap
                  [10.0, 10.0, 2.0, 2.0]])  # disjoint
    iou = iou_batch(a, b)
    assert iou.shape == (1, 3)
    assert iou[0, 0] == pytest.approx(1.0)
    assert iou[0, 1] == pytest.approx(2.0 / 6.0)
    assert iou[0, 2] == 0.0


def test_iou_degenerate_boxes():
    iou = iou_batch(np.array([[0.0, 0.0, 0.0, 0.0]]), np.array([[0.0, 0.0, 0.0, 0.0]]))
    assert iou.tolist() == [[0.0]]


def test_iou_cost_empty():
    assert iou_cost(np.zeros((0, 4)), np.zeros((3, 4))).shape == (0, 3)


def test_euclidean_cost():
    predictions = np.array([[1.0, 1.0], [2.0, 2.0]])
    detections = np.array([[1.0, 1.0], [5.0, 6.0]])
    cost = euclidean_cost(predictions, detections)
    assert cost.shape == (2, 2)
    assert cost[0, 0] == 0.0
    assert cost[1, 1] == pytest.approx(5.0)


def test_euclidean_cost_empty():
    assert euclidean_cost(np.zeros((0, 2)), np.ones((2, 2))).shape == (0, 2)


def test_gate_cost():
    cost = np.array([[0.5, 3.0], [2.0, 0.1]])
    gated = gate_cost(cost, 1.0)
    assert np.isinf(gated[0, 1]) and np.isinf(gated[1, 0])
    assert gated[0, 0] == 0.5
    assert cost[0, 1] == 3.0  # input untouched


def test_predictions_to_assignment():
    # two tracks, three detections, the last detection starts a new track
    predictions = np.array([[1.0, 1.0], [2.0, 2.0]])
    detections = np.array([[1.1, 1.1], [2.1, 2.1], [1.5, 3.0]])
    cost = euclidean_cost(predictions, detections)
    matches, unassigned_tracks, unassigned_detections = assign_detections_to_tracks(cost, 0.2)
    assert matches.tolist() == [[0, 0], [1, 1]]
    assert unassigned_tracks.tolist() == []
    assert unassigned_detections.tolist() == [2]
