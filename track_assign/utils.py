import numpy as np
from scipy.spatial.distance import cdist


def cxcywh2xyxy(boxes):
    x1y1x2y2 = np.zeros_like(boxes)
    x1y1x2y2[:, 0] = boxes[:, 0] - boxes[:, 2] / 2  # x1 = cx - w/2
    x1y1x2y2[:, 1] = boxes[:, 1] - boxes[:, 3] / 2  # y1 = cy - h/2
    x1y1x2y2[:, 2] = boxes[:, 0] + boxes[:, 2] / 2  # x2 = cx + w/2
    x1y1x2y2[:, 3] = boxes[:, 1] + boxes[:, 3] / 2  # y2 = cy + h/2
    return x1y1x2y2


def iou_batch(bboxesA, bboxesB):
    """
    Computes IOU between two sets of bboxes in the form [cx,cy,w,h]
        bboxesA: shape = (#A, 4).
        bboxesB: shape = (#B, 4).
    """
    bboxesA = cxcywh2xyxy(np.asarray(bboxesA, dtype=np.float64).reshape(-1, 4))
    bboxesB = cxcywh2xyxy(np.asarray(bboxesB, dtype=np.float64).reshape(-1, 4))

    bboxesB = np.expand_dims(bboxesB, 0)  # (1, #B, 4)
    bboxesA = np.expand_dims(bboxesA, 1)  # (#A, 1, 4)

    xx1 = np.maximum(bboxesA[..., 0], bboxesB[..., 0])
    yy1 = np.maximum(bboxesA[..., 1], bboxesB[..., 1])
    xx2 = np.minimum(bboxesA[..., 2], bboxesB[..., 2])
    yy2 = np.minimum(bboxesA[..., 3], bboxesB[..., 3])
    w = np.maximum(0., xx2 - xx1)
    h = np.maximum(0., yy2 - yy1)
    wh = w * h
    union = ((bboxesA[..., 2] - bboxesA[..., 0]) * (bboxesA[..., 3] - bboxesA[..., 1])
             + (bboxesB[..., 2] - bboxesB[..., 0]) * (bboxesB[..., 3] - bboxesB[..., 1]) - wh)
    # degenerate boxes have no overlap
    o = np.divide(wh, union, out=np.zeros_like(wh), where=union > 0)
    return o  # (#A, #B)


def iou_cost(track_boxes, detection_boxes):
    """(#trks, #dets) cost, 0 for identical boxes and 1 for disjoint ones."""
    return 1.0 - iou_batch(track_boxes, detection_boxes)


def euclidean_cost(predictions, detections):
    """
    Distance between predicted track locations and detected locations.
        predictions: shape = (#trks, dim).
        detections: shape = (#dets, dim).
    """
    predictions = np.asarray(predictions, dtype=np.float64)
    detections = np.asarray(detections, dtype=np.float64)
    if predictions.ndim == 1:
        predictions = predictions.reshape(len(predictions), -1)
    if detections.ndim == 1:
        detections = detections.reshape(len(detections), -1)
    if len(predictions) == 0 or len(detections) == 0:
        return np.zeros((len(predictions), len(detections)), dtype=np.float64)
    return cdist(predictions, detections, metric="euclidean")  # (#trks, #dets)


def gate_cost(cost_matrix, threshold):
    """Forbid (set to +inf) every pair whose cost exceeds `threshold`."""
    gated = np.array(cost_matrix, dtype=np.float64)
    gated[gated > threshold] = np.inf
    return gated
