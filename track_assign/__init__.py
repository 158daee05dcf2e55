from .assignment import Assigner, assign_detections_to_tracks, partition_matching, total_cost
from .config import load_config
from .cost_padding import ValidationError, get_padded_cost
from .hungarian_algorithm import linear_assignment, munkres
from .utils import euclidean_cost, gate_cost, iou_batch, iou_cost

__version__ = "0.1.0"
