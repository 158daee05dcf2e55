import argparse
from pathlib import Path

import numpy as np
from tqdm import tqdm

from .assignment import Assigner
from .config import DEFAULT_CONFIG_FILE, load_config


def load_cost_matrix(path, delimiter=","):
    """
    One frame's cost matrix, 'inf' marks forbidden pairs.

    An empty file is read as a 0x0 matrix, so a CSV cannot express a frame
    with tracks but no detections (or the reverse). Call `Assigner.assign`
    with `np.zeros((M, 0))` directly for such frames.
    """
    if not Path(path).read_text().strip():
        return np.zeros((0, 0), dtype=np.float64)
    return np.loadtxt(path, delimiter=delimiter, dtype=np.float64, ndmin=2)


def run(config, cost_dir=None):
    """
    Assign detections to tracks for every per-frame cost file in `cost_dir`.

    Returns:
        results (list): one (path, matches, unassigned_tracks, unassigned_detections)
            tuple per frame, in file name order.
    """
    exp_params = config.get("EXP", {})
    cost_dir = Path(cost_dir if cost_dir is not None else exp_params.get("cost_dir", "."))
    pattern = exp_params.get("pattern", "*.csv")
    delimiter = exp_params.get("delimiter", ",")

    cost_paths = sorted(cost_dir.glob(pattern))
    print(f"cost matrices num: {len(cost_paths)}")

    assigner = Assigner(**config["Assigner"])
    results = []
    for cost_path in tqdm(cost_paths):
        cost = load_cost_matrix(cost_path, delimiter=delimiter)
        matches, unassigned_tracks, unassigned_detections = assigner.assign(cost)
        print(f"{cost_path.name}: matches={matches.tolist()} "
              f"unassigned_tracks={unassigned_tracks.tolist()} "
              f"unassigned_detections={unassigned_detections.tolist()}")
        results.append((cost_path, matches, unassigned_tracks, unassigned_detections))
    return results


def main(argv=None):
    parser = argparse.ArgumentParser(description="assign detections to tracks frame by frame")
    parser.add_argument("--config", default=str(DEFAULT_CONFIG_FILE), help="YAML config file")
    parser.add_argument("--cost-dir", default=None, help="overrides EXP.cost_dir")
    args = parser.parse_args(argv)

    config = load_config(args.config)
    return run(config, cost_dir=args.cost_dir)


if __name__ == "__main__":
    main()
