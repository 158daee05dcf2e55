from pathlib import Path

import yaml


DEFAULT_CONFIG_FILE = Path(__file__).parent / "assignment_config.yaml"


def load_config(path=DEFAULT_CONFIG_FILE, required=("Assigner",)):
    """Read a YAML config file, making sure the `required` sections exist."""
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"config file not found: {path}")

    with open(path, 'r') as file:
        config = yaml.safe_load(file) or {}

    for section in required:
        if section not in config:
            raise KeyError(f"missing section '{section}' in {path}")
    return config
