import datetime
import random
import uuid
from pathlib import Path

import numpy as np
import yaml


def set_global_seed(seed):
    random.seed(seed)
    np.random.seed(seed)


def make_rng(seed=None) -> np.random.Generator:
    """Return a numpy Generator; ``None`` draws fresh OS entropy."""
    return np.random.default_rng(seed)


def _apply_overrides(config, overrides):
    """Merge dot-notation overrides (key1.key2=value) into ``config`` in place."""
    for override in overrides:
        if "=" not in override:
            raise ValueError(f"Override must look like key=value, got: {override}")
        key, val = override.split("=", 1)
        keys = key.strip().split(".")
        d = config
        for k in keys[:-1]:
            d = d.setdefault(k, {})
        # YAML scalars: ints, floats, bools, null, [lists]
        try:
            d[keys[-1]] = yaml.safe_load(val)
        except yaml.YAMLError as e:
            raise ValueError(f"Override value for {key.strip()} is not valid YAML: {val}") from e
    return config


def load_config(config_path, cli_overrides=None):
    """
    Load a YAML config file and merge CLI overrides.
    Returns the config dict and the full config path used.
    """
    config_file = Path(config_path)
    if not config_file.exists():
        raise FileNotFoundError(f"Config file not found: {config_file}")

    with open(config_file, "r") as f:
        config = yaml.safe_load(f) or {}

    if cli_overrides:
        _apply_overrides(config, cli_overrides)

    return config, str(config_file.resolve())


def make_output_dir(script_name, base_output_dir=None):
    """
    Creates a timestamped output directory for the script run.
    Returns the path to the created output directory.
    """
    timestamp = datetime.datetime.now().strftime("%Y%m%d-%H%M%S")
    run_id = uuid.uuid4().hex[:6]
    out_base = Path(base_output_dir or "outputs") / script_name
    out_dir = out_base / f"{timestamp}-{run_id}"
    out_dir.mkdir(parents=True, exist_ok=False)
    return out_dir
