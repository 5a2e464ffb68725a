"""
Common CLI options and utilities shared across benfordlab commands.
"""
import time
from pathlib import Path
from typing import List, Optional

import typer

def parse_seed(seed_str: Optional[str]) -> Optional[int]:
    """Parse seed string into integer, handling 'random' case."""
    if seed_str is None:
        return None
    if seed_str.lower() == 'random':
        return int(time.time() * 1000) % (2**31)  # Keep it within int32 range
    try:
        return int(seed_str)
    except ValueError:
        raise typer.BadParameter(f"Seed must be an integer or 'random', got: {seed_str}")

def default_search_dirs() -> List[Path]:
    return [
        Path.cwd() / "configs",
        Path(__file__).resolve().parents[3] / "configs",  # Project root configs
    ]

def resolve_config_path(config: Optional[Path], script_name: str, search_dirs: list = None) -> Path:
    """
    Resolve configuration file path with smart defaults.

    Args:
        config: Explicit config path from user
        script_name: Name of the calling command
        search_dirs: Additional directories to search (default: common locations)

    Returns:
        Path to configuration file

    Raises:
        typer.BadParameter: If config file not found
    """
    if config:
        if config.exists():
            return config.resolve()
        raise typer.BadParameter(f"Configuration file not found: {config}")

    if search_dirs is None:
        search_dirs = default_search_dirs()

    default_names = [
        f"default_{script_name}.yml",
        f"default_{script_name}.yaml",
        f"{script_name}.yml",
        f"{script_name}.yaml"
    ]

    for search_dir in search_dirs:
        if not search_dir.exists():
            continue
        for name in default_names:
            candidate = search_dir / name
            if candidate.exists():
                return candidate.resolve()

    raise typer.BadParameter(
        f"No configuration file found for '{script_name}'. "
        f"Searched: {[str(d) for d in search_dirs]} for files like: {default_names}"
    )

def resolve_output_path(output: Optional[Path]) -> Optional[Path]:
    """Explicit output directory (created if necessary), or None to auto-generate one."""
    if output:
        output.mkdir(parents=True, exist_ok=True)
        return output.resolve()
    return None
