"""
Unified logging for the benfordlab package.

Exports:
    - logger: Global Loguru logger (ready for use/import).
    - setup_logfile: Add file logging with rotation/compression.
    - setup_json_logfile: Add a JSON-format log file for machine parsing.
    - set_console_level: Replace the default stderr sink at a given level.
"""

import sys

from loguru import logger

__all__ = [
    "logger",
    "setup_logfile",
    "setup_json_logfile",
    "set_console_level",
]

_console_sink_id = None


def set_console_level(level: str = "INFO") -> int:
    """
    Route console output through a single stderr sink at ``level``.

    Args:
        level (str): Logging level (DEBUG, INFO, etc.).

    Returns:
        int: The loguru handler id of the console sink.
    """
    global _console_sink_id
    if _console_sink_id is None:
        # drop loguru's default handler (id 0) the first time through
        logger.remove()
    else:
        logger.remove(_console_sink_id)
    _console_sink_id = logger.add(sys.stderr, level=level.upper())
    return _console_sink_id


def setup_logfile(
    log_path: str,
    rotation: str = "10 MB",
    retention: str = "10 days",
    compression: str = "zip",
    level: str = "INFO",
    colorize: bool = False
) -> int:
    """
    Add a rotating file handler to the global logger.

    Args:
        log_path (str): Path to the log file.
        rotation (str): Size or time string for log rotation.
        retention (str): How long to keep old logs.
        compression (str): Compression method for rotated logs.
        level (str): Logging level (DEBUG, INFO, etc.).
        colorize (bool): Colorize file output (default: False).

    Returns:
        int: Handler id, for ``logger.remove`` once the run is over.
    """
    sink_id = logger.add(
        str(log_path),
        rotation=rotation,
        retention=retention,
        compression=compression,
        level=level.upper(),
        colorize=colorize,
        enqueue=True,  # Safe for multiprocessing
        backtrace=True,
        diagnose=False,
    )
    logger.info(f"Loguru file logging initialized: {log_path}")
    return sink_id


def setup_json_logfile(log_path: str, level: str = "INFO", **kwargs) -> int:
    """
    Add a JSON-lines sink: one serialized loguru record per line.

    Used by the report run when ``json_log`` is set, next to the plain run log.

    Returns:
        int: Handler id, for ``logger.remove`` once the run is over.
    """
    sink_id = logger.add(str(log_path), serialize=True, level=level.upper(), **kwargs)
    logger.info(f"JSON run log: {log_path}")
    return sink_id
