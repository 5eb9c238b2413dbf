# --- src/gearopt_core/log_config.py ---
import logging
import os
import sys
from typing import Union

LOG_LEVEL_ENV_VAR = "GEAROPT_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s [%(levelname)-5.5s] [%(name)s] %(message)s"

# Per-tick simulation logs are DEBUG; keep pint's own chatter at WARNING.
_QUIET_LOGGERS = ("pint",)


def _resolve_level(level: Union[int, str, None]) -> int:
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV_VAR, "INFO")
    if isinstance(level, str):
        resolved = logging.getLevelName(level.strip().upper())
        # getLevelName returns "Level X" for unknown names.
        return resolved if isinstance(resolved, int) else logging.INFO
    return level


def setup_logging(level: Union[int, str, None] = None):
    """
    Configures logging to stdout for the gearopt_core loggers.

    The level comes from `level`, else from the GEAROPT_LOG_LEVEL environment
    variable, else INFO. Calling it again replaces the handler it installed
    instead of stacking a second one.
    """
    package_logger = logging.getLogger("gearopt_core")

    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(console_handler)
    package_logger.setLevel(_resolve_level(level))

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    package_logger.info(f"Logging configured at {logging.getLevelName(package_logger.level)}.")
