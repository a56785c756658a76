"""
Logging configuration.

Library modules only create module-level loggers; handlers are installed by
applications (the CLI calls setup_logging).
"""

import logging
from pathlib import Path
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(
    level: Union[int, str] = "INFO",
    log_file: Optional[Path] = None,
    console: Optional[Console] = None,
) -> logging.Logger:
    """
    Configure the form_guard logger.

    Args:
        level: Logging level name or number
        log_file: Optional file that receives plain-text records as well
        console: Rich console for terminal output (stderr by default)

    Returns:
        logging.Logger: The configured package logger
    """
    logger = logging.getLogger("form_guard")
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger
