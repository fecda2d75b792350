import logging
from typing import Union

FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATEFMT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: Union[int, str, None] = None,
                      name: str = "gridpath") -> logging.Logger:
    """
    Attach one stream handler to the package logger. Safe to call twice.
    Library modules only call logging.getLogger(__name__); entry points call this.
    """
    if level is None:
        from gridpath.config import LOG_LEVEL
        level = LOG_LEVEL
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger(name)
    logger.setLevel(level)
    if logger.handlers:
        return logger  # already configured

    sh = logging.StreamHandler()
    sh.setLevel(level)
    sh.setFormatter(logging.Formatter(fmt=FORMAT, datefmt=DATEFMT))
    logger.addHandler(sh)
    logger.propagate = False
    return logger

