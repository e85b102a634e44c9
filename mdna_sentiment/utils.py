"""
utils.py
--------
Logging, timing decorator, and period-key helpers.
"""

import os
import logging
import time
import functools
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

import numpy as np

from mdna_sentiment.config import CONFIG


LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def get_logger(name: str, log_dir: Optional[str] = None,
               level: Optional[str] = None,
               console: bool = True) -> logging.Logger:
    """
    Return a named logger writing to stdout and, optionally, a daily file.

    Parameters
    ----------
    name    : Logger name (typically the module __name__).
    log_dir : Directory for log files; no file handler when None.
    level   : Logging level string ("DEBUG", "INFO", "WARNING", "ERROR");
              defaults to CONFIG.log_level.
    console : Attach a console handler. Turn off for a package-level
              file logger whose child loggers already print.

    Returns
    -------
    logging.Logger
    """
    logger = logging.getLogger(name)

    if logger.handlers:          # avoid duplicate handlers on re-import
        return logger

    level = level or CONFIG.log_level
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    fmt = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    if console:
        ch = logging.StreamHandler()
        ch.setFormatter(fmt)
        logger.addHandler(ch)

    if log_dir:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        log_file = os.path.join(
            log_dir, f"mdna_sentiment_{datetime.now().strftime('%Y%m%d')}.log"
        )
        fh = logging.FileHandler(log_file)
        fh.setFormatter(fmt)
        logger.addHandler(fh)

    return logger


def timeit(func):
    """Decorator that logs the execution time of any function."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = logging.getLogger(func.__module__)
        t0 = time.perf_counter()
        result = func(*args, **kwargs)
        elapsed = time.perf_counter() - t0
        logger.debug("%s completed in %.3f s", func.__qualname__, elapsed)
        return result
    return wrapper


def to_period_key(value: Any) -> int:
    """
    Coerce a period label ("2021", 2021, 2021.0, np.int64(2021)) to an int.

    Raises ValueError for anything that is not a whole number, so labels
    never fall back to lexical ordering.
    """
    if isinstance(value, bool):
        raise ValueError(f"invalid period key: {value!r}")
    if isinstance(value, (int, np.integer)):
        return int(value)
    if isinstance(value, (float, np.floating)):
        if not float(value).is_integer():
            raise ValueError(f"invalid period key: {value!r}")
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            try:
                number = float(text)
            except ValueError:
                raise ValueError(f"invalid period key: {value!r}") from None
            if not number.is_integer():
                raise ValueError(f"invalid period key: {value!r}")
            return int(number)
    raise ValueError(f"invalid period key: {value!r}")
