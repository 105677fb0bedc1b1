"""Logging configuration for the HOEP forecasting study."""

from __future__ import annotations

import logging
import sys

from hoep_arima.constants import LOG_DATE_FORMAT, LOG_FORMAT, LOG_LEVEL, NOISY_LOGGERS


def setup_logging(level: int | str = LOG_LEVEL) -> None:
    """Configure stdout logging for the study.

    Third-party loggers listed in ``NOISY_LOGGERS`` are held at WARNING so
    that font lookups and image encoders do not drown the stage banners.

    Args:
        level: Logging level, as a number or a name such as ``"DEBUG"``.
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown logging level: {level}")
        level = resolved

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def get_logger(name: str) -> logging.Logger:
    """Return the module logger, configuring logging on first use."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        setup_logging()
    return logger
