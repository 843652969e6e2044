"""Utility helpers for the PKP Index harvester."""

import logging
import sys

LOGGER_NAME = "pkpindex"


# ---------------------------------------------------------------------------
# Logging helpers
# ---------------------------------------------------------------------------

def setup_logger(verbose: bool = False) -> logging.Logger:
    """Configure and return the package logger; logs go to stderr.

    stdout is reserved for the JSON lines output.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        formatter = logging.Formatter("%(asctime)s | %(levelname)s | %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    return logger
