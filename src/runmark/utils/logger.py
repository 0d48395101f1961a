"""Logging helpers for runmark.

Wraps the standard library logging so every module logs under the
``runmark`` namespace. The library never installs handlers; applications
decide where diagnostics go.

Example:
    >>> from runmark.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Dropped crossing pair")
"""

from __future__ import annotations

import logging

_ROOT = "runmark"


def get_logger(name: str) -> logging.Logger:
    """Get a logger namespaced under ``runmark``.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> get_logger("pairing").name
        'runmark.pairing'
        >>> get_logger("runmark.parsing").name
        'runmark.parsing'
    """
    if not (name == _ROOT or name.startswith(f"{_ROOT}.")):
        name = f"{_ROOT}.{name}"
    return logging.getLogger(name)
