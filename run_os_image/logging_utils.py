#!/usr/bin/env python3
"""
Shared logging utilities for run-os-image.

Provides timestamped debug logging to file for diagnostic purposes.
"""

import logging

# Matches the "[<epoch seconds>.<microseconds>] message" layout of the debug file.
DEBUG_LOG_FORMAT = "[%(created).6f] %(name)s: %(message)s"

ROOT_LOGGER_NAME = "run_os_image"


def configure_debug_log(log_path):
    """
    Send debug records of every run_os_image module to `log_path`.

    Args:
        log_path: File the records are appended to, or None to leave
                  logging unconfigured.

    Returns:
        The installed handler, or None when `log_path` is None.
    """
    if not log_path:
        return None
    handler = logging.FileHandler(log_path)
    handler.setFormatter(logging.Formatter(DEBUG_LOG_FORMAT))
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    logger.addHandler(handler)
    return handler
