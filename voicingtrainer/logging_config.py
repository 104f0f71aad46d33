"""Central logging setup for the voicing trainer."""

import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "voicingtrainer"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_console_handler: Optional[logging.Handler] = None


def setup_logging(level: str = "INFO") -> logging.Logger:
	"""Attach one shared stdout handler to the package logger.

	Safe to call repeatedly (streamlit reruns the script on every interaction).
	An unknown level name falls back to INFO.
	"""
	global _console_handler

	if _console_handler is None:
		_console_handler = logging.StreamHandler(sys.stdout)
		_console_handler.setFormatter(logging.Formatter(LOG_FORMAT))

	logger = logging.getLogger(PACKAGE_LOGGER)
	if _console_handler not in logger.handlers:
		logger.addHandler(_console_handler)
	logger.propagate = False

	numeric_level = logging.getLevelName(level.upper())
	if isinstance(numeric_level, int):
		logger.setLevel(numeric_level)
	else:
		logger.setLevel(logging.INFO)
		logger.error("Invalid log level: %s", level)
	return logger
