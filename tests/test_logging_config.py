import logging

from voicingtrainer.logging_config import PACKAGE_LOGGER, setup_logging


def test_setup_logging_is_idempotent():
	logger = setup_logging("DEBUG")
	setup_logging("DEBUG")
	assert logger.name == PACKAGE_LOGGER
	assert len(logger.handlers) == 1
	assert logger.level == logging.DEBUG
	assert not logger.propagate


def test_invalid_level_falls_back_to_info():
	logger = setup_logging("LOUD")
	assert logger.level == logging.INFO
