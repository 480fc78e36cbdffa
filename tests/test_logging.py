"""
Tests for logging configuration
===============================
"""

import logging

from app.core.logging import get_logger, setup_logging


class TestLogging:
    def test_get_logger_is_named(self):
        logger = get_logger("app.services.change_review")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "app.services.change_review"

    def test_setup_sets_level_and_quiets_clients(self):
        setup_logging("debug")
        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.WARNING
        setup_logging("INFO")

    def test_unknown_level_falls_back_to_info(self):
        setup_logging("verbose")
        assert logging.getLogger().level == logging.INFO
