"""Pytest configuration for psd-layout tests."""

import logging

import pytest


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo log level changes made by the command line entry point."""
    package_logger = logging.getLogger("psd_layout")
    level = package_logger.level
    yield
    package_logger.setLevel(level)
