"""Shared test fixtures."""

import pytest

import mapper_formatting
from mapper_formatting import FormattingConfiguration, configure_logging
from mapper_formatting.config import FormattingSettings


@pytest.fixture
def settings():
    """Default settings, independent of the environment."""
    return FormattingSettings()


@pytest.fixture
def configuration(settings):
    """A fresh, unshared formatting configuration."""
    return FormattingConfiguration(settings)


@pytest.fixture(autouse=True)
def reset_formatting(settings):
    """Start and finish every test with an empty process-wide configuration."""
    mapper_formatting.reset(settings)
    yield
    mapper_formatting.reset(settings)


@pytest.fixture(autouse=True)
def reset_logging(settings):
    """Start and finish every test with the default logging configuration."""
    configure_logging(settings.log_level, settings.log_format)
    yield
    configure_logging(settings.log_level, settings.log_format)
