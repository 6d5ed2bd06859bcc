"""Unit tests for the logging configuration."""

import logging

import pytest
import structlog

from country_series.logging import configure_logging


def test_configure_logging(mocker):
    """Test that the logging is configured correctly."""
    mock_basic_config = mocker.patch("logging.basicConfig")
    configure_logging(level="debug")
    mock_basic_config.assert_called_with(
        level=logging.DEBUG, format="%(message)s", stream=mocker.ANY
    )

    configure_logging(level="INFO", json_output=True)
    mock_basic_config.assert_called_with(
        level=logging.INFO, format="%(message)s", stream=mocker.ANY
    )

    with pytest.raises(ValueError, match="Unsupported log level"):
        configure_logging(level="invalid")


def test_configure_logging_defaults_to_warning(mocker):
    """Without arguments only warnings and above are emitted."""
    mock_basic_config = mocker.patch("logging.basicConfig")
    configure_logging()
    mock_basic_config.assert_called_with(
        level=logging.WARNING, format="%(message)s", stream=mocker.ANY
    )


def test_configure_logging_binds_data_file(mocker):
    """The data file is bound as context and replaced on reconfiguration."""
    mocker.patch("logging.basicConfig")
    configure_logging(data_file="first.csv")
    assert structlog.contextvars.get_contextvars() == {"data_file": "first.csv"}
    configure_logging()
    assert structlog.contextvars.get_contextvars() == {}
