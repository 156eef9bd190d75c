"""Tests for the top-level CLI group and logging setup."""

import logging

from fintrack.cli.main import cli
from fintrack.logger import LOGGER_NAME, setup_logging


def test_help_lists_command_groups(cli_runner):
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    for group in ("user", "account", "category", "transaction", "recurring"):
        assert group in result.output


def test_log_level_option(cli_runner, temp_db):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "--log-level", "error", "user", "list"]
    )
    assert result.exit_code == 0
    assert logging.getLogger(LOGGER_NAME).level == logging.ERROR


def test_invalid_log_level(cli_runner, temp_db):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "--log-level", "chatty", "user", "list"]
    )
    assert result.exit_code == 2


def test_setup_logging_with_file(tmp_path):
    log_file = tmp_path / "fintrack.log"
    logger = setup_logging("info", log_file=str(log_file))
    logging.getLogger("fintrack.domain.user").info("hello")
    for handler in logger.handlers:
        handler.flush()
    assert "fintrack.domain.user - INFO - hello" in log_file.read_text()
    assert len(logger.handlers) == 2

    logger = setup_logging()
    assert len(logger.handlers) == 1
