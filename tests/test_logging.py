"""
Tests for logging setup.
"""

import io
import logging

from hcpmirror.utils.logging import (
    FSOPS_LOGGER,
    ProgramFormatter,
    _parse_level,
    get_logger,
    setup_logging,
    setup_logging_from_config,
)


def record(level, msg):
    return logging.LogRecord("hcpmirror", level, __file__, 1, msg, None, None)


class TestProgramFormatter:

    def test_prefix(self):
        assert ProgramFormatter("hcp-link").format(record(logging.INFO, "Subject 100307")) == "hcp-link: Subject 100307"

    def test_warning_and_error_tags(self):
        fmt = ProgramFormatter("hcp-sync")
        assert fmt.format(record(logging.WARNING, "x")) == "hcp-sync: WARNING: x"
        assert fmt.format(record(logging.ERROR, "x")) == "hcp-sync: ERROR: x"


class TestSetupLogging:

    def test_parse_level(self):
        assert _parse_level("debug") == logging.DEBUG
        assert _parse_level(logging.WARNING) == logging.WARNING
        assert _parse_level("nonsense") == logging.INFO

    def test_replaces_handlers(self):
        setup_logging("hcp-sync")
        logger = setup_logging("hcp-sync")
        assert len(logger.handlers) == 1
        assert logger.propagate is False

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "logs" / "hcpmirror.log"
        logger = setup_logging("hcp-sync", log_file=log_file, console_enabled=False)
        get_logger("hcpmirror.sync.remote").info("Subject 100307")
        for handler in logger.handlers:
            handler.flush()
        assert "Subject 100307" in log_file.read_text()

    def test_quiet_silences_fsops(self, capsys):
        setup_logging("hcp-link", quiet=True)
        get_logger(FSOPS_LOGGER).info("clone: a -> b")
        get_logger("hcpmirror.sync.link").info("Subject 100307")
        err = capsys.readouterr().err
        assert "clone:" not in err
        assert "hcp-link: Subject 100307" in err

    def test_from_config(self, tmp_path):
        logger = setup_logging_from_config(
            {"logging": {"level": "WARNING", "file": "run.log", "console_enabled": False}},
            program="hcp-link",
            project_dir=tmp_path,
        )
        assert logger.level == logging.WARNING
        assert isinstance(logger.handlers[0], logging.FileHandler)
        assert logger.handlers[0].baseFilename == str(tmp_path / "run.log")

    def test_rich_console(self):
        from rich.logging import RichHandler

        logger = setup_logging_from_config({"logging": {"console_type": "rich"}}, program="hcp-sync")
        assert isinstance(logger.handlers[0], RichHandler)
