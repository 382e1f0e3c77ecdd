"""Tests for the logging configuration."""

import json
import logging

from chunklab.logging_config import (
    ChunkLabLogger,
    JsonFormatter,
    MAX_PERFORMANCE_RECORDS,
    LogConfig,
    LogLevel,
    configure_logging,
    get_logger,
    performance_log,
    user_warning,
)


class TestLogConfig:
    """Test the configuration value."""

    def test_defaults(self):
        config = LogConfig()
        assert config.level == LogLevel.NORMAL
        assert config.console_output
        assert not config.file_output
        assert not config.collect_performance

    def test_to_dict(self, tmp_path):
        data = LogConfig(level=LogLevel.DEBUG, log_file=tmp_path / "x.log").to_dict()
        assert data["level"] == "debug"
        assert data["log_file"] == str(tmp_path / "x.log")


class TestChunkLabLogger:
    """Test the shared logger."""

    def setup_method(self):
        self.logger = ChunkLabLogger()

    def teardown_method(self):
        configure_logging(LogLevel.NORMAL, console_output=False, collect_performance=False)

    def test_singleton(self):
        assert ChunkLabLogger() is self.logger

    def test_get_logger(self):
        logger = get_logger("chunklab.tests")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "chunklab.tests"

    def test_configure_sets_level(self):
        configure_logging("debug", console_output=True)
        package_logger = logging.getLogger("chunklab")
        assert package_logger.level == logging.DEBUG
        assert len(package_logger.handlers) == 1

    def test_reconfigure_replaces_handlers(self):
        configure_logging("normal", console_output=True)
        configure_logging("normal", console_output=True)
        assert len(logging.getLogger("chunklab").handlers) == 1

    def test_file_output(self, tmp_path):
        log_file = tmp_path / "logs" / "chunklab.log"
        configure_logging("normal", console_output=False, file_output=True, log_file=log_file)
        user_warning("something to remember")
        assert "something to remember" in log_file.read_text(encoding="utf-8")

    def test_performance_collection(self):
        configure_logging("verbose", console_output=False, collect_performance=True)
        before = len(self.logger.performance_logs)
        performance_log("chunk", 0.25, chunks=3)
        assert len(self.logger.performance_logs) == before + 1
        assert self.logger.performance_logs[-1]["chunks"] == 3

    def test_performance_records_bounded(self):
        """Only the most recent timings are kept across runs."""
        configure_logging("normal", console_output=False, collect_performance=True)
        for i in range(MAX_PERFORMANCE_RECORDS + 5):
            performance_log("chunk", 0.01, index=i)
        assert len(self.logger.performance_logs) == MAX_PERFORMANCE_RECORDS
        assert self.logger.performance_logs[-1]["index"] == MAX_PERFORMANCE_RECORDS + 4
        assert self.logger.performance_logs[0]["index"] == 5

    def test_performance_off_by_default(self):
        configure_logging("normal", console_output=False, collect_performance=False)
        before = len(self.logger.performance_logs)
        performance_log("chunk", 0.25)
        assert len(self.logger.performance_logs) == before

    def test_parse_size(self):
        assert self.logger._parse_size("10MB") == 10 * 1024 * 1024
        assert self.logger._parse_size("1KB") == 1024
        assert self.logger._parse_size(512) == 512


class TestJsonFormatter:
    """Test structured output."""

    def test_extra_fields_included(self):
        record = logging.LogRecord("chunklab.x", logging.INFO, __file__, 10, "hello %s", ("world",), None)
        record.operation = "route"
        data = json.loads(JsonFormatter().format(record))
        assert data["message"] == "hello world"
        assert data["level"] == "INFO"
        assert data["operation"] == "route"
