"""Unit tests for Rollbook logging configuration."""

import logging
import os
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from rollbook.logging import get_logger, mask_email, setup_logging


@pytest.fixture(autouse=True)
def reset_rollbook_logger():
    """Detach handlers added by setup_logging after each test."""
    yield
    logger = logging.getLogger("rollbook")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


@pytest.mark.unit
class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_creates_log_directory(self) -> None:
        """Log directory is created if it doesn't exist."""
        with tempfile.TemporaryDirectory() as tmpdir:
            log_dir = Path(tmpdir) / "nested" / "logs"
            setup_logging(log_dir=log_dir, console=False)

            assert log_dir.exists()
            assert (log_dir / "rollbook.log").exists()

    def test_log_format(self) -> None:
        """Log entries carry level and component name."""
        with tempfile.TemporaryDirectory() as tmpdir:
            setup_logging(log_dir=tmpdir, console=False)
            logging.getLogger("rollbook.lifecycle.service").info("format test")

            content = (Path(tmpdir) / "rollbook.log").read_text()
            # Format: 2026-01-28 16:30:45 | INFO     | rollbook.lifecycle.service | message
            assert " | INFO" in content
            assert " | rollbook.lifecycle.service | format test" in content

    def test_log_level_configurable(self) -> None:
        """Log level filters messages appropriately."""
        with tempfile.TemporaryDirectory() as tmpdir:
            logger = setup_logging(log_dir=tmpdir, level="WARNING", console=False)
            logger.info("should not appear")
            logger.warning("should appear")

            content = (Path(tmpdir) / "rollbook.log").read_text()
            assert "should not appear" not in content
            assert "should appear" in content

    @patch.dict(os.environ, {"ROLLBOOK_LOG_LEVEL": "DEBUG"})
    def test_log_level_from_env(self) -> None:
        """Log level can be set via environment variable."""
        with tempfile.TemporaryDirectory() as tmpdir:
            logger = setup_logging(log_dir=tmpdir, console=False)

            assert logger.level == logging.DEBUG

    def test_log_dir_from_env(self) -> None:
        """Log directory can be set via environment variable."""
        with (
            tempfile.TemporaryDirectory() as tmpdir,
            patch.dict(os.environ, {"ROLLBOOK_LOG_DIR": tmpdir}),
        ):
            setup_logging(console=False)

            assert (Path(tmpdir) / "rollbook.log").exists()

    def test_returns_rollbook_logger(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            logger = setup_logging(log_dir=tmpdir, console=False)

            assert logger.name == "rollbook"

    def test_no_duplicate_handlers_on_repeated_setup(self) -> None:
        """Repeated setup_logging calls don't add duplicate handlers."""
        with tempfile.TemporaryDirectory() as tmpdir:
            setup_logging(log_dir=tmpdir, console=False)
            setup_logging(log_dir=tmpdir, console=False)

            assert len(logging.getLogger("rollbook").handlers) == 1

    def test_rotation_configured(self) -> None:
        """RotatingFileHandler is configured with the given size limits."""
        with tempfile.TemporaryDirectory() as tmpdir:
            logger = setup_logging(
                log_dir=tmpdir, max_bytes=1024, backup_count=3, console=False
            )

            (file_handler,) = logger.handlers
            assert file_handler.maxBytes == 1024
            assert file_handler.backupCount == 3


@pytest.mark.unit
class TestGetLogger:
    """Tests for get_logger function."""

    def test_get_logger_prefixes_rollbook(self) -> None:
        assert get_logger("lifecycle").name == "rollbook.lifecycle"

    def test_get_logger_no_double_prefix(self) -> None:
        assert get_logger("rollbook.api").name == "rollbook.api"


@pytest.mark.unit
class TestMaskEmail:
    """Tests for mask_email function."""

    @pytest.mark.parametrize(
        ("email", "expected"),
        [
            ("jane.doe@school.edu", "j***@school.edu"),
            ("a@x.com", "a***@x.com"),
            ("@x.com", "***@x.com"),
            ("not-an-email", "***"),
        ],
    )
    def test_masks_local_part(self, email: str, expected: str) -> None:
        assert mask_email(email) == expected
