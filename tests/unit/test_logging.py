"""Test FolderIndexLogger filtering and external delivery"""

import asyncio
import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from folderindex.logging import FolderIndexLogger, LogConfig


def test_should_log_respects_verbosity():
    config = LogConfig(verbose=1)

    assert config.should_log(0)
    assert config.should_log(1)
    assert not config.should_log(2)


def test_external_logger_receives_structured_record():
    external = MagicMock()
    logger = FolderIndexLogger(verbose=2, external_logger=external, use_rich=False)

    logger.debug("Lookup attempt 1/20", category="resolver", auxiliary={"present": False})

    external.assert_called_once()
    record = external.call_args.args[0]
    assert record["message"] == {"message": "Lookup attempt 1/20", "level": 2}
    assert record["category"] == "resolver"
    assert record["auxiliary"] == {"present": False}
    assert "timestamp" in record


def test_filtered_messages_not_delivered():
    external = MagicMock()
    logger = FolderIndexLogger(verbose=0, external_logger=external)

    logger.info("hidden")
    logger.debug("hidden")
    logger.error("shown")

    external.assert_called_once()
    assert external.call_args.args[0]["message"]["level"] == 0


def test_rich_output_escapes_markup():
    logger = FolderIndexLogger(verbose=2, use_rich=True)
    logger.console = MagicMock()

    logger.info("[a](https://docs.example.com/a)", category="run", auxiliary={"name": "[b]"})

    printed = logger.console.print.call_args.args[0]
    assert "\\[a]" in printed
    assert "\\[b]" in printed


def test_long_auxiliary_values_truncated():
    logger = FolderIndexLogger(verbose=2, use_rich=False)

    formatted = logger._format_auxiliary({"text": "x" * 200, "url": "y" * 200})

    assert formatted["text"].endswith("...")
    assert len(formatted["text"]) == 80
    assert formatted["url"] == "y" * 200


@pytest.mark.asyncio
async def test_async_external_logger_delivery_is_tracked():
    external = AsyncMock()
    logger = FolderIndexLogger(verbose=1, external_logger=external)

    logger.info("Navigating", category="page")

    assert len(logger._pending) == 1
    await asyncio.gather(*logger._pending)
    await asyncio.sleep(0)

    external.assert_awaited_once()
    assert not logger._pending


@pytest.mark.asyncio
async def test_async_external_logger_failure_is_reported():
    external = AsyncMock(side_effect=RuntimeError("sink down"))
    logger = FolderIndexLogger(verbose=1, external_logger=external)

    with patch("folderindex.logging.logger") as module_logger:
        logger.info("Navigating", category="page")
        await asyncio.gather(*logger._pending, return_exceptions=True)
        await asyncio.sleep(0)

    module_logger.error.assert_called_once()
    assert "sink down" in module_logger.error.call_args.args[0]
    assert not logger._pending
