# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Kindred Contributors

from __future__ import annotations

import json
import logging
import sys

import pytest
import structlog
from pydantic import ValidationError

from kindred.config import Settings
from kindred.logging_config import configure_logging, json_formatter


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings(database_url="sqlite+aiosqlite:///:memory:")
        assert settings.environment == "production"
        assert settings.log_format == "json"
        assert settings.max_path_depth == 5

    def test_rejects_unknown_log_format(self) -> None:
        with pytest.raises(ValidationError):
            Settings(database_url="sqlite+aiosqlite:///:memory:", log_format="xml")


class TestLogging:
    def test_json_formatter_emits_one_object(self) -> None:
        record = logging.LogRecord(
            "kindred.test", logging.INFO, __file__, 1, "Added %s", ("edge",), None
        )
        payload = json.loads(json_formatter().format(record))
        assert payload["level"] == "info"
        assert payload["logger"] == "kindred.test"
        assert payload["event"] == "Added edge"
        assert "timestamp" in payload

    def test_json_formatter_renders_exceptions(self) -> None:
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            exc_info = sys.exc_info()
        record = logging.LogRecord(
            "kindred.test", logging.ERROR, __file__, 1, "Write failed", (), exc_info
        )
        payload = json.loads(json_formatter().format(record))
        assert payload["level"] == "error"
        assert "RuntimeError: boom" in payload["exception"]

    def test_configure_json_format(self) -> None:
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            configure_logging(Settings(database_url="sqlite+aiosqlite:///:memory:"))
            assert root.level == logging.INFO
            assert isinstance(root.handlers[0].formatter, structlog.stdlib.ProcessorFormatter)
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)

    def test_configure_text_format(self) -> None:
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            configure_logging(
                Settings(
                    database_url="sqlite+aiosqlite:///:memory:",
                    log_format="text",
                    log_level="debug",
                )
            )
            assert root.level == logging.DEBUG
            assert len(root.handlers) == 1
            assert not isinstance(
                root.handlers[0].formatter, structlog.stdlib.ProcessorFormatter
            )
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)
