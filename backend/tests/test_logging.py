"""
Tests for log sanitizing helpers and formatters.
"""

import json
import logging

from app.core.logging_config import (
    JSONFormatter,
    LoggerAdapter,
    filter_sensitive_data,
    truncate_large_data,
)


class TestFilterSensitiveData:

    def test_masks_credentials_and_birthdate(self):
        data = {
            "email": "a@example.com",
            "password": "secret123",
            "access_token": "abc",
            "profile": {"birthdate": "1990-01-01", "height": 170},
            "items": [{"hashed_password": "x"}],
        }

        filtered = filter_sensitive_data(data)

        assert filtered["email"] == "a@example.com"
        assert filtered["password"] == "***FILTERED***"
        assert filtered["access_token"] == "***FILTERED***"
        assert filtered["profile"] == {"birthdate": "***FILTERED***", "height": 170}
        assert filtered["items"] == [{"hashed_password": "***FILTERED***"}]

    def test_primitives_pass_through(self):
        assert filter_sensitive_data(42) == 42


class TestTruncate:

    def test_short_text_unchanged(self):
        assert truncate_large_data("abc", max_length=10) == "abc"

    def test_long_text_truncated(self):
        result = truncate_large_data("x" * 20, max_length=5)
        assert result.startswith("xxxxx...")
        assert "total length: 20" in result


class TestJSONFormatter:

    def test_includes_filtered_extra_fields(self):
        logger = logging.getLogger("lifeclock.test")
        record = logger.makeRecord(
            logger.name, logging.INFO, __file__, 1, "Estimate computed", None, None,
            extra={"extra_fields": {"user_id": "u1", "token": "abc"}},
        )

        payload = json.loads(JSONFormatter().format(record))

        assert payload["message"] == "Estimate computed"
        assert payload["level"] == "INFO"
        assert payload["user_id"] == "u1"
        assert payload["token"] == "***FILTERED***"

    def test_adapter_merges_context(self):
        adapter = LoggerAdapter(logging.getLogger("lifeclock.test"), {"user_id": "u1"})
        _, kwargs = adapter.process("hi", {"extra": {"extra_fields": {"step": 2}}})
        assert kwargs["extra"]["extra_fields"] == {"user_id": "u1", "step": 2}
