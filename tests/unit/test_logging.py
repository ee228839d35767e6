"""Tests for structured logging and correlation IDs."""

from __future__ import annotations

import json
import logging

from ecommerce_operator.logging import log_resource_event, sanitize_secrets
from ecommerce_operator.utils.context import get_correlation_id, with_correlation_id


class TestLogResourceEvent:
    """Test cases for log_resource_event function."""

    def test_json_record(self, caplog):
        """Test that events are logged as one JSON document."""
        logger = logging.getLogger("ecommerce_operator.test")
        with caplog.at_level(logging.INFO, logger="ecommerce_operator.test"):
            log_resource_event(
                logger,
                resource_kind="Secret",
                resource_name="postgres.url",
                namespace="tenant-a",
                event="created",
                reason="SecretProjected",
                message="Secret postgres.url created",
            )

        record = json.loads(caplog.records[-1].getMessage())
        assert record["controller"] == "ecommerce-operator"
        assert record["resource"] == "Secret"
        assert record["name"] == "postgres.url"
        assert record["reason"] == "SecretProjected"
        assert "correlation_id" not in record

    def test_includes_correlation_id(self, caplog):
        """Test that the active correlation ID is attached."""
        logger = logging.getLogger("ecommerce_operator.test")
        with caplog.at_level(logging.INFO, logger="ecommerce_operator.test"):
            with with_correlation_id("abc123"):
                log_resource_event(logger, "Job", "pg", "default", "created", "InitJobEnsured", "Job pg created")

        record = json.loads(caplog.records[-1].getMessage())
        assert record["correlation_id"] == "abc123"

    def test_redacts_secret_fields(self, caplog):
        """Test that secret values never reach the log."""
        logger = logging.getLogger("ecommerce_operator.test")
        with caplog.at_level(logging.INFO, logger="ecommerce_operator.test"):
            log_resource_event(
                logger, "Secret", "postgres.password", "tenant-a", "updated", "SecretProjected", "updated",
                password="hunter2",
            )

        assert "hunter2" not in caplog.records[-1].getMessage()


class TestSanitizeSecrets:
    """Test cases for sanitize_secrets function."""

    def test_redacts_known_fields(self):
        """Test that known secret fields are masked."""
        result = sanitize_secrets({"username": "u", "url": "jdbc:x", "name": "postgres.url"})

        assert result == {"username": "***REDACTED***", "url": "***REDACTED***", "name": "postgres.url"}


class TestCorrelationId:
    """Test cases for correlation ID context."""

    def test_scoped_to_block(self):
        """Test that the ID is only visible inside the block."""
        assert get_correlation_id() is None
        with with_correlation_id() as corr_id:
            assert get_correlation_id() == corr_id
            assert len(corr_id) == 16
        assert get_correlation_id() is None
