"""Tests for structured logging setup."""

import logging

import structlog

from signed_urls.common.logging import _redact_secrets, get_logger, setup_logging


def test_redacts_sensitive_keys():
    """Test that secrets and signatures are masked."""
    event = {"event": "rejected", "signature": "abc", "Secret": "hunter2", "path": "/hi"}

    redacted = _redact_secrets(None, "warning", event)

    assert redacted["signature"] == "***"
    assert redacted["Secret"] == "***"
    assert redacted["path"] == "/hi"


def test_modules_import_before_setup():
    """Test that module loggers work before logging is configured."""
    structlog.reset_defaults()

    import signed_urls
    import signed_urls.signer

    signed_urls.signer.logger.debug("Before setup", path="/p")
    get_logger("signed_urls.unconfigured").debug("Before setup", path="/hi")

    assert signed_urls.UrlSigner("hunter2").build("/p", {}).startswith("/p?signature=")


def test_setup_logging_emits_json(caplog):
    """Test JSON rendering through stdlib logging with redaction."""
    caplog.set_level(logging.DEBUG)
    setup_logging("DEBUG", "json")

    get_logger("signed_urls.test.json").info("Signed URL accepted", path="/hi", signature="abc")

    assert '"event": "Signed URL accepted"' in caplog.text
    assert '"logger": "signed_urls.test.json"' in caplog.text
    assert '"signature": "***"' in caplog.text


def test_logger_created_before_setup_uses_later_config(caplog):
    """Test that module-level loggers pick up configuration applied later."""
    caplog.set_level(logging.DEBUG)
    logger = get_logger("signed_urls.test.late")

    setup_logging("DEBUG", "json")
    logger.warning("Signed URL rejected", reason="invalid_signature")

    assert '"logger": "signed_urls.test.late"' in caplog.text
    assert '"reason": "invalid_signature"' in caplog.text


def test_setup_logging_filters_below_level(caplog):
    """Test that events under the configured level are dropped."""
    caplog.set_level(logging.DEBUG)
    setup_logging("WARNING", "json")

    get_logger("signed_urls.test.level").info("Hidden event")

    assert "Hidden event" not in caplog.text
