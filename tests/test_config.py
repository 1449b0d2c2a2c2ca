"""
Tests for settings, client-config derivation and the user .env helpers.
"""

import logging

import pytest
from pydantic import ValidationError

from core.config import AppSettings, write_user_env_vars
from core.logging_setup import LOGGER_NAME, configure_logging
from core.services.order_items import SanitizePolicy


def test_defaults():
    settings = AppSettings(_env_file=None)
    assert settings.billing_base_url == "https://api.stripe.com/v1/"
    assert settings.currency == "usd"
    assert settings.sanitize_policy is SanitizePolicy.PADDED
    assert "{name}" in settings.invoice_message_template
    assert "{link}" in settings.invoice_message_template


def test_reads_prefixed_environment(monkeypatch):
    monkeypatch.setenv("ORDERLINK_BILLING_API_KEY", "sk_env")
    monkeypatch.setenv("ORDERLINK_SANITIZE_POLICY", "strict")
    monkeypatch.setenv("ORDERLINK_HTTP_TIMEOUT_SECONDS", "3.5")

    settings = AppSettings(_env_file=None)

    assert settings.billing_api_key == "sk_env"
    assert settings.sanitize_policy is SanitizePolicy.STRICT
    assert settings.http_timeout_seconds == 3.5


def test_messaging_base_url_derived_from_account_sid():
    settings = AppSettings(_env_file=None, messaging_account_sid="AC999")
    assert settings.messaging_base_url == "https://api.twilio.com/2010-04-01/Accounts/AC999/"


def test_explicit_messaging_base_url_wins():
    settings = AppSettings(_env_file=None, messaging_account_sid="AC999", messaging_base_url="https://m.test/")
    assert settings.messaging_base_url == "https://m.test/"


def test_client_configs(settings):
    billing = settings.billing_client_config()
    assert billing.api_key_sid == "sk_test_123"
    assert billing.api_key_secret is None
    assert billing.timeout_seconds == 2.0

    messaging = settings.messaging_client_config()
    assert messaging.api_key_sid == "SK456"
    assert messaging.api_key_secret == "secret"
    assert messaging.base_url.endswith("/Accounts/AC123/")


def test_missing_billing_key_fails_on_client_config():
    with pytest.raises(ValidationError):
        AppSettings(_env_file=None).billing_client_config()


def test_rejects_non_positive_timeout():
    with pytest.raises(ValidationError):
        AppSettings(_env_file=None, http_timeout_seconds=0)


def test_write_user_env_vars_merges(tmp_path):
    env_path = tmp_path / "cfg" / ".env"
    write_user_env_vars({"ORDERLINK_A": "1", "ORDERLINK_B": "2"}, env_path=env_path)
    write_user_env_vars({"ORDERLINK_B": "3", "ORDERLINK_C": None}, env_path=env_path)

    lines = env_path.read_text(encoding="utf-8").splitlines()
    assert lines[0].startswith("#")
    assert lines[1:] == ["ORDERLINK_A=1", "ORDERLINK_B=3"]


def test_configure_logging_is_idempotent():
    logger = configure_logging("debug")
    configure_logging("WARNING")

    ours = [h for h in logger.handlers if getattr(h, "_orderlink", False)]
    assert len(ours) == 1
    assert logger.name == LOGGER_NAME
    assert logger.level == logging.WARNING
