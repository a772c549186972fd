"""Tests for AIConfiguration and ConfigManager precedence."""

import dataclasses
import logging

import pytest

from apiai.config import AIConfiguration, ConfigManager, configure_logging


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ConfigManager.DEFAULTS:
        monkeypatch.delenv(key, raising=False)


def test_explicit_value_beats_env_and_default(monkeypatch):
    monkeypatch.setenv("APIAI_LANGUAGE", "ru")

    assert ConfigManager.get("APIAI_LANGUAGE", "fr") == "fr"
    assert ConfigManager.get("APIAI_LANGUAGE") == "ru"
    monkeypatch.delenv("APIAI_LANGUAGE")
    assert ConfigManager.get("APIAI_LANGUAGE") == "en"
    assert ConfigManager.is_using_default("APIAI_LANGUAGE")


@pytest.mark.parametrize("raw, expected", [("true", True), ("1", True), ("YES", True), ("false", False), ("", False)])
def test_get_bool(monkeypatch, raw, expected):
    monkeypatch.setenv("APIAI_WRITE_SOUND_LOG", raw)

    assert ConfigManager.get_bool("APIAI_WRITE_SOUND_LOG") is expected


def test_from_env_reads_environment(monkeypatch):
    monkeypatch.setenv("APIAI_API_KEY", "env-key")
    monkeypatch.setenv("APIAI_SUBSCRIPTION_KEY", "env-sub")
    monkeypatch.setenv("APIAI_WRITE_SOUND_LOG", "true")
    monkeypatch.setenv("APIAI_TIMEOUT", "12.5")

    config = AIConfiguration.from_env(language="ja")

    assert config.api_key == "env-key"
    assert config.subscription_key == "env-sub"
    assert config.language == "ja"
    assert config.write_sound_log is True
    assert config.timeout == 12.5
    assert config.timezone is None


def test_question_url_with_and_without_protocol_version():
    with_version = AIConfiguration(api_key="k", subscription_key="s", service_url="https://host/v1")
    without_version = AIConfiguration(api_key="k", subscription_key="s", protocol_version=None)

    assert with_version.question_url == "https://host/v1/query?v=20150910"
    assert without_version.question_url == "https://api.api.ai/v1/query"


def test_configuration_is_read_only():
    config = AIConfiguration(api_key="k", subscription_key="s")

    with pytest.raises(dataclasses.FrozenInstanceError):
        config.api_key = "other"


def test_unsupported_language_rejected():
    with pytest.raises(ValueError, match="Unsupported language"):
        AIConfiguration(api_key="k", subscription_key="s", language="xx")


def test_configure_logging_sets_package_level(monkeypatch):
    monkeypatch.setenv("APIAI_LOG_LEVEL", "debug")

    configure_logging()
    assert logging.getLogger("apiai").level == logging.DEBUG

    configure_logging("error")
    assert logging.getLogger("apiai.client.transport").getEffectiveLevel() == logging.ERROR
    logging.getLogger("apiai").setLevel(logging.NOTSET)
