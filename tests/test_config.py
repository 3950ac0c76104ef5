import logging

import pytest

from decksearch import SearchConfigurationError, SearchSettings, Separator


def test_defaults():
    settings = SearchSettings()
    assert settings.log_level == logging.INFO
    assert settings.slow_call_ms == 100
    assert settings.default_separator is Separator.AND


def test_from_env_reads_prefixed_values():
    settings = SearchSettings.from_env(
        environ={
            "DECKSEARCH_LOG_LEVEL": "debug",
            "DECKSEARCH_SLOW_CALL_MS": "250",
            "DECKSEARCH_DEFAULT_SEPARATOR": "OR",
        }
    )
    assert settings.log_level == logging.DEBUG
    assert settings.slow_call_ms == 250
    assert settings.default_separator is Separator.OR


def test_from_env_uses_process_environment(monkeypatch):
    monkeypatch.setenv("SEARCH_LOG_LEVEL", "30")
    monkeypatch.delenv("SEARCH_SLOW_CALL_MS", raising=False)
    settings = SearchSettings.from_env(prefix="SEARCH_")
    assert settings.log_level == logging.WARNING
    assert settings.slow_call_ms == 100


@pytest.mark.parametrize(
    "key, value",
    [
        ("DECKSEARCH_LOG_LEVEL", "chatty"),
        ("DECKSEARCH_SLOW_CALL_MS", "soon"),
        ("DECKSEARCH_SLOW_CALL_MS", "-5"),
        ("DECKSEARCH_DEFAULT_SEPARATOR", "xor"),
    ],
)
def test_invalid_values_raise(key, value):
    with pytest.raises(SearchConfigurationError):
        SearchSettings.from_env(environ={key: value})


def test_configure_logging_applies_level():
    SearchSettings(log_level=logging.WARNING).configure_logging()
    assert logging.getLogger("decksearch").level == logging.WARNING
    SearchSettings().configure_logging()
