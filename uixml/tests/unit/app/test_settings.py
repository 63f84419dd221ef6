from __future__ import annotations

import logging

from uixml.app.settings import EngineSettings


def test_defaults_without_environment() -> None:
    settings = EngineSettings.from_env({})

    assert settings == EngineSettings()
    assert settings.package_scheme == "pkx:///"
    assert settings.case_sensitive is False


def test_values_are_read_from_prefixed_variables() -> None:
    settings = EngineSettings.from_env(
        {
            "UIXML_CASE_SENSITIVE": "yes",
            "UIXML_PACKAGE_SCHEME": "app:///",
            "UIXML_REQUEST_TIMEOUT_S": " 30 ",
            "UIXML_RETRIES": "0",
            "UIXML_MAX_WORKERS": "4",
            "UIXML_BASE_DIR": "/srv/ui",
        }
    )

    assert settings.case_sensitive is True
    assert settings.package_scheme == "app:///"
    assert settings.request_timeout_s == 30
    assert settings.retries == 0
    assert settings.max_workers == 4
    assert settings.base_dir == "/srv/ui"


def test_invalid_integers_fall_back_with_warning(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="uixml.app.settings"):
        settings = EngineSettings.from_env(
            {"UIXML_RETRIES": "many", "UIXML_MAX_WORKERS": "0", "UIXML_REQUEST_TIMEOUT_S": ""}
        )

    assert settings.retries == 2
    assert settings.max_workers == 2
    assert settings.request_timeout_s == 10
    assert "UIXML_RETRIES" in caplog.text
    assert "UIXML_MAX_WORKERS" in caplog.text
