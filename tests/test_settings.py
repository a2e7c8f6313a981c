"""Tests for AppSettings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from core.config import AppSettings
from core.domain.style import AggregationStyle


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for key in (
        "SWAPI_AGG_BASE_URL",
        "SWAPI_AGG_PERSON_ID",
        "SWAPI_AGG_DEFAULT_STYLE",
        "SWAPI_AGG_LOG_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


def test_defaults():
    settings = AppSettings()
    assert settings.root_url == "https://swapi.dev/api/people/1"
    assert settings.default_style is AggregationStyle.SEQUENTIAL
    assert settings.log_level == "WARNING"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("SWAPI_AGG_BASE_URL", "http://localhost:8000/api/")
    monkeypatch.setenv("SWAPI_AGG_PERSON_ID", "4")
    monkeypatch.setenv("SWAPI_AGG_DEFAULT_STYLE", "reactive")
    monkeypatch.setenv("SWAPI_AGG_LOG_LEVEL", "debug")

    settings = AppSettings()

    assert settings.root_url == "http://localhost:8000/api/people/4"
    assert settings.default_style is AggregationStyle.REACTIVE
    assert settings.log_level == "DEBUG"


def test_env_file(tmp_path):
    (tmp_path / ".env").write_text("SWAPI_AGG_PERSON_ID=3\n", encoding="utf-8")
    assert AppSettings().person_id == 3


def test_rejects_invalid_person_id():
    with pytest.raises(ValidationError):
        AppSettings(person_id=0)


def test_style_labels():
    assert AggregationStyle.default() is AggregationStyle.SEQUENTIAL
    assert AggregationStyle("chained").label() == "Chained continuations"
