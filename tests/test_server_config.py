"""Tests for server/config.py -- Settings defaults and env overrides."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest
from server.config import Settings

_ENV_VARS = (
    "FLASHDECK_DATA_DIR",
    "FLASHDECK_COLLECTION",
    "FLASHDECK_UNIT",
    "FLASHDECK_STORAGE",
    "DEMO_MODE",
    "DATABASE_URL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults(tmp_path):
    settings = Settings(data_dir=tmp_path)
    assert settings.collection == 'flashcards_v1'
    assert settings.unit_is_minutes is True
    assert settings.unit_label == 'minutes'
    assert settings.storage_backend == 'file'
    assert settings.database_url == f"sqlite:///{tmp_path / 'flashdeck.db'}"


def test_data_dir_from_env(tmp_path, monkeypatch):
    monkeypatch.setenv("FLASHDECK_DATA_DIR", str(tmp_path))
    assert Settings().data_dir == tmp_path


def test_unit_from_env(monkeypatch):
    monkeypatch.setenv("FLASHDECK_UNIT", "days")
    assert Settings().unit_is_minutes is False
    monkeypatch.setenv("FLASHDECK_UNIT", "Minutes")
    assert Settings().unit_is_minutes is True


def test_demo_mode_env(monkeypatch):
    monkeypatch.setenv("DEMO_MODE", "false")
    assert Settings().unit_label == 'days'
    monkeypatch.setenv("DEMO_MODE", "yes")
    assert Settings().unit_label == 'minutes'


def test_unit_env_wins_over_demo_mode(monkeypatch):
    monkeypatch.setenv("FLASHDECK_UNIT", "days")
    monkeypatch.setenv("DEMO_MODE", "true")
    assert Settings().unit_is_minutes is False


def test_invalid_env_values_ignored(monkeypatch):
    monkeypatch.setenv("FLASHDECK_UNIT", "weeks")
    monkeypatch.setenv("FLASHDECK_STORAGE", "redis")
    settings = Settings()
    assert settings.unit_is_minutes is True
    assert settings.storage_backend == 'file'


def test_constructor_overrides_env(monkeypatch):
    monkeypatch.setenv("FLASHDECK_UNIT", "days")
    monkeypatch.setenv("FLASHDECK_COLLECTION", "env_deck")
    settings = Settings(unit_is_minutes=True, collection='mine', database_url='sqlite://')
    assert settings.unit_is_minutes is True
    assert settings.collection == 'mine'
    assert settings.database_url == 'sqlite://'
