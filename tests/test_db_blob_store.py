"""Tests for server/db/blob_store.py -- SQL-backed blob storage."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from server.app import app
from server.config import Settings
from server.db.blob_store import SqlBlobStore
from server.db.session import get_session_factory, init_db, reset_engine
from server.dependencies import get_clock, get_settings
from study.storage import CardStore, StorageError


@pytest.fixture
def settings(tmp_path):
    s = Settings(
        data_dir=tmp_path,
        storage_backend='sql',
        database_url=f"sqlite:///{tmp_path / 'test.db'}",
    )
    reset_engine()
    init_db(s)
    yield s
    reset_engine()


def test_get_missing_key_is_none(settings):
    blobs = SqlBlobStore(get_session_factory(settings))
    assert blobs.get('nothing') is None


def test_set_get_overwrite_delete(settings):
    blobs = SqlBlobStore(get_session_factory(settings))
    blobs.set('k', [{'a': 1}])
    assert blobs.get('k') == [{'a': 1}]
    blobs.set('k', [])
    assert blobs.get('k') == []
    blobs.delete('k')
    assert blobs.get('k') is None


def test_card_store_on_sql(settings):
    store = CardStore(SqlBlobStore(get_session_factory(settings)))
    card = store.add_card('Q?', 'A.', now=0)
    reopened = CardStore(SqlBlobStore(get_session_factory(settings)))
    assert reopened.get_card(card.card_id) == card


def test_sqlalchemy_errors_become_storage_errors():
    class BrokenFactory:
        def __call__(self):
            raise OperationalError("SELECT 1", {}, Exception("db down"))

    blobs = SqlBlobStore(BrokenFactory())
    with pytest.raises(StorageError) as exc:
        blobs.get('k')
    assert exc.value.kind == 'unavailable'
    with pytest.raises(StorageError) as exc:
        blobs.set('k', [])
    assert exc.value.kind == 'write_failed'


def test_api_on_sql_backend(settings):
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_clock] = lambda: (lambda: 0)
    try:
        client = TestClient(app)
        card_id = client.post("/cards", json={"question": "Q", "answer": "A"}).json()['card_id']
        body = client.post("/study/review", json={"card_id": card_id, "rating": "easy"}).json()
        assert body['card']['interval'] == 3
        assert body['card']['ease'] == 2.65
    finally:
        app.dependency_overrides.clear()
