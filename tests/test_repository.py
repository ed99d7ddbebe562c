import logging
from unittest import mock

import pytest

from egtsproto.storage.records import NavRecord
from egtsproto.storage.repository import (
    InvalidStorageError,
    LogConnector,
    Repository,
    UnknownStorageError,
)


class _Recorder:
    def __init__(self, journal, name, fail=False):
        self.journal = journal
        self.name = name
        self.fail = fail

    def save(self, msg):
        self.journal.append((self.name, msg.to_bytes()))
        if self.fail:
            raise ConnectionError(self.name)


def test_empty_storages_are_rejected():
    with pytest.raises(InvalidStorageError, match="storage not found"):
        Repository().load_storages({})


def test_unknown_storage_is_rejected():
    with pytest.raises(UnknownStorageError, match="storage isn't support yet"):
        Repository().load_storages({"clickhouse": {}})


@mock.patch("redis.Redis")
def test_load_redis_storage(redis_cls):
    repo = Repository()
    repo.load_storages({"redis": {"server": "localhost:6379", "queue": "egts", "db": "0"}})
    assert len(repo.stores) == 1
    record = NavRecord(client=1)
    repo.save(record)
    redis_cls.return_value.publish.assert_called_once_with("egts", record.to_bytes())


@mock.patch("redis.Redis")
def test_failed_init_adds_nothing(redis_cls):
    repo = Repository()
    with pytest.raises(ValueError):
        repo.load_storages({"redis": {"queue": "egts"}})
    assert repo.stores == []


def test_save_goes_to_every_store_in_order():
    journal = []
    repo = Repository()
    repo.add_store(_Recorder(journal, "first"))
    repo.add_store(_Recorder(journal, "second"))
    record = NavRecord(client=2)
    repo.save(record)
    assert [name for name, _ in journal] == ["first", "second"]
    assert all(payload == record.to_bytes() for _, payload in journal)


def test_save_stops_at_first_failure():
    journal = []
    repo = Repository()
    repo.add_store(_Recorder(journal, "first", fail=True))
    repo.add_store(_Recorder(journal, "second"))
    with pytest.raises(ConnectionError):
        repo.save(NavRecord())
    assert [name for name, _ in journal] == ["first"]


def test_log_connector_logs_indented_packet(caplog):
    store = LogConnector()
    store.init(None)
    with caplog.at_level(logging.INFO, logger="egtsproto.storage.repository"):
        store.save(NavRecord(client=7))
    store.close()
    messages = [record.getMessage() for record in caplog.records]
    assert len(messages) == 1
    assert messages[0].startswith("Export packet")
    assert '\n    "client": 7,' in messages[0]