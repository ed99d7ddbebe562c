"""A set of output storages and the logging fallback storage."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Callable, Mapping, Protocol

from egtsproto.storage.mysql_store import MysqlConnector
from egtsproto.storage.rabbitmq_store import RabbitMQConnector
from egtsproto.storage.records import _Message
from egtsproto.storage.redis_store import RedisConnector

_log = logging.getLogger(__name__)


class InvalidStorageError(LookupError):
    """No storage is configured."""

    def __init__(self, message: str = "storage not found") -> None:
        super().__init__(message)


class UnknownStorageError(LookupError):
    """A configured storage is not supported."""

    def __init__(self, message: str = "storage isn't support yet") -> None:
        super().__init__(message)


class _Saver(Protocol):
    def save(self, msg: _Message) -> None: ...


class _Store(_Saver, Protocol):
    def init(self, cfg: Mapping[str, str] | None) -> None: ...

    def close(self) -> None: ...


class LogConnector:
    """Storage that writes each packet to the log as indented JSON."""

    def __init__(self) -> None:
        self.settings: dict[str, str] = {}
        self.closed = False

    def init(self, cfg: Mapping[str, str] | None) -> None:
        """Remember the settings, if any, and mark the storage open."""
        self.settings = dict(cfg or {})
        self.closed = False
        _log.debug("log storage ready")

    def save(self, msg: _Message) -> None:
        """Log the packet."""
        text = json.dumps(json.loads(msg.to_bytes()), indent=4, ensure_ascii=False)
        _log.info("Export packet packet=%s", text)

    def close(self) -> None:
        """Mark the storage closed."""
        self.closed = True


_CONNECTORS: dict[str, Callable[[], _Store]] = {
    "rabbitmq": RabbitMQConnector,
    "redis": RedisConnector,
    "mysql": MysqlConnector,
}


@dataclass
class Repository:
    """Storages every exported packet is written to."""

    stores: list[_Saver] = field(default_factory=list)

    def add_store(self, store: _Saver) -> None:
        """Add a storage."""
        self.stores.append(store)

    def save(self, msg: _Message) -> None:
        """Save to every storage in order, stopping at the first failure."""
        for store in self.stores:
            store.save(msg)

    def load_storages(self, storages: Mapping[str, Mapping[str, str]]) -> None:
        """Create, initialise and add the storages named in the settings."""
        if not storages:
            raise InvalidStorageError()
        for name, params in storages.items():
            factory = _CONNECTORS.get(name)
            if factory is None:
                raise UnknownStorageError()
            store = factory()
            store.init(params)
            self.add_store(store)