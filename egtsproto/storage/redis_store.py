"""Storage that publishes packets to a Redis channel.

Settings: ``server`` ("host:port"), ``queue``, ``password``, ``db``.
"""

from __future__ import annotations

from typing import Mapping

import redis

from egtsproto.storage.records import _Message


def _split_address(addr: str) -> tuple[str, int]:
    host, sep, port = addr.rpartition(":")
    if not sep:
        return addr, 6379
    try:
        return host, int(port)
    except ValueError as exc:
        raise ValueError(f"invalid Redis server port: {port!r}") from exc


class RedisConnector:
    """Publishes each packet to the configured Redis channel."""

    def __init__(self) -> None:
        self._conn: redis.Redis | None = None
        self._queue = ""
        self._config: dict[str, str] = {}

    def init(self, cfg: Mapping[str, str] | None) -> None:
        """Create the client from the storage settings."""
        if cfg is None:
            raise ValueError("invalid configuration reference")
        self._config = dict(cfg)

        addr = self._config.get("server")
        if addr is None:
            raise ValueError("Redis server address is not set")

        try:
            db = int(self._config.get("db", ""))
        except ValueError as exc:
            raise ValueError(f"invalid Redis database name: {exc}") from exc

        host, port = _split_address(addr)
        self._conn = redis.Redis(
            host=host,
            port=port,
            password=self._config.get("password") or None,
            db=db,
        )

        queue = self._config.get("queue")
        if queue is None:
            raise ValueError("invalid Redis queue name")
        self._queue = queue

    def save(self, msg: _Message | None) -> None:
        """Publish the serialized packet."""
        if msg is None:
            raise ValueError("invalid packet reference")
        try:
            payload = msg.to_bytes()
        except (TypeError, ValueError) as exc:
            raise ValueError(f"packet serialization failed: {exc}") from exc
        if self._conn is None:
            raise ConnectionError("Redis storage is not initialised")
        try:
            self._conn.publish(self._queue, payload)
        except redis.exceptions.RedisError as exc:
            raise ConnectionError(f"failed to send packet to Redis: {exc}") from exc

    def close(self) -> None:
        """Close the client."""
        if self._conn is not None:
            self._conn.close()