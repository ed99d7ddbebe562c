"""Storage that publishes packets to a RabbitMQ exchange.

Settings: ``host``, ``port``, ``user``, ``password``, ``exchange`` and ``key``.
"""

from __future__ import annotations

from typing import Any, Mapping

import pika
import pika.exceptions

from egtsproto.storage.records import _Message


class RabbitMQConnector:
    """Publishes each packet to the configured exchange."""

    def __init__(self) -> None:
        self._connection: Any = None
        self._channel: Any = None
        self._config: dict[str, str] = {}

    def init(self, cfg: Mapping[str, str] | None) -> None:
        """Connect to the broker and open a channel."""
        if cfg is None:
            raise ValueError("invalid configuration reference")
        self._config = dict(cfg)
        get = self._config.get
        url = f"amqp://{get('user', '')}:{get('password', '')}@{get('host', '')}:{get('port', '')}/"
        try:
            self._connection = pika.BlockingConnection(pika.URLParameters(url))
        except pika.exceptions.AMQPError as exc:
            raise ConnectionError(f"failed to connect to RabbitMQ: {exc}") from exc
        try:
            self._channel = self._connection.channel()
        except pika.exceptions.AMQPError as exc:
            raise ConnectionError(f"failed to open RabbitMQ channel: {exc}") from exc

    def save(self, msg: _Message | None) -> None:
        """Publish the serialized packet."""
        if msg is None:
            raise ValueError("invalid packet reference")
        try:
            payload = msg.to_bytes()
        except (TypeError, ValueError) as exc:
            raise ValueError(f"packet serialization failed: {exc}") from exc
        if self._channel is None:
            raise ConnectionError("RabbitMQ storage is not initialised")
        try:
            self._channel.basic_publish(
                exchange=self._config.get("exchange", ""),
                routing_key=self._config.get("key", ""),
                body=payload,
                properties=pika.BasicProperties(content_type="text/plain"),
            )
        except pika.exceptions.AMQPError as exc:
            raise ConnectionError(f"failed to send packet to RabbitMQ: {exc}") from exc

    def close(self) -> None:
        """Close the channel, then the connection."""
        if self._channel is not None:
            self._channel.close()
        if self._connection is not None:
            self._connection.close()