"""Storage that inserts packets into a MySQL table.

Settings: ``uri`` ("user:password@tcp(host:port)/dbname") and ``table``;
the packet goes into the ``point`` column.
"""

from __future__ import annotations

import re
from typing import Any, Mapping
from urllib.parse import parse_qsl

import pymysql

from egtsproto.storage.records import _Message

_NET_ADDR = re.compile(r"(\w+)\((.*)\)")


def _parse_dsn(dsn: str) -> dict[str, Any]:
    """Turn a ``[user[:password]@][net[(addr)]]/dbname[?params]`` string into connect arguments."""
    head, sep, tail = dsn.rpartition("/")
    if not sep:
        raise ValueError("invalid DSN: missing the slash before the database name")
    database, _, query = tail.partition("?")
    creds, at, addr_part = head.rpartition("@")
    if not at:
        creds, addr_part = "", head
    user, _, rest = creds.partition(":")

    net, addr = "tcp", ""
    match = _NET_ADDR.fullmatch(addr_part)
    if match:
        net, addr = match.group(1), match.group(2)
    elif "(" in addr_part or ")" in addr_part:
        raise ValueError(f"invalid DSN address: {addr_part!r}")
    else:
        addr = addr_part

    kwargs: dict[str, Any] = {"user": user or None, "database": database or None}
    kwargs["password"] = rest
    if net == "unix":
        kwargs["unix_socket"] = addr or "/tmp/mysql.sock"
    elif net == "tcp":
        host, colon, port = (addr or "127.0.0.1:3306").rpartition(":")
        if not colon:
            host, port = addr, "3306"
        try:
            kwargs["port"] = int(port)
        except ValueError as exc:
            raise ValueError(f"invalid DSN port: {port!r}") from exc
        kwargs["host"] = host or "127.0.0.1"
    else:
        raise ValueError(f"unknown network in DSN: {net!r}")

    params = dict(parse_qsl(query))
    if "charset" in params:
        kwargs["charset"] = params["charset"]
    return kwargs


class MysqlConnector:
    """Inserts each packet as a JSON document into the configured table."""

    def __init__(self) -> None:
        self._connection: Any = None
        self._config: dict[str, str] = {}

    def init(self, cfg: Mapping[str, str] | None) -> None:
        """Connect to the database and check that it answers."""
        if cfg is None:
            raise ValueError("invalid configuration reference")
        self._config = dict(cfg)
        kwargs = _parse_dsn(self._config.get("uri", ""))
        try:
            self._connection = pymysql.connect(autocommit=True, **kwargs)
        except pymysql.MySQLError as exc:
            raise ConnectionError(f"MySQL connection error: {exc}") from exc
        try:
            self._connection.ping()
        except pymysql.MySQLError as exc:
            raise ConnectionError(f"MySQL is unavailable: {exc}") from exc

    def save(self, msg: _Message | None) -> None:
        """Insert the serialized packet."""
        if msg is None:
            raise ValueError("invalid packet reference")
        try:
            payload = msg.to_bytes()
        except (TypeError, ValueError) as exc:
            raise ValueError(f"packet serialization failed: {exc}") from exc
        if self._connection is None:
            raise ConnectionError("MySQL storage is not initialised")
        query = f"INSERT INTO {self._config.get('table', '')} (point) VALUES (%s)"
        try:
            with self._connection.cursor() as cursor:
                cursor.execute(query, (payload,))
        except pymysql.MySQLError as exc:
            raise ConnectionError(f"failed to insert record into MySQL: {exc}") from exc

    def close(self) -> None:
        """Close the database connection."""
        if self._connection is not None:
            self._connection.close()