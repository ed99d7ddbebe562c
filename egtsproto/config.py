"""Receiver settings loaded from a YAML file."""

from __future__ import annotations

import datetime as _dt
import logging
from dataclasses import dataclass, field
from os import PathLike
from typing import Any

import yaml

_LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
}


@dataclass
class Settings:
    """Listen address, connection TTL, logging and storage settings."""

    host: str = ""
    port: str = ""
    conn_ttl: int = 0
    log_level: str = ""
    log_file_path: str = ""
    log_max_age_days: int = 0
    store: dict[str, dict[str, str]] = field(default_factory=dict)

    def empty_conn_ttl(self) -> _dt.timedelta:
        """How long an idle connection is kept open."""
        return _dt.timedelta(seconds=self.conn_ttl)

    def listen_address(self) -> str:
        """The ``host:port`` address the server listens on."""
        return f"{self.host}:{self.port}"

    def log_level_value(self) -> int:
        """The logging level named in the settings, INFO when unknown."""
        return _LOG_LEVELS.get(self.log_level, logging.INFO)


def _as_str(value: Any, key: str) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        raise ValueError(f"{key}: expected a scalar value")
    if isinstance(value, (_dt.date, _dt.datetime)):
        return value.isoformat()
    return str(value)


def _as_int(value: Any, key: str) -> int:
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{key}: expected an integer, got {value!r}")
    return value


def _as_store(value: Any) -> dict[str, dict[str, str]]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError("storage: expected a mapping")
    result: dict[str, dict[str, str]] = {}
    for name, params in value.items():
        if params is None:
            params = {}
        if not isinstance(params, dict):
            raise ValueError(f"storage.{name}: expected a mapping")
        result[str(name)] = {
            str(key): _as_str(item, f"storage.{name}.{key}") for key, item in params.items()
        }
    return result


def load_settings(path: str | PathLike[str]) -> Settings:
    """Read settings from a YAML file; unknown keys are ignored."""
    with open(path, encoding="utf-8") as stream:
        data = yaml.safe_load(stream)
    if data is None:
        return Settings()
    if not isinstance(data, dict):
        raise ValueError("configuration must be a mapping")
    return Settings(
        host=_as_str(data.get("host"), "host"),
        port=_as_str(data.get("port"), "port"),
        conn_ttl=_as_int(data.get("conn_ttl"), "conn_ttl"),
        log_level=_as_str(data.get("log_level"), "log_level"),
        log_file_path=_as_str(data.get("log_file_path"), "log_file_path"),
        log_max_age_days=_as_int(data.get("log_max_age_days"), "log_max_age_days"),
        store=_as_store(data.get("storage")),
    )