"""
exporter.config
AUTHOR: carter-vin

Exporter configuration

Precedence (highest first):
1) CLI options
2) env vars (FILEFD_EXPORTER_*)
3) defaults below
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping, Optional

from exporter.procfs import DEFAULT_PROCFS

PROCFS_ENV = "FILEFD_EXPORTER_PROCFS"
LISTEN_ADDRESS_ENV = "FILEFD_EXPORTER_LISTEN_ADDRESS"
PORT_ENV = "FILEFD_EXPORTER_PORT"
COLLECTORS_ENV = "FILEFD_EXPORTER_COLLECTORS"

DEFAULT_LISTEN_ADDRESS = "0.0.0.0"
DEFAULT_PORT = 9100
DEFAULT_COLLECTORS = ("filefd",)


@dataclass(frozen=True)
class ExporterConfig:
    procfs: Path = DEFAULT_PROCFS
    listen_address: str = DEFAULT_LISTEN_ADDRESS
    port: int = DEFAULT_PORT
    collectors: tuple[str, ...] = DEFAULT_COLLECTORS

    def with_overrides(self, **overrides: Any) -> "ExporterConfig":
        """
        Apply CLI overrides; None means "not given"
        """
        given = {key: value for key, value in overrides.items() if value is not None}
        if "procfs" in given:
            given["procfs"] = Path(given["procfs"])
        if "collectors" in given:
            given["collectors"] = parse_collectors(given["collectors"])
        if "port" in given:
            given["port"] = parse_port(given["port"])
        return replace(self, **given)


def parse_port(value: Any) -> int:
    try:
        port = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"invalid port: {value!r}") from None
    if not 0 < port < 65536:
        raise ValueError(f"port out of range: {port}")
    return port


def parse_collectors(value: str | tuple[str, ...] | list[str]) -> tuple[str, ...]:
    """
    "filefd, other" -> ("filefd", "other"); blanks and duplicates dropped
    """
    items = value.split(",") if isinstance(value, str) else value
    names: list[str] = []
    for item in items:
        name = item.strip()
        if name and name not in names:
            names.append(name)
    if not names:
        raise ValueError("no collectors enabled")
    return tuple(names)


def load_config(env: Optional[Mapping[str, str]] = None) -> ExporterConfig:
    """
    Build config from defaults + env vars
    """
    if env is None:
        env = os.environ

    config = ExporterConfig()
    return config.with_overrides(
        procfs=env.get(PROCFS_ENV) or None,
        listen_address=env.get(LISTEN_ADDRESS_ENV) or None,
        port=env.get(PORT_ENV) or None,
        collectors=env.get(COLLECTORS_ENV) or None,
    )
