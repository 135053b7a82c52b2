"""
exporter.collectors.filefd
AUTHOR: carter-vin

File descriptor collector
- Linux only, reads <procfs>/sys/fs/file-nr
- exposes node_filefd_allocated and node_filefd_maximum gauges

file-nr is a single line of three tab separated values:
    allocated<TAB>unused<TAB>maximum

Registry policy:
- one Gauge per name, created on first sight, never removed
- every known gauge is emitted each cycle, including names the source
  stopped reporting (they stay at their last value)
- a failed parse aborts the cycle; gauges already set in that cycle keep
  their new values
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Callable, Iterator, TextIO

from prometheus_client import Gauge
from prometheus_client.metrics_core import Metric

from exporter.errors import CollectorError, InvalidValue, MalformedSource, SourceUnavailable
from exporter.procfs import DEFAULT_PROCFS, proc_file_path

NAMESPACE = "node"
FILEFD_SUBSYSTEM = "filefd"
FILE_NR = "sys/fs/file-nr"

# file-nr is separated by tabs, not spaces
FIELD_SEPARATOR = "\t"

# position -> name; field 1 is always zero since linux 2.6 and is skipped
FIELD_NAMES = {0: "allocated", 2: "maximum"}
MIN_FIELDS = 3


def parse_file_fd_stats(stream: TextIO, path: str | Path = FILE_NR) -> dict[str, str]:
    """
    Parse the first line of file-nr into name -> raw text

    Only the first line is significant; anything after it is ignored.
    Values are not validated here.
    """
    line = stream.readline().rstrip("\r\n")
    fields = line.split(FIELD_SEPARATOR)

    if len(fields) < MIN_FIELDS:
        raise MalformedSource(
            f"{path}: expected at least {MIN_FIELDS} tab separated fields, got {len(fields)}"
        )

    return {name: fields[index] for index, name in FIELD_NAMES.items()}


def parse_value(name: str, value: str) -> float:
    """
    Parse one field as a float

    Stricter than float(): digit separators ("1_000") and non-ASCII digits
    are rejected. Surrounding whitespace is tolerated.
    """
    if not value.isascii() or "_" in value:
        raise InvalidValue(name, value, "not a plain decimal number")
    try:
        return float(value)
    except ValueError as e:
        raise InvalidValue(name, value, str(e)) from e


def read_file_fd_stats(path: str | Path) -> dict[str, str]:
    """
    Open file-nr and parse it

    The file handle is released on every exit path.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            return parse_file_fd_stats(f, path)
    except (OSError, UnicodeDecodeError) as e:
        raise SourceUnavailable(f"read {path}: {e}") from e


class FileFDStatCollector:
    """
    Exposes file-nr stats as gauges

    Construction does no I/O; everything fallible happens in update().
    """

    def __init__(self, proc_root: str | Path = DEFAULT_PROCFS) -> None:
        self.path = proc_file_path(proc_root, FILE_NR)
        self._metrics: dict[str, Gauge] = {}
        self._lock = threading.Lock()

    def gauge_count(self) -> int:
        return len(self._metrics)

    def gauge_names(self) -> list[str]:
        return sorted(self._metrics)

    def _gauge(self, name: str) -> Gauge:
        gauge = self._metrics.get(name)
        if gauge is None:
            # registry=None: the host owns exposition, not the global REGISTRY
            gauge = Gauge(
                name,
                f"File descriptor statistics: {name}.",
                namespace=NAMESPACE,
                subsystem=FILEFD_SUBSYSTEM,
                registry=None,
            )
            self._metrics[name] = gauge
        return gauge

    def _collect(self) -> Iterator[Metric]:
        for gauge in self._metrics.values():
            yield from gauge.collect()

    def update(self, sink: Callable[[Metric], None]) -> None:
        """
        Run one collection cycle and send every known gauge to sink

        Raises:
        - SourceUnavailable / MalformedSource if file-nr is unusable
          (nothing is touched or emitted)
        - InvalidValue if a field is not a number
        """
        with self._lock:
            try:
                stats = read_file_fd_stats(self.path)
            except CollectorError as e:
                raise type(e)(f"couldn't get file-nr: {e}") from e

            for name, value in stats.items():
                gauge = self._gauge(name)
                gauge.set(parse_value(name, value))

            for metric in self._collect():
                sink(metric)
