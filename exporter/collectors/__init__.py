"""
exporter.collectors
AUTHOR: carter-vin

Collector registration

Collectors are composed explicitly: FACTORIES is a plain literal mapping,
and the host builds the instances it wants at startup.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable

from exporter.collectors.base import Collector, CollectorOutcome, run_collector
from exporter.collectors.filefd import FILEFD_SUBSYSTEM, FileFDStatCollector

FACTORIES: dict[str, Callable[[Path], Collector]] = {
    FILEFD_SUBSYSTEM: FileFDStatCollector,
}


def build_collectors(names: Iterable[str], proc_root: str | Path) -> dict[str, Collector]:
    """
    Instantiate the named collectors, preserving order

    Unknown names raise ValueError.
    """
    collectors: dict[str, Collector] = {}
    for name in names:
        factory = FACTORIES.get(name)
        if factory is None:
            raise ValueError(f"unknown collector: {name} (available: {', '.join(sorted(FACTORIES))})")
        collectors[name] = factory(Path(proc_root))
    return collectors


__all__ = [
    "Collector",
    "CollectorOutcome",
    "FACTORIES",
    "FileFDStatCollector",
    "build_collectors",
    "run_collector",
]
