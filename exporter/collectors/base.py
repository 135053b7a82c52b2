"""
exporter.collectors.base
AUTHOR: carter-vin

Collector contract + light result wrapper -> prevent collector errors from
crashing a scrape
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, Optional, Protocol

from prometheus_client.metrics_core import Metric


class Collector(Protocol):
    def update(self, sink: Callable[[Metric], None]) -> None:
        ...


@dataclass(frozen=True)
class CollectorOutcome:
    """
    Normalized collector result
    - ok: false=failure, error details in error fields, metrics empty
    - metrics: everything the collector sent to its sink if ok=true
    - duration_s: wall time of the update call
    """

    name: str
    ok: bool
    duration_s: float
    metrics: list[Metric] = field(default_factory=list)
    error_type: Optional[str] = None
    error_message: Optional[str] = None


def run_collector(name: str, collector: Collector) -> CollectorOutcome:
    """
    Run one update cycle & collect failure as data

    Metrics from a failed cycle are dropped so a scrape never exposes a
    partially emitted collector.
    """
    metrics: list[Metric] = []
    start = time.monotonic()
    try:
        collector.update(metrics.append)
    except Exception as e:
        return CollectorOutcome(
            name=name,
            ok=False,
            duration_s=time.monotonic() - start,
            error_type=type(e).__name__,
            error_message=str(e),
        )
    return CollectorOutcome(
        name=name,
        ok=True,
        duration_s=time.monotonic() - start,
        metrics=metrics,
    )
