"""
exporter.node
AUTHOR: carter-vin

Bridge between our collectors and prometheus_client

NodeCollector follows the prometheus_client custom collector protocol
(a collect() generator), so every scrape of the registry runs one update
cycle per collector. Per collector it also reports:
- node_scrape_collector_duration_seconds{collector}
- node_scrape_collector_success{collector}

A failing collector is logged and reported with success=0; the others
are unaffected.
"""

from __future__ import annotations

from typing import Iterator, Mapping

from prometheus_client import CollectorRegistry
from prometheus_client.core import GaugeMetricFamily
from prometheus_client.metrics_core import Metric

from exporter import EXPORTER_VERSION
from exporter.collectors.base import Collector, CollectorOutcome, run_collector
from exporter.collectors.filefd import NAMESPACE
from exporter.logging import emit_collector_failed


class NodeCollector:
    def __init__(self, collectors: Mapping[str, Collector]) -> None:
        self.collectors = dict(collectors)
        self.last_outcomes: list[CollectorOutcome] = []

    def collect(self) -> Iterator[Metric]:
        duration = GaugeMetricFamily(
            f"{NAMESPACE}_scrape_collector_duration_seconds",
            "Duration of a collector scrape.",
            labels=["collector"],
        )
        success = GaugeMetricFamily(
            f"{NAMESPACE}_scrape_collector_success",
            "Whether a collector succeeded.",
            labels=["collector"],
        )

        outcomes: list[CollectorOutcome] = []
        for name, collector in self.collectors.items():
            outcome = run_collector(name, collector)
            outcomes.append(outcome)

            if not outcome.ok:
                emit_collector_failed(outcome, exporter_version=EXPORTER_VERSION)

            yield from outcome.metrics
            duration.add_metric([name], outcome.duration_s)
            success.add_metric([name], 1.0 if outcome.ok else 0.0)

        self.last_outcomes = outcomes

        yield duration
        yield success


def build_registry(collectors: Mapping[str, Collector]) -> tuple[CollectorRegistry, NodeCollector]:
    """
    Fresh registry holding only our collectors (no process/platform defaults)
    """
    registry = CollectorRegistry()
    node = NodeCollector(collectors)
    registry.register(node)
    return registry, node
