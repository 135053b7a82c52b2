"""exporter package: node-local Prometheus exporter for kernel fd stats."""

EXPORTER_VERSION = "0.1.0"
