"""
exporter.errors
AUTHOR: carter-vin

Collector error taxonomy

- SourceUnavailable: stat source cannot be opened or read
- MalformedSource: stat source content has the wrong shape
- InvalidValue: a field cannot be parsed as a number

Collectors raise these and never swallow them; the host decides what a
failed cycle means (see exporter.collectors.base.run_collector).
"""

from __future__ import annotations


class CollectorError(Exception):
    """Base class for errors raised by a collector update cycle."""


class SourceUnavailable(CollectorError):
    pass


class MalformedSource(CollectorError):
    pass


class InvalidValue(CollectorError):
    """
    A field's text could not be parsed as a float

    name and value are kept for diagnosis without re-running
    """

    def __init__(self, name: str, value: str, reason: str = "") -> None:
        self.name = name
        self.value = value
        message = f"invalid value {value!r} for {name!r} in file-nr"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
