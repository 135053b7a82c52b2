"""
exporter.procfs
AUTHOR: carter-vin

procfs path resolution

The mount point is configurable so the exporter can read a host /proc
mounted into a container (e.g. /host/proc) or a fake tree in tests.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_PROCFS = Path("/proc")


def proc_file_path(proc_root: str | Path, *parts: str) -> Path:
    """
    Join path parts under the procfs root

    proc_file_path("/proc", "sys/fs/file-nr") -> /proc/sys/fs/file-nr
    """
    return Path(proc_root).joinpath(*parts)
