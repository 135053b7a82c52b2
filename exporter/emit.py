"""
exporter.emit

AUTHOR: carter-vin

OUTPUT:
- Prometheus text exposition
- stdout and/or a file (textfile collector style)

Design goals:
- Create the output directory if missing
- Replace the file atomically so readers never see a partial exposition
- Provide explicit error surfaces (do not silently drop data)
"""

from __future__ import annotations

import os
import sys
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional


@dataclass(frozen=True)
class ExpositionTargets:
    """
    Emission destination configuration.
    """

    output_path: Optional[Path] = None
    emit_stdout: bool = True


def write_exposition_file(output_path: Path, text: str) -> None:
    """
    Write text to output_path via temp file + os.replace

    Failure semantics:
    - raises on IO errors; the temp file is removed
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{output_path.name}.",
        suffix=".tmp",
        dir=output_path.parent,
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(text)
            f.flush()
        os.replace(tmp_name, output_path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def emit_exposition(
    text: str,
    targets: ExpositionTargets,
    *,
    on_write_error: Optional[Callable[[Exception, Path], None]] = None,
) -> None:
    """
    Emit exposition text to configured targets.

    text:
    - full exposition, already newline terminated (generate_latest output)
    """
    if targets.emit_stdout:
        sys.stdout.write(text)
        sys.stdout.flush()

    if targets.output_path is None:
        return

    try:
        write_exposition_file(targets.output_path, text)
    except Exception as e:
        # Callback allows the caller to surface write errors without coupling modules
        if on_write_error is not None:
            on_write_error(e, targets.output_path)
        raise
