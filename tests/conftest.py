"""
Shared fixtures: a fake procfs tree under tmp_path
"""

from pathlib import Path

import pytest


@pytest.fixture
def fake_procfs(tmp_path: Path):
    """
    Returns (proc_root, write) where write(content) sets sys/fs/file-nr
    """
    proc_root = tmp_path / "proc"
    file_nr = proc_root / "sys" / "fs" / "file-nr"
    file_nr.parent.mkdir(parents=True)

    def write(content: str) -> Path:
        file_nr.write_text(content, encoding="utf-8")
        return file_nr

    return proc_root, write
