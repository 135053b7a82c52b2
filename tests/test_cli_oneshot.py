"""
Contract tests for the CLI surface
"""

import json

from typer.testing import CliRunner

from exporter.main import app


def _events(output: str) -> list[dict]:
    return [json.loads(line) for line in output.splitlines() if line.startswith("{")]


def test_oneshot_prints_exposition(fake_procfs) -> None:
    proc_root, write = fake_procfs
    write("1234\t0\t9876\n")
    runner = CliRunner()

    result = runner.invoke(app, ["oneshot", "--procfs", str(proc_root)])

    assert result.exit_code == 0
    assert "node_filefd_allocated 1234.0" in result.output
    assert "node_filefd_maximum 9876.0" in result.output
    assert [event["event_type"] for event in _events(result.output)] == [
        "exporter_start",
        "scrape_completed",
        "exporter_shutdown",
    ]


def test_oneshot_writes_output_file(fake_procfs, tmp_path) -> None:
    proc_root, write = fake_procfs
    write("1\t0\t2\n")
    output = tmp_path / "out" / "filefd.prom"
    runner = CliRunner()

    result = runner.invoke(
        app,
        ["oneshot", "--procfs", str(proc_root), "--output", str(output), "--no-stdout"],
    )

    assert result.exit_code == 0
    assert "node_filefd_maximum 2.0" in output.read_text(encoding="utf-8")
    assert "node_filefd_maximum" not in result.output


def test_oneshot_exits_nonzero_on_collector_failure(tmp_path) -> None:
    runner = CliRunner()

    result = runner.invoke(app, ["oneshot", "--procfs", str(tmp_path)])

    assert result.exit_code == 1
    events = _events(result.output)
    assert "collector_failed" in [event["event_type"] for event in events]
    assert events[-1]["event_type"] == "exporter_shutdown"


def test_oneshot_rejects_unknown_collector(tmp_path) -> None:
    runner = CliRunner()

    result = runner.invoke(app, ["oneshot", "--procfs", str(tmp_path), "--collectors", "nope"])

    assert result.exit_code == 2


def test_collectors_lists_filefd() -> None:
    result = CliRunner().invoke(app, ["collectors"])

    assert result.exit_code == 0
    assert result.output.split() == ["filefd"]
