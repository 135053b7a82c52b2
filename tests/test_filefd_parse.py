"""
Contract tests for file-nr parsing.

file-nr is tab separated; field 1 is skipped.
"""

import io

import pytest

from exporter.collectors.filefd import parse_file_fd_stats, read_file_fd_stats
from exporter.errors import MalformedSource, SourceUnavailable


def test_parse_maps_fields_zero_and_two() -> None:
    stats = parse_file_fd_stats(io.StringIO("1234\t0\t9876"))

    assert stats == {"allocated": "1234", "maximum": "9876"}


def test_parse_ignores_field_one_content() -> None:
    """
    A nonzero unused field must not break parsing
    """
    stats = parse_file_fd_stats(io.StringIO("1\tgarbage\t2\n"))

    assert stats == {"allocated": "1", "maximum": "2"}


def test_parse_strips_line_terminator() -> None:
    stats = parse_file_fd_stats(io.StringIO("1024\t0\t65536\r\n"))

    assert stats["maximum"] == "65536"


def test_parse_only_reads_first_line() -> None:
    stats = parse_file_fd_stats(io.StringIO("5\t0\t6\nnot\tpart\tof\tit\n"))

    assert stats == {"allocated": "5", "maximum": "6"}


def test_parse_extra_fields_are_ignored() -> None:
    stats = parse_file_fd_stats(io.StringIO("5\t0\t6\t7\n"))

    assert stats == {"allocated": "5", "maximum": "6"}


def test_parse_space_separated_line_is_one_field() -> None:
    """
    Only tabs separate fields; "1 0 2" is a single field
    """
    with pytest.raises(MalformedSource, match="got 1"):
        parse_file_fd_stats(io.StringIO("1 0 2\n"))


@pytest.mark.parametrize("content", ["", "\n", "1234\n", "1234\t0\n"])
def test_parse_too_few_fields_is_malformed(content: str) -> None:
    with pytest.raises(MalformedSource):
        parse_file_fd_stats(io.StringIO(content))


def test_parse_does_not_validate_numbers() -> None:
    stats = parse_file_fd_stats(io.StringIO("abc\t0\txyz"))

    assert stats == {"allocated": "abc", "maximum": "xyz"}


def test_read_from_file(fake_procfs) -> None:
    _, write = fake_procfs
    path = write("3200\t0\t9223372036854775807\n")

    assert read_file_fd_stats(path) == {
        "allocated": "3200",
        "maximum": "9223372036854775807",
    }


def test_read_missing_file_is_source_unavailable(tmp_path) -> None:
    with pytest.raises(SourceUnavailable) as excinfo:
        read_file_fd_stats(tmp_path / "missing")

    assert isinstance(excinfo.value.__cause__, OSError)
