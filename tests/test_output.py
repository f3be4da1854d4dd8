# tests/test_output.py
"""
Tests for the CSV record writer and parser.

Run: pytest -v
"""

from __future__ import annotations

import os

import pytest

from primeform.output_manager import RecordWriter, format_record, read_records, resolve_output_path
from primeform.records import FIELDS, GERMAIN, PRIME, SAFE, SearchRecord, Tags
from primeform.search import search

# ---------- helpers -----------------------------------------------------------


def _record(n: int = 2**127 - 1) -> SearchRecord:
    return SearchRecord(
        x=5, y=7, z=11, n=n,
        tags_n=Tags.of([PRIME]),
        tags_x=Tags.of([GERMAIN, SAFE, PRIME]),
        tags_y=Tags.of([SAFE, PRIME]),
        tags_z=Tags.of([GERMAIN, SAFE, PRIME]),
    )


# ---------- tags --------------------------------------------------------------


def test_tags_keep_canonical_order():
    assert Tags.of([PRIME, GERMAIN]).labels == (GERMAIN, PRIME)
    assert Tags.of([PRIME, GERMAIN]) == Tags.of([GERMAIN, PRIME])


def test_tags_serialize_as_json_list():
    assert str(Tags.of([GERMAIN, PRIME])) == '["Germain", "Prime"]'
    assert str(Tags()) == "[]"


def test_tags_parse_rejects_unknown_labels():
    with pytest.raises(ValueError):
        Tags.parse('["Prime", "Lucky"]')
    with pytest.raises(ValueError):
        Tags.parse('"Prime"')


# ---------- writer / reader ---------------------------------------------------


def test_header_precedes_rows(tmp_path):
    path = tmp_path / "out.csv"
    with RecordWriter(path) as out:
        out.write(_record())
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == ",".join(FIELDS)
    assert lines[1].startswith("5,7,11,170141183460469231731687303715884105727,")
    assert '"[""Germain"", ""Safe"", ""Prime""]"' in lines[1]


def test_empty_run_writes_only_header(tmp_path):
    path = tmp_path / "sub" / "out.csv"
    with RecordWriter(path):
        pass
    assert read_records(path) == []


def test_bare_file_name_in_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with RecordWriter("plain.csv") as out:
        out.write(_record())
    assert len(read_records(tmp_path / "plain.csv")) == 1


def test_round_trip(tmp_path):
    path = tmp_path / "out.csv"
    records = [_record(), _record(n=1907), SearchRecord(3, 3, 3, 0, Tags(), Tags(), Tags(), Tags())]
    with RecordWriter(path) as out:
        for r in records:
            out.write(r)
    assert out.count == 3
    assert read_records(path) == records


def test_search_output_round_trips(tmp_path, engine):
    path = tmp_path / "index.csv"
    emitted: list[SearchRecord] = []

    def sink(rec):
        emitted.append(rec)
        out.write(rec)

    with RecordWriter(path) as out:
        summary = search([3, 5, 7, 11], sink, engine=engine)
    assert summary.accepted == len(emitted) > 0
    assert read_records(path) == emitted


def test_writer_truncates_existing_file(tmp_path):
    path = tmp_path / "out.csv"
    path.write_text("old content\n", encoding="utf-8")
    with RecordWriter(path) as out:
        out.write(_record())
    assert len(read_records(path)) == 1


def test_write_before_open_fails(tmp_path):
    with pytest.raises(RuntimeError):
        RecordWriter(tmp_path / "x.csv").write(_record())


def test_unwritable_target_raises(tmp_path):
    target = tmp_path / "is_a_dir"
    target.mkdir()
    with pytest.raises(OSError), RecordWriter(target):
        pass


def test_read_rejects_foreign_csv(tmp_path):
    path = tmp_path / "other.csv"
    path.write_text("a,b,c\n1,2,3\n", encoding="utf-8")
    with pytest.raises(ValueError):
        read_records(path)


def test_echo_prints_record(tmp_path, capsys):
    with RecordWriter(tmp_path / "out.csv", echo=True) as out:
        out.write(_record(n=1907))
    printed = capsys.readouterr().out
    assert "(5, 7, 11)" in printed and "1907" in printed


def test_quiet_suppresses_echo(tmp_path, capsys):
    with RecordWriter(tmp_path / "out.csv", echo=True, quiet=True) as out:
        out.write(_record())
    assert capsys.readouterr().out == ""


def test_format_record_abbreviates_huge_n():
    line = format_record(_record(n=10**60 + 7))
    assert "…" in line


# ---------- paths -------------------------------------------------------------


def test_resolve_output_path(tmp_path):
    assert resolve_output_path("a/b.csv", tmp_path) == os.path.normpath(str(tmp_path / "a" / "b.csv"))
    absolute = str(tmp_path / "abs.csv")
    assert resolve_output_path(absolute, "/elsewhere") == os.path.normpath(absolute)
    with pytest.raises(ValueError):
        resolve_output_path("", tmp_path)
