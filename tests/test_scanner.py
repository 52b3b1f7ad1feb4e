# tests/test_scanner.py
import logging
from pathlib import Path

from projectcontent import (
    ContentField,
    EntityKind,
    SkippedEntityWarning,
    assemble_entities,
    scan_entities,
    scan_order,
)


def _make_file(p: Path, content: str = "x"):
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(content, encoding="utf-8")


def test_scan_finds_immediate_children_with_marker(tmp_path: Path):
    _make_file(tmp_path / "one/item.json", "{}")
    _make_file(tmp_path / "two/item.json", '{"name": "Two"}')
    _make_file(tmp_path / "three/other.json", "{}")
    _make_file(tmp_path / "deep/nested/item.json", "{}")
    _make_file(tmp_path / "item.json", "{}")

    found = scan_entities(tmp_path, "item.json")

    assert [p.name for p in found] == ["one", "two"]
    assert all(p.parent == tmp_path for p in found)


def test_scan_missing_base_directory_is_empty(tmp_path: Path):
    assert scan_entities(tmp_path / "nope", "item.json") == []


def test_scan_is_sorted_and_stable(tmp_path: Path):
    for name in ["c", "a", "b"]:
        _make_file(tmp_path / name / "item.json", "{}")

    first = scan_entities(tmp_path, "item.json")
    assert [p.name for p in first] == ["a", "b", "c"]
    assert scan_entities(tmp_path, "item.json") == first


def test_scan_skips_hidden_directories(tmp_path: Path):
    _make_file(tmp_path / ".cache/item.json", "{}")
    _make_file(tmp_path / "visible/item.json", "{}")

    assert [p.name for p in scan_entities(tmp_path, "item.json")] == ["visible"]


def test_scan_drops_invalid_marker_and_logs(tmp_path: Path, caplog):
    caplog.set_level(logging.ERROR)
    _make_file(tmp_path / "good/item.json", "{}")
    _make_file(tmp_path / "bad/item.json", "{oops")

    found = scan_entities(tmp_path, "item.json", label="widget")

    assert [p.name for p in found] == ["good"]
    [record] = caplog.records
    assert record.levelno == logging.ERROR
    assert isinstance(record.issue, SkippedEntityWarning)
    assert record.issue.kind == "widget"
    assert record.issue.directory == tmp_path / "bad"
    assert record.issue.marker == "item.json"
    assert "widget ignored" in record.getMessage()


def test_scan_keeps_non_object_json(tmp_path: Path):
    _make_file(tmp_path / "list/item.json", "[]")
    assert [p.name for p in scan_entities(tmp_path, "item.json")] == ["list"]


def _build(directory, metadata, contents, options):
    return (directory.name, metadata, contents)


def test_assemble_loads_declared_fields(tmp_path: Path, caplog):
    caplog.set_level(logging.ERROR)
    _make_file(tmp_path / "w/item.json", '{"bodyPath": "body.txt", "notePath": "note.txt"}')
    _make_file(tmp_path / "w/body.txt", "BODY")
    kind = EntityKind(
        label="widget",
        marker="item.json",
        build=_build,
        fields=(
            ContentField("body", "bodyPath"),
            ContentField("note", "notePath", optional=True),
        ),
    )

    [(slug, metadata, contents)] = assemble_entities(tmp_path, kind)

    assert slug == "w"
    assert metadata["bodyPath"] == "body.txt"
    assert contents == {"body": "BODY", "note": ""}
    assert caplog.records == []


def test_assemble_with_non_object_metadata_degrades_fields(tmp_path: Path):
    _make_file(tmp_path / "w/item.json", "[1, 2]")
    kind = EntityKind("widget", "item.json", _build, (ContentField("body", "bodyPath"),))

    [(slug, metadata, contents)] = assemble_entities(tmp_path, kind)

    assert metadata == [1, 2]
    assert contents == {"body": ""}


def test_assemble_returns_tuple(tmp_path: Path):
    kind = EntityKind("widget", "item.json", _build)
    assert assemble_entities(tmp_path, kind) == ()


def test_scan_orders_case_insensitively(tmp_path: Path):
    for name in ["charlie", "Beta", "alpha"]:
        _make_file(tmp_path / name / "item.json", "{}")

    assert [p.name for p in scan_entities(tmp_path, "item.json")] == [
        "alpha",
        "Beta",
        "charlie",
    ]


def test_scan_order_puts_lowercase_first_on_ties():
    paths = [Path("src/B/item.json"), Path("src/b/item.json"), Path("src/a/item.json")]

    ordered = sorted(paths, key=scan_order)

    assert [p.parent.name for p in ordered] == ["a", "b", "B"]


def test_scan_drops_marker_with_non_json_constant(tmp_path: Path, caplog):
    caplog.set_level(logging.ERROR)
    _make_file(tmp_path / "nan/item.json", '{"name": NaN}')

    assert scan_entities(tmp_path, "item.json") == []
    assert isinstance(caplog.records[0].issue, SkippedEntityWarning)
