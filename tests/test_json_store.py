import json

from exam_app.core.json_store import JsonDocument


def test_ensure_creates_file_only_once(tmp_path):
    document = JsonDocument(tmp_path / "nested" / "items.json")

    assert document.ensure([{"id": 1}]) is True
    assert document.ensure([{"id": 2}]) is False
    assert document.read() == [{"id": 1}]


def test_write_is_pretty_printed_with_two_spaces(tmp_path):
    path = tmp_path / "items.json"
    JsonDocument(path).write([{"text": "Grüße"}])

    raw = path.read_text(encoding="utf-8")
    assert raw == json.dumps([{"text": "Grüße"}], indent=2, ensure_ascii=False)
    assert "Grüße" in raw


def test_corrupt_file_reads_as_empty(tmp_path):
    path = tmp_path / "items.json"
    path.write_text("{not json", encoding="utf-8")

    assert JsonDocument(path).read() == []


def test_missing_file_reads_as_default(tmp_path):
    document = JsonDocument(tmp_path / "absent.json", default=[])

    assert document.read() == []


def test_non_array_document_reads_as_empty(tmp_path):
    path = tmp_path / "items.json"
    path.write_text('{"id": 1}', encoding="utf-8")

    assert JsonDocument(path).read() == []


def test_default_is_not_shared_between_reads(tmp_path):
    document = JsonDocument(tmp_path / "absent.json")
    first = document.read()
    first.append("mutated")

    assert document.read() == []
