# FILE: tests/test_io.py
import io
import json

import pytest

from volley_core.config import sample_document
from volley_core.engine_test_helpers import quick_document
from volley_core.errors import DocumentError, RotationError
from volley_core.io import (
    document_to_dict, dump_document, dump_document_bytes, export_filename, load_document,
    load_systems_manifest, parse_document, save_systems_manifest,
)

MINIMAL = {
    "name": "Tiny",
    "players": [{"id": "a", "label": "A", "role": "setter"}],
    "phases": {"serving": ["base"], "receiving": ["base"]},
    "positions": {"servingBase": {"1": {"a": [450, 600]}}},
}


def test_load_from_path_bytes_and_filelike(tmp_path):
    text = json.dumps(MINIMAL)
    path = tmp_path / "tiny.json"
    path.write_text(text, encoding="utf-8")

    from_path = load_document(path)
    from_str_path = load_document(str(path))
    from_bytes = load_document(text.encode("utf-8"))
    from_upload = load_document(io.BytesIO(text.encode("utf-8")))
    from_text_io = load_document(io.StringIO(text))
    for doc in (from_path, from_str_path, from_bytes, from_upload, from_text_io):
        assert doc.name == "Tiny"
        assert doc.formation("servingBase", 1) == {"a": (450, 600)}

def test_missing_file(tmp_path):
    with pytest.raises(DocumentError, match="File not found"):
        load_document(tmp_path / "nope.json")

def test_malformed_json():
    with pytest.raises(DocumentError, match="Malformed JSON"):
        parse_document("{not json")

def test_non_utf8_bytes():
    with pytest.raises(DocumentError, match="UTF-8"):
        load_document(b"\xff\xfe\x00")

@pytest.mark.parametrize("drop,message", [("players", "missing players array"), ("phases", "missing phases")])
def test_required_sections(drop, message):
    raw = dict(MINIMAL)
    del raw[drop]
    with pytest.raises(DocumentError, match=message):
        parse_document(json.dumps(raw))

def test_top_level_must_be_object():
    with pytest.raises(DocumentError, match="expected a JSON object"):
        parse_document("[1, 2, 3]")

def test_positions_default_to_empty():
    raw = dict(MINIMAL, positions=None)
    assert parse_document(json.dumps(raw)).positions == {}

def test_bad_phase_key_and_rotation_rejected():
    raw = dict(MINIMAL, positions={"servingDance": {"1": {}}})
    with pytest.raises(DocumentError, match="Unknown phase key"):
        parse_document(json.dumps(raw))
    raw = dict(MINIMAL, positions={"servingBase": {"7": {}}})
    with pytest.raises(DocumentError, match="rotation keys must be 1-6"):
        parse_document(json.dumps(raw))

def test_document_errors_are_value_errors():
    with pytest.raises(ValueError):
        parse_document("{}")
    with pytest.raises(RotationError):
        parse_document("{}")

def test_dump_layout():
    doc = quick_document(libero="l")
    text = dump_document(doc)
    lines = text.split("\r\n")
    assert lines[0] == "{" and lines[-1] == "}"
    assert '    { "id": "s1", "label": "S1", "role": "setter" },' in lines
    assert '    { "id": "l", "label": "L", "role": "libero", "isLibero": true }' in lines
    assert text.count("isLibero") == 1
    assert '    "serving": ["base","serve"],' in lines
    # phase keys sorted, rotations numeric
    assert text.index('"receivingBase"') < text.index('"servingBase"')
    assert '        "1": { "s1": [700, 600], "m1": [700, 100], "h2": [450, 100], "s2": [200, 100], ' \
           '"m2": [200, 600], "h1": [450, 600], "l": [-64, 700] },' in lines

def test_round_trip_keeps_document():
    doc = sample_document()
    again = parse_document(dump_document(doc))
    assert again == doc
    assert load_document(dump_document_bytes(doc)) == doc

def test_save_document_uses_lf(sample_file):
    raw = sample_file.read_bytes()
    assert b"\r\n" not in raw
    assert load_document(sample_file).name == "4-2"

def test_document_to_dict_is_plain_json():
    data = document_to_dict(quick_document())
    assert data["positions"]["servingBase"]["1"]["s1"] == [700, 600]
    assert data["players"][0] == {"id": "s1", "label": "S1", "role": "setter"}

def test_export_filename():
    doc = quick_document()
    doc.name = "My  Big 5-1"
    assert export_filename(doc) == "my-big-5-1.json"

def test_systems_manifest_shapes(tmp_path):
    missing = tmp_path / "none.yaml"
    assert load_systems_manifest(missing) == ["5-1"]

    bare = tmp_path / "bare.yaml"
    bare.write_text("- 4-2\n- 6-2\n", encoding="utf-8")
    assert load_systems_manifest(bare) == ["4-2", "6-2"]

    mapped = tmp_path / "mapped.yaml"
    save_systems_manifest(mapped, ["5-1", "4-2"])
    assert load_systems_manifest(mapped) == ["5-1", "4-2"]

    empty = tmp_path / "empty.yaml"
    empty.write_text("", encoding="utf-8")
    assert load_systems_manifest(empty) == ["5-1"]

    bad = tmp_path / "bad.yaml"
    bad.write_text("systems: {a: 1}\n", encoding="utf-8")
    with pytest.raises(DocumentError):
        load_systems_manifest(bad)
