import json
from pathlib import Path

import pytest

from npchunk.document import Annotation, Document
from npchunk.io_utils import load_document, load_pos_tag_dict, save_document


def test_load_document_reads_annotation_sets(tmp_path: Path) -> None:
    path = tmp_path / "doc.json"
    path.write_text(
        json.dumps(
            {
                "name": "sample",
                "text": "Dogs bark.",
                "annotation_sets": {
                    "": [
                        {"type": "Sentence", "start": 0, "end": 10},
                        {"type": "Token", "start": 0, "end": 4, "features": {"string": "Dogs", "category": "NNS"}},
                    ],
                    "Key": [],
                },
            }
        ),
        encoding="utf-8",
    )

    doc = load_document(str(path))

    assert doc.name == "sample"
    assert doc.text == "Dogs bark."
    assert set(doc.annotation_sets) == {"", "Key"}
    token = doc.annotations().get("Token")[0]
    assert token == Annotation("Token", 0, 4, {"string": "Dogs", "category": "NNS"})
    assert doc.annotations("Key").get("Token") == []


def test_load_document_defaults_name_to_file_stem(tmp_path: Path) -> None:
    path = tmp_path / "untitled.json"
    path.write_text(json.dumps({"annotation_sets": {}}), encoding="utf-8")

    assert load_document(path).name == "untitled"


def test_load_document_reports_structure_errors(tmp_path: Path) -> None:
    bad_path = tmp_path / "bad.json"
    bad_path.write_text(json.dumps({"tokens": []}), encoding="utf-8")

    with pytest.raises(TypeError):
        load_document(str(bad_path))


def test_load_document_rejects_incomplete_annotation(tmp_path: Path) -> None:
    bad_path = tmp_path / "bad.json"
    bad_path.write_text(
        json.dumps({"annotation_sets": {"": [{"type": "Token", "start": 0}]}}),
        encoding="utf-8",
    )

    with pytest.raises(TypeError):
        load_document(str(bad_path))


def test_load_document_invalid_json(tmp_path: Path) -> None:
    bad_path = tmp_path / "bad.json"
    bad_path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ValueError):
        load_document(str(bad_path))


def test_load_document_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_document(str(tmp_path / "missing.json"))


def test_save_document_writes_loadable_structure(tmp_path: Path) -> None:
    doc = Document(name="out")
    doc.annotations().add("Token", 0, 3, {"string": "The", "category": "DT"})
    doc.annotations("Chunks").add("NounChunk", 0, 3)
    out_path = tmp_path / "out.json"

    save_document(str(out_path), doc)

    data = json.loads(out_path.read_text(encoding="utf-8"))
    assert data["annotation_sets"]["Chunks"] == [
        {"type": "NounChunk", "start": 0, "end": 3, "features": {}}
    ]
    reloaded = load_document(str(out_path))
    assert reloaded.annotations().get("Token")[0].features["string"] == "The"


def test_load_pos_tag_dict_last_duplicate_wins(tmp_path: Path) -> None:
    path = tmp_path / "pos_tag_dict"
    path.write_text("NN I\nVB O\n\nNN B\n", encoding="utf-8")

    assert load_pos_tag_dict(path) == {"NN": "B", "VB": "O"}


def test_load_pos_tag_dict_rejects_malformed_line(tmp_path: Path) -> None:
    path = tmp_path / "pos_tag_dict"
    path.write_text("NN I\nVB\n", encoding="utf-8")

    with pytest.raises(ValueError, match="line 2"):
        load_pos_tag_dict(path)


def test_load_pos_tag_dict_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_pos_tag_dict(tmp_path / "missing")


def test_bundled_pos_tag_dict(resources_dir: Path) -> None:
    table = load_pos_tag_dict(resources_dir / "pos_tag_dict")

    assert table["NN"] == "I"
    assert table["VBZ"] == "O"
    assert table["POS"] == "B"
    assert table["''"] == "O"


def test_load_pos_tag_dict_tolerates_extra_whitespace(tmp_path: Path) -> None:
    path = tmp_path / "pos_tag_dict"
    path.write_text("NN I \nVB\tO\n  JJ  I\r\n", encoding="utf-8")

    assert load_pos_tag_dict(path) == {"NN": "I", "VB": "O", "JJ": "I"}
