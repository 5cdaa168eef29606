# np_chunker/npchunk/io_utils.py
"""Provides utility functions for loading documents and chunker resources.

This module contains helpers for the serialization of `Document` objects and
for reading the POS tag dictionary that seeds the chunker. Documents use a
JSON structure where annotations are grouped by annotation set name under an
"annotation_sets" key. The POS tag dictionary is a plain text file with one
``<POS> <chunk tag>`` pair per line.
"""
import json
import logging
from pathlib import Path
from typing import Dict, Union

from .document import Annotation, AnnotationSet, Document

logger = logging.getLogger(__name__)

_ANNOTATION_KEYS = ("type", "start", "end")


def load_document(path: Union[str, Path]) -> Document:
    """
    Loads an annotated document from a JSON file.

    The expected structure is::

        {"name": "...", "text": "...",
         "annotation_sets": {"": [{"type": "Token", "start": 0, "end": 3,
                                   "features": {"string": "The", "category": "DT"}}]}}

    ``name`` and ``text`` are optional.

    Args:
        path: The path to the input JSON file.

    Returns:
        The loaded `Document`.

    Raises:
        FileNotFoundError: If the file at the specified path does not exist.
        ValueError: If the file is not valid JSON.
        TypeError: If the JSON structure is incorrect (e.g., "annotation_sets"
                   is missing or not a dictionary, or an annotation lacks one
                   of its required keys).
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Document file not found at: {path}")
    except json.JSONDecodeError as e:
        raise ValueError(f"Error decoding JSON from {path}: {e}")

    if not isinstance(data, dict):
        raise TypeError(f"Expected a JSON object at the root of {path}")

    sets = data.get("annotation_sets")
    if not isinstance(sets, dict):
        raise TypeError(f"Expected an 'annotation_sets' key with an object of sets in {path}")

    doc = Document(name=str(data.get("name") or Path(path).stem), text=data.get("text"))
    for set_name, items in sets.items():
        if not isinstance(items, list):
            raise TypeError(f"Annotation set '{set_name}' in {path} is not a list.")

        annotations = []
        for i, item in enumerate(items):
            if not isinstance(item, dict) or any(k not in item for k in _ANNOTATION_KEYS):
                raise TypeError(
                    f"Annotation at index {i} of set '{set_name}' in {path} must be an "
                    f"object with 'type', 'start' and 'end'."
                )
            annotations.append(
                Annotation(
                    type=str(item["type"]),
                    start=int(item["start"]),
                    end=int(item["end"]),
                    features=dict(item.get("features") or {}),
                )
            )
        doc.annotation_sets[set_name] = AnnotationSet(annotations)

    return doc


def save_document(path: Union[str, Path], doc: Document) -> None:
    """
    Saves a document, with all of its annotation sets, to a JSON file.

    The output is formatted with indentation for human readability and can be
    read back with `load_document`.
    """
    data = {
        "name": doc.name,
        "text": doc.text,
        "annotation_sets": {
            set_name: [
                {"type": a.type, "start": a.start, "end": a.end, "features": a.features}
                for a in ann_set
            ]
            for set_name, ann_set in doc.annotation_sets.items()
        },
    }

    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)


def load_pos_tag_dict(path: Union[str, Path]) -> Dict[str, str]:
    """
    Loads the mapping from POS tag to initial chunk tag.

    Each non-blank line holds a POS tag and a chunk tag separated by
    whitespace. When a POS tag is listed more than once the last line wins.

    Args:
        path: The path to the dictionary file.

    Returns:
        A dictionary keyed by POS tag.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If a non-blank line does not have exactly two fields.
    """
    table: Dict[str, str] = {}
    try:
        with open(path, "r", encoding="utf-8-sig") as f:
            for lineno, line in enumerate(f, start=1):
                line = line.rstrip("\r\n")
                if not line.strip():
                    continue
                fields = line.split()
                if len(fields) != 2:
                    raise ValueError(
                        f"{path}, line {lineno}: expected '<POS> <chunk tag>', got {line!r}"
                    )
                table[fields[0]] = fields[1]
    except FileNotFoundError:
        raise FileNotFoundError(f"POS tag dictionary not found at: {path}")

    logger.info("Loaded %d POS tag entries from %s", len(table), path)
    return table
