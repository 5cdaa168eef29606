"""A minimal annotated-document model.

Documents carry named annotation sets. Each annotation has a type (``Token``,
``Sentence``, ``NounChunk``...), a character offset range and a dictionary of
features. The default set is stored under the empty name ``""``.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from bisect import bisect_left, bisect_right
from typing import Any, Dict, Iterator, List, Optional, Tuple

__all__ = [
    "SENTENCE_ANNOTATION_TYPE",
    "TOKEN_ANNOTATION_TYPE",
    "Annotation",
    "AnnotationSet",
    "Document",
]

SENTENCE_ANNOTATION_TYPE = "Sentence"
TOKEN_ANNOTATION_TYPE = "Token"
DEFAULT_SET_NAME = ""


@dataclass(frozen=True)
class Annotation:
    """
    A typed, featured span of document text.

    Attributes:
        type: The annotation type.
        start: Offset of the first character covered.
        end: Offset one past the last character covered.
        features: Arbitrary key/value data, e.g. the token ``string`` and its
                  POS ``category``.
    """
    type: str
    start: int
    end: int
    features: Dict[str, Any] = field(default_factory=dict)


class AnnotationSet:
    """
    An ordered collection of annotations.

    Lookups by type go through a per-type index sorted by offset, built on first
    use and dropped whenever an annotation of that type is added.
    """

    def __init__(self, annotations: Optional[List[Annotation]] = None):
        self._annotations: List[Annotation] = list(annotations or [])
        self._index: Dict[str, Tuple[List[Annotation], List[int]]] = {}

    def __iter__(self) -> Iterator[Annotation]:
        return iter(self._annotations)

    def __len__(self) -> int:
        return len(self._annotations)

    def _sorted(self, ann_type: str) -> Tuple[List[Annotation], List[int]]:
        entry = self._index.get(ann_type)
        if entry is None:
            anns = sorted(
                (a for a in self._annotations if a.type == ann_type),
                key=lambda a: (a.start, a.end),
            )
            entry = (anns, [a.start for a in anns])
            self._index[ann_type] = entry
        return entry

    def get(self, ann_type: str) -> List[Annotation]:
        """Returns the annotations of ``ann_type``, sorted by offset."""
        return list(self._sorted(ann_type)[0])

    def contained(self, start: int, end: int, ann_type: str) -> List[Annotation]:
        """Returns the annotations of ``ann_type`` lying within ``[start, end]``, sorted by offset."""
        anns, starts = self._sorted(ann_type)
        lo = bisect_left(starts, start)
        hi = bisect_right(starts, end)
        return [a for a in anns[lo:hi] if a.end <= end]

    def add(self, ann_type: str, start: int, end: int, features: Optional[Dict[str, Any]] = None) -> Annotation:
        ann = Annotation(ann_type, start, end, dict(features or {}))
        self._annotations.append(ann)
        self._index.pop(ann_type, None)
        return ann


@dataclass
class Document:
    """
    A document and its annotation sets.

    Attributes:
        name: A display name, used in status messages.
        text: The document text, if available.
        annotation_sets: Annotation sets keyed by name.
    """
    name: str = ""
    text: Optional[str] = None
    annotation_sets: Dict[str, AnnotationSet] = field(default_factory=dict)

    def annotations(self, name: Optional[str] = None, create: bool = True) -> AnnotationSet:
        """Returns the named annotation set.

        ``None`` and ``""`` both select the default set. An absent set is added
        to the document when ``create`` is true; otherwise an empty, detached
        set is returned and the document is left unchanged.
        """
        key = name or DEFAULT_SET_NAME
        if key not in self.annotation_sets:
            if not create:
                return AnnotationSet()
            self.annotation_sets[key] = AnnotationSet()
        return self.annotation_sets[key]
