# np_chunker/npchunk/spans.py

from __future__ import annotations
from typing import Iterator, List, Sequence, Tuple

from .types import ChunkSpan

__all__ = ["iter_spans", "extract_spans"]


def iter_spans(tags: Sequence[str]) -> Iterator[Tuple[int, int]]:
    """
    Yields the start and end indices of each chunk in a final tag sequence.

    The decoder walks the tags once, either outside a chunk or inside one:

    -   Outside, a 'B' or an 'I' opens a chunk at the current position. Any
        other tag is skipped.
    -   Inside, a 'B' closes the open chunk just before the current position
        and opens a new one here, an 'O' closes it, and every other tag
        (including unrecognised ones) continues it.

    A chunk still open at the end of the sequence is closed at the last tag.

    Args:
        tags: The final chunk tags of a sentence.

    Yields:
        A tuple ``(start_idx, end_idx)`` with an inclusive end for each chunk.
    """
    start = 0
    inside = False

    for i, tag in enumerate(tags):
        if inside:
            if tag == "B":
                yield (start, i - 1)
                start = i
            elif tag == "O":
                yield (start, i - 1)
                inside = False
        elif tag in ("B", "I"):
            start = i
            inside = True

    if inside:
        yield (start, len(tags) - 1)


def extract_spans(tags: Sequence[str], label: str = "NounChunk") -> List[ChunkSpan]:
    """Decodes ``tags`` into labelled :class:`ChunkSpan` objects."""
    return [ChunkSpan(start, end, label) for start, end in iter_spans(tags)]
