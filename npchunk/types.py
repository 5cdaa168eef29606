# np_chunker/npchunk/types.py

from __future__ import annotations
from dataclasses import dataclass

__all__ = [
    "Token",
    "ChunkSpan",
    "SENTINEL_WORD",
    "SENTINEL_POS",
    "SENTINEL_TAG",
]

# Synthetic end-of-sentence entry. Rules may look exactly one position past the
# last real token and will find these values there.
SENTINEL_WORD = "ZZZ"
SENTINEL_POS = "ZZZ"
SENTINEL_TAG = "Z"


@dataclass(frozen=True)
class Token:
    """
    Represents a single word of a sentence as seen by the chunker.

    Attributes:
        word: The token text.
        pos: The part-of-speech tag supplied by an upstream tagger.
        chunk_tag: The chunk tag. Before rewriting this is the initial tag taken
            from the POS dictionary; after rewriting it is normally one of 'B',
            'I' or 'O', although rules and dictionaries may introduce others.
    """
    word: str
    pos: str
    chunk_tag: str = "I"


@dataclass(frozen=True)
class ChunkSpan:
    """
    An inclusive token range marking one base noun phrase.

    Attributes:
        start: Index of the first token in the chunk.
        end: Index of the last token in the chunk (inclusive).
        label: The annotation label the chunk is reported under.
    """
    start: int
    end: int
    label: str = "NounChunk"

    def __len__(self) -> int:
        return self.end - self.start + 1
