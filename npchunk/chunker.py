"""The transformation-based tag rewriter.

:class:`Chunker` applies an ordered list of rules to the chunk tags of a
sentence. Each rule makes one full pass over the sentence and every position in
that pass is decided against the tags as they stood before the pass began, so a
rule never sees its own rewrites. The effects of a rule are visible to the
rules that follow it.

Before the passes a synthetic end-of-sentence entry is appended to private
copies of the input so rules can inspect the position just after the last real
token. The entry is removed again before the tags are returned.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from .rules import Rule, load_rules
from .types import SENTINEL_POS, SENTINEL_TAG, SENTINEL_WORD, Token

__all__ = ["Chunker", "initial_tags"]

logger = logging.getLogger(__name__)


def initial_tags(
    pos_tags: Iterable[Optional[str]],
    tag_dict: Dict[str, str],
    unknown_tag: str = "I",
) -> List[str]:
    """
    Seeds the starting chunk tag of each token from its POS tag.

    Args:
        pos_tags: The POS tag of each token. ``None`` is allowed for tokens
                  that carry no POS tag.
        tag_dict: Mapping from POS tag to initial chunk tag.
        unknown_tag: The tag used for POS tags absent from ``tag_dict``.

    Returns:
        One initial chunk tag per token.
    """
    out = []
    for p in pos_tags:
        tag = tag_dict.get(p) if p is not None else None
        if tag is None:
            logger.debug("No initial chunk tag for POS %r, using %r", p, unknown_tag)
            tag = unknown_tag
        out.append(tag)
    return out


class Chunker:
    """
    Rewrites chunk tags by applying transformation rules in order.

    A Chunker is immutable once built and holds no per-sentence state, so a
    single instance can serve any number of callers at the same time.

    Attributes:
        rules: The rules, in the order they are applied.
    """

    def __init__(self, rules: Iterable[Rule]):
        self.rules: Tuple[Rule, ...] = tuple(rules)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "Chunker":
        """Builds a Chunker from a rule file. See :func:`npchunk.rules.load_rules`."""
        return cls(load_rules(path))

    def __len__(self) -> int:
        return len(self.rules)

    def chunk_sentence(
        self,
        words: Sequence[str],
        tags: Sequence[str],
        pos: Sequence[str],
    ) -> List[str]:
        """
        Computes the final chunk tags of one sentence.

        The input sequences are left untouched; the rewriting happens on
        private copies that carry the end-of-sentence entry.

        Args:
            words: The words of the sentence.
            tags: The initial chunk tag of each word.
            pos: The POS tag of each word.

        Returns:
            A new list with the final chunk tag of each word.

        Raises:
            ValueError: If the three sequences differ in length.
        """
        if not (len(words) == len(tags) == len(pos)):
            raise ValueError(
                f"words, tags and pos must have the same length "
                f"(got {len(words)}, {len(tags)}, {len(pos)})"
            )

        n = len(words)
        work_words = [*words, SENTINEL_WORD]
        work_pos = [*pos, SENTINEL_POS]
        current = [*tags, SENTINEL_TAG]

        for rule in self.rules:
            # Double buffer: every position in this pass reads `current`.
            new_tags = [
                rule.target_tag if rule.matches(i, work_words, current, work_pos) else current[i]
                for i in range(n + 1)
            ]
            current = new_tags

        return current[:n]

    def chunk_tokens(self, tokens: Sequence[Token]) -> List[Token]:
        """
        Convenience wrapper around :meth:`chunk_sentence` for Token objects.

        Returns:
            Copies of ``tokens`` with ``chunk_tag`` replaced by the final tag.
        """
        final = self.chunk_sentence(
            [t.word for t in tokens],
            [t.chunk_tag for t in tokens],
            [t.pos for t in tokens],
        )
        return [replace(t, chunk_tag=tag) for t, tag in zip(tokens, final)]
