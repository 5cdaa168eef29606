"""Document-level noun phrase chunking.

:class:`NounPhraseChunker` connects the chunker to annotated documents. For
every sentence it reads the contained tokens, seeds their chunk tags from the
POS tag dictionary, rewrites the tags with the rules, decodes the noun chunks
and records each chunk as a new annotation covering its tokens.
"""
from __future__ import annotations

import logging
import time
from typing import Dict, List, Sequence

from tqdm import tqdm

from .chunker import Chunker, initial_tags
from .config import Config
from .document import (
    SENTENCE_ANNOTATION_TYPE,
    TOKEN_ANNOTATION_TYPE,
    Annotation,
    AnnotationSet,
    Document,
)
from .io_utils import load_pos_tag_dict
from .spans import extract_spans
from .types import ChunkSpan, Token

__all__ = ["MissingAnnotationsError", "NounPhraseChunker"]

logger = logging.getLogger(__name__)

WORD_FEATURE = "string"


class MissingAnnotationsError(RuntimeError):
    """Raised when a document has no sentence annotations to chunk."""


class NounPhraseChunker:
    """
    Adds noun chunk annotations to documents.

    The rules and the POS tag dictionary are loaded once, when the object is
    created. Any problem with either file is raised from the constructor, so an
    instance that exists is always ready to use.

    Attributes:
        cfg: The configuration in use.
        chunker: The rule-based tag rewriter.
        tag_dict: Mapping from POS tag to initial chunk tag.
    """

    def __init__(self, cfg: Config):
        rules_path = cfg.paths.get("rules")
        dict_path = cfg.paths.get("pos_tag_dict")
        if not rules_path:
            raise ValueError("Rules path must be specified")
        if not dict_path:
            raise ValueError("POS tag dictionary path must be specified")

        self.cfg = cfg
        self.chunker = Chunker.from_file(rules_path)
        self.tag_dict: Dict[str, str] = load_pos_tag_dict(dict_path)
        logger.debug(
            "Chunker ready with %d rules and %d POS tag entries",
            len(self.chunker),
            len(self.tag_dict),
        )

    def chunk_tokens(self, tokens: Sequence[Annotation]) -> List[ChunkSpan]:
        """
        Finds the noun chunks among the tokens of one sentence.

        Args:
            tokens: The token annotations of the sentence, in document order.

        Returns:
            The chunks as inclusive index ranges over ``tokens``.
        """
        pos = [t.features.get(self.cfg.pos_feature) for t in tokens]
        tags = initial_tags(pos, self.tag_dict, self.cfg.unknown_tag)
        sentence = [
            Token(word=t.features.get(WORD_FEATURE), pos=p, chunk_tag=tag)
            for t, p, tag in zip(tokens, pos, tags)
        ]

        chunked = self.chunker.chunk_tokens(sentence)
        return extract_spans([t.chunk_tag for t in chunked], self.cfg.annotation_name)

    def _add_chunk(self, output: AnnotationSet, tokens: Sequence[Annotation], span: ChunkSpan):
        start = tokens[span.start].start
        end = tokens[span.end].end

        # Broken upstream offsets can produce an empty or inverted chunk.
        if start >= end:
            logger.debug("Dropping degenerate chunk %s at offsets %d-%d", span, start, end)
            return None

        return output.add(span.label, start, end)

    def annotate(self, doc: Document) -> List[Annotation]:
        """
        Adds noun chunk annotations to a document.

        Args:
            doc: The document. Sentences and tokens are read from the input
                 annotation set; chunks are written to the output set.

        Returns:
            The annotations that were added.

        Raises:
            MissingAnnotationsError: If the input set has no sentences and the
                configuration asks for a failure in that case.
        """
        input_as = doc.annotations(self.cfg.input_as_name, create=False)

        sentences = input_as.get(SENTENCE_ANNOTATION_TYPE)
        if not sentences:
            if self.cfg.fail_on_missing_input_annotations:
                raise MissingAnnotationsError(
                    "No sentences to process! Please run a sentence splitter first!"
                )
            logger.info("Document %s has no sentences, skipping", doc.name)
            return []

        output_as = doc.annotations(self.cfg.output_as_name)

        started = time.perf_counter()
        added: List[Annotation] = []
        for sentence in tqdm(
            sentences,
            desc=f"Chunking {doc.name}",
            unit="sentence",
            disable=not self.cfg.show_progress,
        ):
            tokens = input_as.contained(sentence.start, sentence.end, TOKEN_ANNOTATION_TYPE)
            for span in self.chunk_tokens(tokens):
                ann = self._add_chunk(output_as, tokens, span)
                if ann is not None:
                    added.append(ann)

        logger.info(
            "%s chunked in %.3f seconds (%d sentences, %d chunks)",
            doc.name,
            time.perf_counter() - started,
            len(sentences),
            len(added),
        )
        return added
