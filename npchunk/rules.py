"""Transformation rules and the loader for rule files.

A rule file holds one rule per non-blank line, and the order of the lines is the
order in which the chunker applies the rules. Each line is compiled into a
:class:`PatternRule` by :func:`compile_rule`. The notation is a small
declarative language over the three parallel columns of a sentence::

    P-1=NN|NNS P0=DT T0=I -> B

Every condition names a column (``W`` for the word, ``P`` for the POS tag and
``T`` for the current chunk tag), an offset relative to the position being
rewritten, an operator (``=`` or ``!=``) and one or more alternatives separated
by ``|``. An offset can also be an inclusive range such as ``P[1:3]=NN``, which
holds when any position in the range satisfies the condition. All conditions of
a rule must hold for the rule to fire, in which case the position is relabeled
with the tag written after ``->``.

Positions outside the sentence never satisfy a condition. The synthetic
end-of-sentence entry appended by the chunker (word and POS ``ZZZ``, tag ``Z``)
is inside the sentence for this purpose, so ``P1=ZZZ`` matches the last real
token.
"""
from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import FrozenSet, Iterable, List, Optional, Sequence, Tuple, Union

__all__ = [
    "Rule",
    "Condition",
    "PatternRule",
    "RuleSyntaxError",
    "compile_rule",
    "parse_rules",
    "load_rules",
]

logger = logging.getLogger(__name__)

ARROW = "->"

# Column order matches the argument order of Rule.matches.
_COLUMNS = {"W": 0, "T": 1, "P": 2}

_CONDITION_RE = re.compile(
    r"^(?P<field>[A-Za-z]+)"
    r"(?P<offset>[+-]?\d+|\[[+-]?\d+:[+-]?\d+\])"
    r"(?P<op>!?=)"
    r"(?P<values>.*)$"
)


class RuleSyntaxError(ValueError):
    """Raised when a line of a rule file cannot be compiled into a rule."""

    def __init__(self, message: str, lineno: Optional[int] = None):
        super().__init__(message)
        self.lineno = lineno


class Rule(ABC):
    """
    A context predicate paired with the chunk tag it assigns.

    Implementations must be pure: ``matches`` may read any position of the three
    sequences but must not modify them or keep state between calls. This is what
    allows one set of rules to be shared by concurrent callers.
    """

    @property
    @abstractmethod
    def target_tag(self) -> str:
        """The chunk tag written at every position the rule matches."""

    @abstractmethod
    def matches(
        self,
        position: int,
        words: Sequence[str],
        tags: Sequence[str],
        pos: Sequence[str],
    ) -> bool:
        """Returns True if the rule fires at ``position``."""


@dataclass(frozen=True)
class Condition:
    """
    A single test against one column over a fixed window of offsets.

    Attributes:
        field: The column letter, one of 'W', 'P' or 'T'.
        first: The first offset of the window, relative to the current position.
        last: The last offset of the window (inclusive). Equal to ``first`` for
              a single-position condition.
        values: The alternatives the inspected value is compared against.
        negated: When True the condition holds if the value is none of the
                 alternatives.
    """
    field: str
    first: int
    last: int
    values: FrozenSet[str]
    negated: bool = False

    def holds(self, position: int, columns: Tuple[Sequence[str], ...]) -> bool:
        column = columns[_COLUMNS[self.field]]
        for offset in range(self.first, self.last + 1):
            idx = position + offset
            if idx < 0 or idx >= len(column):
                continue
            if (column[idx] in self.values) != self.negated:
                return True
        return False

    def __str__(self) -> str:
        if self.first == self.last:
            offset = str(self.first)
        else:
            offset = f"[{self.first}:{self.last}]"
        op = "!=" if self.negated else "="
        return f"{self.field}{offset}{op}{'|'.join(sorted(self.values))}"


@dataclass(frozen=True)
class PatternRule(Rule):
    """A conjunction of :class:`Condition` objects compiled from a rule line."""

    conditions: Tuple[Condition, ...]
    tag: str

    @property
    def target_tag(self) -> str:
        return self.tag

    def matches(self, position, words, tags, pos) -> bool:
        columns = (words, tags, pos)
        return all(c.holds(position, columns) for c in self.conditions)

    def __str__(self) -> str:
        return " ".join([*(str(c) for c in self.conditions), ARROW, self.tag])


def _parse_offset(text: str) -> Tuple[int, int]:
    if not text.startswith("["):
        value = int(text)
        return value, value
    first, last = (int(part) for part in text[1:-1].split(":"))
    if first > last:
        raise RuleSyntaxError(f"Offset range [{first}:{last}] is not ascending.")
    return first, last


def _parse_condition(text: str) -> Condition:
    m = _CONDITION_RE.match(text)
    if not m:
        raise RuleSyntaxError(f"Malformed condition '{text}'.")

    field = m.group("field")
    if field not in _COLUMNS:
        raise RuleSyntaxError(
            f"Unknown field '{field}' in condition '{text}' (expected one of W, P, T)."
        )

    first, last = _parse_offset(m.group("offset"))

    values = m.group("values").split("|")
    if any(not v for v in values):
        raise RuleSyntaxError(f"Empty value in condition '{text}'.")

    return Condition(
        field=field,
        first=first,
        last=last,
        values=frozenset(values),
        negated=m.group("op") == "!=",
    )


def compile_rule(line: str) -> PatternRule:
    """
    Compiles one line of rule notation into a :class:`PatternRule`.

    Args:
        line: A rule such as ``"P0=DT P-1=NN T0=I -> B"``.

    Returns:
        The compiled rule.

    Raises:
        RuleSyntaxError: If the line does not follow the rule notation.
    """
    parts = line.split()
    if parts.count(ARROW) != 1:
        raise RuleSyntaxError(f"Expected exactly one '{ARROW}' in rule '{line.strip()}'.")

    arrow_idx = parts.index(ARROW)
    lhs, rhs = parts[:arrow_idx], parts[arrow_idx + 1:]

    if not lhs:
        raise RuleSyntaxError(f"Rule '{line.strip()}' has no conditions.")
    if len(rhs) != 1:
        raise RuleSyntaxError(
            f"Rule '{line.strip()}' must name exactly one target tag after '{ARROW}'."
        )

    return PatternRule(conditions=tuple(_parse_condition(c) for c in lhs), tag=rhs[0])


def parse_rules(lines: Iterable[str], source: str = "<rules>") -> List[Rule]:
    """
    Compiles an ordered sequence of rule lines.

    Blank and whitespace-only lines are skipped; every other line must compile.
    There is no comment syntax.

    Args:
        lines: The rule lines, in execution order.
        source: A name for the origin of the lines, used in error messages.

    Returns:
        The rules in the order they appeared.

    Raises:
        RuleSyntaxError: On the first line that fails to compile. Nothing is
                         returned in that case.
    """
    rules: List[Rule] = []
    for lineno, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            rules.append(compile_rule(line))
        except RuleSyntaxError as e:
            raise RuleSyntaxError(f"{source}, line {lineno}: {e}", lineno=lineno) from e
    return rules


def load_rules(path: Union[str, Path]) -> List[Rule]:
    """
    Loads the ordered list of rules from a rule file.

    The file is read as UTF-8; a leading byte order mark is ignored.

    Args:
        path: The path to the rule file.

    Returns:
        The rules, in file order.

    Raises:
        FileNotFoundError: If the rule file does not exist.
        OSError: If the file cannot be read.
        RuleSyntaxError: If any line is malformed. The load is aborted.
    """
    try:
        with open(path, "r", encoding="utf-8-sig") as f:
            rules = parse_rules(f, source=str(path))
    except FileNotFoundError:
        raise FileNotFoundError(f"Rules file not found at: {path}")

    logger.info("Loaded %d chunking rules from %s", len(rules), path)
    return rules
