"""Heuristic punctuation and capitalization repair for caption text.

WHY: Auto-generated captions have almost no punctuation and no sentence
capitalization. A real parser is out of scope; a handful of local regex
heuristics gets the text close enough to read comfortably.

HOW: GRAMMAR_RULES is an ordered tuple of independent RewriteRule values
(name, compiled pattern, replacement). repair() folds the text through
every rule in order. apply_rule() runs a single rule, so each heuristic
can be tested on its own.

RULES:
- Rule order matters: later rules assume the spacing and punctuation
  left by earlier ones (e.g. oxford_comma accepts the comma that
  conjunction_comma already inserted)
- Every rule looks at local patterns only — no sentence structure
- Rules never match across a line break where that would merge
  paragraphs (the assembler repairs blank-line-joined paragraphs)
- Output is not guaranteed grammatical, only more readable
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Tuple, Union

Replacement = Union[str, Callable[[re.Match], str]]

_CONJUNCTIONS = ("and", "or", "but", "nor", "for", "yet", "so")

_INTRODUCTORY_WORDS = (
    "well", "now", "yes", "moreover", "furthermore", "however", "meanwhile",
    "finally", "then", "today", "yesterday", "tomorrow", "here", "there",
)

_SUBORDINATORS = ("because", "although", "though", "unless", "when", "if", "while")


@dataclass(frozen=True)
class RewriteRule:
    """One named regex rewrite.

    RULES:
    - pattern is compiled once at import time
    - replacement is a re.sub template or a callable taking the match
    """

    name: str
    pattern: re.Pattern
    replacement: Replacement

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.replacement, text)


def _upper_sentence_start(match: re.Match) -> str:
    return match.group(1) + match.group(2).upper()


GRAMMAR_RULES: Tuple[RewriteRule, ...] = (
    # Run-on sentences: "we did that Then we left" -> "we did that. Then we left"
    RewriteRule(
        name="sentence_split",
        pattern=re.compile(r"([a-z])\s+([A-Z])"),
        replacement=r"\1. \2",
    ),
    RewriteRule(
        name="conjunction_comma",
        pattern=re.compile(r"(\w+)\s+({})\s+".format("|".join(_CONJUNCTIONS))),
        replacement=r"\1, \2 ",
    ),
    RewriteRule(
        name="introductory_comma",
        pattern=re.compile(r"(^|\. )({})\s+".format("|".join(_INTRODUCTORY_WORDS))),
        replacement=r"\1\2, ",
    ),
    # City and state/country: "Austin TX", "London UK"
    RewriteRule(
        name="region_comma",
        pattern=re.compile(r"([A-Za-z]+)\s+(U\.S\.|U\.K\.|USA|[A-Z]{2})(?!\w)"),
        replacement=r"\1, \2",
    ),
    RewriteRule(
        name="quote_comma",
        pattern=re.compile(r"(\w)\s*\"(?=\w)"),
        replacement=r'\1, "',
    ),
    RewriteRule(
        name="oxford_comma",
        pattern=re.compile(r"(\w+)\s+(\w+),?\s+and\s+(\w+)"),
        replacement=r"\1, \2, and \3",
    ),
    # Lazy groups: the comma lands after the first word of the clause.
    RewriteRule(
        name="subordinate_clause_comma",
        pattern=re.compile(
            r"\b({})[^\S\n]+([^,\n]+?)[^\S\n]+([^,\n]+?[.!?])".format("|".join(_SUBORDINATORS))
        ),
        replacement=r"\1 \2, \3",
    ),
    RewriteRule(
        name="punctuation_spacing_before",
        pattern=re.compile(r"[^\S\n]+([.,!?])"),
        replacement=r"\1",
    ),
    RewriteRule(
        name="punctuation_spacing_after",
        pattern=re.compile(r"([.,!?])(?![\s\"]|\Z)"),
        replacement=r"\1 ",
    ),
    RewriteRule(
        name="capitalize_sentences",
        pattern=re.compile(r"(^|\. )([a-z])"),
        replacement=_upper_sentence_start,
    ),
)


def get_rule(name: str) -> RewriteRule:
    """Look up a rule in GRAMMAR_RULES by name.

    Raises:
        KeyError: If no rule has that name.
    """
    for rule in GRAMMAR_RULES:
        if rule.name == name:
            return rule
    raise KeyError(name)


def apply_rule(rule: RewriteRule, text: str) -> str:
    """Apply a single rewrite rule to text."""
    return rule.apply(text)


def repair(text: str) -> str:
    """Apply every grammar heuristic, in order, to normalized text.

    Args:
        text: Normalized caption text (see normalizer.normalize).

    Returns:
        Text with inserted sentence breaks, commas, fixed punctuation
        spacing, and capitalized sentence starts.
    """
    for rule in GRAMMAR_RULES:
        text = rule.apply(text)
    return text
