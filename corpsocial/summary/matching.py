"""
Module: matching
Purpose: Tokenized keyword, numeral and phrase checks for short activity texts.
Dependencies: corpsocial.summary.vocabulary

Word boundaries are Unicode-aware: a word token is a maximal run of
alphanumeric characters, with hyphens allowed between two of them
("task-uri" is one token, "două" is one token). No regular expressions are
used, so diacritics never split a word.
"""

from __future__ import annotations

import unicodedata
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from corpsocial.summary.vocabulary import (
    CEDILLA_FOLDS,
    NUMBER_WORDS,
    OTHER_AUXILIARY,
    OTHER_VERB_STEMS,
)

_ASCII_DIGITS = frozenset("0123456789")
_CEDILLA_TABLE = str.maketrans(dict(CEDILLA_FOLDS))


@dataclass(frozen=True)
class Token:
    text: str
    start: int
    end: int


def normalize_text(value: object) -> str:
    """NFC-normalize, fold cedilla letters and lower-case. Non-strings become ""."""
    if not isinstance(value, str) or not value:
        return ""
    text = unicodedata.normalize("NFC", value)
    return text.translate(_CEDILLA_TABLE).lower()


def tokenize(text: str) -> list[Token]:
    tokens: list[Token] = []
    length = len(text)
    i = 0
    while i < length:
        if not text[i].isalnum():
            i += 1
            continue
        start = i
        while i < length:
            ch = text[i]
            if ch.isalnum():
                i += 1
            elif ch == "-" and i + 1 < length and text[i + 1].isalnum():
                i += 1
            else:
                break
        tokens.append(Token(text[start:i], start, i))
    return tokens


def _skip_whitespace(text: str, pos: int) -> int:
    while pos < len(text) and text[pos].isspace():
        pos += 1
    return pos


def _starts_with_any(text: str, pos: int, roots: Iterable[str]) -> bool:
    return any(text.startswith(root, pos) for root in roots)


def _to_int(digits: str) -> int:
    # Runs past the interpreter's int conversion limit count as 0, still a match
    try:
        return int(digits)
    except ValueError:
        return 0


def digit_counts(text: str, roots: Sequence[str]) -> list[int]:
    """
    Values of every "<digits> <root>" occurrence ("3 taskuri", "2task-uri").

    Whitespace between the number and the root is optional.
    """
    counts: list[int] = []
    length = len(text)
    i = 0
    while i < length:
        if text[i] not in _ASCII_DIGITS:
            i += 1
            continue
        start = i
        while i < length and text[i] in _ASCII_DIGITS:
            i += 1
        if _starts_with_any(text, _skip_whitespace(text, i), roots):
            counts.append(_to_int(text[start:i]))
    return counts


def numeral_word_counts(text: str, tokens: Sequence[Token], roots: Sequence[str]) -> list[int]:
    """Values of every "<numeral word> <root>" occurrence ("două ședințe")."""
    counts: list[int] = []
    for token in tokens:
        value = NUMBER_WORDS.get(token.text)
        if value is None:
            continue
        after = _skip_whitespace(text, token.end)
        if after == token.end:
            continue
        if _starts_with_any(text, after, roots):
            counts.append(value)
    return counts


def other_phrase_verbs(text: str, tokens: Sequence[Token]) -> frozenset[int]:
    """
    Indexes of verb tokens that complete an "am <verb>" phrase.

    Only whitespace may separate the auxiliary from the verb.
    """
    indexes = set()
    for i in range(len(tokens) - 1):
        if tokens[i].text != OTHER_AUXILIARY:
            continue
        verb = tokens[i + 1]
        gap = text[tokens[i].end : verb.start]
        if gap and gap.isspace() and verb.text.startswith(OTHER_VERB_STEMS):
            indexes.add(i + 1)
    return frozenset(indexes)


def keyword_hits(
    tokens: Sequence[Token],
    keywords: Sequence[str],
    skip: frozenset[int] = frozenset(),
) -> int:
    """Number of tokens containing at least one keyword; each token counts once."""
    # One word is one mention: "taskuri" holds both "task" and "taskuri" but is one task
    hits = 0
    for i, token in enumerate(tokens):
        if i in skip:
            continue
        if any(keyword in token.text for keyword in keywords):
            hits += 1
    return hits
