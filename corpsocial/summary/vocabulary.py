"""
Module: vocabulary
Purpose: Synonym sets and numeral words for the daily summary extractor.
Dependencies: None (pure data)

Separates the classification vocabulary from the matching logic. Edit this
file to add/remove keywords without touching extractor.py or classifier.py.
All entries are lower-case and NFC-normalized, matching the text normalization
applied before lookup.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Final, Mapping

# ---------------------------------------------------------------------------
# Keyword fallback synonyms (substring match inside a word token)
# ---------------------------------------------------------------------------

TASK_KEYWORDS: Final[tuple[str, ...]] = (
    "task",
    "taskul",
    "taskuri",
    "task-uri",
    "sarcin",
    "sarcina",
    "sarcini",
    # Completion verbs
    "făcut",
    "facut",
    "terminat",
    "finalizat",
    "finalizate",
)

MEETING_KEYWORDS: Final[tuple[str, ...]] = (
    "sedinta",
    "ședința",
    "ședin",
    "sedin",
    "întâlnire",
    "meeting",
)

CALL_KEYWORDS: Final[tuple[str, ...]] = (
    "apel",
    "sunat",
    "call",
)

# ---------------------------------------------------------------------------
# Roots that may follow a count ("3 taskuri", "două ședințe").
# Prefix match, so plural/articled forms ("task-uri", "sarcina") are covered.
# Calls have no counted form.
# ---------------------------------------------------------------------------

TASK_COUNT_ROOTS: Final[tuple[str, ...]] = ("task", "sarcin")

MEETING_COUNT_ROOTS: Final[tuple[str, ...]] = ("ședin", "sedin", "întâlnire", "meeting")

# ---------------------------------------------------------------------------
# "am <verb>" phrase ("I did / sent / attended / worked / completed ...")
# ---------------------------------------------------------------------------

OTHER_AUXILIARY: Final[str] = "am"

OTHER_VERB_STEMS: Final[tuple[str, ...]] = (
    "făcut",
    "facut",
    "trimis",
    "participat",
    "lucrat",
    "lucru",
    "realizat",
    "finalizat",
)

# ---------------------------------------------------------------------------
# Romanian numeral words, 1-20.
# Spelling variants (with and without diacritics) map to the same value;
# the duplicates are deliberate. "unspezece" is a common misspelling.
# ---------------------------------------------------------------------------

NUMBER_WORDS: Final[Mapping[str, int]] = MappingProxyType(
    {
        "un": 1,
        "unu": 1,
        "o": 1,
        "una": 1,
        "doi": 2,
        "doua": 2,
        "două": 2,
        "trei": 3,
        "patru": 4,
        "cinci": 5,
        "sase": 6,
        "șase": 6,
        "sapte": 7,
        "șapte": 7,
        "opt": 8,
        "noua": 9,
        "nouă": 9,
        "zece": 10,
        "unsprezece": 11,
        "unspezece": 11,
        "doisprezece": 12,
        "douasprezece": 12,
        "douăsprezece": 12,
        "treisprezece": 13,
        "paisprezece": 14,
        "cincisprezece": 15,
        "saisprezece": 16,
        "șaisprezece": 16,
        "saptesprezece": 17,
        "optsprezece": 18,
        "nouasprezece": 19,
        "nouăsprezece": 19,
        "douazeci": 20,
        "douăzeci": 20,
    }
)

# Cedilla letters typed on older keyboards, folded to the standard comma-below forms.
CEDILLA_FOLDS: Final[Mapping[str, str]] = MappingProxyType(
    {
        "ş": "ș",
        "Ş": "Ș",
        "ţ": "ț",
        "Ţ": "Ț",
    }
)
