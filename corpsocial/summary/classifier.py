"""Single-snippet category flags, using the extractor's vocabulary."""

from __future__ import annotations

from typing import Any

from corpsocial.summary.matching import keyword_hits, normalize_text, other_phrase_verbs, tokenize
from corpsocial.summary.types import TextClassification
from corpsocial.summary.vocabulary import CALL_KEYWORDS, MEETING_KEYWORDS, TASK_KEYWORDS


def classify_text(text: Any = "") -> TextClassification:
    """
    Classify one snippet as task / meeting / call / other.

    Pure membership test, no numeric extraction. is_other is set only when
    no positive flag is and the text has an "am <verb>" phrase.
    """
    normalized = normalize_text(text)
    tokens = tokenize(normalized)
    reserved = other_phrase_verbs(normalized, tokens)

    is_task = keyword_hits(tokens, TASK_KEYWORDS, skip=reserved) > 0
    is_meeting = keyword_hits(tokens, MEETING_KEYWORDS) > 0
    is_call = keyword_hits(tokens, CALL_KEYWORDS) > 0
    is_other = not (is_task or is_meeting or is_call) and bool(reserved)

    return TextClassification(
        is_task=is_task,
        is_meeting=is_meeting,
        is_call=is_call,
        is_other=is_other,
    )
