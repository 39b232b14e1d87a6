"""
CorpSocial daily summary - keyword/numeral activity counts for short texts.
"""

from corpsocial.summary.classifier import classify_text
from corpsocial.summary.extractor import extract_summary, parse_moment, summarize_text
from corpsocial.summary.report import summary_lines, summary_title
from corpsocial.summary.types import Entry, SummaryResult, TextClassification
from corpsocial.summary.vocabulary import NUMBER_WORDS

__all__ = [
    # Types
    "Entry",
    "SummaryResult",
    "TextClassification",
    # Extraction
    "extract_summary",
    "summarize_text",
    "parse_moment",
    # Classification
    "classify_text",
    # Display
    "summary_lines",
    "summary_title",
    # Vocabulary
    "NUMBER_WORDS",
]
