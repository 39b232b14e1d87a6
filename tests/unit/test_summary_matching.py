"""Tests for tokenization and the count/phrase helpers"""

from corpsocial.summary.matching import (
    digit_counts,
    keyword_hits,
    normalize_text,
    numeral_word_counts,
    other_phrase_verbs,
    tokenize,
)
from corpsocial.summary.vocabulary import (
    MEETING_COUNT_ROOTS,
    NUMBER_WORDS,
    TASK_COUNT_ROOTS,
    TASK_KEYWORDS,
)


def _texts(text):
    return [token.text for token in tokenize(text)]


class TestNormalizeText:
    def test_lowercases_and_folds_cedilla(self):
        assert normalize_text("ŞEDINŢĂ") == "ședință"

    def test_composes_decomposed_diacritics(self):
        decomposed = "dou" + "a\u0306"  # a + combining breve
        assert normalize_text(decomposed) == "două"

    def test_non_string_is_empty(self):
        assert normalize_text(None) == ""
        assert normalize_text(7) == ""


class TestTokenize:
    def test_hyphen_inside_word_is_kept(self):
        assert _texts("task-uri, două!") == ["task-uri", "două"]

    def test_trailing_hyphen_ends_the_word(self):
        assert _texts("task- x") == ["task", "x"]

    def test_positions(self):
        tokens = tokenize("am  făcut")
        assert (tokens[1].start, tokens[1].end) == (4, 9)

    def test_empty(self):
        assert tokenize("") == []


class TestCounts:
    def test_digit_counts_collects_every_occurrence(self):
        assert digit_counts("10 meetings si 2 meeting", MEETING_COUNT_ROOTS) == [10, 2]

    def test_digit_counts_ignores_unrelated_numbers(self):
        assert digit_counts("la ora 3 am avut task", TASK_COUNT_ROOTS) == []

    def test_numeral_word_needs_whitespace(self):
        text = "doi-taskuri"
        assert numeral_word_counts(text, tokenize(text), TASK_COUNT_ROOTS) == []

    def test_numeral_word_value(self):
        text = "opt sarcini"
        assert numeral_word_counts(text, tokenize(text), TASK_COUNT_ROOTS) == [8]

    def test_number_words_table_is_read_only(self):
        assert NUMBER_WORDS["douăzeci"] == 20
        assert NUMBER_WORDS["unspezece"] == 11
        assert "douăzeci și unu" not in NUMBER_WORDS


class TestPhraseAndKeywords:
    def test_phrase_requires_plain_whitespace(self):
        text = "am, făcut"
        assert other_phrase_verbs(text, tokenize(text)) == frozenset()

    def test_phrase_marks_verb_index(self):
        text = "azi am realizat"
        assert other_phrase_verbs(text, tokenize(text)) == frozenset({2})

    def test_keyword_hits_skip(self):
        tokens = tokenize("am făcut un task")
        assert keyword_hits(tokens, TASK_KEYWORDS) == 2
        assert keyword_hits(tokens, TASK_KEYWORDS, skip=frozenset({1})) == 1


class TestOversizedNumbers:
    def test_digit_run_past_int_limit_is_zero(self):
        text = "9" * 5000 + " task"
        assert digit_counts(text, TASK_COUNT_ROOTS) == [0]
