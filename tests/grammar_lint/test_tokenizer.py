"""
Tests for the Tokenizer / Segmenter
===================================
Word spans, case splitting, sub-token derivation and sentence splitting.
"""

import pytest

from grammar_lint.tokenizer import (
    derive_subtokens, is_valid_sentence, mask_sequences, segment_sentences,
    segment_words, sentence_spans, split_case_boundaries, word_spans,
)


class TestMasking:
    """Tests for escape sequence and placeholder masking."""

    def test_mask_preserves_length(self):
        """Masked text keeps every offset."""
        text = "Line one\\nLine %s two ${name} and {0}"
        masked = mask_sequences(text)
        assert len(masked) == len(text)
        assert '\\n' not in masked
        assert '%s' not in masked
        assert '${name}' not in masked
        assert '{0}' not in masked

    def test_percent_in_prose_not_masked(self):
        """A percentage followed by a word is left alone."""
        assert mask_sequences("50% of users") == "50% of users"


class TestWordSpans:
    """Tests for word segmentation."""

    def test_camel_case_split(self):
        """camelCase and acronym boundaries become separate words."""
        assert word_spans("parseHTTPResponse body") == [
            ('parse', 0, 5), ('HTTP', 5, 9), ('Response', 9, 17), ('body', 18, 22),
        ]

    def test_placeholder_offsets(self):
        """Offsets index the original text, not the masked copy."""
        assert word_spans("Hello %s world") == [('Hello', 0, 5), ('world', 9, 14)]

    def test_apostrophes_stay_attached(self):
        """Contractions are one token."""
        assert word_spans("It isn't") == [('It', 0, 2), ("isn't", 3, 8)]

    def test_spans_are_valid_slices(self):
        """Every span slices back to its word."""
        text = "The fooBar value, see ${ref} and test12anything78variable!"
        for word, start, end in word_spans(text):
            assert text[start:end] == word

    def test_segment_words(self):
        """segment_words returns the words only."""
        assert segment_words("myVarName") == ['my', 'Var', 'Name']

    def test_split_case_boundaries(self):
        """Pieces carry their offset inside the token."""
        assert split_case_boundaries("getUserName") == [('get', 0), ('User', 3), ('Name', 7)]


class TestSubtokens:
    """Tests for the second-pass sub-token derivation."""

    def test_digits_split(self):
        """Digits become boundaries."""
        assert derive_subtokens("test12anything78variable") == ['test', 'anything', 'variable']

    def test_possessive_dropped(self):
        """A trailing possessive is removed."""
        assert derive_subtokens("John's") == ['john']

    def test_case_split_lowercased(self):
        """Case boundaries split and parts are lower-cased."""
        assert derive_subtokens("myVarName") == ['my', 'var', 'name']


class TestSentences:
    """Tests for sentence segmentation and validity."""

    def test_sentence_spans(self):
        """Sentences split after terminal punctuation; offsets are exact."""
        assert sentence_spans("One. Two!  Three?") == [
            ('One.', 0, 4), ('Two!', 5, 9), ('Three?', 11, 17),
        ]

    def test_empty_fragments_dropped(self):
        """Trailing whitespace yields no extra sentence."""
        assert segment_sentences("Hi there.  ") == ['Hi there.']

    def test_abbreviations_not_special_cased(self):
        """Known approximation: "U.S." ends a sentence."""
        assert segment_sentences("U.S. law applies.") == ['U.S.', 'law applies.']

    @pytest.mark.parametrize("text,expected", [
        ("This is fine.", True),
        ("Is it?", True),
        ("not a sentence", False),
        ("Missing period", False),
        ("lowercase start.", False),
        ("", False),
        ("   ", False),
    ])
    def test_is_valid_sentence(self, text, expected):
        """Capital start, terminal punctuation and a word are required."""
        assert is_valid_sentence(text) is expected
