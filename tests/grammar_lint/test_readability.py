"""
Tests for Readability Module
============================
Tests for the readability heuristics and the textstat grade check.
"""

import pytest

from grammar_lint.readability.grade import SentenceGrader
from grammar_lint.readability.heuristics import (
    Suggestion, analyze, check_illusion, check_passive, is_passive_reason,
)

COMPLEX_SENTENCE = (
    "The comprehensive implementation necessitates considerable organizational "
    "restructuring throughout numerous interdepartmental administrative hierarchies."
)


class TestHeuristics:
    """Tests for the write-good style checks."""

    def test_illusion(self):
        """Repeated words are flagged."""
        suggestions = check_illusion("Close the the door.")
        assert suggestions == [Suggestion(6, 7, '"the" is repeated')]

    def test_numbers_not_illusions(self):
        """Repeated numbers are data."""
        assert check_illusion("Use 1 1 as input.") == []

    def test_so_opener(self):
        """A sentence opening with "So" is flagged."""
        suggestions = analyze("So we begin.")
        assert any(s.reason == '"So" adds no meaning' and s.index == 0 for s in suggestions)

    def test_passive(self):
        """Regular and irregular participles after "to be" are passive."""
        assert check_passive("The form was submitted.")
        assert check_passive("The key was stolen.")
        assert is_passive_reason(check_passive("The key was stolen.")[0].reason)

    def test_short_ed_words_not_passive(self):
        """"is red" is not a passive construction."""
        assert check_passive("The light is red.") == []

    def test_disable_check(self):
        """Checks can be turned off by name."""
        text = "The form was submitted."
        assert analyze(text, passive=False) == []
        assert analyze(text)

    def test_unknown_check(self):
        """Unknown check names are rejected."""
        with pytest.raises(ValueError):
            analyze("Text.", cliches=True)

    def test_wordy_and_adverb(self):
        """Wordy phrases and weakening adverbs are flagged."""
        reasons = [s.reason for s in analyze("We really need this in order to ship.")]
        assert '"really" can weaken meaning' in reasons
        assert '"in order to" is wordy or unneeded' in reasons

    def test_sorted_and_unique(self):
        """Results are ordered by position without duplicate spans."""
        suggestions = analyze("There are many very long lists. So it goes.")
        spans = [(s.index, s.length) for s in suggestions]
        assert spans == sorted(spans)
        assert len(spans) == len(set(spans))

    def test_to_dict(self):
        """Suggestions serialise with write-good field names."""
        assert Suggestion(1, 2, 'x').to_dict() == {'index': 1, 'offset': 2, 'reason': 'x'}


class TestSentenceGrader:
    """Tests for SentenceGrader."""

    def test_unavailable_returns_nothing(self):
        """Without textstat the grade check is silent."""
        grader = SentenceGrader()
        grader._available = False
        assert grader.check(COMPLEX_SENTENCE, 1) == []
        assert grader.grade(COMPLEX_SENTENCE) == 0.0

    def test_status(self):
        """Status always reports availability."""
        status = SentenceGrader().get_status()
        assert isinstance(status['available'], bool)

    def test_complex_sentence_flagged(self):
        """A dense sentence exceeds a low grade target."""
        grader = SentenceGrader()
        if not grader.is_available:
            pytest.skip("textstat not available")

        text = "Short one here. " + COMPLEX_SENTENCE
        suggestions = grader.check(text, 1)
        assert len(suggestions) == 1
        assert text[suggestions[0].index:suggestions[0].end] == COMPLEX_SENTENCE

    def test_high_target_passes(self):
        """Nothing exceeds an unreachable target."""
        grader = SentenceGrader()
        if not grader.is_available:
            pytest.skip("textstat not available")
        assert grader.check(COMPLEX_SENTENCE, 100) == []

    def test_grade_level_description(self):
        """Grades map to descriptions."""
        grader = SentenceGrader()
        assert grader.grade_level(3) == "Elementary (Grade 1-5)"
        assert grader.grade_level(13) == "College"
