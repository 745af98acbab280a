"""
Sentence Grade Level
====================
Flesch-Kincaid grade level per sentence using textstat, for the optional
``maxGradeLevel`` readability check.

Requires: pip install textstat
"""

from typing import Any, Dict, List

from ..base import IntegrationBase
from ..tokenizer import sentence_spans
from .heuristics import Suggestion

__version__ = "1.0.0"

# textstat is unreliable on fragments shorter than this many words.
MIN_SENTENCE_WORDS = 5


class SentenceGrader(IntegrationBase):
    """Flags sentences whose Flesch-Kincaid grade exceeds a threshold."""

    INTEGRATION_NAME = "Textstat"
    INTEGRATION_VERSION = "1.0.0"

    # Grade level descriptions
    GRADE_LEVELS = {
        (0, 6): "Elementary (Grade 1-5)",
        (6, 8): "Middle School (Grade 6-8)",
        (8, 12): "High School (Grade 9-12)",
        (12, 14): "College",
        (14, 17): "College Graduate",
        (17, 100): "Professional/Academic"
    }

    def __init__(self):
        """Initialize the grader."""
        super().__init__()
        self._textstat = None
        self._initialize()

    def _initialize(self):
        """Initialize textstat library."""
        try:
            import textstat
            self._textstat = textstat
            self._available = True
        except ImportError as e:
            self._error = f"textstat not installed: {e}"
            self._available = False

    def get_status(self) -> Dict[str, Any]:
        """Get detailed status of the textstat integration."""
        status = {
            'available': self.is_available,
            'error': self._error,
        }
        if self.is_available:
            status['metrics_available'] = ['flesch_kincaid_grade']
        return status

    def grade(self, sentence: str) -> float:
        """Flesch-Kincaid grade of one sentence (0.0 when unavailable)."""
        if not self.is_available:
            return 0.0
        return float(self._textstat.flesch_kincaid_grade(sentence))

    def grade_level(self, grade: float) -> str:
        """Convert numeric grade to description."""
        for (low, high), level in self.GRADE_LEVELS.items():
            if low <= grade < high:
                return level
        return "Unknown"

    def check(self, text: str, max_grade: float) -> List[Suggestion]:
        """
        Return a suggestion for every sentence of ``text`` above ``max_grade``.

        Args:
            text: Text unit to analyze
            max_grade: Highest acceptable Flesch-Kincaid grade

        Returns:
            Suggestions spanning the offending sentences
        """
        if not self.is_available:
            return []

        suggestions = []
        for sentence, start, end in sentence_spans(text):
            if len(sentence.split()) < MIN_SENTENCE_WORDS:
                continue
            grade = self.grade(sentence)
            if grade > max_grade:
                suggestions.append(Suggestion(
                    start, end - start,
                    f"sentence reads at grade {grade:.1f} ({self.grade_level(grade)}), "
                    f"above the target of {max_grade:g}"
                ))
        return suggestions
