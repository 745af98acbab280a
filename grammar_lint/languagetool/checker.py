"""
Grammar Query Adapter
=====================
Turns sentences into grammar service requests and service matches into
``grammar`` issues.

A sentence reaches the service only when it looks like one: a capital
first letter, terminal punctuation and at least one word. Matches on
skip words, and matches scored below the configured confidence, are
dropped.
"""

from typing import List, Optional

from ..base import Issue, IssueType
from ..config import CheckConfiguration
from ..config_logging import get_logger
from ..skip import SkipPolicy
from ..tokenizer import is_valid_sentence, sentence_spans
from .bridge import SyncGrammarBridge
from .client import GrammarMatch, GrammarOptions

__version__ = "1.0.0"

logger = get_logger(__name__)


class GrammarQueryAdapter:
    """Sentence-level grammar checks through a ``SyncGrammarBridge``."""

    def __init__(self, bridge: SyncGrammarBridge, config: CheckConfiguration,
                 policy: SkipPolicy):
        self.bridge = bridge
        self.config = config
        self.policy = policy
        self.options = GrammarOptions(
            language=config.language,
            dictionary=policy.skip_words,
            skip_if_match=config.skip_if_match,
        )
        self.sentences_checked = 0

    def check_text(self, text: str) -> List[Issue]:
        """Check every sentence of ``text``; offsets refer to ``text``."""
        issues = []
        for sentence, start, _ in sentence_spans(text):
            issues.extend(self.check_sentence(sentence, offset=start))
        return issues

    def check_sentence(self, sentence: str, offset: int = 0) -> List[Issue]:
        """
        Check one sentence.

        Args:
            sentence: Sentence text
            offset: Position of ``sentence`` inside its text unit

        Returns:
            Grammar issues with offsets shifted by ``offset``

        Raises:
            GrammarServiceError: if the service fails or times out
        """
        if not is_valid_sentence(sentence):
            return []

        matches = self.bridge.check(sentence, self.options)
        self.sentences_checked += 1

        issues = []
        for match in matches:
            if not self._accept(match, sentence):
                continue
            replacement = match.replacements[0] if match.replacements else None
            issues.append(Issue(
                type=IssueType.GRAMMAR,
                start=offset + match.offset,
                end=offset + match.end,
                severity=match.severity,
                message=match.message or match.short_message,
                suggestion=self._spliced(sentence, match, replacement),
                replacement=replacement,
            ))
        return issues

    def _accept(self, match: GrammarMatch, sentence: str) -> bool:
        if match.length <= 0 or match.offset < 0 or match.end > len(sentence):
            logger.debug("Dropped out-of-range grammar match", rule_id=match.rule_id,
                         offset=match.offset, length=match.length)
            return False
        if self.policy.should_skip_match(match.matched_text(sentence)):
            return False
        # Unscored matches are kept.
        if match.confidence is not None and match.confidence < self.config.confidence:
            return False
        return True

    @staticmethod
    def _spliced(sentence: str, match: GrammarMatch, replacement: Optional[str]) -> Optional[str]:
        if replacement is None:
            return None
        return sentence[:match.offset] + replacement + sentence[match.end:]
