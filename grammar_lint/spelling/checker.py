"""
Spelling Checker
================
Flags unknown words in a text unit using a ``SpellDictionary``.

Each candidate token is checked twice before it is reported:

1. the token as written;
2. if pass 1 rejects it, the sub-tokens from ``derive_subtokens``
   (digits and apostrophes removed, case boundaries re-split, lower-cased).

The token is reported only when at least one sub-token is also unknown,
so ``test12anything78variable`` passes while ``test12anythng`` does not.
"""

from typing import List, Optional

from ..base import Issue, IssueType, Severity
from ..skip import SkipPolicy
from ..tokenizer import derive_subtokens, word_spans
from ..config_logging import get_logger
from .dictionary import SpellDictionary

__version__ = "1.0.0"

logger = get_logger(__name__)

MAX_SUGGESTIONS = 3


class SpellingChecker:
    """Two-pass spelling check over one text unit."""

    def __init__(self, policy: SkipPolicy, dictionary: SpellDictionary):
        self.policy = policy
        self.dictionary = dictionary

    def is_misspelled(self, word: str) -> bool:
        """Not a skip word and unknown to the dictionary."""
        if self.policy.should_skip_value(word):
            return False
        return not self.dictionary.check(word)

    def misspelled_subtokens(self, token: str) -> List[str]:
        """Second pass: derived sub-tokens the dictionary also rejects."""
        subtokens = [
            sub for sub in derive_subtokens(token)
            if len(sub) > 1 and self.policy.should_skip_word(sub)
        ]
        return [sub for sub in subtokens if self.is_misspelled(sub)]

    def is_genuine_error(self, token: str) -> bool:
        if not self.is_misspelled(token):
            return False
        return bool(self.misspelled_subtokens(token))

    def check_text(self, text: str) -> List[Issue]:
        """Return one spelling issue per misspelled word, in text order."""
        issues = []
        for word, start, end in word_spans(text):
            # should_skip_word is a keep-predicate.
            if not self.policy.should_skip_word(word):
                continue
            if not self.is_genuine_error(word):
                continue
            issues.append(Issue(
                type=IssueType.SPELLING,
                start=start,
                end=end,
                severity=Severity.WARNING,
                message=f'Possible misspelling: "{word}"',
                suggestion=self._suggestion(word),
            ))
        return issues

    def _suggestion(self, word: str) -> Optional[str]:
        suggestions = [s for s in self.dictionary.suggest(word) if s != word][:MAX_SUGGESTIONS]
        if not suggestions:
            return None
        return f"Did you mean: {', '.join(suggestions)}?"
