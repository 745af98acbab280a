"""
Style Rule Catalog
==================
Microsoft Writing Style rules for prose in source code:
- Weak/hedge words
- Passive voice
- Terminology preferences
- Contractions
- Prohibited words and phrases
- Gender-neutral language
- Readability (weasel words, "there is", adverbs, wordiness)

Each rule is a pure ``(text) -> List[Issue]`` function. Static lists are
matched whole-word and case-insensitively; overlapping matches between
rules are left for the reconciler.
"""

import re
from typing import Callable, Dict, List, Optional, Pattern, Tuple

from ..base import Issue, IssueType, Severity
from ..config import CheckConfiguration
from ..config_logging import get_logger
from ..readability import get_grader
from ..readability.heuristics import analyze, is_passive_reason

__version__ = "1.0.0"

logger = get_logger(__name__)


# =============================================================================
# STATIC CATALOGS
# =============================================================================

WEAK_WORDS = [
    'quite', 'very', 'really', 'just', 'simply', 'basically', 'actually',
    'literally', 'obviously', 'clearly', 'of course', 'certainly',
    'probably', 'maybe', 'perhaps', 'might', 'could', 'should',
    'would', 'seem', 'appear', 'tend to', 'in order to',
]

# Weak word -> replacement. "" removes the word; words not listed have no
# machine replacement.
WEAK_WORD_REPLACEMENTS = {
    'quite': '',
    'very': '',
    'really': '',
    'just': '',
    'simply': '',
    'basically': '',
    'actually': '',
    'literally': '',
    'obviously': '',
    'clearly': '',
    'of course': '',
    'certainly': '',
    'in order to': 'to',
    'tend to': 'often',
}

TERMINOLOGY = {
    'login': 'sign in',
    'logout': 'sign out',
    'username': 'user name',
    'email': 'email address',
    'setup': 'set up',
    'backup': 'back up',
    'popup': 'pop-up',
    'dropdown': 'drop-down',
    'checkbox': 'check box',
    'website': 'web site',
    'web page': 'webpage',
    'click on': 'click',
    'press on': 'press',
    'right-click on': 'right-click',
    'double-click on': 'double-click',
}

CONTRACTIONS = {
    "don't": "do not",
    "won't": "will not",
    "can't": "cannot",
    "shouldn't": "should not",
    "wouldn't": "would not",
    "couldn't": "could not",
    "didn't": "did not",
    "doesn't": "does not",
    "hasn't": "has not",
    "haven't": "have not",
    "isn't": "is not",
    "aren't": "are not",
    "wasn't": "was not",
    "weren't": "were not",
    "you're": "you are",
    "they're": "they are",
    "we're": "we are",
    "it's": "it is",
    "that's": "that is",
    "here's": "here is",
    "there's": "there is",
    "what's": "what is",
    "who's": "who is",
    "how's": "how is",
}

PROHIBITED = [
    'simply', 'just', 'easy', 'obviously', 'of course', 'clearly',
    'please note', 'please be aware', 'it should be noted',
    'kill', 'hang', 'execute', 'abort', 'terminate',
]

# Human-readable advice for each prohibited term.
PROHIBITED_ALTERNATIVES = {
    'simply': 'Remove or be more specific',
    'just': 'Remove or be more specific',
    'easy': 'straightforward',
    'obviously': 'Remove',
    'of course': 'Remove',
    'clearly': 'Remove',
    'please note': 'Remove',
    'please be aware': 'Remove',
    'it should be noted': 'Remove',
    'kill': 'stop, end, or close',
    'hang': 'stop responding',
    'execute': 'run',
    'abort': 'cancel',
    'terminate': 'end',
}

# Machine replacements; "kill" has several alternatives and none is applied.
PROHIBITED_REPLACEMENTS = {
    'simply': '',
    'just': '',
    'obviously': '',
    'of course': '',
    'clearly': '',
    'please note': '',
    'please be aware': '',
    'it should be noted': '',
    'easy': 'straightforward',
    'hang': 'stop responding',
    'execute': 'run',
    'abort': 'cancel',
    'terminate': 'end',
}

GENDER_NEUTRAL = {
    'he/she': 'they',
    'she/he': 'they',
    'his/her': 'their',
    'her/his': 'their',
    'him/her': 'them',
    'her/him': 'them',
    'himself/herself': 'themselves',
    's/he': 'they',
    'guys': 'everyone',
    'manpower': 'workforce',
    'man-hours': 'person-hours',
    'manhours': 'person-hours',
    'mankind': 'humanity',
    'man-made': 'manufactured',
    'manmade': 'manufactured',
    'chairman': 'chair',
    'chairwoman': 'chair',
    'salesman': 'salesperson',
    'businessman': 'businessperson',
    'foreman': 'supervisor',
}


def _catalog_pattern(phrases) -> Pattern:
    """Whole-word, case-insensitive alternation; longest phrase wins."""
    ordered = sorted(phrases, key=len, reverse=True)
    return re.compile(
        r'\b(?:' + '|'.join(re.escape(p) for p in ordered) + r')\b',
        re.IGNORECASE
    )


def _contraction_pattern(contractions) -> Pattern:
    # Accept typographic apostrophes as well as ASCII ones.
    alternatives = [
        re.escape(c).replace("'", "['’]")
        for c in sorted(contractions, key=len, reverse=True)
    ]
    return re.compile(r"\b(?:" + '|'.join(alternatives) + r")\b", re.IGNORECASE)


_WEAK_WORD_PATTERN = _catalog_pattern(WEAK_WORDS)
_TERMINOLOGY_PATTERN = _catalog_pattern(TERMINOLOGY)
_CONTRACTION_PATTERN = _contraction_pattern(CONTRACTIONS)
_PROHIBITED_PATTERN = _catalog_pattern(PROHIBITED)
_GENDER_NEUTRAL_PATTERN = _catalog_pattern(GENDER_NEUTRAL)


def _key(matched: str) -> str:
    return ' '.join(matched.lower().replace('’', "'").split())


def match_case(matched: str, replacement: Optional[str]) -> Optional[str]:
    """Carry a leading capital from ``matched`` over to ``replacement``."""
    if not replacement or not matched[:1].isupper():
        return replacement
    return replacement[0].upper() + replacement[1:]


# =============================================================================
# RULES
# =============================================================================

def check_weak_words(text: str) -> List[Issue]:
    issues = []
    for match in _WEAK_WORD_PATTERN.finditer(text):
        word = match.group()
        replacement = WEAK_WORD_REPLACEMENTS.get(_key(word))
        if replacement == '':
            suggestion = f'Remove "{word}"'
        elif replacement:
            suggestion = f'Use "{replacement}"'
        else:
            suggestion = 'Consider removing or replacing with more specific language'
        issues.append(Issue(
            type=IssueType.WEAK_WORD,
            start=match.start(),
            end=match.end(),
            severity=Severity.WARNING,
            message=f'Avoid weak word "{word}". Be more specific and direct.',
            suggestion=suggestion,
            replacement=match_case(word, replacement),
        ))
    return issues


def check_passive_voice(text: str) -> List[Issue]:
    return [
        Issue(
            type=IssueType.PASSIVE_VOICE,
            start=s.index,
            end=s.end,
            severity=Severity.WARNING,
            message='Use active voice instead of passive voice for clearer communication.',
            suggestion='Rewrite in active voice',
        )
        for s in analyze(text)
        if is_passive_reason(s.reason)
    ]


def _reads_as_preferred(lowered: str, start: int, term: str, preferred: str) -> bool:
    """True when the text at ``start`` already reads as the preferred form,
    e.g. "email address" for the term "email". Preferred forms that are a
    prefix of the term ("click" for "click on") never qualify."""
    if len(preferred) <= len(term):
        return False
    if not lowered.startswith(preferred, start):
        return False
    end = start + len(preferred)
    return end == len(lowered) or not (lowered[end].isalnum() or lowered[end] == '_')


def check_terminology(text: str) -> List[Issue]:
    issues = []
    lowered = text.lower()
    for match in _TERMINOLOGY_PATTERN.finditer(text):
        term = match.group()
        preferred = TERMINOLOGY[_key(term)]
        if _reads_as_preferred(lowered, match.start(), term, preferred):
            continue
        issues.append(Issue(
            type=IssueType.TERMINOLOGY,
            start=match.start(),
            end=match.end(),
            severity=Severity.ERROR,
            message=f'Use "{preferred}" instead of "{term}" per Microsoft style guidelines.',
            suggestion=preferred,
            replacement=match_case(term, preferred),
        ))
    return issues


def expand_contraction(contraction: str) -> str:
    expanded = CONTRACTIONS.get(_key(contraction))
    if expanded is None:
        return contraction
    return match_case(contraction, expanded)


def check_contractions(text: str) -> List[Issue]:
    issues = []
    for match in _CONTRACTION_PATTERN.finditer(text):
        contraction = match.group()
        expanded = expand_contraction(contraction)
        issues.append(Issue(
            type=IssueType.CONTRACTION,
            start=match.start(),
            end=match.end(),
            severity=Severity.WARNING,
            message=(f'Avoid contractions in formal documentation. '
                     f'Use "{expanded}" instead of "{contraction}".'),
            suggestion=expanded,
            replacement=expanded,
        ))
    return issues


def check_prohibited(text: str) -> List[Issue]:
    issues = []
    for match in _PROHIBITED_PATTERN.finditer(text):
        term = match.group()
        key = _key(term)
        issues.append(Issue(
            type=IssueType.PROHIBITED,
            start=match.start(),
            end=match.end(),
            severity=Severity.ERROR,
            message=f'Avoid using "{term}" in Microsoft documentation.',
            suggestion=PROHIBITED_ALTERNATIVES.get(key, 'Find alternative phrasing'),
            replacement=match_case(term, PROHIBITED_REPLACEMENTS.get(key)),
        ))
    return issues


def check_gender_neutral(text: str) -> List[Issue]:
    issues = []
    for match in _GENDER_NEUTRAL_PATTERN.finditer(text):
        term = match.group()
        neutral = GENDER_NEUTRAL[_key(term)]
        issues.append(Issue(
            type=IssueType.GENDER_NEUTRAL,
            start=match.start(),
            end=match.end(),
            severity=Severity.WARNING,
            message=f'Use gender-neutral language. Replace "{term}" with "{neutral}".',
            suggestion=neutral,
            replacement=match_case(term, neutral),
        ))
    return issues


def _readability_issue(start: int, end: int, reason: str) -> Issue:
    return Issue(
        type=IssueType.READABILITY,
        start=start,
        end=end,
        severity=Severity.INFO,
        message=f'Readability issue: {reason}',
        suggestion='Consider revising for clarity',
    )


def check_readability(text: str) -> List[Issue]:
    # Passive voice has its own rule.
    return [_readability_issue(s.index, s.end, s.reason) for s in analyze(text, passive=False)]


Rule = Callable[[str], List[Issue]]

# Configuration toggle -> rule, in reporting order.
RULES: List[Tuple[str, Rule]] = [
    ('weak_words', check_weak_words),
    ('passive_voice', check_passive_voice),
    ('terminology', check_terminology),
    ('contractions', check_contractions),
    ('prohibited', check_prohibited),
    ('gender_neutral', check_gender_neutral),
    ('readability', check_readability),
]


class StyleRuleEngine:
    """Runs the enabled style rules over a text unit."""

    def __init__(self, config: CheckConfiguration, grader=None, proselint=None):
        """
        Args:
            config: Check configuration (rule toggles, readability extras)
            grader: SentenceGrader for ``max_grade_level`` (default: shared instance)
            proselint: ProselintWrapper for ``use_proselint`` (default: shared instance)
        """
        self.config = config
        self.rules = [rule for toggle, rule in RULES if getattr(config, toggle)]
        self._grader = grader
        self._proselint = proselint

    def check_text(self, text: str) -> List[Issue]:
        issues: List[Issue] = []
        for rule in self.rules:
            issues.extend(rule(text))
        if self.config.readability:
            issues.extend(self._extra_readability(text))
        return issues

    def _extra_readability(self, text: str) -> List[Issue]:
        issues = []
        if self.config.max_grade_level is not None:
            grader = self._grader or get_grader()
            if grader.is_available:
                for s in grader.check(text, self.config.max_grade_level):
                    issues.append(_readability_issue(s.index, s.end, s.reason))
            else:
                logger.debug("maxGradeLevel ignored, textstat unavailable", error=grader.error)

        if self.config.use_proselint:
            wrapper = self._proselint or self._shared_proselint()
            if wrapper.is_available:
                for finding in wrapper.check(text):
                    issues.append(_readability_issue(finding.start, finding.end, finding.message))
            else:
                logger.debug("useProselint ignored, proselint unavailable", error=wrapper.error)
        return issues

    @staticmethod
    def _shared_proselint():
        from . import get_wrapper
        return get_wrapper()

    @staticmethod
    def counts(issues: List[Issue]) -> Dict[str, int]:
        """Issue count per type, for debug logging."""
        counts: Dict[str, int] = {}
        for issue in issues:
            counts[issue.type.value] = counts.get(issue.type.value, 0) + 1
        return counts
