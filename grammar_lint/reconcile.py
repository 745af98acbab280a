"""
Correction Reconciler
=====================
Merges the replacement-bearing issues of one text unit into a single
corrected string, then derives sentence-level correction records with
offsets into the original text.

Replacements are applied from the highest offset down, so every range
still to be applied indexes the untouched prefix of the working copy.
A replacement that reaches into text already edited (an overlap) or
falls outside the text is skipped; its issue is still reported.
"""

import re
from typing import List, Tuple

from .base import (
    CorrectionResult, CorrectionType, Issue, SentenceReplacement,
)
from .config_logging import get_logger
from .tokenizer import sentence_spans

__version__ = "1.0.0"

logger = get_logger(__name__)

_WHITESPACE_RUN = re.compile(r'\s+')

# Punctuation that must not be preceded by a space after a deletion.
_CLOSING_PUNCTUATION = set('.,;:!?')


def normalize_whitespace(text: str) -> str:
    return _WHITESPACE_RUN.sub(' ', text).strip()


def _apply_deletion(text: str, start: int, end: int) -> Tuple[str, int]:
    """
    Delete ``text[start:end]`` and collapse the surrounding whitespace.

    Returns the new text and the lowest offset touched.
    """
    before = text[start - 1] if start > 0 else ''
    after = text[end] if end < len(text) else ''

    if before == ' ' and after == ' ':
        # "is simply great" -> "is great"
        return text[:start] + text[end + 1:], start
    if start == 0 and after == ' ':
        return text[end + 1:], 0
    if before == ' ' and after in _CLOSING_PUNCTUATION:
        # "done quickly." -> "done."
        return text[:start - 1] + text[end:], start - 1
    return text[:start] + text[end:], start


def apply_replacements(text: str, issues: List[Issue]) -> Tuple[str, List[Issue], List[Issue]]:
    """
    Apply every issue replacement that can be applied safely.

    Returns (working text before whitespace normalisation, applied, skipped).
    """
    candidates = sorted(
        (issue for issue in issues if issue.replacement is not None),
        key=lambda issue: (issue.start, issue.end),
        reverse=True,
    )

    working = text
    # Lowest offset edited so far; everything below it is original text.
    floor = len(text)
    applied: List[Issue] = []
    skipped: List[Issue] = []

    for issue in candidates:
        if issue.end > len(text) or issue.end > floor:
            skipped.append(issue)
            continue
        if issue.replacement == '':
            working, floor = _apply_deletion(working, issue.start, issue.end)
        else:
            working = working[:issue.start] + issue.replacement + working[issue.end:]
            floor = issue.start
        applied.append(issue)

    return working, applied, skipped


def sentence_diff(original_text: str, corrected_text: str) -> List[SentenceReplacement]:
    """
    Pair original and corrected sentences by position and record the ones
    that changed. Offsets refer to ``original_text``.
    """
    if corrected_text == original_text:
        return []

    original_sentences = sentence_spans(original_text)
    corrected_sentences = [s for s, _, _ in sentence_spans(corrected_text)]

    replacements = []
    for (sentence, start, end), corrected in zip(original_sentences, corrected_sentences):
        if normalize_whitespace(sentence) == corrected:
            continue
        replacements.append(SentenceReplacement(
            type=CorrectionType.SENTENCE,
            original_text=sentence,
            corrected_text=corrected,
            start=start,
            end=end,
            message=f'Replace "{sentence}" with "{corrected}"',
        ))

    if not replacements:
        replacements.append(SentenceReplacement(
            type=CorrectionType.FULL_TEXT,
            original_text=original_text,
            corrected_text=corrected_text,
            start=0,
            end=len(original_text),
            message='Apply corrections to the full text',
        ))
    return replacements


def reconcile(original_text: str, issues: List[Issue]) -> CorrectionResult:
    """
    Build the corrected text and sentence replacements for one text unit.

    ``corrected_text`` is None unless at least one replacement was applied.
    """
    working, applied, skipped = apply_replacements(original_text, issues)

    for issue in skipped:
        logger.debug("Skipped conflicting replacement", type=issue.type.value,
                     start=issue.start, end=issue.end, replacement=issue.replacement)

    if not applied:
        return CorrectionResult(
            issues=list(issues),
            corrected_text=None,
            original_text=original_text,
            skipped_replacements=skipped,
        )

    corrected = normalize_whitespace(working)
    return CorrectionResult(
        issues=list(issues),
        corrected_text=corrected,
        original_text=original_text,
        sentence_replacements=sentence_diff(original_text, corrected),
        skipped_replacements=skipped,
        applied_replacements=applied,
    )
