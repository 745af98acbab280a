"""
Tokenizer / Segmenter
=====================
Splits a text unit into words and sentences.

Words: escape sequences and format placeholders are masked out, tokens
are split at camelCase/PascalCase boundaries. Digits and apostrophes stay
attached to the token; ``derive_subtokens`` handles them in the spelling
checker's second pass.

Sentences: split on whitespace that follows ``.``, ``!`` or ``?``.
Abbreviations such as "U.S." are not special-cased.
"""

import re
from typing import List, Tuple

__version__ = "1.0.0"

Span = Tuple[str, int, int]

# Escape sequences, printf/format placeholders and template substitutions.
# Matches are blanked with spaces of equal length so offsets stay valid.
_MASKED_SEQUENCES = re.compile(
    r'\\u[0-9a-fA-F]{4}'
    r'|\\x[0-9a-fA-F]{2}'
    r'|\\[nrtbfv0\\\'"]'
    r'|%[-+#0]*\d*(?:\.\d+)?[sdifjoxXeEgGrc%]'
    r'|\$\{[^}]*\}'
    r'|\{\w*\}'
)

_WORD = re.compile(r"[^\W_]+(?:['’][^\W_]+)*")

_CASE_BOUNDARY = re.compile(r'(?<=[a-z])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])')

_POSSESSIVE = re.compile(r"['’]s$", re.IGNORECASE)

_DIGITS_AND_APOSTROPHES = re.compile(r"[\d'’]+")

_SENTENCE_BREAK = re.compile(r'(?<=[.!?])\s+')

_SENTENCE_START = re.compile(r'^[A-Z]')
_SENTENCE_END = re.compile(r'[.!?]$')
_HAS_WORD = re.compile(r'\b\w+\b')


def mask_sequences(text: str) -> str:
    """Blank out escape sequences and placeholders, preserving length."""
    return _MASKED_SEQUENCES.sub(lambda m: ' ' * len(m.group()), text)


def split_case_boundaries(token: str) -> List[Tuple[str, int]]:
    """Split ``token`` at camelCase boundaries; returns (piece, offset) pairs."""
    pieces = []
    start = 0
    for boundary in _CASE_BOUNDARY.finditer(token):
        pos = boundary.start()
        if pos > start:
            pieces.append((token[start:pos], start))
        start = pos
    pieces.append((token[start:], start))
    return pieces


def word_spans(text: str) -> List[Span]:
    """
    Return (word, start, end) for every word in ``text``.

    Offsets index into ``text`` itself, not into the masked copy.
    """
    masked = mask_sequences(text)
    spans: List[Span] = []
    for match in _WORD.finditer(masked):
        for piece, offset in split_case_boundaries(match.group()):
            start = match.start() + offset
            spans.append((piece, start, start + len(piece)))
    return spans


def segment_words(text: str) -> List[str]:
    return [word for word, _, _ in word_spans(text)]


def derive_subtokens(token: str) -> List[str]:
    """
    Second-pass split of a token the dictionary rejected.

    Drops a possessive suffix, turns digits and apostrophes into
    boundaries, re-splits on case boundaries and lower-cases:
    ``test12anything78variable`` -> ``['test', 'anything', 'variable']``.
    """
    stripped = _POSSESSIVE.sub('', token)
    stripped = _DIGITS_AND_APOSTROPHES.sub(' ', stripped)
    stripped = _CASE_BOUNDARY.sub(' ', stripped)
    return [part.lower() for part in stripped.split()]


def sentence_spans(text: str) -> List[Span]:
    """Return (sentence, start, end) for every non-empty sentence fragment."""
    spans: List[Span] = []
    start = 0
    for brk in _SENTENCE_BREAK.finditer(text):
        _append_fragment(spans, text, start, brk.start())
        start = brk.end()
    _append_fragment(spans, text, start, len(text))
    return spans


def _append_fragment(spans: List[Span], text: str, start: int, end: int):
    fragment = text[start:end]
    stripped = fragment.strip()
    if not stripped:
        return
    lead = len(fragment) - len(fragment.lstrip())
    begin = start + lead
    spans.append((stripped, begin, begin + len(stripped)))


def segment_sentences(text: str) -> List[str]:
    return [sentence for sentence, _, _ in sentence_spans(text)]


def is_valid_sentence(text: str) -> bool:
    """
    A plausible sentence starts with a capital letter, ends with terminal
    punctuation and contains at least one word.
    """
    trimmed = text.strip()
    if not trimmed:
        return False
    return bool(
        _SENTENCE_START.search(trimmed)
        and _SENTENCE_END.search(trimmed)
        and _HAS_WORD.search(trimmed)
    )
