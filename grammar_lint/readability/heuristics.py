"""
Readability Heuristics
======================
Pattern checks for weak prose, in the spirit of write-good:

- passive: a form of "to be" followed by a past participle
- illusion: the same word twice in a row ("the the")
- so: a sentence opening with "So"
- there_is: a sentence opening with "There is" / "There are"
- weasel: vague qualifiers ("many", "various", "fairly")
- adverb: adverbs that weaken a statement ("really", "extremely")
- too_wordy: phrases with a shorter equivalent ("in order to")

Every check is pure and returns ``Suggestion`` records with offsets into
the text it was given.
"""

import re
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Pattern

__version__ = "1.0.0"


@dataclass(frozen=True)
class Suggestion:
    """One heuristic finding: ``text[index:index + length]`` and why."""
    index: int
    length: int
    reason: str

    @property
    def end(self) -> int:
        return self.index + self.length

    def to_dict(self) -> Dict:
        return {'index': self.index, 'offset': self.length, 'reason': self.reason}


# Adjectival participles that follow "to be" without forming a passive.
PASSIVE_FALSE_POSITIVES = {
    'concerned', 'interested', 'required', 'needed', 'used', 'based',
    'related', 'associated', 'located', 'designed', 'intended',
    'supposed', 'expected', 'allowed', 'permitted', 'written',
    'given', 'taken', 'known', 'shown', 'proven', 'chosen',
    'broken', 'frozen', 'hidden', 'driven', 'risen', 'fallen',
    'tired', 'bored', 'excited', 'pleased', 'satisfied', 'disappointed',
    'surprised', 'amazed', 'confused', 'frustrated', 'married',
    'retired', 'qualified', 'experienced', 'skilled', 'trained',
    'dedicated', 'committed', 'motivated', 'determined', 'organized',
    'advanced', 'detailed', 'complicated', 'sophisticated', 'automated',
    'defined', 'specified', 'described', 'listed', 'outlined', 'noted',
    'need', 'seen', 'even', 'often', 'open', 'been', 'ten', 'seven', 'eleven',
}

IRREGULAR_PARTICIPLES = {
    'awoken', 'beaten', 'become', 'begun', 'bent', 'bet', 'bid', 'bitten',
    'bled', 'blown', 'bought', 'bound', 'bred', 'brought', 'built', 'burnt',
    'burst', 'caught', 'come', 'cost', 'crept', 'cut', 'dealt', 'done',
    'drawn', 'dreamt', 'drunk', 'dug', 'eaten', 'fed', 'felt', 'fought',
    'found', 'fled', 'flown', 'forbidden', 'forgotten', 'forgiven', 'got',
    'gotten', 'grown', 'had', 'heard', 'held', 'hit', 'hung', 'hurt', 'kept',
    'knelt', 'knit', 'laid', 'led', 'left', 'lent', 'let', 'lit', 'lost',
    'made', 'meant', 'met', 'paid', 'put', 'quit', 'read', 'ridden', 'rung',
    'run', 'said', 'sent', 'set', 'sewn', 'shaken', 'shed', 'shot', 'shut',
    'slain', 'slid', 'slung', 'sold', 'sought', 'sown', 'spent', 'split',
    'spoken', 'spread', 'stolen', 'struck', 'stuck', 'stung', 'sung', 'sunk',
    'swept', 'sworn', 'swung', 'taught', 'thought', 'thrown', 'told', 'torn',
    'understood', 'upset', 'woken', 'won', 'worn', 'wound', 'wrung',
}

WEASEL_WORDS = [
    'many', 'various', 'very', 'fairly', 'several', 'extremely',
    'exceedingly', 'quite', 'remarkably', 'few', 'surprisingly', 'mostly',
    'largely', 'huge', 'tiny', 'are a number', 'is a number', 'excellent',
    'interestingly', 'significantly', 'substantially', 'clearly', 'vast',
    'relatively', 'completely',
]

ADVERBS = [
    'absolutely', 'accidentally', 'actually', 'always', 'approximately',
    'basically', 'certainly', 'completely', 'definitely', 'easily',
    'entirely', 'essentially', 'exactly', 'extremely', 'fully', 'generally',
    'greatly', 'highly', 'hopefully', 'honestly', 'incredibly', 'literally',
    'merely', 'mostly', 'naturally', 'nearly', 'obviously', 'perfectly',
    'possibly', 'practically', 'probably', 'quickly', 'rarely', 'really',
    'seriously', 'simply', 'slightly', 'surely', 'totally', 'truly',
    'usually', 'utterly', 'virtually',
]

# Wordy phrase -> shorter alternative ("" where the phrase can be dropped).
WORDY_PHRASES = {
    'a number of': 'some',
    'a majority of': 'most',
    'accordingly': 'so',
    'additional': 'more',
    'adjacent to': 'next to',
    'aforementioned': 'this',
    'along the lines of': 'like',
    'already existing': 'existing',
    'as a means of': 'to',
    'as of yet': 'yet',
    'ascertain': 'find out',
    'at this point in time': 'now',
    'at this time': 'now',
    'attributable to': 'due to',
    'because of the fact that': 'because',
    'by means of': 'by',
    'by virtue of': 'by',
    'close proximity': 'near',
    'commence': 'start',
    'comply with': 'follow',
    'consequently': 'so',
    'due to the fact that': 'because',
    'each and every': 'each',
    'endeavor': 'try',
    'facilitate': 'help',
    'first and foremost': 'first',
    'for the purpose of': 'to',
    'has the ability to': 'can',
    'in a timely manner': 'promptly',
    'in accordance with': 'per',
    'in an effort to': 'to',
    'in excess of': 'more than',
    'in lieu of': 'instead of',
    'in light of the fact that': 'because',
    'in order to': 'to',
    'in regard to': 'about',
    'in spite of the fact that': 'although',
    'in the event that': 'if',
    'in the near future': 'soon',
    'in the process of': '',
    'is able to': 'can',
    'it is important to note that': '',
    'null and void': 'void',
    'on a daily basis': 'daily',
    'owing to the fact that': 'because',
    'point in time': 'time',
    'prior to': 'before',
    'subsequent to': 'after',
    'sufficient': 'enough',
    'the majority of': 'most',
    'until such time as': 'until',
    'utilize': 'use',
    'utilization': 'use',
    'whether or not': 'whether',
    'with regard to': 'about',
    'with respect to': 'about',
    'with the exception of': 'except',
}

_BE_VERBS = r'(?:am|are|were|being|is|been|was|be)'
_PASSIVE = re.compile(r'\b' + _BE_VERBS + r'\b\s+([a-z]+ed|[a-z]+)\b', re.IGNORECASE)
_ILLUSION = re.compile(r'\b(\w+)\s+\1\b', re.IGNORECASE)
_SO_OPENER = re.compile(r'(?:^|[.!?]\s+)\s*(so)\b(?=[\s,])', re.IGNORECASE)
_THERE_IS_OPENER = re.compile(r'(?:^|[.!?]\s+)\s*(there\s+(?:is|are))\b', re.IGNORECASE)


def _phrase_pattern(phrases: Iterable[str]) -> Pattern:
    ordered = sorted(phrases, key=len, reverse=True)
    return re.compile(r'\b(?:' + '|'.join(re.escape(p) for p in ordered) + r')\b', re.IGNORECASE)


_WEASEL = _phrase_pattern(WEASEL_WORDS)
_ADVERB = _phrase_pattern(ADVERBS)
_WORDY = _phrase_pattern(WORDY_PHRASES)


def check_passive(text: str) -> List[Suggestion]:
    suggestions = []
    for match in _PASSIVE.finditer(text):
        participle = match.group(1).lower()
        if participle in PASSIVE_FALSE_POSITIVES:
            continue
        # Short -ed words ("red", "bed") are not participles.
        regular = participle.endswith('ed') and len(participle) > 4
        if not (regular or participle in IRREGULAR_PARTICIPLES):
            continue
        suggestions.append(Suggestion(
            match.start(), match.end() - match.start(),
            f'"{match.group()}" may be passive voice'
        ))
    return suggestions


def check_illusion(text: str) -> List[Suggestion]:
    return [
        Suggestion(m.start(), m.end() - m.start(), f'"{m.group(1)}" is repeated')
        for m in _ILLUSION.finditer(text)
        # Digits ("1 1") are data, not prose.
        if not m.group(1).isdigit()
    ]


def check_so(text: str) -> List[Suggestion]:
    return [
        Suggestion(m.start(1), len(m.group(1)), f'"{m.group(1)}" adds no meaning')
        for m in _SO_OPENER.finditer(text)
    ]


def check_there_is(text: str) -> List[Suggestion]:
    return [
        Suggestion(m.start(1), len(m.group(1)), f'"{m.group(1)}" is unnecessary verbiage')
        for m in _THERE_IS_OPENER.finditer(text)
    ]


def check_weasel(text: str) -> List[Suggestion]:
    return [
        Suggestion(m.start(), m.end() - m.start(), f'"{m.group()}" is a weasel word')
        for m in _WEASEL.finditer(text)
    ]


def check_adverb(text: str) -> List[Suggestion]:
    return [
        Suggestion(m.start(), m.end() - m.start(), f'"{m.group()}" can weaken meaning')
        for m in _ADVERB.finditer(text)
    ]


def check_too_wordy(text: str) -> List[Suggestion]:
    return [
        Suggestion(m.start(), m.end() - m.start(), f'"{m.group()}" is wordy or unneeded')
        for m in _WORDY.finditer(text)
    ]


CHECKS: Dict[str, Callable[[str], List[Suggestion]]] = {
    'passive': check_passive,
    'illusion': check_illusion,
    'so': check_so,
    'there_is': check_there_is,
    'weasel': check_weasel,
    'adverb': check_adverb,
    'too_wordy': check_too_wordy,
}


def analyze(text: str, **enabled: bool) -> List[Suggestion]:
    """
    Run the heuristic checks over ``text``.

    Every check runs unless disabled by keyword, e.g.
    ``analyze(text, passive=False)``. Results are ordered by position; when
    several checks flag the same span only the first is kept.

    Raises:
        ValueError: for an unknown check name
    """
    unknown = set(enabled) - set(CHECKS)
    if unknown:
        raise ValueError(f"Unknown readability checks: {', '.join(sorted(unknown))}")

    suggestions: List[Suggestion] = []
    seen = set()
    for name, check in CHECKS.items():
        if not enabled.get(name, True):
            continue
        for suggestion in check(text):
            key = (suggestion.index, suggestion.length)
            if key in seen:
                continue
            seen.add(key)
            suggestions.append(suggestion)
    suggestions.sort(key=lambda s: (s.index, s.length))
    return suggestions


def is_passive_reason(reason: str) -> bool:
    return reason.endswith('may be passive voice')
