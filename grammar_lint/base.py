"""
Grammar Lint Base Types
=======================
Value types shared by every checker, plus the base class for wrappers
around external libraries.

Every checker returns the same closed ``Issue`` shape; offsets are always
relative to the text unit that was passed to ``check_text``.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

__version__ = "1.0.0"


class TextKind(Enum):
    """Syntactic origin of a text unit."""
    COMMENT = "comment"
    STRING = "string"
    TEMPLATE = "template"
    IDENTIFIER = "identifier"


class IssueType(Enum):
    """Closed set of issue tags."""
    WEAK_WORD = "weak-word"
    PASSIVE_VOICE = "passive-voice"
    TERMINOLOGY = "terminology"
    CONTRACTION = "contraction"
    PROHIBITED = "prohibited"
    GENDER_NEUTRAL = "gender-neutral"
    READABILITY = "readability"
    SPELLING = "spelling"
    GRAMMAR = "grammar"


class Severity(Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class CorrectionType(Enum):
    SENTENCE = "sentence-correction"
    FULL_TEXT = "full-text-correction"


@dataclass(frozen=True)
class Issue:
    """
    One detected problem inside a text unit.

    ``start``/``end`` are half-open offsets into the unit's content.
    ``replacement`` is machine-applicable: ``""`` means delete the range,
    ``None`` means no safe replacement exists.
    """
    type: IssueType
    start: int
    end: int
    severity: Severity
    message: str
    suggestion: Optional[str] = None
    replacement: Optional[str] = None

    def __post_init__(self):
        if self.start < 0 or self.end <= self.start:
            raise ValueError(
                f"Invalid issue range [{self.start}, {self.end}) for {self.type.value}"
            )

    @property
    def has_replacement(self) -> bool:
        return self.replacement is not None

    def text_in(self, content: str) -> str:
        """Return the slice of ``content`` this issue covers."""
        return content[self.start:self.end]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format for reporting."""
        return {
            'type': self.type.value,
            'start': self.start,
            'end': self.end,
            'severity': self.severity.value,
            'message': self.message,
            'suggestion': self.suggestion,
            'replacement': self.replacement,
        }


@dataclass(frozen=True)
class SentenceReplacement:
    """A sentence-level (or whole-text) correction derived by the reconciler."""
    type: CorrectionType
    original_text: str
    corrected_text: str
    start: int
    end: int
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.type.value,
            'original_text': self.original_text,
            'corrected_text': self.corrected_text,
            'start': self.start,
            'end': self.end,
            'message': self.message,
        }


@dataclass(frozen=True)
class CorrectionResult:
    """Issues of one text unit plus the reconciled correction, if any."""
    issues: List[Issue]
    corrected_text: Optional[str]
    original_text: str
    sentence_replacements: List[SentenceReplacement] = field(default_factory=list)
    skipped_replacements: List[Issue] = field(default_factory=list)
    applied_replacements: List[Issue] = field(default_factory=list)

    @property
    def has_correction(self) -> bool:
        return self.corrected_text is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'issues': [i.to_dict() for i in self.issues],
            'corrected_text': self.corrected_text,
            'original_text': self.original_text,
            'sentence_replacements': [r.to_dict() for r in self.sentence_replacements],
            'skipped_replacements': [i.to_dict() for i in self.skipped_replacements],
            'applied_replacements': [i.to_dict() for i in self.applied_replacements],
        }


@dataclass(frozen=True)
class CheckResult:
    """Everything ``check_text`` produced for a single text unit."""
    kind: TextKind
    correction: CorrectionResult
    processing_time_ms: float = 0.0

    @property
    def content(self) -> str:
        return self.correction.original_text

    @property
    def issues(self) -> List[Issue]:
        return self.correction.issues

    @property
    def corrected_text(self) -> Optional[str]:
        return self.correction.corrected_text

    @property
    def sentence_replacements(self) -> List[SentenceReplacement]:
        return self.correction.sentence_replacements

    def issues_of(self, issue_type: IssueType) -> List[Issue]:
        return [i for i in self.issues if i.type is issue_type]

    def to_dict(self) -> Dict[str, Any]:
        result = self.correction.to_dict()
        result['kind'] = self.kind.value
        result['processing_time_ms'] = self.processing_time_ms
        return result


class IntegrationBase(ABC):
    """
    Abstract base class for wrappers around external libraries
    (dictionary, grammar server, readability tooling).
    """

    INTEGRATION_NAME: str = "Integration"
    INTEGRATION_VERSION: str = "1.0.0"

    def __init__(self):
        self._available = False
        self._error: Optional[str] = None

    @property
    def is_available(self) -> bool:
        """Check if the integration is available and working."""
        return self._available

    @property
    def error(self) -> Optional[str]:
        """Get initialization error if any."""
        return self._error

    @abstractmethod
    def get_status(self) -> Dict[str, Any]:
        """Get detailed status of the integration."""
        pass
