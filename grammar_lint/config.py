"""
Grammar Lint Configuration
==========================
Immutable per-invocation settings for the text checker.

Configuration can be set via:
1. Host rule options (camelCase keys, see ``OPTION_FIELDS``)
2. Environment variables (GRAMMAR_LINT_LANG=en_GB), applied last

All settings have defaults; an empty options dict is a valid configuration.
"""

import os
import re
from dataclasses import dataclass, replace
from typing import Any, Dict, FrozenSet, Iterable, Optional, Pattern, Tuple

from .config_logging import ConfigurationError, get_logger

__version__ = "1.0.0"

logger = get_logger(__name__)


@dataclass(frozen=True)
class CheckConfiguration:
    """Settings for one ``check_text`` invocation."""
    language: str = "en_US"
    min_length: int = 1
    skip_words: FrozenSet[str] = frozenset()
    skip_if_match: Tuple[Pattern, ...] = ()
    skip_word_if_match: Tuple[Pattern, ...] = ()

    # Style rule toggles
    weak_words: bool = True
    passive_voice: bool = True
    terminology: bool = True
    contractions: bool = True
    prohibited: bool = True
    gender_neutral: bool = True
    readability: bool = True

    # Text unit toggles
    sentences: bool = False
    comments: bool = True
    strings: bool = True
    templates: bool = True
    identifiers: bool = True

    confidence: float = 0.0
    lang_dir: Optional[str] = None
    debug: bool = False

    spelling: bool = True
    max_grade_level: Optional[float] = None
    use_proselint: bool = False
    grammar_timeout: Optional[float] = None

    def __post_init__(self):
        if self.min_length < 0:
            raise ConfigurationError("minLength must be >= 0", field='minLength')
        if not 0.0 <= self.confidence <= 1.0:
            raise ConfigurationError("confidence must be between 0 and 1", field='confidence')
        if self.grammar_timeout is not None and self.grammar_timeout <= 0:
            raise ConfigurationError("grammarTimeout must be positive", field='grammarTimeout')
        # Normalise collections so equal configurations compare equal.
        object.__setattr__(self, 'skip_words', frozenset(w.casefold() for w in self.skip_words))
        object.__setattr__(self, 'skip_if_match', _compile_patterns(self.skip_if_match, 'skipIfMatch'))
        object.__setattr__(self, 'skip_word_if_match',
                           _compile_patterns(self.skip_word_if_match, 'skipWordIfMatch'))

    @classmethod
    def from_options(cls, options: Optional[Dict[str, Any]] = None) -> 'CheckConfiguration':
        """
        Build a configuration from the host option surface.

        Raises ConfigurationError for unknown keys or wrongly typed values.
        """
        options = options or {}
        kwargs: Dict[str, Any] = {}
        for key, value in options.items():
            if key not in OPTION_FIELDS:
                raise ConfigurationError(f"Unknown option: {key}", field=key)
            attr, converter = OPTION_FIELDS[key]
            kwargs[attr] = converter(key, value)
        return cls(**kwargs)

    def is_kind_enabled(self, kind) -> bool:
        """Whether text units of ``kind`` (a TextKind) are checked at all."""
        return bool(getattr(self, KIND_TOGGLES[kind.value]))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'lang': self.language,
            'minLength': self.min_length,
            'skipWords': sorted(self.skip_words),
            'skipIfMatch': [p.pattern for p in self.skip_if_match],
            'skipWordIfMatch': [p.pattern for p in self.skip_word_if_match],
            'checkWeakWords': self.weak_words,
            'checkPassiveVoice': self.passive_voice,
            'checkTerminology': self.terminology,
            'checkContractions': self.contractions,
            'checkProhibited': self.prohibited,
            'checkGenderNeutral': self.gender_neutral,
            'checkReadability': self.readability,
            'sentences': self.sentences,
            'comments': self.comments,
            'strings': self.strings,
            'templates': self.templates,
            'identifiers': self.identifiers,
            'confidence': self.confidence,
            'langDir': self.lang_dir,
            'debug': self.debug,
            'spelling': self.spelling,
            'maxGradeLevel': self.max_grade_level,
            'useProselint': self.use_proselint,
            'grammarTimeout': self.grammar_timeout,
        }


KIND_TOGGLES = {
    'comment': 'comments',
    'string': 'strings',
    'template': 'templates',
    'identifier': 'identifiers',
}


def _compile_patterns(patterns: Iterable[Any], option: str) -> Tuple[Pattern, ...]:
    compiled = []
    for pattern in patterns:
        if isinstance(pattern, re.Pattern):
            compiled.append(pattern)
            continue
        if not isinstance(pattern, str):
            raise ConfigurationError(f"{option} entries must be strings or patterns", field=option)
        try:
            compiled.append(re.compile(pattern))
        except re.error as e:
            raise ConfigurationError(f"Invalid pattern in {option}: {pattern!r} ({e})", field=option)
    return tuple(compiled)


# =============================================================================
# OPTION CONVERTERS
# =============================================================================

def _bool(key: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError(f"{key} must be a boolean", field=key)
    return value


def _int(key: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{key} must be an integer", field=key)
    return value


def _float(key: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"{key} must be a number", field=key)
    return float(value)


def _optional_float(key: str, value: Any) -> Optional[float]:
    return None if value is None else _float(key, value)


def _str(key: str, value: Any) -> str:
    if not isinstance(value, str) or not value:
        raise ConfigurationError(f"{key} must be a non-empty string", field=key)
    return value


def _optional_str(key: str, value: Any) -> Optional[str]:
    return None if value is None else _str(key, value)


def _word_set(key: str, value: Any) -> FrozenSet[str]:
    if isinstance(value, str) or not isinstance(value, (list, tuple, set, frozenset)):
        raise ConfigurationError(f"{key} must be a list of words", field=key)
    if not all(isinstance(w, str) for w in value):
        raise ConfigurationError(f"{key} must only contain strings", field=key)
    return frozenset(value)


def _patterns(key: str, value: Any) -> Tuple[Any, ...]:
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise ConfigurationError(f"{key} must be a list of patterns", field=key)
    return tuple(value)


# Host option key -> (CheckConfiguration attribute, converter)
OPTION_FIELDS = {
    'comments': ('comments', _bool),
    'strings': ('strings', _bool),
    'templates': ('templates', _bool),
    'identifiers': ('identifiers', _bool),
    'sentences': ('sentences', _bool),
    'debug': ('debug', _bool),
    'minLength': ('min_length', _int),
    'skipWords': ('skip_words', _word_set),
    'skipIfMatch': ('skip_if_match', _patterns),
    'skipWordIfMatch': ('skip_word_if_match', _patterns),
    'lang': ('language', _str),
    'confidence': ('confidence', _float),
    'langDir': ('lang_dir', _optional_str),
    'checkWeakWords': ('weak_words', _bool),
    'checkPassiveVoice': ('passive_voice', _bool),
    'checkTerminology': ('terminology', _bool),
    'checkContractions': ('contractions', _bool),
    'checkProhibited': ('prohibited', _bool),
    'checkGenderNeutral': ('gender_neutral', _bool),
    'checkReadability': ('readability', _bool),
    'spelling': ('spelling', _bool),
    'maxGradeLevel': ('max_grade_level', _optional_float),
    'useProselint': ('use_proselint', _bool),
    'grammarTimeout': ('grammar_timeout', _optional_float),
}


# =============================================================================
# ENVIRONMENT
# =============================================================================

def _parse_bool(value: str) -> bool:
    """Parse boolean from string."""
    return value.lower() in ('true', '1', 'yes', 'on')


def _parse_confidence(value: str) -> float:
    parsed = float(value)
    if not 0.0 <= parsed <= 1.0:
        raise ValueError("out of range")
    return parsed


ENV_MAPPINGS = {
    'GRAMMAR_LINT_LANG': ('language', str),
    'GRAMMAR_LINT_LANG_DIR': ('lang_dir', str),
    'GRAMMAR_LINT_SENTENCES': ('sentences', _parse_bool),
    'GRAMMAR_LINT_DEBUG': ('debug', _parse_bool),
    'GRAMMAR_LINT_CONFIDENCE': ('confidence', _parse_confidence),
}


def apply_env(config: CheckConfiguration, environ: Optional[Dict[str, str]] = None) -> CheckConfiguration:
    """Return ``config`` with environment variable overrides applied."""
    environ = os.environ if environ is None else environ
    changes: Dict[str, Any] = {}
    for env_var, (attr, converter) in ENV_MAPPINGS.items():
        value = environ.get(env_var)
        if value is None or value == '':
            continue
        try:
            changes[attr] = converter(value)
        except ValueError as e:
            logger.warning(f"Invalid env var {env_var}={value}: {e}")
    return replace(config, **changes) if changes else config


def load_configuration(options: Optional[Dict[str, Any]] = None,
                       environ: Optional[Dict[str, str]] = None) -> CheckConfiguration:
    """Host options first, then environment overrides."""
    return apply_env(CheckConfiguration.from_options(options), environ)
