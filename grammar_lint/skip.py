"""
Skip / Suppression Policy
=========================
Decides which values and words are excluded from checking.

Two predicates with deliberately different polarity:

- ``should_skip_value(value)`` returns True when the value must be skipped
  (skip-word set membership or a ``skipIfMatch`` pattern).
- ``should_skip_word(word)`` returns True when the word must be KEPT for
  spelling checks; False when it is shorter than ``minLength`` or matches a
  ``skipWordIfMatch`` pattern. Use it as a keep-predicate.

The default skip-word set is built once per process from the interpreter's
builtin names, the members of the builtin types, and ``STATIC_SKIP_WORDS``.
Keywords are left out: "is", "in" and "and" are ordinary English.
"""

import builtins
import threading
from typing import FrozenSet, Iterable, List, Optional

from .config import CheckConfiguration

__version__ = "1.0.0"

# Technical words that are never spelling errors in source code.
STATIC_SKIP_WORDS = {
    # Common technical abbreviations
    'api', 'apis', 'sdk', 'sdks', 'gui', 'guis', 'cli', 'url', 'urls', 'uri', 'uris',
    'html', 'css', 'json', 'yaml', 'yml', 'xml', 'sql', 'nosql', 'csv', 'toml',
    'http', 'https', 'ftp', 'ssh', 'tcp', 'udp', 'ip', 'dns', 'tls', 'ssl',
    'cpu', 'gpu', 'ram', 'rom', 'ssd', 'hdd', 'io', 'os',
    'pdf', 'png', 'jpg', 'jpeg', 'gif', 'svg',
    'npm', 'pip', 'git', 'svn',
    'aws', 'gcp', 'azure', 'saas',
    'ci', 'cd', 'devops',
    'todo', 'todos', 'fixme', 'xxx', 'eslint', 'noqa', 'pragma',
    'args', 'kwargs', 'params', 'argv', 'stdin', 'stdout', 'stderr',
    'config', 'configs', 'init', 'impl', 'util', 'utils', 'async', 'await',
    'boolean', 'bool', 'int', 'str', 'dict', 'enum', 'tuple', 'struct',
    'regex', 'regexp', 'utf', 'ascii', 'unicode', 'namespace', 'localhost',
    'src', 'dst', 'tmp', 'temp', 'env', 'dev', 'prod', 'repo', 'repos',
    # Common proper nouns in tech
    'github', 'gitlab', 'bitbucket', 'jira',
    'linux', 'unix', 'macos', 'ios', 'android', 'windows',
    'python', 'javascript', 'typescript', 'golang', 'rust',
    'kubernetes', 'docker', 'nginx', 'apache',
    'mongodb', 'postgresql', 'mysql', 'redis',
}

# Builtin types whose member names appear in code-adjacent prose.
_BUILTIN_TYPES = (object, str, bytes, int, float, list, tuple, dict, set, frozenset, Exception)

_default_skip_words: Optional[FrozenSet[str]] = None
_default_lock = threading.Lock()


def _collect_default_skip_words() -> FrozenSet[str]:
    words = set(STATIC_SKIP_WORDS)
    words.update(dir(builtins))
    for builtin_type in _BUILTIN_TYPES:
        words.update(name for name in dir(builtin_type) if not name.startswith('__'))
    return frozenset(word.casefold() for word in words)


def get_default_skip_words() -> FrozenSet[str]:
    """Process-wide default skip set, built on first use and read-only after."""
    global _default_skip_words
    if _default_skip_words is None:
        with _default_lock:
            if _default_skip_words is None:
                _default_skip_words = _collect_default_skip_words()
    return _default_skip_words


class SkipPolicy:
    """Skip rules for one configuration: defaults unioned with user settings."""

    def __init__(self, config: CheckConfiguration,
                 base_words: Optional[Iterable[str]] = None):
        base = get_default_skip_words() if base_words is None else frozenset(
            w.casefold() for w in base_words)
        self.skip_words: FrozenSet[str] = base | config.skip_words
        self.skip_if_match = config.skip_if_match
        self.skip_word_if_match = config.skip_word_if_match
        self.min_length = config.min_length

    def should_skip_value(self, value: str) -> bool:
        """True when ``value`` is a skip word or matches a ``skipIfMatch`` pattern."""
        if value.casefold() in self.skip_words:
            return True
        return any(pattern.search(value) for pattern in self.skip_if_match)

    def should_skip_word(self, word: str) -> bool:
        """True when ``word`` should be KEPT for spelling checks."""
        if len(word) < self.min_length:
            return False
        if any(pattern.search(word) for pattern in self.skip_word_if_match):
            return False
        return True

    def should_skip_match(self, matched_word: str) -> bool:
        """Grammar matches on a skipped word are dropped."""
        return self.should_skip_value(matched_word.strip().lower())

    def keep_words(self, words: Iterable[str]) -> List[str]:
        return [word for word in words if self.should_skip_word(word)]
