"""
LanguageTool Client for grammar-lint
====================================
The grammar service boundary and its language_tool_python implementation.

Features:
- ``GrammarService`` interface: ``check(text, options) -> matches``
  (plain or coroutine implementations)
- One local LanguageTool server per language tag, started on first use
- Rule filtering to avoid overlap with the built-in checkers
- Severity mapping from LanguageTool categories

Requires: pip install language-tool-python
Note: First run downloads the LanguageTool server (~200MB) and needs Java
"""

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, FrozenSet, List, Optional, Pattern, Set, Tuple

from ..base import IntegrationBase, Severity
from ..config_logging import GrammarServiceError, get_logger

__version__ = "1.0.0"

logger = get_logger(__name__)


@dataclass(frozen=True)
class GrammarOptions:
    """Request options sent with every grammar check."""
    language: str = "en_US"
    dictionary: FrozenSet[str] = frozenset()
    skip_if_match: Tuple[Pattern, ...] = ()


@dataclass
class GrammarMatch:
    """A grammar issue returned by the service; offsets index the checked text."""
    offset: int
    length: int
    message: str
    replacements: List[str] = field(default_factory=list)
    rule_id: str = ""
    short_message: str = ""
    category: str = "MISC"
    severity: Severity = Severity.WARNING
    confidence: Optional[float] = None

    @property
    def end(self) -> int:
        return self.offset + self.length

    def matched_text(self, text: str) -> str:
        return text[self.offset:self.end]


class GrammarService(ABC):
    """External grammar checker. ``check`` may return matches or an awaitable."""

    @abstractmethod
    def check(self, text: str, options: GrammarOptions):
        """Return the GrammarMatch list for ``text``."""
        pass


def to_languagetool_code(language: str) -> str:
    """``en_US`` -> ``en-US``."""
    return language.replace('_', '-')


class LanguageToolService(IntegrationBase, GrammarService):
    """
    LanguageTool integration.

    Runs a local Java server; no internet required after installation.
    Servers are created lazily per language and shared by later checks.
    """

    INTEGRATION_NAME = "LanguageTool"
    INTEGRATION_VERSION = "1.0.0"

    # Severity mapping from LanguageTool categories
    SEVERITY_MAP = {
        'GRAMMAR': Severity.ERROR,
        'TYPOS': Severity.ERROR,
        'PUNCTUATION': Severity.WARNING,
        'STYLE': Severity.INFO,
        'TYPOGRAPHY': Severity.INFO,
        'CASING': Severity.WARNING,
        'COLLOCATIONS': Severity.INFO,
        'REDUNDANCY': Severity.INFO,
        'SEMANTICS': Severity.WARNING,
        'MISC': Severity.INFO,
    }

    # Rules covered by the built-in checkers
    SKIP_RULES: Set[str] = {
        'PASSIVE_VOICE',
        'BE_PASSIVE_VOICE',
        'WHITESPACE_RULE',
        'DOUBLE_WHITESPACE',
        'CONTRACTION_SPELLING',
    }

    def __init__(self, tool_factory: Optional[Callable[[str], Any]] = None):
        """
        Args:
            tool_factory: Builds a LanguageTool-compatible object for a
                language code (default: language_tool_python.LanguageTool)
        """
        super().__init__()
        self._tool_factory = tool_factory
        self._tools: Dict[str, Any] = {}
        self._lock = threading.Lock()
        if tool_factory is None:
            self._init_module()
        else:
            self._available = True

    def _init_module(self):
        try:
            import language_tool_python
            self._tool_factory = language_tool_python.LanguageTool
            self._available = True
        except ImportError as e:
            self._error = f"language-tool-python not installed: {e}"
            self._available = False

    def get_status(self) -> Dict[str, Any]:
        """Get detailed status of the LanguageTool integration."""
        return {
            'available': self.is_available,
            'error': self._error,
            'languages': sorted(self._tools),
            'skip_rules': sorted(self.SKIP_RULES),
        }

    def _get_tool(self, language: str):
        code = to_languagetool_code(language)
        with self._lock:
            tool = self._tools.get(code)
            if tool is None:
                try:
                    tool = self._tool_factory(code)
                except Exception as e:
                    self._error = f"LanguageTool initialization failed: {e}"
                    raise GrammarServiceError(self._error, language=code) from e
                self._tools[code] = tool
                logger.info("LanguageTool server started", language=code)
            return tool

    def check(self, text: str, options: GrammarOptions) -> List[GrammarMatch]:
        """
        Check text for grammar issues.

        Args:
            text: Sentence to check
            options: Language, ignored words and patterns

        Returns:
            List of GrammarMatch objects

        Raises:
            GrammarServiceError: if LanguageTool is unavailable or the check fails
        """
        if not self.is_available:
            raise GrammarServiceError(self._error or "LanguageTool unavailable", text=text)

        tool = self._get_tool(options.language)
        try:
            matches = tool.check(text)
        except Exception as e:
            raise GrammarServiceError(f"Check failed: {e}", text=text) from e

        results = []
        for match in matches:
            if match.ruleId in self.SKIP_RULES:
                continue
            result = self._to_grammar_match(match)
            if self._is_ignored(result.matched_text(text), options):
                continue
            results.append(result)
        return results

    def _to_grammar_match(self, match) -> GrammarMatch:
        category = getattr(match, 'category', None) or 'MISC'
        return GrammarMatch(
            offset=match.offset,
            length=match.errorLength,
            message=match.message,
            replacements=list(match.replacements or [])[:5],
            rule_id=match.ruleId,
            short_message=getattr(match, 'shortMessage', '') or '',
            category=category,
            severity=self.SEVERITY_MAP.get(category, Severity.INFO),
            # LanguageTool does not score its matches.
            confidence=getattr(match, 'confidence', None),
        )

    @staticmethod
    def _is_ignored(word: str, options: GrammarOptions) -> bool:
        if word.casefold() in options.dictionary:
            return True
        return any(pattern.search(word) for pattern in options.skip_if_match)

    def close(self):
        """Shut down the LanguageTool servers."""
        with self._lock:
            tools, self._tools = list(self._tools.values()), {}
        for tool in tools:
            try:
                tool.close()
            except Exception as e:
                logger.warning("LanguageTool shutdown failed", error=str(e))
