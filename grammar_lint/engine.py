"""
Text Checker
============
Single entry point: ``check_text(content, kind, config) -> CheckResult``.

For one text unit the checker
1. drops the unit when its kind is disabled or the whole value is a skip
   word / matches ``skipIfMatch``;
2. runs the style rules (prose units only) and the spelling checker;
3. sends plausible sentences to the grammar service when ``sentences`` is on;
4. reconciles replacement-bearing issues into a corrected text.

All issue offsets are relative to ``content``.
"""

import threading
import time
from typing import Dict, List, Optional, Union

from .base import CheckResult, Issue, TextKind
from .config import CheckConfiguration
from .config_logging import get_logger, set_debug
from .reconcile import reconcile
from .skip import SkipPolicy
from .spelling.checker import SpellingChecker
from .spelling.dictionary import DictionaryCache
from .style.rules import StyleRuleEngine

__version__ = "1.0.0"

logger = get_logger(__name__)


class TextChecker:
    """
    Checks text units against one configuration.

    The spelling dictionary is loaded when the checker is created, so a
    missing or malformed dictionary fails setup rather than a single unit.
    The grammar bridge starts on the first sentence sent to the service.
    """

    def __init__(self, config: Optional[CheckConfiguration] = None,
                 dictionary_cache: Optional[DictionaryCache] = None,
                 grammar_service=None, style_engine: Optional[StyleRuleEngine] = None):
        """
        Args:
            config: Check configuration (default: all defaults)
            dictionary_cache: Dictionary cache (default: process-wide cache)
            grammar_service: GrammarService (default: shared LanguageToolService)
            style_engine: Style rule engine (default: built from ``config``)

        Raises:
            DictionaryError: if spelling is enabled and no dictionary loads
        """
        self.config = config or CheckConfiguration()
        if self.config.debug:
            set_debug(True)

        self.policy = SkipPolicy(self.config)
        self.style = style_engine or StyleRuleEngine(self.config)

        self.spelling: Optional[SpellingChecker] = None
        if self.config.spelling:
            if dictionary_cache is None:
                from .spelling import get_dictionary_cache
                dictionary_cache = get_dictionary_cache()
            dictionary = dictionary_cache.get(self.config.language, self.config.lang_dir)
            self.spelling = SpellingChecker(self.policy, dictionary)

        self._grammar_service = grammar_service
        self._grammar = None
        self._bridge = None

    @property
    def grammar(self):
        """GrammarQueryAdapter, created on first use."""
        if self._grammar is None:
            from .languagetool.bridge import SyncGrammarBridge
            from .languagetool.checker import GrammarQueryAdapter

            service = self._grammar_service
            if service is None:
                from .languagetool import get_service
                service = get_service()
            self._bridge = SyncGrammarBridge(service, timeout=self.config.grammar_timeout)
            self._grammar = GrammarQueryAdapter(self._bridge, self.config, self.policy)
        return self._grammar

    def is_skipped(self, content: str, kind: TextKind) -> bool:
        if not self.config.is_kind_enabled(kind):
            return True
        value = content.strip()
        return not value or self.policy.should_skip_value(value)

    def check_text(self, content: str, kind: Union[TextKind, str]) -> CheckResult:
        """
        Check one text unit.

        Raises:
            GrammarServiceError: if sentence checking is on and the service fails
        """
        kind = TextKind(kind)
        start_time = time.time()

        if self.is_skipped(content, kind):
            return CheckResult(kind=kind, correction=reconcile(content, []))

        issues: List[Issue] = []
        # Identifiers are not prose: spelling only.
        if kind is not TextKind.IDENTIFIER:
            issues.extend(self.style.check_text(content))
        if self.spelling is not None:
            issues.extend(self.spelling.check_text(content))
        sentences_sent = 0
        if self.config.sentences and kind is not TextKind.IDENTIFIER:
            adapter = self.grammar
            already_sent = adapter.sentences_checked
            issues.extend(adapter.check_text(content))
            sentences_sent = adapter.sentences_checked - already_sent

        issues.sort(key=lambda i: (i.start, i.end, i.type.value))
        correction = reconcile(content, issues)
        elapsed_ms = (time.time() - start_time) * 1000

        logger.debug(
            "Checked text unit", kind=kind.value, length=len(content),
            issues=StyleRuleEngine.counts(issues),
            applied_replacements=len(correction.applied_replacements),
            skipped_replacements=len(correction.skipped_replacements),
            sentences_sent=sentences_sent,
            corrected=correction.has_correction,
            duration_ms=round(elapsed_ms, 2),
        )
        return CheckResult(kind=kind, correction=correction, processing_time_ms=elapsed_ms)

    def close(self):
        """Stop the grammar bridge, if one was started."""
        if self._bridge is not None:
            self._bridge.close()


_checkers: Dict[CheckConfiguration, TextChecker] = {}
_checkers_lock = threading.Lock()


def get_checker(config: Optional[CheckConfiguration] = None) -> TextChecker:
    """Shared TextChecker per configuration (default collaborators)."""
    config = config or CheckConfiguration()
    with _checkers_lock:
        checker = _checkers.get(config)
        if checker is None:
            checker = TextChecker(config)
            _checkers[config] = checker
        return checker


def check_text(content: str, kind: Union[TextKind, str] = TextKind.COMMENT,
               config: Optional[CheckConfiguration] = None) -> CheckResult:
    """
    Check one text unit with the default dictionary and grammar service.

    Args:
        content: The unit's text
        kind: comment, string, template or identifier
        config: Check configuration (default: all defaults)

    Returns:
        CheckResult with issues and the reconciled correction
    """
    return get_checker(config).check_text(content, kind)
