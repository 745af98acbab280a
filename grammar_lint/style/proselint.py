"""
Proselint Wrapper for grammar-lint
==================================
Optional editorial style findings from proselint, reported as readability
issues without a machine replacement.

Checks that duplicate the built-in rules (passive voice, contractions,
weasel words, lexical illusions) are skipped.

Requires: pip install proselint
"""

from typing import Any, Dict, List, Optional, Set
from dataclasses import dataclass

from ..base import IntegrationBase
from ..config_logging import get_logger

__version__ = "1.0.0"

logger = get_logger(__name__)


@dataclass(frozen=True)
class StyleFinding:
    """A style finding from proselint; ``start``/``end`` index the checked text."""
    check_name: str
    message: str
    start: int
    end: int


# Module-level flag to prevent duplicate registration
_checks_registered = False


class ProselintWrapper(IntegrationBase):
    """
    Proselint integration.

    Supports the registry API of proselint 0.14+ and the older
    ``proselint.tools.lint`` function.
    """

    INTEGRATION_NAME = "Proselint"
    INTEGRATION_VERSION = "1.0.0"

    # Rules covered by the built-in style catalog
    SKIP_CHECKS: Set[str] = {
        'passive_voice',
        'misc.passive',
        'contractions',
        'misc.contractions',
        'weasel_words',
        'lexical_illusions',
        'typography.symbols.ellipsis',
        'typography.symbols.multiplication_symbol',
    }

    def __init__(self):
        """Initialize Proselint wrapper."""
        super().__init__()
        self._proselint = None
        self._default_config = None
        self._legacy_api = False
        self._initialize()

    def _initialize(self):
        """Initialize proselint library."""
        global _checks_registered
        try:
            import proselint
        except ImportError as e:
            self._error = f"proselint not installed: {e}"
            self._available = False
            return
        self._proselint = proselint

        try:
            from proselint.checks import __register__
            from proselint.registry import CheckRegistry
            from proselint.config import DEFAULT
        except ImportError:
            # proselint < 0.14
            import proselint.tools  # noqa: F401
            self._legacy_api = True
        else:
            if not _checks_registered:
                registry = CheckRegistry()
                registry.register_many(__register__)
                _checks_registered = True
            self._default_config = DEFAULT
        self._available = True

    def get_status(self) -> Dict[str, Any]:
        """Get detailed status of the Proselint integration."""
        return {
            'available': self.is_available,
            'error': self._error,
            'legacy_api': self._legacy_api,
            'skip_checks': sorted(self.SKIP_CHECKS),
        }

    def check(self, text: str) -> List[StyleFinding]:
        """
        Check text for style issues.

        Args:
            text: Text to check

        Returns:
            List of StyleFinding objects with valid, non-empty ranges
        """
        if not self.is_available:
            return []

        try:
            if self._legacy_api:
                raw_results = self._proselint.tools.lint(text)
            else:
                from proselint.tools import LintFile
                raw_results = LintFile(source='-', content=text).lint(self._default_config)
        except Exception as e:
            # A failing optional source degrades to no findings.
            self._error = f"Check failed: {e}"
            logger.warning("proselint check failed", error=str(e))
            return []

        findings = []
        for result in raw_results:
            finding = self._to_finding(result)
            if finding is None or self._should_skip(finding.check_name):
                continue
            if not 0 <= finding.start < finding.end <= len(text):
                continue
            findings.append(finding)
        return findings

    @staticmethod
    def _to_finding(result) -> Optional[StyleFinding]:
        # LintResult(check_result=CheckResult(...), pos=(line, col)), v0.14+
        check_result = getattr(result, 'check_result', None)
        if check_result is None and isinstance(result, tuple) and len(result) == 2:
            check_result = result[0]
        if check_result is not None and hasattr(check_result, 'check_path'):
            if not check_result.span:
                return None
            start, end = check_result.span[0], check_result.span[1]
            return StyleFinding(check_result.check_path, check_result.message, start, end)

        # Old format: (check, message, line, column, start, end, extent, severity, replacements)
        try:
            return StyleFinding(result[0], result[1], result[4], result[5])
        except (IndexError, TypeError):
            return None

    def _should_skip(self, check_name: str) -> bool:
        """Check if a rule should be skipped."""
        if check_name in self.SKIP_CHECKS:
            return True
        return any(skip in check_name for skip in self.SKIP_CHECKS)
