"""
grammar-lint
============
Version: 1.0.0

Spelling, grammar and writing-style checks for the prose inside source
code: comments, string literals, template fragments and identifiers.

Integrations (lazily loaded, each optional except spelling):
- spelling: PyEnchant dictionaries with a two-pass identifier-aware check
- style: Microsoft Writing Style rules, optional Proselint findings
- readability: write-good style heuristics, textstat grade levels
- languagetool: sentence grammar through a synchronous bridge

Usage:
    from grammar_lint import check_text, CheckConfiguration, TextKind

    result = check_text("Please login now.", TextKind.COMMENT)
    result.corrected_text   # "Please sign in now."
"""

__version__ = "1.0.0"

from .base import CheckResult, Issue, IssueType, Severity, TextKind  # noqa: E402
from .config import CheckConfiguration, load_configuration  # noqa: E402
from .config_logging import (  # noqa: E402
    ConfigurationError, DictionaryError, GrammarLintError, GrammarServiceError,
)
from .engine import TextChecker, check_text  # noqa: E402

# Lazy loading implementation
# Integration subpackages are only imported when first accessed

_MODULES = {
    'spelling': 'grammar_lint.spelling',
    'style': 'grammar_lint.style',
    'readability': 'grammar_lint.readability',
    'languagetool': 'grammar_lint.languagetool',
}

_loaded_modules = {}


def __getattr__(name):
    """Lazy load integration subpackages on first access."""
    if name in _MODULES:
        if name not in _loaded_modules:
            import importlib
            _loaded_modules[name] = importlib.import_module(_MODULES[name])
        return _loaded_modules[name]
    raise AttributeError(f"module 'grammar_lint' has no attribute '{name}'")


def __dir__():
    """List public names and integration subpackages."""
    return sorted(list(_MODULES.keys()) + __all__)


def get_status():
    """
    Get status of all integrations.

    Returns dict with availability and version info for each module.
    """
    status = {
        'version': __version__,
        'modules': {}
    }

    for name in _MODULES:
        mod = __getattr__(name)
        module_status = {
            'version': getattr(mod, '__version__', 'unknown'),
        }
        module_status.update(mod.get_status())
        status['modules'][name] = module_status

    return status


__all__ = [
    'CheckConfiguration',
    'CheckResult',
    'ConfigurationError',
    'DictionaryError',
    'GrammarLintError',
    'GrammarServiceError',
    'Issue',
    'IssueType',
    'Severity',
    'TextChecker',
    'TextKind',
    'check_text',
    'get_status',
    'load_configuration',
]
