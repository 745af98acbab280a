"""
LanguageTool Integration for grammar-lint
=========================================
Sentence-level grammar checking behind a synchronous bridge.

Features:
- LanguageTool local server (air-gap compatible after setup)
- Blocking calls over plain or coroutine grammar services
- Skip-word and confidence filtering of matches

Requires: pip install language-tool-python
Note: First run downloads LanguageTool JAR (~200MB)
"""

__version__ = "1.0.0"

# Lazy imports - only load when accessed
_service = None


def get_service():
    """Get the shared LanguageToolService instance (lazy loaded)."""
    global _service
    if _service is None:
        from .client import LanguageToolService
        _service = LanguageToolService()
    return _service


def is_available() -> bool:
    """Check if language_tool_python can be used."""
    return get_service().is_available


def get_status() -> dict:
    """Get LanguageTool integration status."""
    return get_service().get_status()


def get_checker():
    """Get the GrammarQueryAdapter class."""
    from .checker import GrammarQueryAdapter
    return GrammarQueryAdapter
