"""
Spelling Checks for grammar-lint
================================
Dictionary-backed spell checking of prose in source code.

Features:
- PyEnchant system dictionaries, keyed by language tag
- Supplementary ``.dic`` stems from a configured directory
- Two-pass check tolerant of identifier-style tokens

Requires: pip install pyenchant
"""

__version__ = "1.0.0"

# Lazy imports
_dictionary_cache = None


def get_dictionary_cache():
    """Get the shared DictionaryCache instance (lazy loaded)."""
    global _dictionary_cache
    if _dictionary_cache is None:
        from .dictionary import DictionaryCache
        _dictionary_cache = DictionaryCache()
    return _dictionary_cache


def is_available() -> bool:
    """Check if PyEnchant can be imported."""
    try:
        import enchant  # noqa: F401
    except ImportError:
        return False
    return True


def get_status(language: str = 'en_US') -> dict:
    """Get spelling integration status."""
    from ..config_logging import DictionaryError

    status = {
        'available': False,
        'enchant': {'available': False},
    }
    try:
        dictionary = get_dictionary_cache().get(language)
    except DictionaryError as e:
        status['enchant']['error'] = e.message
        return status

    if hasattr(dictionary, 'get_status'):
        status['enchant'] = dictionary.get_status()
    else:
        status['enchant'] = {'available': True, 'language': language}
    status['available'] = True
    return status


def get_checker():
    """Get the SpellingChecker class."""
    from .checker import SpellingChecker
    return SpellingChecker
