"""
Style Checking for grammar-lint
===============================
Microsoft Writing Style rules plus optional editorial findings from
Proselint.

Features:
- Weak words, prohibited terms, terminology, contractions
- Gender-neutral language
- Passive voice and readability heuristics
- Proselint editorial rules (opt-in)

Requires: pip install proselint (optional source only)
"""

__version__ = "1.0.0"

# Lazy imports
_wrapper = None


def get_wrapper():
    """Get the shared ProselintWrapper instance (lazy loaded)."""
    global _wrapper
    if _wrapper is None:
        from .proselint import ProselintWrapper
        _wrapper = ProselintWrapper()
    return _wrapper


def is_available() -> bool:
    """Check if the Proselint source is available."""
    return get_wrapper().is_available


def get_status() -> dict:
    """Get style checking integration status."""
    from .rules import RULES
    status = get_wrapper().get_status()
    status['rules'] = [name for name, _ in RULES]
    return status
