"""
Readability Checks for grammar-lint
===================================
Pattern heuristics for weak prose plus an optional grade-level check.

Features:
- Passive voice, weasel words, adverbs, wordy phrases
- Repeated words, "So" and "There is" sentence openers
- Flesch-Kincaid grade per sentence (textstat)

Requires: pip install textstat (grade level only)
"""

__version__ = "1.0.0"

# Lazy imports
_grader = None


def get_grader():
    """Get the shared SentenceGrader instance (lazy loaded)."""
    global _grader
    if _grader is None:
        from .grade import SentenceGrader
        _grader = SentenceGrader()
    return _grader


def is_available() -> bool:
    """Check if the textstat grade check is available."""
    return get_grader().is_available


def get_status() -> dict:
    """Get readability integration status."""
    status = get_grader().get_status()
    status['heuristics'] = True
    return status


def analyze(text: str, **enabled: bool):
    """
    Run the readability heuristics over ``text``.

    Args:
        text: Text to analyze
        **enabled: check name -> False to disable it (e.g. passive=False)

    Returns:
        List of Suggestion records
    """
    from .heuristics import analyze as run_heuristics
    return run_heuristics(text, **enabled)
