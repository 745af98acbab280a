"""
grammar-lint Tests Package
==========================
Test suite for the text checker and its integrations.

Run all tests: python3 -m pytest tests/grammar_lint/ -v
Run specific: python3 -m pytest tests/grammar_lint/test_reconcile.py -v
"""

__version__ = "1.0.0"
