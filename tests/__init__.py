"""Test suite for grammar-lint."""
