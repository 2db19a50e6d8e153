"""
Test Utilities
==============

Fakes and helpers shared across the test suite.
"""
