"""
Test Suite
==========

Test suite matching the mermaid_embed/ directory structure.

Test Categories:
- unit: Unit tests for individual components, no real browser required
"""
