"""
Core Business Logic
==================

Core modules for locating diagram blocks and replacing them with images.

Modules:
- markdown: Option-string parsing and code block selection
- rendering: Browser session management and image tag encoding
- pipeline: Orchestration of selection, rendering and substitution
"""
