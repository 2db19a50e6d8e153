"""
Markdown Module
===============

Fenced code block discovery over markdown-it-py syntax trees.

Components:
- options: Language annotation parsing
- selector: Tree walking and node selection
"""
