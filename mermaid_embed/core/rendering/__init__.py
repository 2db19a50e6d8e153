"""
Rendering Module
===============

Mermaid rendering in headless Chromium and image tag generation.

Components:
- browser_session: Playwright browser lifecycle and per-diagram pages
- image_tag: SVG to base64 ``<img>`` encoding
- assets: Static HTML harness loaded by every render page
"""
