"""
Configuration Management
=======================

Environment-based configuration using Pydantic Settings.

Components:
- settings: Browser, harness and rendering settings
- logging: Structured logging configuration
"""
