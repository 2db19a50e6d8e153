"""
Data Models
===========

Pydantic models shared by the rendering backend and the pipeline.
"""
