# src/lions_bible/api/__init__.py
"""HTTP API for the Lions Bible application."""
