# src/tourit/api/__init__.py
"""HTTP API packages."""
