# src/tourit/core/__init__.py
"""Configuration, security and error primitives."""
