# src/mockdb/core/__init__.py
"""Ambient infrastructure: configuration and logging."""
