# tests/property/__init__.py
"""Property-based tests for mockdb.

These check program and log invariants for all generated inputs rather
than a handful of examples.

Test categories:
- engine/: program resolution, execution log draining, annotation
"""
