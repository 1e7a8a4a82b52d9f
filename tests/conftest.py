"""Pytest configuration shared across test modules."""

import os

os.environ.setdefault("ANCHOR_AUDIT_LOG_LEVEL", "DEBUG")
os.environ.pop("ANCHOR_AUDIT_CONFIG", None)
