"""Pytest configuration shared across test modules."""

import os

os.environ.setdefault("LINKRANK_LOG_LEVEL", "WARNING")
os.environ.pop("LINKRANK_CONFIG", None)
os.environ.pop("LINKRANK_RANK_WEIGHT", None)
