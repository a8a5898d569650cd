"""CCFRP catch-per-unit-effort pipeline."""

__version__ = "0.1.0"
