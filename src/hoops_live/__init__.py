"""Live basketball scores: match normalization and dashboard views."""

__version__ = "0.1.0"
