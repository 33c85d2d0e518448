"""Toggle an external display through displayplacer."""

__version__ = "0.1.0"
