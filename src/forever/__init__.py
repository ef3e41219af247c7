"""forever: keep a command running and report on it."""

__version__ = "0.1.0"
