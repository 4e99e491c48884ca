"""ffjson inception — staged bridge/launcher builds for the ffjson generator."""

__version__ = "0.1.0"
