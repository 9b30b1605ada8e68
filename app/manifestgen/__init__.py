"""manifestgen - generate a typed module manifest from a source tree."""

__version__ = "0.1.0"
