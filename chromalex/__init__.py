"""Regex-driven state-machine lexers producing typed token streams."""

__version__ = "0.1.0"