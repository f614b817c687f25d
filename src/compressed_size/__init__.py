"""Compressed build-output size reporting for pull requests."""

__version__ = "1.0.0"
