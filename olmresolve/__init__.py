"""Operator bundle resolution building blocks and a git commit checker."""

__version__ = "0.1.0"