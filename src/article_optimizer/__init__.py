"""Optimize published articles against top-ranking competing pages."""

__version__ = "0.1.0"
