"""Succession Planning & Talent Pipeline engine."""

__version__ = "0.3.0"
