"""Connexe - maze generation and navigation engine."""

__version__ = "1.0.0"
