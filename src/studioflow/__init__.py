"""Resilient AI-assisted video content workflow."""

__version__ = "0.1.0"
