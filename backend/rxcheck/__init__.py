"""Prescription scanning and drug interaction checking service."""

__version__ = "1.0.0"
