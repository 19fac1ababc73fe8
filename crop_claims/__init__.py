"""Crop insurance claim triage service."""

__version__ = "0.1.0"
