"""Pathwise: personal-finance planning engine."""

__version__ = "0.1.0"
