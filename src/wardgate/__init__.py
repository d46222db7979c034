"""Wardgate - permission and access-control subsystem for hospital administration."""

__version__ = "0.1.0"
