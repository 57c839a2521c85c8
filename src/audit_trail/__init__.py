"""Append-only audit trail for the records host system."""

__version__ = "0.1.0"
