"""Prompt step builder: schema-driven forms with live template substitution."""

__version__ = "0.1.0"
