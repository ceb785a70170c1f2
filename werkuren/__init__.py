"""Werkuren calculator: session timing and billing for on-site IT help."""

__version__ = "1.0.0"
