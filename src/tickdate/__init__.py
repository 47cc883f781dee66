"""Tick-based dates, calendar navigation and timezone resolution."""

__version__ = "0.3.0"
