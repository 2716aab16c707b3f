"""Playwright harness for the Hudl login journey."""

__version__ = "1.0.0"
