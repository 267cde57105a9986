"""Org audit — salary band and reporting-depth checks over an employee hierarchy."""

__version__ = "1.0.0"
