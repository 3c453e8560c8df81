"""Tutor Match: teacher discovery and matching for a tutoring marketplace."""

__version__ = "1.0.0"
