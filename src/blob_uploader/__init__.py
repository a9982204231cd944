"""Uploads files to blob storage and records upload history."""

__version__ = "0.1.0"
