"""Nextflix API - movie search and discovery proxy."""

__version__ = "1.0.0"
