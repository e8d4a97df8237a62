"""Shared date and number helpers."""
