"""Logging and vector utilities."""
