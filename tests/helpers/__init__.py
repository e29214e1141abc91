"""Shared helpers for the pugview test suite."""
