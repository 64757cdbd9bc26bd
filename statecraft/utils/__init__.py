"""Utilities: logging setup, event log, wall clock."""
