"""Logging and metrics for composegraph."""
