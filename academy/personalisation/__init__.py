"""Feedback template reference data."""
