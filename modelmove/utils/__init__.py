"""Utility helpers for logging."""
