"""Shared helpers for pkgsender."""
