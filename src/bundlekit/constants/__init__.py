"""Shared constants for bundlekit."""
