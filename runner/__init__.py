"""Smoke runner that checks a deployed probe server answers as its variant should."""
