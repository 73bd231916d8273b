"""Specifier expansion, semver ranges and tag selection."""
