"""Shared fixtures for the prmerge test suite."""

pytest_plugins = ["prmerge.testing.conftest"]
