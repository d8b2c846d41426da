"""Pytest configuration for sparkgang."""

# Prevent collection from source tree
collect_ignore = ["src"]


def pytest_configure(config):
    """Register custom test markers."""
    config.addinivalue_line("markers", "cli: CLI tests driven through typer's CliRunner")
