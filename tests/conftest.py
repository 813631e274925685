"""Pytest configuration."""


def pytest_configure(config):
    # End-to-end CLI runs against a file-backed SQLite database
    config.addinivalue_line(
        "markers", "integration: CLI tests that touch a real database file (deselect with '-m \"not integration\"')"
    )
