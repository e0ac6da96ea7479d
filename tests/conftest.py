"""Shared fixtures for circostools tests."""

import pytest


@pytest.fixture
def write_links(tmp_path):
    """Write link lines to a temporary file and return its path."""
    def _write(lines, name="links.txt"):
        path = tmp_path / name
        path.write_text("".join(line + "\n" for line in lines))
        return path
    return _write


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers the CLI attaches to streams that close after each test."""
    import logging

    yield
    logger = logging.getLogger("circostools")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
