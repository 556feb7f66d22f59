"""Root pytest configuration for all tests."""

import logging

import pytest

from guidesync.content_converter import MarkdownConverter


@pytest.fixture
def converter():
    """Converter with the default settings (no link target rewriting)."""
    return MarkdownConverter()


@pytest.fixture
def link_target_converter():
    """Converter that opens external links in a new tab."""
    return MarkdownConverter(enable_link_target_blank=True)


@pytest.fixture(autouse=True)
def reset_app_logger():
    """Drop handlers the CLI attaches so tests do not leak them into each other."""
    yield
    logging.getLogger("guidesync").handlers.clear()
