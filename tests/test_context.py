"""Tests for context module."""

import os
import sys
from unittest.mock import MagicMock

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from context import AppContext, get_context, reset_context, set_context
from file_discovery import FileDiscovery
from import_facts import RegexImportFactsProvider


@pytest.fixture(autouse=True)
def clean_context():
    """Reset context before and after each test."""
    reset_context()
    yield
    reset_context()


class TestAppContext:
    """Tests for AppContext dataclass."""

    def test_create_with_all_dependencies(self):
        mock_discovery = MagicMock()
        mock_provider = MagicMock()

        ctx = AppContext(discovery=mock_discovery, facts_provider=mock_provider)

        assert ctx.discovery is mock_discovery
        assert ctx.facts_provider is mock_provider

    def test_create_default(self):
        ctx = AppContext.create_default()

        assert isinstance(ctx.discovery, FileDiscovery)
        assert isinstance(ctx.facts_provider, RegexImportFactsProvider)


class TestContextFunctions:
    """Tests for context management functions."""

    def test_set_and_get_context(self):
        mock_ctx = AppContext(discovery=MagicMock(), facts_provider=MagicMock())

        set_context(mock_ctx)

        assert get_context() is mock_ctx

    def test_reset_context(self):
        mock_ctx = AppContext(discovery=MagicMock(), facts_provider=MagicMock())

        set_context(mock_ctx)
        reset_context()

        assert get_context() is not mock_ctx

    def test_get_context_returns_same_instance(self):
        assert get_context() is get_context()
