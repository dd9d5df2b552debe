"""Fixtures specific to integration tests."""

import pytest

from aws_resource_gc.action import CleanupAction


@pytest.fixture(autouse=True)
def _mark_as_integration(request):
    """Automatically mark all tests in integration/ as integration tests."""
    request.node.add_marker(pytest.mark.integration)


@pytest.fixture
def commit_action():
    """Orchestrator in commit (LIVE) mode."""
    return CleanupAction(commit=True)


@pytest.fixture
def dry_run_action():
    """Orchestrator in dry-run mode."""
    return CleanupAction(commit=False)
