"""
Shared pytest fixtures and configuration for eventpager tests.

This module provides common fixtures used across unit and integration tests,
including mocked boto3 clients, LocalStack clients, and event factories.
"""

import os
from collections.abc import Callable
from typing import TYPE_CHECKING
from unittest.mock import MagicMock

import boto3
import pytest

from eventpager import Event, MockEventSource, MoveEventModule, SourceOptions
from tests.helpers.events import PACKAGE_ID, make_event

if TYPE_CHECKING:
    from tests.helpers.localstack import LocalStackHelper


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line("markers", "integration: Integration tests against LocalStack")


@pytest.fixture
def event_factory() -> Callable[..., Event]:
    return make_event


@pytest.fixture
def bridge_filter() -> MoveEventModule:
    return MoveEventModule(package=PACKAGE_ID, module="bridge")


@pytest.fixture
def mock_source() -> MockEventSource:
    return MockEventSource(chain_identifier="35834a8a", latest_checkpoint_sequence_number=1234)


@pytest.fixture
def mock_client():
    """
    Creates a fully mocked boto3 DynamoDB client.

    This fixture provides a mock client for unit tests that don't need
    real DynamoDB interactions.
    """
    client = MagicMock()
    client.query.return_value = {"Items": []}
    return client


@pytest.fixture
def source_options() -> SourceOptions:
    return SourceOptions(table_name="test_events", page_limit=2)


# Integration Test Fixtures


@pytest.fixture(scope="session")
def localstack_endpoint() -> str:
    """Get LocalStack endpoint URL from environment or default."""
    return os.getenv("LOCALSTACK_ENDPOINT", "http://localhost:4566")


@pytest.fixture(scope="session")
def localstack_client(localstack_endpoint: str):
    """
    Creates a boto3 client connected to LocalStack.

    This fixture is session-scoped to avoid creating multiple clients.
    """
    return boto3.client(
        "dynamodb",
        endpoint_url=localstack_endpoint,
        region_name="eu-south-1",
        aws_access_key_id="test",
        aws_secret_access_key="test",
    )


@pytest.fixture(scope="session")
def localstack_helper(localstack_endpoint: str) -> "LocalStackHelper":
    """Provides a LocalStackHelper instance for integration tests."""
    from tests.helpers.localstack import LocalStackHelper

    return LocalStackHelper(endpoint_url=localstack_endpoint)


@pytest.fixture
def integration_options(localstack_endpoint: str) -> SourceOptions:
    return SourceOptions(
        table_name="integration_test_events",
        region="eu-south-1",
        endpoint_url=localstack_endpoint,
        page_limit=2,
    )


@pytest.fixture
def clean_events_table(localstack_helper, integration_options):
    """
    Creates a fresh events table for each test and empties it afterwards.
    """
    localstack_helper.create_table(
        table_name=integration_options.table_name,
        pk_name=integration_options.pk_name,
        sk_name=integration_options.sk_name,
    )
    localstack_helper.clear_table(
        table_name=integration_options.table_name,
        pk_name=integration_options.pk_name,
        sk_name=integration_options.sk_name,
    )

    yield integration_options.table_name

    localstack_helper.clear_table(
        table_name=integration_options.table_name,
        pk_name=integration_options.pk_name,
        sk_name=integration_options.sk_name,
    )
