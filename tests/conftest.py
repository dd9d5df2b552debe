"""Pytest configuration and shared fixtures for resource garbage collector tests."""

from __future__ import annotations
import pytest
from typing import Any
from unittest.mock import MagicMock
from botocore.exceptions import ClientError

from aws_resource_gc.models import CleanupScope
from aws_resource_gc.models.config import DELETION_TAG

IGNORE_TAG = "keep"


class ResourceBuilder:
    """Builder pattern for creating test resources as boto3 returns them.

    EC2 network interfaces keep their tags under ``TagSet``, VPCs under
    ``Tags``; ELBv2 tags come from a separate describe_tags call and are
    built with ``tag_description()``.
    """

    def __init__(self, id_key: str, resource_id: str, tags_key: str = "Tags"):
        self._id_key = id_key
        self._tags_key = tags_key
        self._resource: dict[str, Any] = {id_key: resource_id, tags_key: []}

    def with_tag(self, key: str, value: str = "true") -> ResourceBuilder:
        """Add custom tag."""
        self._resource[self._tags_key].append({"Key": key, "Value": value})
        return self

    def marked(self) -> ResourceBuilder:
        """Add the deletion tag from a previous run."""
        return self.with_tag(DELETION_TAG, "true")

    def ignored(self) -> ResourceBuilder:
        """Add the scope's ignore tag."""
        return self.with_tag(IGNORE_TAG, "true")

    def with_field(self, key: str, value: Any) -> ResourceBuilder:
        """Set a kind-specific attribute (IsDefault, Status, ...)."""
        self._resource[key] = value
        return self

    def tag_description(self) -> dict[str, Any]:
        """ELBv2 describe_tags response for this resource."""
        return {
            "TagDescriptions": [
                {
                    "ResourceArn": self._resource[self._id_key],
                    "Tags": self._resource[self._tags_key],
                }
            ]
        }

    def build(self) -> dict[str, Any]:
        """Build and return the resource dictionary."""
        return self._resource


def _make_client(pages: dict[str, Any] | None = None) -> MagicMock:
    """Mock boto3 client whose paginators return canned pages.

    ``pages`` maps an operation name to a list of pages, or to an exception
    raised when the paginator is iterated. Unknown operations yield one
    empty page. Every paginator created is kept in ``client.paginators``.
    """
    pages = pages or {}
    client = MagicMock()
    client.paginators = {}

    def _get_paginator(operation: str) -> MagicMock:
        paginator = MagicMock()
        result = pages.get(operation, [{}])
        if isinstance(result, Exception):
            paginator.paginate.side_effect = result
        else:
            paginator.paginate.return_value = result
        client.paginators[operation] = paginator
        return paginator

    client.get_paginator.side_effect = _get_paginator
    return client


def _make_session(**clients: MagicMock) -> MagicMock:
    """Mock boto3 session handing out the given clients by service name."""
    session = MagicMock()
    session.client.side_effect = lambda service_name, region_name=None: clients[
        service_name
    ]
    return session


def _client_error(code: str, operation: str = "Operation") -> ClientError:
    """Build a botocore ClientError with the given error code."""
    return ClientError({"Error": {"Code": code, "Message": f"{code} error"}}, operation)


def _mutating_calls(client: MagicMock) -> list[str]:
    """Names of tag/detach/delete calls issued on a mock client, in order."""
    prefixes = ("create_tags", "add_tags", "delete_", "detach_")
    return [c[0] for c in client.mock_calls if c[0].startswith(prefixes)]


# Shared fixtures


@pytest.fixture
def eni_builder():
    """Factory for network interface builders."""

    def _builder(eni_id: str = "eni-test123456") -> ResourceBuilder:
        return ResourceBuilder("NetworkInterfaceId", eni_id, "TagSet").with_field(
            "Status", "available"
        )

    return _builder


@pytest.fixture
def vpc_builder():
    """Factory for VPC builders."""

    def _builder(vpc_id: str = "vpc-test123456") -> ResourceBuilder:
        return ResourceBuilder("VpcId", vpc_id).with_field("IsDefault", False)

    return _builder


@pytest.fixture
def lb_builder():
    """Factory for ELBv2 load balancer builders."""

    def _builder(name: str = "test-lb") -> ResourceBuilder:
        arn = f"arn:aws:elasticloadbalancing:us-east-1:123456789012:loadbalancer/app/{name}/abc"
        return ResourceBuilder("LoadBalancerArn", arn).with_field(
            "LoadBalancerName", name
        )

    return _builder


@pytest.fixture
def scope_factory():
    """Factory for a CleanupScope backed by mock clients."""

    def _scope(**clients: MagicMock) -> CleanupScope:
        return CleanupScope(
            session=_make_session(**clients),
            ignore_tag=IGNORE_TAG,
            region="us-east-1",
            account_id="123456789012",
        )

    return _scope


@pytest.fixture
def make_client():
    """Fixture that returns the mock client factory."""
    return _make_client


@pytest.fixture
def client_error():
    """Fixture that returns the ClientError factory."""
    return _client_error


@pytest.fixture
def mutating_calls():
    """Fixture that returns the mutating call extractor."""
    return _mutating_calls
