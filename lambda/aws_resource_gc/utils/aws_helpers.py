"""AWS helper functions."""

from __future__ import annotations
from enum import Enum
from typing import Any

from botocore.exceptions import ClientError

from ..models.config import (
    CLOUDFORMATION_STACK_TAGS,
    DELETION_TAG,
    DELETION_TAG_VALUE,
)


class TagState(str, Enum):
    """Where a resource stands in the mark-then-delete protocol."""

    IGNORED = "ignored"
    MARKED = "marked"
    UNMARKED = "unmarked"


def convert_tags_to_dict(tags: list[dict[str, str]] | None) -> dict[str, str]:
    """Convert AWS tag list to dictionary."""
    return {tag["Key"]: tag.get("Value", "") for tag in tags} if tags else {}


def classify_tags(tags_dict: dict[str, str], ignore_tag: str) -> TagState:
    """
    Classify a resource by its tag keys.

    The ignore tag wins over the deletion tag, so a resource carrying both
    is still left alone. Tag values are not inspected.
    """
    marked = False
    for key in tags_dict:
        if ignore_tag and key == ignore_tag:
            return TagState.IGNORED
        if key == DELETION_TAG:
            marked = True
    return TagState.MARKED if marked else TagState.UNMARKED


def deletion_tags() -> list[dict[str, str]]:
    """Tag payload marking a resource for deletion on a later run."""
    return [{"Key": DELETION_TAG, "Value": DELETION_TAG_VALUE}]


def is_cloudformation_managed(tags_dict: dict[str, str]) -> bool:
    """Check if the resource belongs to a CloudFormation stack."""
    return any(key in CLOUDFORMATION_STACK_TAGS for key in tags_dict)


def is_main_route_table(route_table: dict[str, Any]) -> bool:
    """Main route tables go away with their VPC and cannot be deleted directly."""
    return any(assoc.get("Main", False) for assoc in route_table.get("Associations", []))


def client_error_code(error: ClientError) -> str:
    """Extract the AWS error code from a ClientError."""
    return error.response.get("Error", {}).get("Code", "Unknown")
