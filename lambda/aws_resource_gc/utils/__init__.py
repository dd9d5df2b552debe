"""Utility functions for the resource garbage collector."""

from .aws_helpers import (
    TagState,
    convert_tags_to_dict,
    classify_tags,
    deletion_tags,
    is_cloudformation_managed,
    is_main_route_table,
    client_error_code,
)
from .logging_config import get_logger
from .wait import wait_until

__all__ = [
    "TagState",
    "convert_tags_to_dict",
    "classify_tags",
    "deletion_tags",
    "is_cloudformation_managed",
    "is_main_route_table",
    "client_error_code",
    "get_logger",
    "wait_until",
]
