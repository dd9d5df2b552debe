"""Logging configuration using AWS Lambda Powertools."""

from aws_lambda_powertools import Logger

from ..models.config import LOG_LEVEL

# Structured JSON logging with Lambda context injection
logger = Logger(
    service="aws-resource-gc",
    level=LOG_LEVEL,
)


def get_logger():
    """Get the configured logger instance.

    Level mapping used across the cleaners:
    - info: outcome (marked, deleted, nothing to delete)
    - debug: skip and classification detail
    - warning: recoverable operational issue
    - error: per-resource failure
    """
    return logger
