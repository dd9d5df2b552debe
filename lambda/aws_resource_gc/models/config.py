"""Configuration from environment variables."""

import os

# Configuration from environment variables
DRY_RUN = os.environ.get("DRY_RUN", "true").lower() == "true"
IGNORE_TAG = os.environ.get("IGNORE_TAG", "aws-resource-gc:ignore")

# Cleaner toggles
ENI_CLEANUP_ENABLED = os.environ.get("ENI_CLEANUP_ENABLED", "true").lower() == "true"
VPC_CLEANUP_ENABLED = os.environ.get("VPC_CLEANUP_ENABLED", "true").lower() == "true"
ELBV2_CLEANUP_ENABLED = (
    os.environ.get("ELBV2_CLEANUP_ENABLED", "true").lower() == "true"
)

# Load balancer deletion wait (seconds)
LB_DELETE_TIMEOUT_SECONDS = int(os.environ.get("LB_DELETE_TIMEOUT_SECONDS", "300"))
LB_DELETE_POLL_SECONDS = int(os.environ.get("LB_DELETE_POLL_SECONDS", "15"))

# Stop issuing calls this long before the Lambda deadline
CANCEL_MARGIN_SECONDS = int(os.environ.get("CANCEL_MARGIN_SECONDS", "30"))

# Region filtering
TARGET_REGIONS = os.environ.get("TARGET_REGIONS", "all")

# Logging configuration
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# Written on first sighting, required for deletion on a later run
DELETION_TAG = "aws-resource-gc:marked-for-deletion"
DELETION_TAG_VALUE = "true"

# VPCs carrying these are owned by a CloudFormation stack
CLOUDFORMATION_STACK_TAGS = {
    "aws:cloudformation:stack-name",
    "aws:cloudformation:stack-id",
}
