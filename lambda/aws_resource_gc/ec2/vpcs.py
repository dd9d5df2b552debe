"""VPC cleanup."""

from __future__ import annotations
from typing import TYPE_CHECKING, Any

from botocore.exceptions import BotoCoreError, ClientError

from ..exceptions import ResourceListingError
from ..models import CleanupScope
from ..utils import (
    convert_tags_to_dict,
    deletion_tags,
    get_logger,
    is_cloudformation_managed,
)
from .vpc_dependencies import clean_vpc_dependencies

if TYPE_CHECKING:
    from ..action import CleanupAction

logger = get_logger()

KIND = "vpc"


def clean_vpcs(action: CleanupAction, scope: CleanupScope) -> None:
    """Mark or delete VPCs, tearing down their dependencies first."""
    ec2 = scope.client("ec2")

    try:
        vpcs = action.list_resources(ec2, "describe_vpcs", "Vpcs")
    except (ClientError, BotoCoreError) as e:
        raise ResourceListingError("vpcs", e) from e

    to_delete = []
    for vpc in vpcs:
        vpc_id = vpc["VpcId"]
        tags_dict = convert_tags_to_dict(vpc.get("Tags"))

        if vpc.get("IsDefault", False):
            logger.debug(f"vpc {vpc_id} is a default vpc, skipping cleanup")
            continue

        if is_cloudformation_managed(tags_dict):
            logger.debug(
                f"vpc {vpc_id} is managed by CloudFormation, "
                "should be cleaned by stack deletion, skipping"
            )
            continue

        if action.triage(
            KIND,
            vpc_id,
            tags_dict,
            scope.ignore_tag,
            lambda vpc_id=vpc_id: mark_vpc(action, ec2, vpc_id),
        ):
            to_delete.append(vpc)

    action.process_worklist(
        KIND, to_delete, "VpcId", lambda vpc: delete_vpc(action, ec2, vpc["VpcId"])
    )


def mark_vpc(action: CleanupAction, ec2: Any, vpc_id: str) -> None:
    logger.info(f"Marking VPC {vpc_id} for future deletion")
    action.call(ec2.create_tags, Resources=[vpc_id], Tags=deletion_tags())


def delete_vpc(action: CleanupAction, ec2: Any, vpc_id: str) -> None:
    """
    Delete a VPC after removing everything that blocks its deletion.

    Teardown failures are logged and never prevent the VPC delete attempt;
    if dependents remain, AWS rejects the delete and the ClientError
    propagates as this VPC's failure.
    """
    logger.info(f"Deleting VPC {vpc_id} and its dependencies")

    clean_vpc_dependencies(action, ec2, vpc_id)

    action.call(ec2.delete_vpc, VpcId=vpc_id)
    logger.info(f"Successfully deleted VPC {vpc_id}")
