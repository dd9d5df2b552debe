"""ELBv2 (application/network) load balancer cleanup."""

from __future__ import annotations
from typing import TYPE_CHECKING, Any

from botocore.exceptions import BotoCoreError, ClientError

from ..exceptions import ResourceListingError, WaitTimeoutError
from ..models import CleanupScope
from ..models.config import LB_DELETE_POLL_SECONDS, LB_DELETE_TIMEOUT_SECONDS
from ..utils import (
    client_error_code,
    convert_tags_to_dict,
    deletion_tags,
    get_logger,
    wait_until,
)

if TYPE_CHECKING:
    from ..action import CleanupAction

logger = get_logger()

KIND = "elbv2 load balancer"


def clean_load_balancers(action: CleanupAction, scope: CleanupScope) -> None:
    """Mark or delete ELBv2 load balancers along with their target groups."""
    elbv2 = scope.client("elbv2")

    try:
        load_balancers = action.list_resources(
            elbv2, "describe_load_balancers", "LoadBalancers"
        )
    except (ClientError, BotoCoreError) as e:
        raise ResourceListingError("elbv2 load balancers", e) from e

    to_delete = []
    for lb in load_balancers:
        lb_arn = lb["LoadBalancerArn"]

        # Tags are not part of describe_load_balancers
        try:
            tag_out = action.call(elbv2.describe_tags, ResourceArns=[lb_arn])
        except (ClientError, BotoCoreError) as e:
            logger.error(f"failed getting tags for elbv2 {lb_arn}: {e}")
            continue

        tags_dict: dict[str, str] = {}
        for desc in tag_out.get("TagDescriptions", []):
            tags_dict.update(convert_tags_to_dict(desc.get("Tags")))

        if action.triage(
            KIND,
            lb_arn,
            tags_dict,
            scope.ignore_tag,
            lambda lb_arn=lb_arn: mark_load_balancer(action, elbv2, lb_arn),
        ):
            to_delete.append(lb)

    action.process_worklist(
        KIND,
        to_delete,
        "LoadBalancerArn",
        lambda lb: delete_load_balancer(action, elbv2, lb["LoadBalancerArn"]),
    )


def mark_load_balancer(action: CleanupAction, elbv2: Any, lb_arn: str) -> None:
    logger.info(f"Marking ELBv2 {lb_arn} for future deletion")
    action.call(elbv2.add_tags, ResourceArns=[lb_arn], Tags=deletion_tags())


def load_balancer_deleted(action: CleanupAction, elbv2: Any, lb_arn: str) -> bool:
    """Check whether a load balancer no longer shows up in the API."""
    try:
        out = action.call(elbv2.describe_load_balancers, LoadBalancerArns=[lb_arn])
    except ClientError as e:
        if client_error_code(e) == "LoadBalancerNotFound":
            return True
        raise
    return not out.get("LoadBalancers")


def delete_load_balancer(action: CleanupAction, elbv2: Any, lb_arn: str) -> None:
    """
    Delete a load balancer, then its target groups.

    Target groups are looked up before the load balancer goes away, since
    they can no longer be found by load balancer afterwards. The wait for
    removal and the target group deletions are best effort: their failures
    are logged as warnings and do not fail this deletion.
    """
    logger.info(f"Deleting ELBv2 {lb_arn} and its target groups")

    try:
        target_groups = action.list_resources(
            elbv2, "describe_target_groups", "TargetGroups", LoadBalancerArn=lb_arn
        )
    except (ClientError, BotoCoreError) as e:
        logger.warning(f"failed to list target groups for lb {lb_arn}: {e}")
        target_groups = []

    action.call(elbv2.delete_load_balancer, LoadBalancerArn=lb_arn)

    try:
        wait_until(
            LB_DELETE_TIMEOUT_SECONDS,
            LB_DELETE_POLL_SECONDS,
            lambda: load_balancer_deleted(action, elbv2, lb_arn),
            action.cancel_event,
        )
    except (WaitTimeoutError, ClientError, BotoCoreError) as e:
        logger.warning(f"failed waiting for elbv2 {lb_arn} deletion: {e}")

    for tg in target_groups:
        tg_arn = tg["TargetGroupArn"]
        logger.info(f"Deleting target group {tg_arn}")
        try:
            action.call(elbv2.delete_target_group, TargetGroupArn=tg_arn)
        except (ClientError, BotoCoreError) as e:
            logger.warning(f"failed to delete target group {tg_arn}: {e}")
