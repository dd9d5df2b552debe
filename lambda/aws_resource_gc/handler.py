"""Main Lambda handler for AWS resource garbage collection."""

from __future__ import annotations
import json
import threading
import time
import boto3
from botocore.exceptions import BotoCoreError, ClientError
from typing import Any

from aws_lambda_powertools.utilities.typing import LambdaContext

from .action import CleanupAction, Cleaner
from .exceptions import CleanupCancelled
from .models import CleanupScope
from .models.config import (
    DRY_RUN,
    IGNORE_TAG,
    TARGET_REGIONS,
    ENI_CLEANUP_ENABLED,
    VPC_CLEANUP_ENABLED,
    ELBV2_CLEANUP_ENABLED,
    CANCEL_MARGIN_SECONDS,
    LOG_LEVEL,
)
from .utils import get_logger
from .ec2 import clean_network_interfaces, clean_vpcs
from .elbv2 import clean_load_balancers

logger = get_logger()


def enabled_cleaners() -> list[tuple[str, Cleaner]]:
    """Cleaners to run, dependents first: VPCs must come last."""
    cleaners: list[tuple[str, Cleaner]] = []
    if ELBV2_CLEANUP_ENABLED:
        cleaners.append(("elbv2 load balancers", clean_load_balancers))
    if ENI_CLEANUP_ENABLED:
        cleaners.append(("network interfaces", clean_network_interfaces))
    if VPC_CLEANUP_ENABLED:
        cleaners.append(("vpcs", clean_vpcs))
    return cleaners


def cleanup_region(action: CleanupAction, scope: CleanupScope) -> list[str]:
    """Process cleanup for a single region.

    Returns:
        Names of the cleaners that could not list their resources
    """
    start_time = time.time()
    logger.info(
        f"Processing region: {scope.region}",
        extra={**scope.log_context(), "mode": action.mode},
    )

    failed = action.run(scope, enabled_cleaners())

    duration = time.time() - start_time
    logger.info(
        f"Completed {scope.region} in {duration:.1f}s",
        extra={**scope.log_context(), "failed_cleaners": failed},
    )
    return failed


def resolve_regions(session: Any) -> list[str]:
    """List enabled regions, filtered by TARGET_REGIONS."""
    ec2 = session.client("ec2")
    all_regions = [region["RegionName"] for region in ec2.describe_regions()["Regions"]]

    if TARGET_REGIONS and TARGET_REGIONS.lower() != "all":
        target_list = [r.strip() for r in TARGET_REGIONS.split(",") if r.strip()]
        regions = [r for r in all_regions if r in target_list]
        logger.info(f"Filtering to specific regions: {regions}")
    else:
        regions = all_regions
        logger.info(f"Processing all {len(regions)} regions")
    return regions


def get_account_id(session: Any) -> str | None:
    """Account ID for log context; missing is not fatal."""
    try:
        return session.client("sts").get_caller_identity()["Account"]
    except (ClientError, BotoCoreError) as e:
        logger.warning(f"Failed to resolve account ID: {e}")
        return None


def arm_cancellation(action: CleanupAction, context: LambdaContext) -> threading.Timer:
    """Cancel the run CANCEL_MARGIN_SECONDS before the Lambda deadline."""
    remaining = context.get_remaining_time_in_millis() / 1000 - CANCEL_MARGIN_SECONDS
    timer = threading.Timer(max(remaining, 0), action.cancel_event.set)
    timer.daemon = True
    timer.start()
    return timer


@logger.inject_lambda_context
def lambda_handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """Main Lambda handler."""
    start_time = time.time()
    logger.info(
        f"Starting AWS resource garbage collection (DRY_RUN={DRY_RUN})",
        extra={
            "configuration": {
                "dry_run": DRY_RUN,
                "ignore_tag": IGNORE_TAG,
                "log_level": LOG_LEVEL,
                "target_regions": TARGET_REGIONS,
                "cleaners": [name for name, _ in enabled_cleaners()],
            },
        },
    )

    session = boto3.session.Session()
    action = CleanupAction(commit=not DRY_RUN)

    try:
        regions = resolve_regions(session)
    except Exception as e:
        logger.error(f"Lambda execution failed: {e}")
        raise

    account_id = get_account_id(session)
    timer = arm_cancellation(action, context)
    failures: dict[str, list[str]] = {}

    try:
        for region in regions:
            scope = CleanupScope(
                session=session,
                ignore_tag=IGNORE_TAG,
                region=region,
                account_id=account_id,
            )
            try:
                failed = cleanup_region(action, scope)
            except CleanupCancelled:
                logger.warning(
                    "Cleanup cancelled before Lambda timeout",
                    extra={"region": region},
                )
                failures[region] = ["cancelled"]
                break
            except Exception as e:
                logger.error(f"Error processing region {region}: {e}")
                failures[region] = ["error"]
                continue

            if failed:
                failures[region] = failed
    finally:
        timer.cancel()

    total_duration = time.time() - start_time
    logger.info(
        f"Cleanup complete: {len(regions)} regions ({total_duration:.1f}s total)",
        extra={"failures": failures},
    )

    return {
        "statusCode": 200,
        "body": json.dumps(
            {
                "dry_run": DRY_RUN,
                "regions": regions,
                "failures": failures,
            }
        ),
    }
