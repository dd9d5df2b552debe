"""Unattached network interface cleanup."""

from __future__ import annotations
from typing import TYPE_CHECKING, Any

from botocore.exceptions import BotoCoreError, ClientError

from ..exceptions import ResourceListingError
from ..models import CleanupScope
from ..utils import convert_tags_to_dict, deletion_tags, get_logger

if TYPE_CHECKING:
    from ..action import CleanupAction

logger = get_logger()

KIND = "network interface"


def clean_network_interfaces(action: CleanupAction, scope: CleanupScope) -> None:
    """Mark or delete network interfaces that are not attached to anything."""
    ec2 = scope.client("ec2")

    try:
        interfaces = action.list_resources(
            ec2,
            "describe_network_interfaces",
            "NetworkInterfaces",
            Filters=[{"Name": "status", "Values": ["available"]}],
        )
    except (ClientError, BotoCoreError) as e:
        raise ResourceListingError("network interfaces", e) from e

    to_delete = []
    for eni in interfaces:
        eni_id = eni["NetworkInterfaceId"]

        # The status filter only trims the listing, attached ENIs must never qualify
        status = eni.get("Status", "available")
        if status != "available":
            logger.debug(f"network interface {eni_id} is {status}, skipping cleanup")
            continue

        tags_dict = convert_tags_to_dict(eni.get("TagSet"))
        if action.triage(
            KIND,
            eni_id,
            tags_dict,
            scope.ignore_tag,
            lambda eni_id=eni_id: mark_network_interface(action, ec2, eni_id),
        ):
            to_delete.append(eni)

    action.process_worklist(
        KIND,
        to_delete,
        "NetworkInterfaceId",
        lambda eni: delete_network_interface(action, ec2, eni),
    )


def mark_network_interface(action: CleanupAction, ec2: Any, eni_id: str) -> None:
    logger.info(f"Marking network interface {eni_id} for future deletion")
    action.call(ec2.create_tags, Resources=[eni_id], Tags=deletion_tags())


def delete_network_interface(
    action: CleanupAction, ec2: Any, eni: dict[str, Any]
) -> None:
    eni_id = eni["NetworkInterfaceId"]
    logger.info(
        f"Deleting unattached network interface {eni_id}",
        extra={
            "network_interface_id": eni_id,
            "subnet_id": eni.get("SubnetId"),
            "description": eni.get("Description", ""),
        },
    )
    action.call(ec2.delete_network_interface, NetworkInterfaceId=eni_id)
