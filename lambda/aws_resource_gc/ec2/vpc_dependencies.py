"""Ordered teardown of the objects that keep a VPC from being deleted."""

from __future__ import annotations
from typing import TYPE_CHECKING, Any

from botocore.exceptions import BotoCoreError, ClientError

from ..utils import get_logger, is_main_route_table

if TYPE_CHECKING:
    from ..action import CleanupAction

logger = get_logger()


def clean_vpc_dependencies(action: CleanupAction, ec2: Any, vpc_id: str) -> None:
    """
    Delete NAT gateways, internet gateways, route tables and subnets, in that order.

    A phase that cannot list its objects is logged and the next phase
    still runs.
    """
    logger.debug(f"Cleaning VPC dependencies for {vpc_id}")

    phases = [
        ("NAT gateways", delete_nat_gateways),
        ("internet gateways", delete_internet_gateways),
        ("route tables", delete_route_tables),
        ("subnets", delete_subnets),
    ]
    for name, phase in phases:
        try:
            phase(action, ec2, vpc_id)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"failed to delete {name} for VPC {vpc_id}: {e}")


def delete_nat_gateways(action: CleanupAction, ec2: Any, vpc_id: str) -> None:
    # Deletion is asynchronous and not awaited
    nat_gateways = action.list_resources(
        ec2,
        "describe_nat_gateways",
        "NatGateways",
        Filter=[
            {"Name": "vpc-id", "Values": [vpc_id]},
            {"Name": "state", "Values": ["available"]},
        ],
    )

    for nat in nat_gateways:
        nat_id = nat["NatGatewayId"]
        logger.debug(f"Deleting NAT Gateway {nat_id}")
        try:
            action.call(ec2.delete_nat_gateway, NatGatewayId=nat_id)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"failed to delete NAT gateway {nat_id}: {e}")


def delete_internet_gateways(action: CleanupAction, ec2: Any, vpc_id: str) -> None:
    igws = action.list_resources(
        ec2,
        "describe_internet_gateways",
        "InternetGateways",
        Filters=[{"Name": "attachment.vpc-id", "Values": [vpc_id]}],
    )

    for igw in igws:
        igw_id = igw["InternetGatewayId"]
        logger.debug(f"Detaching and deleting Internet Gateway {igw_id}")

        try:
            action.call(
                ec2.detach_internet_gateway, InternetGatewayId=igw_id, VpcId=vpc_id
            )
        except (ClientError, BotoCoreError) as e:
            # An attached gateway cannot be deleted
            logger.error(f"failed to detach internet gateway {igw_id}: {e}")
            continue

        try:
            action.call(ec2.delete_internet_gateway, InternetGatewayId=igw_id)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"failed to delete internet gateway {igw_id}: {e}")


def delete_route_tables(action: CleanupAction, ec2: Any, vpc_id: str) -> None:
    route_tables = action.list_resources(
        ec2,
        "describe_route_tables",
        "RouteTables",
        Filters=[{"Name": "vpc-id", "Values": [vpc_id]}],
    )

    for rt in route_tables:
        rt_id = rt["RouteTableId"]
        if is_main_route_table(rt):
            logger.debug(f"Skipping main route table {rt_id}")
            continue

        logger.debug(f"Deleting route table {rt_id}")
        try:
            action.call(ec2.delete_route_table, RouteTableId=rt_id)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"failed to delete route table {rt_id}: {e}")


def delete_subnets(action: CleanupAction, ec2: Any, vpc_id: str) -> None:
    subnets = action.list_resources(
        ec2,
        "describe_subnets",
        "Subnets",
        Filters=[{"Name": "vpc-id", "Values": [vpc_id]}],
    )

    for subnet in subnets:
        subnet_id = subnet["SubnetId"]
        logger.debug(f"Deleting subnet {subnet_id}")
        try:
            action.call(ec2.delete_subnet, SubnetId=subnet_id)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"failed to delete subnet {subnet_id}: {e}")
