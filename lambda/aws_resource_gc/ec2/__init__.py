"""EC2 network resource cleaners."""

from .network_interfaces import clean_network_interfaces
from .vpcs import clean_vpcs, delete_vpc
from .vpc_dependencies import (
    clean_vpc_dependencies,
    delete_nat_gateways,
    delete_internet_gateways,
    delete_route_tables,
    delete_subnets,
)

__all__ = [
    "clean_network_interfaces",
    "clean_vpcs",
    "delete_vpc",
    "clean_vpc_dependencies",
    "delete_nat_gateways",
    "delete_internet_gateways",
    "delete_route_tables",
    "delete_subnets",
]
