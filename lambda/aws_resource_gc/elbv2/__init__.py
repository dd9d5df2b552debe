"""ELBv2 load balancer cleaner."""

from .load_balancers import (
    clean_load_balancers,
    delete_load_balancer,
    load_balancer_deleted,
)

__all__ = [
    "clean_load_balancers",
    "delete_load_balancer",
    "load_balancer_deleted",
]
