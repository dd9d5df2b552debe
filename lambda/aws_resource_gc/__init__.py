"""Two-phase, tag-driven garbage collector for stale AWS network resources."""

from .handler import lambda_handler

__version__ = "1.0.0"
__description__ = "Mark-then-delete cleanup of unattached ENIs, VPCs and ELBv2 load balancers"

__all__ = ["lambda_handler"]
