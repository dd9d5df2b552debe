"""CleanupScope data class."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CleanupScope:
    """One execution context: a session bound to a region plus the ignore tag.

    Resources carrying ``ignore_tag`` (any value) are never touched.
    """

    session: Any
    ignore_tag: str
    region: str | None = None
    account_id: str | None = None

    def client(self, service_name: str) -> Any:
        """Create a boto3 client for this scope's region."""
        return self.session.client(service_name, region_name=self.region)

    def log_context(self) -> dict[str, Any]:
        """Fields attached to every structured log line for this scope."""
        return {"region": self.region, "account_id": self.account_id}
