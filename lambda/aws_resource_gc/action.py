"""Cleanup orchestration: dry-run/commit state and the mark-then-delete policy.

A resource is deleted only after two separate runs have seen it without the
ignore tag: the first run tags it with the deletion tag, a later run deletes
it. Dry-run mode issues no mutating calls at all, including the tagging.
"""

from __future__ import annotations
import threading
from typing import Any, Callable, Iterator

from botocore.exceptions import BotoCoreError, ClientError

from .exceptions import CleanupCancelled, ResourceListingError
from .models import CleanupScope
from .utils import TagState, classify_tags, get_logger

logger = get_logger()

Cleaner = Callable[["CleanupAction", CleanupScope], None]


class CleanupAction:
    """Per-invocation orchestrator shared by every resource cleaner.

    Attributes:
        commit: False for dry-run; read by cleaners, never changed by them
        cancel_event: set to stop the run at the next provider call
    """

    def __init__(self, commit: bool, cancel_event: threading.Event | None = None):
        self.commit = commit
        self.cancel_event = cancel_event or threading.Event()

    @property
    def mode(self) -> str:
        return "LIVE" if self.commit else "DRY_RUN"

    def check_cancelled(self) -> None:
        if self.cancel_event.is_set():
            raise CleanupCancelled("cleanup cancelled")

    def call(self, method: Callable[..., Any], **kwargs: Any) -> Any:
        """Issue one provider call unless the run was cancelled."""
        self.check_cancelled()
        return method(**kwargs)

    def paginate(self, client: Any, operation: str, **kwargs: Any) -> Iterator[dict]:
        """Lazily yield every page of a paginated describe call."""
        pages = iter(client.get_paginator(operation).paginate(**kwargs))
        while True:
            self.check_cancelled()
            try:
                page = next(pages)
            except StopIteration:
                return
            yield page

    def list_resources(
        self, client: Any, operation: str, key: str, **kwargs: Any
    ) -> list[dict[str, Any]]:
        """Drain all pages and return the items found under ``key``."""
        return [
            item
            for page in self.paginate(client, operation, **kwargs)
            for item in page.get(key, [])
        ]

    def triage(
        self,
        kind: str,
        resource_id: str,
        tags_dict: dict[str, str],
        ignore_tag: str,
        mark: Callable[[], Any],
    ) -> bool:
        """
        Apply the tag policy to one resource.

        Ignored resources are skipped. Unmarked resources are tagged through
        ``mark`` in commit mode only; a tagging failure is logged and the pass
        goes on. Returns True only for resources already carrying the
        deletion tag, which belong on the deletion worklist.
        """
        state = classify_tags(tags_dict, ignore_tag)

        if state is TagState.IGNORED:
            logger.debug(f"{kind} {resource_id} has ignore tag, skipping cleanup")
            return False

        if state is TagState.UNMARKED:
            if self.commit:
                logger.debug(
                    f"{kind} {resource_id} does not have deletion tag, "
                    "marking for future deletion and skipping cleanup"
                )
                try:
                    mark()
                except (ClientError, BotoCoreError) as e:
                    logger.error(
                        f"failed to mark {kind} {resource_id} for future deletion: {e}"
                    )
            return False

        logger.debug(f"adding {kind} {resource_id} to delete list")
        return True

    def process_worklist(
        self,
        kind: str,
        worklist: list[dict[str, Any]],
        id_key: str,
        delete: Callable[[dict[str, Any]], Any],
    ) -> None:
        """
        Delete every worklisted resource, one at a time.

        A failed deletion is logged for that resource only; the remaining
        resources are still attempted and nothing is raised.
        """
        if not worklist:
            logger.info(f"no {kind}s to delete")
            return

        for resource in worklist:
            resource_id = resource[id_key]
            if not self.commit:
                logger.debug(
                    f"skipping deletion of {kind} {resource_id} as running in dry-run mode"
                )
                continue

            try:
                delete(resource)
            except (ClientError, BotoCoreError) as e:
                logger.error(f"failed to delete {kind} {resource_id}: {e}")

    def run(self, scope: CleanupScope, cleaners: list[tuple[str, Cleaner]]) -> list[str]:
        """
        Run each cleaner in order against one scope.

        A cleaner that cannot enumerate its resources is logged and skipped;
        the next one still runs. Cancellation is not caught.

        Returns:
            Names of the cleaners whose enumeration failed
        """
        failed = []
        for name, cleaner in cleaners:
            logger.debug(f"Running {name} cleanup", extra=scope.log_context())
            try:
                cleaner(self, scope)
            except ResourceListingError as e:
                logger.error(
                    f"{name} cleanup failed: {e}",
                    extra={**scope.log_context(), "cleaner": name},
                )
                failed.append(name)
        return failed
