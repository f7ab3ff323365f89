# =============================================================================
# core/services/fetchers.py - Dashboard Fetchers
# =============================================================================
# Each fetcher loads one slice of the dashboard:
# - MembershipFetcher: membership rows
# - WorkshopFetcher: workshop rows, grouped by form id with a ticket count
#
# Flow (identical for both):
# 1. Resolve the session. A retrieval failure becomes the error text.
# 2. Not signed in -> empty data, no error. This is success.
# 3. GET the data function with the bearer token.
# 4. Classify and normalize the rows.
# 5. Publish. is_loading is cleared on every path.
#
# A fetcher instance is one run. cancel() stops it from publishing data or
# error text once the caller has gone away; its I/O still completes.
# =============================================================================

from __future__ import annotations

import logging
from typing import Any, Generic, TypeVar

from app.exceptions import DashboardException
from core.models.records import FetchResult, MembershipRecord, WorkshopRecord
from core.models.session import Authenticated
from core.services.data_proxy import DataProxyClient
from core.services.session_gate import SessionGate
from lib.rows import group_by_form, membership_records, workshop_records

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BaseFetcher(Generic[T]):
    """Shared session-gated fetch flow. Subclasses implement normalize()."""

    name = "fetch"
    record_type: type = object

    def __init__(self, gate: SessionGate, client: DataProxyClient):
        self.gate = gate
        self.client = client
        self.result: FetchResult = FetchResult[self.record_type]()
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Stop this run from publishing its outcome."""
        self._cancelled = True

    def normalize(self, rows: list[Any]) -> list[T]:
        raise NotImplementedError

    def _publish(self, data: list[T] | None = None, error: str | None = None) -> None:
        if self._cancelled:
            logger.debug(f"[{self.name}] cancelled, discarding result")
            return
        if data is not None:
            self.result.data = data
        if error is not None:
            self.result.error = error

    async def fetch(self) -> FetchResult:
        """
        Run the fetch and return the published result.

        Never raises for fetch failures; they end up in `result.error`.
        """
        try:
            try:
                state = await self.gate.resolve()
            except DashboardException as e:
                logger.error(f"[{self.name}] session error: {e.message}")
                self._publish(error=e.message)
                return self.result

            if not isinstance(state, Authenticated):
                self._publish(data=[])
                return self.result

            try:
                rows = await self.client.fetch_rows(state.token)
                self._publish(data=self.normalize(rows))
            except DashboardException as e:
                logger.error(f"[{self.name}] error: {e.message}")
                self._publish(error=e.message)
            except Exception as e:
                logger.exception(f"[{self.name}] unexpected error: {e}")
                self._publish(error=str(e) or "Request failed")
        finally:
            self.result.is_loading = False

        return self.result


class MembershipFetcher(BaseFetcher[MembershipRecord]):
    """Loads the signed-in member's membership records."""

    name = "membership"
    record_type = MembershipRecord

    def normalize(self, rows: list[Any]) -> list[MembershipRecord]:
        return membership_records(rows)


class WorkshopFetcher(BaseFetcher[WorkshopRecord]):
    """Loads workshop registrations, one record per form with a ticket count."""

    name = "workshops"
    record_type = WorkshopRecord

    def normalize(self, rows: list[Any]) -> list[WorkshopRecord]:
        return group_by_form(workshop_records(rows))
