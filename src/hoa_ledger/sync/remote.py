"""Best-effort mirror of engine state to a PostgREST-style backend."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from hoa_ledger.exceptions import ConfigError, RetryableSyncError, SyncError
from hoa_ledger.sync.records import SyncRecord, SyncReport, SyncTable

if TYPE_CHECKING:
    from types import TracebackType

    from hoa_ledger.config import LedgerConfig
    from hoa_ledger.engine import LedgerEngine

logger = logging.getLogger(__name__)

# Column identifying a row within a tenant, per remote table
KEY_COLUMNS: dict[SyncTable, str] = {
    SyncTable.CHART_OF_ACCOUNTS: "num",
    SyncTable.GENERAL_LEDGER: "id",
    SyncTable.UNITS: "number",
    SyncTable.UNIT_INVOICES: "id",
    SyncTable.WORK_ORDERS: "id",
    SyncTable.BUDGET_CATEGORIES: "id",
    SyncTable.RESERVE_ITEMS: "id",
    SyncTable.FINANCIAL_SETTINGS: "tenant_id",
}

BACKOFF_MULTIPLIER = 1.0
BACKOFF_MAX = 30.0


def _wait_for_retry(retry_state: RetryCallState) -> float:
    """Honor Retry-After when the mirror sends one, else back off exponentially."""
    exception = retry_state.outcome.exception() if retry_state.outcome else None

    if isinstance(exception, RetryableSyncError) and exception.retry_after:
        wait_time = float(exception.retry_after)
        logger.info("Mirror asked to retry after %s seconds", wait_time)
        return wait_time

    wait_time = wait_exponential(multiplier=BACKOFF_MULTIPLIER, max=BACKOFF_MAX)(retry_state)
    logger.info("Mirror request failed, retrying in %.1f seconds", wait_time)
    return wait_time


class RemoteMirror:
    """Pushes the engine's outbox to the remote database.

    The mirror is a copy, never the source of truth: a failed push leaves
    the rows queued in the outbox and does not touch in-memory state.

    Usage:
        async with RemoteMirror(config) as mirror:
            report = await mirror.flush(engine)
    """

    def __init__(
        self,
        config: LedgerConfig,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the mirror.

        Args:
            config: Ledger configuration with sync_url and sync_key
            http_client: Optional shared httpx.AsyncClient. If provided, the
                mirror uses it and does NOT close it.

        Raises:
            ConfigError: If remote sync isn't configured
        """
        if not config.sync_enabled:
            raise ConfigError("Remote sync requires HOA_LEDGER_SYNC_URL and HOA_LEDGER_SYNC_KEY")
        self.config = config
        self.base_url = config.rest_base_url
        self._http_client = http_client
        self._owns_http_client = http_client is None

    async def open(self) -> None:
        """Open the connection pool."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=30.0)

    async def close(self) -> None:
        """Close the connection pool if we own it."""
        if self._http_client is not None and self._owns_http_client:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self) -> RemoteMirror:
        await self.open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

    def _headers(self) -> dict[str, str]:
        key = self.config.sync_key or ""
        return {
            "apikey": key,
            "Authorization": f"Bearer {key}",
            "Content-Type": "application/json",
            "Prefer": "resolution=merge-duplicates,return=minimal",
        }

    @retry(
        retry=retry_if_exception_type(RetryableSyncError),
        wait=_wait_for_retry,
        stop=stop_after_attempt(5),
        reraise=True,
    )
    async def push(self, tenant_id: str, record: SyncRecord) -> None:
        """Upsert or delete one row remotely.

        Retries rate limits, server errors and transport failures with
        backoff, up to 5 attempts.

        Raises:
            RetryableSyncError: If the row still fails after the last attempt
            SyncError: On a non-retryable rejection (4xx)
        """
        url = f"{self.base_url}/{record.table}"
        key_column = KEY_COLUMNS[record.table]
        action = "delete" if record.is_delete else "upsert"
        logger.debug("Mirror %s %s/%s", action, record.table, record.key)

        try:
            if record.is_delete:
                response = await self._request(
                    "DELETE",
                    url,
                    params={key_column: f"eq.{record.key}", "tenant_id": f"eq.{tenant_id}"},
                    headers=self._headers(),
                )
            else:
                on_conflict = "tenant_id"
                if key_column != "tenant_id":
                    on_conflict = f"tenant_id,{key_column}"
                body: dict[str, Any] = {**(record.payload or {}), "tenant_id": tenant_id}
                response = await self._request(
                    "POST",
                    url,
                    params={"on_conflict": on_conflict},
                    json=body,
                    headers=self._headers(),
                )
        except httpx.TransportError as e:
            raise RetryableSyncError(f"Mirror unreachable: {e}") from e

        self._handle_response(response)

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        if self._http_client is not None:
            return await self._http_client.request(method, url, **kwargs)
        # No pool open: one connection per request
        async with httpx.AsyncClient(timeout=30.0) as client:
            return await client.request(method, url, **kwargs)

    def _handle_response(self, response: httpx.Response) -> None:
        """Raise the matching error for a failed mirror response."""
        status = response.status_code
        if status == 429:
            retry_after = response.headers.get("Retry-After")
            raise RetryableSyncError(
                "Mirror rate limit exceeded",
                status_code=status,
                retry_after=int(retry_after) if retry_after else None,
            )
        if status >= 500:
            raise RetryableSyncError(f"Mirror error: {status}", status_code=status)
        if status >= 400:
            raise SyncError(f"Mirror rejected row: {status} {response.text}", status_code=status)

    async def flush(self, engine: LedgerEngine) -> SyncReport:
        """Push every queued row; accepted rows leave the outbox.

        Rows are sent in the order they were queued. A row that fails is
        counted and left queued for the next flush.
        """
        report = SyncReport()
        pushed: list[SyncRecord] = []
        for record in list(engine.outbox):
            try:
                await self.push(engine.tenant_id, record)
            except SyncError as e:
                report.failed += 1
                report.errors.append(f"{record.table}/{record.key}: {e.message}")
                logger.warning("Mirror push failed for %s/%s: %s", record.table, record.key, e)
                continue
            pushed.append(record)
            report.pushed += 1

        if pushed:
            engine.drain_outbox(pushed)
        logger.info("Mirror flush: %d pushed, %d failed", report.pushed, report.failed)
        return report
