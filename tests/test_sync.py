"""Tests for the remote mirror."""

from collections.abc import Iterator
from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from tenacity import RetryCallState

from hoa_ledger import LedgerConfig, LedgerEngine, RemoteMirror
from hoa_ledger.exceptions import ConfigError, RetryableSyncError, SyncError
from hoa_ledger.models import Unit
from hoa_ledger.state import LedgerState
from hoa_ledger.sync.records import SyncRecord, SyncTable
from hoa_ledger.sync.remote import _wait_for_retry


@pytest.fixture
def config() -> LedgerConfig:
    """Create a test configuration with sync enabled."""
    return LedgerConfig(
        tenant_id="oakwood",
        sync_url="https://mirror.example.com/",
        sync_key="test_key",
    )


@pytest.fixture
def tracked() -> LedgerEngine:
    """Engine queuing changes, with one unit billed."""
    engine = LedgerEngine(LedgerState.new(tenant_id="oakwood"), track_sync=True)
    engine.units.add_unit(Unit(number="101", monthly_fee=Decimal(450)))
    engine.units.bill_monthly_assessment("101", date(2026, 1, 1))
    return engine


@pytest.fixture(autouse=True)
def no_backoff() -> Iterator[None]:
    """Retry immediately."""
    with patch("hoa_ledger.sync.remote.BACKOFF_MULTIPLIER", 0):
        with patch("tenacity.nap.sleep", new_callable=AsyncMock):
            yield


def make_response(status_code: int, headers: dict | None = None, text: str = "") -> httpx.Response:
    """Create a mock httpx.Response."""
    response = MagicMock(spec=httpx.Response)
    response.status_code = status_code
    response.headers = headers or {}
    response.text = text
    return response


class TestConfiguration:
    """Tests for mirror setup."""

    def test_requires_sync_settings(self) -> None:
        """A mirror without URL and key can't be built."""
        with pytest.raises(ConfigError):
            RemoteMirror(LedgerConfig())

    def test_rest_base_url(self, config: LedgerConfig) -> None:
        """Trailing slashes are dropped before the REST path."""
        assert RemoteMirror(config).base_url == "https://mirror.example.com/rest/v1"

    async def test_shared_client_not_closed(self, config: LedgerConfig) -> None:
        """A client passed in is left open."""
        async with httpx.AsyncClient() as shared:
            async with RemoteMirror(config, http_client=shared) as mirror:
                assert mirror._http_client is shared
            assert not shared.is_closed

    async def test_owned_client_closed(self, config: LedgerConfig) -> None:
        """The mirror closes the pool it opened."""
        mirror = RemoteMirror(config)
        async with mirror:
            assert mirror._http_client is not None
        assert mirror._http_client is None


class TestPush:
    """Tests for pushing single rows."""

    async def test_upsert_request(self, config: LedgerConfig) -> None:
        """Rows are posted with the tenant and conflict columns."""
        record = SyncRecord(table=SyncTable.UNITS, key="101", payload={"number": "101"})

        async with RemoteMirror(config) as mirror:
            with patch.object(
                mirror._http_client, "request", return_value=make_response(201)
            ) as mock_request:
                await mirror.push("oakwood", record)

        method, url = mock_request.call_args.args
        kwargs = mock_request.call_args.kwargs
        assert method == "POST"
        assert url == "https://mirror.example.com/rest/v1/units"
        assert kwargs["params"] == {"on_conflict": "tenant_id,number"}
        assert kwargs["json"] == {"number": "101", "tenant_id": "oakwood"}
        assert kwargs["headers"]["Authorization"] == "Bearer test_key"

    async def test_settings_conflict_on_tenant(self, config: LedgerConfig) -> None:
        """Settings are one row per tenant."""
        record = SyncRecord(table=SyncTable.FINANCIAL_SETTINGS, key="settings", payload={})

        async with RemoteMirror(config) as mirror:
            with patch.object(
                mirror._http_client, "request", return_value=make_response(201)
            ) as mock_request:
                await mirror.push("oakwood", record)

        assert mock_request.call_args.kwargs["params"] == {"on_conflict": "tenant_id"}

    async def test_delete_request(self, config: LedgerConfig) -> None:
        """Tombstones become filtered DELETEs."""
        record = SyncRecord(table=SyncTable.UNITS, key="101")

        async with RemoteMirror(config) as mirror:
            with patch.object(
                mirror._http_client, "request", return_value=make_response(204)
            ) as mock_request:
                await mirror.push("oakwood", record)

        assert mock_request.call_args.args[0] == "DELETE"
        assert mock_request.call_args.kwargs["params"] == {
            "number": "eq.101",
            "tenant_id": "eq.oakwood",
        }

    async def test_retries_server_error_then_succeeds(self, config: LedgerConfig) -> None:
        """5xx responses are retried."""
        call_count = 0

        def mock_request(*args, **kwargs):
            nonlocal call_count
            call_count += 1
            if call_count < 3:
                return make_response(500)
            return make_response(201)

        record = SyncRecord(table=SyncTable.UNITS, key="101", payload={})
        async with RemoteMirror(config) as mirror:
            with patch.object(mirror._http_client, "request", side_effect=mock_request):
                await mirror.push("oakwood", record)

        assert call_count == 3

    async def test_gives_up_after_five_attempts(self, config: LedgerConfig) -> None:
        """Persistent outages raise after the last attempt."""
        call_count = 0

        def always_unavailable(*args, **kwargs):
            nonlocal call_count
            call_count += 1
            return make_response(503)

        record = SyncRecord(table=SyncTable.UNITS, key="101", payload={})
        async with RemoteMirror(config) as mirror:
            with patch.object(mirror._http_client, "request", side_effect=always_unavailable):
                with pytest.raises(RetryableSyncError) as exc_info:
                    await mirror.push("oakwood", record)

        assert call_count == 5
        assert exc_info.value.status_code == 503

    async def test_client_error_not_retried(self, config: LedgerConfig) -> None:
        """A 4xx rejection is final."""
        call_count = 0

        def rejected(*args, **kwargs):
            nonlocal call_count
            call_count += 1
            return make_response(400, text="bad column")

        record = SyncRecord(table=SyncTable.UNITS, key="101", payload={})
        async with RemoteMirror(config) as mirror:
            with patch.object(mirror._http_client, "request", side_effect=rejected):
                with pytest.raises(SyncError) as exc_info:
                    await mirror.push("oakwood", record)

        assert call_count == 1
        assert not isinstance(exc_info.value, RetryableSyncError)
        assert "bad column" in exc_info.value.message

    async def test_transport_error_retried(self, config: LedgerConfig) -> None:
        """Connection failures are retried like server errors."""
        call_count = 0

        def flaky(*args, **kwargs):
            nonlocal call_count
            call_count += 1
            if call_count == 1:
                raise httpx.ConnectError("connection refused")
            return make_response(201)

        record = SyncRecord(table=SyncTable.UNITS, key="101", payload={})
        async with RemoteMirror(config) as mirror:
            with patch.object(mirror._http_client, "request", side_effect=flaky):
                await mirror.push("oakwood", record)

        assert call_count == 2


class TestFlush:
    """Tests for pushing the whole outbox."""

    async def test_flush_drains_outbox(self, config: LedgerConfig, tracked: LedgerEngine) -> None:
        """Accepted rows leave the outbox."""
        queued = len(tracked.outbox)
        assert queued == 3

        async with RemoteMirror(config) as mirror:
            with patch.object(
                mirror._http_client, "request", return_value=make_response(201)
            ) as mock_request:
                report = await mirror.flush(tracked)

        assert report.ok
        assert report.pushed == queued
        assert mock_request.call_count == queued
        assert tracked.outbox == []

    async def test_failed_rows_stay_queued(
        self, config: LedgerConfig, tracked: LedgerEngine
    ) -> None:
        """Rejected rows are reported and kept for the next flush."""

        def reject_ledger(method, url, **kwargs):
            if url.endswith("/general_ledger"):
                return make_response(400, text="constraint violation")
            return make_response(201)

        async with RemoteMirror(config) as mirror:
            with patch.object(mirror._http_client, "request", side_effect=reject_ledger):
                report = await mirror.flush(tracked)

        assert report.failed == 1
        assert report.pushed == 2
        assert report.errors[0].startswith("general_ledger/GL1000")
        assert [(r.table, r.key) for r in tracked.outbox] == [
            (SyncTable.GENERAL_LEDGER, "GL1000")
        ]
        assert tracked.units.get("101").balance == Decimal(450)

    async def test_empty_outbox(self, config: LedgerConfig, engine: LedgerEngine) -> None:
        """Nothing queued, nothing sent."""
        async with RemoteMirror(config) as mirror:
            with patch.object(mirror._http_client, "request") as mock_request:
                report = await mirror.flush(engine)

        assert report.pushed == 0
        mock_request.assert_not_called()


class TestHandleResponse:
    """Tests for response classification."""

    def test_rate_limit_with_retry_after(self, config: LedgerConfig) -> None:
        """429 carries the server's Retry-After."""
        mirror = RemoteMirror(config)
        with pytest.raises(RetryableSyncError) as exc_info:
            mirror._handle_response(make_response(429, headers={"Retry-After": "12"}))
        assert exc_info.value.retry_after == 12
        assert exc_info.value.status_code == 429

    def test_rate_limit_without_retry_after(self, config: LedgerConfig) -> None:
        """429 without the header leaves backoff to the client."""
        mirror = RemoteMirror(config)
        with pytest.raises(RetryableSyncError) as exc_info:
            mirror._handle_response(make_response(429))
        assert exc_info.value.retry_after is None

    def test_success_passes(self, config: LedgerConfig) -> None:
        """2xx responses raise nothing."""
        RemoteMirror(config)._handle_response(make_response(204))


class TestWaitForRetry:
    """Tests for the retry wait strategy."""

    def _retry_state(self, exception: Exception, attempt: int = 1) -> RetryCallState:
        state = MagicMock(spec=RetryCallState)
        state.outcome = MagicMock()
        state.outcome.exception.return_value = exception
        state.attempt_number = attempt
        return state

    def test_uses_retry_after(self) -> None:
        """The server's hint wins over backoff."""
        error = RetryableSyncError("slow down", status_code=429, retry_after=7)
        assert _wait_for_retry(self._retry_state(error)) == 7.0

    def test_exponential_backoff(self) -> None:
        """Without a hint the wait grows with the attempt number."""
        error = RetryableSyncError("boom", status_code=500)
        with patch("hoa_ledger.sync.remote.BACKOFF_MULTIPLIER", 1.0):
            first = _wait_for_retry(self._retry_state(error, attempt=1))
            third = _wait_for_retry(self._retry_state(error, attempt=3))
        assert first == 1.0
        assert third == 4.0
