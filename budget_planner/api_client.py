"""HTTP client for the WealthSync budgeting API.

Both endpoints are plain JSON ``POST`` requests.  Each call is wrapped
in :func:`budget_planner.retry.invoke`: one attempt is one request
followed by ``raise_for_status()``, so connection errors and non-2xx
responses are retried alike.  When the attempts run out the last
``httpx`` exception propagates to the caller unchanged.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, List, Optional

import httpx

from . import config
from .models import BudgetRequest, BudgetResult, HistoryEntry, parse_history
from .retry import RetryPolicy, invoke

logger = logging.getLogger(__name__)


class BudgetApiClient:
    """Thin async client around the budget and history endpoints.

    Args:
        base_url: Root URL of the backend.  Defaults to ``config.API_BASE_URL``.
        timeout: Per-request timeout in seconds.
        policy: Retry policy applied to every call.
        transport: Optional ``httpx`` transport, used by tests to mock the
            backend.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        policy: Optional[RetryPolicy] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = (base_url or config.API_BASE_URL).rstrip("/")
        self.timeout = config.REQUEST_TIMEOUT_SECONDS if timeout is None else timeout
        self.policy = policy or config.get_retry_policy()
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
        )

    async def _post_json(self, path: str, payload: dict) -> Any:
        async with self._client() as client:

            async def attempt() -> Any:
                response = await client.post(path, json=payload)
                response.raise_for_status()
                return response.json()

            return await invoke(attempt, self.policy)

    async def calculate_budget(self, request: BudgetRequest) -> BudgetResult:
        """Post the form inputs and return the backend's recommendation."""
        logger.info("Requesting budget for %s", request.email)
        data = await self._post_json(config.BUDGET_ENDPOINT, request.to_payload())
        return BudgetResult.from_dict(data)

    async def fetch_history(self, email: str) -> List[HistoryEntry]:
        """Return past calculations stored for ``email``."""
        logger.info("Fetching budget history for %s", email)
        data = await self._post_json(config.HISTORY_ENDPOINT, {"email": email})
        return parse_history(data)

    def calculate_budget_sync(self, request: BudgetRequest) -> BudgetResult:
        return asyncio.run(self.calculate_budget(request))

    def fetch_history_sync(self, email: str) -> List[HistoryEntry]:
        return asyncio.run(self.fetch_history(email))
