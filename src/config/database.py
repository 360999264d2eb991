"""Thin async client for the Supabase (PostgREST) REST interface.

Every table read and write in the app goes through ``SupabaseClient``.
Filters use PostgREST operators, e.g. ``{"email": "eq.guest@example.com"}``.
"""

import logging
from typing import Any, Protocol

import httpx

from src.config.settings import settings

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Raised when the store is unreachable or answers with a non-2xx status."""


class StoreNotConfiguredError(StoreError):
    def __init__(self) -> None:
        super().__init__("Supabase is not configured (SUPABASE_URL / SUPABASE_API_KEY)")


class StoreConfig(Protocol):
    supabase_url: str
    supabase_api_key: str
    request_timeout: float


def eq(value: Any) -> str:
    """PostgREST equality filter."""
    if isinstance(value, bool):
        value = "true" if value else "false"
    return f"eq.{value}"


class SupabaseClient:
    def __init__(
        self,
        config: StoreConfig = settings,
        http_client_class: type[httpx.AsyncClient] = httpx.AsyncClient,
    ):
        self._config = config
        self._http_client_class = http_client_class

    @property
    def is_configured(self) -> bool:
        return bool(self._config.supabase_url and self._config.supabase_api_key)

    @property
    def base_url(self) -> str:
        return f"{self._config.supabase_url.rstrip('/')}/rest/v1"

    def _headers(self, prefer: str | None = None) -> dict[str, str]:
        headers = {
            "apikey": self._config.supabase_api_key,
            "Authorization": f"Bearer {self._config.supabase_api_key}",
            "Content-Type": "application/json",
        }
        if prefer:
            headers["Prefer"] = prefer
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        prefer: str | None = None,
    ) -> httpx.Response:
        if not self.is_configured:
            raise StoreNotConfiguredError()

        url = f"{self.base_url}/{path}"
        try:
            async with self._http_client_class(timeout=self._config.request_timeout) as client:
                response = await client.request(
                    method,
                    url,
                    params=params,
                    json=json,
                    headers=self._headers(prefer),
                )
                response.raise_for_status()
                return response
        except httpx.HTTPStatusError as e:
            logger.error(
                "Supabase %s %s returned status %d: %s",
                method,
                path,
                e.response.status_code,
                e.response.text,
            )
            raise StoreError(f"Supabase returned status {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.error("Supabase %s %s failed: %s", method, path, e)
            raise StoreError(f"Supabase request failed: {e}") from e

    async def select(
        self,
        table: str,
        *,
        columns: str = "*",
        filters: dict[str, str] | None = None,
        order: str | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        params: dict[str, Any] = {"select": columns, **(filters or {})}
        if order:
            params["order"] = order
        if limit is not None:
            params["limit"] = limit

        response = await self._request("GET", table, params=params)
        try:
            rows = response.json()
        except ValueError as e:
            raise StoreError(f"Could not decode rows from {table}") from e
        if not isinstance(rows, list):
            raise StoreError(f"Unexpected payload from {table}")
        return rows

    async def insert(self, table: str, rows: list[dict[str, Any]]) -> None:
        await self._request("POST", table, json=rows, prefer="return=minimal")

    async def update(
        self,
        table: str,
        payload: dict[str, Any],
        *,
        filters: dict[str, str],
    ) -> None:
        # PostgREST refuses unfiltered updates, so we do too
        if not filters:
            raise ValueError("update requires at least one filter")
        await self._request("PATCH", table, params=filters, json=payload, prefer="return=minimal")

    async def rpc(self, function: str, payload: dict[str, Any]) -> None:
        await self._request("POST", f"rpc/{function}", json=payload)


def get_store_client() -> SupabaseClient:
    return SupabaseClient(config=settings)
