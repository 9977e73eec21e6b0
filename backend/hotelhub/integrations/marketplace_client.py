"""HTTP client for the hotel services marketplace REST API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from hotelhub.core.config import get_settings
from hotelhub.core.errors import (
    MarketplaceError,
    NotFoundOrUnreachable,
    Unauthorized,
    classify_response,
)
from hotelhub.core.session import SessionContext

logger = logging.getLogger(__name__)


class MarketplaceClient:
    """Thin async wrapper around the marketplace endpoints.

    Every failure is raised as a member of the ``MarketplaceError`` taxonomy.
    A 401 clears the injected session before ``Unauthorized`` is raised.
    """

    def __init__(
        self,
        session: SessionContext,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        self._session = session
        self._timeout = timeout if timeout is not None else settings.marketplace_timeout_seconds
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.marketplace_api_base_url,
            timeout=self._timeout,
            transport=transport,
        )

    @property
    def session(self) -> SessionContext:
        return self._session

    @property
    def timeout(self) -> float:
        return self._timeout

    async def __aenter__(self) -> "MarketplaceClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        try:
            response = await self._client.request(
                method,
                path,
                json=json,
                params=params,
                headers=self._session.auth_headers(),
            )
        except httpx.TimeoutException as exc:
            logger.warning("Marketplace request %s %s timed out", method, path)
            raise NotFoundOrUnreachable(
                "The marketplace did not respond in time", network=True
            ) from exc
        except httpx.TransportError as exc:
            logger.warning("Marketplace unreachable for %s %s: %s", method, path, exc)
            raise NotFoundOrUnreachable(
                "Network error. Please check your connection and try again.",
                network=True,
            ) from exc

        if response.is_success:
            if not response.content:
                return {}
            return response.json()

        try:
            payload = response.json()
        except ValueError:
            payload = None
        error = classify_response(response.status_code, payload)
        if isinstance(error, Unauthorized):
            self._session.clear()
            logger.info("Marketplace rejected the session; credentials cleared")
        else:
            logger.warning(
                "Marketplace %s %s failed with %s: %s",
                method,
                path,
                response.status_code,
                error.message,
            )
        raise error

    @staticmethod
    def _message(payload: Any, default: str) -> str:
        if isinstance(payload, dict):
            message = payload.get("message")
            if isinstance(message, str) and message:
                return message
        return default

    @staticmethod
    def _data(payload: Any) -> Any:
        if isinstance(payload, dict) and "data" in payload:
            return payload["data"]
        return payload

    # Service categories

    async def list_categories(self) -> dict[str, Any]:
        payload = await self._request("GET", "/service/categories")
        data = self._data(payload)
        if not isinstance(data, dict):
            raise MarketplaceError("Unexpected category listing payload")
        return data

    async def activate_category(self, category_key: str) -> str:
        payload = await self._request(
            "POST", f"/service/categories/{category_key}/activate"
        )
        return self._message(payload, "Category activated successfully")

    async def deactivate_category(self, category_key: str) -> str:
        payload = await self._request(
            "POST", f"/service/categories/{category_key}/deactivate"
        )
        return self._message(payload, "Category deactivated successfully")

    # Inside-hotel services

    async def list_inside_services(self) -> tuple[list[dict[str, Any]], str | None]:
        payload = await self._request("GET", "/service/inside-services")
        data = self._data(payload) or []
        message = payload.get("message") if isinstance(payload, dict) else None
        return list(data), message

    async def activate_inside_service(self, service_id: str) -> str:
        payload = await self._request(
            "POST", f"/service/inside-services/{service_id}/activate"
        )
        return self._message(payload, "Service activated successfully")

    async def deactivate_inside_service(self, service_id: str) -> str:
        payload = await self._request(
            "POST", f"/service/inside-services/{service_id}/deactivate"
        )
        return self._message(payload, "Service deactivated successfully")

    # Markup settings

    async def get_markup_settings(self) -> list[dict[str, Any]]:
        payload = await self._request("GET", "/hotel/markup-settings")
        data = self._data(payload)
        return list(data or [])

    async def save_markup_settings(
        self, settings: list[dict[str, Any]]
    ) -> list[dict[str, Any]]:
        payload = await self._request("POST", "/hotel/markup-settings", json=settings)
        data = self._data(payload)
        return list(data) if isinstance(data, list) else settings

    # Housekeeping services

    async def list_housekeeping_services(self) -> list[dict[str, Any]] | None:
        payload = await self._request("GET", "/service/housekeeping-services")
        data = self._data(payload)
        return list(data) if isinstance(data, list) else None

    async def create_housekeeping_service(self, body: dict[str, Any]) -> dict[str, Any]:
        payload = await self._request(
            "POST", "/service/housekeeping-services", json=body
        )
        data = self._data(payload)
        return data if isinstance(data, dict) else {}

    async def update_housekeeping_service(
        self, service_id: str, body: dict[str, Any]
    ) -> dict[str, Any]:
        payload = await self._request(
            "PUT", f"/service/housekeeping-services/{service_id}", json=body
        )
        data = self._data(payload)
        return data if isinstance(data, dict) else {}

    async def delete_housekeeping_service(self, service_id: str) -> None:
        await self._request("DELETE", f"/service/housekeeping-services/{service_id}")

    async def set_housekeeping_service_active(
        self, service_id: str, active: bool
    ) -> str:
        action = "activate" if active else "deactivate"
        payload = await self._request(
            "POST", f"/service/housekeeping-services/{service_id}/{action}"
        )
        return self._message(payload, f"Service {action}d successfully")

    # Loyalty

    async def get_my_membership(self, hotel_id: str) -> dict[str, Any]:
        payload = await self._request(
            "GET", "/loyalty/my-membership", params={"hotelId": hotel_id}
        )
        data = self._data(payload)
        return data if isinstance(data, dict) else {}


__all__ = ["MarketplaceClient"]
