"""HTTP element gateway backed by httpx."""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

import httpx

from ..errors import ElementNotFoundError, GatewayError
from .base import ColumnFilter, ElementGateway, ManagedElement, Row

logger = logging.getLogger(__name__)


class HttpElement(ManagedElement):
    """Element reached through the platform's REST API."""

    def __init__(self, client: httpx.Client, name: str) -> None:
        self._client = client
        self.name = name

    def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        url = f"/elements/{self.name}{path}"
        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise GatewayError(f"{method} {url} failed: {e}") from e
        if response.status_code == 404 and not path:
            raise ElementNotFoundError(self.name)
        if response.is_error:
            raise GatewayError(
                f"{method} {url} returned {response.status_code}: {response.text}"
            )
        return response

    def ensure_exists(self) -> None:
        self._request("GET", "")

    def get_table_rows(self, table_id: int) -> Optional[list[Row]]:
        rows = self._request("GET", f"/tables/{table_id}/rows").json().get("rows")
        if not rows:
            return None
        return [tuple(row) for row in rows]

    def query_table(self, table_id: int, filters: Sequence[ColumnFilter]) -> list[Row]:
        params = [("filter", f"{f.pid}:{f.operator}:{f.value}") for f in filters]
        rows = self._request("GET", f"/tables/{table_id}/rows", params=params).json().get(
            "rows"
        )
        return [tuple(row) for row in rows or []]

    def get_parameter(self, parameter_id: int) -> Any:
        return self._request("GET", f"/parameters/{parameter_id}").json().get("value")

    def set_parameter(self, parameter_id: int, value: Any) -> None:
        self._request("PUT", f"/parameters/{parameter_id}", json={"value": value})
        logger.debug(f"Set parameter {parameter_id} on {self.name}")

    def set_parameter_by_key(self, parameter_id: int, key: str, value: Any) -> None:
        self._request(
            "PUT", f"/parameters/{parameter_id}/keys/{key}", json={"value": value}
        )
        logger.debug(f"Set parameter {parameter_id}[{key}] on {self.name}")


class HttpGateway(ElementGateway):
    """Gateway talking to the element REST API."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        token: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.base_url = base_url
        self.timeout = timeout
        self._token = token
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    def connect(self) -> None:
        if self._client is not None:
            return
        headers = {"Authorization": f"Bearer {self._token}"} if self._token else {}
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=self.timeout,
            headers=headers,
            transport=self._transport,
        )

    def disconnect(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def get_element(self, name: str) -> HttpElement:
        self.connect()
        element = HttpElement(self._client, name)
        element.ensure_exists()
        return element
