"""Forwarding-proxy gateway.

The proxy (a Cloudflare Worker or Supabase Edge Function) injects the Notion
credentials and maps ``{base}/notion/<path>`` onto ``https://api.notion.com/v1/<path>``.
This client only speaks to the proxy:

  GET   {base}/notion/databases/{id}           schema
  POST  {base}/notion/databases/{id}/query     records, body {"sorts": [...]} or {}
  PATCH {base}/notion/pages/{id}               body {"properties": {...}}

Env vars:
  NOTION_PROXY_URL, NOTION_SYNC_TIMEOUT (see config.get_settings)
"""
from __future__ import annotations

from typing import Any, Optional

import requests

from config import _Settings, get_settings
from exceptions import TransportError

from .base import GatewayResponse, HTTPClient, RemoteGateway

_JSON_HEADERS = {"Content-Type": "application/json"}


def _requests_http(method: str, url: str, json: Any | None = None, headers: dict[str, str] | None = None, timeout: float | None = None) -> tuple[int, str]:  # noqa: E501
    r = requests.request(method, url, json=json, headers=headers, timeout=timeout or 10)
    return r.status_code, r.text


class ProxyGateway(RemoteGateway):
    name = "proxy"

    def __init__(
        self,
        base_url: Optional[str] = None,
        http: HTTPClient | None = None,
        *,
        timeout: Optional[float] = None,
        settings: Optional[_Settings] = None,
    ):
        super().__init__()
        settings = settings or get_settings()
        self.base_url = (base_url if base_url is not None else settings.proxy_url).strip().rstrip("/")
        self._timeout = timeout if timeout is not None else settings.timeout
        self._http = http or _requests_http

    def get_schema(self, database_id: str) -> GatewayResponse:
        return self._call("GET", f"/databases/{database_id}")

    def query_records(self, database_id: str, sorts: Optional[list[dict[str, str]]] = None) -> GatewayResponse:
        body: dict[str, Any] = {"sorts": sorts} if sorts else {}
        return self._call("POST", f"/databases/{database_id}/query", body)

    def update_page(self, record_id: str, properties: dict[str, Any]) -> GatewayResponse:
        return self._call("PATCH", f"/pages/{record_id}", {"properties": properties})

    def _call(self, method: str, path: str, body: Any | None = None) -> GatewayResponse:
        url = f"{self.base_url}/notion{path}"
        self._log.debug("request", extra={"method": method, "url": url})
        try:
            status, text = self._http(
                method,
                url,
                json=body,
                headers=_JSON_HEADERS if body is not None else None,
                timeout=self._timeout,
            )
        except Exception as e:  # broad catch to wrap network errors
            self._log.error("request_failed", extra={"method": method, "url": url, "error": str(e)})
            raise TransportError(str(e)) from e
        self._log.info("response", extra={"method": method, "path": path, "status": status})
        return GatewayResponse(status=int(status), body=text or "")


__all__ = ["ProxyGateway"]
