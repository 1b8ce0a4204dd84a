"""Shared HTTP plumbing for the portal's backend services.

Every backend speaks JSON over HTTP. Most wrap payloads in an envelope:
    {"success": true, "message": "...", "data": ..., "timestamp": "..."}
Requests run on a pooled requests.Session in a worker thread so the
event loop keeps serving other sessions while a fetch is in flight.
"""

import asyncio
import logging
from typing import Any
from urllib.parse import quote

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from research_portal.config import settings

logger = logging.getLogger(__name__)


class BackendError(Exception):
    """A backend call failed: transport error, HTTP error, or success=false."""

    def __init__(self, service: str, message: str, status_code: int | None = None) -> None:
        super().__init__(f"{service}: {message}")
        self.service = service
        self.message = message
        self.status_code = status_code


def path_segment(value: Any) -> str:
    """URL-encode a value used as a single path segment."""
    return quote(str(value), safe="")


class BackendClient:
    """Async-wrapped JSON client for one backend service using requests."""

    service_name = "backend"

    def __init__(
        self,
        base_url: str,
        timeout: float | None = None,
        max_concurrent: int | None = None,
        max_retries: int | None = None,
        auth_token: str | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout or settings.http_timeout
        self.max_concurrent = max_concurrent or settings.http_max_concurrent
        self.max_retries = settings.http_max_retries if max_retries is None else max_retries
        self.auth_token = auth_token

        self._semaphore = asyncio.Semaphore(self.max_concurrent)
        self._session: requests.Session | None = None

    def _get_session(self) -> requests.Session:
        """Get or create requests session with connection pooling."""
        if self._session is None:
            self._session = requests.Session()
            self._session.headers.update({"Content-Type": "application/json"})
            if self.auth_token:
                self._session.headers["Authorization"] = f"Bearer {self.auth_token}"
            adapter = HTTPAdapter(
                pool_connections=self.max_concurrent,
                pool_maxsize=self.max_concurrent * 2,
                max_retries=Retry(
                    total=self.max_retries,
                    backoff_factor=settings.http_backoff_factor,
                    allowed_methods=["GET"],
                    status_forcelist=[502, 503, 504],
                ),
            )
            self._session.mount("http://", adapter)
            self._session.mount("https://", adapter)
        return self._session

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def _sync_request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        """Synchronous request (runs in thread). Returns decoded JSON or None."""
        session = self._get_session()
        url = f"{self.base_url}{path}"
        logger.debug(f"[{self.service_name}] {method} {url}")

        response = session.request(
            method,
            url,
            params=params,
            json=json,
            timeout=self.timeout,
        )
        response.raise_for_status()
        if not response.content:
            return None
        return response.json()

    async def request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        """Send a request and return the decoded JSON body."""
        async with self._semaphore:
            try:
                return await asyncio.to_thread(
                    self._sync_request,
                    method,
                    path,
                    params,
                    json,
                )
            except requests.HTTPError as e:
                status = e.response.status_code if e.response is not None else None
                message = _error_message(e.response) if e.response is not None else str(e)
                logger.error(f"[{self.service_name}] API error {status} on {path}: {message}")
                raise BackendError(self.service_name, message, status) from e
            except requests.RequestException as e:
                logger.error(f"[{self.service_name}] request to {path} failed: {e}")
                raise BackendError(self.service_name, str(e)) from e
            except ValueError as e:
                logger.error(f"[{self.service_name}] invalid JSON from {path}: {e}")
                raise BackendError(self.service_name, f"invalid JSON: {e}") from e

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json: Any = None) -> Any:
        return await self.request("POST", path, json=json)

    async def get_data(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """GET an enveloped endpoint and return its data field."""
        return self.unwrap(await self.get(path, params=params), path)

    async def post_data(self, path: str, json: Any = None) -> Any:
        """POST to an enveloped endpoint and return its data field."""
        return self.unwrap(await self.post(path, json=json), path)

    def unwrap(self, body: Any, path: str) -> Any:
        """Return body["data"], raising when the envelope reports failure."""
        if not isinstance(body, dict) or not body.get("success"):
            message = body.get("message") if isinstance(body, dict) else None
            message = message or f"request to {path} was not successful"
            logger.error(f"[{self.service_name}] {message}")
            raise BackendError(self.service_name, message)
        return body.get("data")


def _error_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason or "error"
    if isinstance(body, dict):
        return body.get("message") or body.get("detail") or response.reason or "error"
    return response.reason or "error"
