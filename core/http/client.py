"""
HTTP Client

requests-backed client the CLI uses to reach the file server. Non-2xx
responses carrying the server's structured error body
(`{"ok": false, "error": {"code", "message", "details"}}`) surface as
HttpError with that code attached.
"""

from __future__ import annotations

import json as jsonlib
import logging
from dataclasses import dataclass, field
from typing import Any

import requests


logger = logging.getLogger(__name__)


class HttpError(Exception):
    """Transport failure or non-2xx reply from the file server."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        code: str | None = None,
        response: HttpResponse | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.response = response


@dataclass
class HttpResponse:
    """Status, body and timing of one exchange with the server."""

    status_code: int
    content: bytes
    headers: dict[str, str] = field(default_factory=dict)
    url: str = ""
    elapsed_ms: float = 0.0

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")

    def json(self) -> Any:
        return jsonlib.loads(self.content)

    def error_detail(self) -> tuple[str | None, str | None]:
        """(code, message) from a structured error body, if there is one."""
        try:
            body = self.json()
        except ValueError:
            return None, None
        if not isinstance(body, dict) or not isinstance(body.get("error"), dict):
            return None, None
        return body["error"].get("code"), body["error"].get("message")

    def raise_for_status(self) -> None:
        if self.ok:
            return
        code, message = self.error_detail()
        text = f"HTTP {self.status_code} for {self.url}"
        if code:
            text = f"{code}: {message} ({text})"
        raise HttpError(text, status_code=self.status_code, code=code, response=self)


class HttpClient:
    """
    Client bound to the file server's base URL.

    Usage:
        client = HttpClient("http://localhost:8000", timeout=10.0)
        bundle = client.get("/proof/file1.txt").json()
    """

    def __init__(
        self,
        base_url: str = "",
        *,
        timeout: float = 30.0,
        headers: dict[str, str] | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.headers = headers or {}
        self._session = session

    @property
    def session(self) -> requests.Session:
        if self._session is None:
            self._session = requests.Session()
            self._session.headers.update(self.headers)
        return self._session

    def url_for(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    def request(self, method: str, path: str, **kwargs: Any) -> HttpResponse:
        """
        Send one request and wrap the reply.

        `path` is joined to base_url unless it is already absolute. Extra
        keyword arguments (params, json, timeout) go to requests unchanged.
        Connection failures and timeouts raise HttpError; HTTP error
        statuses do not (call raise_for_status).
        """
        url = self.url_for(path)
        kwargs.setdefault("timeout", self.timeout)
        logger.debug("%s %s", method, url)
        try:
            reply = self.session.request(method=method, url=url, **kwargs)
        except requests.RequestException as e:
            raise HttpError(f"{method} {url} failed: {e}") from e

        return HttpResponse(
            status_code=reply.status_code,
            content=reply.content,
            headers=dict(reply.headers),
            url=str(reply.url),
            elapsed_ms=reply.elapsed.total_seconds() * 1000,
        )

    def get(self, path: str, **kwargs: Any) -> HttpResponse:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, *, json: Any = None, **kwargs: Any) -> HttpResponse:
        return self.request("POST", path, json=json, **kwargs)

    def close(self) -> None:
        if self._session is not None:
            self._session.close()
            self._session = None
