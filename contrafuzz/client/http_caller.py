"""
HTTP caller — sends one fuzzed request and captures the response.

No retries: a failed request surfaces as httpx.HTTPError and is reported by
the caller's owner as an error test case.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Optional

import httpx

from contrafuzz.models import RequestInfo, ResponseInfo

logger = logging.getLogger(__name__)


class HttpCaller:
    """Thin httpx wrapper bound to one base URL."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        headers: Optional[dict] = None,
        client: Optional[httpx.Client] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.headers = headers or {}
        self._client = client or httpx.Client(timeout=timeout)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HttpCaller":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def call(
        self,
        method: str,
        path: str,
        headers: Optional[dict] = None,
        payload: Any = None,
    ) -> tuple[RequestInfo, ResponseInfo]:
        """
        Send a request and time it.

        Header values are sent as UTF-8 bytes so that non-latin characters
        reach the server untouched.
        """
        url = f"{self.base_url}{path}"
        all_headers = {**self.headers, **(headers or {})}
        request = RequestInfo(url=url, http_method=method, headers=all_headers, payload=payload)

        content = None
        if payload is not None:
            content = json.dumps(payload, ensure_ascii=False).encode("utf-8")
            if not any(k.lower() == "content-type" for k in all_headers):
                all_headers["Content-Type"] = "application/json"

        start = time.perf_counter()
        response = self._client.request(
            method,
            url,
            headers={k: v.encode("utf-8") for k, v in all_headers.items()},
            content=content,
        )
        elapsed = (time.perf_counter() - start) * 1000
        logger.debug("%s %s -> %s in %.0fms", method, url, response.status_code, elapsed)

        return request, ResponseInfo(
            response_code=response.status_code,
            http_method=method,
            body=response.text,
            headers=dict(response.headers),
            response_time_ms=int(elapsed),
        )
