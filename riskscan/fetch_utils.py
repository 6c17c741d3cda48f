"""Bounded page fetching."""

from __future__ import annotations

import time
from dataclasses import dataclass

import requests

from .config import DEFAULT_USER_AGENT
from .errors import CollaboratorTimeout


class ResponseTooLarge(requests.RequestException):
    pass


@dataclass(frozen=True)
class FetchResult:
    url: str
    status_code: int
    text: str | None = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


@dataclass
class PageFetcher:
    """GET a page with a total time budget and a body size cap.

    Raises ``CollaboratorTimeout`` when the budget runs out and
    ``requests.RequestException`` (including ``ResponseTooLarge``) for other
    failures.
    """

    timeout_seconds: float = 5.0
    max_bytes: int = 256 * 1024
    user_agent: str = DEFAULT_USER_AGENT
    chunk_size: int = 8192

    def __call__(self, url: str) -> FetchResult:
        return self.fetch(url)

    def fetch(self, url: str) -> FetchResult:
        headers = {"User-Agent": self.user_agent}
        deadline = time.monotonic() + self.timeout_seconds
        try:
            with requests.get(
                url, headers=headers, timeout=self.timeout_seconds, stream=True
            ) as response:
                if not 200 <= response.status_code < 300:
                    return FetchResult(url=url, status_code=response.status_code)
                body = self._read_body(response, deadline)
                encoding = response.encoding or "utf-8"
                return FetchResult(
                    url=url,
                    status_code=response.status_code,
                    text=body.decode(encoding, errors="replace"),
                )
        except requests.Timeout as exc:
            raise CollaboratorTimeout("content fetch", self.timeout_seconds) from exc

    def _read_body(self, response: requests.Response, deadline: float) -> bytes:
        chunks: list[bytes] = []
        size = 0
        for chunk in response.iter_content(self.chunk_size):
            if not chunk:
                continue
            size += len(chunk)
            if size > self.max_bytes:
                raise ResponseTooLarge(f"response exceeded {self.max_bytes} bytes")
            chunks.append(chunk)
            if time.monotonic() > deadline:
                raise CollaboratorTimeout("content fetch", self.timeout_seconds)
        return b"".join(chunks)
