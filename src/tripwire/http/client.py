"""Single-attempt HTTPS GET wrapper with a fixed timeout."""

from __future__ import annotations

import json
import logging
import ssl
from dataclasses import dataclass
from types import TracebackType

import httpx

from tripwire import __version__
from tripwire.constants.http import (
    DEFAULT_HTTP_TIMEOUT_SECONDS,
    ERROR_BODY_MAX_LENGTH,
    MAX_REDIRECTS,
    USER_AGENT_PREFIX,
)
from tripwire.exceptions import NetworkError
from tripwire.types import NetworkErrorKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HttpResponse:
    """Status code and raw body of a completed request."""

    url: str
    status_code: int
    body: bytes

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> object:
        """Decode the body as JSON, raising ``ValueError`` when it is not."""
        return json.loads(self.body)

    def body_excerpt(self) -> str:
        text = self.body.decode("utf-8", errors="replace").strip()
        if len(text) > ERROR_BODY_MAX_LENGTH:
            return text[:ERROR_BODY_MAX_LENGTH] + "..."
        return text


class HttpClient:
    """Thin wrapper around ``httpx.Client``.

    One attempt per call and no response caching. Every transport failure
    is raised as ``NetworkError`` with a coarse ``kind``.
    """

    def __init__(
        self,
        *,
        timeout_seconds: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.timeout_seconds = timeout_seconds
        self._client = httpx.Client(
            timeout=timeout_seconds,
            follow_redirects=True,
            max_redirects=MAX_REDIRECTS,
            headers={"User-Agent": f"{USER_AGENT_PREFIX}/{__version__}"},
            transport=transport,
        )

    def get(self, url: str, headers: dict[str, str] | None = None) -> HttpResponse:
        """Perform one GET request."""
        logger.debug("GET %s", url)
        try:
            response = self._client.get(url, headers=headers)
        except httpx.TimeoutException as exc:
            raise NetworkError("timeout", f"request to {url} timed out after {self.timeout_seconds:g}s") from exc
        except httpx.TooManyRedirects as exc:
            raise NetworkError("other", f"request to {url} exceeded {MAX_REDIRECTS} redirects") from exc
        except httpx.TransportError as exc:
            kind = _transport_error_kind(exc)
            raise NetworkError(kind, f"request to {url} failed: {exc or type(exc).__name__}") from exc
        except httpx.HTTPError as exc:
            raise NetworkError("other", f"request to {url} failed: {exc or type(exc).__name__}") from exc

        return HttpResponse(url=str(response.url), status_code=response.status_code, body=response.content)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> HttpClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()


def _transport_error_kind(exc: httpx.TransportError) -> NetworkErrorKind:
    """Classify a transport failure, looking through chained causes for TLS errors."""
    current: BaseException | None = exc
    seen: set[int] = set()
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if isinstance(current, ssl.SSLError):
            return "tls_failed"
        current = current.__cause__ or current.__context__

    message = str(exc).lower()
    if "ssl" in message or "certificate" in message:
        return "tls_failed"
    if isinstance(exc, (httpx.ConnectError, httpx.NetworkError)):
        return "connection_failed"
    return "other"
