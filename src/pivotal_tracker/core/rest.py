import logging
import time
from typing import Any, Dict, Mapping, Optional, Union
from urllib.parse import urlencode, urlsplit

import httpx

from .errors import ConfigurationError, TransportError
from .forms import FormBody, encode_form

GET = "GET"
POST = "POST"
PUT = "PUT"

Body = Union[str, bytes, FormBody, None]


def normalize_server_url(server_url: str) -> str:
    """
    Normalize a server location into ``scheme://host[:port]path``.
    - trailing slashes are stripped
    - scheme defaults to http
    Raises ConfigurationError if no host can be found.
    """
    raw = (server_url or "").strip()
    if raw and "://" not in raw:
        raw = f"http://{raw}"

    try:
        parts = urlsplit(raw)
        port = parts.port
    except ValueError as exc:
        raise ConfigurationError(f"Invalid server url {server_url!r}: {exc}") from exc

    if not parts.hostname:
        raise ConfigurationError(f"Server url {server_url!r} has no host.")

    host = parts.hostname
    if ":" in host:
        host = f"[{host}]"

    server = f"{parts.scheme or 'http'}://{host}"
    if port:
        server += f":{port}"
    return server + parts.path.rstrip("/")


class RestClient:
    """
    Helper providing GET/POST/PUT against one remote server.
    - Base URL is normalized once, at construction
    - Default headers are sent with every request
    - Returns the raw response body whatever the HTTP status; callers
      inspect the content to detect API-level errors
    - Network failures raise TransportError; nothing is retried

    Header changes are not synchronized; do not share an instance across
    threads while calling add_header.
    """

    def __init__(
        self,
        server_url: str,
        *,
        timeout_seconds: Optional[float] = None,
        logger: Optional[logging.Logger] = None,
        http: Optional[httpx.Client] = None,
    ):
        self.base_url = ""
        self._headers: Dict[str, str] = {}
        self.log = logger or logging.getLogger("pivotal_tracker.rest")
        self.configure(server_url)

        self._owns_http = http is None
        if http is not None:
            self.http = http
        elif timeout_seconds is not None:
            self.http = httpx.Client(timeout=timeout_seconds)
        else:
            self.http = httpx.Client()

    def configure(self, server_url: str) -> None:
        self.base_url = normalize_server_url(server_url)

    @property
    def headers(self) -> Dict[str, str]:
        """Header lines keyed by header name, e.g. {"Accept": "Accept: text/xml"}."""
        return dict(self._headers)

    def add_header(self, name: str, value: str) -> None:
        self._headers[name] = f"{name}: {value}"

    def _header_pairs(self) -> Dict[str, str]:
        pairs: Dict[str, str] = {}
        for line in self._headers.values():
            name, _, value = line.partition(":")
            pairs[name] = value.strip()
        return pairs

    def close(self) -> None:
        if self._owns_http:
            self.http.close()

    def __enter__(self) -> "RestClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def get(self, path: str, query: Optional[Mapping[str, Any]] = None) -> str:
        if query:
            path += "?" + urlencode(query)
        return self.request(GET, path)

    def post(self, path: str, body: Body = None) -> str:
        return self.request(POST, path, body)

    def put(self, path: str, body: Body = None) -> str:
        return self.request(PUT, path, body)

    def request(self, method: str, path: str, body: Body = None) -> str:
        method = method.upper()
        url = self.base_url + path
        if isinstance(body, Mapping):
            body = encode_form(body)

        start = time.perf_counter()
        try:
            resp = self.http.request(
                method, url, content=body, headers=self._header_pairs()
            )
        except httpx.HTTPError as exc:
            raise TransportError(method=method, url=url, cause=exc) from exc

        duration_ms = int((time.perf_counter() - start) * 1000)
        self.log.debug(
            "pt.request",
            extra={
                "method": method,
                "url": url,
                "status": resp.status_code,
                "duration_ms": duration_ms,
            },
        )
        if resp.is_error:
            # Status is not interpreted here; the body goes back to the caller.
            self.log.warning(
                "pt.request.error_status",
                extra={"method": method, "url": url, "status": resp.status_code},
            )
        return resp.text


__all__ = ["RestClient", "normalize_server_url", "GET", "POST", "PUT"]
