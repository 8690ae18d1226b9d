"""
Response wrapper handed to every check.

Checks never talk to an HTTP client. They receive a fully read response:
status code, case-insensitive headers and a decoded body.
"""

from typing import Any, Mapping, Optional

import httpx


class Response:
    def __init__(
        self,
        status_code: int,
        headers: Optional[Mapping[str, str]] = None,
        body: Optional[str] = "",
    ):
        self.status_code = int(status_code)
        self.headers = httpx.Headers(headers or {})
        self.body = body or ""

    @classmethod
    def from_httpx(cls, response: httpx.Response) -> "Response":
        """Build from an httpx response whose content has already been read."""
        return cls(
            status_code=response.status_code,
            headers=response.headers,
            body=response.text,
        )

    @classmethod
    def coerce(cls, response: Any) -> "Response":
        if isinstance(response, cls):
            return response
        if isinstance(response, httpx.Response):
            return cls.from_httpx(response)
        raise TypeError(
            f"Expected Response or httpx.Response, got {type(response).__name__}"
        )

    def header(self, name: str) -> Optional[str]:
        return self.headers.get(name)

    @property
    def successful(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def redirect(self) -> bool:
        return 300 <= self.status_code < 400

    @property
    def client_error(self) -> bool:
        return 400 <= self.status_code < 500

    @property
    def server_error(self) -> bool:
        return 500 <= self.status_code < 600

    def __repr__(self) -> str:
        return f"<Response [{self.status_code}]>"
