"""
HTTP transport used to deliver built payloads.

Anything with a matching ``send`` method can stand in for
:class:`RequestsTransport`, which keeps tests free of network access.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Protocol

import requests

__all__ = ["RequestsTransport", "Transport", "TransportResponse"]


@dataclass(frozen=True)
class TransportResponse:
    status_code: int
    reason: str
    content_type: str
    text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class Transport(Protocol):
    def send(
        self,
        url: str,
        data: Mapping[str, str],
        *,
        timeout: Optional[float] = None,
    ) -> TransportResponse:
        """POST ``data`` form-encoded to ``url`` and return the raw response."""
        ...


class RequestsTransport:
    """
    :class:`Transport` backed by a :class:`requests.Session`.

    Connection errors and timeouts propagate as :mod:`requests` exceptions.
    """

    def __init__(self, session: Optional[requests.Session] = None) -> None:
        self.session = session or requests.Session()

    def send(
        self,
        url: str,
        data: Mapping[str, str],
        *,
        timeout: Optional[float] = None,
    ) -> TransportResponse:
        response = self.session.post(url, data=dict(data), timeout=timeout)
        return TransportResponse(
            status_code=response.status_code,
            reason=response.reason or "",
            content_type=response.headers.get("Content-Type", ""),
            text=response.text,
        )

    def close(self) -> None:
        self.session.close()
