"""Assembles outgoing API calls from a method, URL, body and headers."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode

from .encoding import JSONMarshaller


@dataclasses.dataclass
class ApiCall:
    """A prepared request: method, URL, encoded body and headers."""

    method: str
    url: str
    body: bytes | None = None
    headers: dict[str, str] = dataclasses.field(default_factory=dict)


class RequestBuilder:
    """Builds ``ApiCall`` values, encoding bodies with a marshaller."""

    def __init__(self, marshaller: Any = None) -> None:
        self._marshaller = JSONMarshaller() if marshaller is None else marshaller

    @property
    def marshaller(self) -> Any:
        return self._marshaller

    def build(
        self,
        method: str,
        url: str,
        body: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> ApiCall:
        """Readers are sent as they are; any other body is marshalled."""
        if body is None:
            payload = None
        elif hasattr(body, "read"):
            data = body.read()
            payload = data.encode("utf-8") if isinstance(data, str) else bytes(data)
        else:
            payload = self._marshaller.marshal(body)
        return ApiCall(
            method=method or "GET",
            url=url,
            body=payload,
            headers=dict(headers) if headers is not None else {},
        )


def encode_query(params: Mapping[str, Any]) -> str:
    """Encode query parameters sorted by key, skipping ``None`` values."""
    pairs = []
    for key in sorted(params):
        value = params[key]
        if value is None:
            continue
        values = value if isinstance(value, (list, tuple)) else [value]
        pairs.extend((key, str(item)) for item in values)
    return urlencode(pairs)