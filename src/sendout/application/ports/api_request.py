from __future__ import annotations

from typing import ClassVar, Protocol


class ApiRequest(Protocol):
    """A provider request that knows how it goes over HTTP."""

    # HTTP method, e.g. "POST"
    method: ClassVar[str]
    # path appended to the service base URL; starts with "/"
    endpoint: ClassVar[str]

    def to_json_bytes(self) -> bytes: ...
