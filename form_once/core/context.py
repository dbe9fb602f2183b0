"""Request and cookie context handed to form handlers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Protocol, Tuple

CookieWrite = Tuple[str, str, Dict[str, Any]]


class CookieJar(Protocol):
    """Cookie capability of a request: read incoming cookies, write response cookies."""

    def get(self, name: str) -> Optional[str]:
        ...

    def set(self, name: str, value: str, **options: Any) -> None:
        ...


class ResponseCookies:
    """In-memory cookie jar.

    Reads see the request cookies plus anything set during the request.
    ``writes`` keeps every ``set`` in call order as ``(name, value, options)``.
    """

    def __init__(self, request_cookies: Optional[Mapping[str, str]] = None) -> None:
        self._values: Dict[str, str] = dict(request_cookies or {})
        self.writes: List[CookieWrite] = []

    def get(self, name: str) -> Optional[str]:
        return self._values.get(name)

    def set(self, name: str, value: str, **options: Any) -> None:
        self.writes.append((name, value, dict(options)))
        if options.get("max_age") == 0:
            self._values.pop(name, None)
        else:
            self._values[name] = value

    def delete(self, name: str, **options: Any) -> None:
        self.set(name, "", **{**options, "max_age": 0})

    def all(self) -> Dict[str, str]:
        return dict(self._values)


@dataclass
class RequestContext:
    """One incoming form submission."""

    method: str = "POST"
    path: str = "/"
    body: Mapping[str, Any] = field(default_factory=dict)
    cookies: Optional[CookieJar] = field(default_factory=ResponseCookies)
