"""Read the form token back from a submission."""

from __future__ import annotations

from typing import Optional

from ..config import DEFAULT_COOKIE_NAME
from ..core.context import RequestContext


def read_form_token(context: RequestContext, cookie_name: str = DEFAULT_COOKIE_NAME) -> Optional[str]:
    if context.cookies is None:
        return None
    token = context.cookies.get(cookie_name)
    return token or None
