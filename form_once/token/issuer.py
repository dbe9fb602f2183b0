"""Issue one-shot form tokens as path-scoped cookies."""

from __future__ import annotations

from typing import Any, Dict, Optional
from uuid import uuid4

from ..config import FormOnceConfig
from ..core.context import RequestContext
from .types import IssuedToken


class FormTokenIssuer:
    """Set a fresh random token cookie scoped to the page's path.

    Call once per page load; the guarded action later reads the same cookie.
    """

    def __init__(self, config: Optional[FormOnceConfig] = None) -> None:
        self.config = config or FormOnceConfig()

    def issue(self, context: RequestContext) -> IssuedToken:
        if context.cookies is None:
            raise ValueError("Request context has no cookie jar to carry the form token.")
        cfg = self.config
        issued = IssuedToken(
            token=str(uuid4()),
            cookie_name=cfg.cookie_name,
            path=context.path,
            max_age_seconds=cfg.max_age_seconds,
            http_only=cfg.http_only,
        )
        context.cookies.set(
            issued.cookie_name,
            issued.token,
            http_only=issued.http_only,
            max_age=issued.max_age_seconds,
            path=issued.path,
        )
        return issued


def add_form_token(
    context: RequestContext,
    data: Optional[Dict[str, Any]] = None,
    *,
    issuer: Optional[FormTokenIssuer] = None,
) -> Dict[str, Any]:
    """Issue a token and return page data with ``token`` added.

    The token can be embedded in a hidden input, though the guard only reads
    the cookie.
    """
    issued = (issuer or FormTokenIssuer()).issue(context)
    return {**(data or {}), "token": issued.token}
