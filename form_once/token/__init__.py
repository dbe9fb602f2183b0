"""Form token issuance and lookup."""

from .issuer import FormTokenIssuer, add_form_token
from .reader import read_form_token
from .types import IssuedToken

__all__ = ["FormTokenIssuer", "IssuedToken", "add_form_token", "read_form_token"]
