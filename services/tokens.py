"""Signed session tokens.

Tokens are self-contained JWTs issued through flask-jwt-extended; there is no
server-side session table, so a token stays valid until it expires even after
the holder logs out.
"""

from __future__ import annotations

from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import InvalidTokenError


class InvalidSessionToken(Exception):
    """The token is malformed, forged, or expired."""


def sign(account_id: str) -> str:
    """Return a signed token naming ``account_id`` with the configured lifetime."""

    return create_access_token(identity=str(account_id))


def verify(token: str) -> str:
    """Return the account id carried by ``token``."""

    try:
        claims = decode_token(token)
    except (InvalidTokenError, JWTExtendedException) as exc:
        raise InvalidSessionToken(str(exc)) from exc

    account_id = claims.get("sub")
    if not account_id:
        raise InvalidSessionToken("Token does not name an account.")
    return account_id
