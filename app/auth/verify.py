"""
verify.py
---------
Purpose:
    Bearer-token authentication for protected routes.

Notes:
    - Verifies the service's own access tokens (see app.auth.tokens).
    - Provides `current_user_id`, the dependency every owned-entity route uses
      to scope queries to the caller.
    - The HTTPBearer scheme is declared only so it shows up in the OpenAPI docs;
      the header is parsed here so a malformed header gets its own 401 message.
"""

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from fastapi.security.utils import get_authorization_scheme_param

from app.auth.tokens import verify_access_token
from app.utils.errors import UnauthorizedError

_security = HTTPBearer(auto_error=False)


def current_user_id(
    request: Request,
    _credentials: HTTPAuthorizationCredentials | None = Depends(_security),
) -> str:
    authorization = request.headers.get("Authorization")
    if not authorization:
        raise UnauthorizedError("No authorization token provided")

    scheme, token = get_authorization_scheme_param(authorization)
    if scheme.lower() != "bearer" or not token:
        raise UnauthorizedError("Invalid authorization header format")

    payload = verify_access_token(token)
    return payload.user_id
