"""
admin_api/security/auth.py
--------------------------
Authentication middleware for the admin API.
Every blueprint installs ``admin_guard`` as a before-request hook: the
caller must send a bearer token that resolves to the admin role.
"""

from typing import Callable, Optional

from flask import request

from admin_api.errors import AuthenticationError, AuthorizationError
from admin_api.utils.logger import get_logger

logger = get_logger(__name__)

ADMIN_ROLE = "admin"


class StaticTokenVerifier:
    """
    Resolves bearer tokens against a fixed token -> role mapping.

    Token issuing lives outside this service; any object with a
    ``role_for(token) -> Optional[str]`` method can replace this one.
    """

    def __init__(self, tokens: dict[str, str]):
        self._tokens = dict(tokens)

    def role_for(self, token: str) -> Optional[str]:
        return self._tokens.get(token)


def _bearer_token() -> Optional[str]:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def admin_guard(verifier, disabled: bool = False) -> Callable[[], None]:
    """
    Build a before-request hook that restricts a blueprint to admins.

    Behavior:
        - ``disabled`` skips every check (local development only).
        - CORS preflight (OPTIONS) requests pass unchecked.
        - Missing or unknown token -> AuthenticationError (401).
        - Known token without the admin role -> AuthorizationError (403).
        - Rejected attempts are logged.
    """
    def guard() -> None:
        if disabled or request.method == "OPTIONS":
            return None

        token = _bearer_token()
        if token is None:
            logger.warning(f"Missing bearer token: {request.method} {request.path} from {request.remote_addr}")
            raise AuthenticationError("Access token required")

        role = verifier.role_for(token)
        if role is None:
            logger.warning(f"Invalid token: {request.method} {request.path} from {request.remote_addr}")
            raise AuthenticationError("Invalid or expired token")

        if role != ADMIN_ROLE:
            logger.warning(f"Non-admin role '{role}' denied: {request.method} {request.path}")
            raise AuthorizationError("Admin access required")
        return None

    return guard
