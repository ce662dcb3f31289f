"""
Request authentication and role-based route gating.

get_current_identity turns the Authorization header into an Identity;
RoleGate instances are attached to routers or endpoints as dependencies
and decide access by set membership of the caller's role.
"""

from typing import Optional
from fastapi import Depends, Request
from framework.exceptions.handler import AuthError, AuthzError
from framework.logging.logger import get_logger
from framework.security import Identity, Role, TokenCodec, get_token_codec

logger = get_logger("auth")

BEARER_PREFIX = "Bearer "


def extract_identity(authorization: Optional[str], codec: TokenCodec) -> Identity:
    """Validate a raw Authorization header value and return the caller's identity."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise AuthError("Missing or invalid Authorization header")
    return codec.verify(authorization[len(BEARER_PREFIX):])


def get_current_identity(
    request: Request,
    codec: TokenCodec = Depends(get_token_codec)
) -> Identity:
    """
    Dependency: authenticate the request from its bearer token.

    The identity is also stored on request.state.identity for code that
    only has the request at hand.
    """
    identity = extract_identity(request.headers.get("Authorization"), codec)
    request.state.identity = identity
    return identity


class RoleGate:
    """Allows a request through only when the caller's role is in allowed_roles."""

    def __init__(self, *roles: Role):
        self.allowed_roles = frozenset(roles)

    def check(self, identity: Identity) -> Identity:
        if identity.role not in self.allowed_roles:
            logger.warning(f"Access denied for user {identity.subject_id} with role {identity.role.value}")
            raise AuthzError(f"User role '{identity.role.value}' is not authorized to access this route")
        return identity

    def __call__(self, identity: Identity = Depends(get_current_identity)) -> Identity:
        return self.check(identity)

    def __repr__(self) -> str:
        roles = ", ".join(sorted(role.value for role in self.allowed_roles))
        return f"RoleGate({roles})"


# Route groups
admin_only = RoleGate(Role.ADMIN)
staff_only = RoleGate(Role.ADMIN, Role.WORKER)
authenticated = RoleGate(Role.ADMIN, Role.WORKER, Role.USER)
