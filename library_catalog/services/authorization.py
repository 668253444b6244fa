"""
Authorization Gate

Decides, before any handler runs, whether a caller may reach a path.

Policy Table
============
Each page folder is mapped to one of three policies:

    /Books/Index, /Books/Details  → anyone
    /Books, /Borrowings           → any signed-in caller
    /Members, /Publishers,
    /Categories, /Authors         → callers holding the admin role

The longest matching prefix wins, so the two public book pages override the
/Books folder rule. Matching is case-insensitive and stops at path segment
boundaries (/Books matches /Books/Edit but not /Bookshelf). Paths that match
no prefix (health check, docs, /auth) are public.

Flow
====
request → principal from bearer token → policy lookup →
    Anonymous      → allow
    Authenticated  → allow if signed in, else 401
    Role(R)        → 401 if not signed in, 403 if R not held, else allow
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from urllib.parse import quote

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from library_catalog.config import get_settings
from library_catalog.errors import Forbidden, Unauthenticated
from library_catalog.services.security import verify_token_type

logger = logging.getLogger(__name__)
settings = get_settings()


# =============================================================================
# Principals and Policies
# =============================================================================
@dataclass(frozen=True)
class Principal:
    """The caller as seen by the gate: who they are and which roles they hold."""

    user_id: int | None = None
    email: str | None = None
    roles: frozenset[str] = field(default_factory=frozenset)

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    def has_role(self, role: str) -> bool:
        return role in self.roles


ANONYMOUS = Principal()


class PolicyKind(str, Enum):
    ANONYMOUS = "anonymous"
    AUTHENTICATED = "authenticated"
    ROLE = "role"


@dataclass(frozen=True)
class Policy:
    kind: PolicyKind
    role: str | None = None

    @classmethod
    def anonymous(cls) -> "Policy":
        return cls(PolicyKind.ANONYMOUS)

    @classmethod
    def authenticated(cls) -> "Policy":
        return cls(PolicyKind.AUTHENTICATED)

    @classmethod
    def requires_role(cls, role: str) -> "Policy":
        return cls(PolicyKind.ROLE, role)


class GateDecision(str, Enum):
    ALLOW = "allow"
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"


PolicyTable = Sequence[tuple[str, Policy]]


def default_policy_table(admin_role: str) -> PolicyTable:
    """Build the prefix → policy table for the page folders."""
    return (
        ("/Books/Index", Policy.anonymous()),
        ("/Books/Details", Policy.anonymous()),
        ("/Books", Policy.authenticated()),
        ("/Borrowings", Policy.authenticated()),
        ("/Members", Policy.requires_role(admin_role)),
        ("/Publishers", Policy.requires_role(admin_role)),
        ("/Categories", Policy.requires_role(admin_role)),
        ("/Authors", Policy.requires_role(admin_role)),
    )


POLICY_TABLE = default_policy_table(settings.admin_role)


# =============================================================================
# Gate
# =============================================================================
def _matches(path: str, prefix: str) -> bool:
    path = path.rstrip("/").lower() or "/"
    prefix = prefix.rstrip("/").lower()
    return path == prefix or path.startswith(prefix + "/")


def resolve_policy(path: str, table: PolicyTable = POLICY_TABLE) -> Policy:
    """
    Find the policy for a request path.

    Returns:
        Policy of the longest matching prefix, Anonymous when none match
    """
    best: tuple[str, Policy] | None = None
    for prefix, policy in table:
        if _matches(path, prefix) and (best is None or len(prefix) > len(best[0])):
            best = (prefix, policy)
    return best[1] if best else Policy.anonymous()


def authorize(
    path: str,
    principal: Principal,
    table: PolicyTable = POLICY_TABLE,
) -> GateDecision:
    """
    Decide whether the principal may reach the path.

    Example:
        >>> authorize("/Books/Index", ANONYMOUS)
        <GateDecision.ALLOW: 'allow'>
        >>> authorize("/Members/Index", ANONYMOUS)
        <GateDecision.UNAUTHENTICATED: 'unauthenticated'>
    """
    policy = resolve_policy(path, table)

    if policy.kind is PolicyKind.ANONYMOUS:
        return GateDecision.ALLOW

    if not principal.is_authenticated:
        return GateDecision.UNAUTHENTICATED

    if policy.kind is PolicyKind.ROLE and not principal.has_role(policy.role):
        return GateDecision.FORBIDDEN

    return GateDecision.ALLOW


def principal_from_authorization(header: str | None) -> Principal:
    """
    Build a Principal from an "Authorization: Bearer <token>" header.

    Missing, malformed, expired or tampered tokens yield ANONYMOUS.
    """
    if not header:
        return ANONYMOUS

    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token:
        return ANONYMOUS

    payload = verify_token_type(token.strip(), "access")
    if payload is None or payload.get("sub") is None:
        return ANONYMOUS

    return Principal(
        user_id=int(payload["sub"]),
        email=payload.get("email"),
        roles=frozenset(payload.get("roles", [])),
    )


# =============================================================================
# Middleware
# =============================================================================
class AuthorizationMiddleware(BaseHTTPMiddleware):
    """
    Enforce the policy table on every request before routing.

    The resolved principal is stored on request.state.principal for the
    handlers that need to know who is calling.
    """

    def __init__(self, app, table: PolicyTable = POLICY_TABLE) -> None:
        super().__init__(app)
        self.table = table

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        principal = principal_from_authorization(request.headers.get("Authorization"))
        request.state.principal = principal

        path = request.url.path
        decision = authorize(path, principal, self.table)

        if decision is GateDecision.UNAUTHENTICATED:
            logger.warning(f"Unauthenticated request to {path}")
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={
                    "detail": Unauthenticated.message,
                    "login_url": f"{settings.login_url}?returnUrl={quote(path)}",
                },
                headers={"WWW-Authenticate": "Bearer"},
            )

        if decision is GateDecision.FORBIDDEN:
            logger.warning(f"Forbidden request to {path} by user {principal.user_id}")
            return JSONResponse(
                status_code=status.HTTP_403_FORBIDDEN,
                content={"detail": Forbidden.message},
            )

        return await call_next(request)
