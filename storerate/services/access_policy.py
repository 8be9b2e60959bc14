"""Access policy: who may perform which operation on which rows.

Every authorization decision goes through ``authorize``, which consults the
single ``CAPABILITIES`` table below. Route handlers call ``enforce`` (or the
``require`` dependency built on it) instead of comparing roles inline.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from storerate.errors import PolicyDeniedError
from storerate.models.enums import Role

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Principal:
    """Authenticated identity attached to a request."""

    id: int
    role: Role
    store_id: int | None = None
    email: str | None = None


@dataclass(frozen=True)
class Target:
    """Rows an operation touches, when the decision depends on them."""

    store_id: int | None = None
    user_id: int | None = None


class Operation(str, Enum):
    """Operations guarded by the access policy."""

    BROWSE_STORES = "browse_stores"
    READ_STORE = "read_store"
    READ_PROFILE = "read_profile"
    UPDATE_OWN_PASSWORD = "update_own_password"
    SUBMIT_RATING = "submit_rating"
    READ_OWN_RATING = "read_own_rating"
    DELETE_OWN_RATING = "delete_own_rating"
    READ_OWN_STORE_RATINGS = "read_own_store_ratings"
    VIEW_OWNER_DASHBOARD = "view_owner_dashboard"
    MANAGE_STORES = "manage_stores"
    MANAGE_USERS = "manage_users"
    VIEW_ADMIN_DASHBOARD = "view_admin_dashboard"


class Scope(str, Enum):
    """Row scoping applied after the role check."""

    ANY = "any"
    SELF = "self"
    OWN_STORE = "own_store"


class DenyReason(str, Enum):
    """Why a request was denied."""

    ROLE_NOT_PERMITTED = "ROLE_NOT_PERMITTED"
    NOT_SELF = "NOT_SELF"
    NO_STORE_ASSOCIATED = "NO_STORE_ASSOCIATED"
    NOT_OWN_STORE = "NOT_OWN_STORE"


DENY_MESSAGES = {
    DenyReason.ROLE_NOT_PERMITTED: "You do not have permission to perform this action",
    DenyReason.NOT_SELF: "You can only change your own account",
    DenyReason.NO_STORE_ASSOCIATED: "No store associated with this account",
    DenyReason.NOT_OWN_STORE: "You can only view ratings for your own store",
}


@dataclass(frozen=True)
class Capability:
    """Roles allowed to perform an operation and the scope they are held to."""

    roles: frozenset[Role]
    scope: Scope = Scope.ANY


ALL_ROLES = frozenset(Role)
ADMIN_ONLY = frozenset({Role.ADMIN})
USER_ONLY = frozenset({Role.USER})
STORE_OWNER_ONLY = frozenset({Role.STORE_OWNER})

CAPABILITIES: dict[Operation, Capability] = {
    Operation.BROWSE_STORES: Capability(ALL_ROLES),
    Operation.READ_STORE: Capability(ALL_ROLES),
    Operation.READ_PROFILE: Capability(ALL_ROLES),
    Operation.UPDATE_OWN_PASSWORD: Capability(ALL_ROLES, Scope.SELF),
    Operation.SUBMIT_RATING: Capability(USER_ONLY),
    Operation.READ_OWN_RATING: Capability(USER_ONLY),
    Operation.DELETE_OWN_RATING: Capability(USER_ONLY),
    Operation.READ_OWN_STORE_RATINGS: Capability(STORE_OWNER_ONLY, Scope.OWN_STORE),
    Operation.VIEW_OWNER_DASHBOARD: Capability(STORE_OWNER_ONLY, Scope.OWN_STORE),
    Operation.MANAGE_STORES: Capability(ADMIN_ONLY),
    Operation.MANAGE_USERS: Capability(ADMIN_ONLY),
    Operation.VIEW_ADMIN_DASHBOARD: Capability(ADMIN_ONLY),
}


@dataclass(frozen=True)
class Decision:
    """Outcome of an authorization check."""

    allowed: bool
    reason: DenyReason | None = None

    @classmethod
    def allow(cls) -> "Decision":
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: DenyReason) -> "Decision":
        return cls(allowed=False, reason=reason)


def authorize(principal: Principal, operation: Operation, target: Target | None = None) -> Decision:
    """Decide whether ``principal`` may perform ``operation`` on ``target``.

    A missing target for an own-store operation means the principal's own
    store; a missing target for a self-scoped operation is a denial.
    """
    capability = CAPABILITIES[operation]

    if principal.role not in capability.roles:
        return Decision.deny(DenyReason.ROLE_NOT_PERMITTED)

    if capability.scope == Scope.SELF:
        if target is None or target.user_id != principal.id:
            return Decision.deny(DenyReason.NOT_SELF)

    elif capability.scope == Scope.OWN_STORE:
        if principal.store_id is None:
            return Decision.deny(DenyReason.NO_STORE_ASSOCIATED)
        if target is not None and target.store_id is not None:
            if target.store_id != principal.store_id:
                return Decision.deny(DenyReason.NOT_OWN_STORE)

    return Decision.allow()


def enforce(principal: Principal, operation: Operation, target: Target | None = None) -> None:
    """Raise PolicyDeniedError unless the principal is authorized."""
    decision = authorize(principal, operation, target)
    if decision.allowed:
        return

    logger.warning(
        f"Denied {operation.value} for user {principal.id} "
        f"(role={principal.role.value}): {decision.reason.value}"
    )
    raise PolicyDeniedError(DENY_MESSAGES[decision.reason], reason=decision.reason.value)
