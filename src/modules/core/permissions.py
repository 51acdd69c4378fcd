"""Role-based endpoint gating.

Roles are capabilities, not a hierarchy: an endpoint declares the set of
roles it accepts and ``HasAnyRole`` lets the request through when the
authenticated principal carries at least one of them.

Role resolution (``user_roles``):

* Auth0 principals expose ``roles`` taken from the token's roles claim.
* Django superusers always carry ``ROLE_ADMIN``.
* Django users carry the names of their groups that are known roles.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, FrozenSet, Iterable

import structlog

from rest_framework.permissions import BasePermission
from rest_framework.request import Request

logger = structlog.get_logger(__name__)


class Role(StrEnum):
    ADMIN = "ROLE_ADMIN"
    USER = "ROLE_USER"


def _known(names: Iterable[str]) -> set[Role]:
    valid = {role.value for role in Role}
    return {Role(name) for name in names if name in valid}


def user_roles(user: Any) -> FrozenSet[Role]:
    """Return the roles held by an authenticated principal."""
    if user is None or not getattr(user, "is_authenticated", False):
        return frozenset()

    token_roles = getattr(user, "roles", None)
    if token_roles is not None:
        return frozenset(_known(token_roles))

    roles: set[Role] = set()
    if getattr(user, "is_superuser", False):
        roles.add(Role.ADMIN)
    groups = getattr(user, "groups", None)
    if groups is not None:
        roles |= _known(groups.values_list("name", flat=True))
    return frozenset(roles)


class HasAnyRole(BasePermission):
    """Allow authenticated principals holding any of ``allowed_roles``.

    Unauthenticated requests are denied here and DRF answers 401 (the
    authenticator supplies ``WWW-Authenticate``); authenticated requests
    without a permitted role get 403.
    """

    allowed_roles: FrozenSet[Role] = frozenset()
    message = "You do not have the role required for this operation."

    def has_permission(self, request: Request, view: Any) -> bool:
        user = request.user
        if not (user and user.is_authenticated):
            return False
        granted = bool(user_roles(user) & self.allowed_roles)
        if not granted:
            logger.warning(
                "access_denied",
                user=str(user),
                required=sorted(self.allowed_roles),
            )
        return granted


def roles_required(*roles: Role) -> type[HasAnyRole]:
    """Build a ``HasAnyRole`` subclass bound to ``roles``."""
    names = "Or".join(role.name.title() for role in roles)
    return type(f"Has{names}Role", (HasAnyRole,), {"allowed_roles": frozenset(roles)})
