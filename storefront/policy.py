"""Authorization policy evaluated before privileged catalog and cart operations."""

from dataclasses import dataclass
from typing import Optional

from storefront.errors import Forbidden, Unauthorized

ROLE_ADMIN = 'admin'
ROLE_CUSTOMER = 'customer'
ROLES = (ROLE_ADMIN, ROLE_CUSTOMER)


@dataclass(frozen=True)
class Principal:
    """The authenticated caller, as far as this service cares."""
    id: int
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


@dataclass(frozen=True)
class AuthorizationPolicy:
    """Decides what a principal (or an anonymous caller) may do.

    Built once per request and handed to each operation, which evaluates it
    before touching storage.
    """
    principal: Optional[Principal] = None

    @classmethod
    def for_user(cls, user) -> 'AuthorizationPolicy':
        """Build a policy from a Flask-Login user (anonymous users allowed)."""
        if user is None or not getattr(user, 'is_authenticated', False):
            return cls()
        return cls(Principal(id=user.id, role=user.role))

    @property
    def is_authenticated(self) -> bool:
        return self.principal is not None

    def require_authenticated(self) -> Principal:
        if self.principal is None:
            raise Unauthorized()
        return self.principal

    def require_admin(self) -> Principal:
        principal = self.require_authenticated()
        if not principal.is_admin:
            raise Forbidden()
        return principal

    def can_manage_catalog(self) -> bool:
        return self.principal is not None and self.principal.is_admin
