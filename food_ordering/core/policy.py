"""
Role and country access policy.

Every router handler declares an ``AccessPolicy`` and calls ``authorize``
before touching a service. The check is a pure function of the caller's
role/country and the country of the resource being addressed, so it can be
tested without a database or a request.
"""
import logging
from dataclasses import dataclass
from typing import FrozenSet, Iterable, Optional

from food_ordering.core.exceptions import Forbidden
from food_ordering.models.user import Country, UserRole

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccessPolicy:
    """Roles admitted to an operation and whether it is country scoped"""
    allowed_roles: FrozenSet[UserRole]
    country_scoped: bool = False

    @classmethod
    def of(cls, *roles: UserRole, country_scoped: bool = False) -> "AccessPolicy":
        return cls(frozenset(roles), country_scoped)

    def admits(self, role) -> bool:
        return _as_role(role) in self.allowed_roles


def _as_role(role) -> Optional[UserRole]:
    try:
        return UserRole(role)
    except ValueError:
        return None


def _as_country(country) -> Optional[str]:
    if country is None:
        return None
    return country.value if isinstance(country, Country) else str(country)


def can_access_country(role, country, resource_country) -> bool:
    """Admins see every country; everyone else only their own"""
    if _as_role(role) is UserRole.ADMIN:
        return True
    if resource_country is None:
        return False
    return _as_country(resource_country) == _as_country(country)


def authorize(policy: AccessPolicy, role, country=None, resource_country=None) -> None:
    """Raise Forbidden unless the caller satisfies the policy"""
    if not policy.admits(role):
        logger.warning(f"Denied role {role} (allowed: {sorted(r.value for r in policy.allowed_roles)})")
        raise Forbidden("Insufficient permissions")

    if policy.country_scoped and resource_country is not None:
        if not can_access_country(role, country, resource_country):
            logger.warning(f"Denied {role} from {country} access to {resource_country}")
            raise Forbidden("Access denied: Country restriction")


ALL_ROLES: Iterable[UserRole] = (UserRole.ADMIN, UserRole.MANAGER, UserRole.MEMBER)
STAFF_ROLES: Iterable[UserRole] = (UserRole.ADMIN, UserRole.MANAGER)
