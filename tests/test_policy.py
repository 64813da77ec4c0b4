import pytest

from food_ordering.core.exceptions import Forbidden
from food_ordering.core.policy import AccessPolicy, authorize, can_access_country
from food_ordering.models.user import Country, UserRole

STAFF_SCOPED = AccessPolicy.of(UserRole.ADMIN, UserRole.MANAGER, country_scoped=True)
EVERYONE = AccessPolicy.of(UserRole.ADMIN, UserRole.MANAGER, UserRole.MEMBER)


def test_role_outside_policy_is_forbidden():
    with pytest.raises(Forbidden) as exc:
        authorize(STAFF_SCOPED, UserRole.MEMBER, Country.INDIA)
    assert exc.value.message == "Insufficient permissions"


def test_role_inside_policy_is_admitted():
    authorize(EVERYONE, UserRole.MEMBER, Country.INDIA)
    authorize(STAFF_SCOPED, "manager", "india")


def test_country_mismatch_is_forbidden_for_non_admin():
    with pytest.raises(Forbidden) as exc:
        authorize(STAFF_SCOPED, UserRole.MANAGER, Country.INDIA, resource_country="america")
    assert "Country restriction" in exc.value.message


def test_matching_country_is_admitted():
    authorize(STAFF_SCOPED, UserRole.MANAGER, Country.INDIA, resource_country=Country.INDIA)


def test_admin_bypasses_country_scope():
    authorize(STAFF_SCOPED, UserRole.ADMIN, Country.AMERICA, resource_country=Country.INDIA)


def test_unscoped_policy_ignores_resource_country():
    authorize(EVERYONE, UserRole.MEMBER, Country.INDIA, resource_country=Country.AMERICA)


def test_unknown_role_is_forbidden():
    with pytest.raises(Forbidden):
        authorize(EVERYONE, "superuser", Country.INDIA)


@pytest.mark.parametrize("role, country, resource, expected", [
    (UserRole.ADMIN, Country.INDIA, Country.AMERICA, True),
    (UserRole.ADMIN, Country.INDIA, None, True),
    (UserRole.MANAGER, Country.INDIA, Country.INDIA, True),
    (UserRole.MANAGER, Country.INDIA, "america", False),
    (UserRole.MEMBER, Country.AMERICA, None, False),
])
def test_can_access_country(role, country, resource, expected):
    assert can_access_country(role, country, resource) is expected
