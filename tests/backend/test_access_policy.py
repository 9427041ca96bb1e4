"""
Tests for the access policy layer (app.core.access_policy).

These tests cover:
- Missing principal handling
- Owner-scoped and admin-scoped filters
- Role checks over the closed role set
"""

import pytest
from bson import ObjectId

from app.core.access_policy import (
    NO_MATCH_ID,
    admin_scoped_filter,
    is_admin,
    owner_filter,
    owner_scoped_filter,
    require_principal,
    self_filter,
    to_object_id,
)
from app.core.errors import Forbidden, Unauthenticated
from app.models.user import Principal, UserRole

USER_ID = "507f1f77bcf86cd799439011"
CAT_ID = "507f1f77bcf86cd799439022"


def make_principal(role: UserRole) -> Principal:
    return Principal(id=USER_ID, role=role, user_name="Alice", email="alice@example.com")


class TestRequirePrincipal:
    """Tests for require_principal."""

    def test_missing_principal_raises_unauthenticated(self):
        with pytest.raises(Unauthenticated):
            require_principal(None)

    def test_present_principal_is_returned(self):
        principal = make_principal(UserRole.USER)
        assert require_principal(principal) is principal


class TestIsAdmin:
    """Tests for the role check."""

    def test_admin_role_is_admin(self):
        assert is_admin(make_principal(UserRole.ADMIN)) is True

    def test_user_role_is_not_admin(self):
        assert is_admin(make_principal(UserRole.USER)) is False

    def test_role_parsed_from_string(self):
        principal = Principal(id=USER_ID, role="admin", user_name="Root", email="root@example.com")
        assert principal.role is UserRole.ADMIN
        assert is_admin(principal) is True

    def test_unknown_role_rejected_at_construction(self):
        with pytest.raises(ValueError):
            Principal(id=USER_ID, role="superuser", user_name="Root", email="root@example.com")


class TestFilters:
    """Tests for the store predicates produced by the policy."""

    def test_owner_filter_restricts_to_principal(self):
        query = owner_filter(make_principal(UserRole.USER))
        assert query == {"owner": ObjectId(USER_ID)}

    def test_owner_filter_without_principal_raises(self):
        with pytest.raises(Unauthenticated):
            owner_filter(None)

    def test_owner_scoped_filter_combines_id_and_owner(self):
        query = owner_scoped_filter(make_principal(UserRole.USER), CAT_ID)
        assert query == {"_id": ObjectId(CAT_ID), "owner": ObjectId(USER_ID)}

    def test_owner_scoped_filter_applies_owner_even_for_admin(self):
        query = owner_scoped_filter(make_principal(UserRole.ADMIN), CAT_ID)
        assert query["owner"] == ObjectId(USER_ID)

    def test_admin_scoped_filter_for_admin_has_no_owner(self):
        query = admin_scoped_filter(make_principal(UserRole.ADMIN), CAT_ID)
        assert query == {"_id": ObjectId(CAT_ID)}

    def test_admin_scoped_filter_for_user_is_forbidden(self):
        with pytest.raises(Forbidden):
            admin_scoped_filter(make_principal(UserRole.USER), CAT_ID)

    def test_admin_scoped_filter_without_principal_is_unauthenticated(self):
        with pytest.raises(Unauthenticated):
            admin_scoped_filter(None, CAT_ID)

    def test_self_filter_targets_principal(self):
        assert self_filter(make_principal(UserRole.USER)) == {"_id": ObjectId(USER_ID)}


class TestToObjectId:
    """Tests for id parsing."""

    def test_valid_id_is_parsed(self):
        assert to_object_id(CAT_ID) == ObjectId(CAT_ID)

    def test_malformed_id_matches_nothing(self):
        assert to_object_id("not-an-id") == NO_MATCH_ID

    def test_empty_id_matches_nothing(self):
        assert to_object_id("") == NO_MATCH_ID
