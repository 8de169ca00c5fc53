"""Tests for permission matching."""

import pytest

from tenant_gate.features.permissions.services.matcher import (
    can_assign,
    matches,
    matches_all,
    matches_any,
    unassignable,
)


class TestMatches:
    """Test the wildcard matching rules."""

    def test_universal_grant_matches_everything(self):
        """Test that '*' satisfies any required permission."""
        for required in ["core", "core:users", "core:users:read", "catalog:*", "*"]:
            assert matches({"*"}, required)

    def test_exact_match(self):
        """Test verbatim grants."""
        assert matches({"notes:notes:read"}, "notes:notes:read")
        assert matches({"costing:view"}, "costing:view")
        assert not matches({"notes:notes:read"}, "notes:notes:write")

    def test_module_wildcard(self):
        """Test that 'module:*' covers two- and three-segment permissions in the module."""
        granted = {"catalog:*"}
        assert matches(granted, "catalog:products:read")
        assert matches(granted, "catalog:products")
        assert not matches(granted, "costing:view")

    def test_resource_wildcard(self):
        """Test that 'module:resource:*' covers only that resource."""
        granted = {"core:users:*"}
        assert matches(granted, "core:users:read")
        assert matches(granted, "core:users:delete")
        assert not matches(granted, "core:settings:manage")
        assert not matches(granted, "core:users")

    def test_single_segment_requires_exact_or_universal(self):
        """Test that a one-segment permission is not covered by scoped wildcards."""
        assert not matches({"core:*"}, "core")
        assert matches({"core"}, "core")

    def test_required_wildcard_is_literal(self):
        """Test that wildcards on the required side are not expanded."""
        assert not matches({"core:users:read"}, "core:*")
        assert matches({"core:*"}, "core:*")
        assert not matches({"core:users:*"}, "core:*")

    def test_empty_grant_matches_nothing(self):
        """Test that an empty permission set satisfies nothing."""
        assert not matches(frozenset(), "core:dashboard:read")

    def test_monotonic_in_granted(self):
        """Test that adding grants never turns a match into a non-match."""
        base = {"core:users:read"}
        required = "core:users:read"
        assert matches(base, required)
        for extra in ["core:*", "notes:*", "*", "core:users:*"]:
            assert matches(base | {extra}, required)

    @pytest.mark.parametrize("required", [
        "core:dashboard:read",
        "core:settings:manage",
        "catalog:products:read",
        "costing:view",
    ])
    def test_admin_role_defaults(self, required):
        """Test the admin grant set against core and module permissions."""
        granted = {"core:*", "settings:*", "catalog:*"}
        expected = not required.startswith("costing")
        assert matches(granted, required) is expected


class TestCombinators:
    """Test matches_all, matches_any and the escalation guard."""

    def test_matches_all(self):
        """Test that every permission must be satisfied."""
        granted = {"notes:*", "core:dashboard:read"}
        assert matches_all(granted, ["notes:notes:read", "core:dashboard:read"])
        assert not matches_all(granted, ["notes:notes:read", "core:users:read"])
        assert matches_all(granted, [])

    def test_matches_any(self):
        """Test that one satisfied permission is enough."""
        granted = {"costing:view"}
        assert matches_any(granted, ["costing:manage", "costing:view"])
        assert not matches_any(granted, ["costing:manage"])
        assert not matches_any(granted, [])

    def test_can_assign_subset(self):
        """Test that callers may grant what they hold, including through wildcards."""
        assert can_assign({"catalog:*"}, {"catalog:products:read", "catalog:categories:write"})
        assert can_assign({"*"}, {"core:*", "anything:at:all"})

    def test_can_assign_refuses_escalation(self):
        """Test that callers cannot grant permissions beyond their own."""
        granted = {"catalog:products:*"}
        assert not can_assign(granted, {"catalog:*"})
        assert unassignable(granted, {"catalog:products:read", "core:users:read"}) == {"core:users:read"}
