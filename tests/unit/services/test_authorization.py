"""Tests for role capability checks."""

import pytest

from siteledger.core.entities import ActionBy
from siteledger.core.exceptions import AuthorizationError
from siteledger.core.services.authorization import (
    Capability,
    capabilities_for,
    has_capability,
    require_capability,
)


class TestCapabilities:
    def test_admin_has_everything(self):
        assert capabilities_for("admin") == frozenset(Capability)

    def test_project_manager(self):
        assert capabilities_for("project_manager") == {Capability.MANAGE_PROJECT_INVENTORY}

    def test_user_holds_no_write_capability(self):
        assert capabilities_for("user") == frozenset()

    def test_every_capability_guards_a_write(self):
        assert {c.value for c in Capability} == {
            "manage_project_inventory",
            "manage_warehouse",
            "manage_projects",
        }

    def test_role_names_are_normalized(self):
        assert Capability.MANAGE_WAREHOUSE in capabilities_for(" Admin ")

    def test_unknown_role_gets_nothing(self):
        assert capabilities_for("contractor") == frozenset()


class TestRequireCapability:
    def test_allows(self, manager):
        require_capability(manager, Capability.MANAGE_PROJECT_INVENTORY)

    @pytest.mark.parametrize(
        "capability",
        [Capability.MANAGE_WAREHOUSE, Capability.MANAGE_PROJECTS],
    )
    def test_manager_denied_admin_operations(self, manager, capability):
        with pytest.raises(AuthorizationError) as exc_info:
            require_capability(manager, capability)
        assert exc_info.value.details["role"] == "project_manager"

    def test_user_cannot_move_stock(self, viewer):
        assert not has_capability(viewer, Capability.MANAGE_PROJECT_INVENTORY)
        with pytest.raises(AuthorizationError):
            require_capability(viewer, Capability.MANAGE_PROJECT_INVENTORY)

    def test_unknown_role_denied(self):
        actor = ActionBy(user_id="u9", name="Guest", role="guest")
        with pytest.raises(AuthorizationError):
            require_capability(actor, Capability.MANAGE_PROJECT_INVENTORY)
