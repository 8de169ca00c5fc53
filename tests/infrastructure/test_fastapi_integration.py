"""End-to-end tests for the FastAPI dependencies and exception handlers."""

import asyncio

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from tenant_gate.config.constants import AuthMethod, SystemRole
from tenant_gate.core.exceptions import InvalidPermissionFormat
from tenant_gate.core.value_objects import UserId
from tenant_gate.features.modules.builtin import BUILTIN_MODULES
from tenant_gate.features.modules.services import ModuleRegistry
from tenant_gate.infrastructure.fastapi import (
    create_tenant_gate,
    get_bound_session,
    get_navigation,
    install_tenant_gate,
    require_any_permission,
    require_module,
    require_permission,
)


@pytest.fixture
def gate(session_store, role_repo, membership_repo, tenant_directory, enablement_repo, audit_logger, settings):
    return create_tenant_gate(
        registry=ModuleRegistry(BUILTIN_MODULES),
        sessions=session_store,
        roles=role_repo,
        memberships=membership_repo,
        tenants=tenant_directory,
        enablements=enablement_repo,
        audit=audit_logger,
        settings=settings,
    )


@pytest.fixture
def app(gate):
    app = FastAPI()
    install_tenant_gate(app, gate)

    @app.get("/me")
    async def me(bound=Depends(get_bound_session)):
        return {"user": bound.user_id.value, "tenant": bound.tenant_id.value if bound.tenant_id else None}

    @app.get("/{tenant}/notes")
    async def list_notes(
        bound=Depends(require_permission("notes:notes:read")),
        _=Depends(require_module("notes")),
    ):
        return {"tenant": bound.tenant_id.value}

    @app.get("/{tenant}/catalog")
    async def list_products(_=Depends(require_module("catalog"))):
        return {"products": []}

    @app.get("/{tenant}/settings")
    async def tenant_settings(_=Depends(require_permission("core:settings:manage"))):
        return {"ok": True}

    @app.get("/{tenant}/people")
    async def people(_=Depends(require_any_permission(["core:users:read", "notes:notes:read"]))):
        return {"ok": True}

    @app.get("/{tenant}/nav")
    async def nav(items=Depends(get_navigation)):
        return {"labels": [item.label for item in items]}

    return app


@pytest.fixture
def viewer_token(gate, member_of, system_roles, user_id, tenant_id):
    """A viewer of acme with the notes module enabled, holding a session bound to acme."""
    member_of(user_id, tenant_id, system_roles[SystemRole.VIEWER])

    async def _setup():
        await gate.entitlements.enable(tenant_id, "notes")
        issued = await gate.session_service.issue(user_id, tenant_id, auth_method=AuthMethod.PIN)
        return issued.token

    return asyncio.run(_setup())


def _client(app, token=None):
    cookies = {"session_token": token} if token else None
    return TestClient(app, cookies=cookies, follow_redirects=False)


class TestTenantBinding:
    """Test tenant binding at the request boundary."""

    def test_bound_tenant_is_served(self, app, viewer_token):
        """Test a request under the session's own tenant."""
        response = _client(app, viewer_token).get("/acme/notes")

        assert response.status_code == 200
        assert response.json() == {"tenant": "tenant-acme"}

    def test_foreign_tenant_redirects_home(self, app, viewer_token):
        """Test that another tenant's route redirects to the bound tenant."""
        response = _client(app, viewer_token).get("/globex/notes")

        assert response.status_code == 302
        assert response.headers["location"] == "/acme"

    def test_unknown_tenant_redirects_home(self, app, viewer_token):
        """Test that an unknown slug is treated like a foreign tenant."""
        response = _client(app, viewer_token).get("/nowhere/notes")

        assert response.status_code == 302
        assert response.headers["location"] == "/acme"

    def test_missing_cookie_redirects_to_login(self, app):
        """Test that anonymous requests are sent to login."""
        response = _client(app).get("/acme/notes")

        assert response.status_code == 302
        assert response.headers["location"] == "/login"

    def test_unknown_token_redirects_to_login(self, app, viewer_token):
        """Test that a forged token is sent to login."""
        response = _client(app, "f" * 64).get("/acme/notes")

        assert response.status_code == 302
        assert response.headers["location"] == "/login"

    def test_route_without_tenant(self, app, viewer_token):
        """Test resolving a session on a route that asserts no tenant."""
        response = _client(app, viewer_token).get("/me")

        assert response.json() == {"user": "user-alice", "tenant": "tenant-acme"}

    def test_unbound_session_redirects_to_selection(self, app, gate):
        """Test that a tenant route with a tenantless session asks for a tenant."""
        issued = asyncio.run(gate.session_service.issue(UserId("user-bob")))

        response = _client(app, issued.token).get("/acme/notes")

        assert response.status_code == 302
        assert response.headers["location"] == "/select-tenant"


class TestAuthorization:
    """Test permission and module guards."""

    def test_missing_permission_is_forbidden(self, app, viewer_token):
        """Test that a viewer cannot reach settings."""
        response = _client(app, viewer_token).get("/acme/settings")

        assert response.status_code == 403
        error = response.json()["error"]
        assert error["type"] == "PermissionDenied"
        assert error["details"] == {"required": "core:settings:manage"}

    def test_any_permission(self, app, viewer_token):
        """Test that one matching permission is enough."""
        assert _client(app, viewer_token).get("/acme/people").status_code == 200

    def test_module_not_enabled(self, app, viewer_token):
        """Test that a disabled module is forbidden."""
        response = _client(app, viewer_token).get("/acme/catalog")

        assert response.status_code == 403
        assert response.json()["error"]["type"] == "ModuleNotEnabled"

    def test_disabled_module_is_forbidden(self, app, gate, viewer_token, tenant_id):
        """Test that disabling a module closes its routes."""
        asyncio.run(gate.entitlements.disable(tenant_id, "notes"))

        response = _client(app, viewer_token).get("/acme/notes")

        assert response.status_code == 403
        assert response.json()["error"]["details"]["module_id"] == "notes"

    def test_invalid_permission_rejected_at_declaration(self):
        """Test that guards reject malformed permission strings up front."""
        with pytest.raises(InvalidPermissionFormat):
            require_permission("notes::read")


class TestNavigation:
    """Test the navigation dependency."""

    def test_viewer_navigation(self, app, viewer_token):
        """Test that the viewer sees the dashboard and notes only."""
        response = _client(app, viewer_token).get("/acme/nav")

        assert response.status_code == 200
        assert set(response.json()["labels"]) == {"Dashboard", "Notes"}
