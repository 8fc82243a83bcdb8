# ================================
# APPLICATION & AUTH TESTS (tests/test_app.py)
# ================================

from datetime import timedelta

from jose import jwt
import pytest

from resource_admin.core.security import create_access_token, verify_token
from resource_admin.main import create_app, load_external_resources
from resource_admin.resources.registry import ResourceRegistry
from resource_admin.services.navigation_service import route_url
from tests.conftest import bearer, make_user
from tests.external_resources import ExternalAuthorResource
from tests.sample_app import Author

PREFERENCES_URL = "/api/column-preferences/posts"


class TestApplication:

    def test_health(self, client, resource_registry):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["resources"] == len(resource_registry)

    def test_request_id_header(self, client):
        response = client.get("/admin/posts")

        assert response.headers["X-Request-ID"]
        assert "X-Process-Time" in response.headers

    @pytest.mark.parametrize("action, params, path", [
        ("index", {}, "/admin/posts"),
        ("create", {}, "/admin/posts/create"),
        ("store", {}, "/admin/posts"),
        ("export", {}, "/admin/posts/export"),
        ("bulk_action", {}, "/admin/posts/bulk-action"),
        ("show", {"record_id": "1"}, "/admin/posts/1"),
        ("edit", {"record_id": "1"}, "/admin/posts/1/edit"),
        ("update", {"record_id": "1"}, "/admin/posts/1"),
        ("destroy", {"record_id": "1"}, "/admin/posts/1"),
    ])
    def test_named_routes(self, app, action, params, path):
        assert app.url_path_for(f"admin.posts.{action}", **params) == path

    def test_included_routes_resolve_by_name(self, app):
        assert route_url(app, "admin.authors.index") == "/admin/authors"
        assert route_url(app, "admin.missing.index") is None

    def test_custom_route_prefix(self, settings, session_factory, resource_registry):
        app = create_app(
            settings=settings.model_copy(update={"ROUTE_PREFIX": "backoffice"}),
            session_factory=session_factory,
            registry=resource_registry,
        )

        assert app.url_path_for("backoffice.posts.index") == "/backoffice/posts"

    def test_external_resources_get_their_own_registry(self):
        external = load_external_resources(["tests.external_resources"])

        assert external.get("external-authors") is ExternalAuthorResource
        assert "authors" not in external

    def test_external_resources_survive_repeated_app_creation(self, settings, session_factory):
        external_settings = settings.model_copy(
            update={"EXTERNAL_RESOURCE_MODULES": ["tests.external_resources"]}
        )

        for _ in range(2):
            app = create_app(settings=external_settings, session_factory=session_factory,
                             registry=ResourceRegistry())
            assert "external-authors" in app.state.external_registry
            assert len(app.state.registry) == 0

    def test_external_module_without_resources_is_skipped(self, caplog):
        external = load_external_resources(["tests.sample_app", "tests.no_such_module"])

        assert len(external) == 0
        assert "declares no RESOURCES" in caplog.text
        assert "Could not import resource module 'tests.no_such_module'" in caplog.text

    def test_error_payload_carries_request_id(self, client):
        response = client.get("/admin/posts/not-a-uuid")

        body = response.json()
        assert body["request_id"] == response.headers["X-Request-ID"]


class TestTokens:

    def test_round_trip(self, settings):
        token = create_access_token({"sub": "abc"}, settings)

        assert verify_token(token, settings)["sub"] == "abc"

    def test_expired_token_rejected(self, settings):
        token = create_access_token({"sub": "abc"}, settings, expires_delta=timedelta(minutes=-1))

        assert verify_token(token, settings) is None

    def test_wrong_token_type_rejected(self, settings):
        token = jwt.encode({"sub": "abc", "type": "refresh"}, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

        assert verify_token(token, settings) is None


class TestPrincipalResolution:

    def test_garbage_token_is_anonymous(self, client):
        response = client.get(PREFERENCES_URL, headers={"Authorization": "Bearer garbage"})

        assert response.status_code == 401

    def test_inactive_user_rejected(self, client, db, settings):
        user = make_user(db, "gone@example.com")
        user.is_active = False
        db.commit()

        assert client.get(PREFERENCES_URL, headers=bearer(user, settings)).status_code == 401

    def test_customer_guard_ignored_without_customers(self, client, db, settings):
        author = Author(name="Customer")
        db.add(author)
        db.commit()
        token = create_access_token({"sub": str(author.id), "guard": "customer"}, settings)

        response = client.get(PREFERENCES_URL, headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

    def test_customer_guard_resolves_customer_model(self, client, app, db, settings):
        app.state.settings.USE_CUSTOMERS = True
        app.state.settings.CUSTOMER_MODEL = "tests.sample_app.Author"
        author = Author(name="Customer")
        db.add(author)
        db.commit()
        headers = {"Authorization": f"Bearer {create_access_token({'sub': str(author.id), 'guard': 'customer'}, settings)}"}

        assert client.get(PREFERENCES_URL, headers=headers).status_code == 200
        assert client.get("/api/navigation", headers=headers).json() == {"navigation": []}
