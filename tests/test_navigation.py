# ================================
# NAVIGATION & MENU TESTS (tests/test_navigation.py)
# ================================

from fastapi import APIRouter

from resource_admin.models import MenuGroup, MenuItem
from resource_admin.resources import Resource
from resource_admin.services.menu_builder import MenuBuilder
from resource_admin.services.navigation_service import NavigationService
from tests.conftest import bearer, make_user
from tests.sample_app import AuthorResource, PostResource


class TestNavigationService:

    def test_anonymous_gets_nothing(self, app, settings):
        assert NavigationService.get(None, [PostResource], app, settings) == []

    def test_permission_filters_resources(self, app, settings, editor):
        groups = NavigationService.get(editor, [PostResource, AuthorResource], app, settings)

        assert groups == [{
            "label": "Content",
            "items": [{
                "name": "posts",
                "label": "Posts",
                "url": "/admin/posts",
                "icon": "heroicon-o-document-text",
                "group": "Content",
                "sort": 1,
            }],
        }]

    def test_groups_sorted_by_first_item(self, app, settings, db):
        user = make_user(db, "admin@example.com", permissions=["view_any_post", "view_any_author"])
        groups = NavigationService.get(user, [AuthorResource, PostResource], app, settings)

        assert [group["label"] for group in groups] == ["Content", "People"]
        assert groups[1]["items"][0]["label"] == "Authors"

    def test_resources_without_route_or_model_skipped(self, app, settings, editor):
        class Orphan(Resource):
            slug = "orphans"

        class Unrouted(PostResource):
            slug = "unrouted-posts"

        assert NavigationService.get(editor, [Orphan, Unrouted], app, settings) == []

    def test_duplicate_slugs_listed_once(self, app, settings, editor):
        groups = NavigationService.get(editor, [PostResource, PostResource], app, settings)

        assert len(groups[0]["items"]) == 1

    def test_customer_principals_get_nothing(self, app, settings, editor):
        customer_settings = settings.model_copy(update={"CUSTOMER_MODEL": "resource_admin.models.user.User"})

        assert NavigationService.get(editor, [PostResource], app, customer_settings) == []


class TestNavigationAPI:

    def test_navigation_endpoint(self, client, auth_headers):
        response = client.get("/api/navigation", headers=auth_headers)

        assert response.status_code == 200
        navigation = response.json()["navigation"]
        assert [item["name"] for group in navigation for item in group["items"]] == ["posts"]

    def test_navigation_without_token(self, client):
        assert client.get("/api/navigation").json() == {"navigation": []}

    def test_external_resources_listed_when_routed(self, app, client, db, settings):
        app.state.external_registry.register_module("tests.external_resources")

        # Routes served by another admin, registered on the same app
        external = APIRouter()
        external.add_api_route("/external/authors", lambda: {}, name="admin.external-authors.index")
        app.include_router(external)

        user = make_user(db, "external@example.com", permissions=["view_any_author"])
        navigation = client.get("/api/navigation", headers=bearer(user, settings)).json()["navigation"]

        labels = {group["label"]: [item["name"] for item in group["items"]] for group in navigation}
        assert labels == {"People": ["authors"], "External": ["external-authors"]}


class TestMenuBuilder:

    def seed_menu(self, db):
        group = MenuGroup(key="main", label="Main", sort_order=1)
        hidden_group = MenuGroup(key="legacy", label="Legacy", sort_order=0, is_active=False)

        posts = MenuItem(key="posts", label="Posts", route="admin.posts.index",
                         permission_name="view_any_post", sort_order=2, menu_group=group)
        settings_item = MenuItem(key="settings", label="Settings", url="/settings",
                                 permission_name="manage_settings", sort_order=3, menu_group=group)
        help_item = MenuItem(key="help", label="Help", url="/help", sort_order=1, menu_group=group)
        duplicate = MenuItem(key="help", label="Help again", url="/help2", sort_order=4, menu_group=group)
        inactive = MenuItem(key="old", label="Old", url="/old", sort_order=5, is_active=False, menu_group=group)

        level2 = MenuItem(key="drafts", label="Drafts", url="/drafts", sort_order=1,
                          menu_group=group, parent=posts)
        level3 = MenuItem(key="mine", label="Mine", url="/drafts/mine", sort_order=1,
                          menu_group=group, parent=level2)
        MenuItem(key="deep", label="Deep", url="/too/deep", sort_order=1, menu_group=group, parent=level3)

        MenuItem(key="legacy-home", label="Home", url="/", menu_group=hidden_group)

        db.add_all([group, hidden_group, settings_item, help_item, duplicate, inactive])
        db.commit()

    def test_menu_respects_permissions(self, db, app, settings, editor):
        self.seed_menu(db)
        menu = MenuBuilder(db, app, settings).build(editor)

        assert [group["key"] for group in menu] == ["main"]
        assert [item["key"] for item in menu[0]["items"]] == ["help", "posts"]

    def test_permissionless_items_hidden_when_disabled(self, db, app, settings, editor):
        self.seed_menu(db)
        strict = settings.model_copy(update={"MENU_SHOW_ITEMS_WITHOUT_PERMISSION": False})
        menu = MenuBuilder(db, app, strict).build(editor)

        assert [item["key"] for item in menu[0]["items"]] == ["posts"]
        assert menu[0]["items"][0]["children"] == []

    def test_route_resolves_url_and_nesting_stops_at_three_levels(self, db, app, settings, editor):
        self.seed_menu(db)
        menu = MenuBuilder(db, app, settings).build(editor)
        posts = menu[0]["items"][1]

        assert posts["url"] == "/admin/posts"
        drafts = posts["children"][0]
        mine = drafts["children"][0]
        assert mine["key"] == "mine"
        assert "children" not in mine

    def test_anonymous_menu_is_empty(self, db, app, settings):
        self.seed_menu(db)

        assert MenuBuilder(db, app, settings).build(None) == []

    def test_menu_endpoint(self, client, db, auth_headers):
        self.seed_menu(db)
        response = client.get("/api/menu", headers=auth_headers)

        assert response.status_code == 200
        assert [item["key"] for item in response.json()["menu"][0]["items"]] == ["help", "posts"]
