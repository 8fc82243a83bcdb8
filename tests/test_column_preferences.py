# ================================
# COLUMN PREFERENCE TESTS (tests/test_column_preferences.py)
# ================================

from resource_admin.resources.resource import apply_column_preferences
from resource_admin.services.column_preference_service import SQLAlchemyColumnPreferenceRepository
from resource_admin.models import UserColumnPreference
from tests.sample_app import PostResource

ALL_KEYS = ["title", "status", "category", "amount", "is_featured", "published_at", "author.name"]


def column_keys(columns):
    return [column["key"] for column in columns]


class TestApplyColumnPreferences:

    def columns(self, *keys):
        return [{"key": key, "title": key.title()} for key in keys]

    def test_no_preferences_keeps_declared_order(self):
        columns = self.columns("c1", "c2", "c3")

        assert apply_column_preferences(columns, None) == columns

    def test_order_then_remaining_then_hidden(self):
        columns = self.columns("c1", "c2", "c3", "c4")
        result = apply_column_preferences(columns, {"order": ["c2", "c1"], "hidden": ["c3"]})

        assert column_keys(result) == ["c2", "c1", "c4"]

    def test_hidden_wins_over_order(self):
        columns = self.columns("c1", "c2")
        result = apply_column_preferences(columns, {"order": ["c2", "c1"], "hidden": ["c2"]})

        assert column_keys(result) == ["c1"]

    def test_unknown_keys_in_order_ignored(self):
        columns = self.columns("c1", "c2")
        result = apply_column_preferences(columns, {"order": ["zz", "c2"], "hidden": []})

        assert column_keys(result) == ["c2", "c1"]

    def test_columns_without_key_always_kept(self):
        columns = self.columns("c1") + [{"title": "Actions"}]
        result = apply_column_preferences(columns, {"order": ["c1"], "hidden": ["c1"]})

        assert result == [{"title": "Actions"}]


class TestRepository:

    def test_round_trip(self, db, editor):
        repository = SQLAlchemyColumnPreferenceRepository(db, UserColumnPreference)

        assert repository.get_preferences_for_resource(editor, "posts") is None

        repository.save_preferences_for_resource(editor, "posts", {"order": ["status"], "hidden": []})
        repository.save_preferences_for_resource(editor, "posts", {"order": ["title"], "hidden": ["amount"]})

        assert repository.get_preferences_for_resource(editor, "posts") == {
            "order": ["title"], "hidden": ["amount"]
        }
        assert db.query(UserColumnPreference).count() == 1

    def test_resource_columns_personalized(self, db, editor):
        repository = SQLAlchemyColumnPreferenceRepository(db, UserColumnPreference)
        repository.save_preferences_for_resource(
            editor, "posts", {"order": ["status", "title"], "hidden": ["category"]}
        )

        personalized = PostResource.get_columns(editor, repository)
        anonymous = PostResource.get_columns(None, repository)

        assert column_keys(personalized) == [
            "status", "title", "amount", "is_featured", "published_at", "author.name"
        ]
        assert column_keys(anonymous) == ALL_KEYS


class TestColumnPreferenceAPI:

    URL = "/api/column-preferences/posts"

    def test_requires_authentication(self, client):
        assert client.get(self.URL).status_code == 401
        assert client.post(self.URL, json={"order": [], "hidden": []}).status_code == 401
        assert client.delete(self.URL).status_code == 401

    def test_empty_preferences(self, client, auth_headers):
        response = client.get(self.URL, headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"preferences": None}

    def test_save_and_reset(self, client, auth_headers):
        payload = {"order": ["status", "title"], "hidden": ["category"]}

        response = client.post(self.URL, json=payload, headers=auth_headers)
        assert response.status_code == 200
        assert response.json() == {"preferences": payload}

        assert client.get(self.URL, headers=auth_headers).json() == {"preferences": payload}

        response = client.delete(self.URL, headers=auth_headers)
        assert response.json() == {"message": "Preferences reset successfully"}
        assert client.get(self.URL, headers=auth_headers).json() == {"preferences": None}

    def test_payload_requires_order_and_hidden(self, client, auth_headers):
        response = client.post(self.URL, json={"order": ["title"]}, headers=auth_headers)

        assert response.status_code == 422
        assert "hidden" in response.json()["field_errors"]

    def test_index_columns_follow_preferences(self, client, posts, auth_headers):
        client.post(self.URL, json={"order": ["status", "title"], "hidden": ["category"]}, headers=auth_headers)

        props = client.get("/admin/posts", headers=auth_headers).json()["props"]

        assert column_keys(props["columns"])[:2] == ["status", "title"]
        assert "category" not in column_keys(props["columns"])
        assert column_keys(props["allColumns"]) == ALL_KEYS

    def test_not_configured(self, client, auth_headers, app):
        app.state.settings.COLUMN_PREFERENCE_MODEL = None
        response = client.get(self.URL, headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["detail"] == "Column preferences not configured"
