# ================================
# RESOURCE INDEX TESTS (tests/test_resource_index.py)
# ================================

import pytest


def index_props(client, params=None, headers=None):
    response = client.get("/admin/posts", params=params, headers=headers)
    assert response.status_code == 200
    return response.json()["props"]


def titles(props):
    return sorted(row["title"] for row in props["data"]["data"])


class TestIndexPage:
    """Inertia page object and its props"""

    def test_page_object(self, client, posts):
        response = client.get("/admin/posts")

        assert response.status_code == 200
        assert response.headers["X-Inertia"] == "true"
        page = response.json()
        assert page["component"] == "Resources/Index"
        assert page["url"] == "/admin/posts"

    def test_props_keys(self, client, posts):
        props = index_props(client)

        for key in ("data", "columns", "allColumns", "filters", "customFilters", "filterValues",
                    "actions", "bulkActions", "presetViews", "activePresets", "resourceSlug"):
            assert key in props
        assert props["resourceSlug"] == "posts"
        assert props["title"] == "Posts"
        assert "rawSql" not in props

    def test_soft_deleted_rows_hidden_by_default(self, client, posts):
        props = index_props(client)

        assert props["data"]["total"] == 4
        assert "Epsilon" not in titles(props)

    def test_relationship_values_serialized(self, client, posts):
        props = index_props(client, {"search": "", "sort_column": "title"})
        alpha = next(row for row in props["data"]["data"] if row["title"] == "Alpha")

        assert alpha["author"]["name"] == "Ada Lovelace"

    def test_paginator_payload(self, client, posts, app):
        app.state.settings.PER_PAGE = 3
        props = index_props(client, {"page": 2})
        data = props["data"]

        assert data["current_page"] == 2
        assert data["last_page"] == 2
        assert data["per_page"] == 3
        assert data["from"] == 4
        assert data["to"] == 4
        assert data["next_page_url"] is None
        assert "page=1" in data["prev_page_url"]
        assert data["links"][0]["label"] == "&laquo; Previous"
        assert data["links"][-1]["label"] == "Next &raquo;"
        assert [link["label"] for link in data["links"][1:-1]] == ["1", "2"]


class TestFilters:
    """Equality default, transforms and the trashed scope"""

    def test_equality_filter(self, client, posts):
        props = index_props(client, {"category": "news"})

        assert titles(props) == ["Alpha", "Gamma"]
        assert props["filterValues"] == {"category": "news"}

    def test_array_filter_matches_any_value(self, client, posts):
        props = index_props(client, [("category[]", "news")])

        assert titles(props) == ["Alpha", "Gamma"]
        assert props["filterValues"] == {"category": ["news"]}

        props = index_props(client, [("category[]", "news"), ("category[]", "tech")])

        assert props["data"]["total"] == 4

    def test_blank_filter_ignored(self, client, posts):
        props = index_props(client, {"category": ""})

        assert props["data"]["total"] == 4
        assert props["filterValues"] == {}

    def test_query_callback_replaces_equality(self, client, posts):
        props = index_props(client, {"min_amount": "25"})

        assert titles(props) == ["Delta", "Gamma"]

    @pytest.mark.parametrize("value, expected", [
        ("", 4),
        ("with", 5),
        ("only", 1),
    ])
    def test_trashed_filter(self, client, posts, value, expected):
        props = index_props(client, {"trashed": value})

        assert props["data"]["total"] == expected

    def test_only_trashed_returns_deleted_rows(self, client, posts):
        props = index_props(client, {"trashed": "only"})

        assert titles(props) == ["Epsilon"]

    def test_custom_filter_hydrated_but_not_applied(self, client, posts):
        props = index_props(client, {"amount_from": "15"})

        assert props["data"]["total"] == 4
        custom = props["customFilters"][0]
        assert custom["name"] == "amount_range"
        assert custom["values"] == {"amount_from": "15", "amount_to": None}
        assert props["filterValues"]["amount_from"] == "15"
        assert "amount_to" not in props["filterValues"]


class TestPresetViews:
    """Single preset composition and the multi-preset id union"""

    def test_single_preset(self, client, posts):
        props = index_props(client, {"preset": "published"})

        assert titles(props) == ["Alpha", "Beta"]
        assert props["activePresets"] == ["published"]

    def test_union_of_disjoint_presets(self, client, posts):
        props = index_props(client, [("presets[]", "published"), ("presets[]", "drafts")])

        assert titles(props) == ["Alpha", "Beta", "Delta", "Gamma"]
        assert props["activePresets"] == ["published", "drafts"]

    def test_union_independent_of_order(self, client, posts):
        forward = index_props(client, [("presets[]", "published"), ("presets[]", "drafts")])
        backward = index_props(client, [("presets[]", "drafts"), ("presets[]", "published")])

        assert titles(forward) == titles(backward)

    def test_filters_apply_before_presets(self, client, posts):
        props = index_props(
            client,
            [("category", "news"), ("presets[]", "published"), ("presets[]", "drafts")]
        )

        assert titles(props) == ["Alpha", "Gamma"]

    def test_empty_union_yields_empty_page(self, client, posts):
        props = index_props(
            client,
            [("category", "sports"), ("presets[]", "published"), ("presets[]", "drafts")]
        )

        assert props["data"]["total"] == 0
        assert props["data"]["data"] == []

    def test_preset_without_callback_keeps_filtered_set(self, client, posts):
        props = index_props(client, [("presets[]", "everything"), ("presets[]", "archived")])

        assert props["data"]["total"] == 4

    def test_legacy_and_array_params_match(self, client, posts):
        legacy = index_props(client, {"preset": "drafts"})
        array = index_props(client, [("presets[]", "drafts")])

        assert legacy["activePresets"] == array["activePresets"] == ["drafts"]
        assert titles(legacy) == titles(array)

    def test_unknown_preset_dropped(self, client, posts):
        props = index_props(client, [("presets[]", "bogus"), ("presets[]", "published")])

        assert props["activePresets"] == ["published"]
        assert titles(props) == ["Alpha", "Beta"]

    def test_unknown_legacy_preset_ignored(self, client, posts):
        props = index_props(client, {"preset": "bogus"})

        assert props["activePresets"] == []
        assert props["data"]["total"] == 4

    def test_active_presets_in_filter_values(self, client, posts):
        props = index_props(client, {"preset": "drafts"})

        assert props["filterValues"]["presets"] == ["drafts"]

    def test_preset_groups(self, client, posts):
        groups = index_props(client)["presetViews"]

        assert [group["name"] for group in groups] == ["status", "ungrouped"]
        assert [preset["key"] for preset in groups[0]["presets"]] == ["published", "drafts"]
        assert groups[-1]["label"] == "Other"


class TestSortAndSearch:

    def test_sort_descending(self, client, posts):
        props = index_props(client, {"sort_column": "title", "sort_direction": "desc"})

        assert [row["title"] for row in props["data"]["data"]] == ["Gamma", "Delta", "Beta", "Alpha"]

    def test_sort_on_unknown_column_ignored(self, client, posts):
        props = index_props(client, {"sort_column": "nope"})

        assert props["data"]["total"] == 4

    def test_search_is_noop_without_builder(self, client, posts):
        props = index_props(client, {"search": "Alpha"})

        assert props["data"]["total"] == 4

    def test_column_search_builder(self, client, posts, app):
        from resource_admin.services.search import ColumnSearchQueryBuilder

        app.state.search_builder = ColumnSearchQueryBuilder()
        props = index_props(client, {"search": "alp"})

        assert titles(props) == ["Alpha"]

    def test_raw_sql_in_debug(self, client, posts, app):
        app.state.settings.DEBUG = True
        props = index_props(client, {"category": "news"})

        assert "posts" in props["rawSql"]
