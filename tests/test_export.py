# ================================
# CSV EXPORT TESTS (tests/test_export.py)
# ================================

from datetime import date, datetime
import csv
import io

import pytest
from sqlalchemy.orm import joinedload

from resource_admin.services.export_service import build_row, format_value, header_row
from tests.sample_app import Post


def read_csv(response):
    return list(csv.reader(io.StringIO(response.content.decode("utf-8-sig"))))


class TestFormatValue:

    @pytest.mark.parametrize("value, column, expected", [
        (None, {"type": "text"}, ""),
        ("plain", {"type": "text"}, "plain"),
        (datetime(2024, 3, 1, 9, 30), {"type": "date", "format": "datetime"}, "2024-03-01 09:30:00"),
        (datetime(2024, 3, 1, 9, 30), {"type": "date"}, "2024-03-01"),
        (date(2024, 3, 1), {"type": "date", "format": "time"}, ""),
        ("2024-03-01T09:30:00", {"type": "date", "format": "time"}, "09:30:00"),
        ("not a date", {"type": "date"}, "not a date"),
        (12.5, {"type": "money", "decimals": 2}, "12.50"),
        ("abc", {"type": "money"}, ""),
        (True, {"type": "boolean", "trueLabel": "Live"}, "Live"),
        (False, {"type": "boolean"}, "No"),
        ({"name": "Ada"}, {"type": "text"}, "Ada"),
        ([{"title": "a"}, {"id": 2}], {"type": "array"}, "a, 2"),
    ])
    def test_cells(self, value, column, expected):
        assert format_value(value, column) == expected

    def test_header_falls_back_to_key(self):
        assert header_row([{"title": "Title"}, {"key": "status"}, {}]) == ["Title", "status", "Unknown"]

    def test_row_follows_dotted_keys(self, db, posts):
        alpha = (
            db.query(Post).options(joinedload(Post.author))
            .filter(Post.title == "Alpha").populate_existing().one()
        )
        columns = [{"key": "title", "type": "text"}, {"key": "author.name", "type": "text"}]

        assert build_row(alpha, columns) == ["Alpha", "Ada Lovelace"]


class TestExportEndpoint:

    def test_export_streams_filtered_rows(self, client, posts):
        response = client.get("/admin/posts/export", params={"category": "news", "sort_column": "title"})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert "attachment; filename=\"Posts_" in response.headers["content-disposition"]
        assert response.content.startswith(b"\xef\xbb\xbf")

        rows = read_csv(response)
        assert rows[0] == ["Title", "Status", "Category", "Amount", "Featured", "Published", "Author"]
        assert rows[1] == ["Alpha", "published", "news", "10.00", "No", "2024-03-01 09:30:00", "Ada Lovelace"]
        assert rows[2] == ["Gamma", "draft", "news", "30.00", "No", "", ""]
        assert len(rows) == 3

    def test_export_respects_presets(self, client, posts):
        response = client.get("/admin/posts/export", params=[("presets[]", "drafts")])

        titles = sorted(row[0] for row in read_csv(response)[1:])
        assert titles == ["Delta", "Gamma"]

    def test_export_skips_unsortable_sort_column(self, client, posts):
        response = client.get("/admin/posts/export", params={"sort_column": "author.name"})

        assert response.status_code == 200
        assert len(read_csv(response)) == 5

    def test_export_uses_personalized_columns(self, client, posts, auth_headers):
        client.post(
            "/api/column-preferences/posts",
            json={"order": ["status", "title"], "hidden": ["category", "amount", "is_featured",
                                                          "published_at", "author.name"]},
            headers=auth_headers,
        )

        rows = read_csv(client.get("/admin/posts/export", headers=auth_headers))

        assert rows[0] == ["Status", "Title"]
