# ================================
# CSV EXPORT SERVICE (services/export_service.py)
# ================================

"""
CSV export of a resource's filtered index query.

Rows are streamed in chunks on a session of their own, since the request
session is closed before a streaming body is consumed.
"""

from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterator, List
import csv
import io
import json
import logging

from sqlalchemy.orm import sessionmaker

from resource_admin.core.database import session_scope
from resource_admin.services.resource_query import ResourceQuery
from resource_admin.services.serialization import get_value, serialize_record

logger = logging.getLogger(__name__)

UTF8_BOM = "\ufeff"


def _parse_temporal(value: Any) -> Any:
    if isinstance(value, (datetime, date, time)):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            return None
    return None


def format_date(value: Any, column: Dict[str, Any]) -> str:
    if not value:
        return ""
    parsed = _parse_temporal(value)
    if parsed is None:
        return str(value)

    column_format = column.get("format", "date")
    if column_format == "datetime":
        if isinstance(parsed, datetime):
            return parsed.strftime("%Y-%m-%d %H:%M:%S")
        if isinstance(parsed, date):
            return parsed.strftime("%Y-%m-%d 00:00:00")
    if column_format == "time":
        if isinstance(parsed, (datetime, time)):
            return parsed.strftime("%H:%M:%S")
        return ""
    if isinstance(parsed, time):
        return parsed.strftime("%H:%M:%S")
    return parsed.strftime("%Y-%m-%d")


def format_money(value: Any, column: Dict[str, Any]) -> str:
    decimals = column.get("decimals", 2)
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return ""
    return f"{amount:.{decimals}f}"


def format_boolean(value: Any, column: Dict[str, Any]) -> str:
    return column.get("trueLabel", "Yes") if value else column.get("falseLabel", "No")


def _label_of(item: Any) -> str:
    if isinstance(item, dict):
        for key in ("name", "title", "id"):
            if item.get(key) is not None:
                return str(item[key])
        return json.dumps(item, default=str)
    return str(item)


def format_value(value: Any, column: Dict[str, Any]) -> Any:
    """Cell text for one column value"""
    if value is None:
        return ""

    if isinstance(value, dict):
        return _label_of(value) if value else ""

    if isinstance(value, (list, tuple)):
        return ", ".join(label for label in (_label_of(item) for item in value) if label)

    column_type = column.get("type", "text")
    if column_type == "date":
        return format_date(value, column)
    if column_type == "money":
        return format_money(value, column)
    if column_type == "boolean":
        return format_boolean(value, column)
    return str(value)


def build_row(record: Any, columns: List[Dict[str, Any]]) -> List[Any]:
    data = serialize_record(record)
    row = []
    for column in columns:
        key = column.get("key")
        row.append(format_value(get_value(data, key), column) if key else "")
    return row


def header_row(columns: List[Dict[str, Any]]) -> List[str]:
    return [column.get("title") or column.get("key") or "Unknown" for column in columns]


def stream_csv(
    query: ResourceQuery,
    columns: List[Dict[str, Any]],
    session_factory: sessionmaker,
    chunk_size: int,
) -> Iterator[str]:
    """Yield CSV text: BOM and header first, then one chunk of rows at a time"""
    buffer = io.StringIO()
    writer = csv.writer(buffer)

    def drain() -> str:
        text = buffer.getvalue()
        buffer.seek(0)
        buffer.truncate(0)
        return text

    writer.writerow(header_row(columns))
    yield UTF8_BOM + drain()

    processed = 0
    with session_scope(session_factory) as db:
        records = query.build().with_session(db).yield_per(chunk_size)
        for record in records:
            try:
                writer.writerow(build_row(record, columns))
                processed += 1
            except Exception as e:
                logger.error(
                    f"Error streaming record to CSV: {e}",
                    extra={"record_id": str(getattr(record, "id", "unknown")), "processed": processed},
                )
                continue

            if processed % chunk_size == 0:
                yield drain()

    remaining = drain()
    if remaining:
        yield remaining

    logger.info(f"CSV export finished: {processed} rows")
