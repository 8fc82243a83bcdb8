# ================================
# RECORD SERIALIZATION (services/serialization.py)
# ================================

from typing import Any, Dict
from sqlalchemy import inspect as sa_inspect

from resource_admin.utils.strings import snake_case


def serialize_record(instance: Any, include_relations: bool = True) -> Dict[str, Any]:
    """
    Flatten an ORM instance into a dict.

    Column attributes always; relationships only when already loaded, keyed by
    their snake_case name and serialized one level deep.
    """
    if instance is None:
        return None

    state = sa_inspect(instance)
    mapper = state.mapper
    data: Dict[str, Any] = {
        attr.key: getattr(instance, attr.key) for attr in mapper.column_attrs
    }

    if not include_relations:
        return data

    for relationship in mapper.relationships:
        if relationship.key in state.unloaded:
            continue
        value = getattr(instance, relationship.key)
        key = snake_case(relationship.key)
        if value is None:
            data[key] = None
        elif relationship.uselist:
            data[key] = [serialize_record(item, include_relations=False) for item in value]
        else:
            data[key] = serialize_record(value, include_relations=False)

    return data


def get_value(data: Any, key: str) -> Any:
    """Dot-notation lookup through serialized dicts ("author.name")"""
    value = data
    for part in key.split("."):
        if value is None:
            return None
        if isinstance(value, dict):
            value = value.get(part)
        else:
            value = getattr(value, part, None)
    return value
