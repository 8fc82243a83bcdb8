# ================================
# FIELD VISIBILITY (resources/visibility.py)
# ================================

"""
Server-side evaluation of conditional field visibility.

Mirrors what the form renders so that rules of hidden fields are not
enforced on submit. Precedence: show_when, hide_when, show_when_conditions,
hide_when_conditions; a field with none of them is visible.
"""

from typing import Any, Dict, Iterable, List, Mapping
import logging

from resource_admin.resources.fields import normalize_operator, serialize_field

logger = logging.getLogger(__name__)


def _coerce_pair(left: Any, right: Any):
    """Bring string / number pairs to a common type, as form input arrives as text"""
    if isinstance(left, str) and isinstance(right, (int, float)) and not isinstance(right, bool):
        try:
            return float(left), float(right)
        except ValueError:
            return left, str(right)
    if isinstance(right, str) and isinstance(left, (int, float)) and not isinstance(left, bool):
        try:
            return float(left), float(right)
        except ValueError:
            return str(left), right
    return left, right


def _equals(left: Any, right: Any) -> bool:
    left, right = _coerce_pair(left, right)
    return left == right


def _compare(left: Any, right: Any, operator: str) -> bool:
    left, right = _coerce_pair(left, right)
    try:
        if operator == "greater_than":
            return left > right
        if operator == "less_than":
            return left < right
        if operator == "greater_than_or_equal":
            return left >= right
        return left <= right
    except TypeError:
        return False


def evaluate_condition(field_value: Any, operator: str, target_value: Any) -> bool:
    operator = normalize_operator(operator)

    if operator == "equals":
        return _equals(field_value, target_value)
    if operator == "not_equals":
        return not _equals(field_value, target_value)
    if operator in ("greater_than", "less_than", "greater_than_or_equal", "less_than_or_equal"):
        return _compare(field_value, target_value, operator)

    logger.debug(f"Unknown visibility operator '{operator}', treating as satisfied")
    return True


def _evaluate_compound(compound: Mapping[str, Any], values: Mapping[str, Any]) -> bool:
    results = [
        evaluate_condition(values.get(cond.get("field")), cond.get("operator"), cond.get("value"))
        for cond in compound.get("conditions", [])
    ]
    if compound.get("type") == "AND":
        return all(results)
    return any(results)


def is_field_visible(field: Any, values: Mapping[str, Any]) -> bool:
    """Evaluate a field (object or serialized dict) against current form values"""
    spec = serialize_field(field)

    show_when = spec.get("show_when")
    if show_when:
        return evaluate_condition(
            values.get(show_when.get("field")), show_when.get("operator"), show_when.get("value")
        )

    hide_when = spec.get("hide_when")
    if hide_when:
        return not evaluate_condition(
            values.get(hide_when.get("field")), hide_when.get("operator"), hide_when.get("value")
        )

    show_conditions = spec.get("show_when_conditions")
    if show_conditions and show_conditions.get("conditions"):
        return _evaluate_compound(show_conditions, values)

    hide_conditions = spec.get("hide_when_conditions")
    if hide_conditions and hide_conditions.get("conditions"):
        return not _evaluate_compound(hide_conditions, values)

    return True


def visible_fields(fields: Iterable[Any], values: Mapping[str, Any]) -> List[Dict[str, Any]]:
    return [serialize_field(field) for field in fields if is_field_visible(field, values)]
