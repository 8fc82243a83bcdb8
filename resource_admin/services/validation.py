# ================================
# FORM VALIDATION (services/validation.py)
# ================================

"""
Validation of store / update payloads against field rules.

Rules are Laravel-style strings (``required``, ``max:255``, ``in:a,b``) and are
compiled into a pydantic model per request. Fields hidden by their visibility
conditions are not validated.
"""

from datetime import date
from typing import Any, Dict, List, Literal, Optional, Tuple
import logging

from pydantic import ConfigDict, Field as PydanticField, ValidationError, create_model

from resource_admin.core.exceptions import ValidationFailedError
from resource_admin.resources.fields import serialize_field
from resource_admin.resources.visibility import is_field_visible

logger = logging.getLogger(__name__)

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"

TYPE_RULES = {
    "string": str,
    "integer": int,
    "numeric": float,
    "boolean": bool,
    "array": list,
    "email": str,
    "date": date,
}

DEFAULT_MESSAGES = {
    "required": "The {attribute} field is required.",
    "string": "The {attribute} field must be a string.",
    "integer": "The {attribute} field must be an integer.",
    "numeric": "The {attribute} field must be a number.",
    "boolean": "The {attribute} field must be true or false.",
    "array": "The {attribute} field must be an array.",
    "email": "The {attribute} field must be a valid email address.",
    "date": "The {attribute} field must be a valid date.",
    "in": "The selected {attribute} is invalid.",
}

SIZE_MESSAGES = {
    ("min", "string"): "The {attribute} field must be at least {value} characters.",
    ("min", "numeric"): "The {attribute} field must be at least {value}.",
    ("min", "array"): "The {attribute} field must have at least {value} items.",
    ("max", "string"): "The {attribute} field must not be greater than {value} characters.",
    ("max", "numeric"): "The {attribute} field must not be greater than {value}.",
    ("max", "array"): "The {attribute} field must not have more than {value} items.",
}

# pydantic error type -> rule name
ERROR_RULES = {
    "missing": "required",
    "string_type": "string",
    "int_type": "integer",
    "int_parsing": "integer",
    "int_from_float": "integer",
    "float_type": "numeric",
    "float_parsing": "numeric",
    "bool_type": "boolean",
    "bool_parsing": "boolean",
    "list_type": "array",
    "date_type": "date",
    "date_parsing": "date",
    "date_from_datetime_parsing": "date",
    "date_from_datetime_inexact": "date",
    "string_pattern_mismatch": "email",
    "string_too_short": "min",
    "too_short": "min",
    "greater_than_equal": "min",
    "string_too_long": "max",
    "too_long": "max",
    "less_than_equal": "max",
    "literal_error": "in",
}


class FieldRules:
    """Parsed rule list of one field"""

    def __init__(self, name: str, rules: List[str]):
        self.name = name
        self.required = False
        self.nullable = False
        self.type_rule: Optional[str] = None
        self.minimum: Optional[float] = None
        self.maximum: Optional[float] = None
        self.choices: Optional[List[str]] = None

        for rule in rules:
            rule_name, _, argument = str(rule).partition(":")
            if rule_name == "required":
                self.required = True
            elif rule_name == "nullable":
                self.nullable = True
            elif rule_name in TYPE_RULES:
                if self.type_rule is None or rule_name == "email":
                    self.type_rule = rule_name
            elif rule_name in ("min", "max") and argument:
                try:
                    bound = float(argument)
                except ValueError:
                    logger.debug(f"Ignoring malformed rule '{rule}' on '{name}'")
                    continue
                if rule_name == "min":
                    self.minimum = bound
                else:
                    self.maximum = bound
            elif rule_name == "in":
                self.choices = [choice for choice in argument.split(",") if choice != ""]
            else:
                logger.debug(f"Ignoring unsupported rule '{rule}' on '{name}'")

    @property
    def size_kind(self) -> str:
        if self.type_rule in ("integer", "numeric"):
            return "numeric"
        if self.type_rule == "array":
            return "array"
        return "string"

    def definition(self) -> Tuple[Any, Any]:
        """(annotation, FieldInfo) for create_model"""
        annotation: Any = TYPE_RULES.get(self.type_rule, Any)
        constraints: Dict[str, Any] = {}

        if annotation is Any and (self.minimum is not None or self.maximum is not None):
            annotation = str

        if self.choices:
            if self.type_rule == "integer":
                numeric = tuple(int(c) for c in self.choices if c.lstrip("-").isdigit())
                if numeric:
                    annotation = Literal[numeric]
                else:
                    logger.warning(f"Ignoring 'in' rule on '{self.name}': no integer choices in {self.choices}")
            else:
                annotation = Literal[tuple(self.choices)]

        if self.type_rule == "email":
            constraints["pattern"] = EMAIL_PATTERN

        kind = self.size_kind
        for bound, value in (("min", self.minimum), ("max", self.maximum)):
            if value is None:
                continue
            if kind == "numeric":
                constraints["ge" if bound == "min" else "le"] = value
            elif not self.choices and self.type_rule in (None, "string", "email", "array"):
                constraints["min_length" if bound == "min" else "max_length"] = int(value)

        if not self.required:
            annotation = Optional[annotation]
            return annotation, PydanticField(None, **constraints)
        return annotation, PydanticField(..., **constraints)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "") or value == []


def _message(field: Dict[str, Any], rules: FieldRules, rule: str) -> str:
    custom = field.get("validationMessages") or {}
    for key in (f"{field['name']}.{rule}", rule):
        if key in custom:
            return custom[key]

    attribute = str(field.get("label") or field["name"]).replace("_", " ").lower()
    if rule in ("min", "max"):
        value = rules.minimum if rule == "min" else rules.maximum
        if value is not None and float(value).is_integer():
            value = int(value)
        template = SIZE_MESSAGES[(rule, rules.size_kind)]
        return template.format(attribute=attribute, value=value)

    template = DEFAULT_MESSAGES.get(rule, "The {attribute} field is invalid.")
    return template.format(attribute=attribute)


def validate_payload(fields: List[Any], data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate a submitted payload against form field rules

    Args:
        fields: Field objects or serialized field dicts
        data: Submitted values

    Returns:
        Values of the form fields present in the payload, coerced by their rules

    Raises:
        ValidationFailedError: with messages keyed by field name
    """
    serialized = [serialize_field(field) for field in fields]
    errors: Dict[str, List[str]] = {}
    definitions: Dict[str, Any] = {}
    parsed: Dict[str, Tuple[Dict[str, Any], FieldRules]] = {}
    candidate: Dict[str, Any] = {}

    for field in serialized:
        name = field.get("name")
        if not name or not field.get("rules"):
            continue
        if not is_field_visible(field, data):
            logger.debug(f"Skipping rules of hidden field '{name}'")
            continue

        rules = FieldRules(name, field["rules"])
        value = data.get(name)

        if _is_blank(value):
            if rules.required:
                errors.setdefault(name, []).append(_message(field, rules, "required"))
            continue

        parsed[name] = (field, rules)
        definitions[name] = rules.definition()
        candidate[name] = value

    validated: Dict[str, Any] = {}
    if definitions:
        payload_model = create_model(
            "ResourcePayload",
            __config__=ConfigDict(extra="ignore"),
            **definitions,
        )
        try:
            validated = payload_model.model_validate(candidate).model_dump()
        except ValidationError as e:
            for error in e.errors():
                name = str(error["loc"][0]) if error.get("loc") else None
                if name not in parsed:
                    continue
                field, rules = parsed[name]
                rule = ERROR_RULES.get(error["type"], rules.type_rule or "invalid")
                message = _message(field, rules, rule)
                if message not in errors.get(name, []):
                    errors.setdefault(name, []).append(message)

    if errors:
        raise ValidationFailedError(errors)

    result: Dict[str, Any] = {}
    for field in serialized:
        name = field.get("name")
        if not name or name not in data:
            continue
        value = validated.get(name, data[name])
        if isinstance(value, str) and value == "" and name not in validated:
            value = None
        result[name] = value
    return result
