# ================================
# TABLE FILTERS (resources/filters.py)
# ================================

"""
Table filter declarations.

A filter without a query callback is applied as an equality predicate on the
column named after the filter. A callback receives ``(query, value)`` and its
result replaces the equality predicate entirely.
"""

from typing import Any, Callable, Dict, List, Optional

QueryCallback = Callable[[Any, Any], Any]


class Filter:
    """Common filter envelope"""

    type: str = "select"

    def __init__(self, name: str, label: str):
        self.name = name
        self.label = label
        self._options: Dict[Any, Any] = {}
        self._default: Any = None
        self._query_callback: Optional[QueryCallback] = None

    @classmethod
    def make(cls, name: str, label: str) -> "Filter":
        return cls(name, label)

    def options(self, options: Dict[Any, Any]) -> "Filter":
        self._options = options
        return self

    def default(self, default: Any) -> "Filter":
        self._default = default
        return self

    def query(self, callback: QueryCallback) -> "Filter":
        self._query_callback = callback
        return self

    @property
    def has_query_callback(self) -> bool:
        return self._query_callback is not None

    @property
    def default_value(self) -> Any:
        return self._default

    def apply_query(self, query: Any, value: Any) -> Any:
        """Run the callback; a callback returning None leaves the query unchanged"""
        if self._query_callback is None:
            return query
        result = self._query_callback(query, value)
        return query if result is None else result

    def _extra(self) -> Dict[str, Any]:
        return {}

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "name": self.name,
            "label": self.label,
            "type": self.type,
            "options": self._options,
            "default": self._default,
            "has_query_callback": self.has_query_callback,
        }
        data.update(self._extra())
        return data

    def __repr__(self):
        return f"<{type(self).__name__}(name='{self.name}')>"


class SelectFilter(Filter):
    type = "select"

    def __init__(self, name: str, label: str):
        super().__init__(name, label)
        self._searchable = True

    def searchable(self, searchable: bool = True) -> "SelectFilter":
        self._searchable = searchable
        return self

    def _extra(self) -> Dict[str, Any]:
        return {"searchable": self._searchable}


class BooleanFilter(Filter):
    type = "boolean"

    def __init__(self, name: str, label: str):
        super().__init__(name, label)
        self._true_label = "Yes"
        self._false_label = "No"

    def true_label(self, label: str) -> "BooleanFilter":
        self._true_label = label
        return self

    def false_label(self, label: str) -> "BooleanFilter":
        self._false_label = label
        return self

    def _extra(self) -> Dict[str, Any]:
        return {"true_label": self._true_label, "false_label": self._false_label}


class DateFilter(Filter):
    type = "date"

    MODES = ("between", "before", "after", "on")

    def __init__(self, name: str, label: str):
        super().__init__(name, label)
        self._mode = "between"
        self._start_label = "Start Date"
        self._end_label = "End Date"

    def mode(self, mode: str) -> "DateFilter":
        if mode in self.MODES:
            self._mode = mode
        return self

    def start_label(self, label: str) -> "DateFilter":
        self._start_label = label
        return self

    def end_label(self, label: str) -> "DateFilter":
        self._end_label = label
        return self

    def _extra(self) -> Dict[str, Any]:
        return {
            "mode": self._mode,
            "start_label": self._start_label,
            "end_label": self._end_label,
        }


class NumberFilter(Filter):
    type = "number"

    def __init__(self, name: str, label: str):
        super().__init__(name, label)
        self._operator = "="
        self._placeholder: Optional[str] = None
        self._step: Optional[float] = None
        self._min: Optional[float] = None
        self._max: Optional[float] = None

    def operator(self, operator: str) -> "NumberFilter":
        self._operator = operator
        return self

    def placeholder(self, placeholder: str) -> "NumberFilter":
        self._placeholder = placeholder
        return self

    def step(self, step: float) -> "NumberFilter":
        self._step = step
        return self

    def min(self, minimum: float) -> "NumberFilter":
        self._min = minimum
        return self

    def max(self, maximum: float) -> "NumberFilter":
        self._max = maximum
        return self

    def _extra(self) -> Dict[str, Any]:
        extra: Dict[str, Any] = {"operator": self._operator}
        for key, value in (
            ("placeholder", self._placeholder),
            ("step", self._step),
            ("min", self._min),
            ("max", self._max),
        ):
            if value is not None:
                extra[key] = value
        return extra


class CustomFilter(Filter):
    """
    Filter rendered by a custom frontend component.

    Never applied by the generic filter pass; each output names a request
    parameter whose current value is hydrated for display.
    """

    type = "custom"

    def __init__(self, name: str, label: str):
        super().__init__(name, label)
        self._component: Optional[str] = None
        self._fields: List[Dict[str, Any]] = []
        self._outputs: List[Dict[str, Any]] = []
        self._props: Dict[str, Any] = {}

    def component(self, component: str) -> "CustomFilter":
        self._component = component
        return self

    def fields(self, fields: List[Dict[str, Any]]) -> "CustomFilter":
        self._fields = fields
        return self

    def outputs(self, outputs: List[Dict[str, Any]]) -> "CustomFilter":
        """Each output: {"name": ..., "default": ...}"""
        self._outputs = outputs
        return self

    def props(self, props: Dict[str, Any]) -> "CustomFilter":
        self._props = props
        return self

    def _extra(self) -> Dict[str, Any]:
        extra: Dict[str, Any] = {}
        if self._component:
            extra["component"] = self._component
        if self._fields:
            extra["fields"] = self._fields
        if self._outputs:
            extra["outputs"] = [dict(output) for output in self._outputs]
        if self._props:
            extra["props"] = self._props
        return extra


def _apply_trashed(query: Any, value: Any) -> Any:
    if value == "with":
        return query.with_trashed()
    if value == "only":
        return query.only_trashed()
    return query


class TrashedFilter(SelectFilter):
    """Soft-delete scope selector with a built-in query transform"""

    def __init__(self, name: str = "trashed", label: str = "Deleted Records"):
        super().__init__(name, label)
        self._options = {
            "": "Without Trashed",
            "with": "With Trashed",
            "only": "Only Trashed",
        }
        self._query_callback = _apply_trashed

    @classmethod
    def make(cls, name: str = "trashed", label: str = "Deleted Records") -> "TrashedFilter":
        return cls(name, label)


def serialize_filter(filter_: Any) -> Dict[str, Any]:
    return filter_.to_dict() if hasattr(filter_, "to_dict") else dict(filter_)
