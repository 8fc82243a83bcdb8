# ================================
# TABLE COLUMNS (resources/columns.py)
# ================================

"""
Table column declarations.

Every column serializes to the same envelope
(title, align, sortable, key, type) plus the options of its own type.
Relationship columns must use the serialized (snake_case) relation name,
e.g. ``TextColumn.make("author.name", "Author")``.
"""

from typing import Any, Dict, List, Optional, Type


class Column:
    """Common column envelope"""

    type: str = "text"

    def __init__(self, key: str, title: str):
        self.key = key
        self.title = title
        self._align = "start"
        self._sortable = False

    @classmethod
    def make(cls, key: str, title: str) -> "Column":
        return cls(key, title)

    def align(self, align: str) -> "Column":
        self._align = align
        return self

    def sortable(self, sortable: bool = True) -> "Column":
        self._sortable = sortable
        return self

    @property
    def is_sortable(self) -> bool:
        return self._sortable

    def _options(self) -> Dict[str, Any]:
        """Type specific keys appended to the envelope"""
        return {}

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "title": self.title,
            "align": self._align,
            "sortable": self._sortable,
            "key": self.key,
            "type": self.type,
        }
        data.update(self._options())
        return data

    def __repr__(self):
        return f"<{type(self).__name__}(key='{self.key}')>"


class TextColumn(Column):
    type = "text"

    def __init__(self, key: str, title: str):
        super().__init__(key, title)
        self._searchable = False
        self._limit: Optional[int] = None
        self._wrap: Optional[str] = None

    def searchable(self, searchable: bool = True) -> "TextColumn":
        self._searchable = searchable
        return self

    @property
    def is_searchable(self) -> bool:
        return self._searchable

    def limit(self, limit: int) -> "TextColumn":
        self._limit = limit
        return self

    def wrap(self, wrap: str = "normal") -> "TextColumn":
        self._wrap = wrap
        return self

    def _options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {"searchable": self._searchable}
        if self._limit is not None:
            options["limit"] = self._limit
        if self._wrap is not None:
            options["wrap"] = self._wrap
        return options


class BadgeColumn(Column):
    type = "badge"

    def __init__(self, key: str, title: str):
        super().__init__(key, title)
        self._colors: Dict[str, str] = {}
        self._default_color = "gray"

    def colors(self, colors: Dict[str, str]) -> "BadgeColumn":
        """Map of cell value -> color name"""
        self._colors = dict(colors)
        return self

    def default_color(self, color: str) -> "BadgeColumn":
        self._default_color = color
        return self

    def _options(self) -> Dict[str, Any]:
        return {"colors": self._colors, "defaultColor": self._default_color}


class BooleanColumn(Column):
    type = "boolean"

    def __init__(self, key: str, title: str):
        super().__init__(key, title)
        self._true_label = "Yes"
        self._false_label = "No"

    def true_label(self, label: str) -> "BooleanColumn":
        self._true_label = label
        return self

    def false_label(self, label: str) -> "BooleanColumn":
        self._false_label = label
        return self

    def _options(self) -> Dict[str, Any]:
        return {"trueLabel": self._true_label, "falseLabel": self._false_label}


class DateColumn(Column):
    type = "date"

    FORMATS = ("date", "datetime", "time", "relative")

    def __init__(self, key: str, title: str):
        super().__init__(key, title)
        self._format = "date"

    def date(self) -> "DateColumn":
        self._format = "date"
        return self

    def date_time(self) -> "DateColumn":
        self._format = "datetime"
        return self

    def time(self) -> "DateColumn":
        self._format = "time"
        return self

    def relative(self) -> "DateColumn":
        self._format = "relative"
        return self

    def _options(self) -> Dict[str, Any]:
        return {"format": self._format}


class MoneyColumn(Column):
    type = "money"

    def __init__(self, key: str, title: str):
        super().__init__(key, title)
        self._currency = "R"
        self._decimals = 2
        self._colorize = False

    def currency(self, currency: str) -> "MoneyColumn":
        self._currency = currency
        return self

    def decimals(self, decimals: int) -> "MoneyColumn":
        self._decimals = decimals
        return self

    def colorize(self, colorize: bool = True) -> "MoneyColumn":
        self._colorize = colorize
        return self

    def _options(self) -> Dict[str, Any]:
        return {
            "currency": self._currency,
            "decimals": self._decimals,
            "colorize": self._colorize,
        }


class PercentageColumn(Column):
    type = "percentage"

    def __init__(self, key: str, title: str):
        super().__init__(key, title)
        self._decimals: Optional[int] = None

    def decimals(self, decimals: int) -> "PercentageColumn":
        self._decimals = decimals
        return self

    def _options(self) -> Dict[str, Any]:
        if self._decimals is None:
            return {}
        return {"decimals": self._decimals}


class JsonColumn(Column):
    type = "json"

    def __init__(self, key: str, title: str):
        super().__init__(key, title)
        self._collapsed = True
        self._max_depth: Optional[int] = 3
        self._character_limit: Optional[int] = None

    def collapsed(self, collapsed: bool = True) -> "JsonColumn":
        self._collapsed = collapsed
        return self

    def max_depth(self, max_depth: int) -> "JsonColumn":
        self._max_depth = max_depth
        return self

    def character_limit(self, limit: int) -> "JsonColumn":
        self._character_limit = limit
        return self

    def _options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {"collapsed": self._collapsed}
        if self._max_depth is not None:
            options["maxDepth"] = self._max_depth
        if self._character_limit is not None:
            options["characterLimit"] = self._character_limit
        return options


class LinkColumn(Column):
    type = "link"


class ArrayColumn(Column):
    """Renders a list of records with its own sub-columns"""

    type = "array"

    def __init__(self, key: str, title: str, columns: List[Any]):
        super().__init__(key, title)
        self._columns = list(columns)

    @classmethod
    def make(cls, key: str, title: str, columns: List[Any] = None) -> "ArrayColumn":
        return cls(key, title, columns or [])

    def _options(self) -> Dict[str, Any]:
        return {
            "columns": [
                column.to_dict() if hasattr(column, "to_dict") else column
                for column in self._columns
            ]
        }


COLUMN_TYPES: Dict[str, Type[Column]] = {
    column_cls.type: column_cls
    for column_cls in (
        TextColumn,
        BadgeColumn,
        BooleanColumn,
        DateColumn,
        MoneyColumn,
        PercentageColumn,
        JsonColumn,
        LinkColumn,
        ArrayColumn,
    )
}


def serialize_column(column: Any) -> Dict[str, Any]:
    """Column object or pre-built dict -> flat record"""
    return column.to_dict() if hasattr(column, "to_dict") else dict(column)
