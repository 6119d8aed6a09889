"""
Core object classes for IDF representation.

IDFObject: one model object with its ordered field values and lifecycle state.
ObjectState: the lifecycle tags an object moves through.
"""

from __future__ import annotations

import enum
import re
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .schema import ClassDef

# Field name conversion patterns
_FIELD_NAME_PATTERN = re.compile(r"[^a-zA-Z0-9]+")
_FORBIDDEN_CHARS = frozenset(",;!")


def to_python_name(idf_name: str) -> str:
    """Convert IDF field name to Python-friendly name.

    'Direction of Relative North' -> 'direction_of_relative_north'
    'X Origin' -> 'x_origin'
    """
    return _FIELD_NAME_PATTERN.sub("_", idf_name.lower()).strip("_")


def format_value(value: Any) -> str:
    """Convert a user-supplied value to its IDF text form.

    None becomes an empty field, numbers keep their full precision.

    Raises:
        ValueError: If the text contains a field or object separator.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return repr(value)
    text = str(value).strip()
    if _FORBIDDEN_CHARS.intersection(text):
        msg = f"Field values may not contain ',', ';' or '!': {text!r}"
        raise ValueError(msg)
    return text


def strip_trailing(values: list[str]) -> list[str]:
    """Drop trailing empty values, which are insignificant in IDF."""
    end = len(values)
    while end > 0 and not values[end - 1]:
        end -= 1
    return values[:end]


class ObjectState(str, enum.Enum):
    """Lifecycle state of an object."""

    ACTIVE = "active"
    MODIFIED = "modified"
    DELETED = "deleted"
    HIDDEN = "hidden"


class IDFObject:
    """
    One EnergyPlus object: an instance of an IDD class.

    Field values are stored as IDF text; use :meth:`value` for a typed read.
    Deleted and hidden objects stay in the store but are invisible to
    queries.

    Examples:
        ```python
        mat = doc.get(mat_id)[0]
        mat.name            # 'Concrete'
        mat["Thickness"]    # '0.2'
        mat.value("thickness")  # 0.2
        ```

    Attributes:
        id: Model-unique id, never reused
        class_def: Definition of the object's IDD class
        values: Ordered field values as text
        state: Lifecycle state
        comments: ``!`` comment lines that preceded the object in the file
    """

    __slots__ = ("class_def", "comments", "id", "state", "values")

    id: int
    class_def: ClassDef
    values: list[str]
    state: ObjectState
    comments: list[str]

    def __init__(
        self,
        obj_id: int,
        class_def: ClassDef,
        values: list[str] | None = None,
        state: ObjectState = ObjectState.ACTIVE,
        comments: list[str] | None = None,
    ) -> None:
        self.id = obj_id
        self.class_def = class_def
        self.values = list(values) if values is not None else []
        self.state = state
        self.comments = list(comments) if comments is not None else []

    @property
    def class_name(self) -> str:
        return self.class_def.name

    @property
    def name(self) -> str | None:
        """The object's name, or None for classes without a name field."""
        index = self.class_def.name_index
        if index is None:
            return None
        return self.values[index] if index < len(self.values) else ""

    @property
    def is_active(self) -> bool:
        """Whether the object is visible to queries."""
        return self.state in (ObjectState.ACTIVE, ObjectState.MODIFIED)

    def field(self, key: int | str) -> str:
        """Raw text of a field, '' when the field is not populated."""
        index = self.class_def.field_index(key)
        return self.values[index] if index < len(self.values) else ""

    def __getitem__(self, key: int | str) -> str:
        return self.field(key)

    def __len__(self) -> int:
        return len(self.values)

    def value(self, key: int | str) -> Any:
        """Typed value of a field.

        Numeric fields are converted to int or float. Autosize and
        autocalculate tokens, empty fields and non-numeric text are
        returned unchanged (None for empty).
        """
        index = self.class_def.field_index(key)
        raw = self.values[index] if index < len(self.values) else ""
        if raw == "":
            return None
        field_def = self.class_def.field_def(index)
        if not field_def.is_numeric:
            return raw
        try:
            number = float(raw)
        except ValueError:
            return raw
        if field_def.field_type == "integer" and number.is_integer():
            return int(number)
        return number

    def to_dict(self) -> dict[str, str]:
        """Map python field names to their raw values."""
        result: dict[str, str] = {}
        for i, v in enumerate(self.values):
            result[self.class_def.field_def(i).python_name] = v
        return result

    def normalized_values(self) -> list[str]:
        return strip_trailing(self.values)

    def same_values(self, other: IDFObject) -> bool:
        """Field-for-field equality, ignoring ids and trailing empties."""
        return self.class_name == other.class_name and self.normalized_values() == other.normalized_values()

    def copy(self, new_id: int) -> IDFObject:
        """Copy the values into a new active object with *new_id*."""
        return IDFObject(new_id, self.class_def, list(self.values), ObjectState.ACTIVE, list(self.comments))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IDFObject):
            return NotImplemented
        return self.id == other.id and self.same_values(other)

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        name = self.name
        label = f" '{name}'" if name else ""
        return f"IDFObject({self.id}, {self.class_name}{label}, {self.state.value})"
