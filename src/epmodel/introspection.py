"""
Introspection utilities for discovering IDD classes and their fields.

Provides a readable summary of what a class expects before adding objects
to a model.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .schema import FieldDef, IDDSchema


@dataclass
class FieldDescription:
    """Description of a single field of an IDD class.

    Attributes:
        index: Zero-based field position
        name: Field name as in the dictionary (e.g., "X Origin")
        python_name: Normalised name accepted by ``set``/``add`` (e.g., "x_origin")
        field_type: integer, real, alpha, choice, object-list, ...
        required: Whether the field is required
        default: Default value, if any
        units: Units string, if any (e.g., "m", "W/m-K")
        choices: Allowed values for choice fields
        minimum: Lower bound for numeric fields
        maximum: Upper bound for numeric fields
        minimum_exclusive: Whether the lower bound is exclusive
        maximum_exclusive: Whether the upper bound is exclusive
        object_lists: Reference list names if this is a reference field
        target_classes: Classes whose names the field accepts
    """

    index: int
    name: str
    python_name: str
    field_type: str
    required: bool = False
    default: str | None = None
    units: str | None = None
    choices: list[str] = field(default_factory=list)
    minimum: float | None = None
    maximum: float | None = None
    minimum_exclusive: bool = False
    maximum_exclusive: bool = False
    object_lists: list[str] = field(default_factory=list)
    target_classes: list[str] = field(default_factory=list)

    @property
    def is_reference(self) -> bool:
        return bool(self.object_lists)

    def __str__(self) -> str:
        """Return a formatted string representation of the field."""
        parts: list[str] = [f"  {self.index + 1}. {self.name}"]
        if self.required:
            parts.append(" [REQUIRED]")
        parts.append(f" ({self.field_type})")
        if self.units:
            parts.append(f" [{self.units}]")
        if self.choices:
            if len(self.choices) <= 4:
                parts.append(f" choices={self.choices}")
            else:
                parts.append(f" choices={self.choices[:3]}+{len(self.choices) - 3} more")
        if self.default is not None:
            parts.append(f" default={self.default}")
        if self.minimum is not None:
            parts.append(f" min{'>' if self.minimum_exclusive else '='}{self.minimum}")
        if self.maximum is not None:
            parts.append(f" max{'<' if self.maximum_exclusive else '='}{self.maximum}")
        if self.target_classes:
            parts.append(f" -> {', '.join(self.target_classes)}")
        return "".join(parts)


@dataclass
class ObjectDescription:
    """Description of an IDD class.

    Attributes:
        class_name: Class name (e.g., "Zone", "Material")
        group: IDD group of the class
        memo: Class description from the dictionary
        fields: Field descriptions in declaration order
        required_fields: Names of required fields
        unique: Whether at most one instance is allowed
        min_fields: Fields written for a new object
        has_name: Whether the class has a name field
        extensible_size: Size of the repeating field group, 0 if none
    """

    class_name: str
    group: str | None = None
    memo: str | None = None
    fields: list[FieldDescription] = field(default_factory=list)
    required_fields: list[str] = field(default_factory=list)
    unique: bool = False
    min_fields: int = 0
    has_name: bool = True
    extensible_size: int = 0

    @property
    def is_extensible(self) -> bool:
        return self.extensible_size > 0

    def __str__(self) -> str:
        """Return a formatted string representation for terminal output."""
        lines: list[str] = [f"=== {self.class_name} ==="]

        if self.memo:
            lines.append(self.memo)
            lines.append("")

        if self.unique:
            lines.append("Unique object")
        if self.required_fields:
            lines.append(f"Required fields: {', '.join(self.required_fields)}")
            lines.append("")

        lines.append(f"Fields ({len(self.fields)}):")
        for f in self.fields:
            lines.append(str(f))

        if self.is_extensible:
            lines.append("")
            lines.append(f"(Extensible object - groups of {self.extensible_size})")

        return "\n".join(lines)


def _describe_field(field_def: FieldDef) -> FieldDescription:
    return FieldDescription(
        index=field_def.index,
        name=field_def.name,
        python_name=field_def.python_name,
        field_type=field_def.field_type,
        required=field_def.required,
        default=field_def.default,
        units=field_def.units,
        choices=list(field_def.choices),
        minimum=field_def.minimum,
        maximum=field_def.maximum,
        minimum_exclusive=field_def.minimum_exclusive,
        maximum_exclusive=field_def.maximum_exclusive,
        object_lists=list(field_def.object_lists),
        target_classes=list(field_def.target_classes),
    )


def describe_class(schema: IDDSchema, class_name: str) -> ObjectDescription:
    """Get a detailed description of an IDD class.

    Args:
        schema: The schema to query
        class_name: Class name, case-insensitive (e.g., "zone")

    Returns:
        ObjectDescription with detailed field information

    Raises:
        UnknownClassError: If the class is not found in the schema
    """
    class_def = schema.get_class(class_name)
    return ObjectDescription(
        class_name=class_def.name,
        group=class_def.group,
        memo=class_def.memo,
        fields=[_describe_field(f) for f in class_def.fields],
        required_fields=class_def.required_fields,
        unique=class_def.unique,
        min_fields=class_def.min_fields,
        has_name=class_def.name_index is not None,
        extensible_size=class_def.extensible,
    )
