"""
Schema-driven validation of field values and whole models.

Checks run against the IDD constraints carried by each FieldDef: numeric
type, range bounds, choices, required fields, references and the
autosize/autocalculate tokens. Validation reports problems; it never raises.
"""

from __future__ import annotations

import enum
import math
import re
from collections.abc import Collection, Iterator, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .document import IDFDocument
    from .schema import FieldDef, IDDSchema
    from .store import ObjectStore

AUTOSIZE = "AUTOSIZE"
AUTOCALCULATE = "AUTOCALCULATE"

# Fortran-style exponents (1.5D3) are valid in IDF files.
_NUMBER_PATTERN = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eEdD][+-]?\d+)?$")


class ViolationKind(str, enum.Enum):
    """Kinds of constraint violations."""

    TYPE_MISMATCH = "TypeMismatch"
    OUT_OF_RANGE = "OutOfRange"
    INVALID_CHOICE = "InvalidChoice"
    MISSING_REQUIRED = "MissingRequired"
    DANGLING_REFERENCE = "DanglingReference"
    AUTOSIZE_NOT_ALLOWED = "AutosizeNotAllowed"
    AUTOCALCULATE_NOT_ALLOWED = "AutocalculateNotAllowed"
    MISSING_REQUIRED_OBJECT = "MissingRequiredObject"


@dataclass
class Violation:
    """A single validation problem."""

    kind: ViolationKind
    message: str
    object_id: int | None = None
    class_name: str | None = None
    object_name: str | None = None
    field_index: int | None = None
    field_name: str | None = None
    value: str | None = None

    def __str__(self) -> str:
        location = ""
        if self.class_name:
            location = self.class_name
            if self.object_name:
                location += f":'{self.object_name}'"
            elif self.object_id is not None:
                location += f":#{self.object_id}"
        if self.field_name:
            location += f".{self.field_name}"
        prefix = f"[{self.kind.value}]"
        return f"{prefix} {location}: {self.message}" if location else f"{prefix} {self.message}"


@dataclass
class ValidationResult:
    """Result of validating a model."""

    errors: list[Violation] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """True if there are no violations."""
        return not self.errors

    def by_kind(self, kind: ViolationKind | str) -> list[Violation]:
        kind = ViolationKind(kind)
        return [v for v in self.errors if v.kind == kind]

    def __len__(self) -> int:
        return len(self.errors)

    def __iter__(self) -> Iterator[Violation]:
        return iter(self.errors)

    def __str__(self) -> str:
        lines = [f"Validation: {len(self.errors)} errors"]
        for violation in self.errors[:10]:
            lines.append(f"  {violation}")
        if len(self.errors) > 10:
            lines.append(f"  ... and {len(self.errors) - 10} more")
        return "\n".join(lines)

    def __bool__(self) -> bool:
        """Returns True if valid."""
        return self.is_valid


def _check_number(value: str, field_def: FieldDef) -> list[Violation]:
    if not _NUMBER_PATTERN.match(value):
        return [Violation(ViolationKind.TYPE_MISMATCH, f"Expected a number, got '{value}'", value=value)]
    number = float(value.replace("d", "e").replace("D", "e"))
    if math.isinf(number):
        return [Violation(ViolationKind.TYPE_MISMATCH, f"Expected a finite number, got '{value}'", value=value)]
    if field_def.field_type == "integer" and not number.is_integer():
        return [Violation(ViolationKind.TYPE_MISMATCH, f"Expected an integer, got '{value}'", value=value)]

    if field_def.minimum is not None:
        if field_def.minimum_exclusive and number <= field_def.minimum:
            msg = f"Value {value} must be > {field_def.minimum}"
            return [Violation(ViolationKind.OUT_OF_RANGE, msg, value=value)]
        if not field_def.minimum_exclusive and number < field_def.minimum:
            msg = f"Value {value} must be >= {field_def.minimum}"
            return [Violation(ViolationKind.OUT_OF_RANGE, msg, value=value)]
    if field_def.maximum is not None:
        if field_def.maximum_exclusive and number >= field_def.maximum:
            msg = f"Value {value} must be < {field_def.maximum}"
            return [Violation(ViolationKind.OUT_OF_RANGE, msg, value=value)]
        if not field_def.maximum_exclusive and number > field_def.maximum:
            msg = f"Value {value} must be <= {field_def.maximum}"
            return [Violation(ViolationKind.OUT_OF_RANGE, msg, value=value)]
    return []


def check_field(
    value: str | None,
    field_def: FieldDef,
    *,
    names: Mapping[str, Collection[str]] | None = None,
) -> list[Violation]:
    """
    Check one field value against its definition.

    Args:
        value: Field text; None and '' mean the field is empty
        field_def: The field's definition
        names: Upper-case class name -> upper-case names of its objects
            that are not deleted (``ObjectStore.names``). Reference fields
            are only checked when given.

    Returns:
        Violations with ``kind``, ``message`` and ``value`` set; the caller
        fills in object and field context.
    """
    text = (value or "").strip()
    if not text:
        if field_def.required and field_def.default is None:
            return [Violation(ViolationKind.MISSING_REQUIRED, "Required field is empty")]
        return []

    upper = text.upper()
    if upper == AUTOSIZE:
        if not field_def.autosizable:
            return [Violation(ViolationKind.AUTOSIZE_NOT_ALLOWED, "Field does not accept Autosize", value=text)]
        return []
    if upper == AUTOCALCULATE:
        if not field_def.autocalculatable:
            msg = "Field does not accept Autocalculate"
            return [Violation(ViolationKind.AUTOCALCULATE_NOT_ALLOWED, msg, value=text)]
        return []

    if field_def.is_numeric:
        return _check_number(text, field_def)

    if field_def.choices:
        if upper not in {c.upper() for c in field_def.choices}:
            msg = f"'{text}' is not one of: {', '.join(field_def.choices)}"
            return [Violation(ViolationKind.INVALID_CHOICE, msg, value=text)]
        return []

    if field_def.target_classes and names is not None:
        if not any(upper in names.get(t.upper(), ()) for t in field_def.target_classes):
            targets = ", ".join(field_def.target_classes)
            msg = f"No {targets} object named '{text}'"
            return [Violation(ViolationKind.DANGLING_REFERENCE, msg, value=text)]

    return []


def check_model(store: ObjectStore, schema: IDDSchema) -> list[Violation]:
    """
    Check every active object of a store.

    Empty fields that are not required are skipped. References may point
    at hidden objects, since those are still written. Classes flagged
    ``\\required-object`` without an active or hidden instance are
    reported too.

    Returns:
        All violations, in object id then field order. Never raises.
    """
    names = store.names
    violations: list[Violation] = []

    for obj in store.active():
        class_def = obj.class_def
        if class_def.is_extensible:
            count = max(len(obj.values), class_def.min_fields)
        else:
            count = max(len(obj.values), len(class_def.fields))

        for index in range(count):
            field_def = class_def.field_def(index)
            value = obj.values[index] if index < len(obj.values) else ""
            if not value and not field_def.required:
                continue
            for violation in check_field(value, field_def, names=names):
                violation.object_id = obj.id
                violation.class_name = class_def.name
                violation.object_name = obj.name or None
                violation.field_index = index
                violation.field_name = field_def.name
                violations.append(violation)

    for class_def in schema:
        if class_def.required and not store.present(class_def.name):
            violations.append(
                Violation(
                    ViolationKind.MISSING_REQUIRED_OBJECT,
                    f"Model has no '{class_def.name}' object",
                    class_name=class_def.name,
                )
            )

    return violations


def validate_document(doc: IDFDocument) -> ValidationResult:
    """
    Validate a document against its schema.

    Examples:
        ```python
        result = validate_document(doc)
        if not result:
            print(result)
        ```
    """
    return ValidationResult(errors=check_model(doc.store, doc.schema))
