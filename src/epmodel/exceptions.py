"""Custom exceptions for epmodel."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .validation import Violation


class EpModelError(Exception):
    """Base exception for all epmodel errors."""

    pass


class SchemaParseError(EpModelError):
    """Raised when an IDD document is malformed."""

    def __init__(self, message: str, line: int | None = None) -> None:
        self.line = line
        msg = f"Line {line}: {message}" if line is not None else message
        super().__init__(msg)


class UnsupportedVersionError(EpModelError):
    """Raised when no dictionary is available for an EnergyPlus version."""

    def __init__(self, version: str, searched_paths: list[str] | None = None) -> None:
        self.version = version
        self.searched_paths = searched_paths or []
        msg = f"No Energy+.idd available for EnergyPlus {version}"
        if searched_paths:
            msg += f"\nSearched in: {', '.join(searched_paths)}"
        msg += "\nPass the path of an Energy+.idd file with idd=..."
        super().__init__(msg)


class IdfSyntaxError(EpModelError):
    """Raised when IDF text cannot be split into valid objects."""

    def __init__(self, message: str, line: int | None = None) -> None:
        self.line = line
        msg = f"Line {line}: {message}" if line is not None else message
        super().__init__(msg)


class MissingVersionError(EpModelError):
    """Raised when an IDF has no Version object."""

    def __init__(self, source: str | None = None) -> None:
        self.source = source
        where = f" in file: {source}" if source else ""
        super().__init__(f"Could not detect EnergyPlus version{where}")


class UnknownClassError(EpModelError):
    """Raised when a class name is not defined by the dictionary or not present in the model."""

    def __init__(self, class_name: str) -> None:
        self.class_name = class_name
        super().__init__(f"Unknown class: '{class_name}'")


class UnknownIdError(EpModelError):
    """Raised when an object id is invalid, deleted or hidden."""

    def __init__(self, obj_id: object) -> None:
        self.obj_id = obj_id
        super().__init__(f"Invalid object id: {obj_id!r}")


class InvalidFieldError(EpModelError):
    """Raised when a field cannot be resolved for a class."""

    def __init__(self, class_name: str, field: str | int, available_fields: list[str] | None = None) -> None:
        self.class_name = class_name
        self.field = field
        self.available_fields = available_fields
        msg = f"Invalid field {field!r} for class '{class_name}'"
        if available_fields:
            msg += f"\nAvailable fields: {', '.join(available_fields[:10])}"
            if len(available_fields) > 10:
                msg += f" ... and {len(available_fields) - 10} more"
        super().__init__(msg)


class DuplicateUniqueObjectError(EpModelError):
    """Raised when adding a second instance of a unique class."""

    def __init__(self, class_name: str, existing_id: int) -> None:
        self.class_name = class_name
        self.existing_id = existing_id
        super().__init__(f"'{class_name}' is a unique-object class and already exists in the model (ID {existing_id})")


class DuplicateNameError(EpModelError):
    """Raised when a name is already used by another object of the same class."""

    def __init__(self, class_name: str, name: str) -> None:
        self.class_name = class_name
        self.name = name
        super().__init__(f"Duplicate {class_name} object with name '{name}'")


class MissingRequiredFieldError(EpModelError):
    """Raised when a required field has neither a value nor a default."""

    def __init__(self, class_name: str, fields: Sequence[str]) -> None:
        self.class_name = class_name
        self.fields = list(fields)
        super().__init__(f"Missing required field(s) for '{class_name}': {', '.join(self.fields)}")


class FieldValueError(EpModelError):
    """Raised when supplied values violate type, range, choice or reference constraints."""

    def __init__(self, violations: Sequence[Violation]) -> None:
        self.violations = list(violations)
        msg = f"Invalid field value(s), {len(self.violations)} violation(s):\n"
        for i, violation in enumerate(self.violations[:5], 1):
            msg += f"  {i}. {violation}\n"
        if len(self.violations) > 5:
            msg += f"  ... and {len(self.violations) - 5} more"
        super().__init__(msg.rstrip("\n"))


class ReferencedObjectError(EpModelError):
    """Raised when deleting or unnaming an object that other objects still reference."""

    def __init__(
        self,
        obj_id: int,
        name: str,
        referents: Sequence[tuple[int, str, str]],
        hint: str = "Set force=True to delete it anyway.",
    ) -> None:
        self.obj_id = obj_id
        self.name = name
        self.referents = list(referents)
        msg = f"Object ID {obj_id} ('{name}') is referenced by {len(self.referents)} field(s):\n"
        for ref_id, class_name, field_name in self.referents[:10]:
            msg += f"  - ID {ref_id} {class_name}: '{field_name}'\n"
        msg += hint
        super().__init__(msg)


class ConfirmationRequiredError(EpModelError):
    """Raised when a destructive action is requested without confirmation."""

    pass


class OverwriteNotConfirmedError(ConfirmationRequiredError):
    """Raised when saving would overwrite a file without explicit confirmation."""

    def __init__(self, path: str, flag: str = "confirm") -> None:
        self.path = path
        self.flag = flag
        super().__init__(
            f"Saving will overwrite the existing model file at '{path}'. Confirm by setting '{flag}=True'."
        )


class ExtensionMismatchError(EpModelError):
    """Raised when macro-bearing content is saved with a non-macro file extension."""

    def __init__(self, path: str, kind: str, extension: str) -> None:
        self.path = path
        self.kind = kind
        self.extension = extension
        super().__init__(
            f"The model has macro input and should be saved as an '{kind.lower()}' file, "
            f"not an '{extension}' file: {path}"
        )
