"""
IDFDocument - The main container for an EnergyPlus model.

Provides:
- Schema-checked add/set/dup/delete/hide operations, each atomic
- Reference tracking with rename propagation and a delete guard
- An append-only change log with diff and reset-to-last-save
- Confirmed save/saveas that re-read the written file
"""

from __future__ import annotations

import logging
import re
import warnings
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any

from .changelog import ChangeLog, LogEntry, group_by_object
from .exceptions import (
    ConfirmationRequiredError,
    DuplicateNameError,
    DuplicateUniqueObjectError,
    ExtensionMismatchError,
    FieldValueError,
    MissingRequiredFieldError,
    OverwriteNotConfirmedError,
    ReferencedObjectError,
    UnknownClassError,
    UnknownIdError,
)
from .idf_parser import IMF, ParsedIDF, detect_version, parse_idf, read_idf
from .introspection import ObjectDescription, describe_class
from .objects import IDFObject, ObjectState, format_value
from .references import ReferenceGraph
from .schema import IDDSchema, get_schema, parse_idd_file
from .validation import ValidationResult, Violation, check_field, validate_document
from .versions import parse_version, same_release
from .writers import render_idf, serialize_for_simulation, write_idf

if TYPE_CHECKING:
    from .schema import ClassDef
    from .store import ObjectStore

logger = logging.getLogger(__name__)

_ALL_TYPES = ("id", "class", "field")
_SEARCH_SCOPES = ("class", "field")


class IDFDocument:
    """
    Main container for an EnergyPlus model.

    A document owns one ObjectStore, one ReferenceGraph and one ChangeLog,
    and shares its IDDSchema with every other document of the same version.
    Every mutating method validates fully before touching the store, so a
    rejected call leaves the model unchanged.

    Examples:
        ```python
        doc = load_idf("in.idf")
        mat_id = doc.add("Material", name="M1", roughness="Rough", thickness=0.1,
                         conductivity=0.5, density=1000, specific_heat=900)
        doc.set(mat_id, thickness=0.2)
        doc.diff("add")
        doc.saveas("out.idf")
        ```

    Attributes:
        filepath: File the document was read from or last saved to
        version: Version string from the Version object (e.g. "8.8")
        kind: "IDF", or "IMF" when the model carries macro lines
        macros: ``##`` macro lines
        layout_hint: Layout read from the ``!-Option`` header, if any
    """

    __slots__ = (
        "_log",
        "_references",
        "_saved_ids",
        "_saved_text",
        "_schema",
        "_store",
        "filepath",
        "kind",
        "layout_hint",
        "macros",
        "version",
    )

    filepath: Path | None
    version: str | None
    kind: str
    macros: list[str]
    layout_hint: str | None
    _schema: IDDSchema
    _store: ObjectStore
    _references: ReferenceGraph
    _log: ChangeLog
    _saved_text: str
    _saved_ids: list[int]

    def __init__(
        self,
        schema: IDDSchema,
        parsed: ParsedIDF,
        filepath: Path | str | None = None,
        source_text: str = "",
    ) -> None:
        """
        Initialize an IDFDocument from parsed text.

        Most callers use :meth:`from_file`, :meth:`from_text`,
        :func:`epmodel.load_idf` or :func:`epmodel.new_document` instead.

        Args:
            schema: Schema the model is checked against
            parsed: Result of :func:`epmodel.idf_parser.parse_idf`
            filepath: Source file path
            source_text: Text *parsed* came from; :meth:`reset` returns to it
                until the document is saved
        """
        self._schema = schema
        self._references = ReferenceGraph()
        self.filepath = Path(filepath) if filepath else None
        self._install(parsed)
        self._saved_text = source_text
        self._saved_ids = [o.id for o in parsed.store]
        self._log = ChangeLog()

    @classmethod
    def from_text(
        cls,
        text: str,
        idd: IDDSchema | Path | str | None = None,
        filepath: Path | str | None = None,
    ) -> IDFDocument:
        """
        Parse IDF text into a document.

        Args:
            text: IDF or IMF text
            idd: Schema, or path of an ``Energy+.idd``. If None, the schema
                is resolved from the text's Version object.
            filepath: Path to associate with the document

        Raises:
            MissingVersionError: If no schema is given and the text has no
                Version object
            UnsupportedVersionError: If no dictionary matches the version
        """
        if isinstance(idd, IDDSchema):
            schema = idd
        elif idd is not None:
            schema = parse_idd_file(idd)
        else:
            schema = get_schema(detect_version(text, str(filepath) if filepath else None))

        parsed = parse_idf(text, schema)
        try:
            model_version = parse_version(parsed.version) if parsed.version else None
        except ValueError:
            model_version = None
        if model_version and schema.version_tuple and not same_release(model_version, schema.version_tuple):
            warnings.warn(
                f"Model version {parsed.version} does not match dictionary version {schema.version}",
                UserWarning,
                stacklevel=2,
            )
        return cls(schema, parsed, filepath, text)

    @classmethod
    def from_file(
        cls,
        filepath: Path | str,
        idd: IDDSchema | Path | str | None = None,
        encoding: str = "latin-1",
    ) -> IDFDocument:
        """Read and parse an IDF/IMF file."""
        text = read_idf(filepath, encoding)
        doc = cls.from_text(text, idd, filepath)
        logger.info("Loaded %s (%d objects)", filepath, len(doc))
        return doc

    def _install(self, parsed: ParsedIDF) -> None:
        """Adopt a freshly parsed store and rebuild the reference index."""
        self._store = parsed.store
        self.version = parsed.version
        self.kind = parsed.kind
        self.macros = list(parsed.macros)
        self.layout_hint = parsed.layout
        self._references.rebuild(self._store)

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def schema(self) -> IDDSchema:
        """The schema shared by this document."""
        return self._schema

    @property
    def store(self) -> ObjectStore:
        """The object/field table."""
        return self._store

    @property
    def references(self) -> ReferenceGraph:
        """The reference graph for dependency tracking."""
        return self._references

    @property
    def log(self) -> ChangeLog:
        """The change log."""
        return self._log

    @property
    def is_dirty(self) -> bool:
        """Whether the model changed since it was read, saved or reset."""
        return self._log.is_dirty

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get(self, *keys: int | str) -> list[IDFObject]:
        """
        Get active objects by id or class name, in argument order.

        Args:
            *keys: Object ids and/or class names (case-insensitive)

        Raises:
            UnknownIdError: For ids that are unknown, deleted or hidden
            UnknownClassError: For classes not in the schema or without
                active objects in the model
        """
        result: list[IDFObject] = []
        for key in keys:
            if isinstance(key, str):
                objects = self._store.by_class(key) if self._schema.has_class(key) else []
                if not objects:
                    raise UnknownClassError(key)
                result.extend(objects)
            else:
                result.append(self._store.get_active(key))
        return result

    def all(self, type: str = "id", class_name: str | None = None) -> list[Any]:  # noqa: A002
        """
        List ids, classes or field names.

        Args:
            type: ``id`` for active object ids in creation order, ``class``
                for the classes present (schema order), ``field`` for the
                declared field names of *class_name*, required ones marked
                with a trailing ``*``
            class_name: Restricts ``id`` to one class; required for ``field``
        """
        if type == "id":
            objects = self._store.active()
            if class_name is not None:
                canonical = self._schema.canonical_name(class_name)
                objects = [o for o in objects if o.class_name == canonical]
            return [o.id for o in objects]
        if type == "class":
            present = {o.class_name for o in self._store.active()}
            return sorted(present, key=self._schema.class_order)
        if type == "field":
            if class_name is None:
                msg = "all(type='field') requires a class name"
                raise ValueError(msg)
            return [f"{f.name}*" if f.required else f.name for f in self._schema.field_defs(class_name)]
        msg = f"Invalid type {type!r}; expected one of: {', '.join(_ALL_TYPES)}"
        raise ValueError(msg)

    def contains(self, text: str, scope: str = "class") -> list[int]:
        """Ids of active objects whose class name (or any field value) contains *text*, ignoring case."""
        return self.matches(re.escape(text), scope, re.IGNORECASE)

    def matches(self, pattern: str, scope: str = "class", flags: int = re.IGNORECASE) -> list[int]:
        """
        Ids of active objects matching a regular expression.

        Args:
            pattern: Regular expression, searched (not anchored)
            scope: ``class`` to search class names, ``field`` for field values
            flags: ``re`` flags
        """
        if scope not in _SEARCH_SCOPES:
            msg = f"Invalid scope {scope!r}; expected one of: {', '.join(_SEARCH_SCOPES)}"
            raise ValueError(msg)
        regex = re.compile(pattern, flags)
        if scope == "class":
            return [o.id for o in self._store.active() if regex.search(o.class_name)]
        return [o.id for o in self._store.active() if any(regex.search(v) for v in o.values)]

    def referents_of(self, obj_id: int) -> list[tuple[int, int]]:
        """
        (object id, field index) pairs whose reference fields point at *obj_id*.

        Hidden referents are included; deleted ones are not.
        """
        obj = self._store.get_active(obj_id)
        name = obj.name
        if not name:
            return []
        return [(src, idx) for src, idx in self._references.referents_of(name, obj.class_name) if src != obj_id]

    def _referent_details(self, obj_id: int) -> list[tuple[int, str, str]]:
        """(id, class, field name) of every field referencing *obj_id*."""
        return [
            (src, self._store[src].class_name, self._store[src].class_def.field_def(idx).name)
            for src, idx in self.referents_of(obj_id)
        ]

    def describe(self, class_name: str) -> ObjectDescription:
        """
        Get detailed field information for a class.

        Examples:
            ```python
            print(doc.describe("Material"))
            ```
        """
        return describe_class(self._schema, class_name)

    # -------------------------------------------------------------------------
    # Object Manipulation
    # -------------------------------------------------------------------------

    def _resolve_values(
        self,
        class_def: ClassDef,
        values: tuple[Any, ...],
        data: Mapping[int | str, Any] | None,
        fields: Mapping[str, Any],
    ) -> dict[int, str]:
        """Map positional, data-dict and keyword values onto field indexes."""
        resolved: dict[int, str] = {}
        for index, value in enumerate(values):
            resolved[class_def.field_index(index)] = format_value(value)
        for mapping in (data or {}, fields):
            for key, value in mapping.items():
                resolved[class_def.field_index(key)] = format_value(value)
        return resolved

    def _check_values(self, obj_id: int | None, class_def: ClassDef, values: Mapping[int, str]) -> list[Violation]:
        names = self._store.names
        violations: list[Violation] = []
        for index, value in sorted(values.items()):
            if not value:
                continue
            field_def = class_def.field_def(index)
            for violation in check_field(value, field_def, names=names):
                violation.object_id = obj_id
                violation.class_name = class_def.name
                violation.field_index = index
                violation.field_name = field_def.name
                violations.append(violation)
        return violations

    def _name_taken(self, class_def: ClassDef, name: str, exclude: int | None = None) -> bool:
        return any(i != exclude for i in self._store.name_ids(class_def.name, name))

    def add(
        self,
        class_name: str,
        *values: Any,
        data: Mapping[int | str, Any] | None = None,
        minimal: bool = True,
        **fields: Any,
    ) -> int:
        """
        Add a new object to the model.

        Values may be given positionally (from the first field), as a
        ``data`` dict, or as keyword arguments; keys can be field indexes,
        exact or case-insensitive field names, or normalised names such as
        ``specific_heat``. Empty fields get their schema default.

        Args:
            class_name: Class of the new object (case-insensitive)
            *values: Field values in declaration order
            data: Field values keyed by index or name
            minimal: If True, populate only up to the class's minimum
                fields, the last required field, or the last supplied
                field, whichever is furthest. If False, populate every
                declared field.
            **fields: Field values keyed by name

        Returns:
            The new object's id

        Raises:
            UnknownClassError: If the class is not in the schema
            InvalidFieldError: If a field key does not resolve
            DuplicateUniqueObjectError: If the class is unique and already present
            MissingRequiredFieldError: If a required field has no value or default
            FieldValueError: If a value violates type, range, choice or reference constraints
            DuplicateNameError: If another object of the class has the same name

        Examples:
            ```python
            mat_id = doc.add("Material", "Concrete", "MediumRough", 0.2, 1.4, 2240, 900)
            zone_id = doc.add("Zone", name="Core")
            ```
        """
        class_def = self._schema.get_class(class_name)

        if class_def.unique:
            existing = self._store.present(class_def.name)
            if existing:
                raise DuplicateUniqueObjectError(class_def.name, existing[0].id)

        supplied = self._resolve_values(class_def, values, data, fields)
        last_supplied = max(supplied, default=-1)
        if minimal:
            last_required = max((f.index for f in class_def.fields if f.required), default=-1)
            count = max(class_def.min_fields, last_required + 1, last_supplied + 1) or 1
        else:
            count = max(len(class_def.fields), last_supplied + 1)

        new_values: list[str] = []
        for index in range(count):
            value = supplied.get(index, "")
            if not value:
                value = class_def.field_def(index).default or ""
            new_values.append(value)

        missing = [
            field_def.name
            for field_def, value in ((class_def.field_def(i), v) for i, v in enumerate(new_values))
            if not value and field_def.required
        ]
        if missing:
            raise MissingRequiredFieldError(class_def.name, missing)

        violations = self._check_values(None, class_def, dict(enumerate(new_values)))
        if violations:
            raise FieldValueError(violations)

        name_index = class_def.name_index
        if name_index is not None and new_values[name_index] and self._name_taken(class_def, new_values[name_index]):
            raise DuplicateNameError(class_def.name, new_values[name_index])

        obj_id = self._store.new_id()
        self._store.insert(IDFObject(obj_id, class_def, new_values))
        self._references.register_object(obj_id, class_def, new_values)
        self._log.append("add", obj_id, obj_id)
        logger.debug("Added %s (ID %d)", class_def.name, obj_id)
        return obj_id

    def set(  # noqa: C901
        self,
        obj_id: int,
        *values: Any,
        data: Mapping[int | str, Any] | None = None,
        **fields: Any,
    ) -> IDFObject:
        """
        Change field values of an active object.

        Only the given fields change. Renaming an object rewrites every
        reference field pointing at its old name.

        Args:
            obj_id: Object to modify
            *values: New values from the first field onwards
            data: New values keyed by index or name
            **fields: New values keyed by name

        Returns:
            The updated object

        Raises:
            UnknownIdError: If the object is unknown, deleted or hidden
            InvalidFieldError: If a field key does not resolve
            MissingRequiredFieldError: If a required field is cleared and has no default
            FieldValueError: If a value violates its constraints
            DuplicateNameError: If the new name is already used in the class
            ReferencedObjectError: If the name of a referenced object is cleared

        Examples:
            ```python
            doc.set(zone_id, name="Perimeter")   # surfaces follow the rename
            doc.set(mat_id, data={"Thickness": 0.3})
            ```
        """
        obj = self._store.get_active(obj_id)
        class_def = obj.class_def
        updates = self._resolve_values(class_def, values, data, fields)
        if not updates:
            return obj

        missing: list[str] = []
        for index, value in updates.items():
            field_def = class_def.field_def(index)
            if not value and field_def.required:
                if field_def.default is None:
                    missing.append(field_def.name)
                else:
                    updates[index] = field_def.default
        if missing:
            raise MissingRequiredFieldError(class_def.name, missing)

        violations = self._check_values(obj_id, class_def, updates)
        if violations:
            raise FieldValueError(violations)

        name_index = class_def.name_index
        old_name = obj.name or ""
        new_name = updates.get(name_index, old_name) if name_index is not None else old_name
        renamed = new_name != old_name
        case_change = new_name.upper() == old_name.upper()
        if renamed and new_name and not case_change and self._name_taken(class_def, new_name, obj_id):
            raise DuplicateNameError(class_def.name, new_name)
        if renamed and not new_name:
            referents = self._referent_details(obj_id)
            if referents:
                raise ReferencedObjectError(obj_id, old_name, referents, "Rename it instead of clearing its name.")

        old_values = obj.values
        new_values = list(old_values)
        if max(updates) >= len(new_values):
            new_values.extend([""] * (max(updates) + 1 - len(new_values)))
        for index, value in updates.items():
            new_values[index] = value

        self._store.set_values(obj, new_values)
        self._store.set_state(obj, ObjectState.MODIFIED)
        for index in updates:
            field_def = class_def.field_def(index)
            if field_def.target_classes:
                old_value = old_values[index] if index < len(old_values) else ""
                self._references.update_reference(obj_id, index, old_value, new_values[index], field_def.target_classes)
        self._log.append("set", obj_id, obj_id)

        if renamed and old_name:
            self._propagate_rename(obj, old_name, new_name)

        return obj

    def _propagate_rename(self, obj: IDFObject, old_name: str, new_name: str) -> None:
        old_upper = old_name.upper()
        for edge in self._references.on_rename(old_name, new_name, obj.class_name):
            referent = self._store[edge.source_id]
            if referent.values[edge.field_index].upper() != old_upper:
                continue
            values = list(referent.values)
            values[edge.field_index] = new_name
            self._store.set_values(referent, values)
            if referent.state == ObjectState.ACTIVE:
                self._store.set_state(referent, ObjectState.MODIFIED)
            self._log.append("set", referent.id, referent.id, active=referent.is_active)
        logger.debug("Renamed %s '%s' to '%s'", obj.class_name, old_name, new_name)

    def dup(self, obj_id: int, new_name: str | None = None) -> int:
        """
        Duplicate an active object.

        Without *new_name*, the copy is named ``<name>_1``, ``<name>_2``, ...
        using the first suffix not taken in the class.

        Returns:
            The new object's id

        Raises:
            UnknownIdError: If the object is unknown, deleted or hidden
            DuplicateUniqueObjectError: If the class is unique
            DuplicateNameError: If *new_name* is already used in the class
        """
        source = self._store.get_active(obj_id)
        class_def = source.class_def
        if class_def.unique:
            raise DuplicateUniqueObjectError(class_def.name, obj_id)

        values = list(source.values)
        name_index = class_def.name_index
        if name_index is not None:
            if name_index >= len(values):
                values.extend([""] * (name_index + 1 - len(values)))
            if new_name is not None:
                name = format_value(new_name)
                if name and self._name_taken(class_def, name):
                    raise DuplicateNameError(class_def.name, name)
                values[name_index] = name
            elif values[name_index]:
                suffix = 1
                while self._store.name_ids(class_def.name, f"{values[name_index]}_{suffix}"):
                    suffix += 1
                values[name_index] = f"{values[name_index]}_{suffix}"

        new_id = self._store.new_id()
        self._store.insert(IDFObject(new_id, class_def, values))
        self._references.register_object(new_id, class_def, values)
        self._log.append("dup", obj_id, new_id)
        logger.debug("Duplicated %s ID %d as ID %d", class_def.name, obj_id, new_id)
        return new_id

    def delete(self, obj_id: int, force: bool = False) -> None:
        """
        Soft-delete an active object.

        The object keeps its values but disappears from every query. With
        ``force=True``, fields that referenced it keep their stale value
        and are reported by the next :meth:`check`.

        Raises:
            UnknownIdError: If the object is unknown, deleted or hidden
            ReferencedObjectError: If other objects reference it and
                *force* is False
        """
        obj = self._store.get_active(obj_id)
        referents = self._referent_details(obj_id)
        if referents:
            if not force:
                raise ReferencedObjectError(obj_id, obj.name or "", referents)
            logger.warning(
                "Deleted %s '%s' (ID %d) is still referenced by %d field(s)",
                obj.class_name,
                obj.name,
                obj_id,
                len(referents),
            )

        self._store.set_state(obj, ObjectState.DELETED)
        self._references.unregister(obj_id)
        self._log.append("del", obj_id, obj_id, active=False)

    def hide(self, obj_id: int) -> None:
        """Hide an active object from queries; it is still written on save."""
        obj = self._store.get_active(obj_id)
        self._store.set_state(obj, ObjectState.HIDDEN)
        self._log.append("hide", obj_id, obj_id, active=False)

    # -------------------------------------------------------------------------
    # Change Log
    # -------------------------------------------------------------------------

    def _is_active(self, obj_id: int) -> bool:
        return obj_id in self._store and self._store[obj_id].is_active

    def diff(self, type: str = "all") -> list[LogEntry]:  # noqa: A002
        """
        Changes since the last read, save or reset.

        Args:
            type: ``all``, ``add`` (add and dup), ``set`` or ``del``. Add and
                set entries of objects deleted since are left out.
        """
        return self._log.diff(type, self._is_active)

    def diff_by_object(self, type: str = "all") -> dict[int, list[LogEntry]]:  # noqa: A002
        """:meth:`diff` grouped by object id."""
        return group_by_object(self.diff(type))

    # -------------------------------------------------------------------------
    # Validation and Output
    # -------------------------------------------------------------------------

    def check(self) -> ValidationResult:
        """Validate the whole model; never raises."""
        return validate_document(self)

    def to_idf(self, layout: str = "asis") -> str:
        """Serialize the model to IDF text."""
        return write_idf(self._store, self._schema, layout, hint=self.layout_hint, kind=self.kind, macros=self.macros)

    def serialize_for_simulation(self) -> str:
        """IDF text of the active objects for an EnergyPlus run."""
        return serialize_for_simulation(self._store, self._schema)

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def save(self, confirm: bool = False, layout: str = "asis") -> Path:
        """
        Overwrite the document's file.

        Raises:
            ValueError: If the document has no file path
            OverwriteNotConfirmedError: If *confirm* is not True
        """
        if self.filepath is None:
            msg = "Document has no file path; use saveas()"
            raise ValueError(msg)
        if not confirm:
            raise OverwriteNotConfirmedError(str(self.filepath))
        return self._write(self.filepath, layout)

    def saveas(self, path: Path | str, layout: str = "asis", overwrite: bool = False) -> Path:
        """
        Save to a new path, which becomes the document's file.

        Raises:
            OverwriteNotConfirmedError: If *path* exists and *overwrite* is not True
            ExtensionMismatchError: If an IMF model is saved as ``.idf``
        """
        path = Path(path)
        if path.exists() and not overwrite:
            raise OverwriteNotConfirmedError(str(path), "overwrite")
        self._write(path, layout)
        self.filepath = path
        return path

    def _check_extension(self, path: Path) -> None:
        extension = path.suffix.lower()
        if self.kind == IMF and extension == ".idf":
            raise ExtensionMismatchError(str(path), self.kind, path.suffix)
        expected = ".imf" if self.kind == IMF else ".idf"
        if extension != expected:
            warnings.warn(
                f"Saving {self.kind} content to a '{path.suffix}' file: {path}",
                UserWarning,
                stacklevel=3,
            )

    def _write(self, path: Path, layout: str) -> Path:
        """Write, re-read and checkpoint. Object ids survive the round-trip."""
        self._check_extension(path)
        macros = self.macros if self.kind == IMF else ()
        text, ids = render_idf(self._store, self._schema, layout, hint=self.layout_hint, macros=macros)
        data = text.encode("latin-1")

        with open(path, "wb") as f:
            f.write(data)

        saved = read_idf(path)
        parsed = parse_idf(saved, self._schema, ids=ids)
        parsed.store.reserve(self._store.next_id)
        self._install(parsed)
        self._saved_text = saved
        self._saved_ids = ids
        self._log.append("save")
        logger.info("Saved %d objects to %s", len(ids), path)
        return path

    def reset(self, confirm: bool = False) -> None:
        """
        Discard every change since the last save (or the initial read).

        Raises:
            ConfirmationRequiredError: If *confirm* is not True
        """
        if not confirm:
            msg = "Resetting discards all changes since the last save. Confirm by setting 'confirm=True'."
            raise ConfirmationRequiredError(msg)

        checkpoint = self._log.checkpoint.step
        parsed = parse_idf(self._saved_text, self._schema, ids=self._saved_ids)
        parsed.store.reserve(self._store.next_id)
        self._install(parsed)
        self._log = self._log.reset_to(checkpoint)
        logger.info("Reset model to log step %d", checkpoint)

    # -------------------------------------------------------------------------
    # String Representation
    # -------------------------------------------------------------------------

    def __len__(self) -> int:
        """Number of active objects."""
        return len(self._store.active())

    def __iter__(self) -> Iterator[IDFObject]:
        return iter(self._store.active())

    def __contains__(self, obj_id: object) -> bool:
        try:
            self._store.get_active(obj_id)
        except UnknownIdError:
            return False
        return True

    def __repr__(self) -> str:
        return f"IDFDocument(version={self.version}, objects={len(self)})"

    def __str__(self) -> str:
        lines = [
            f"[ Path    ]: {self.filepath or '<not saved>'}",
            f"[ Version ]: {self.version}",
            f"[ Type    ]: {self.kind}",
            f"[ Objects ]: {len(self)} active, {self._store.count(ObjectState.HIDDEN)} hidden, "
            f"{self._store.count(ObjectState.DELETED)} deleted",
        ]
        counts: dict[str, int] = {}
        for obj in self._store.active():
            counts[obj.class_name] = counts.get(obj.class_name, 0) + 1
        for class_name in sorted(counts, key=self._schema.class_order):
            lines.append(f"  {class_name}: {counts[class_name]}")
        return "\n".join(lines)
