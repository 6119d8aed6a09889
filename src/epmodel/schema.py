"""
Input Data Dictionary (IDD) parser and schema manager.

Parses ``Energy+.idd`` text into an immutable :class:`IDDSchema` and caches
parsed dictionaries per EnergyPlus version, so every document opened for the
same version shares one read-only schema.
"""

from __future__ import annotations

import logging
import os
import re
import sys
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, ClassVar

from .exceptions import InvalidFieldError, SchemaParseError, UnknownClassError, UnsupportedVersionError
from .objects import to_python_name
from .versions import (
    find_embedded_version,
    parse_version,
    same_release,
    short_version_string,
    version_dirname,
    version_string,
)

logger = logging.getLogger(__name__)

_FIELD_MARKER = re.compile(r"^[AN]\d+$", re.IGNORECASE)
_ANNOTATION = re.compile(r"^\\([A-Za-z\-]+)(?::(\d+)|([<>]))?\s*(.*)$")
_IDD_VERSION = re.compile(r"^!IDD_Version\s+(\S+)", re.IGNORECASE)
_IDD_BUILD = re.compile(r"^!IDD_BUILD\s+(\S+)", re.IGNORECASE)
_TOKEN_SPLIT = re.compile(r"([,;])")
_NUMBER_IN_NAME = re.compile(r"\d+")
_UNITS_SUFFIX = re.compile(r"\s*\{[^}]*\}\s*$")

NUMERIC_TYPES = frozenset({"integer", "real"})

# Annotations that always describe the class, even after the first field
_CLASS_KEYS = frozenset({
    "memo",
    "unique-object",
    "required-object",
    "min-fields",
    "extensible",
    "format",
    "obsolete",
})


@dataclass(frozen=True)
class FieldDef:
    """Definition of one field of an IDD class.

    Attributes:
        index: Zero-based position of the field in the object
        name: Field name as written in the dictionary (e.g. "Specific Heat")
        kind: "A" for alpha fields, "N" for numeric fields
        field_type: integer, real, alpha, choice, object-list, external-list or node
        required: Whether the field must hold a value
        default: Default value as written in the dictionary
        units: SI units, if any
        minimum: Lower bound for numeric fields
        minimum_exclusive: True when the lower bound itself is invalid
        maximum: Upper bound for numeric fields
        maximum_exclusive: True when the upper bound itself is invalid
        choices: Allowed values of a choice field
        object_lists: Reference lists this field may point into
        references: Reference lists this field provides names for
        target_classes: Classes whose names are valid values of this field
        autosizable: Whether "Autosize" is accepted
        autocalculatable: Whether "Autocalculate" is accepted
    """

    index: int
    name: str
    kind: str = "A"
    field_type: str = "alpha"
    required: bool = False
    default: str | None = None
    units: str | None = None
    minimum: float | None = None
    minimum_exclusive: bool = False
    maximum: float | None = None
    maximum_exclusive: bool = False
    choices: tuple[str, ...] = ()
    object_lists: tuple[str, ...] = ()
    references: tuple[str, ...] = ()
    target_classes: tuple[str, ...] = ()
    autosizable: bool = False
    autocalculatable: bool = False
    note: str | None = None

    @property
    def python_name(self) -> str:
        """Normalised field name, e.g. 'specific_heat'."""
        return to_python_name(self.name)

    @property
    def is_numeric(self) -> bool:
        return self.field_type in NUMERIC_TYPES

    @property
    def is_reference(self) -> bool:
        return bool(self.object_lists)

    @property
    def display_name(self) -> str:
        """Field name with units appended, as used in IDF field comments."""
        if self.units:
            return f"{self.name} {{{self.units}}}"
        return self.name


@dataclass(frozen=True)
class ClassDef:
    """Definition of an IDD class.

    Attributes:
        name: Class name (e.g. "Material")
        group: IDD group the class belongs to
        fields: Declared field definitions in order
        unique: At most one instance is allowed (``\\unique-object``)
        required: At least one instance is expected (``\\required-object``)
        min_fields: Number of fields written for a new object (``\\min-fields``)
        extensible: Size of the repeating field group, 0 if not extensible
        begin_extensible: Index of the first field of the repeating group
        name_index: Index of the field holding the object's name, if any
    """

    name: str
    group: str | None = None
    fields: tuple[FieldDef, ...] = ()
    unique: bool = False
    required: bool = False
    min_fields: int = 0
    extensible: int = 0
    begin_extensible: int | None = None
    format: str | None = None
    memo: str | None = None
    name_index: int | None = None

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]

    @property
    def required_fields(self) -> list[str]:
        return [f.name for f in self.fields if f.required]

    @property
    def is_extensible(self) -> bool:
        return self.extensible > 0 and self.begin_extensible is not None

    def field_def(self, index: int) -> FieldDef:
        """Return the definition of field *index*.

        Indexes past the declared fields of an extensible class are mapped
        onto the repeating group, renumbered ("Vertex 5 X-coordinate").

        Raises:
            IndexError: If the class has no field at *index*.
        """
        if 0 <= index < len(self.fields):
            return self.fields[index]
        if index < 0 or not self.is_extensible:
            msg = f"Field index {index} out of range for class '{self.name}'"
            raise IndexError(msg)

        start = self.begin_extensible or 0
        offset = index - start
        template = self.fields[start + offset % self.extensible]
        group = offset // self.extensible + 1
        name = _NUMBER_IN_NAME.sub(str(group), template.name, count=1)
        return replace(template, index=index, name=name, required=False)

    def field_index(self, key: int | str) -> int:
        """Resolve a field given by position, name, or normalised name.

        'Specific Heat', 'specific heat', 'specific_heat' and
        'Specific Heat {J/kg-K}' all resolve to the same index.

        Raises:
            InvalidFieldError: If *key* does not name a field of this class.
        """
        if isinstance(key, bool):
            raise InvalidFieldError(self.name, key, self.field_names)
        if isinstance(key, int):
            if key < 0 or (key >= len(self.fields) and not self.is_extensible):
                raise InvalidFieldError(self.name, key, self.field_names)
            return key

        name = _UNITS_SUFFIX.sub("", key).strip()
        for f in self.fields:
            if f.name == name:
                return f.index

        lowered = name.lower()
        for f in self.fields:
            if f.name.lower() == lowered:
                return f.index

        python_key = to_python_name(name)
        for f in self.fields:
            if f.python_name == python_key:
                return f.index

        raise InvalidFieldError(self.name, key, self.field_names)


class IDDSchema:
    """
    Parsed Input Data Dictionary.

    Immutable after construction and safe to share between documents.
    Class lookups are case-insensitive, as EnergyPlus treats class names.

    Attributes:
        version: Dictionary version string from the ``!IDD_Version`` header
        build: Build identifier from the ``!IDD_BUILD`` header
    """

    __slots__ = ("_by_upper", "_classes", "_order", "_reference_lists", "build", "version")

    version: str | None
    build: str | None
    _classes: dict[str, ClassDef]
    _by_upper: dict[str, ClassDef]
    _order: dict[str, int]
    _reference_lists: dict[str, list[str]]

    def __init__(self, classes: Sequence[ClassDef], version: str | None = None, build: str | None = None) -> None:
        self.version = version
        self.build = build
        self._classes = {c.name: c for c in classes}
        self._by_upper = {c.name.upper(): c for c in classes}
        self._order = {c.name: i for i, c in enumerate(classes)}

        self._reference_lists: dict[str, list[str]] = {}
        for class_def in classes:
            for f in class_def.fields:
                for ref_list in f.references:
                    providers = self._reference_lists.setdefault(ref_list, [])
                    if class_def.name not in providers:
                        providers.append(class_def.name)

    @property
    def version_tuple(self) -> tuple[int, int, int] | None:
        """The dictionary version as a tuple, if the header declared one."""
        return parse_version(self.version) if self.version else None

    def class_names(self) -> list[str]:
        """All class names in declaration order."""
        return list(self._classes)

    def get_class(self, class_name: str) -> ClassDef:
        """Return the definition of *class_name* (case-insensitive).

        Raises:
            UnknownClassError: If the dictionary has no such class.
        """
        class_def = self._by_upper.get(class_name.upper())
        if class_def is None:
            raise UnknownClassError(class_name)
        return class_def

    def has_class(self, class_name: str) -> bool:
        return class_name.upper() in self._by_upper

    def canonical_name(self, class_name: str) -> str:
        """Return the class name spelled as in the dictionary."""
        return self.get_class(class_name).name

    def field_defs(self, class_name: str) -> tuple[FieldDef, ...]:
        return self.get_class(class_name).fields

    def is_unique(self, class_name: str) -> bool:
        return self.get_class(class_name).unique

    def min_fields(self, class_name: str) -> int:
        return self.get_class(class_name).min_fields

    def class_order(self, class_name: str) -> int:
        """Declaration position of a class, used for sorted output."""
        return self._order[self.canonical_name(class_name)]

    def get_types_providing_reference(self, ref_list: str) -> list[str]:
        """Get classes that provide names for a reference list."""
        return list(self._reference_lists.get(ref_list, []))

    @property
    def reference_lists(self) -> list[str]:
        return list(self._reference_lists)

    def groups(self) -> dict[str, list[str]]:
        """Map each IDD group to its class names, in declaration order."""
        result: dict[str, list[str]] = {}
        for class_def in self._classes.values():
            result.setdefault(class_def.group or "", []).append(class_def.name)
        return result

    def __contains__(self, class_name: object) -> bool:
        return isinstance(class_name, str) and self.has_class(class_name)

    def __iter__(self) -> Iterator[ClassDef]:
        return iter(self._classes.values())

    def __len__(self) -> int:
        return len(self._classes)

    def __repr__(self) -> str:
        return f"IDDSchema(version={self.version}, classes={len(self)})"


# -----------------------------------------------------------------------------
# Parsing
# -----------------------------------------------------------------------------


def _parse_bound(value: str, line: int) -> float:
    try:
        return float(value)
    except ValueError:
        raise SchemaParseError(f"Invalid numeric bound '{value}'", line) from None


def _apply_class_annotation(cls: dict[str, Any], key: str, size: str | None, value: str, line: int) -> None:
    if key == "memo":
        cls["memo"].append(value)
    elif key == "unique-object":
        cls["unique"] = True
    elif key == "required-object":
        cls["required"] = True
    elif key == "min-fields":
        try:
            cls["min_fields"] = int(value.split()[0])
        except (ValueError, IndexError):
            raise SchemaParseError(f"Invalid \\min-fields value '{value}'", line) from None
    elif key == "extensible":
        if size is None:
            raise SchemaParseError("\\extensible requires a group size, e.g. \\extensible:3", line)
        cls["extensible"] = int(size)
    elif key == "format":
        cls["format"] = value.split()[0] if value else None


def _apply_field_annotation(  # noqa: C901
    cls: dict[str, Any],
    fld: dict[str, Any],
    key: str,
    comparator: str | None,
    value: str,
    line: int,
) -> None:
    if key == "field":
        fld["name"] = value
    elif key == "required-field":
        fld["required"] = True
    elif key == "default":
        fld["default"] = value
    elif key == "units":
        fld["units"] = value
    elif key == "type":
        fld["field_type"] = value.lower()
    elif key in ("key", "choice"):
        fld["choices"].append(value)
    elif key == "object-list":
        fld["object_lists"].append(value)
    elif key == "reference":
        fld["references"].append(value)
    elif key == "autosizable":
        fld["autosizable"] = True
    elif key == "autocalculatable":
        fld["autocalculatable"] = True
    elif key == "note":
        fld["note"].append(value)
    elif key == "begin-extensible":
        cls["begin_extensible"] = fld["index"]
    elif key == "minimum":
        fld["minimum"] = _parse_bound(value, line)
        fld["minimum_exclusive"] = comparator == ">"
    elif key == "maximum":
        fld["maximum"] = _parse_bound(value, line)
        fld["maximum_exclusive"] = comparator == "<"


def _new_class(name: str, group: str | None, line: int) -> dict[str, Any]:
    return {
        "name": name,
        "group": group,
        "line": line,
        "fields": [],
        "memo": [],
        "unique": False,
        "required": False,
        "min_fields": 0,
        "extensible": 0,
        "begin_extensible": None,
        "format": None,
    }


def _new_field(marker: str, index: int) -> dict[str, Any]:
    return {
        "index": index,
        "marker": marker.upper(),
        "name": None,
        "field_type": None,
        "required": False,
        "default": None,
        "units": None,
        "minimum": None,
        "minimum_exclusive": False,
        "maximum": None,
        "maximum_exclusive": False,
        "choices": [],
        "object_lists": [],
        "references": [],
        "autosizable": False,
        "autocalculatable": False,
        "note": [],
    }


def _resolve_field_type(fld: dict[str, Any]) -> str:
    if fld["field_type"]:
        return str(fld["field_type"])
    if fld["choices"]:
        return "choice"
    if fld["object_lists"]:
        return "object-list"
    return "real" if fld["marker"].startswith("N") else "alpha"


def _finalize(raw_classes: list[dict[str, Any]], version: str | None, build: str | None) -> IDDSchema:
    """Freeze builder dicts into ClassDefs with resolved reference targets."""
    providers: dict[str, list[str]] = {}
    for cls in raw_classes:
        for fld in cls["fields"]:
            for ref_list in fld["references"]:
                names = providers.setdefault(ref_list, [])
                if cls["name"] not in names:
                    names.append(cls["name"])

    classes: list[ClassDef] = []
    for cls in raw_classes:
        fields: list[FieldDef] = []
        for fld in cls["fields"]:
            targets: list[str] = []
            for obj_list in fld["object_lists"]:
                for target in providers.get(obj_list, []):
                    if target not in targets:
                        targets.append(target)
            fields.append(
                FieldDef(
                    index=fld["index"],
                    name=fld["name"] or fld["marker"],
                    kind=fld["marker"][0],
                    field_type=_resolve_field_type(fld),
                    required=fld["required"],
                    default=fld["default"],
                    units=fld["units"],
                    minimum=fld["minimum"],
                    minimum_exclusive=fld["minimum_exclusive"],
                    maximum=fld["maximum"],
                    maximum_exclusive=fld["maximum_exclusive"],
                    choices=tuple(fld["choices"]),
                    object_lists=tuple(fld["object_lists"]),
                    references=tuple(fld["references"]),
                    target_classes=tuple(targets),
                    autosizable=fld["autosizable"],
                    autocalculatable=fld["autocalculatable"],
                    note=" ".join(fld["note"]) or None,
                )
            )

        name_index: int | None = next((f.index for f in fields if f.references), None)
        if name_index is None and fields and fields[0].name.lower() == "name":
            name_index = 0

        classes.append(
            ClassDef(
                name=cls["name"],
                group=cls["group"],
                fields=tuple(fields),
                unique=cls["unique"],
                required=cls["required"],
                min_fields=cls["min_fields"],
                extensible=cls["extensible"],
                begin_extensible=cls["begin_extensible"],
                format=cls["format"],
                memo=" ".join(cls["memo"]) or None,
                name_index=name_index,
            )
        )

    return IDDSchema(classes, version=version, build=build)


def parse_idd(text: str) -> IDDSchema:  # noqa: C901
    """
    Parse Input Data Dictionary text into an :class:`IDDSchema`.

    Args:
        text: Contents of an ``Energy+.idd`` file

    Returns:
        The parsed, immutable schema

    Raises:
        SchemaParseError: On field markers or annotations outside a class,
            duplicate classes, invalid bounds, or a class whose field list
            is not terminated by ``;``.

    Examples:
        ```python
        schema = parse_idd(Path("Energy+.idd").read_text(encoding="latin-1"))
        schema.get_class("Material").min_fields
        ```
    """
    version: str | None = None
    build: str | None = None
    group: str | None = None
    raw_classes: list[dict[str, Any]] = []
    seen: set[str] = set()
    current: dict[str, Any] | None = None
    fld: dict[str, Any] | None = None
    closed = True
    lineno = 0

    for lineno, raw in enumerate(text.splitlines(), 1):
        line = raw.strip()
        if not line:
            continue

        if line.startswith("!"):
            if (m := _IDD_VERSION.match(line)) is not None:
                version = m.group(1)
            elif (m := _IDD_BUILD.match(line)) is not None:
                build = m.group(1)
            continue

        head, sep, tail = line.partition("\\")

        for token in _TOKEN_SPLIT.split(head):
            token = token.strip()
            if not token or token == ",":
                continue
            if token == ";":
                if current is None or closed:
                    raise SchemaParseError("Unexpected ';' outside of a class", lineno)
                closed = True
                continue
            if _FIELD_MARKER.match(token):
                if current is None or closed:
                    raise SchemaParseError(f"Field marker '{token}' outside of a class", lineno)
                fld = _new_field(token, len(current["fields"]))
                current["fields"].append(fld)
                continue
            if not closed and current is not None:
                raise SchemaParseError(f"Class '{current['name']}' is not terminated by ';' before '{token}'", lineno)
            if token.upper() in seen:
                raise SchemaParseError(f"Duplicate class '{token}'", lineno)
            seen.add(token.upper())
            current = _new_class(token, group, lineno)
            raw_classes.append(current)
            fld = None
            closed = False

        if not sep:
            continue

        match = _ANNOTATION.match("\\" + tail)
        if match is None:
            raise SchemaParseError(f"Malformed annotation '\\{tail}'", lineno)
        key = match.group(1).lower()
        size = match.group(2)
        comparator = match.group(3)
        value = match.group(4).strip()

        if key == "group":
            if not closed:
                name = current["name"] if current else "?"
                raise SchemaParseError(f"Class '{name}' is not terminated by ';' before group", lineno)
            group = value
            continue
        if current is None:
            raise SchemaParseError(f"Annotation '\\{key}' outside of a class", lineno)
        if key in _CLASS_KEYS:
            _apply_class_annotation(current, key, size, value, lineno)
        elif fld is not None:
            _apply_field_annotation(current, fld, key, comparator, value, lineno)

    if not closed and current is not None:
        raise SchemaParseError(f"Class '{current['name']}' is not terminated by ';'", lineno)

    schema = _finalize(raw_classes, version, build)
    logger.debug("Parsed IDD version %s with %d classes", version, len(schema))
    return schema


# -----------------------------------------------------------------------------
# Schema manager
# -----------------------------------------------------------------------------

_IDD_FILENAME = "Energy+.idd"


def _read_idd_version(path: Path) -> str | None:
    """Read the ``!IDD_Version`` header without parsing the whole file."""
    with open(path, encoding="latin-1") as f:
        for _ in range(20):
            line = f.readline()
            if not line:
                break
            m = _IDD_VERSION.match(line.strip())
            if m is not None:
                return m.group(1)
    return None


class SchemaManager:
    """
    Manages loading and caching of IDD schemas for different versions.

    Searches for dictionaries in the following order:
    1. Bundled dictionaries directory (shipped with epmodel)
    2. ``ENERGYPLUS_DIR`` environment variable
    3. EnergyPlus installation directories

    An explicit ``idd_path`` bypasses the search entirely.
    """

    # Common EnergyPlus installation paths by platform
    _INSTALL_PATHS: ClassVar[dict[str, list[str]]] = {
        "linux": ["/usr/local/EnergyPlus-{v}", "/opt/EnergyPlus-{v}"],
        "darwin": ["/Applications/EnergyPlus-{v}"],
        "win32": [
            "C:\\EnergyPlusV{v}",
            "C:\\EnergyPlus-{v}",
            os.path.expandvars("$LOCALAPPDATA\\EnergyPlusV{v}"),
        ],
    }

    def __init__(
        self,
        bundled_idd_dir: Path | None = None,
        search_paths: Sequence[Path | str] | None = None,
    ):
        """
        Initialize the schema manager.

        Args:
            bundled_idd_dir: Directory with bundled ``V<x>-<y>-<z>/Energy+.idd``
                files. If None, uses the ``idd`` directory next to this file.
            search_paths: Directories to look in for an ``Energy+.idd`` when
                no bundled dictionary matches. If None, ``ENERGYPLUS_DIR`` and
                the standard installation directories are used.
        """
        if bundled_idd_dir is None:
            bundled_idd_dir = Path(__file__).parent / "idd"

        self._bundled_dir = bundled_idd_dir
        self._search_paths = [Path(p) for p in search_paths] if search_paths is not None else None
        self._cache: dict[str, IDDSchema] = {}
        self._file_cache: dict[Path, IDDSchema] = {}

    @property
    def bundled_dir(self) -> Path:
        """Path to the bundled dictionaries directory."""
        return self._bundled_dir

    def get_schema(self, version: str | tuple[int, ...], idd_path: Path | str | None = None) -> IDDSchema:
        """
        Return the schema for an IDF version string.

        Args:
            version: Version as found in the IDF (e.g. "8.8") or a tuple
            idd_path: Explicit ``Energy+.idd`` to parse instead of searching

        Returns:
            The cached or freshly parsed IDDSchema

        Raises:
            UnsupportedVersionError: If no dictionary matches *version*
            SchemaParseError: If the dictionary is malformed
        """
        if idd_path is not None:
            return self.load_idd(idd_path)

        try:
            v = parse_version(version)
        except ValueError:
            raise UnsupportedVersionError(str(version)) from None
        key = short_version_string(v)
        if key in self._cache:
            return self._cache[key]

        path = self._find_idd_file(v)
        if path is None:
            raise UnsupportedVersionError(version_string(v), self._get_searched_paths(v))

        schema = self.load_idd(path)
        self._cache[key] = schema
        return schema

    def load_idd(self, path: Path | str) -> IDDSchema:
        """Parse an ``Energy+.idd`` file, reusing the result for repeated paths."""
        resolved = Path(path).resolve()
        cached = self._file_cache.get(resolved)
        if cached is not None:
            return cached

        if not resolved.exists():
            raise FileNotFoundError(f"IDD file not found: {resolved}")  # noqa: TRY003

        logger.info("Parsing IDD file %s", resolved)
        with open(resolved, encoding="latin-1") as f:
            text = f.read()
        schema = parse_idd(text)
        self._file_cache[resolved] = schema
        return schema

    def _find_idd_file(self, version: tuple[int, int, int]) -> Path | None:
        embedded = find_embedded_version(version)
        if embedded is not None:
            path = self._bundled_dir / version_dirname(embedded) / _IDD_FILENAME
            if path.exists():
                return path

        for path in self._get_install_paths(version):
            if not path.exists():
                continue
            found = _read_idd_version(path)
            if found is None or same_release(parse_version(found), version):
                return path
            logger.debug("Skipping %s: dictionary version %s does not match %s", path, found, version)

        return None

    def _get_searched_paths(self, version: tuple[int, int, int]) -> list[str]:
        paths = [str(self._bundled_dir / version_dirname(version) / _IDD_FILENAME)]
        paths.extend(str(p) for p in self._get_install_paths(version))
        return paths

    def _get_install_paths(self, version: tuple[int, int, int]) -> list[Path]:
        """Get potential EnergyPlus installation dictionary paths."""
        if self._search_paths is not None:
            return [p / _IDD_FILENAME for p in self._search_paths]

        paths: list[Path] = []
        env_dir = os.environ.get("ENERGYPLUS_DIR")
        if env_dir:
            paths.append(Path(env_dir) / _IDD_FILENAME)

        base_patterns = self._INSTALL_PATHS.get(sys.platform, self._INSTALL_PATHS["linux"])
        v = version
        version_formats = [
            f"{v[0]}-{v[1]}-{v[2]}",
            f"{v[0]}.{v[1]}.{v[2]}",
            f"{v[0]}-{v[1]}",
        ]
        for base_pattern in base_patterns:
            for v_fmt in version_formats:
                paths.append(Path(base_pattern.format(v=v_fmt)) / _IDD_FILENAME)

        return paths

    def get_available_versions(self) -> list[tuple[int, int, int]]:
        """Versions with a bundled dictionary."""
        versions: list[tuple[int, int, int]] = []
        if self._bundled_dir.exists():
            for item in sorted(self._bundled_dir.iterdir()):
                if item.is_dir() and (item / _IDD_FILENAME).exists():
                    versions.append(parse_version(item.name.lstrip("Vv").replace("-", ".")))
        return sorted(versions)

    def clear_cache(self) -> None:
        """Clear the schema caches."""
        self._cache.clear()
        self._file_cache.clear()


# Global schema manager instance
_schema_manager: SchemaManager | None = None


def get_schema_manager() -> SchemaManager:
    """Get the global schema manager instance."""
    global _schema_manager
    if _schema_manager is None:
        _schema_manager = SchemaManager()
    return _schema_manager


def get_schema(version: str | tuple[int, ...], idd_path: Path | str | None = None) -> IDDSchema:
    """Convenience function to get the schema for a version."""
    return get_schema_manager().get_schema(version, idd_path)


def parse_idd_file(path: Path | str) -> IDDSchema:
    """Parse (and cache) an explicit ``Energy+.idd`` file."""
    return get_schema_manager().load_idd(path)
