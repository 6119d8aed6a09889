"""
epmodel: read, edit, validate and save EnergyPlus IDF/IMF models.

This package parses an Input Data Dictionary (IDD) into a shared schema and
edits models against it, with reference tracking, schema-driven validation,
a change log with reset-to-last-save, and IDFEditor-style output layouts.

Basic usage:
    from epmodel import load_idf

    # Load an IDF file (the schema is picked from its Version object)
    model = load_idf("building.idf")

    # Query and edit
    zone_id = model.all("id", "Zone")[0]
    model.set(zone_id, name="Core")      # surfaces follow the rename

    # Check and write back
    print(model.check())
    model.saveas("modified.idf")
"""

from __future__ import annotations

__version__ = "0.1.0"

import logging
from pathlib import Path

# Change log
from .changelog import ChangeLog, LogEntry

# Core classes
from .document import IDFDocument

# Exceptions
from .exceptions import (
    ConfirmationRequiredError,
    DuplicateNameError,
    DuplicateUniqueObjectError,
    EpModelError,
    ExtensionMismatchError,
    FieldValueError,
    IdfSyntaxError,
    InvalidFieldError,
    MissingRequiredFieldError,
    MissingVersionError,
    OverwriteNotConfirmedError,
    ReferencedObjectError,
    SchemaParseError,
    UnknownClassError,
    UnknownIdError,
    UnsupportedVersionError,
)

# Parsing functions
from .idf_parser import IDFParser, ParsedIDF, detect_version, get_idf_version, parse_idf

# Introspection
from .introspection import FieldDescription, ObjectDescription
from .objects import IDFObject, ObjectState

# Reference tracking
from .references import ReferenceGraph

# Schema
from .schema import ClassDef, FieldDef, IDDSchema, SchemaManager, get_schema, get_schema_manager, parse_idd
from .store import ObjectStore

# Validation
from .validation import ValidationResult, Violation, ViolationKind, check_field, check_model, validate_document

# Version registry
from .versions import (
    ENERGYPLUS_VERSIONS,
    LATEST_VERSION,
    MINIMUM_VERSION,
    short_version_string,
)

# Writers
from .writers import serialize_for_simulation, write_idf

logging.getLogger(__name__).addHandler(logging.NullHandler())


def load_idf(path: str | Path, idd: IDDSchema | str | Path | None = None) -> IDFDocument:
    """
    Load an IDF or IMF file and return an IDFDocument.

    Args:
        path: Path to the model file
        idd: Schema, or path of an ``Energy+.idd`` to use instead of the
            dictionary matching the file's Version object

    Returns:
        Parsed IDFDocument

    Examples:
        ```python
        model = load_idf("5ZoneAirCooled.idf")
        print(model)
        ```

        Use a dictionary from a local EnergyPlus install:

        ```python
        model = load_idf("legacy.idf", idd="/usr/local/EnergyPlus-9-2-0/Energy+.idd")
        ```
    """
    return IDFDocument.from_file(path, idd)


def new_document(
    version: str | tuple[int, ...] = LATEST_VERSION,
    idd: IDDSchema | str | Path | None = None,
) -> IDFDocument:
    """
    Create a new model holding only a Version object.

    Args:
        version: EnergyPlus version (default: latest bundled version)
        idd: Schema or ``Energy+.idd`` path to use instead of the bundled one

    Returns:
        IDFDocument with no file path; use :meth:`IDFDocument.saveas`

    Examples:
        ```python
        model = new_document()
        zone_id = model.add("Zone", "Office")
        model.all("class")   # ['Version', 'Zone']
        ```
    """
    from .versions import parse_version

    text = f"Version,{short_version_string(parse_version(version))};\n"
    return IDFDocument.from_text(text, idd)


__all__ = [
    "ENERGYPLUS_VERSIONS",
    "LATEST_VERSION",
    "MINIMUM_VERSION",
    "ChangeLog",
    "ClassDef",
    "ConfirmationRequiredError",
    "DuplicateNameError",
    "DuplicateUniqueObjectError",
    "EpModelError",
    "ExtensionMismatchError",
    "FieldDef",
    "FieldDescription",
    "FieldValueError",
    "IDDSchema",
    "IDFDocument",
    "IDFObject",
    "IDFParser",
    "IdfSyntaxError",
    "InvalidFieldError",
    "LogEntry",
    "MissingRequiredFieldError",
    "MissingVersionError",
    "ObjectDescription",
    "ObjectState",
    "ObjectStore",
    "OverwriteNotConfirmedError",
    "ParsedIDF",
    "ReferenceGraph",
    "ReferencedObjectError",
    "SchemaManager",
    "SchemaParseError",
    "UnknownClassError",
    "UnknownIdError",
    "UnsupportedVersionError",
    "ValidationResult",
    "Violation",
    "ViolationKind",
    "__version__",
    "check_field",
    "check_model",
    "detect_version",
    "get_idf_version",
    "get_schema",
    "get_schema_manager",
    "load_idf",
    "new_document",
    "parse_idf",
    "parse_idd",
    "serialize_for_simulation",
    "validate_document",
    "write_idf",
]
