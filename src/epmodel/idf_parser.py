"""
IDF parser - parses EnergyPlus IDF/IMF text into an ObjectStore.

Features:
- Line-based tokenization that keeps line numbers for error messages
- Full-line ``!`` comments attached to the following object
- ``##`` macro lines collected (the file becomes an IMF)
- ``!-Option`` layout hint detection for round-trip
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, NamedTuple

from .exceptions import IdfSyntaxError, MissingVersionError
from .objects import IDFObject
from .store import ObjectStore

if TYPE_CHECKING:
    from .schema import IDDSchema

logger = logging.getLogger(__name__)

# Regex patterns for parsing
_VERSION_PATTERN = re.compile(
    r"(?:^|;)\s*VERSION\s*,\s*([^;,\s]+)\s*[;,]",
    re.IGNORECASE | re.MULTILINE,
)

_COMMENT_PATTERN = re.compile(r"!.*$", re.MULTILINE)

_SEPARATOR_PATTERN = re.compile(r"([,;])")

_OPTION_PATTERN = re.compile(r"^!-\s*Option\s+(.*)$", re.IGNORECASE)

#: ``!-Option`` keywords and the layouts they select.
LAYOUT_OPTIONS: dict[str, str] = {
    "SORTEDORDER": "sorted",
    "ORIGINALORDERTOP": "original_top",
    "ORIGINALORDERBOTTOM": "original_bottom",
}

IDF = "IDF"
IMF = "IMF"


class _Block(NamedTuple):
    line: int
    fields: list[str]
    comments: list[str]


@dataclass
class ParsedIDF:
    """Result of parsing IDF text.

    Attributes:
        store: Parsed objects, ids in file order
        version: First field of the Version object, if present
        layout: Layout selected by the ``!-Option`` header, if any
        kind: "IMF" when macro lines were found, else "IDF"
        macros: ``##`` macro lines in file order
    """

    store: ObjectStore
    version: str | None = None
    layout: str | None = None
    kind: str = IDF
    macros: list[str] = field(default_factory=list)


def parse_idf(
    text: str,
    schema: IDDSchema,
    *,
    ids: Sequence[int] | None = None,
    start_id: int = 1,
) -> ParsedIDF:
    """
    Parse IDF text against a schema.

    Args:
        text: IDF or IMF text
        schema: Schema the objects are checked against
        ids: Explicit ids for the parsed objects, in file order. Used to keep
            ids stable when a document re-reads its own saved file.
        start_id: First id to assign when *ids* is not given

    Returns:
        ParsedIDF holding the ObjectStore and file metadata

    Raises:
        IdfSyntaxError: On unterminated objects, empty or unknown class
            names, or too many fields for a non-extensible class

    Examples:
        ```python
        schema = get_schema("8.8")
        parsed = parse_idf(Path("in.idf").read_text(encoding="latin-1"), schema)
        parsed.store.by_class("Zone")
        ```
    """
    return IDFParser(schema).parse(text, ids=ids, start_id=start_id)


class IDFParser:
    """
    Parser for IDF text.

    Splits text into semicolon-terminated blocks, then resolves each block
    against the schema.
    """

    __slots__ = ("_schema",)

    _schema: IDDSchema

    def __init__(self, schema: IDDSchema):
        self._schema = schema

    def parse(self, text: str, *, ids: Sequence[int] | None = None, start_id: int = 1) -> ParsedIDF:
        """Parse *text* into a ParsedIDF."""
        result = ParsedIDF(store=ObjectStore(start_id))
        blocks = list(self._tokenize(text, result))

        if ids is not None and len(ids) != len(blocks):
            msg = f"Got {len(ids)} ids for {len(blocks)} objects"
            raise ValueError(msg)

        store = result.store
        for i, block in enumerate(blocks):
            obj_id = ids[i] if ids is not None else store.new_id()
            obj = self._build_object(obj_id, block)
            store.insert(obj)
            if result.version is None and obj.class_name.upper() == "VERSION" and obj.values:
                result.version = obj.values[0]

        store.mark_baseline()
        logger.debug("Parsed %d objects (%s, layout=%s)", len(store), result.kind, result.layout)
        return result

    def _tokenize(self, text: str, result: ParsedIDF) -> Iterator[_Block]:  # noqa: C901
        fields: list[str] = []
        current = ""
        block_start: int | None = None
        comments: list[str] = []
        seen_object = False

        for lineno, raw in enumerate(text.splitlines(), 1):
            stripped = raw.strip()
            if not stripped:
                continue

            # Inside an object, a line starting with ## is field text.
            if stripped.startswith("##") and block_start is None:
                result.macros.append(stripped)
                result.kind = IMF
                continue

            if stripped.startswith("!-"):
                if not seen_object and block_start is None:
                    self._read_option(stripped, result)
                continue

            if stripped.startswith("!"):
                if block_start is None:
                    comments.append(stripped)
                continue

            content = raw.split("!", 1)[0]
            for piece in _SEPARATOR_PATTERN.split(content):
                if piece in (",", ";"):
                    if block_start is None:
                        block_start = lineno
                    fields.append(current.strip())
                    current = ""
                    if piece == ";":
                        yield _Block(block_start, fields, comments)
                        seen_object = True
                        fields, comments, block_start = [], [], None
                    continue
                piece = piece.strip()
                if not piece:
                    continue
                if block_start is None:
                    block_start = lineno
                current = f"{current} {piece}" if current else piece

        if block_start is not None:
            raise IdfSyntaxError("Object is not terminated by ';'", block_start)

    @staticmethod
    def _read_option(line: str, result: ParsedIDF) -> None:
        match = _OPTION_PATTERN.match(line)
        if match is None:
            return
        for token in match.group(1).split():
            layout = LAYOUT_OPTIONS.get(token.upper())
            if layout is not None:
                result.layout = layout

    def _build_object(self, obj_id: int, block: _Block) -> IDFObject:
        class_name = block.fields[0]
        if not class_name:
            raise IdfSyntaxError("Object has no class name", block.line)
        if not self._schema.has_class(class_name):
            raise IdfSyntaxError(f"Unknown class '{class_name}'", block.line)

        class_def = self._schema.get_class(class_name)
        values = block.fields[1:]
        if not class_def.is_extensible and len(values) > len(class_def.fields):
            while len(values) > len(class_def.fields) and not values[-1]:
                values.pop()
            if len(values) > len(class_def.fields):
                msg = f"'{class_def.name}' takes at most {len(class_def.fields)} fields, got {len(values)}"
                raise IdfSyntaxError(msg, block.line)

        return IDFObject(obj_id, class_def, values, comments=block.comments)


def detect_version(text: str, source: str | None = None) -> str:
    """
    Return the first field of the Version object.

    Raises:
        MissingVersionError: If the text has no Version object
    """
    match = _VERSION_PATTERN.search(_COMMENT_PATTERN.sub("", text))
    if match is None:
        raise MissingVersionError(source)
    return match.group(1)


def read_idf(filepath: Path | str, encoding: str = "latin-1") -> str:
    """Read IDF text from a file."""
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"IDF file not found: {filepath}")  # noqa: TRY003
    with open(filepath, encoding=encoding) as f:
        return f.read()


def get_idf_version(filepath: Path | str, encoding: str = "latin-1") -> str:
    """
    Quick version detection without full parsing.

    Args:
        filepath: Path to IDF file

    Returns:
        Version string as written in the file (e.g. "8.8")

    Raises:
        MissingVersionError: If the file has no Version object
    """
    return detect_version(read_idf(filepath, encoding), str(filepath))
