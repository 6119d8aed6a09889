"""
IDF writer - serializes an ObjectStore back to IDF text.

Output follows the IDFEditor conventions: an ``!-Option`` header recording
the layout, one field per line with ``!-`` field comments, and class
banners in sorted layout.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from .objects import IDFObject, ObjectState

if TYPE_CHECKING:
    from .schema import IDDSchema
    from .store import ObjectStore

LAYOUTS = ("asis", "sorted", "original_top", "original_bottom")

_OPTION_NAMES = {
    "sorted": "SortedOrder",
    "original_top": "OriginalOrderTop",
    "original_bottom": "OriginalOrderBottom",
}

_FIELD_COLUMN = 25

_HEADER_NOTE = (
    "!-NOTE: All comments with '!-' are ignored by the IDFEditor and are generated automatically.",
    "!-      Use '!' comments if they need to be retained when using the IDFEditor.",
)


def resolve_layout(layout: str, hint: str | None = None) -> str:
    """Turn ``asis`` into the parse-time hint, falling back to ``sorted``.

    Raises:
        ValueError: For an unknown layout name.
    """
    if layout not in LAYOUTS:
        msg = f"Invalid layout {layout!r}; expected one of: {', '.join(LAYOUTS)}"
        raise ValueError(msg)
    if layout == "asis":
        return hint or "sorted"
    return layout


def ordered_objects(
    store: ObjectStore,
    schema: IDDSchema,
    layout: str = "asis",
    *,
    hint: str | None = None,
    include_hidden: bool = True,
) -> list[IDFObject]:
    """
    Objects to write, in output order.

    ``sorted`` groups by class in schema declaration order. The original
    layouts keep the file order of objects read at the last parse and put
    objects created since then first (``original_top``) or last
    (``original_bottom``). Deleted objects are never written.
    """
    resolved = resolve_layout(layout, hint)
    objects = [
        o
        for o in store
        if o.state != ObjectState.DELETED and (include_hidden or o.state != ObjectState.HIDDEN)
    ]

    if resolved == "sorted":
        return sorted(objects, key=lambda o: schema.class_order(o.class_name))

    baseline = store.baseline_ids
    existing = [o for o in objects if o.id in baseline]
    new = [o for o in objects if o.id not in baseline]
    if resolved == "original_top":
        return new + existing
    return existing + new


def _field_count(obj: IDFObject) -> int:
    """Number of fields to write: trailing empties beyond min-fields are dropped."""
    values = obj.values
    end = len(values)
    while end > 0 and not values[end - 1]:
        end -= 1
    return max(end, min(len(values), obj.class_def.min_fields))


def format_object(obj: IDFObject) -> list[str]:
    """Format one object as IDF lines, preceded by its ``!`` comments."""
    class_def = obj.class_def
    values = obj.values[: _field_count(obj)]
    lines = list(obj.comments)

    if not values:
        lines.append(f"{class_def.name};")
        return lines

    if (class_def.format or "").lower() == "singleline":
        lines.append(f"{class_def.name},{','.join(values)};")
        return lines

    lines.append(f"{class_def.name},")
    last = len(values) - 1
    for i, value in enumerate(values):
        sep = ";" if i == last else ","
        text = f"{value}{sep}"
        padded = text.ljust(_FIELD_COLUMN) if len(text) < _FIELD_COLUMN else f"{text}  "
        lines.append(f"    {padded}!- {class_def.field_def(i).display_name}")
    return lines


def render_idf(
    store: ObjectStore,
    schema: IDDSchema,
    layout: str = "asis",
    *,
    hint: str | None = None,
    macros: Sequence[str] = (),
    include_hidden: bool = True,
) -> tuple[str, list[int]]:
    """
    Render IDF text and report the order objects were emitted in.

    Returns:
        Tuple of (text, emitted object ids)
    """
    from . import __version__

    resolved = resolve_layout(layout, hint)
    objects = ordered_objects(store, schema, resolved, include_hidden=include_hidden)

    lines = [f"!-Generator epmodel {__version__}", f"!-Option {_OPTION_NAMES[resolved]}", "", *_HEADER_NOTE, ""]
    if macros:
        lines.extend(macros)
        lines.append("")

    current_class: str | None = None
    for obj in objects:
        if resolved == "sorted" and obj.class_name != current_class:
            current_class = obj.class_name
            lines.append(f"!-   ===========  ALL OBJECTS IN CLASS: {current_class.upper()} ===========")
            lines.append("")
        lines.extend(format_object(obj))
        lines.append("")

    return "\n".join(lines) + "\n", [o.id for o in objects]


def write_idf(
    store: ObjectStore,
    schema: IDDSchema,
    layout: str = "asis",
    *,
    hint: str | None = None,
    kind: str = "IDF",
    macros: Sequence[str] = (),
) -> str:
    """
    Serialize a store to IDF text.

    Args:
        store: Objects to write
        schema: Schema providing class order and field names
        layout: ``asis``, ``sorted``, ``original_top`` or ``original_bottom``
        hint: Layout detected at parse time, used by ``asis``
        kind: "IDF" or "IMF"; macro lines are only written for IMF
        macros: ``##`` macro lines, written at the top of the file

    Returns:
        The IDF text

    Examples:
        ```python
        text = write_idf(doc.store, doc.schema, "sorted")
        ```
    """
    text, _ = render_idf(store, schema, layout, hint=hint, macros=macros if kind == "IMF" else ())
    return text


def serialize_for_simulation(store: ObjectStore, schema: IDDSchema) -> str:
    """Sorted IDF text of the active objects, as input for an EnergyPlus run."""
    text, _ = render_idf(store, schema, "sorted", include_hidden=False)
    return text
