"""
Reference graph for tracking object dependencies.

Provides O(1) lookups for:
- Which fields reference a given name?
- Which names does an object reference?
- Which edges move when a target is renamed?
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING, NamedTuple

from .objects import ObjectState

if TYPE_CHECKING:
    from .schema import ClassDef
    from .store import ObjectStore


class Edge(NamedTuple):
    """A reference from one field to a name in a set of target classes."""

    source_id: int
    field_index: int
    targets: frozenset[str]


class ReferenceGraph:
    """
    Tracks object references for instant dependency queries.

    The graph maintains two indexes:
    - _referenced_by: name (uppercase) -> set of edges pointing at it
    - _references: source id -> {field index: name (uppercase)}

    Edges carry the upper-cased names of the classes the field may point
    into, so two objects of different classes sharing a name are told apart
    on rename and delete.
    """

    __slots__ = ("_referenced_by", "_references")

    def __init__(self) -> None:
        self._referenced_by: dict[str, set[Edge]] = defaultdict(set)
        self._references: dict[int, dict[int, tuple[str, frozenset[str]]]] = defaultdict(dict)

    def register(self, source_id: int, field_index: int, referenced_name: str, targets: Iterable[str]) -> None:
        """
        Register that a field references a name.

        Args:
            source_id: Id of the object that contains the reference
            field_index: Index of the reference field
            referenced_name: The name being referenced
            targets: Class names whose objects the field may point to
        """
        if not referenced_name or not referenced_name.strip():
            return

        target_set = frozenset(t.upper() for t in targets)
        name_upper = referenced_name.upper()
        previous = self._references[source_id].get(field_index)
        if previous is not None:
            self._discard(source_id, field_index, *previous)
        self._referenced_by[name_upper].add(Edge(source_id, field_index, target_set))
        self._references[source_id][field_index] = (name_upper, target_set)

    def _discard(self, source_id: int, field_index: int, name_upper: str, targets: frozenset[str]) -> None:
        edges = self._referenced_by.get(name_upper)
        if edges is not None:
            edges.discard(Edge(source_id, field_index, targets))
            if not edges:
                del self._referenced_by[name_upper]

    def unregister(self, source_id: int) -> None:
        """Remove all outgoing references of an object."""
        refs = self._references.pop(source_id, None)
        if not refs:
            return
        for field_index, (name_upper, targets) in refs.items():
            self._discard(source_id, field_index, name_upper, targets)

    def update_reference(
        self,
        source_id: int,
        field_index: int,
        old_value: str | None,
        new_value: str | None,
        targets: Iterable[str],
    ) -> None:
        """
        Update indexes when an object's reference field changes.

        Args:
            source_id: The object whose field changed
            field_index: The field that changed
            old_value: The previous referenced name (or None)
            new_value: The new referenced name (or None)
            targets: Class names the field may point to
        """
        refs = self._references.get(source_id)
        if old_value and refs is not None:
            previous = refs.pop(field_index, None)
            if previous is not None:
                self._discard(source_id, field_index, *previous)
            if not refs:
                del self._references[source_id]

        if new_value and new_value.strip():
            self.register(source_id, field_index, new_value, targets)

    def on_rename(self, old_name: str, new_name: str, class_name: str) -> list[Edge]:
        """
        Move the edges that point at a renamed object.

        Only edges whose target classes include *class_name* move; a field
        pointing at a same-named object of another class is left alone.

        Returns:
            The moved edges, so the caller can rewrite the source fields
        """
        old_upper = old_name.upper()
        new_upper = new_name.upper()
        class_upper = class_name.upper()

        edges = self._referenced_by.get(old_upper)
        if not edges:
            return []

        moved = sorted((e for e in edges if class_upper in e.targets), key=lambda e: (e.source_id, e.field_index))
        if old_upper == new_upper:
            return moved

        for edge in moved:
            edges.discard(edge)
            self._referenced_by[new_upper].add(edge)
            self._references[edge.source_id][edge.field_index] = (new_upper, edge.targets)
        if not edges:
            del self._referenced_by[old_upper]
        return moved

    def referents_of(self, name: str, class_name: str) -> list[tuple[int, int]]:
        """
        O(1): Get the (source id, field index) pairs pointing at an object.

        Args:
            name: The target object's name
            class_name: The target object's class

        Returns:
            Pairs sorted by source id, then field index
        """
        class_upper = class_name.upper()
        edges = self._referenced_by.get(name.upper(), set())
        return sorted((e.source_id, e.field_index) for e in edges if class_upper in e.targets)

    def get_references(self, source_id: int) -> dict[int, str]:
        """
        O(1): Get the names an object references, keyed by field index.

        Names are upper-cased.
        """
        return {index: name for index, (name, _) in self._references.get(source_id, {}).items()}

    def is_referenced(self, name: str) -> bool:
        """Check if a name is referenced by any field."""
        return name.upper() in self._referenced_by

    def get_dangling_references(self, valid_names: dict[str, set[str]]) -> Iterator[tuple[int, int, str]]:
        """
        Find references whose name matches no object of a target class.

        Args:
            valid_names: Upper-case class name -> set of upper-case names

        Yields:
            Tuples of (source id, field index, referenced name)
        """
        for source_id, refs in self._references.items():
            for field_index, (name_upper, targets) in refs.items():
                if not any(name_upper in valid_names.get(t, ()) for t in targets):
                    yield (source_id, field_index, name_upper)

    def rebuild(self, store: ObjectStore) -> None:
        """Recreate both indexes from every non-deleted object of *store*."""
        self.clear()
        for obj in store:
            if obj.state == ObjectState.DELETED:
                continue
            self.register_object(obj.id, obj.class_def, obj.values)

    def register_object(self, source_id: int, class_def: ClassDef, values: list[str]) -> None:
        """Register every populated reference field of an object."""
        for index, value in enumerate(values):
            if not value:
                continue
            field_def = class_def.field_def(index)
            if field_def.target_classes:
                self.register(source_id, index, value, field_def.target_classes)

    def clear(self) -> None:
        """Clear all reference tracking."""
        self._referenced_by.clear()
        self._references.clear()

    def __len__(self) -> int:
        """Return total number of references tracked."""
        return sum(len(refs) for refs in self._references.values())

    def stats(self) -> dict[str, int]:
        """Return statistics about the reference graph."""
        return {
            "total_references": len(self),
            "objects_with_references": len(self._references),
            "names_referenced": len(self._referenced_by),
        }
