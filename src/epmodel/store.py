"""
Object/field table backing a model.

Objects are kept in one dict keyed by id. Insertion order is file order for
parsed objects followed by creation order, which the writer relies on for
the original-order layouts.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import NamedTuple

from .exceptions import UnknownIdError
from .objects import IDFObject, ObjectState


class FieldRow(NamedTuple):
    """One cell of the object/field table."""

    object_id: int
    field_index: int
    value: str
    field_name: str
    required: bool


class ObjectStore:
    """
    Table of objects keyed by id, with monotonic id allocation.

    Objects are indexed by class and, for objects that are not deleted, by
    name. Change names and states through :meth:`set_values` and
    :meth:`set_state` so the name index stays current.

    Attributes:
        baseline_ids: Ids present when the store was last parsed. Objects
            outside this set are "new" for the original-order layouts.
    """

    __slots__ = ("_by_class", "_names", "_next_id", "_objects", "baseline_ids")

    _objects: dict[int, IDFObject]
    _by_class: dict[str, dict[int, None]]
    _names: dict[str, dict[str, set[int]]]
    _next_id: int
    baseline_ids: frozenset[int]

    def __init__(self, start_id: int = 1) -> None:
        self._objects = {}
        self._by_class = {}
        self._names = {}
        self._next_id = start_id
        self.baseline_ids = frozenset()

    @property
    def next_id(self) -> int:
        return self._next_id

    def reserve(self, next_id: int) -> None:
        """Ensure ids below *next_id* are never handed out."""
        self._next_id = max(self._next_id, next_id)

    def new_id(self) -> int:
        """Allocate a fresh id, strictly greater than every id issued so far."""
        obj_id = self._next_id
        self._next_id += 1
        return obj_id

    def insert(self, obj: IDFObject) -> None:
        if obj.id in self._objects:
            msg = f"Object id {obj.id} already exists"
            raise ValueError(msg)
        self._objects[obj.id] = obj
        self._by_class.setdefault(obj.class_name.upper(), {})[obj.id] = None
        if obj.state != ObjectState.DELETED:
            self._index_name(obj)
        self.reserve(obj.id + 1)

    def _index_name(self, obj: IDFObject) -> None:
        name = obj.name
        if name:
            self._names.setdefault(obj.class_name.upper(), {}).setdefault(name.upper(), set()).add(obj.id)

    def _unindex_name(self, obj: IDFObject) -> None:
        name = obj.name
        if not name:
            return
        class_names = self._names.get(obj.class_name.upper(), {})
        ids = class_names.get(name.upper())
        if ids is None:
            return
        ids.discard(obj.id)
        if not ids:
            del class_names[name.upper()]

    def set_values(self, obj: IDFObject, values: list[str]) -> None:
        """Replace an object's values, keeping the name index current."""
        indexed = obj.state != ObjectState.DELETED
        if indexed:
            self._unindex_name(obj)
        obj.values = values
        if indexed:
            self._index_name(obj)

    def set_state(self, obj: IDFObject, state: ObjectState) -> None:
        """Change an object's state; deleted objects leave the name index."""
        if obj.state != ObjectState.DELETED and state == ObjectState.DELETED:
            self._unindex_name(obj)
        elif obj.state == ObjectState.DELETED and state != ObjectState.DELETED:
            self._index_name(obj)
        obj.state = state

    @property
    def names(self) -> Mapping[str, Mapping[str, set[int]]]:
        """Upper-case class name -> upper-case object name -> ids, for objects not deleted."""
        return self._names

    def name_ids(self, class_name: str, name: str) -> set[int]:
        """Ids of non-deleted objects of *class_name* called *name* (case-insensitive)."""
        return set(self._names.get(class_name.upper(), {}).get(name.upper(), ()))

    def mark_baseline(self) -> None:
        self.baseline_ids = frozenset(self._objects)

    def __getitem__(self, obj_id: int) -> IDFObject:
        """Return any object, regardless of its state."""
        try:
            return self._objects[obj_id]
        except KeyError:
            raise UnknownIdError(obj_id) from None

    def get_active(self, obj_id: object) -> IDFObject:
        """Return an active object.

        Raises:
            UnknownIdError: If the id is unknown, deleted or hidden.
        """
        obj = self._objects.get(obj_id) if isinstance(obj_id, int) and not isinstance(obj_id, bool) else None
        if obj is None or not obj.is_active:
            raise UnknownIdError(obj_id)
        return obj

    def __contains__(self, obj_id: object) -> bool:
        return obj_id in self._objects

    def __iter__(self) -> Iterator[IDFObject]:
        """All objects in insertion order, including deleted and hidden ones."""
        return iter(self._objects.values())

    def __len__(self) -> int:
        return len(self._objects)

    def active(self) -> list[IDFObject]:
        """Active objects in id order."""
        return sorted((o for o in self._objects.values() if o.is_active), key=lambda o: o.id)

    def by_class(self, class_name: str) -> list[IDFObject]:
        """Active objects of one class (case-insensitive), in id order."""
        return [o for o in self.present(class_name) if o.is_active]

    def present(self, class_name: str) -> list[IDFObject]:
        """Objects of one class that will be written (active or hidden), in id order."""
        ids = self._by_class.get(class_name.upper(), {})
        objects = (self._objects[i] for i in ids)
        return sorted((o for o in objects if o.state != ObjectState.DELETED), key=lambda o: o.id)

    def count(self, state: ObjectState | None = None) -> int:
        if state is None:
            return len(self._objects)
        return sum(1 for o in self._objects.values() if o.state == state)

    def rows(self, ids: Iterable[int] | None = None) -> Iterator[FieldRow]:
        """Yield field cells of active objects."""
        objects = self.active() if ids is None else [self.get_active(i) for i in ids]
        for obj in objects:
            for index, value in enumerate(obj.values):
                field_def = obj.class_def.field_def(index)
                yield FieldRow(obj.id, index, value, field_def.name, field_def.required)

    def copy(self) -> ObjectStore:
        """Independent copy with the same ids, states and values."""
        clone = ObjectStore(self._next_id)
        for obj in self._objects.values():
            clone.insert(IDFObject(obj.id, obj.class_def, obj.values, obj.state, obj.comments))
        clone.baseline_ids = self.baseline_ids
        return clone

    def snapshot(self) -> dict[str, list[list[str]]]:
        """Active objects' normalised values grouped by upper-case class name."""
        result: dict[str, list[list[str]]] = {}
        for obj in self.active():
            result.setdefault(obj.class_name.upper(), []).append(obj.normalized_values())
        return result

    def __eq__(self, other: object) -> bool:
        """Field-for-field equality of active objects, per class, in order."""
        if not isinstance(other, ObjectStore):
            return NotImplemented
        return self.snapshot() == other.snapshot()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ObjectStore({len(self.active())} active of {len(self)} objects)"
