"""
Append-only change log and diff reporting.

Every mutation of a document is recorded as a LogEntry. ``init``, ``save``
and ``reset`` entries are checkpoints: diffs report what happened after
the last one, and a reset rolls the model back to it.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from datetime import datetime
from typing import Final

ACTIONS: Final = frozenset({"init", "add", "set", "dup", "del", "hide", "save", "reset"})
CHECKPOINTS: Final = frozenset({"init", "save", "reset"})

_DIFF_ACTIONS: Final[dict[str, frozenset[str]]] = {
    "add": frozenset({"add", "dup"}),
    "set": frozenset({"set"}),
    "del": frozenset({"del"}),
    "all": frozenset({"add", "dup", "set", "del", "hide"}),
}

# Entries that describe an object which must still exist to be reported
_NEEDS_ACTIVE: Final = frozenset({"add", "dup", "set"})


@dataclass(frozen=True)
class LogEntry:
    """One change log record.

    Attributes:
        step: Position in the log, starting at 0 for ``init``
        timestamp: When the change was recorded
        action: One of init, add, set, dup, del, hide, save, reset
        object_id: Object the action applied to (the source for ``dup``)
        new_object_id: Object produced by the action (the copy for ``dup``)
        active: Whether the object was still active after the action
    """

    step: int
    action: str
    object_id: int = 0
    new_object_id: int = 0
    active: bool = True
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def is_checkpoint(self) -> bool:
        return self.action in CHECKPOINTS


class ChangeLog:
    """
    Ordered, append-only sequence of log entries.

    A new log starts with a single ``init`` entry at step 0. Entries are
    never removed in place; :meth:`reset_to` builds a new log instead.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: list[LogEntry] | None = None) -> None:
        self._entries: list[LogEntry] = list(entries) if entries else [LogEntry(0, "init")]

    def append(self, action: str, object_id: int = 0, new_object_id: int = 0, active: bool = True) -> LogEntry:
        """Record an action and return the new entry."""
        if action not in ACTIONS:
            msg = f"Unknown log action: {action!r}"
            raise ValueError(msg)
        if action == "init":
            msg = "'init' can only be the first log entry"
            raise ValueError(msg)
        entry = LogEntry(self._entries[-1].step + 1, action, object_id, new_object_id, active)
        self._entries.append(entry)
        return entry

    @property
    def entries(self) -> tuple[LogEntry, ...]:
        return tuple(self._entries)

    @property
    def last_step(self) -> int:
        return self._entries[-1].step

    @property
    def checkpoint(self) -> LogEntry:
        """The most recent init, save or reset entry."""
        for entry in reversed(self._entries):
            if entry.is_checkpoint:
                return entry
        return self._entries[0]

    @property
    def is_dirty(self) -> bool:
        """Whether anything was recorded after the last checkpoint."""
        return not self._entries[-1].is_checkpoint

    def since_checkpoint(self) -> list[LogEntry]:
        start = self.checkpoint.step
        return [e for e in self._entries if e.step > start]

    def diff(self, type: str = "all", is_active: Callable[[int], bool] | None = None) -> list[LogEntry]:  # noqa: A002
        """
        Entries recorded since the last checkpoint, filtered by action.

        Args:
            type: ``all``, ``add`` (add and dup), ``set`` or ``del``
            is_active: Predicate on object ids. When given, add and set
                entries are only reported for objects that are still active.

        Raises:
            ValueError: For an unknown diff type.
        """
        try:
            actions = _DIFF_ACTIONS[type]
        except KeyError:
            msg = f"Invalid diff type {type!r}; expected one of: {', '.join(_DIFF_ACTIONS)}"
            raise ValueError(msg) from None

        result: list[LogEntry] = []
        for entry in self.since_checkpoint():
            if entry.action not in actions:
                continue
            if is_active is not None and entry.action in _NEEDS_ACTIVE and not is_active(entry.new_object_id):
                continue
            result.append(entry)
        return result

    def reset_to(self, step: int) -> ChangeLog:
        """Return a new log with the entries up to *step* and a ``reset`` marker."""
        if not 0 <= step <= self.last_step:
            msg = f"Step {step} is not in the log (0..{self.last_step})"
            raise ValueError(msg)
        kept = [e for e in self._entries if e.step <= step]
        log = ChangeLog(kept)
        log._entries.append(LogEntry(kept[-1].step + 1, "reset"))
        return log

    def __iter__(self) -> Iterator[LogEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> LogEntry:
        return self._entries[index]

    def __repr__(self) -> str:
        return f"ChangeLog({len(self._entries)} entries, last step {self.last_step})"


def diff(
    log: ChangeLog,
    type: str = "all",  # noqa: A002
    is_active: Callable[[int], bool] | None = None,
) -> list[LogEntry]:
    """Functional form of :meth:`ChangeLog.diff`."""
    return log.diff(type, is_active)


def group_by_object(entries: list[LogEntry]) -> dict[int, list[LogEntry]]:
    """Group entries by the object they produced, in first-seen order."""
    grouped: dict[int, list[LogEntry]] = {}
    for entry in entries:
        grouped.setdefault(entry.new_object_id, []).append(entry)
    return grouped
