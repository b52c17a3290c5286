from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from timetable.services.slot_model import ScheduleSlot


@dataclass(frozen=True)
class CreateSlot:
    slot: ScheduleSlot

    def describe(self) -> str:
        return f"create {self.slot.describe()}"


@dataclass(frozen=True)
class UpdateSlot:
    slot_id: int
    slot: ScheduleSlot

    def describe(self) -> str:
        return f"update {self.slot.describe()}"


@dataclass(frozen=True)
class DeleteSlot:
    slot_id: int

    def describe(self) -> str:
        return f"delete #{self.slot_id}"


SyncOperation = CreateSlot | UpdateSlot | DeleteSlot


def reconcile(previous: Iterable[ScheduleSlot], current: Iterable[ScheduleSlot]) -> list[SyncOperation]:
    """Operations that make the persisted ``previous`` slots match ``current``.

    Slots are matched by id only. Every persisted slot still present is sent
    as an update, changed or not. Deletes always come first so a swapped
    room or time cannot collide with a uniqueness rule in the store.
    """
    current = list(current)
    current_ids = {slot.id for slot in current if slot.id is not None}

    operations: list[SyncOperation] = [
        DeleteSlot(slot_id=slot.id)
        for slot in previous
        if slot.id is not None and slot.id not in current_ids
    ]
    for slot in current:
        if slot.id is None:
            operations.append(CreateSlot(slot=slot))
        else:
            operations.append(UpdateSlot(slot_id=slot.id, slot=slot))
    return operations


@dataclass(frozen=True)
class SyncPlan:
    operations: tuple[SyncOperation, ...]

    @classmethod
    def build(cls, previous: Iterable[ScheduleSlot], current: Iterable[ScheduleSlot]) -> SyncPlan:
        return cls(operations=tuple(reconcile(previous, current)))

    @property
    def deletes(self) -> list[DeleteSlot]:
        return [op for op in self.operations if isinstance(op, DeleteSlot)]

    @property
    def creates(self) -> list[CreateSlot]:
        return [op for op in self.operations if isinstance(op, CreateSlot)]

    @property
    def updates(self) -> list[UpdateSlot]:
        return [op for op in self.operations if isinstance(op, UpdateSlot)]

    @property
    def is_destructive(self) -> bool:
        """True when the plan removes every persisted slot and adds nothing back."""
        return bool(self.deletes) and len(self.deletes) == len(self.operations)
