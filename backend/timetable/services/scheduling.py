from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
import logging

from timetable.core.exceptions import SlotStorageError, SlotValidationError, SyncBatchError
from timetable.services.academic_calendar import current_quarter
from timetable.services.reconciler import CreateSlot, DeleteSlot, SyncOperation, SyncPlan, UpdateSlot
from timetable.services.slot_model import ScheduleSlot, ScheduleSlotModel

logger = logging.getLogger(__name__)

# Fields a response must carry before it is trusted as the canonical record.
RECORD_FIELDS = ("id", "day_of_week", "start_time", "end_time")


@dataclass(frozen=True)
class SaveResult:
    operations: tuple[SyncOperation, ...]
    snapshot: tuple[ScheduleSlot, ...]


class SchedulingFacade:
    """Edit session for one subject group's weekly schedule.

    ``slot_api`` must provide ``list_slots``, ``create_slot``, ``update_slot``
    and ``delete_slot``; ``calendar_api`` provides ``get_current_year``. Saving
    is sequential and not transactional: after a :class:`SyncBatchError` the
    caller should reload instead of assuming a consistent result.
    """

    def __init__(self, slot_api, calendar_api=None, *, today: date | None = None):
        self.slot_api = slot_api
        self.calendar_api = calendar_api
        self._today = today
        self.group_id: int | None = None
        self.snapshot: tuple[ScheduleSlot, ...] = ()
        self.model: ScheduleSlotModel | None = None

    def current_quarter(self) -> int | None:
        if self.calendar_api is None:
            return None
        try:
            year = self.calendar_api.get_current_year()
        except SlotStorageError:
            logger.warning("Academic year lookup failed; continuing without a current quarter", exc_info=True)
            return None
        return current_quarter(year, today=self._today)

    def _seed_model(self) -> ScheduleSlotModel:
        first = self.snapshot[0] if self.snapshot else None
        return ScheduleSlotModel.from_slots(
            self.snapshot,
            default_room=first.room if first else None,
            default_quarter=first.quarter if first else None,
        )

    def load_for_group(self, group_id: int) -> ScheduleSlotModel:
        records = self.slot_api.list_slots(group_id)
        self.group_id = group_id
        self.snapshot = tuple(ScheduleSlot.from_record(record) for record in records)
        self.model = self._seed_model()

        if not any(slot.quarter is not None for slot in self.snapshot):
            quarter = self.current_quarter()
            if quarter is not None:
                self.model.fill_missing_quarter(quarter)
        logger.info(
            "Loaded %s schedule slot(s) for subject group %s (default quarter %s)",
            len(self.snapshot),
            group_id,
            self.model.default_quarter,
        )
        return self.model

    def cancel(self) -> ScheduleSlotModel:
        self.model = self._seed_model()
        return self.model

    def _require_session(self, model: ScheduleSlotModel | None) -> ScheduleSlotModel:
        if model is None:
            model = self.model
        if self.group_id is None or model is None:
            raise RuntimeError("load_for_group() must be called before editing or saving")
        return model

    def validate(self, model: ScheduleSlotModel | None = None) -> list[tuple[int, ScheduleSlot]]:
        return self._require_session(model).invalid_slots()

    def requires_confirmation(self, model: ScheduleSlotModel | None = None) -> bool:
        """Saving ``model`` would wipe the group's whole persisted schedule."""
        model = self._require_session(model)
        return len(model) == 0 and len(self.snapshot) > 0

    def plan(self, model: ScheduleSlotModel | None = None) -> SyncPlan:
        return SyncPlan.build(self.snapshot, self._require_session(model).snapshot())

    def _execute(self, operation: SyncOperation) -> dict | None:
        if isinstance(operation, DeleteSlot):
            self.slot_api.delete_slot(operation.slot_id)
            return None
        if isinstance(operation, CreateSlot):
            return self.slot_api.create_slot(self.group_id, operation.slot)
        if isinstance(operation, UpdateSlot):
            return self.slot_api.update_slot(operation.slot_id, operation.slot)
        raise TypeError(f"Unsupported sync operation: {operation!r}")

    def _saved_slot(self, operation: CreateSlot | UpdateSlot, record: object) -> ScheduleSlot:
        """The slot as stored: the server record when complete, else the sent slot."""
        if isinstance(record, dict) and all(record.get(name) is not None for name in RECORD_FIELDS):
            try:
                return ScheduleSlot.from_record(record)
            except (TypeError, ValueError):
                logger.warning("Unreadable record returned for %s: %r", operation.describe(), record)
        slot_id = record.get("id") if isinstance(record, dict) else None
        if slot_id is None and isinstance(operation, UpdateSlot):
            slot_id = operation.slot_id
        if slot_id is None:
            logger.warning("No id returned for %s; it will be created again on the next save", operation.describe())
        return replace(operation.slot, id=slot_id)

    def save(self, model: ScheduleSlotModel | None = None) -> SaveResult:
        model = self._require_session(model)

        invalid = model.invalid_slots()
        if invalid:
            raise SlotValidationError(
                "End time must be after start time in every slot. "
                f"Fix slot(s): {', '.join(slot.describe() for _, slot in invalid)}",
                invalid_slots=[
                    {
                        "index": index,
                        "id": slot.id,
                        "day_of_week": slot.day_of_week,
                        "start_time": slot.start_time.format(),
                        "end_time": slot.end_time.format(),
                    }
                    for index, slot in invalid
                ],
            )

        plan = SyncPlan.build(self.snapshot, model.snapshot())
        total = len(plan.operations)
        logger.info(
            "Saving schedule for subject group %s: %s delete(s), %s create(s), %s update(s)",
            self.group_id,
            len(plan.deletes),
            len(plan.creates),
            len(plan.updates),
        )

        saved: list[ScheduleSlot] = []
        for index, operation in enumerate(plan.operations):
            try:
                record = self._execute(operation)
            except SlotStorageError as exc:
                logger.error(
                    "Schedule save for subject group %s stopped at operation %s/%s (%s)",
                    self.group_id,
                    index + 1,
                    total,
                    operation.describe(),
                )
                raise SyncBatchError(operation, index=index, applied=index, total=total, cause=exc) from exc
            logger.debug("Applied %s", operation.describe())
            if not isinstance(operation, DeleteSlot):
                saved.append(self._saved_slot(operation, record))

        self.snapshot = tuple(saved)
        self.model = self._seed_model()
        return SaveResult(operations=plan.operations, snapshot=self.snapshot)
