import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from timetable.api.deps import get_db
from timetable.core.exceptions import ResourceNotFoundError
from timetable.models.schedule_slot import ScheduleSlotRecord
from timetable.schemas.schedule_slot import (
    ScheduleSlotCreate,
    ScheduleSlotOut,
    ScheduleSlotUpdate,
    ensure_time_order,
)

logger = logging.getLogger(__name__)

router = APIRouter()

# Columns that may be cleared with an explicit null on PATCH.
NULLABLE_FIELDS = {"room", "quarter"}


def get_slot_or_404(db: Session, slot_id: int) -> ScheduleSlotRecord:
    slot = db.get(ScheduleSlotRecord, slot_id)
    if slot is None:
        raise ResourceNotFoundError("Schedule slot", str(slot_id))
    return slot


@router.get("/", response_model=list[ScheduleSlotOut])
def list_slots(
    subject_group: int | None = Query(default=None, ge=1),
    db: Session = Depends(get_db),
) -> list[ScheduleSlotOut]:
    query = select(ScheduleSlotRecord).order_by(ScheduleSlotRecord.id)
    if subject_group is not None:
        query = query.where(ScheduleSlotRecord.subject_group == subject_group)
    return list(db.execute(query).scalars())


@router.post("/", response_model=ScheduleSlotOut, status_code=status.HTTP_201_CREATED)
def create_slot(payload: ScheduleSlotCreate, db: Session = Depends(get_db)) -> ScheduleSlotOut:
    slot = ScheduleSlotRecord(**payload.model_dump())
    db.add(slot)
    db.commit()
    db.refresh(slot)
    logger.info("Created schedule slot %s for subject group %s", slot.id, slot.subject_group)
    return slot


@router.patch("/{slot_id}/", response_model=ScheduleSlotOut)
def update_slot(slot_id: int, payload: ScheduleSlotUpdate, db: Session = Depends(get_db)) -> ScheduleSlotOut:
    slot = get_slot_or_404(db, slot_id)

    data = payload.model_dump(exclude_unset=True)
    for key in [key for key, value in data.items() if value is None and key not in NULLABLE_FIELDS]:
        data.pop(key)

    start_time = data.get("start_time", slot.start_time)
    end_time = data.get("end_time", slot.end_time)
    try:
        ensure_time_order(start_time, end_time)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc

    for key, value in data.items():
        setattr(slot, key, value)
    db.commit()
    db.refresh(slot)
    return slot


@router.delete("/{slot_id}/", status_code=status.HTTP_204_NO_CONTENT)
def delete_slot(slot_id: int, db: Session = Depends(get_db)) -> Response:
    slot = get_slot_or_404(db, slot_id)
    db.delete(slot)
    db.commit()
    logger.info("Deleted schedule slot %s", slot_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
