# server/api/records.py

import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException

from api.auth import get_current_user, require_admin
from core.permissions import validate_entry
from core.query import RecordQuery, filter_records
from core.storage import CollectionRepository, new_id, utc_now
from database import get_record_repository
from models.record import (
    ATTRIBUTES,
    DEFAULT_LIMITS,
    SAMPLE_POINTS,
    LabRecord,
    RecordEntry,
    RecordFields,
)
from models.user import User


logger = logging.getLogger(__name__)

router = APIRouter()

# Fields copied from the entry form onto a record
ENTRY_FIELDS = set(RecordFields.model_fields)


def serialize(record: LabRecord) -> dict:
    return record.model_dump(mode="json", by_alias=True, exclude_none=True)


@router.get("/options")
def record_options():
    """
    Fixed sample points, attributes and default limits used by entry forms.
    """
    return {
        "samplePoints": SAMPLE_POINTS,
        "attributes": ATTRIBUTES,
        "defaultLimits": DEFAULT_LIMITS,
    }


# -------------------------------
# Record List
# -------------------------------

@router.get("/records")
def list_records(
    search: Optional[str] = None,
    sample_point: Optional[str] = None,
    attribute: Optional[str] = None,
    date_start: Optional[str] = None,
    date_end: Optional[str] = None,
    records: CollectionRepository[LabRecord] = Depends(get_record_repository),
    current_user: User = Depends(get_current_user),
):
    """
    Lists records newest first, narrowed by the given filters.
    Every filter left empty matches all records.
    """
    query = RecordQuery(
        search=search,
        sample_point=sample_point,
        attribute=attribute,
        date_start=date_start,
        date_end=date_end,
    )
    matched = filter_records(records.get_all(), query)
    return {
        "status": "success",
        "data": [serialize(r) for r in matched],
        "active_filters": query.active_count,
    }


# -------------------------------
# Manual Entry
# -------------------------------

@router.post("/records")
def create_record(
    entry: RecordEntry,
    records: CollectionRepository[LabRecord] = Depends(get_record_repository),
    current_user: User = Depends(get_current_user),
):
    """
    Creates a record from the manual entry form.
    Duplicate (date, sample point, attribute) triples are accepted.
    """
    entry_date = validate_entry(current_user.role, entry, editing=False)

    record = LabRecord(
        **{**entry.model_dump(include=ENTRY_FIELDS), "date": entry_date.isoformat()},
        id=new_id(),
        created_by=current_user.username,
        created_by_id=current_user.id,
        created_at=utc_now(),
    )
    records.upsert(record)
    logger.info("Record %s created by %s", record.id, current_user.username)
    return {"status": "success", "data": serialize(record)}


@router.put("/records/{record_id}")
def update_record(
    record_id: str,
    entry: RecordEntry,
    records: CollectionRepository[LabRecord] = Depends(get_record_repository),
    current_user: User = Depends(require_admin),
):
    """
    Admin edit of an existing record. The admin remark is mandatory.
    """
    existing = records.get(record_id)
    if existing is None:
        raise HTTPException(status_code=404, detail="Record not found")

    entry_date = validate_entry(current_user.role, entry, editing=True)

    updated = existing.model_copy(update={
        **entry.model_dump(include=ENTRY_FIELDS),
        "date": entry_date.isoformat(),
        "admin_remark": entry.admin_remark.strip(),
        "last_modified_by": current_user.username,
        "last_modified_at": utc_now(),
    })
    records.upsert(updated)
    logger.info("Record %s modified by %s", record_id, current_user.username)
    return {"status": "success", "data": serialize(updated)}
