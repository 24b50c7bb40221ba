# server/core/grid.py

import logging
from datetime import date
from typing import Iterable, Optional
from models.user import User, UserRole
from models.record import (
    ATTRIBUTES,
    DEFAULT_LIMITS,
    EDITABLE_FIELDS,
    SAMPLE_POINTS,
    GridCell,
    LabRecord,
)
from core.permissions import PermissionDenied, can_edit_date, parse_day
from core.storage import CollectionRepository, new_id, utc_now


logger = logging.getLogger(__name__)


def find_record(records: Iterable[LabRecord], day: str, sample_point: str, attribute: str) -> Optional[LabRecord]:
    """
    Returns the first record stored for the (date, sample point, attribute) triple.
    Later duplicates of the same triple are never shown in the grid.
    """
    return next(
        (
            r for r in records
            if r.date == day and r.sample_point == sample_point and r.attribute == attribute
        ),
        None,
    )


def placeholder_cell(day: str, sample_point: str, attribute: str) -> GridCell:
    return GridCell(
        date=day,
        sample_point=sample_point,
        attribute=attribute,
        limit=DEFAULT_LIMITS.get(attribute, ""),
    )


# -------------------------------
# Daily Grid
# -------------------------------

class DailyGrid:
    """
    Editable matrix of every (sample point, attribute) pair for one date,
    reconciled against the persisted lab records.

    Cells are kept in declared order: sample points first, then attributes
    within each point. Saving walks the cells in that order.
    """

    def __init__(self, day: str, role: UserRole, today: Optional[date] = None):
        self.date = parse_day(day).isoformat()
        self.role = role
        self.editable = can_edit_date(role, self.date, today)
        self.cells: dict[tuple[str, str], GridCell] = {}

    @classmethod
    def load(cls, records: CollectionRepository[LabRecord], day: str, role: UserRole,
             today: Optional[date] = None) -> "DailyGrid":
        grid = cls(day, role, today)
        grid.reload(records)
        return grid

    def reload(self, records: CollectionRepository[LabRecord]):
        all_records = records.get_all()
        self.cells = {}
        for point in SAMPLE_POINTS:
            for attribute in ATTRIBUTES:
                existing = find_record(all_records, self.date, point, attribute)
                if existing:
                    cell = GridCell(**existing.model_dump())
                else:
                    cell = placeholder_cell(self.date, point, attribute)
                self.cells[(point, attribute)] = cell

    def ordered_cells(self) -> list[GridCell]:
        return [self.cells[(point, attribute)] for point in SAMPLE_POINTS for attribute in ATTRIBUTES]

    def cell(self, sample_point: str, attribute: str) -> GridCell:
        try:
            return self.cells[(sample_point, attribute)]
        except KeyError:
            raise ValueError(f"Unknown grid cell: {sample_point} / {attribute}")

    def update_cell(self, sample_point: str, attribute: str, field: str, value: Optional[str]) -> bool:
        """
        Sets one field of a cell. Does nothing when the grid is read-only.
        """
        if not self.editable:
            return False
        if field not in EDITABLE_FIELDS:
            raise ValueError(f"Field is not editable: {field}")
        setattr(self.cell(sample_point, attribute), field, value or "")
        return True

    def apply(self, cells: Iterable[GridCell]) -> int:
        """
        Copies the editable fields present on submitted cells onto the grid.
        Record identity always comes from the store, never from the submitted cell.
        """
        changed = 0
        for incoming in cells:
            current = self.cell(incoming.sample_point, incoming.attribute)
            for field in EDITABLE_FIELDS:
                if field not in incoming.model_fields_set:
                    continue
                value = getattr(incoming, field)
                if value != getattr(current, field):
                    if self.update_cell(incoming.sample_point, incoming.attribute, field, value):
                        changed += 1
        return changed

    def save_all(self, records: CollectionRepository[LabRecord], actor: User,
                 now: Optional[str] = None) -> int:
        """
        Persists the grid and returns how many entries were saved.

        Cells that already have a record are always re-saved and re-stamped,
        even when nothing changed. New cells are created only when they carry
        data. Untouched placeholders are skipped.
        """
        if not self.editable:
            raise PermissionDenied("Read only: past date")

        timestamp = now or utc_now()
        saved = 0

        for cell in self.ordered_cells():
            fields = cell.model_dump(include=set(EDITABLE_FIELDS))

            if cell.id:
                existing = records.get(cell.id)
                records.upsert(existing.model_copy(update={
                    **fields,
                    "last_modified_by": actor.username,
                    "last_modified_at": timestamp,
                }))
                saved += 1
            elif cell.has_data():
                records.upsert(
                    LabRecord(
                        id=new_id(),
                        date=self.date,
                        sample_point=cell.sample_point,
                        attribute=cell.attribute,
                        created_by=actor.username,
                        created_by_id=actor.id,
                        created_at=timestamp,
                        **fields,
                    )
                )
                saved += 1

        self.reload(records)
        logger.info("Saved %d grid entries for %s by %s", saved, self.date, actor.username)
        return saved
