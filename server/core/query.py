# server/core/query.py

from dataclasses import dataclass, fields
from datetime import datetime, timezone
from typing import Iterable, Optional
from models.record import LabRecord


@dataclass
class RecordQuery:
    search: Optional[str] = None
    sample_point: Optional[str] = None
    attribute: Optional[str] = None
    date_start: Optional[str] = None
    date_end: Optional[str] = None

    @property
    def active_count(self) -> int:
        return sum(1 for f in fields(self) if getattr(self, f.name))

    def matches(self, record: LabRecord) -> bool:
        if self.search:
            needle = self.search.lower()
            haystack = (
                record.sample_point,
                record.attribute,
                record.created_by,
                record.value or "",
                record.remarks or "",
            )
            if not any(needle in text.lower() for text in haystack):
                return False

        if self.sample_point and record.sample_point != self.sample_point:
            return False
        if self.attribute and record.attribute != self.attribute:
            return False

        # YYYY-MM-DD is fixed-width, so string order is date order
        if self.date_start and record.date < self.date_start:
            return False
        if self.date_end and record.date > self.date_end:
            return False

        return True


def _created_at(record: LabRecord) -> datetime:
    stamp = datetime.fromisoformat(record.created_at.replace("Z", "+00:00"))
    if stamp.tzinfo is None:
        stamp = stamp.replace(tzinfo=timezone.utc)
    return stamp


def filter_records(records: Iterable[LabRecord], query: RecordQuery) -> list[LabRecord]:
    """
    Newest records first, narrowed down by every active filter of the query.
    """
    ordered = sorted(records, key=_created_at, reverse=True)
    return [r for r in ordered if query.matches(r)]
