# server/core/permissions.py

from datetime import date, datetime
from typing import Optional, Union
from models.user import UserRole
from models.record import ATTRIBUTES, SAMPLE_POINTS, RecordEntry


DATE_FORMAT = "%Y-%m-%d"


class EntryValidationError(ValueError):
    """
    User-facing validation failure of a manual entry.
    """


class PermissionDenied(Exception):
    pass


def parse_day(value: Union[str, date]) -> date:
    """
    Parses a calendar date written as YYYY-MM-DD.
    Compact and ISO week forms are rejected with ValueError.
    """
    if isinstance(value, date):
        return value
    return datetime.strptime(value, DATE_FORMAT).date()


def has_role(role: UserRole, required: UserRole) -> bool:
    """
    ADMIN satisfies any role requirement.
    """
    return role == UserRole.ADMIN or role == required


def can_edit_date(role: UserRole, target: Union[str, date], today: Optional[date] = None) -> bool:
    """
    Admins may edit any date; everyone else only today or later.
    """
    if role == UserRole.ADMIN:
        return True
    return parse_day(target) >= (today or date.today())


def validate_entry(role: UserRole, entry: RecordEntry, editing: bool, today: Optional[date] = None) -> date:
    """
    Checks a manual entry and returns its parsed date.
    """
    if not entry.date:
        raise EntryValidationError("Date is required.")

    try:
        entry_date = parse_day(entry.date)
    except ValueError:
        raise EntryValidationError("Date must be in YYYY-MM-DD format.")

    if entry.sample_point not in SAMPLE_POINTS:
        raise EntryValidationError(f"Unknown sample point: {entry.sample_point}")
    if entry.attribute not in ATTRIBUTES:
        raise EntryValidationError(f"Unknown attribute: {entry.attribute}")

    if role != UserRole.ADMIN and entry_date < (today or date.today()):
        raise EntryValidationError("Entry date cannot be in the past.")

    if editing and role == UserRole.ADMIN and not (entry.admin_remark or "").strip():
        raise EntryValidationError("Admin remark is mandatory for modifications.")

    return entry_date
