from datetime import date, timedelta

import pytest

from core.permissions import EntryValidationError, can_edit_date, has_role, validate_entry
from models.record import RecordEntry
from models.user import UserRole


TODAY = date(2024, 5, 15)


@pytest.mark.parametrize("role", [UserRole.ADMIN, UserRole.USER])
@pytest.mark.parametrize("offset", [0, 1, 30])
def test_today_and_future_are_editable_for_everyone(role, offset):
    assert can_edit_date(role, TODAY + timedelta(days=offset), today=TODAY)


def test_past_dates_are_admin_only():
    yesterday = (TODAY - timedelta(days=1)).isoformat()
    assert not can_edit_date(UserRole.USER, yesterday, today=TODAY)
    assert can_edit_date(UserRole.ADMIN, yesterday, today=TODAY)


def test_can_edit_date_defaults_to_local_today():
    assert can_edit_date(UserRole.USER, date.today())
    assert not can_edit_date(UserRole.USER, date.today() - timedelta(days=1))


def test_admin_satisfies_any_role():
    assert has_role(UserRole.ADMIN, UserRole.ADMIN)
    assert has_role(UserRole.ADMIN, UserRole.USER)
    assert has_role(UserRole.USER, UserRole.USER)
    assert not has_role(UserRole.USER, UserRole.ADMIN)


def test_missing_date_is_rejected():
    with pytest.raises(EntryValidationError, match="Date is required."):
        validate_entry(UserRole.ADMIN, RecordEntry(date=""), editing=False, today=TODAY)


def test_technician_cannot_backdate():
    entry = RecordEntry(date="2024-05-14")
    with pytest.raises(EntryValidationError, match="Entry date cannot be in the past."):
        validate_entry(UserRole.USER, entry, editing=False, today=TODAY)

    validate_entry(UserRole.USER, RecordEntry(date="2024-05-15"), editing=False, today=TODAY)


def test_admin_can_backdate_new_entries():
    validate_entry(UserRole.ADMIN, RecordEntry(date="2020-01-01"), editing=False, today=TODAY)


@pytest.mark.parametrize("remark", [None, "", "   "])
def test_admin_edit_requires_remark(remark):
    entry = RecordEntry(date="2024-05-15", admin_remark=remark)
    with pytest.raises(EntryValidationError, match="Admin remark is mandatory"):
        validate_entry(UserRole.ADMIN, entry, editing=True, today=TODAY)


def test_admin_edit_with_remark_passes():
    entry = RecordEntry(date="2024-05-01", admin_remark="Corrected transcription error")
    validate_entry(UserRole.ADMIN, entry, editing=True, today=TODAY)


def test_malformed_date_is_a_validation_error():
    with pytest.raises(EntryValidationError):
        validate_entry(UserRole.ADMIN, RecordEntry(date="15/05/2024"), editing=False, today=TODAY)


@pytest.mark.parametrize("value", ["20240515", "2024-W20-3"])
def test_only_dashed_dates_are_accepted(value):
    with pytest.raises(EntryValidationError, match="YYYY-MM-DD"):
        validate_entry(UserRole.ADMIN, RecordEntry(date=value), editing=False, today=TODAY)


def test_validated_date_is_returned():
    assert validate_entry(UserRole.ADMIN, RecordEntry(date="2024-5-7"), editing=False, today=TODAY) == date(2024, 5, 7)


def test_unknown_sample_point_is_rejected():
    entry = RecordEntry(date="2024-05-15", sample_point="Reservoir")
    with pytest.raises(EntryValidationError, match="Unknown sample point: Reservoir"):
        validate_entry(UserRole.USER, entry, editing=False, today=TODAY)


def test_unknown_attribute_is_rejected():
    entry = RecordEntry(date="2024-05-15", attribute="Nitrate")
    with pytest.raises(EntryValidationError, match="Unknown attribute: Nitrate"):
        validate_entry(UserRole.USER, entry, editing=False, today=TODAY)
