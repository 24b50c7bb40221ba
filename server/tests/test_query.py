import pytest

from core.query import RecordQuery, filter_records
from models.record import LabRecord


def make_record(record_id, day, point, attribute, created_at, created_by="tech1", **extra) -> LabRecord:
    return LabRecord(
        id=record_id,
        date=day,
        sample_point=point,
        attribute=attribute,
        created_by=created_by,
        created_by_id="user-1",
        created_at=created_at,
        **extra,
    )


@pytest.fixture
def records():
    return [
        make_record("r1", "2024-05-01", "PSF Inlet", "TPC 22°C", "2024-05-01T08:00:00+00:00"),
        make_record("r2", "2024-05-10", "PSF Inlet", "Coliform", "2024-05-10T08:00:00+00:00",
                    remarks="Turbid sample"),
        make_record("r3", "2024-05-20", "PSF Inlet", "E.coli", "2024-05-20T08:00:00Z"),
        make_record("r4", "2024-05-10", "UF Outlet", "Coliform", "2024-05-11T08:00:00+00:00",
                    created_by="admin", value="<1"),
    ]


def ids(records):
    return [r.id for r in records]


def test_empty_query_returns_everything_newest_first(records):
    assert ids(filter_records(records, RecordQuery())) == ["r3", "r4", "r2", "r1"]


def test_sample_point_filter_is_exact(records):
    result = filter_records(records, RecordQuery(sample_point="PSF Inlet"))
    assert ids(result) == ["r3", "r2", "r1"]
    assert filter_records(records, RecordQuery(sample_point="PSF")) == []


def test_sample_point_and_inclusive_date_range(records):
    query = RecordQuery(sample_point="PSF Inlet", date_start="2024-05-01", date_end="2024-05-10")
    assert ids(filter_records(records, query)) == ["r2", "r1"]


def test_open_ended_date_bounds(records):
    assert ids(filter_records(records, RecordQuery(date_start="2024-05-10"))) == ["r3", "r4", "r2"]
    assert ids(filter_records(records, RecordQuery(date_end="2024-05-09"))) == ["r1"]


def test_attribute_filter(records):
    assert ids(filter_records(records, RecordQuery(attribute="Coliform"))) == ["r4", "r2"]


@pytest.mark.parametrize("term, expected", [
    ("turbid", ["r2"]),
    ("uf outlet", ["r4"]),
    ("e.COLI", ["r3"]),
    ("ADMIN", ["r4"]),
    ("<1", ["r4"]),
    ("tech1", ["r3", "r2", "r1"]),
])
def test_search_is_case_insensitive_across_fields(records, term, expected):
    assert ids(filter_records(records, RecordQuery(search=term))) == expected


def test_filters_combine_with_and(records):
    query = RecordQuery(search="tech1", attribute="Coliform", date_start="2024-05-10")
    assert ids(filter_records(records, query)) == ["r2"]


def test_active_count():
    assert RecordQuery().active_count == 0
    assert RecordQuery(search="", date_start="2024-05-01", attribute="Coliform").active_count == 2
