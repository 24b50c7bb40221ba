# server/models/record.py

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


# -------------------------------
# Fixed Enumerations
# -------------------------------

SAMPLE_POINTS = [
    "PSF Inlet",
    "PSF Outlet",
    "ACF Outlet",
    "Lead ACF Outlet",
    "Lag ACF Outlet",
    "UF Outlet",
]

ATTRIBUTES = [
    "TPC 22°C",
    "TPC 36°C",
    "Coliform",
    "E.coli",
    "Pseudomonas.A",
]

DEFAULT_LIMITS = {
    "TPC 22°C": "<100 cfu/ml",
    "TPC 36°C": "<50 cfu/ml",
    "Coliform": "<1 cfu/100ml",
    "E.coli": "<1 cfu/100ml",
    "Pseudomonas.A": "Absent/100ml",
}

# Free-text fields that count as "data" when deciding whether to create a record.
# "value" is a legacy field no longer entered through the grid.
DATA_FIELDS = (
    "value",
    "observation_24h",
    "observation_48h",
    "observation_72h",
    "negative_control",
    "remarks",
)

EDITABLE_FIELDS = ("limit",) + DATA_FIELDS


# -------------------------------
# Lab Record Models
# -------------------------------

class RecordFields(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    date: str
    sample_point: str = Field(alias="samplePoint")
    attribute: str
    value: str = ""
    limit: str = ""
    observation_24h: str = Field("", alias="observation24h")
    observation_48h: str = Field("", alias="observation48h")
    observation_72h: str = Field("", alias="observation72h")
    negative_control: str = Field("", alias="negativeControl")
    remarks: str = ""

    def has_data(self) -> bool:
        return any(getattr(self, name) for name in DATA_FIELDS)


class LabRecord(RecordFields):
    """
    A persisted sampling result for one date, sample point and attribute.
    """
    id: str
    created_by: str = Field(alias="createdBy")
    created_by_id: str = Field(alias="createdById")
    created_at: str = Field(alias="createdAt")
    last_modified_by: Optional[str] = Field(None, alias="lastModifiedBy")
    last_modified_at: Optional[str] = Field(None, alias="lastModifiedAt")
    admin_remark: Optional[str] = Field(None, alias="adminRemark")


class GridCell(RecordFields):
    """
    One (sample point, attribute) cell of the daily grid.
    Placeholders carry no id and no audit fields.
    """
    id: Optional[str] = None
    created_by: Optional[str] = Field(None, alias="createdBy")
    created_by_id: Optional[str] = Field(None, alias="createdById")
    created_at: Optional[str] = Field(None, alias="createdAt")
    last_modified_by: Optional[str] = Field(None, alias="lastModifiedBy")
    last_modified_at: Optional[str] = Field(None, alias="lastModifiedAt")
    admin_remark: Optional[str] = Field(None, alias="adminRemark")


class RecordEntry(RecordFields):
    """
    Manual entry form payload, used for both new entries and admin edits.
    """
    date: Optional[str] = None
    sample_point: str = Field(SAMPLE_POINTS[0], alias="samplePoint")
    attribute: str = ATTRIBUTES[0]
    admin_remark: Optional[str] = Field(None, alias="adminRemark")
