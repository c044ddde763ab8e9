from typing import Any, Optional
from datetime import datetime, timezone
from pydantic import BaseModel
from sqlalchemy import CheckConstraint
from sqlmodel import Field, SQLModel

REPORT_STATUSES = ("lost", "stolen", "recovered")
INITIAL_STATUSES = ("lost", "stolen")


class Report(SQLModel, table=True):
    __tablename__ = "reports"

    id: Optional[int] = Field(default=None, primary_key=True)
    ref: str = Field(index=True, unique=True)  # public handle, never the row id
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), index=True)

    imei: str = Field(index=True)
    status: str  # "lost", "stolen", "recovered"

    # Device info
    brand: Optional[str] = None
    model: Optional[str] = None
    color: Optional[str] = None
    description: Optional[str] = None
    lost_date: Optional[str] = None
    location: Optional[str] = None

    # Contact info, admin eyes only
    contact_name: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    police_report: Optional[str] = None

    is_public: bool = Field(default=True)

    __table_args__ = (
        CheckConstraint(
            "status IN ('lost', 'stolen', 'recovered')",
            name="ck_reports_status",
        ),
    )


# Request / response models
class ReportCreate(BaseModel):
    imei: Any = None
    status: Any = None
    brand: Optional[str] = None
    model: Optional[str] = None
    color: Optional[str] = None
    description: Optional[str] = None
    lost_date: Optional[str] = None
    location: Optional[str] = None
    contact_name: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    police_report: Optional[str] = None
    is_public: Any = None


class ReportUpdate(BaseModel):
    status: Any = None
    is_public: Any = None


class PublicReport(BaseModel):
    """The columns a public IMEI check is allowed to see."""

    ref: str
    imei: str
    status: str
    brand: Optional[str] = None
    model: Optional[str] = None
    color: Optional[str] = None
    lost_date: Optional[str] = None
    location: Optional[str] = None
    created_at: datetime


class CheckResult(BaseModel):
    imei: str
    count: int
    reports: list[PublicReport]
