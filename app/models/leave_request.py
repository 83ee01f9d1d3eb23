from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Date, DateTime, Enum, Text
from app.database import Base
import enum

class DepartmentGrade(str, enum.Enum):
    G8 = "G8"
    G9 = "G9"
    G10 = "G10"
    G11 = "G11"

class LeaveStatus(str, enum.Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"

class LeaveLocation(str, enum.Enum):
    MAMBAL = "Mambal"
    SEMBUNG_G = "Sembung G"


def utcnow() -> datetime:
    """Naive UTC timestamp, matching the `timestamp without time zone` columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _enum_column(enum_cls, name):
    # Persist the human values ("Sembung G"), not the member names, and refuse anything else
    return Enum(
        enum_cls,
        name=name,
        values_callable=lambda e: [member.value for member in e],
        validate_strings=True,
        create_constraint=True,
    )


class LeaveRequest(Base):
    __tablename__ = "employee_leave_requests"

    # Columns that can never be written after insert
    IMMUTABLE_FIELDS = frozenset({"id", "id_share", "created_at"})

    id = Column(Integer, primary_key=True, index=True)
    id_share = Column(String(64), nullable=False, unique=True, index=True)
    employee_name = Column(Text, nullable=False)
    department_grade = Column(_enum_column(DepartmentGrade, "department_grade"), nullable=False)
    status = Column(
        _enum_column(LeaveStatus, "status"),
        nullable=False,
        default=LeaveStatus.PENDING,
    )
    leave_date = Column(Date, nullable=False)
    location = Column(_enum_column(LeaveLocation, "location"), nullable=False)
    reason = Column(Text, nullable=False)
    time_out = Column(String(5), nullable=False)  # HH:MM
    time_back = Column(String(5), nullable=False)  # HH:MM
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow)

    def __repr__(self):
        return f"<LeaveRequest id={self.id} id_share={self.id_share} status={self.status}>"
