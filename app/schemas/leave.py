"""
Leave request schemas and validators.

These models are the single source of truth for what a leave request may
look like on the way in (create / update) and on the way out (response).
Defaulting of `status` to Pending happens here and nowhere else.
"""
import re
from datetime import date, datetime
from typing import Annotated, Any, Dict, List, Mapping, Optional

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    ValidationError,
    field_validator,
)

from app.core.schemas import FieldError, format_validation_errors
from app.models.leave_request import DepartmentGrade, LeaveLocation, LeaveStatus

TIME_PATTERN = re.compile(r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$")
TIME_FORMAT_MESSAGE = "Time must be in HH:MM format"


def coerce_calendar_date(value: Any) -> date:
    """
    Coerce input to a calendar date without any timezone conversion.
    ISO datetimes keep the date part exactly as written ("2024-01-15T23:30:00-05:00" -> 2024-01-15).
    The whole string must parse; trailing text after the date is rejected.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        s = value.strip()
        # fromisoformat only understands "Z" from Python 3.11
        if s[-1:] in ("Z", "z"):
            s = s[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(s).date()
        except ValueError:
            pass
    raise ValueError("leave_date must be a calendar date (YYYY-MM-DD)")


def check_time_format(value: str) -> str:
    if not TIME_PATTERN.fullmatch(value):
        raise ValueError(TIME_FORMAT_MESSAGE)
    return value


def _required_text(message: str):
    def _check(value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError(message)
        return value
    return _check


EmployeeName = Annotated[str, AfterValidator(_required_text("Employee name is required"))]
Reason = Annotated[str, AfterValidator(_required_text("Reason is required"))]
ClockTime = Annotated[str, AfterValidator(check_time_format)]
CalendarDate = Annotated[date, BeforeValidator(coerce_calendar_date)]


class LeaveRequestCreate(BaseModel):
    employee_name: EmployeeName
    department_grade: DepartmentGrade
    status: LeaveStatus = LeaveStatus.PENDING
    leave_date: CalendarDate
    location: LeaveLocation
    reason: Reason
    time_out: ClockTime
    time_back: ClockTime


class LeaveRequestPatch(BaseModel):
    """Fields of a partial update. Omitted fields keep their stored value."""
    employee_name: Optional[EmployeeName] = None
    department_grade: Optional[DepartmentGrade] = None
    status: Optional[LeaveStatus] = None
    leave_date: Optional[CalendarDate] = None
    location: Optional[LeaveLocation] = None
    reason: Optional[Reason] = None
    time_out: Optional[ClockTime] = None
    time_back: Optional[ClockTime] = None

    @field_validator("*", mode="before")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("Field may be omitted but not set to null")
        return value

    def patch(self) -> Dict[str, Any]:
        """Mapping of only the supplied fields to their new values."""
        return self.model_dump(exclude_unset=True, exclude={"id"})


class LeaveRequestUpdate(LeaveRequestPatch):
    id: int


class LeaveRequestResponse(BaseModel):
    id: int
    id_share: str
    employee_name: str
    department_grade: DepartmentGrade
    status: LeaveStatus
    leave_date: date
    location: LeaveLocation
    reason: str
    time_out: str
    time_back: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class DeleteResult(BaseModel):
    success: bool
    message: str


class LeaveRequestOptions(BaseModel):
    department_grades: List[str]
    statuses: List[str]
    locations: List[str]


class ValidationOutcome(BaseModel):
    payload: Optional[LeaveRequestCreate] = None
    errors: List[FieldError] = []

    @property
    def ok(self) -> bool:
        return not self.errors


def validate_create_payload(raw: Mapping[str, Any]) -> ValidationOutcome:
    """Validate and normalize raw form input; never raises for bad input."""
    try:
        payload = LeaveRequestCreate.model_validate(dict(raw))
    except ValidationError as exc:
        return ValidationOutcome(errors=format_validation_errors(exc.errors()))
    return ValidationOutcome(payload=payload)


def leave_request_options() -> LeaveRequestOptions:
    return LeaveRequestOptions(
        department_grades=[g.value for g in DepartmentGrade],
        statuses=[s.value for s in LeaveStatus],
        locations=[loc.value for loc in LeaveLocation],
    )
