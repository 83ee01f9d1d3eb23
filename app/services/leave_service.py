from datetime import timedelta
from typing import Any, List, Mapping, Optional, Union

from sqlalchemy.orm import Session

from app.core.exceptions import LeaveRequestNotFoundError
from app.models.leave_request import LeaveRequest, utcnow
from app.schemas.leave import (
    DeleteResult,
    LeaveRequestCreate,
    LeaveRequestUpdate,
    ValidationOutcome,
    validate_create_payload,
)
from app.services.base import BaseService
from app.services.id_share import generate_id_share
from app.services.leave_repository import LeaveRequestRepository


class LeaveRequestService(BaseService):
    """Create / read / update / delete handlers for employee leave requests."""

    def __init__(self, db: Session):
        super().__init__(db)
        self.repository = LeaveRequestRepository(db)

    def create(self, payload: LeaveRequestCreate) -> LeaveRequest:
        """
        Persist a validated payload. System fields (id, id_share, timestamps)
        are assigned here; created_at and updated_at share one clock reading.
        """
        now = utcnow()
        values = payload.model_dump()
        values.update(
            id_share=generate_id_share(now),
            created_at=now,
            updated_at=now,
        )
        record = self.repository.insert(values)
        self.log_info(
            f"Created leave request {record.id} ({record.id_share})",
            leave_request_id=record.id,
        )
        return record

    def create_from_raw(self, raw: Mapping[str, Any]) -> Union[LeaveRequest, ValidationOutcome]:
        """Validate raw form input first; invalid input returns the field errors and writes nothing."""
        outcome = validate_create_payload(raw)
        if not outcome.ok:
            self.log_warning(f"Rejected leave request input: {[e.field for e in outcome.errors]}")
            return outcome
        return self.create(outcome.payload)

    def get(self, request_id: int) -> Optional[LeaveRequest]:
        return self.repository.find_by_id(request_id)

    def list_all(self) -> List[LeaveRequest]:
        return self.repository.list_all()

    def update(self, payload: LeaveRequestUpdate) -> LeaveRequest:
        existing = self.repository.find_by_id(payload.id)
        if existing is None:
            self.log_warning(f"Update failed: leave request {payload.id} not found")
            raise LeaveRequestNotFoundError(payload.id)

        fields = payload.patch()
        now = utcnow()
        # Keep updated_at strictly increasing even if the clock has not advanced
        if existing.updated_at is not None and now <= existing.updated_at:
            now = existing.updated_at + timedelta(microseconds=1)
        fields["updated_at"] = now

        record = self.repository.update_by_id(payload.id, fields)
        if record is None:
            # Deleted between the lookup and the write
            raise LeaveRequestNotFoundError(payload.id)
        self.log_info(
            f"Updated leave request {record.id}: {sorted(k for k in fields if k != 'updated_at')}",
            leave_request_id=record.id,
        )
        return record

    def delete(self, request_id: int) -> DeleteResult:
        if self.repository.find_by_id(request_id) is None:
            self.log_warning(f"Delete skipped: leave request {request_id} not found")
            return DeleteResult(
                success=False,
                message=f"Leave request with ID {request_id} not found.",
            )

        if not self.repository.delete_by_id(request_id):
            return DeleteResult(
                success=False,
                message=f"Failed to delete leave request with ID {request_id}.",
            )

        self.log_info(f"Deleted leave request {request_id}", leave_request_id=request_id)
        return DeleteResult(
            success=True,
            message=f"Leave request with ID {request_id} has been deleted successfully.",
        )
