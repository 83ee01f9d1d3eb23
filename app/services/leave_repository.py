from typing import Any, Dict, List, Mapping, Optional

from app.models.leave_request import LeaveRequest
from app.services.base import BaseService


class LeaveRequestRepository(BaseService):
    """
    Single-table store for leave requests.
    Every write commits (rolling back and re-raising on failure); reads never commit.
    """

    def insert(self, values: Mapping[str, Any]) -> LeaveRequest:
        record = LeaveRequest(**values)
        self.db.add(record)
        self.commit()
        self.db.refresh(record)
        return record

    def find_by_id(self, request_id: int) -> Optional[LeaveRequest]:
        return self.db.query(LeaveRequest).filter(LeaveRequest.id == request_id).first()

    def list_all(self) -> List[LeaveRequest]:
        # id breaks created_at ties so a listing is stable
        return (
            self.db.query(LeaveRequest)
            .order_by(LeaveRequest.created_at.desc(), LeaveRequest.id.desc())
            .all()
        )

    def update_by_id(self, request_id: int, fields: Dict[str, Any]) -> Optional[LeaveRequest]:
        record = self.find_by_id(request_id)
        if record is None:
            return None

        protected = LeaveRequest.IMMUTABLE_FIELDS.intersection(fields)
        if protected:
            raise ValueError(f"Cannot modify immutable fields: {sorted(protected)}")

        for name, value in fields.items():
            setattr(record, name, value)
        self.commit()
        self.db.refresh(record)
        return record

    def delete_by_id(self, request_id: int) -> bool:
        deleted = (
            self.db.query(LeaveRequest)
            .filter(LeaveRequest.id == request_id)
            .delete()
        )
        self.commit()
        return deleted > 0
