from typing import Any, Dict, Optional

class AppException(Exception):
    def __init__(
        self,
        message: str,
        status_code: int = 400,
        error_code: str = "BUSINESS_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details
        super().__init__(self.message)

class LeaveRequestNotFoundError(AppException):
    """Raised when an update targets a leave request id that does not exist."""
    def __init__(self, request_id: int):
        super().__init__(
            message=f"Employee leave request with ID {request_id} not found",
            status_code=404,
            error_code="LEAVE_REQUEST_NOT_FOUND",
            details={"id": request_id}
        )
        self.request_id = request_id
