# Models package
# Importing modules here ensures they are registered with SQLAlchemy Base
from . import leave_request

# Explicit class exports for cleaner imports
from .leave_request import LeaveRequest, LeaveStatus, DepartmentGrade, LeaveLocation

__all__ = [
    "LeaveRequest",
    "LeaveStatus",
    "DepartmentGrade",
    "LeaveLocation",
]
