import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from app.core.limiter import limiter, WRITE_LIMIT
from app.core.schemas import ErrorResponse
from app.database import get_db
from app.schemas.leave import (
    DeleteResult,
    LeaveRequestCreate,
    LeaveRequestOptions,
    LeaveRequestPatch,
    LeaveRequestResponse,
    LeaveRequestUpdate,
    leave_request_options,
)
from app.services.leave_service import LeaveRequestService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/leave-requests",
    tags=["leave-requests"]
)


def get_leave_service(db: Session = Depends(get_db)) -> LeaveRequestService:
    return LeaveRequestService(db)


@router.post(
    "",
    response_model=LeaveRequestResponse,
    status_code=status.HTTP_201_CREATED,
    responses={422: {"model": ErrorResponse}},
)
@limiter.limit(WRITE_LIMIT)
def create_leave_request(
    request: Request,
    payload: LeaveRequestCreate,
    service: LeaveRequestService = Depends(get_leave_service),
):
    return service.create(payload)


@router.get("", response_model=List[LeaveRequestResponse])
def list_leave_requests(service: LeaveRequestService = Depends(get_leave_service)):
    """All leave requests, newest first."""
    return service.list_all()


@router.get("/options", response_model=LeaveRequestOptions)
def get_leave_request_options():
    """Choices for the form dropdowns."""
    return leave_request_options()


@router.get("/{request_id}", response_model=Optional[LeaveRequestResponse])
def get_leave_request(request_id: int, service: LeaveRequestService = Depends(get_leave_service)):
    """Returns null (not 404) when no such request exists."""
    return service.get(request_id)


@router.patch(
    "/{request_id}",
    response_model=LeaveRequestResponse,
    responses={404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
@limiter.limit(WRITE_LIMIT)
def update_leave_request(
    request: Request,
    request_id: int,
    patch: LeaveRequestPatch,
    service: LeaveRequestService = Depends(get_leave_service),
):
    payload = LeaveRequestUpdate(id=request_id, **patch.patch())
    return service.update(payload)


@router.delete("/{request_id}", response_model=DeleteResult)
@limiter.limit(WRITE_LIMIT)
def delete_leave_request(
    request: Request,
    request_id: int,
    service: LeaveRequestService = Depends(get_leave_service),
):
    return service.delete(request_id)
