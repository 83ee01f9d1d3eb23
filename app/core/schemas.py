from typing import Any, Dict, Iterable, List, Optional
from pydantic import BaseModel


class FieldError(BaseModel):
    field: str
    msg: str


class ErrorInfo(BaseModel):
    msg: str
    code: Optional[str] = None
    field: Optional[str] = None
    details: Optional[Dict[str, Any]] = None


class ErrorResponse(BaseModel):
    """Body returned by every exception handler."""
    success: bool = False
    errors: List[ErrorInfo]


def format_validation_errors(errors: Iterable[Dict[str, Any]]) -> List[FieldError]:
    """
    Flatten pydantic / FastAPI error dicts into field + message pairs.
    loc is usually ('body', 'field_name') for requests and ('field_name',) for models.
    """
    formatted = []
    for error in errors:
        loc = error.get("loc") or ()
        field = str(loc[-1]) if len(loc) > 0 else "unknown"
        msg = str(error.get("msg", "Invalid value"))
        # Custom validators surface as "Value error, <message>"
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        formatted.append(FieldError(field=field, msg=msg))
    return formatted
