"""
Restaurants API — Pydantic Request/Response Schemas
====================================================

What:  Pydantic models defining the API contract for restaurant records.
Why:   Input validation for the list query, serialization of open-ended
       MongoDB documents, and OpenAPI doc generation.
How:   FastAPI uses the response models to serialize handler results; the
       list-query model is validated by the dependencies in dependencies.py.

Design Decision:
    Restaurant documents are open: only `_id`, `name` and `borough` are
    declared. Every other field (cuisine, address, grades, ...) passes through
    untouched via `extra="allow"`.
"""

import re
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError


# ══════════════════════════════════════════════════════════════════════════
# Document Serialization
# ══════════════════════════════════════════════════════════════════════════


def serialize_document(value: Any) -> Any:
    """
    Convert a BSON document into JSON-safe Python values.

    ObjectId → 24-char hex string, datetime/date → ISO 8601 string.
    Dicts and lists are walked recursively; everything else is returned as-is.
    """
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {key: serialize_document(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [serialize_document(item) for item in value]
    return value


# ══════════════════════════════════════════════════════════════════════════
# Response Models — What the API returns to clients
# ══════════════════════════════════════════════════════════════════════════


class RestaurantRecord(BaseModel):
    """
    What:  A single restaurant document.
    Who:   Returned by create, list, get and update.

    Why `_id` as alias:
        Clients of the original MongoDB-backed API read `_id`; keeping the key
        means records can be sent back to PUT without renaming.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = Field(alias="_id", description="Restaurant identifier (24-char hex ObjectId)")
    # Bodies are stored unvalidated, so stored values may be of any BSON type
    name: Optional[Any] = Field(default=None, description="Restaurant name")
    borough: Optional[Any] = Field(default=None, description="City district")

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "RestaurantRecord":
        return cls.model_validate(serialize_document(document))


class RestaurantEnvelope(BaseModel):
    """Response wrapper for get-by-id and update-by-id."""
    message: str = Field(description="Human-readable outcome")
    data: RestaurantRecord = Field(description="The restaurant document")


class MessageResponse(BaseModel):
    """Response body for delete-by-id."""
    message: str = Field(description="Human-readable outcome")


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "validation_error",
            "message": "Validation failed.",
            "details": {"errors": [{"field": "page", "message": "Page must be a number"}]},
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="MongoDB connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")


# ══════════════════════════════════════════════════════════════════════════
# Query Models — What the client sends to list restaurants
# ══════════════════════════════════════════════════════════════════════════


_NUMERIC_LABELS = {"page": "Page", "per_page": "PerPage"}

# Plain decimal notation only: no exponents, underscores, or nan/inf
_NUMERIC_PATTERN = re.compile(r"^[+-]?(\d*\.)?\d+$")

# MongoDB stores skip/limit as signed 64-bit integers
INT64_MAX = 2**63 - 1


def _coerce_page_number(value: Any, label: str) -> int:
    if value is None or isinstance(value, bool):
        raise PydanticCustomError("numeric", f"{label} must be a number")
    text = str(value).strip()
    if not _NUMERIC_PATTERN.match(text):
        raise PydanticCustomError("numeric", f"{label} must be a number")
    number = Decimal(text)
    if number != number.to_integral_value():
        raise PydanticCustomError("whole_number", f"{label} must be a whole number")
    if number < 1:
        raise PydanticCustomError("greater_than_equal", f"{label} must be at least 1")
    if number > INT64_MAX:
        raise PydanticCustomError("less_than_equal", f"{label} must be at most {INT64_MAX}")
    return int(number)


class ListQuery(BaseModel):
    """
    What:  Validated parameters for the paginated, filterable listing.
    How:   Built from the query string (JSON API) or the form body (HTML form).

    Parameters:
        page:     1-based page number; numeric strings are coerced to int
        perPage:  page size; numeric strings are coerced to int
        borough:  optional exact-match filter; empty string means "no filter"

    Window:
        records [(page-1)*perPage, page*perPage) of the filtered result set
    """
    model_config = ConfigDict(populate_by_name=True)

    page: int = Field(default=None, validate_default=True)
    per_page: int = Field(default=None, alias="perPage", validate_default=True)
    borough: Optional[str] = Field(default=None, validate_default=True)

    @field_validator("page", "per_page", mode="before")
    @classmethod
    def validate_numeric(cls, v: Any, info) -> int:
        return _coerce_page_number(v, _NUMERIC_LABELS[info.field_name])

    @field_validator("borough", mode="before")
    @classmethod
    def validate_borough(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        if not isinstance(v, str):
            raise PydanticCustomError("string_type", "Borough must be a string")
        return v or None

    @field_validator("per_page")
    @classmethod
    def validate_window(cls, v: int, info) -> int:
        page = info.data.get("page")
        if page is not None and page > 1 and (page - 1) * v > INT64_MAX:
            limit = INT64_MAX // (page - 1)
            raise PydanticCustomError(
                "less_than_equal", f"PerPage must be at most {limit} for this page"
            )
        return v


# Field names as the client sends them
_CLIENT_FIELD_NAMES = {"per_page": "perPage"}


def validation_messages(exc: PydanticValidationError) -> List[Dict[str, str]]:
    """Flatten a pydantic ValidationError into [{field, message}] (one per field)."""
    messages: List[Dict[str, str]] = []
    seen = set()
    for error in exc.errors():
        loc = error.get("loc") or ("body",)
        field = str(loc[-1])
        field = _CLIENT_FIELD_NAMES.get(field, field)
        if field in seen:
            continue
        seen.add(field)
        messages.append({"field": field, "message": error.get("msg", "Invalid value")})
    return messages
