"""Request payload models validated at the HTTP boundary.

Listings and bids are free-form documents in the store; the models below pin
down the identity and status fields the access rules depend on and keep any
other field the client sends.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from workvista.errors import ValidationFailed
from workvista.utils.tokens import REGISTERED_CLAIMS

ModelT = TypeVar("ModelT", bound=BaseModel)

DEFAULT_BID_STATUS = "pending"


class _Document(BaseModel):
    """Base for store documents: unknown fields are kept, ``_id`` never is."""

    model_config = ConfigDict(extra="allow")

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


def _require_text(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be empty")
    return value


class SessionClaim(_Document):
    """Identity payload presented to ``POST /access-token``."""

    email: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def email_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("email must not be blank")
        return v

    @model_validator(mode="before")
    @classmethod
    def no_registered_claims(cls, data: Any) -> Any:
        if isinstance(data, dict):
            reserved = sorted(REGISTERED_CLAIMS.intersection(data))
            if reserved:
                raise ValueError(f"reserved token claims are not allowed: {', '.join(reserved)}")
        return data


class Listing(_Document):
    """A posted job ("category") owned by ``email``."""

    email: str = Field(min_length=1)
    category: Optional[str] = None
    job_title: Optional[str] = None
    deadline: Optional[str] = None
    description: Optional[str] = None
    minimum_price: Optional[Any] = None
    maximum_price: Optional[Any] = None


class ListingUpdate(_Document):
    """Partial replacement fields for ``PUT /categories/<id>``."""

    email: Optional[str] = None
    category: Optional[str] = None
    job_title: Optional[str] = None
    deadline: Optional[str] = None
    description: Optional[str] = None
    minimum_price: Optional[Any] = None
    maximum_price: Optional[Any] = None


class Bid(_Document):
    """A bid by ``yourEmail`` against a listing owned by ``buyerEmail``."""

    yourEmail: str = Field(min_length=1)
    buyerEmail: str = Field(min_length=1)
    status: str = DEFAULT_BID_STATUS
    price: Optional[Any] = None
    deadline: Optional[str] = None
    job_title: Optional[str] = None

    @field_validator("status")
    @classmethod
    def status_not_blank(cls, v: str) -> str:
        return _require_text(v)


class BidStatusUpdate(BaseModel):
    """Body of ``PUT /bidRequests/<id>``; any non-empty status string is accepted."""

    status: str

    @field_validator("status")
    @classmethod
    def status_not_blank(cls, v: str) -> str:
        return _require_text(v)


def parse_payload(model: Type[ModelT], payload: Optional[Dict[str, Any]]) -> ModelT:
    """Validate ``payload`` against ``model`` or raise ValidationFailed."""
    if not isinstance(payload, dict):
        raise ValidationFailed("Request body must be a JSON object.")
    try:
        return model.model_validate({k: v for k, v in payload.items() if k != "_id"})
    except ValidationError as exc:
        details = [
            {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
            for err in exc.errors()
        ]
        raise ValidationFailed(details=details) from exc
