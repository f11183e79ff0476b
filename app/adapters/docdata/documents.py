"""Typed model of Docdata status responses.

Docdata answers a ``status`` call with a loosely structured document: nodes
may be missing, and ``report.payment`` is a bare record when the shopper made
a single attempt but a list when there were several. This module is the
parsing boundary: everything past :func:`parse_status_document` sees frozen
models where optional nodes are ``None`` and ``payment`` is always an ordered
tuple (oldest attempt first, possibly empty).
"""

from collections.abc import Mapping
from typing import Any, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from ..exceptions import GatewayResponseError


class _ResponseNode(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class ResultCode(_ResponseNode):
    """``<success code="SUCCESS">message</success>`` style node."""

    code: Optional[str] = None
    message: Optional[str] = Field(default=None, alias="value")


class ProviderError(_ResponseNode):
    code: Optional[str] = None
    message: Optional[str] = Field(default=None, alias="value")


class Amount(_ResponseNode):
    value: int
    currency: Optional[str] = None


class Authorization(_ResponseNode):
    status: str
    amount: Optional[Amount] = None
    confidence_level: Optional[str] = None


class PaymentAttempt(_ResponseNode):
    """One shopper attempt to pay the order."""

    id: Optional[str] = None
    payment_method: Optional[str] = None
    authorization: Optional[Authorization] = None

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        # Docdata payment ids are numeric on the wire
        if isinstance(value, int):
            return str(value)
        return value


class MonetaryTotals(_ResponseNode):
    """Order totals, all in the order currency's minor unit."""

    total_registered: int
    total_captured: int = 0
    total_refunded: int = 0
    total_chargedback: int = 0
    total_reversed: int = 0
    total_shopper_pending: Optional[int] = None
    total_acquirer_pending: Optional[int] = None
    total_acquirer_approved: Optional[int] = None
    total_canceled: Optional[int] = None


class Report(_ResponseNode):
    payment: Tuple[PaymentAttempt, ...] = ()
    approximate_totals: Optional[MonetaryTotals] = None

    @field_validator("payment", mode="before")
    @classmethod
    def _normalize_payments(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, Mapping):
            return (value,)
        return value


class StatusSuccess(_ResponseNode):
    success: Optional[ResultCode] = None
    report: Optional[Report] = None


class StatusError(_ResponseNode):
    error: Optional[ProviderError] = None


class ResponseDocument(_ResponseNode):
    status_success: Optional[StatusSuccess] = None
    status_error: Optional[StatusError] = None


def parse_status_document(data: Mapping) -> ResponseDocument:
    """Validate a plain status response dictionary into a ResponseDocument.

    Raises:
        GatewayResponseError: If the payload does not match the status schema.
    """
    try:
        return ResponseDocument.model_validate(data)
    except ValidationError as exc:
        raise GatewayResponseError(
            f"Malformed Docdata status response: {exc.error_count()} error(s)"
        ) from exc


__all__ = [
    "Amount",
    "Authorization",
    "MonetaryTotals",
    "PaymentAttempt",
    "ProviderError",
    "Report",
    "ResponseDocument",
    "ResultCode",
    "StatusError",
    "StatusSuccess",
    "parse_status_document",
]
