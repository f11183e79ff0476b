"""Docdata Payments (One Page Checkout) adapter."""

import asyncio
import logging
import uuid
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional

from ..base import (
    PaymentAdapter,
    normalize_payment_status,
    to_minor_units,
    validate_amount,
    validate_currency_code,
)
from ..exceptions import ValidationError
from .messages import (
    CancelRequest,
    CaptureRequest,
    CreateRequest,
    DocdataRequest,
    DocdataResponse,
    RefundRequest,
    StatusRequest,
)
from .soap import SoapTransport
from .status import StatusInterpreter

logger = logging.getLogger(__name__)


def _optional_minor_units(kwargs: Dict[str, Any]) -> tuple[Optional[int], Optional[str]]:
    amount = kwargs.get("amount")
    currency = kwargs.get("currency")
    if amount is None:
        return None, None
    try:
        amount = Decimal(amount)
    except (InvalidOperation, TypeError) as exc:
        raise ValidationError(f"Invalid amount: {amount}") from exc
    if not validate_amount(amount):
        raise ValidationError(f"Invalid amount: {amount}")
    if not validate_currency_code(currency):
        raise ValidationError(f"Invalid currency code: {currency}")
    return to_minor_units(amount, currency), currency


class DocdataAdapter(PaymentAdapter):
    """Maps the PaymentAdapter contract onto Docdata's SOAP Order API.

    Orders are created server side and the shopper is redirected to Docdata's
    One Page Checkout to choose a payment method. Whether an authorized
    payment is captured automatically is decided by the merchant's payment
    profile on Docdata, so ``purchase`` and ``authorize`` issue the same
    ``create`` call.
    """

    def __init__(
        self,
        transport: SoapTransport,
        *,
        payment_profile: str = "standard",
        return_url: Optional[str] = None,
        client_language: Optional[str] = None,
    ) -> None:
        self.transport = transport
        self.payment_profile = payment_profile
        self.return_url = return_url
        self.client_language = client_language
        logger.info(
            "DocdataAdapter initialized for merchant %s (test_mode=%s)",
            transport.merchant_name, transport.test_mode,
        )

    @property
    def test_mode(self) -> bool:
        return self.transport.test_mode

    async def _send(self, request: DocdataRequest) -> DocdataResponse:
        # suds is blocking
        return await asyncio.to_thread(request.send, self.transport)

    async def _create(
        self, amount: Decimal, currency: str, **kwargs: Any
    ) -> Dict[str, Any]:
        if not validate_currency_code(currency):
            raise ValidationError(f"Invalid currency code: {currency}")
        if not validate_amount(amount):
            raise ValidationError(f"Invalid amount: {amount}")

        order_reference = kwargs.get("order_reference") or str(uuid.uuid4())
        request = CreateRequest(
            order_reference=order_reference,
            amount=to_minor_units(amount, currency),
            currency=currency,
            merchant_name=self.transport.merchant_name,
            profile=kwargs.get("profile") or self.payment_profile,
            description=kwargs.get("description"),
            customer=kwargs.get("customer"),
            return_url=kwargs.get("return_url") or self.return_url,
            client_language=kwargs.get("language") or self.client_language,
            test_mode=self.test_mode,
        )
        response = await self._send(request)

        result = response.to_dict()
        result.update({
            "order_reference": order_reference,
            "amount": str(amount),
            "currency": currency,
            "status": "created" if response.is_successful() else "failed",
        })
        logger.info("Docdata order %s -> %s", order_reference, result["status"])
        return result

    async def purchase(
        self, amount: Decimal, currency: str, **kwargs: Any
    ) -> Dict[str, Any]:
        return await self._create(amount, currency, **kwargs)

    async def authorize(
        self, amount: Decimal, currency: str, **kwargs: Any
    ) -> Dict[str, Any]:
        return await self._create(amount, currency, **kwargs)

    async def capture_payment(self, payment_id: str, **kwargs: Any) -> Dict[str, Any]:
        amount, currency = _optional_minor_units(kwargs)
        request = CaptureRequest(
            payment_id,
            kwargs.get("reference") or str(uuid.uuid4()),
            amount,
            currency,
        )
        response = await self._send(request)
        result = response.to_dict()
        result["status"] = "captured" if response.is_successful() else "failed"
        return result

    async def refund_payment(self, payment_id: str, **kwargs: Any) -> Dict[str, Any]:
        amount, currency = _optional_minor_units(kwargs)
        request = RefundRequest(
            payment_id,
            kwargs.get("reference") or str(uuid.uuid4()),
            amount,
            currency,
        )
        response = await self._send(request)
        result = response.to_dict()
        result["status"] = "refunded" if response.is_successful() else "failed"
        return result

    async def void_payment(self, payment_id: str, **kwargs: Any) -> Dict[str, Any]:
        response = await self._send(CancelRequest(payment_id))
        result = response.to_dict()
        result["status"] = "cancelled" if response.is_successful() else "failed"
        return result

    async def get_payment_status(self, payment_id: str) -> Dict[str, Any]:
        response = await self._send(StatusRequest(payment_id))
        result = response.to_dict()
        result["status"] = normalize_payment_status(
            result["successful"], result["pending"], result["cancelled"]
        )
        logger.info("Docdata order %s status: %s", payment_id, result["status"])
        return result


def get_adapter(settings: Any) -> DocdataAdapter:
    """Build a DocdataAdapter from application settings."""
    transport = SoapTransport(
        settings.DOCDATA_MERCHANT_NAME,
        settings.DOCDATA_MERCHANT_PASSWORD,
        test_mode=settings.DOCDATA_TEST_MODE,
        wsdl_url=settings.DOCDATA_WSDL_URL,
    )
    return DocdataAdapter(
        transport,
        payment_profile=settings.DOCDATA_PAYMENT_PROFILE,
        return_url=settings.RETURN_URL,
        client_language=settings.DOCDATA_CLIENT_LANGUAGE,
    )


__all__ = ["DocdataAdapter", "StatusInterpreter", "get_adapter"]
