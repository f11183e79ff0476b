"""Request and response messages for the Docdata Order API.

Each request knows its SOAP operation and how to lay out its parameters;
``send`` runs it over a :class:`SoapTransport` and wraps the reply in the
matching response class.
"""

import logging
from typing import Any, Dict, Optional
from urllib.parse import urlencode

from .documents import ResponseDocument, parse_status_document
from .soap import SoapTransport
from .status import StatusInterpreter

logger = logging.getLogger(__name__)

TEST_MENU_URL = "https://test.docdatapayments.com/ps/menu"
LIVE_MENU_URL = "https://secure.docdatapayments.com/ps/menu"

_interpreter = StatusInterpreter()


def _amount(value: int, currency: str) -> Dict[str, Any]:
    return {"_currency": currency, "value": value}


# ==================== Responses ====================

class DocdataResponse:
    """Reply to a single Order API call."""

    success_node: str = ""
    error_node: str = ""

    def __init__(self, request: "DocdataRequest", data: Dict[str, Any]) -> None:
        self.request = request
        self.data = data

    def is_successful(self) -> bool:
        return self.data.get(self.success_node) is not None

    def is_pending(self) -> bool:
        return False

    def is_cancelled(self) -> bool:
        return False

    def is_redirect(self) -> bool:
        return False

    @property
    def transaction_reference(self) -> Optional[str]:
        return self.request.transaction_reference

    @property
    def error(self) -> Dict[str, Any]:
        node = self.data.get(self.error_node) or {}
        error = node.get("error") or {}
        # captureErrors/refundErrors may carry several <error> elements
        if isinstance(error, list):
            error = error[0] if error else {}
        return error

    @property
    def code(self) -> Optional[str]:
        code = self.error.get("code")
        return str(code) if code is not None else None

    @property
    def message(self) -> Optional[str]:
        return self.error.get("value")

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "id": self.transaction_reference,
            "successful": self.is_successful(),
            "pending": self.is_pending(),
            "cancelled": self.is_cancelled(),
        }
        if not self.is_successful() and self.code is not None:
            result["error"] = {"code": self.code, "message": self.message}
        return result


class CreateResponse(DocdataResponse):
    """Order created; the shopper continues on Docdata's One Page Checkout."""

    success_node = "createSuccess"
    error_node = "createError"

    @property
    def transaction_reference(self) -> Optional[str]:
        success = self.data.get(self.success_node) or {}
        key = success.get("key")
        return str(key) if key is not None else None

    def is_redirect(self) -> bool:
        return self.is_successful()

    @property
    def redirect_url(self) -> Optional[str]:
        if not self.is_redirect():
            return None
        request = self.request
        base = TEST_MENU_URL if request.test_mode else LIVE_MENU_URL
        query = {
            "command": "show_payment_cluster",
            "merchant_name": request.merchant_name,
            "payment_cluster_key": self.transaction_reference,
        }
        if request.return_url:
            query.update({
                "return_url_success": f"{request.return_url}?status=success",
                "return_url_pending": f"{request.return_url}?status=pending",
                "return_url_canceled": f"{request.return_url}?status=canceled",
                "return_url_error": f"{request.return_url}?status=error",
            })
        if request.client_language:
            query["client_language"] = request.client_language
        return f"{base}?{urlencode(query)}"

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["redirect_url"] = self.redirect_url
        return result


class CancelResponse(DocdataResponse):
    success_node = "cancelSuccess"
    error_node = "cancelError"

    def is_cancelled(self) -> bool:
        return self.is_successful()


class CaptureResponse(DocdataResponse):
    success_node = "captureSuccess"
    error_node = "captureErrors"


class RefundResponse(DocdataResponse):
    success_node = "refundSuccess"
    error_node = "refundErrors"


class StatusResponse(DocdataResponse):
    """Status report, classified by :class:`StatusInterpreter`."""

    success_node = "statusSuccess"
    error_node = "statusError"

    def __init__(self, request: "DocdataRequest", data: Dict[str, Any]) -> None:
        super().__init__(request, data)
        self.document: ResponseDocument = parse_status_document(data)

    def is_successful(self) -> bool:
        return _interpreter.is_successful(self.document)

    def is_pending(self) -> bool:
        return _interpreter.is_pending(self.document)

    def is_cancelled(self) -> bool:
        return _interpreter.is_cancelled(self.document)

    @property
    def payment_id(self) -> Optional[str]:
        """Docdata id of the most recent payment attempt, used for capture/refund."""
        status = self.document.status_success
        if status is None or status.report is None or not status.report.payment:
            return None
        return _interpreter.most_recent_payment(status.report).id

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["payment_id"] = self.payment_id
        return result


# ==================== Requests ====================

class DocdataRequest:
    """Base for Order API requests."""

    operation: str = ""
    response_class = DocdataResponse

    def __init__(self, transaction_reference: Optional[str] = None) -> None:
        self.transaction_reference = transaction_reference

    def get_data(self) -> Dict[str, Any]:
        raise NotImplementedError

    def send(self, transport: SoapTransport) -> DocdataResponse:
        data = transport.call(self.operation, **self.get_data())
        response = self.response_class(self, data)
        if response.code is not None:
            logger.warning(
                "Docdata %s rejected (%s): %s",
                self.operation, response.code, response.message,
            )
        return response


class CreateRequest(DocdataRequest):
    operation = "create"
    response_class = CreateResponse

    def __init__(
        self,
        *,
        order_reference: str,
        amount: int,
        currency: str,
        merchant_name: str,
        profile: str,
        description: Optional[str] = None,
        customer: Optional[Dict[str, Any]] = None,
        return_url: Optional[str] = None,
        client_language: Optional[str] = None,
        test_mode: bool = True,
    ) -> None:
        super().__init__(order_reference)
        self.order_reference = order_reference
        self.amount = amount
        self.currency = currency
        self.merchant_name = merchant_name
        self.profile = profile
        self.description = description
        self.customer = customer or {}
        self.return_url = return_url
        self.client_language = client_language
        self.test_mode = test_mode

    def _shopper(self) -> Dict[str, Any]:
        customer = self.customer
        return {
            "_id": customer.get("id") or self.order_reference,
            "name": {
                "first": customer.get("first_name", ""),
                "last": customer.get("last_name", ""),
            },
            "email": customer.get("email", ""),
            "language": {"_code": customer.get("language") or self.client_language or "en"},
            "gender": customer.get("gender", "U"),
        }

    def _bill_to(self) -> Dict[str, Any]:
        customer = self.customer
        return {
            "name": {
                "first": customer.get("first_name", ""),
                "last": customer.get("last_name", ""),
            },
            "address": {
                "street": customer.get("street", ""),
                "houseNumber": customer.get("house_number", ""),
                "postalCode": customer.get("postal_code", ""),
                "city": customer.get("city", ""),
                "country": {"_code": customer.get("country", "NL")},
            },
        }

    def get_data(self) -> Dict[str, Any]:
        data = {
            "merchantOrderReference": self.order_reference,
            "paymentPreferences": {
                "profile": self.profile,
                "numberOfDaysToPay": 14,
            },
            "shopper": self._shopper(),
            "totalGrossAmount": _amount(self.amount, self.currency),
            "billTo": self._bill_to(),
        }
        if self.description:
            data["description"] = self.description[:50]
        return data


class CancelRequest(DocdataRequest):
    operation = "cancel"
    response_class = CancelResponse

    def get_data(self) -> Dict[str, Any]:
        return {"paymentOrderKey": self.transaction_reference}


class _PaymentMutationRequest(DocdataRequest):
    reference_field: str = ""

    def __init__(
        self,
        payment_id: str,
        reference: str,
        amount: Optional[int] = None,
        currency: Optional[str] = None,
    ) -> None:
        super().__init__(payment_id)
        self.reference = reference
        self.amount = amount
        self.currency = currency

    def get_data(self) -> Dict[str, Any]:
        data = {
            "paymentId": self.transaction_reference,
            self.reference_field: self.reference,
        }
        # Without an amount Docdata uses the full open amount
        if self.amount is not None and self.currency:
            data["amount"] = _amount(self.amount, self.currency)
        return data


class CaptureRequest(_PaymentMutationRequest):
    operation = "capture"
    response_class = CaptureResponse
    reference_field = "merchantCaptureReference"


class RefundRequest(_PaymentMutationRequest):
    operation = "refund"
    response_class = RefundResponse
    reference_field = "merchantRefundReference"


class StatusRequest(DocdataRequest):
    operation = "status"
    response_class = StatusResponse

    def get_data(self) -> Dict[str, Any]:
        return {"paymentOrderKey": self.transaction_reference}
