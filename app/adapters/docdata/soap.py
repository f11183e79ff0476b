"""SOAP transport for the Docdata Payments Order API."""

import logging
from typing import Any, Dict, Optional

from suds import WebFault
from suds.client import Client
from suds.sax.text import Text
from suds.sudsobject import Object as SudsObject, asdict
from suds.transport import TransportError

from ..exceptions import AuthenticationError, PaymentProcessingError

logger = logging.getLogger(__name__)

TEST_WSDL_URL = "https://test.docdatapayments.com/ps/services/paymentservice/1_3?wsdl"
LIVE_WSDL_URL = "https://secure.docdatapayments.com/ps/services/paymentservice/1_3?wsdl"


def to_plain(value: Any) -> Any:
    """Recursively convert suds reply objects into dicts, lists and scalars.

    XML attributes come back from suds as ``_name`` attributes; the leading
    underscore is dropped so attributes and child elements read the same.
    Element text next to attributes stays under ``value``.
    """
    if isinstance(value, SudsObject):
        plain = {}
        for key, item in asdict(value).items():
            plain[key[1:] if key.startswith("_") else key] = to_plain(item)
        return plain
    if isinstance(value, dict):
        return {key: to_plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(item) for item in value]
    if isinstance(value, Text):
        return str(value)
    return value


class SoapTransport:
    """Thin wrapper around a suds client bound to one Docdata merchant.

    The suds client is built on first use since loading the WSDL is a network
    call. Pass ``client`` to reuse an existing one.
    """

    def __init__(
        self,
        merchant_name: Optional[str],
        merchant_password: Optional[str],
        *,
        test_mode: bool = True,
        wsdl_url: Optional[str] = None,
        timeout: int = 30,
        client: Optional[Client] = None,
    ) -> None:
        if not merchant_name or not merchant_password:
            raise AuthenticationError("Docdata merchant name and password are required")

        self.merchant_name = merchant_name
        self._merchant_password = merchant_password
        self.test_mode = test_mode
        self.wsdl_url = wsdl_url or (TEST_WSDL_URL if test_mode else LIVE_WSDL_URL)
        self.timeout = timeout
        self._client = client

    @property
    def client(self) -> Client:
        if self._client is None:
            logger.info("Loading Docdata WSDL from %s", self.wsdl_url)
            self._client = Client(self.wsdl_url, timeout=self.timeout)
        return self._client

    @property
    def merchant(self) -> Dict[str, str]:
        # Sent as XML attributes of <merchant>
        return {"_name": self.merchant_name, "_password": self._merchant_password}

    def call(self, operation: str, **params: Any) -> Dict[str, Any]:
        """Invoke an Order API operation and return the reply as a dict.

        Raises:
            PaymentProcessingError: On SOAP faults and transport failures.
        """
        logger.info("Calling Docdata %s for merchant %s", operation, self.merchant_name)
        method = getattr(self.client.service, operation)

        try:
            reply = method(merchant=self.merchant, **params)
        except WebFault as exc:
            logger.error("Docdata %s returned a SOAP fault: %s", operation, exc)
            raise PaymentProcessingError(f"Docdata {operation} fault: {exc}") from exc
        except (TransportError, OSError) as exc:
            logger.error("Docdata %s transport failure: %s", operation, exc)
            raise PaymentProcessingError(f"Docdata {operation} unreachable: {exc}") from exc

        data = to_plain(reply)
        if not isinstance(data, dict):
            data = {}
        logger.debug("Docdata %s replied with nodes %s", operation, sorted(data))
        return data


__all__ = ["LIVE_WSDL_URL", "TEST_WSDL_URL", "SoapTransport", "to_plain"]
