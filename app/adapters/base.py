"""Base adapter contract and shared helpers for payment processing."""

import re
from abc import ABC, abstractmethod
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict


_CURRENCY_RE = re.compile(r"^[A-Z]{3}$")

# Currencies without a minor unit
_ZERO_DECIMAL_CURRENCIES = {"JPY", "KRW", "ISK", "CLP", "VND", "XAF", "XOF"}


# ==================== Helpers ====================

def validate_currency_code(currency: Any) -> bool:
    """Return True for an upper-case three-letter ISO 4217 code."""
    return isinstance(currency, str) and bool(_CURRENCY_RE.match(currency))


def validate_amount(amount: Any) -> bool:
    """Return True for a strictly positive ``Decimal`` amount."""
    return isinstance(amount, Decimal) and amount.is_finite() and amount > 0


def to_minor_units(amount: Decimal, currency: str) -> int:
    """Convert a major-unit amount to the currency's minor unit (e.g. cents)."""
    if currency in _ZERO_DECIMAL_CURRENCIES:
        return int(amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def normalize_payment_status(
    successful: bool, pending: bool, cancelled: bool
) -> str:
    """Collapse the three provider flags into one service-level status."""
    if successful:
        return "completed"
    if cancelled:
        return "cancelled"
    if pending:
        return "pending"
    return "failed"


# ==================== Base Adapter ====================

class PaymentAdapter(ABC):
    """Abstract base class for payment processor adapters."""

    @abstractmethod
    async def purchase(
        self,
        amount: Decimal,
        currency: str,
        **kwargs: Any
    ) -> Dict[str, Any]:
        """Start a payment that is captured once the shopper completes it.

        Args:
            amount: Payment amount in major currency units
            currency: Three-letter ISO currency code
            **kwargs: Additional processor-specific parameters

        Returns:
            Payment details including ID, status and redirect URL if any
        """
        pass

    @abstractmethod
    async def authorize(
        self,
        amount: Decimal,
        currency: str,
        **kwargs: Any
    ) -> Dict[str, Any]:
        """Start a payment that must be captured separately.

        Args:
            amount: Payment amount in major currency units
            currency: Three-letter ISO currency code
            **kwargs: Additional processor-specific parameters

        Returns:
            Payment details including ID, status and redirect URL if any
        """
        pass

    @abstractmethod
    async def capture_payment(
        self,
        payment_id: str,
        **kwargs: Any
    ) -> Dict[str, Any]:
        """Capture a previously authorized payment.

        Args:
            payment_id: Unique payment identifier
            **kwargs: Additional parameters (e.g., amount for partial capture)

        Returns:
            Updated payment details
        """
        pass

    @abstractmethod
    async def refund_payment(
        self,
        payment_id: str,
        **kwargs: Any
    ) -> Dict[str, Any]:
        """Refund a payment (full or partial).

        Args:
            payment_id: Unique payment identifier
            **kwargs: Additional parameters (e.g., amount for partial refund)

        Returns:
            Refund details
        """
        pass

    @abstractmethod
    async def void_payment(
        self,
        payment_id: str,
        **kwargs: Any
    ) -> Dict[str, Any]:
        """Void a payment that has not been captured yet.

        Args:
            payment_id: Unique payment identifier
            **kwargs: Additional processor-specific parameters

        Returns:
            Updated payment details
        """
        pass

    @abstractmethod
    async def get_payment_status(
        self,
        payment_id: str
    ) -> Dict[str, Any]:
        """Get current payment status.

        Args:
            payment_id: Unique payment identifier

        Returns:
            Payment status and details
        """
        pass

    async def accept_notification(
        self,
        payment_id: str,
        **kwargs: Any
    ) -> Dict[str, Any]:
        """Handle a provider notification about a payment.

        Providers that only signal "something changed" are handled by
        re-reading the payment status.
        """
        return await self.get_payment_status(payment_id)
