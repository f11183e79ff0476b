"""Adapters for integrating external payment processors."""

from .base import PaymentAdapter
from .exceptions import PaymentError, ValidationError, InsufficientFundsError, PaymentNotFoundError, PaymentProcessingError, RefundError, WebhookError, RateLimitError, AuthenticationError, GatewayResponseError, MissingDataError

__all__ = ["PaymentAdapter", "PaymentError", "ValidationError", "InsufficientFundsError", "PaymentNotFoundError", "PaymentProcessingError", "RefundError", "WebhookError", "RateLimitError", "AuthenticationError", "GatewayResponseError", "MissingDataError"]
