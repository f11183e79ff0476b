"""Classification of Docdata status reports into success/pending/cancelled."""

from typing import Optional

from ..exceptions import MissingDataError
from .documents import MonetaryTotals, PaymentAttempt, Report, ResponseDocument


SUCCESS_CODE = "SUCCESS"
STATUS_AUTHORIZED = "AUTHORIZED"
STATUS_CANCELED = "CANCELED"
METHOD_BANK_TRANSFER = "BANK_TRANSFER"


class StatusInterpreter:
    """Answers three independent questions about a status ResponseDocument.

    The interpreter holds no state; every method is a pure function of its
    argument, so one instance can be shared freely.
    """

    def is_captured(self, totals: Optional[MonetaryTotals]) -> bool:
        """Whether the net collected amount covers the registered amount.

        Net is captured minus every form of money given back (refunds,
        chargebacks, reversals). A zero registered amount counts as captured.

        Raises:
            MissingDataError: If the report carries no totals.
        """
        if totals is None:
            raise MissingDataError("Status report has no approximateTotals")

        net_captured = (
            totals.total_captured
            - totals.total_refunded
            - totals.total_chargedback
            - totals.total_reversed
        )
        return totals.total_registered <= net_captured

    def most_recent_payment(self, report: Report) -> PaymentAttempt:
        """Return the latest payment attempt.

        Docdata lists attempts oldest first; earlier attempts are superseded
        by later ones, so only the last one counts.

        Raises:
            MissingDataError: If the report has no payment attempts. Callers
                check ``report.payment`` first.
        """
        if not report.payment:
            raise MissingDataError("Status report has no payment attempts")
        return report.payment[-1]

    def is_successful(self, doc: ResponseDocument) -> bool:
        status = doc.status_success
        if status is None:
            return False
        if status.success is None or status.success.code is None:
            return False
        if status.success.code != SUCCESS_CODE:
            return False
        if status.report is None:
            raise MissingDataError("Successful status response has no report")
        return self.is_captured(status.report.approximate_totals)

    def is_pending(self, doc: ResponseDocument) -> bool:
        report = self._report(doc)
        if report is None or not report.payment:
            # No attempt recorded yet, the shopper may still be paying
            return True

        payment = self.most_recent_payment(report)
        authorization_status = self._authorization_status(payment)

        if authorization_status == STATUS_CANCELED:
            return False

        if authorization_status == STATUS_AUTHORIZED:
            # Bank transfers are authorized before the money arrives; they stay
            # pending until Docdata has captured the full amount.
            # TODO: confirm against Docdata's bank transfer settlement docs;
            # earlier integrations treated AUTHORIZED as final for every method.
            if payment.payment_method == METHOD_BANK_TRANSFER:
                if not self.is_captured(report.approximate_totals):
                    return True
            return False

        return True

    def is_cancelled(self, doc: ResponseDocument) -> bool:
        report = self._report(doc)
        if report is None or not report.payment:
            return False

        payment = self.most_recent_payment(report)
        return self._authorization_status(payment) == STATUS_CANCELED

    @staticmethod
    def _authorization_status(payment: PaymentAttempt) -> str:
        if payment.authorization is None:
            raise MissingDataError("Payment attempt has no authorization")
        return payment.authorization.status

    @staticmethod
    def _report(doc: ResponseDocument) -> Optional[Report]:
        if doc.status_success is None:
            return None
        return doc.status_success.report


__all__ = [
    "METHOD_BANK_TRANSFER",
    "STATUS_AUTHORIZED",
    "STATUS_CANCELED",
    "SUCCESS_CODE",
    "StatusInterpreter",
]
