"""
Tests for parsing Docdata status replies into ResponseDocument models.
"""

import os
import sys
import pytest

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.append(ROOT_DIR)
sys.path.append(os.path.join(ROOT_DIR, "app"))

from adapters.exceptions import GatewayResponseError, PaymentError  # noqa: E402
from adapters.docdata.documents import ResponseDocument, parse_status_document  # noqa: E402


def test_bare_payment_becomes_single_element_tuple(status_payload, attempt):
    doc = parse_status_document(status_payload(payment=attempt("AUTHORIZED", payment_id=7)))

    payments = doc.status_success.report.payment
    assert isinstance(payments, tuple)
    assert len(payments) == 1
    assert payments[0].id == "7"
    assert payments[0].authorization.status == "AUTHORIZED"


def test_payment_list_keeps_order(status_payload, attempt):
    doc = parse_status_document(status_payload(payment=[
        attempt("CANCELED", payment_id=1),
        attempt("AUTHORIZED", payment_id=2),
    ]))

    ids = [p.id for p in doc.status_success.report.payment]
    assert ids == ["1", "2"]


def test_missing_payment_is_empty(status_payload):
    doc = parse_status_document(status_payload())
    assert doc.status_success.report.payment == ()


def test_explicit_null_payment_is_empty():
    doc = parse_status_document({
        "statusSuccess": {"success": {"code": "SUCCESS"}, "report": {"payment": None}}
    })
    assert doc.status_success.report.payment == ()
    assert doc.status_success.report.approximate_totals is None


def test_camel_case_fields_map_to_attributes(status_payload, attempt):
    doc = parse_status_document(status_payload(
        payment=attempt("AUTHORIZED", "BANK_TRANSFER"),
        registered=250, captured=200, refunded=10, chargedback=5, reversed_=1,
    ))

    report = doc.status_success.report
    assert report.payment[0].payment_method == "BANK_TRANSFER"
    assert report.payment[0].authorization.amount.currency == "EUR"
    totals = report.approximate_totals
    assert totals.total_registered == 250
    assert totals.total_captured == 200
    assert totals.total_refunded == 10
    assert totals.total_chargedback == 5
    assert totals.total_reversed == 1
    assert doc.status_success.success.message == "Operation successful."


def test_numeric_strings_are_accepted(status_payload):
    payload = status_payload()
    payload["statusSuccess"]["report"]["approximateTotals"]["totalCaptured"] = "100"
    doc = parse_status_document(payload)
    assert doc.status_success.report.approximate_totals.total_captured == 100


def test_empty_document():
    doc = parse_status_document({})
    assert doc == ResponseDocument()
    assert doc.status_success is None


def test_status_error_is_parsed():
    doc = parse_status_document({
        "statusError": {"error": {"code": "INTERNAL_ERROR", "value": "Try again"}}
    })
    assert doc.status_success is None
    assert doc.status_error.error.code == "INTERNAL_ERROR"
    assert doc.status_error.error.message == "Try again"


def test_documents_are_frozen(status_payload):
    doc = parse_status_document(status_payload())
    with pytest.raises(Exception):
        doc.status_success = None


def test_malformed_document_raises(status_payload):
    payload = status_payload()
    payload["statusSuccess"]["report"]["approximateTotals"]["totalRegistered"] = "lots"

    with pytest.raises(GatewayResponseError) as exc_info:
        parse_status_document(payload)

    assert isinstance(exc_info.value, PaymentError)
    assert exc_info.value.__cause__ is not None


def test_status_success_without_success_node():
    doc = parse_status_document({"statusSuccess": {"report": {}}})
    assert doc.status_success.success is None
    assert doc.status_success.report.payment == ()


def test_success_node_without_code():
    doc = parse_status_document({"statusSuccess": {"success": {"value": "No code"}}})
    assert doc.status_success.success.code is None
    assert doc.status_success.success.message == "No code"


def test_payment_without_authorization_is_parsed(status_payload):
    doc = parse_status_document(status_payload(payment={"paymentMethod": "IDEAL"}))
    attempt = doc.status_success.report.payment[0]
    assert attempt.payment_method == "IDEAL"
    assert attempt.authorization is None
