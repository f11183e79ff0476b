"""
Pytest configuration and fixtures for Docdata payment service tests.
"""

import os
import sys
import pytest
from unittest.mock import MagicMock

# Add app directory to Python path for imports
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.append(ROOT_DIR)
sys.path.append(os.path.join(ROOT_DIR, "app"))


@pytest.fixture(scope="session")
def test_env():
    """Fixture to set up test environment variables."""
    test_env_vars = {
        'ENVIRONMENT': 'test',
        'LOG_LEVEL': 'DEBUG',
        'DOCDATA_MERCHANT_NAME': 'test_shop',
        'DOCDATA_MERCHANT_PASSWORD': 'test_secret',
        'DOCDATA_TEST_MODE': 'true',
    }

    for key, value in test_env_vars.items():
        os.environ.setdefault(key, value)

    return test_env_vars


@pytest.fixture
def status_payload():
    """Build a plain status reply as SoapTransport returns it."""

    def build(
        payment=None,
        code="SUCCESS",
        registered=100,
        captured=0,
        refunded=0,
        chargedback=0,
        reversed_=0,
        with_totals=True,
    ):
        report = {}
        if payment is not None:
            report["payment"] = payment
        if with_totals:
            report["approximateTotals"] = {
                "totalRegistered": registered,
                "totalShopperPending": 0,
                "totalAcquirerPending": 0,
                "totalAcquirerApproved": captured,
                "totalCaptured": captured,
                "totalRefunded": refunded,
                "totalChargedback": chargedback,
                "totalReversed": reversed_,
            }
        return {
            "statusSuccess": {
                "success": {"code": code, "value": "Operation successful."},
                "report": report,
            }
        }

    return build


@pytest.fixture
def attempt():
    """Build a single payment attempt record."""

    def build(status, method="CREDIT_CARD", payment_id=4242):
        return {
            "id": payment_id,
            "paymentMethod": method,
            "authorization": {
                "status": status,
                "amount": {"currency": "EUR", "value": 100},
            },
        }

    return build


@pytest.fixture
def suds_client():
    """Mock suds client; configure ``client.service.<operation>.return_value``."""
    return MagicMock()


@pytest.fixture
def transport(suds_client):
    """SoapTransport bound to a mocked suds client."""
    from adapters.docdata.soap import SoapTransport

    return SoapTransport("test_shop", "test_secret", test_mode=True, client=suds_client)


# Configure pytest-asyncio
def pytest_configure(config):
    """Configure pytest with asyncio support."""
    config.addinivalue_line("markers", "asyncio: mark test as async")


# Test collection configuration
def pytest_collection_modifyitems(config, items):
    """Add asyncio marker to async test functions."""
    for item in items:
        if "asyncio" in item.keywords:
            item.add_marker(pytest.mark.asyncio)
