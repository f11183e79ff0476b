"""
Docdata Payment Service Test Suite

This package contains all tests for the payment service including:
- Status report classification
- Response document parsing
- SOAP transport and Order API messages
- Adapter contract tests
- HTTP notification endpoint tests
"""
