"""
BASTION Test Suite
==================

Test organization:
- tests/unit/          - Shared config and logging tests
- tests/services/      - Per-service engine and API tests

Run tests:
    pytest                                      # All tests
    pytest tests/unit                           # Unit tests only
    pytest tests/services/maturity_assessment   # Maturity engine only
"""
