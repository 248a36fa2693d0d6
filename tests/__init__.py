"""
Test suite for the parametric insurance pool

Contains:
- tests/conftest.py    : Shared fixtures and test contracts
- tests/unit/          : Unit and property tests for individual modules
"""
