"""
Test suite for numkernel

Contains:
- tests/unit/          : Unit tests for individual modules
"""
