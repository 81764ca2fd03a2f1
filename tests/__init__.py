"""
Test suite for pair-offer

Contains:
- tests/unit/          : Unit tests for individual modules
"""
