"""
Test suite for SlenderHub

Contains:
- tests/unit/          : Unit tests for individual modules
"""
