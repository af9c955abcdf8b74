#!/usr/bin/env python3
"""
Test suite for the applicant ranker.

All tests can be run with standard Python tools:

    # Run all tests
    python -m pytest tests/ -v

    # Using unittest (TestCase classes only)
    python -m unittest discover tests -v
"""
