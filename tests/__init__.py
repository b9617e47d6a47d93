#!/usr/bin/env python3
"""
Test suite.

    # Run all tests
    python -m pytest tests/ -v

    # Using unittest
    python -m unittest discover tests -v

Database tests run against in-memory SQLite (see tests/support.py); no
PostgreSQL, Redis or network access is needed.
"""
