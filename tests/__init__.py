"""
Test suite for NabhaArogya.

Unit tests for the scheduling, search and form rules, and API tests for
each view against a SQLite database and a mocked auth backend.
"""
import os

# Set environment for testing
os.environ["TESTING"] = "1"
