"""
Test Suite

Unit, database and integration tests for the JobSeeker scanner.
"""
