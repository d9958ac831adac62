"""
E2E tests for the Liftbook API.

These tests walk whole user journeys. By default they run in-process with
fake repositories; with --live they hit a running API and its database.

Usage:
    pytest -m e2e tests/e2e/       # Run all E2E tests
    pytest tests/e2e/ --live       # Run against a live API
"""
