"""
E2E test fixtures and configuration.

By default the flows run in-process against the app wired to the fake
repositories. With ``--live`` they run over HTTP against a running
liftbook-api backed by a real Supabase project.
"""
from typing import Generator, Union

import httpx
import pytest
from fastapi.testclient import TestClient


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--live",
        action="store_true",
        default=False,
        help="Run tests against live API (requires liftbook-api running on port 8001)",
    )
    parser.addoption(
        "--api-url",
        action="store",
        default="http://localhost:8001",
        help="Base URL for the liftbook-api service",
    )


@pytest.fixture(scope="session")
def live_mode(request) -> bool:
    """Check if tests should run against live API."""
    return request.config.getoption("--live")


@pytest.fixture(scope="session")
def api_base_url(request) -> str:
    return request.config.getoption("--api-url")


@pytest.fixture
def api(live_mode: bool, api_base_url: str, client) -> Generator[Union[httpx.Client, TestClient], None, None]:
    """HTTP client for the flow under test."""
    if not live_mode:
        yield client
        return

    with httpx.Client(base_url=api_base_url, timeout=30.0) as http_client:
        try:
            http_client.get("/health").raise_for_status()
        except httpx.HTTPError as e:
            pytest.skip(f"liftbook-api not reachable at {api_base_url}: {e}")
        yield http_client
