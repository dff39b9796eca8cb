"""Shared fixtures for integration tests."""

import os

import pytest

from wedata.fetch.runtime.rest import ConnectionSettings

# Skip all integration tests unless RUN_WEDATA_NETWORK_TESTS=1
pytestmark = pytest.mark.skipif(
    os.environ.get("RUN_WEDATA_NETWORK_TESTS") != "1",
    reason="Requires network access. Set RUN_WEDATA_NETWORK_TESTS=1 to run",
)


@pytest.fixture
def live_settings() -> ConnectionSettings:
    """Connection to the collection named by WEDATA_URL, WEDATA_COLLECTION and WEDATA_TOKEN."""
    missing = [
        name
        for name in ("WEDATA_URL", "WEDATA_COLLECTION", "WEDATA_TOKEN")
        if not os.environ.get(name)
    ]
    if missing:
        pytest.skip(f"Missing environment: {', '.join(missing)}")
    return ConnectionSettings(
        url=os.environ["WEDATA_URL"],
        collection=os.environ["WEDATA_COLLECTION"],
        token=os.environ["WEDATA_TOKEN"],
    )
