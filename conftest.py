"""Root conftest for pytest configuration and shared fixtures.

Loaded for both testpaths (tests/ and the colocated snowtrack/**/tests/),
so the fakes below are available everywhere.
"""

import pytest

# Register pytest-asyncio plugin at the root level
pytest_plugins = ("pytest_asyncio",)

COLLECTOR_HOST = "d3rkrsqld9gmqf.cloudfront.net"

CONTEXT = [
    {
        "schema": "iglu:com.acme/user/jsonschema/1-0-0",
        "data": {"type": "tester"},
    }
]


# ---------------------------------------------------------------------------
# Shared fake fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_transport():
    """Fake Transport that records requested URLs."""
    from snowtrack.adapters.transport.fake import FakeTransport

    return FakeTransport()


@pytest.fixture
def completions():
    """List that collects every DispatchResult passed to the completion callback."""
    return []


@pytest.fixture
def tracker(fake_transport, completions):
    """Tracker wired to the fake transport, namespace 'cf', app id 'cfe35'."""
    from snowtrack.tracker import Tracker

    return Tracker(
        COLLECTOR_HOST,
        "cf",
        "cfe35",
        False,
        completions.append,
        transport=fake_transport,
    )


@pytest.fixture
def context():
    """A single custom context entry."""
    return [dict(entry) for entry in CONTEXT]
