# tests/conftest.py
import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest


def pytest_collection_modifyitems(config, items):
    """Run unit tests before the loopback integration tests."""
    unit_items = []
    other_items = []

    for item in items:
        if "/unit/" in item.nodeid or item.nodeid.startswith("unit/"):
            unit_items.append(item)
        else:
            other_items.append(item)

    items[:] = unit_items + other_items


# ================================================================
# Stream helpers
# ================================================================
async def _stream_of(items):
    for item in items:
        yield item


async def _collect(source):
    return [item async for item in source]


async def _forever():
    await asyncio.Event().wait()


@pytest.fixture
def stream_of():
    """Turn a list into an async iterable."""
    return _stream_of


@pytest.fixture
def collect():
    """Drain an async iterable into a list."""
    return _collect


@pytest.fixture
def forever():
    """Coroutine function that never returns until cancelled."""
    return _forever


# ================================================================
# Fake socket
# ================================================================
@pytest.fixture
def mock_writer():
    """StreamWriter stand-in that records writes and closes."""
    writer = MagicMock()
    writer.write = MagicMock()
    writer.drain = AsyncMock()
    writer.close = MagicMock()
    writer.wait_closed = AsyncMock()
    return writer


@pytest.fixture
async def stream_reader():
    """A real StreamReader the test feeds by hand."""
    return asyncio.StreamReader()
