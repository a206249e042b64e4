"""Pytest configuration and fixtures for searchsync."""

import pytest

from searchsync.indexer.exceptions import DeliveryFetchError

from .factories import FakeGateway


@pytest.fixture
def fake_gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def transient_error() -> DeliveryFetchError:
    return DeliveryFetchError("Delivery API returned 503", status_code=503)
