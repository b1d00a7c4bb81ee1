# tests/conftest.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import pytest

from ledgerstate import MachineBuilder, MemoryAdapter, reset_settings


def pytest_configure(config):
    """Register custom marks."""
    config.addinivalue_line("markers", "property: mark test as a property-based test")
    config.addinivalue_line("markers", "integration: mark test as an end-to-end scenario")


class Order:
    """Plain subject used across the suite."""

    def __init__(self, reference: str = "order-1") -> None:
        self.reference = reference
        self.approvable = True

    def __repr__(self) -> str:
        return f"Order({self.reference!r})"


@pytest.fixture
def clean_settings():
    """Keep configure() calls from leaking between tests."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def order():
    return Order()


@pytest.fixture
def storage():
    return MemoryAdapter()


@pytest.fixture
def approval_builder():
    """pending (initial) -> approved | rejected; approved -> shipped."""
    builder = MachineBuilder()
    builder.state("pending", initial=True)
    builder.state("approved")
    builder.state("rejected")
    builder.state("shipped")
    builder.transition("pending", ["approved", "rejected"])
    builder.transition("approved", "shipped")
    return builder
