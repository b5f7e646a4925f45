"""Shared BDD fixtures for the storefront."""

import pytest


@pytest.fixture()
def error():
    """Container for captured domain errors."""
    return {"exc": None}
