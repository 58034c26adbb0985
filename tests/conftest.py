"""Shared test fixtures for the fvss test suite."""

from __future__ import annotations

import random

import pytest

from fvss.field import FieldContext


@pytest.fixture
def small_ctx() -> FieldContext:
    """q = 127, the smallest p = k*q + 1 is 509, generator 16."""
    return FieldContext.create(q=127)


@pytest.fixture
def tiny_ctx() -> FieldContext:
    """q = 11, p = 23: small enough to enumerate every share value."""
    return FieldContext.create(q=11)


@pytest.fixture
def byte_ctx() -> FieldContext:
    """q = 257 holds one byte per element."""
    return FieldContext.create(q=257)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)
