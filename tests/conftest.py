"""Shared fixtures for the effcheck test suite."""

from __future__ import annotations

import random

import pytest
from loguru import logger

from effcheck.atom import AtomInterner
from effcheck.config import RunConfig


@pytest.fixture
def interner() -> AtomInterner:
    return AtomInterner()


@pytest.fixture
def config() -> RunConfig:
    return RunConfig(trial_count=100, seed=0)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def log_messages():
    messages: list[str] = []
    logger.enable("effcheck")
    sink_id = logger.add(lambda message: messages.append(message.record["message"]), level="DEBUG")
    yield messages
    logger.remove(sink_id)
    logger.disable("effcheck")
