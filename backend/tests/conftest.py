"""Shared fixtures for rendezvous tests."""

from __future__ import annotations

import pytest

from rendezvous.rooms.models import User
from tests.rendezvous_helpers import RecordingNotifier
from tests.rendezvous_helpers import make_user


@pytest.fixture
def alice() -> User:
    return make_user("alice", "192.168.0.10", 0.25)


@pytest.fixture
def bob() -> User:
    return make_user("bob", "192.168.0.11", -1.5)


@pytest.fixture
def carol() -> User:
    return make_user("carol", "10.0.0.3", 0.0)


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()
