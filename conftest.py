"""
Shared pytest fixtures
"""
import os

# Settings are read at import time; pin them before anything imports mycore
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["ENABLE_SCHEDULER"] = "false"
os.environ["APP_TIMEZONE"] = "UTC"
os.environ["SEED_COMPLETION_RATE"] = "0"
os.environ["RESET_PURGES_DATA"] = ""

from datetime import date

import pytest

from mycore.models.habit import InterestType
from mycore.models.user import AuthIdentity, Permissions
from mycore.services.habits.suggestions import SUGGESTED_HABITS
from mycore.services.notifications import NotificationService
from mycore.services.storage import MemoryStorage
from mycore.services.store import HabitStore

# A Wednesday
TODAY = date(2024, 6, 5)
NOW_ISO = "2024-06-05T12:00:00+00:00"


class RecordingChannel:
    """Delivery callback that remembers every message"""

    def __init__(self, result=True):
        self.messages = []
        self.result = result

    def __call__(self, message):
        self.messages.append(message)
        return self.result


def make_store(storage=None, **kwargs):
    kwargs.setdefault("today_provider", lambda: TODAY)
    kwargs.setdefault("now_provider", lambda: NOW_ISO)
    kwargs.setdefault("seed_completion_rate", 0.0)
    return HabitStore(storage or MemoryStorage(), **kwargs)


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def store(storage):
    return make_store(storage)


@pytest.fixture
def identity():
    return AuthIdentity(id="u1", email="ada@example.com", name="ada")


@pytest.fixture
def signed_in_store(store, identity):
    store.bind_identity(identity)
    store.init_user(identity.email, "Ada")
    return store


@pytest.fixture
def onboarded_store(signed_in_store):
    """Onboarded with h1 (DAILY) and h2 (WEEKDAYS), notifications on"""
    chosen = [h for h in SUGGESTED_HABITS if h.id in ("h1", "h2")]
    signed_in_store.complete_onboarding(
        "u1",
        [InterestType.HEALTH, InterestType.FINANCE],
        chosen,
        Permissions(loc=False, notif=True, screen=False)
    )
    return signed_in_store


@pytest.fixture
def channel():
    return RecordingChannel()


@pytest.fixture
def notifications(channel):
    return NotificationService(channel)
