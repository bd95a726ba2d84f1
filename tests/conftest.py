"""Shared fixtures for ledger tests."""

from datetime import datetime, timedelta, timezone

import pytest

from bankapp.config import LedgerSettings
from bankapp.ledger import AccountLedger


class StepClock:
    """Deterministic clock: each call advances by a fixed step."""

    def __init__(self, start: datetime, step: timedelta = timedelta(seconds=1)):
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        now = self.current
        self.current = self.current + self.step
        return now


@pytest.fixture
def clock():
    return StepClock(datetime(2024, 12, 1, 9, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def ledger(clock):
    return AccountLedger(clock=clock)


@pytest.fixture
def ledger_settings():
    return LedgerSettings(
        currency_symbol="₽",
        timestamp_format="%Y-%m-%d %H:%M:%S",
        amount_places=2,
    )
