"""Tests for the daily AI-usage gate."""

from datetime import date

from resume_copilot.quota import UsageGate


class _Clock:
    def __init__(self, today: date) -> None:
        self.today = today

    def __call__(self) -> date:
        return self.today


def test_free_tier_allows_daily_limit():
    gate = UsageGate(daily_limit=3)
    for expected_remaining in (3, 2, 1):
        assert gate.can_use_ai()
        assert gate.remaining() == expected_remaining
        gate.record_use()
    assert not gate.can_use_ai()
    assert gate.remaining() == 0


def test_counter_resets_on_new_day():
    clock = _Clock(date(2024, 5, 1))
    gate = UsageGate(daily_limit=1, clock=clock)
    gate.record_use()
    assert not gate.can_use_ai()

    clock.today = date(2024, 5, 2)
    assert gate.can_use_ai()
    assert gate.used == 0


def test_pro_is_unlimited():
    gate = UsageGate(daily_limit=1, pro=True)
    for _ in range(10):
        gate.record_use()
    assert gate.can_use_ai()
    assert gate.remaining() is None


def test_zero_limit_blocks_everything():
    assert not UsageGate(daily_limit=0).can_use_ai()
