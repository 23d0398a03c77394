"""Tests for the per-month aggregator."""

from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest

from ledgerstat.domain.entities import Entry, MonthStats, Purpose
from ledgerstat.domain.stats import MonthStatsService, select_totals, select_value


def test_monthstats_contains_every_month_of_window(sample_ledger, user_id):
    service = MonthStatsService(sample_ledger)

    stats = service.monthstats(user_id, ((2025, 10), (2026, 3)))

    assert list(stats) == [
        (2025, 10),
        (2025, 11),
        (2025, 12),
        (2026, 1),
        (2026, 2),
        (2026, 3),
    ]
    assert stats[(2025, 10)].totals.net == 0.0
    assert stats[(2026, 3)].by_category == {}


def test_monthstats_reversed_window_is_empty(sample_ledger, user_id):
    service = MonthStatsService(sample_ledger)
    assert service.monthstats(user_id, ((2026, 1), (2025, 11))) == {}


def test_monthstats_breakdowns(sample_ledger, user_id):
    service = MonthStatsService(sample_ledger)

    december = service.monthstats(user_id, ((2025, 12), (2025, 12)))[(2025, 12)]

    assert december.totals.income == pytest.approx(3000.0)
    assert december.totals.outcome == pytest.approx(-1390.5)
    assert december.totals.net == pytest.approx(1609.5)
    assert december.by_category[1].outcome == pytest.approx(-150.5)
    assert december.by_category[None].outcome == pytest.approx(-40.0)
    assert december.by_account[1].net == pytest.approx(1800.0)
    assert december.by_account_category[(1, 2)].outcome == pytest.approx(-1200.0)
    assert (2, 2) not in december.by_account_category


def test_monthstats_skips_months_outside_window(sample_ledger, user_id):
    service = MonthStatsService(sample_ledger)

    stats = service.monthstats(user_id, ((2026, 1), (2026, 1)))

    assert stats[(2026, 1)].totals.outcome == pytest.approx(-60.0)
    assert stats[(2026, 1)].totals.income == 0.0


def test_monthstats_drops_orphaned_entries(make_ledger, user_id):
    orphan = Entry(
        id=99,
        user_id=user_id,
        transaction_id=uuid4(),
        account_id=1,
        category_id=1,
        amount=Decimal("-500"),
    )
    ledger = make_ledger([(date(2025, 12, 1), 1, 1, "-10")], extra_entries=[orphan])

    stats = MonthStatsService(ledger).monthstats(user_id, ((2025, 12), (2025, 12)))

    assert stats[(2025, 12)].totals.outcome == pytest.approx(-10.0)


def test_monthstats_scoped_to_user(sample_ledger, user_id):
    other = MonthStatsService(sample_ledger).monthstats(uuid4(), ((2025, 11), (2026, 1)))

    assert len(other) == 3
    assert all(month.totals.net == 0.0 for month in other.values())


def test_select_value_filters():
    stats = MonthStats()
    stats.add(1, 10, -20.0)
    stats.add(2, 10, -5.0)
    stats.add(2, None, 100.0)

    assert select_value(stats, Purpose.NET) == pytest.approx(75.0)
    assert select_value(stats, Purpose.OUTCOME, category_id=10) == pytest.approx(-25.0)
    assert select_value(stats, Purpose.INCOME, account_id=2) == pytest.approx(100.0)
    assert select_value(stats, Purpose.OUTCOME, account_id=2, category_id=10) == pytest.approx(-5.0)


def test_select_value_missing_scope_is_zero():
    stats = MonthStats()
    stats.add(1, 10, -20.0)

    assert select_totals(stats, account_id=3) is None
    assert select_value(stats, Purpose.OUTCOME, account_id=3) == 0.0
    assert select_value(stats, Purpose.NET, account_id=1, category_id=11) == 0.0
