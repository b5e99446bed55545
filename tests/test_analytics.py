from datetime import date
from decimal import Decimal

from finance_tracker.analytics import FinanceAnalytics
from finance_tracker.filters import FilterCriteria
from finance_tracker.models import Category, Transaction


def sample_categories():
    return [
        Category(id='salary', name='Salary', type='income', color='#22c55e'),
        Category(id='food', name='Food', type='expense', color='#f97316'),
        Category(id='rent', name='Rent', type='expense', color='#ef4444'),
    ]


def sample_transactions():
    return [
        Transaction(id='1', type='income', amount=Decimal('100'), date=date(2024, 1, 5), category_id='salary',
                    description='Paycheck'),
        Transaction(id='2', type='expense', amount=Decimal('40'), date=date(2024, 1, 20), category_id='rent'),
        Transaction(id='3', type='expense', amount=Decimal('20'), date=date(2024, 2, 2), category_id='food',
                    description='Lunch'),
    ]


def _analytics(today=date(2024, 2, 15)):
    return FinanceAnalytics(sample_transactions(), sample_categories(), today=today)


def test_end_to_end_views():
    analytics = _analytics()
    summary = analytics.summary()
    assert (summary.total_income, summary.total_expense, summary.net) == (
        Decimal('100'), Decimal('60'), Decimal('40')
    )

    rollup = analytics.monthly_rollup()
    assert (rollup[0].income, rollup[0].expense) == (Decimal('100'), Decimal('40'))
    assert rollup[1].expense == Decimal('20')
    assert all(not r.has_activity for r in rollup[2:])

    ytd = analytics.year_summary()
    assert ytd.non_zero_months == 2
    assert ytd.savings_rate == Decimal('40')

    ranked = analytics.top_categories()
    assert [t.name for t in ranked] == ['Rent', 'Food']

    trend = analytics.balance_trend()
    assert len(trend) == 30
    assert trend[-1].balance == Decimal('40')


def test_filtered_summary():
    analytics = _analytics()
    summary = analytics.summary(FilterCriteria(transaction_type='expense'))
    assert summary.total_income == Decimal('0')
    assert summary.total_expense == Decimal('60')
    assert [t.id for t in analytics.filtered(FilterCriteria(search_text='LUNCH'))] == ['3']


def test_category_breakdown_shares():
    breakdown = _analytics().category_breakdown()
    shares = {item.name: share for item, share in breakdown}
    assert shares['Rent'] == Decimal('40') / Decimal('60') * 100
    assert shares['Food'] == Decimal('20') / Decimal('60') * 100


def test_top_categories_skip_earlier_years():
    analytics = _analytics(today=date(2025, 1, 10))
    assert analytics.top_categories() == []
    assert analytics.category_breakdown() == []
    assert [t.name for t in analytics.top_categories(year=2024)] == ['Rent', 'Food']


def test_dashboard_stats_and_recent():
    analytics = _analytics()
    stats = analytics.dashboard_stats()
    assert stats.balance == Decimal('40')
    assert stats.month_expense == Decimal('20')
    assert [t.id for t in analytics.recent(2)] == ['3', '2']


def test_category_lists_by_type():
    analytics = _analytics()
    assert [c.id for c in analytics.income_categories] == ['salary']
    assert [c.id for c in analytics.expense_categories] == ['food', 'rent']


def test_repeated_calls_are_identical_and_inputs_untouched():
    txns = sample_transactions()
    snapshot = list(txns)
    analytics = FinanceAnalytics(txns, sample_categories(), today=date(2024, 2, 15))
    assert analytics.year_summary() == analytics.year_summary()
    assert analytics.balance_trend() == analytics.balance_trend()
    assert analytics.top_categories() == analytics.top_categories()
    assert txns == snapshot


def test_deleted_category_counts_as_uncategorized():
    analytics = FinanceAnalytics(sample_transactions(), sample_categories()[:2], today=date(2024, 2, 15))
    assert [t.name for t in analytics.top_categories()] == ['Food']
    assert analytics.summary().total_expense == Decimal('60')


def test_config_defaults_apply(monkeypatch):
    from finance_tracker import config

    monkeypatch.setattr(config, 'TRAILING_DAYS', 7)
    monkeypatch.setattr(config, 'RECENT_LIMIT', 1)
    analytics = _analytics()
    assert len(analytics.balance_trend()) == 7
    assert len(analytics.recent()) == 1
