from datetime import date
from decimal import Decimal

import pytest

from finance_tracker import db
from finance_tracker.analytics import FinanceAnalytics
from finance_tracker.errors import InvalidRangeError, InvalidRecordError
from finance_tracker.models import TransactionType


@pytest.fixture
def db_path(tmp_path):
    path = tmp_path / 'finance.db'
    db.init_db(path)
    return path


def test_category_roundtrip(db_path):
    created = db.add_category(' Groceries ', 'expense', '#f97316', db_path=db_path)
    db.add_category('Salary', TransactionType.INCOME, '#22c55e', icon='briefcase', db_path=db_path)
    fetched = db.fetch_categories(db_path=db_path)
    assert [c.name for c in fetched] == ['Groceries', 'Salary']
    assert fetched[0] == created
    assert fetched[0].icon == 'circle'
    assert fetched[1].icon == 'briefcase'


def test_empty_category_name_rejected(db_path):
    with pytest.raises(InvalidRecordError):
        db.add_category('   ', 'expense', '#000000', db_path=db_path)


def test_transaction_roundtrip_keeps_exact_amount(db_path):
    category = db.add_category('Food', 'expense', '#f97316', db_path=db_path)
    created = db.add_transaction('expense', '0.105', category_id=category.id, description='Snack',
                                 txn_date=date(2024, 5, 1), db_path=db_path)
    [fetched] = db.fetch_transactions(db_path=db_path)
    assert fetched == created
    assert fetched.amount == Decimal('0.105')
    assert str(fetched.amount) == '0.105'


def test_fetch_orders_newest_first_and_honors_bounds(db_path):
    for day in (date(2024, 1, 1), date(2024, 3, 1), date(2024, 2, 1)):
        db.add_transaction('income', '1', txn_date=day, db_path=db_path)
    assert [t.date for t in db.fetch_transactions(db_path=db_path)] == [
        date(2024, 3, 1), date(2024, 2, 1), date(2024, 1, 1)
    ]
    bounded = db.fetch_transactions(start_date='2024-01-15', end_date=date(2024, 2, 1), db_path=db_path)
    assert [t.date for t in bounded] == [date(2024, 2, 1)]
    with pytest.raises(InvalidRangeError):
        db.fetch_transactions(start_date='garbage', db_path=db_path)


def test_category_type_must_match(db_path):
    salary = db.add_category('Salary', 'income', '#22c55e', db_path=db_path)
    with pytest.raises(InvalidRecordError):
        db.add_transaction('expense', '5', category_id=salary.id, db_path=db_path)
    with pytest.raises(InvalidRecordError):
        db.add_transaction('income', '5', category_id='no-such-id', db_path=db_path)


def test_negative_amount_rejected(db_path):
    with pytest.raises(InvalidRecordError):
        db.add_transaction('expense', '-3', db_path=db_path)


def test_update_transaction(db_path):
    food = db.add_category('Food', 'expense', '#f97316', db_path=db_path)
    txn = db.add_transaction('expense', '10', category_id=food.id, description='Lunch',
                             txn_date=date(2024, 1, 1), db_path=db_path)
    assert db.update_transaction(txn.id, amount='12.75', description='', db_path=db_path)
    [updated] = db.fetch_transactions(db_path=db_path)
    assert updated.amount == Decimal('12.75')
    assert updated.description is None
    assert updated.category_id == food.id
    assert updated.date == date(2024, 1, 1)

    assert db.update_transaction(txn.id, category_id='', db_path=db_path)
    assert db.fetch_transactions(db_path=db_path)[0].category_id is None


def test_update_and_delete_missing_rows_return_false(db_path):
    assert db.update_transaction('missing', amount='1', db_path=db_path) is False
    assert db.delete_transaction('missing', db_path=db_path) is False
    assert db.update_category('missing', name='X', db_path=db_path) is False
    assert db.delete_category('missing', db_path=db_path) is False


def test_update_category(db_path):
    category = db.add_category('Food', 'expense', '#f97316', db_path=db_path)
    assert db.update_category(category.id, name='Dining', color='#000000', db_path=db_path)
    [fetched] = db.fetch_categories(db_path=db_path)
    assert (fetched.name, fetched.color) == ('Dining', '#000000')
    assert db.update_category(category.id, db_path=db_path) is False


def test_delete_transaction(db_path):
    txn = db.add_transaction('income', '1', db_path=db_path)
    assert db.delete_transaction(txn.id, db_path=db_path)
    assert db.fetch_transactions(db_path=db_path) == []


def test_deleting_category_keeps_transactions_uncategorized(db_path):
    food = db.add_category('Food', 'expense', '#f97316', db_path=db_path)
    db.add_transaction('expense', '8', category_id=food.id, txn_date=date(2024, 1, 3), db_path=db_path)
    assert db.delete_category(food.id, db_path=db_path)

    [txn] = db.fetch_transactions(db_path=db_path)
    assert txn.category_id is None
    analytics = FinanceAnalytics(db.fetch_transactions(db_path=db_path), db.fetch_categories(db_path=db_path),
                                 today=date(2024, 1, 31))
    assert analytics.top_categories() == []
    assert analytics.summary().total_expense == Decimal('8')


def test_default_path_comes_from_config(tmp_path, monkeypatch):
    from finance_tracker import config

    monkeypatch.setattr(config, 'DATA_DIR', tmp_path / 'data')
    monkeypatch.setattr(config, 'EXPORTS_DIR', tmp_path / 'data' / 'exports')
    monkeypatch.setattr(config, 'DB_PATH', tmp_path / 'data' / 'finance.db')
    db.init_db()
    db.add_transaction('income', '2.50')
    assert (tmp_path / 'data' / 'finance.db').exists()
    assert db.fetch_transactions()[0].amount == Decimal('2.50')
