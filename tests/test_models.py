from datetime import date, datetime
from decimal import Decimal

import pandas as pd
import pytest

from finance_tracker.errors import InvalidRecordError
from finance_tracker.models import (
    Category,
    Transaction,
    TransactionType,
    categories_of_type,
    parse_day,
    to_decimal,
)


def test_transaction_normalizes_fields():
    txn = Transaction(id='t1', type='Income', amount='12.50', date='2024-03-05T18:30:00')
    assert txn.type is TransactionType.INCOME
    assert txn.amount == Decimal('12.50')
    assert txn.date == date(2024, 3, 5)


def test_signed_amount_follows_type():
    income = Transaction(id='a', type='income', amount=Decimal('10'), date=date(2024, 1, 1))
    expense = Transaction(id='b', type='expense', amount=Decimal('10'), date=date(2024, 1, 1))
    assert income.signed_amount == Decimal('10')
    assert expense.signed_amount == Decimal('-10')


def test_negative_amount_rejected():
    with pytest.raises(InvalidRecordError):
        Transaction(id='t', type='expense', amount=Decimal('-1'), date=date(2024, 1, 1))


def test_unknown_type_rejected():
    with pytest.raises(InvalidRecordError):
        Transaction(id='t', type='transfer', amount=Decimal('1'), date=date(2024, 1, 1))


def test_invalid_date_rejected():
    with pytest.raises(InvalidRecordError):
        Transaction(id='t', type='income', amount=Decimal('1'), date='not a date')


def test_to_decimal_keeps_float_text():
    assert to_decimal(0.1) == Decimal('0.1')
    assert to_decimal(' 0.105 ') == Decimal('0.105')
    assert to_decimal(7) == Decimal(7)


@pytest.mark.parametrize("value", [True, 'abc', float('nan'), 'Infinity', None])
def test_to_decimal_rejects_garbage(value):
    with pytest.raises(InvalidRecordError):
        to_decimal(value)


def test_parse_day_variants():
    assert parse_day(datetime(2024, 5, 6, 23, 59)) == date(2024, 5, 6)
    assert parse_day(pd.Timestamp('2024-05-06')) == date(2024, 5, 6)
    assert parse_day('2024-05-06') == date(2024, 5, 6)
    assert parse_day(20240506) is None
    assert parse_day(None) is None


def test_from_record_blank_fields_become_none():
    txn = Transaction.from_record(
        {'id': 1, 'type': 'expense', 'amount': '3.00', 'date': '2024-02-01',
         'category_id': '  ', 'description': float('nan')}
    )
    assert txn.id == '1'
    assert txn.category_id is None
    assert txn.description is None


def test_category_from_record_defaults_icon():
    category = Category.from_record({'id': 'c1', 'name': 'Food', 'type': 'expense', 'color': '#f00', 'icon': None})
    assert category.icon == 'circle'
    assert category.type is TransactionType.EXPENSE


def test_categories_of_type_keeps_order():
    cats = [
        Category(id='1', name='Salary', type='income', color='#0f0'),
        Category(id='2', name='Food', type='expense', color='#f00'),
        Category(id='3', name='Bonus', type='income', color='#0f0'),
    ]
    assert [c.id for c in categories_of_type(cats, 'income')] == ['1', '3']
