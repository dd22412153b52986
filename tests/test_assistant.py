from datetime import datetime
from decimal import Decimal

import pandas as pd

from finance_tracker.assistant import (
    HELP_TEXT,
    draft_transaction,
    mock_ocr_scan,
    mock_voice_capture,
    respond_to_message,
)
from finance_tracker.category_rules import default_categories
from finance_tracker.models import Category, MonthlyStats, TransactionSource, TransactionType

NOW = datetime(2024, 3, 20, 12, 0)


def _stats(income, expenses):
    income, expenses = Decimal(income), Decimal(expenses)
    return MonthlyStats(total_income=income, total_expenses=expenses, balance=income - expenses)


def _breakdown():
    return pd.DataFrame([
        {'Category': 'Gıda & İçecek', 'Value': 1500.0, 'Color': '#4CAF50', 'Percentage': 62.5},
        {'Category': 'Ulaşım', 'Value': 900.0, 'Color': '#FF9800', 'Percentage': 37.5},
    ])


def test_spending_question_uses_monthly_figures():
    reply = respond_to_message('Bu ay ne kadar harcadım?', _stats('10000', '2400'), _breakdown(), Decimal('4800'))
    assert '₺2.400,00' in reply
    assert 'Gıda & İçecek (63%)' in reply
    assert '50% of your budget' in reply


def test_savings_question():
    assert '₺7.600,00' in respond_to_message('Tasarruf önerin var mı?', _stats('10000', '2400'))
    assert 'exceed your income by ₺500,00' in respond_to_message('any saving tips?', _stats('1000', '1500'))


def test_category_question_lists_top_categories():
    reply = respond_to_message('Which category costs the most?', breakdown=_breakdown())
    assert reply == 'Your largest spending categories are Gıda & İçecek (63%), Ulaşım (38%).'


def test_budget_question_without_data():
    assert 'Set a monthly budget' in respond_to_message('Bütçe', None)


def test_unknown_message_gets_help_text():
    assert respond_to_message('merhaba') == HELP_TEXT
    assert respond_to_message('') == HELP_TEXT


def test_ocr_draft_uses_named_category():
    categories = default_categories('u1')
    draft = draft_transaction(mock_ocr_scan(NOW), 'u1', categories, 'ocr-1')

    assert draft.amount == Decimal('245.80')
    assert draft.type is TransactionType.EXPENSE
    assert draft.source is TransactionSource.OCR
    assert draft.date == NOW
    assert draft.category_id == next(c.id for c in categories if c.name == 'Gıda & İçecek')


def test_voice_draft_is_auto_categorized():
    categories = default_categories('u1')
    draft = draft_transaction(mock_voice_capture(NOW), 'u1', categories, 'voice-1')

    assert draft.amount == Decimal('245.00')
    assert draft.source is TransactionSource.AI
    assert draft.category_id is not None


def test_voice_draft_without_matching_category_stays_uncategorized():
    draft = draft_transaction(mock_voice_capture(NOW), 'u1', [Category(id='c1', name='Ulaşım')], 'voice-2')
    assert draft.category_id is None
    assert draft.source is TransactionSource.VOICE
