"""Canned chat assistant and mocked receipt/voice capture.

Neither piece does any real language or image processing.  The chat
assistant answers from a handful of keyword rules, filling in figures from
the caller's monthly stats when they are supplied.  The capture helpers
return fixed results that are turned into draft transactions and run
through the keyword categorizer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional

import pandas as pd

from .category_rules import auto_categorize
from .lib.analytics.monthly import savings_rate
from .lib.common.amounts import round_half_up
from .lib.common.formatting import format_currency
from .models import Category, MonthlyStats, Transaction, TransactionSource, TransactionType

logger = logging.getLogger(__name__)

SPENDING_KEYWORDS = ('harcama', 'ne kadar', 'spend', 'how much')
SAVINGS_KEYWORDS = ('tasarruf', 'saving')
BUDGET_KEYWORDS = ('bütçe', 'budget')
CATEGORY_KEYWORDS = ('kategori', 'category')

HELP_TEXT = (
    "How can I help? You can ask about your spending, your budget, "
    "saving tips or your financial goals."
)


def _mentions(message: str, keywords: Iterable[str]) -> bool:
    return any(keyword in message for keyword in keywords)


def _top_categories(breakdown: Optional[pd.DataFrame], count: int = 3) -> str:
    if breakdown is None or breakdown.empty:
        return ""
    top = breakdown.head(count)
    return ", ".join(
        f"{row['Category']} ({round_half_up(row['Percentage'])}%)" for _, row in top.iterrows()
    )


def respond_to_message(
    message: str,
    stats: Optional[MonthlyStats] = None,
    breakdown: Optional[pd.DataFrame] = None,
    budget_total: Optional[Decimal] = None,
) -> str:
    """Answer a chat message with a rule-based reply.

    Args:
        message: The user's message
        stats: This month's totals, used to fill in figures
        breakdown: Output of ``category_breakdown`` for the month
        budget_total: Sum of the user's active budgets

    Returns:
        A reply string; the help text when no rule matches
    """
    lowered = (message or '').lower()

    if _mentions(lowered, SPENDING_KEYWORDS):
        if stats is None:
            return "I don't have this month's figures yet. Add a few transactions and ask again."
        reply = f"You have spent {format_currency(stats.total_expenses)} this month."
        top = _top_categories(breakdown, count=1)
        if top:
            reply += f" Your largest spending category is {top}."
        if budget_total:
            used = round_half_up(stats.total_expenses * 100 / budget_total)
            reply += f" You have used {used}% of your budget."
        return reply

    if _mentions(lowered, SAVINGS_KEYWORDS):
        if stats is None:
            return "Track your income and expenses for a month and I can tell you how much you saved."
        rate = savings_rate(stats)
        if stats.balance > 0:
            return (
                f"You saved {format_currency(stats.balance)} this month, "
                f"{round_half_up(rate)}% of your income. A 20% savings rate is a healthy target."
            )
        return (
            f"Your expenses exceed your income by {format_currency(-stats.balance)} this month. "
            "Cutting back on optional spending would help."
        )

    if _mentions(lowered, BUDGET_KEYWORDS):
        if stats is None or stats.total_expenses == 0:
            return "Set a monthly budget per category to keep track of your spending."
        return (
            "Based on your current habits, a budget of "
            f"{format_currency(stats.total_expenses)} for next month would be realistic."
        )

    if _mentions(lowered, CATEGORY_KEYWORDS):
        top = _top_categories(breakdown)
        if not top:
            return "You have no categorized spending yet."
        return f"Your largest spending categories are {top}."

    return HELP_TEXT


@dataclass(frozen=True)
class CaptureResult:
    """Structured data extracted from a receipt photo or a voice note."""

    source: TransactionSource
    amount: Decimal
    description: str
    type: TransactionType
    confidence: float
    captured_at: datetime
    merchant: Optional[str] = None
    text: Optional[str] = None
    category_name: Optional[str] = None


def mock_ocr_scan(now: datetime) -> CaptureResult:
    """Pretend to read a grocery receipt."""
    return CaptureResult(
        source=TransactionSource.OCR,
        amount=Decimal("245.80"),
        description="Market Alışverişi",
        type=TransactionType.EXPENSE,
        confidence=0.95,
        captured_at=now,
        merchant="ABC Market",
        category_name="Gıda & İçecek",
    )


def mock_voice_capture(now: datetime) -> CaptureResult:
    """Pretend to transcribe a spoken expense."""
    return CaptureResult(
        source=TransactionSource.VOICE,
        amount=Decimal("245.00"),
        description="Market alışverişi",
        type=TransactionType.EXPENSE,
        confidence=0.88,
        captured_at=now,
        text="Market alışverişi için iki yüz kırk beş lira ödedim",
    )


def draft_transaction(
    capture: CaptureResult,
    user_id: str,
    categories: Iterable[Category],
    transaction_id: str,
) -> Transaction:
    """Turn a capture into a transaction, categorizing it when possible."""
    categories = list(categories)
    category_id = None
    if capture.category_name:
        category_id = next((c.id for c in categories if c.name == capture.category_name), None)

    draft = Transaction(
        id=transaction_id,
        user_id=user_id,
        amount=capture.amount,
        type=capture.type,
        description=capture.description,
        date=capture.captured_at,
        category_id=category_id,
        source=capture.source,
    )
    logger.debug("Drafted %s transaction %s from capture", capture.source.value, transaction_id)
    return auto_categorize(draft, categories)
