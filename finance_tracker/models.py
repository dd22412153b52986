"""Domain records consumed and produced by the analytics core.

These are immutable value snapshots of what the storage layer hands over.
Each record offers ``from_record`` to build itself from a stored/JSON mapping
(snake_case or camelCase keys) so amounts and dates are parsed in one place.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union

import pandas as pd

from .errors import InvalidRecordError
from .lib.common.amounts import ZERO, parse_amount, to_float
from .lib.config import get_categorization_config


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class TransactionSource(str, Enum):
    MANUAL = "manual"
    OCR = "ocr"
    VOICE = "voice"
    AI = "ai"


class BudgetPeriod(str, Enum):
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class CategoryRole(str, Enum):
    """What a category is used for, independent of its display name."""

    INCOME = "income"
    EXPENSE_DEFAULT = "expense_default"
    USER_DEFINED = "user_defined"


def _pick(record: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in record and record[key] is not None:
            return record[key]
    return default


def _require(record: Mapping[str, Any], *keys: str) -> Any:
    value = _pick(record, *keys)
    if value is None:
        raise InvalidRecordError(f"Missing required field '{keys[0]}'")
    return value


_TRUE_STRINGS = {"true", "1", "yes"}
_FALSE_STRINGS = {"false", "0", "no"}


def _bool(value: Any, field: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise InvalidRecordError(f"Invalid {field}: {value!r}")


def _enum(enum_cls, value: Any, field: str):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        raise InvalidRecordError(f"Unknown {field}: {value!r}") from None


def parse_timestamp(value: Union[str, date, datetime, pd.Timestamp]) -> datetime:
    """Parse a stored timestamp into a ``datetime``.

    ``date`` values become midnight of that day.  Timezone information is kept.
    """
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    try:
        return pd.Timestamp(value).to_pydatetime()
    except (TypeError, ValueError):
        raise InvalidRecordError(f"Invalid timestamp: {value!r}") from None


def infer_category_role(name: str, is_default: bool = False) -> CategoryRole:
    """Derive a role for legacy categories that only carry a name.

    Older data marks the income bucket by name: a name containing one of the
    configured markers ("gelir") or equal to one of the configured income
    names ("income") is treated as income.
    """
    config = get_categorization_config()
    markers = config.get('income_name_markers', ['gelir'])
    exact_names = config.get('income_names', ['income'])
    lowered = (name or '').strip().lower()
    if lowered in exact_names or any(marker in lowered for marker in markers):
        return CategoryRole.INCOME
    return CategoryRole.EXPENSE_DEFAULT if is_default else CategoryRole.USER_DEFINED


@dataclass(frozen=True)
class Category:
    id: str
    name: str
    icon: str = ""
    color: str = "#9E9E9E"
    is_default: bool = False
    user_id: Optional[str] = None
    role: Optional[CategoryRole] = None

    def __post_init__(self) -> None:
        if self.role is None:
            object.__setattr__(self, 'role', infer_category_role(self.name, self.is_default))

    @property
    def is_income(self) -> bool:
        return self.role is CategoryRole.INCOME

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Category":
        role = _pick(record, 'role')
        return cls(
            id=str(_require(record, 'id')),
            name=str(_require(record, 'name')),
            icon=_pick(record, 'icon', default=""),
            color=_pick(record, 'color', default="#9E9E9E"),
            is_default=_bool(_pick(record, 'is_default', 'isDefault', default=False), 'is_default'),
            user_id=_pick(record, 'user_id', 'userId'),
            role=_enum(CategoryRole, role, 'category role') if role is not None else None,
        )


@dataclass(frozen=True)
class Transaction:
    """A single income or expense.  ``amount`` is always positive."""

    id: str
    user_id: str
    amount: Decimal
    type: TransactionType
    description: str
    date: datetime
    category_id: Optional[str] = None
    source: TransactionSource = TransactionSource.MANUAL

    def __post_init__(self) -> None:
        amount = parse_amount(self.amount)
        if amount <= 0:
            raise InvalidRecordError(f"Transaction amount must be positive, got {amount}")
        object.__setattr__(self, 'amount', amount)

    @property
    def is_expense(self) -> bool:
        return self.type is TransactionType.EXPENSE

    @property
    def is_income(self) -> bool:
        return self.type is TransactionType.INCOME

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Transaction":
        category_id = _pick(record, 'category_id', 'categoryId')
        return cls(
            id=str(_require(record, 'id')),
            user_id=str(_pick(record, 'user_id', 'userId', default="")),
            amount=_require(record, 'amount'),
            type=_enum(TransactionType, _require(record, 'type'), 'transaction type'),
            description=str(_pick(record, 'description', default="")),
            date=parse_timestamp(_require(record, 'date')),
            category_id=str(category_id) if category_id is not None else None,
            source=_enum(TransactionSource, _pick(record, 'source', default='manual'), 'transaction source'),
        )


@dataclass(frozen=True)
class Budget:
    id: str
    user_id: str
    amount: Decimal
    start_date: datetime
    end_date: datetime
    category_id: Optional[str] = None
    period: BudgetPeriod = BudgetPeriod.MONTHLY
    is_active: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, 'amount', parse_amount(self.amount, 'budget amount'))

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Budget":
        category_id = _pick(record, 'category_id', 'categoryId')
        return cls(
            id=str(_require(record, 'id')),
            user_id=str(_pick(record, 'user_id', 'userId', default="")),
            amount=_require(record, 'amount'),
            start_date=parse_timestamp(_require(record, 'start_date', 'startDate')),
            end_date=parse_timestamp(_require(record, 'end_date', 'endDate')),
            category_id=str(category_id) if category_id is not None else None,
            period=_enum(BudgetPeriod, _pick(record, 'period', default='monthly'), 'budget period'),
            is_active=_bool(_pick(record, 'is_active', 'isActive', default=True), 'is_active'),
        )


@dataclass(frozen=True)
class FinancialGoal:
    id: str
    user_id: str
    title: str
    target_amount: Decimal
    current_amount: Decimal
    target_date: datetime
    is_completed: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, 'target_amount', parse_amount(self.target_amount, 'target amount'))
        object.__setattr__(self, 'current_amount', parse_amount(self.current_amount, 'current amount'))

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "FinancialGoal":
        return cls(
            id=str(_require(record, 'id')),
            user_id=str(_pick(record, 'user_id', 'userId', default="")),
            title=str(_pick(record, 'title', default="")),
            target_amount=parse_amount(_pick(record, 'target_amount', 'targetAmount'), 'target amount'),
            current_amount=parse_amount(_pick(record, 'current_amount', 'currentAmount'), 'current amount'),
            target_date=parse_timestamp(_require(record, 'target_date', 'targetDate')),
            is_completed=_bool(_pick(record, 'is_completed', 'isCompleted', default=False), 'is_completed'),
        )


@dataclass(frozen=True)
class MonthlyStats:
    total_income: Decimal = ZERO
    total_expenses: Decimal = ZERO
    balance: Decimal = ZERO

    def to_dict(self) -> Dict[str, float]:
        return {
            'totalIncome': to_float(self.total_income),
            'totalExpenses': to_float(self.total_expenses),
            'balance': to_float(self.balance),
        }


@dataclass(frozen=True)
class FactorScore:
    score: int
    label: str

    def to_dict(self) -> Dict[str, Any]:
        return {'score': self.score, 'label': self.label}


@dataclass(frozen=True)
class FinancialHealthScore:
    score: int
    savings: FactorScore
    budget: FactorScore
    goals: FactorScore
    discipline: FactorScore

    @property
    def factors(self) -> Dict[str, FactorScore]:
        return {
            'savings': self.savings,
            'budget': self.budget,
            'goals': self.goals,
            'discipline': self.discipline,
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            'score': self.score,
            'factors': {name: factor.to_dict() for name, factor in self.factors.items()},
        }
