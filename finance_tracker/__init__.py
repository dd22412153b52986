"""Top-level package for the finance tracker analytics core.

This file makes the directory a Python package and exposes
convenient names.  The primary modules are:

* ``models`` – immutable transaction, category, budget and goal records
* ``lib`` – pure calculations (monthly totals, budgets, goals, health score, insights)
* ``category_rules`` – keyword based auto-categorization
* ``personal_finance_analytics`` – a facade over one user's records
* ``visualization`` – functions that generate Plotly figures
* ``assistant`` – the canned chat assistant and mocked capture

A monthly report can be printed from the command line with:

```bash
python scripts/monthly_report.py transactions.csv --year 2024 --month 3
```
"""

from . import models  # noqa: F401  # re-exported for convenience
from . import category_rules  # noqa: F401  # re-exported for convenience
from . import personal_finance_analytics  # noqa: F401  # re-exported for convenience
from .personal_finance_analytics import PersonalFinanceAnalytics

__all__ = ["models", "category_rules", "personal_finance_analytics", "PersonalFinanceAnalytics"]
