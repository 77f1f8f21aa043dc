"""Dati aggregati che alimentano il report finanziario"""
from dataclasses import dataclass, field
from typing import Dict, List

from financeio.defaults import INCOME, EXPENSE, TIMEFRAME_LABELS
from financeio.services import get_timeframe_boundaries
from financeio.utils import get_field, to_date

TOP_EXPENSES_LIMIT = 3


@dataclass
class TopExpense:
    description: str
    amount: float
    category: str
    date: str

    def to_dict(self):
        return {'description': self.description, 'amount': self.amount,
                'category': self.category, 'date': self.date}


@dataclass
class FinancialData:
    timeframe: str
    total_income: float = 0.0
    total_expenses: float = 0.0
    balance: float = 0.0
    expenses_by_category: Dict[str, float] = field(default_factory=dict)
    top_expenses: List[TopExpense] = field(default_factory=list)


def build_financial_data(transactions, timeframe='month', today=None) -> FinancialData:
    """Aggrega le transazioni del periodo richiesto (week, month, year)"""
    start_date, end_date = get_timeframe_boundaries(timeframe, today)
    in_period = [t for t in transactions if start_date <= to_date(get_field(t, 'date')) <= end_date]

    total_income = sum(float(get_field(t, 'amount') or 0.0) for t in in_period if get_field(t, 'type') == INCOME)
    expenses = [t for t in in_period if get_field(t, 'type') == EXPENSE]
    total_expenses = sum(float(get_field(t, 'amount') or 0.0) for t in expenses)

    by_category = {}
    for t in expenses:
        name = get_field(t, 'category') or 'Outros'
        by_category[name] = by_category.get(name, 0.0) + float(get_field(t, 'amount') or 0.0)

    biggest = sorted(expenses, key=lambda t: float(get_field(t, 'amount') or 0.0), reverse=True)[:TOP_EXPENSES_LIMIT]
    top_expenses = [
        TopExpense(
            description=get_field(t, 'description'),
            amount=float(get_field(t, 'amount') or 0.0),
            category=get_field(t, 'category'),
            date=to_date(get_field(t, 'date')).isoformat(),
        )
        for t in biggest
    ]

    return FinancialData(
        timeframe=TIMEFRAME_LABELS[timeframe],
        total_income=total_income,
        total_expenses=total_expenses,
        balance=total_income - total_expenses,
        expenses_by_category=by_category,
        top_expenses=top_expenses,
    )
