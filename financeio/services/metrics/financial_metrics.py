"""
Calcolo delle metriche finanziarie e del punteggio di salute finanziaria.

Le funzioni lavorano su una lista di transazioni (modelli `Transaction` o
dizionari con le stesse chiavi) e ricalcolano ogni volta gli aggregati del
mese corrente; non ci sono percorsi di errore, ogni divisione è protetta.
"""
from dataclasses import dataclass, field
from datetime import date
from typing import List

from financeio.defaults import (
    INCOME, EXPENSE, ESSENTIAL_CATEGORIES, SAVINGS_CATEGORY, DEBT_KEYWORDS,
)
from financeio.utils import get_field, to_date

EXCELLENT = 'Excelente'
GOOD = 'Bom'
FAIR = 'Regular'
CONCERNING = 'Preocupante'


@dataclass
class ExpenseBreakdown:
    essential: float = 0.0
    non_essential: float = 0.0
    savings: float = 0.0


@dataclass
class FinancialMetrics:
    monthly_income: float = 0.0
    monthly_expenses: float = 0.0
    savings_rate: float = 0.0
    emergency_fund_ratio: float = 0.0
    debt_to_income_ratio: float = 0.0
    expense_categories: ExpenseBreakdown = field(default_factory=ExpenseBreakdown)

    def to_dict(self):
        return {
            'monthlyIncome': self.monthly_income,
            'monthlyExpenses': self.monthly_expenses,
            'savingsRate': self.savings_rate,
            'emergencyFundRatio': self.emergency_fund_ratio,
            'debtToIncomeRatio': self.debt_to_income_ratio,
            'expenseCategories': {
                'essential': self.expense_categories.essential,
                'nonEssential': self.expense_categories.non_essential,
                'savings': self.expense_categories.savings,
            },
        }


@dataclass
class FinancialHealth:
    score: int
    status: str
    recommendations: List[str]

    def to_dict(self):
        return {'score': self.score, 'status': self.status, 'recommendations': list(self.recommendations)}


def _category(t):
    return (get_field(t, 'category') or '').lower()


def _sum(transactions):
    return sum(float(get_field(t, 'amount') or 0.0) for t in transactions)


def is_essential(category_name):
    return (category_name or '').lower() in ESSENTIAL_CATEGORIES


def calculate_financial_metrics(transactions, today=None) -> FinancialMetrics:
    """Calcola le metriche del mese di calendario corrente"""
    if today is None:
        today = date.today()
    first_day_of_month = today.replace(day=1)

    monthly = [t for t in transactions if to_date(get_field(t, 'date')) >= first_day_of_month]
    incomes = [t for t in monthly if get_field(t, 'type') == INCOME]
    expenses = [t for t in monthly if get_field(t, 'type') == EXPENSE]

    monthly_income = _sum(incomes)
    monthly_expenses = _sum(expenses)

    savings_rate = ((monthly_income - monthly_expenses) / monthly_income) * 100 if monthly_income > 0 else 0.0

    essential_expenses = _sum(t for t in expenses if is_essential(_category(t)))
    non_essential_expenses = _sum(t for t in expenses if not is_essential(_category(t)))

    # Fondo di emergenza: 6 mesi di spese essenziali.
    # I risparmi considerano tutto lo storico, non solo il mese corrente.
    emergency_fund_target = essential_expenses * 6
    current_savings = _sum(
        t for t in transactions
        if get_field(t, 'type') == INCOME and _category(t) == SAVINGS_CATEGORY
    )
    emergency_fund_ratio = (current_savings / emergency_fund_target) * 100 if emergency_fund_target > 0 else 0.0

    monthly_debt = _sum(
        t for t in expenses if any(keyword in _category(t) for keyword in DEBT_KEYWORDS)
    )
    debt_to_income_ratio = (monthly_debt / monthly_income) * 100 if monthly_income > 0 else 0.0

    return FinancialMetrics(
        monthly_income=monthly_income,
        monthly_expenses=monthly_expenses,
        savings_rate=savings_rate,
        emergency_fund_ratio=emergency_fund_ratio,
        debt_to_income_ratio=debt_to_income_ratio,
        expense_categories=ExpenseBreakdown(
            essential=essential_expenses,
            non_essential=non_essential_expenses,
            savings=monthly_income - monthly_expenses,
        ),
    )


def essential_ratio(metrics):
    """Percentuale delle spese essenziali sul totale delle spese"""
    total = metrics.expense_categories.essential + metrics.expense_categories.non_essential
    return (metrics.expense_categories.essential / total) * 100 if total > 0 else 0.0


def get_financial_health(metrics: FinancialMetrics) -> FinancialHealth:
    """Punteggio 0-100 pesato 30/30/20/20 con stato e raccomandazioni"""
    score = 0
    recommendations = []

    # Tasso di risparmio (peso 30)
    if metrics.savings_rate >= 20:
        score += 30
    elif metrics.savings_rate >= 10:
        score += 20
    elif metrics.savings_rate > 0:
        score += 10

    if metrics.savings_rate < 20:
        recommendations.append('Tente aumentar sua taxa de economia para pelo menos 20% da renda')

    # Fondo di emergenza (peso 30)
    if metrics.emergency_fund_ratio >= 100:
        score += 30
    elif metrics.emergency_fund_ratio >= 50:
        score += 20
    elif metrics.emergency_fund_ratio >= 25:
        score += 10

    if metrics.emergency_fund_ratio < 100:
        recommendations.append('Continue construindo seu fundo de emergência até ter 6 meses de despesas essenciais')

    # Rapporto debito/reddito (peso 20)
    if metrics.debt_to_income_ratio <= 30:
        score += 20
    elif metrics.debt_to_income_ratio <= 40:
        score += 10

    if metrics.debt_to_income_ratio > 30:
        recommendations.append('Considere reduzir suas dívidas para melhorar sua saúde financeira')

    # Spese essenziali / totale (peso 20)
    ratio = essential_ratio(metrics)
    if ratio <= 60:
        score += 20
    elif ratio <= 70:
        score += 10

    if ratio > 60:
        recommendations.append('Tente reduzir a proporção de gastos com despesas essenciais')

    if score >= 80:
        status = EXCELLENT
    elif score >= 60:
        status = GOOD
    elif score >= 40:
        status = FAIR
    else:
        status = CONCERNING

    return FinancialHealth(score=score, status=status, recommendations=recommendations)
