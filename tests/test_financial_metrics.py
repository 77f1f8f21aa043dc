from datetime import date

import pytest

from financeio.services.metrics import (
    FinancialMetrics, ExpenseBreakdown, calculate_financial_metrics, get_financial_health,
)
from tests.conftest import tx

TODAY = date(2026, 10, 19)
THIS_MONTH = date(2026, 10, 5)
LAST_MONTH = date(2026, 9, 20)


def test_metrics_only_consider_current_month():
    transactions = [
        tx(5000, 'income', 'Salário', THIS_MONTH),
        tx(1000, 'expense', 'Moradia', THIS_MONTH),
        tx(9999, 'expense', 'Lazer', LAST_MONTH),
    ]
    metrics = calculate_financial_metrics(transactions, today=TODAY)

    assert metrics.monthly_income == 5000
    assert metrics.monthly_expenses == 1000
    assert metrics.savings_rate == pytest.approx(80.0)
    assert metrics.expense_categories.essential == 1000
    assert metrics.expense_categories.non_essential == 0
    assert metrics.expense_categories.savings == 4000


def test_savings_rate_is_zero_without_income():
    metrics = calculate_financial_metrics([tx(300, 'expense', 'Lazer', THIS_MONTH)], today=TODAY)
    assert metrics.savings_rate == 0
    assert metrics.debt_to_income_ratio == 0


def test_essential_match_is_case_insensitive():
    transactions = [
        tx(100, 'expense', 'ALIMENTAÇÃO', THIS_MONTH),
        tx(50, 'expense', 'Compras', THIS_MONTH),
    ]
    metrics = calculate_financial_metrics(transactions, today=TODAY)
    assert metrics.expense_categories.essential == 100
    assert metrics.expense_categories.non_essential == 50


def test_emergency_fund_uses_all_savings_income():
    transactions = [
        tx(600, 'income', 'Poupança', LAST_MONTH),
        tx(600, 'income', 'poupança', THIS_MONTH),
        tx(200, 'expense', 'Moradia', THIS_MONTH),
    ]
    metrics = calculate_financial_metrics(transactions, today=TODAY)
    # 1200 / (200 * 6) = 100%
    assert metrics.emergency_fund_ratio == pytest.approx(100.0)


def test_debt_to_income_ratio():
    transactions = [
        tx(4000, 'income', 'Salário', THIS_MONTH),
        tx(800, 'expense', 'Financiamento carro', THIS_MONTH),
        tx(400, 'expense', 'Dívida cartão', THIS_MONTH),
    ]
    metrics = calculate_financial_metrics(transactions, today=TODAY)
    assert metrics.debt_to_income_ratio == pytest.approx(30.0)


def test_empty_list_has_no_division_errors():
    metrics = calculate_financial_metrics([], today=TODAY)
    health = get_financial_health(metrics)
    assert metrics.emergency_fund_ratio == 0
    # debito 0 (+20) ed essenziali 0% (+20)
    assert health.score == 40
    assert health.status == 'Regular'


def _metrics(savings_rate, emergency=0.0, debt=0.0, essential=0.0, non_essential=0.0):
    return FinancialMetrics(
        savings_rate=savings_rate,
        emergency_fund_ratio=emergency,
        debt_to_income_ratio=debt,
        expense_categories=ExpenseBreakdown(essential=essential, non_essential=non_essential),
    )


def test_excellent_health_has_no_recommendations():
    health = get_financial_health(_metrics(25, emergency=120, debt=10, essential=50, non_essential=50))
    assert health.score == 100
    assert health.status == 'Excelente'
    assert health.recommendations == []


def test_concerning_health_lists_all_recommendations():
    health = get_financial_health(_metrics(-5, emergency=10, debt=50, essential=90, non_essential=10))
    assert health.score == 0
    assert health.status == 'Preocupante'
    assert len(health.recommendations) == 4


def test_score_tiers():
    assert get_financial_health(_metrics(15, emergency=60, debt=35, essential=65, non_essential=35)).score == 60
    assert get_financial_health(_metrics(15, emergency=60, debt=35, essential=65, non_essential=35)).status == 'Bom'


def test_score_is_monotonic_in_savings_rate():
    rates = [-50, -1, 0, 0.5, 5, 9.99, 10, 15, 19.99, 20, 35, 100]
    scores = [get_financial_health(_metrics(r, emergency=30, debt=35, essential=65, non_essential=35)).score
              for r in rates]
    assert scores == sorted(scores)
