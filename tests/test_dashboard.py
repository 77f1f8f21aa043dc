from datetime import date

import pytest

from financeio.services.dashboard_service import expenses_by_category, trend_series
from tests.conftest import tx


def test_expenses_by_category_keeps_first_seen_order():
    transactions = [
        tx(100, 'expense', 'Lazer', date(2026, 10, 3)),
        tx(3000, 'income', 'Salário', date(2026, 10, 1)),
        tx(50, 'expense', 'Moradia', date(2026, 10, 2)),
        tx(25, 'expense', 'Lazer', date(2026, 10, 4)),
    ]
    assert expenses_by_category(transactions) == [
        {'category': 'Lazer', 'value': 125},
        {'category': 'Moradia', 'value': 50},
    ]


def test_trend_series_groups_by_day():
    transactions = [
        tx(40, 'expense', 'Lazer', date(2026, 10, 3)),
        tx(3000, 'income', 'Salário', date(2026, 10, 1)),
        tx(60, 'expense', 'Alimentação', date(2026, 10, 3)),
    ]
    assert trend_series(transactions) == [
        {'date': '2026-10-01', 'income': 3000, 'expenses': 0},
        {'date': '2026-10-03', 'income': 0, 'expenses': 100},
    ]


def test_empty_dashboard(auth_client):
    body = auth_client.get('/api/dashboard/').get_json()
    assert body['summary'] == {'totalIncome': 0, 'totalExpenses': 0, 'balance': 0, 'count': 0}
    assert body['expensesByCategory'] == []
    assert body['trend'] == []


def test_health_endpoint(auth_client):
    today = date.today().isoformat()
    for payload in (
        {'description': 'Salário', 'amount': 4000, 'type': 'income', 'category': 'Salário'},
        {'description': 'Aluguel', 'amount': 1000, 'type': 'expense', 'category': 'Moradia'},
        {'description': 'Cinema', 'amount': 200, 'type': 'expense', 'category': 'Lazer'},
    ):
        assert auth_client.post('/api/transactions/', json=dict(payload, date=today)).status_code == 201

    body = auth_client.get('/api/dashboard/health').get_json()
    assert body['metrics']['savingsRate'] == pytest.approx(70)
    assert body['expenseCategoryData'] == [
        {'name': 'Essenciais', 'value': 1000},
        {'name': 'Não Essenciais', 'value': 200},
        {'name': 'Economia', 'value': 2800},
    ]
    assert body['health']['status'] in ('Excelente', 'Bom', 'Regular', 'Preocupante')
