import pytest

from financeio.services.transactions.transactions_service import calculate_summary
from tests.conftest import register_user


def _post(client, **overrides):
    payload = {
        'description': 'Mercado',
        'amount': 120.5,
        'type': 'expense',
        'category': 'Alimentação',
        'date': '2026-10-10',
    }
    payload.update(overrides)
    return client.post('/api/transactions/', json=payload)


def test_requires_login(client):
    response = client.get('/api/transactions/')
    assert response.status_code == 401
    assert response.get_json()['message'] == 'Autenticação necessária'


def test_add_and_list_transactions(auth_client, user):
    response = _post(auth_client)
    assert response.status_code == 201
    body = response.get_json()
    assert body['message'] == 'Sua transação foi salva com sucesso.'
    assert body['transaction']['user_id'] == user.id

    _post(auth_client, description='Salário', amount=3000, type='income', category='Salário', date='2026-10-01')
    _post(auth_client, description='Cinema', amount=40, category='Lazer', date='2026-10-15')

    body = auth_client.get('/api/transactions/').get_json()
    assert [t['description'] for t in body['transactions']] == ['Cinema', 'Mercado', 'Salário']
    assert body['summary'] == {'totalIncome': 3000, 'totalExpenses': 160.5, 'balance': 2839.5, 'count': 3}

    expenses = auth_client.get('/api/transactions/?type=expense').get_json()['transactions']
    assert {t['type'] for t in expenses} == {'expense'}


def test_invalid_transactions_are_rejected(auth_client):
    assert _post(auth_client, amount=-5).status_code == 400
    assert _post(auth_client, amount='abc').status_code == 400
    assert _post(auth_client, type='transfer').status_code == 400
    assert _post(auth_client, description='').status_code == 400
    assert _post(auth_client, date='10/10/2026').status_code == 400


@pytest.mark.parametrize('amount', ['nan', 'inf', '-inf', 'Infinity'])
def test_non_finite_amounts_are_rejected(auth_client, amount):
    response = _post(auth_client, amount=amount)
    assert response.status_code == 400
    assert response.get_json()['message'] == 'Valor inválido'


def test_json_infinity_literal_is_rejected(auth_client):
    body = ('{"description": "Mercado", "amount": Infinity, "type": "expense", '
            '"category": "Lazer", "date": "2026-10-10"}')
    response = auth_client.post('/api/transactions/', data=body, content_type='application/json')
    assert response.status_code == 400
    assert auth_client.get('/api/transactions/').get_json()['summary']['count'] == 0


def test_long_description_is_rejected(auth_client):
    response = _post(auth_client, description='x' * 201)
    assert response.status_code == 400
    assert response.get_json()['message'] == 'A descrição deve ter no máximo 200 caracteres'
    assert _post(auth_client, description='x' * 200).status_code == 201


def test_amount_accepts_decimal_comma(auth_client):
    response = _post(auth_client, amount='15,75')
    assert response.get_json()['transaction']['amount'] == 15.75


def test_update_and_delete(auth_client):
    created = _post(auth_client).get_json()['transaction']

    response = auth_client.put(f"/api/transactions/{created['id']}", json={'amount': 99})
    assert response.status_code == 200
    assert response.get_json()['transaction']['amount'] == 99
    assert response.get_json()['transaction']['description'] == 'Mercado'

    response = auth_client.put(f"/api/transactions/{created['id']}", json={'amount': -1})
    assert response.status_code == 400

    response = auth_client.delete(f"/api/transactions/{created['id']}")
    assert response.get_json()['message'] == 'A transação foi excluída com sucesso.'
    assert auth_client.get(f"/api/transactions/{created['id']}").status_code == 404


def test_transactions_are_scoped_by_user(app, auth_client):
    created = _post(auth_client).get_json()['transaction']
    other = register_user(app, email='bruno@example.com')

    other_client = app.test_client()
    other_client.post('/api/auth/login', json={'email': other.email, 'password': other.password})

    assert other_client.get('/api/transactions/').get_json()['transactions'] == []
    assert other_client.get(f"/api/transactions/{created['id']}").status_code == 404
    assert other_client.delete(f"/api/transactions/{created['id']}").status_code == 404


def test_export_is_pro_only(app, auth_client, user):
    _post(auth_client)
    assert auth_client.get('/api/transactions/export').status_code == 403

    with app.app_context():
        from financeio.services.auth.auth_service import AuthService
        AuthService().set_pro_status(user.id, True)

    response = auth_client.get('/api/transactions/export')
    assert response.status_code == 200
    assert response.data[:2] == b'PK'


def test_summary_balance_is_income_minus_expenses():
    transactions = [
        {'amount': 10.1, 'type': 'income'},
        {'amount': 0.2, 'type': 'expense'},
        {'amount': 7, 'type': 'expense'},
        {'amount': 3.3, 'type': 'income'},
    ]
    summary = calculate_summary(transactions)
    assert summary['balance'] == summary['totalIncome'] - summary['totalExpenses']


def test_export_keeps_user_text_as_plain_strings(app, auth_client, user):
    import io
    import openpyxl
    from financeio.services.auth.auth_service import AuthService

    _post(auth_client, description='=HYPERLINK("http://evil","x")', category='=1+1')
    with app.app_context():
        AuthService().set_pro_status(user.id, True)

    response = auth_client.get('/api/transactions/export')
    ws = openpyxl.load_workbook(io.BytesIO(response.data))['Transações']
    assert ws['B2'].value == '=HYPERLINK("http://evil","x")'
    assert ws['B2'].data_type == 's'
    assert ws['C2'].data_type == 's'
    assert ws['E2'].value == 120.5
