from types import SimpleNamespace

import pytest

from financeio import create_app, db
from financeio.services.auth.auth_service import AuthService

PASSWORD = 'segredo123'


@pytest.fixture
def app():
    app = create_app('testing')
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def ctx(app):
    """Contesto applicativo per i test dei servizi (senza client HTTP)"""
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


def register_user(app, email='ana@example.com', password=PASSWORD):
    with app.app_context():
        ok, msg, user = AuthService().register(email, password)
        assert ok, msg
        return SimpleNamespace(id=user.id, email=user.email, password=password)


@pytest.fixture
def user(app):
    return register_user(app)


@pytest.fixture
def auth_client(client, user):
    response = client.post('/api/auth/login', json={'email': user.email, 'password': user.password})
    assert response.status_code == 200
    return client


def tx(amount, type_, category, day, description='item'):
    """Transazione in forma di dizionario, come restituita dall'API"""
    return {
        'description': description,
        'amount': amount,
        'type': type_,
        'category': category,
        'date': day.isoformat(),
    }
