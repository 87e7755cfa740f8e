import pytest

from portfolio import create_app
from tests.fakes import FakeSupabaseClient

ADMIN_EMAIL = 'admin@example.com'
ADMIN_PASSWORD = 'correct-horse'


@pytest.fixture
def fake_client():
    client = FakeSupabaseClient()
    client.auth.add_user(ADMIN_EMAIL, ADMIN_PASSWORD)
    return client


@pytest.fixture
def app(fake_client):
    app = create_app('testing', backend_client=fake_client, client_factory=fake_client.fork)
    yield app


@pytest.fixture
def services(app):
    return app.extensions['portfolio_backend']


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(client):
    response = client.post('/auth/login', json={'email': ADMIN_EMAIL, 'password': ADMIN_PASSWORD})
    assert response.status_code == 200, response.get_json()
    return client
