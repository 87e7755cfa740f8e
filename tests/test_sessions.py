import io
import logging

import pytest

from tests.conftest import ADMIN_EMAIL, ADMIN_PASSWORD

EDITOR_EMAIL = 'editor@example.com'
EDITOR_PASSWORD = 'battery-staple'


def upload(client):
    return client.post('/admin/upload', data={
        'file': (io.BytesIO(b'\x89PNG' + b'\0' * 64), 'shot.png', 'image/png'),
        'folder': 'artwork',
    }, content_type='multipart/form-data')


@pytest.fixture
def editor_client(app, fake_client):
    fake_client.auth.add_user(EDITOR_EMAIL, EDITOR_PASSWORD)
    editor = app.test_client()
    response = editor.post('/auth/login', json={'email': EDITOR_EMAIL, 'password': EDITOR_PASSWORD})
    assert response.status_code == 200, response.get_json()
    return editor


def test_visitors_never_run_under_admin_session(app, admin_client, fake_client):
    visitor = app.test_client()

    assert visitor.get('/test-backend').get_json()['user'] is None
    assert visitor.get('/auth/me').get_json()['authenticated'] is False
    assert visitor.get('/admin/').status_code == 401
    assert fake_client.auth.session is None


def test_admin_requests_use_their_own_backend_session(admin_client, fake_client):
    assert admin_client.get('/admin/blog').status_code == 200

    assert fake_client.forks[-1].auth.session.user.email == ADMIN_EMAIL
    assert fake_client.auth.session is None


def test_one_admin_signing_out_keeps_the_other_signed_in(admin_client, editor_client, fake_client):
    assert editor_client.post('/auth/logout').status_code == 200

    assert editor_client.get('/admin/').status_code == 401
    assert admin_client.get('/auth/me').get_json()['authenticated'] is True
    assert admin_client.get('/admin/').status_code == 200
    assert [s.user.email for s in fake_client.auth.server.sessions.values()] == [ADMIN_EMAIL]


def test_same_account_on_two_browsers_signs_out_independently(app, admin_client):
    tablet = app.test_client()
    tablet.post('/auth/login', json={'email': ADMIN_EMAIL, 'password': ADMIN_PASSWORD})

    assert tablet.post('/auth/logout').status_code == 200

    assert admin_client.get('/admin/').status_code == 200


def test_revoked_backend_session_requires_new_login(admin_client, fake_client):
    fake_client.auth.server.sessions.clear()

    response = admin_client.get('/admin/')

    assert response.status_code == 401
    assert response.get_json()['error'] == 'Session expired, please sign in again'
    assert admin_client.get('/auth/me').get_json()['authenticated'] is False


def test_refreshed_tokens_are_written_back(admin_client, fake_client):
    with admin_client.session_transaction() as sess:
        old_token = sess['backend_session']['access_token']
    fake_client.auth.server.expire_all()

    assert admin_client.get('/admin/').status_code == 200

    with admin_client.session_transaction() as sess:
        new_token = sess['backend_session']['access_token']
    assert new_token != old_token
    assert admin_client.get('/admin/').status_code == 200


def test_uploads_from_different_admins_do_not_block_each_other(app, admin_client, editor_client):
    admin_id = admin_client.get('/auth/me').get_json()['user']['id']
    lock = app.extensions['portfolio_backend'].shared['upload_locks'].for_key(admin_id)

    lock.acquire()
    try:
        blocked = upload(admin_client)
        allowed = upload(editor_client)
    finally:
        lock.release()

    assert blocked.status_code == 400
    assert blocked.get_json()['error'] == 'Another upload is already in progress'
    assert allowed.status_code == 201
    assert upload(admin_client).status_code == 201


def test_login_is_not_remembered_beyond_the_session(client):
    response = client.post('/auth/login', json={
        'email': ADMIN_EMAIL, 'password': ADMIN_PASSWORD, 'remember_me': True,
    })
    assert response.status_code == 200
    assert client.get_cookie('remember_token') is None

    client.delete_cookie('session')

    assert client.get('/auth/me').get_json()['authenticated'] is False


def test_sign_in_is_logged_by_auth_listener(client, caplog):
    with caplog.at_level(logging.INFO, logger='portfolio'):
        client.post('/auth/login', json={'email': ADMIN_EMAIL, 'password': ADMIN_PASSWORD})

    assert 'Auth state changed: SIGNED_IN (admin@example.com)' in caplog.text
