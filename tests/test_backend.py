import pytest

from config import TestingConfig
from portfolio import create_app
from portfolio.client import create_public_client, create_service_client, missing_public_settings
from portfolio.exceptions import BackendConfigError
from portfolio.services.diagnostics import run_self_test


def test_missing_public_settings_lists_blank_values():
    cfg = {'SUPABASE_URL': '  ', 'SUPABASE_ANON_KEY': 'anon'}

    assert missing_public_settings(cfg) == ['SUPABASE_URL']


def test_public_client_requires_url_and_key():
    with pytest.raises(BackendConfigError) as exc:
        create_public_client({})
    assert exc.value.message == 'Missing SUPABASE_URL and SUPABASE_ANON_KEY environment variable'


def test_public_client_reports_single_missing_key():
    with pytest.raises(BackendConfigError) as exc:
        create_public_client({'SUPABASE_URL': 'https://test-project.supabase.co'})
    assert exc.value.message == 'Missing SUPABASE_ANON_KEY environment variable'


def test_service_client_requires_service_key():
    with pytest.raises(BackendConfigError) as exc:
        create_service_client({'SUPABASE_URL': 'https://test-project.supabase.co'})
    assert exc.value.message == 'Missing SUPABASE_SERVICE_ROLE_KEY environment variable'


def test_app_fails_fast_without_backend_settings(monkeypatch):
    monkeypatch.setattr(TestingConfig, 'SUPABASE_URL', None)

    with pytest.raises(BackendConfigError):
        create_app('testing')


def test_self_test_success(services, app):
    result = run_self_test(services, app.config)

    assert result['status'] == 'success'
    assert result['error'] is None
    assert result['env'] == {'SUPABASE_URL': True, 'SUPABASE_ANON_KEY': True}


def test_self_test_reports_missing_env_before_probing(services, fake_client):
    result = run_self_test(services, {'SUPABASE_ANON_KEY': 'anon'})

    assert result['status'] == 'error'
    assert result['error'] == 'Missing environment variables: SUPABASE_URL'
    assert fake_client.calls == []


def test_self_test_reports_backend_error(services, app, fake_client):
    fake_client.fail('blog_categories')

    result = run_self_test(services, app.config)

    assert result['status'] == 'error'
    assert result['error'] == 'blog_categories unavailable'


def test_status_command(app):
    result = app.test_cli_runner().invoke(args=['status'])

    assert result.exit_code == 0
    assert 'Backend connection OK' in result.output


def test_status_command_fails_on_backend_error(app, fake_client):
    fake_client.fail('blog_categories')

    result = app.test_cli_runner().invoke(args=['status'])

    assert result.exit_code == 1
    assert 'blog_categories unavailable' in result.output


def test_backend_extension_is_not_shadowed_by_a_submodule():
    import portfolio
    from portfolio.extensions import Backend

    assert isinstance(portfolio.backend, Backend)
