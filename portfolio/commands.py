import click
from flask import current_app
from flask.cli import with_appcontext

from portfolio.extensions import get_backend
from portfolio.services.diagnostics import run_self_test


@click.command('status')
@with_appcontext
def status():
    """
    [验证指令] 检查 Supabase 后端连通性：环境变量、数据表、认证会话、已发布文章。
    """
    click.echo(click.style('📊 Backend status check:', fg='cyan', bold=True))

    result = run_self_test(get_backend(), current_app.config)

    for name, present in result['env'].items():
        mark = click.style('✔', fg='green') if present else click.style('✘', fg='red')
        click.echo(f" {mark} {name}")

    if result['status'] == 'success':
        click.echo(f" - Current user: \t{result['user'] or 'anonymous'}")
        click.echo(f" - Published posts: \t{result['published_posts']}")
        click.echo(click.style('✔ Backend connection OK.', fg='green'))
    else:
        click.echo(click.style(f"✘ Backend check failed: {result['error']}", fg='red'))
        raise SystemExit(1)
