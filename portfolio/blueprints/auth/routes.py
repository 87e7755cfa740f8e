from flask import current_app, jsonify, session
from flask_login import current_user, login_user, logout_user
from flask_wtf.csrf import generate_csrf
from supabase import AuthError

from portfolio.blueprints.auth import auth_bp
from portfolio.blueprints.auth.forms import LoginForm
from portfolio.extensions import (
    bind_session_backend, clear_admin_session, get_backend, store_backend_session,
)
from portfolio.models import AdminUser
from portfolio.utils.decorators import admin_required
from portfolio.utils.forms import validate_form


@auth_bp.route('/csrf-token')
def csrf_token():
    """为 JSON 客户端提供 CSRF 令牌"""
    return jsonify({'csrf_token': generate_csrf()})


@auth_bp.route('/login', methods=['POST'])
def login():
    """
    在新建的客户端上登录，令牌只写入该管理员的 Flask 会话
    应用级匿名客户端始终不带会话
    """
    form = validate_form(LoginForm())
    scoped = get_backend().fresh()
    try:
        backend_user = scoped.auth.sign_in(form.email.data, form.password.data)
    except AuthError as e:
        current_app.logger.warning(f'Admin sign-in failed for {form.email.data}: {e.message}')
        return jsonify({'success': False, 'error': e.message}), 401

    user = AdminUser.from_backend(backend_user)
    backend_session = scoped.auth.current_session()
    if user is None or backend_session is None:
        return jsonify({'success': False, 'error': 'Invalid login credentials'}), 401

    store_backend_session(backend_session)
    session['admin_email'] = user.email
    session['admin_created_at'] = user.to_dict()['created_at']
    login_user(user)
    current_app.logger.info(f'Admin signed in: {user.email}')
    return jsonify({'success': True, 'user': user.to_dict()})


@auth_bp.route('/logout', methods=['POST'])
@admin_required
def logout():
    """只注销当前管理员自己的后端会话"""
    email = current_user.email
    try:
        bind_session_backend().auth.sign_out()
    finally:
        logout_user()
        clear_admin_session()
    current_app.logger.info(f'Admin signed out: {email}')
    return jsonify({'success': True})


@auth_bp.route('/me')
def me():
    """当前登录状态，前端据此决定是否展示后台"""
    if not current_user.is_authenticated:
        return jsonify({'authenticated': False, 'user': None})
    return jsonify({'authenticated': True, 'user': current_user.to_dict()})
