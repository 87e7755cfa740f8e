from flask import request, jsonify, current_app
from flask_login import current_user

from portfolio.blueprints.admin import admin_bp
from portfolio.blueprints.admin.forms import (
    ArtworkForm, BlogPostForm, PhotoForm, StatusForm, UploadForm,
)
from portfolio.exceptions import NotFound
from portfolio.extensions import bind_session_backend, get_backend, sync_backend_session
from portfolio.models.content import (
    BLOG_CATEGORIES, CATEGORY_2D, CATEGORY_3D, CATEGORY_PHOTOGRAPHY, SUBCATEGORY_CHOICES,
)
from portfolio.services.analytics_service import AnalyticsService
from portfolio.services.blog_service import BlogService
from portfolio.utils.decorators import admin_required
from portfolio.utils.file_helper import format_size
from portfolio.utils.forms import form_payload, submitted_fields, validate_form


@admin_bp.before_request
@admin_required
def require_admin():
    """后台所有路由都需要登录，并以该管理员自己的后端会话访问数据"""
    bind_session_backend()


@admin_bp.after_request
def persist_backend_session(response):
    sync_backend_session()
    return response


# ============================================================
# 仪表盘
# ============================================================

@admin_bp.route('/')
def dashboard():
    days = current_app.config.get('PAGE_VIEW_DAYS', 30)
    return jsonify({'success': True, 'stats': get_backend().dashboard.get_stats(days)})


# ============================================================
# 博客管理
# ============================================================

@admin_bp.route('/blog')
def blog_list():
    """文章列表 (含草稿)"""
    posts = get_backend().blog.get_all_posts()
    posts = BlogService.filter_posts(
        posts,
        search=request.args.get('search', '', type=str),
        category=request.args.get('category', 'All', type=str),
        sort=request.args.get('sort', 'newest', type=str),
    )
    return jsonify({
        'success': True,
        'category_choices': BLOG_CATEGORIES,
        'posts': [p.to_dict() for p in posts],
    })


@admin_bp.route('/blog/new', methods=['POST'])
def blog_new():
    """新建文章 (默认草稿)"""
    form = validate_form(BlogPostForm())
    post = get_backend().blog.create_post(form_payload(form))
    return jsonify({'success': True, 'post': post.to_dict()}), 201


@admin_bp.route('/blog/edit/<id>', methods=['GET', 'POST'])
def blog_edit(id):
    """编辑文章：GET 读取，POST 只更新提交了的字段"""
    services = get_backend()
    if request.method == 'GET':
        post = services.blog.get_post_by_id(id)
        if post is None:
            raise NotFound('Blog post not found')
        return jsonify({'success': True, 'post': post.to_dict()})

    form = validate_form(BlogPostForm())
    updates = form_payload(form, only=submitted_fields())
    post = services.blog.update_post(id, updates)
    return jsonify({'success': True, 'post': post.to_dict()})


@admin_bp.route('/blog/<id>/toggle-publish', methods=['POST'])
def blog_toggle_publish(id):
    services = get_backend()
    post = services.blog.get_post_by_id(id)
    if post is None:
        raise NotFound('Blog post not found')
    updated = services.blog.update_post(id, {'published': not post.published})
    return jsonify({'success': True, 'post': updated.to_dict()})


@admin_bp.route('/blog/<id>/delete', methods=['POST'])
def blog_delete(id):
    get_backend().blog.delete_post(id)
    return jsonify({'success': True})


# ============================================================
# 2D / 3D 作品管理
# ============================================================

@admin_bp.route('/art')
def art_list():
    category = request.args.get('category', '', type=str)
    artworks = get_backend().artworks.get_artworks(category or None)
    artworks = [a for a in artworks if a.category in (CATEGORY_2D, CATEGORY_3D)]
    return jsonify({
        'success': True,
        'subcategory_choices': {
            CATEGORY_2D: SUBCATEGORY_CHOICES[CATEGORY_2D],
            CATEGORY_3D: SUBCATEGORY_CHOICES[CATEGORY_3D],
        },
        'artworks': [a.to_dict() for a in artworks],
    })


@admin_bp.route('/art/new', methods=['POST'])
def art_new():
    form = validate_form(ArtworkForm())
    artwork = get_backend().artworks.create_artwork(form_payload(form))
    return jsonify({'success': True, 'artwork': artwork.to_dict()}), 201


@admin_bp.route('/art/<id>/edit', methods=['POST'])
def art_edit(id):
    form = validate_form(ArtworkForm())
    updates = form_payload(form, only=submitted_fields())
    artwork = get_backend().artworks.update_artwork(id, updates)
    return jsonify({'success': True, 'artwork': artwork.to_dict()})


@admin_bp.route('/art/<id>/delete', methods=['POST'])
@admin_bp.route('/photos/<id>/delete', methods=['POST'])
def art_delete(id):
    get_backend().artworks.delete_artwork(id)
    return jsonify({'success': True})


# ============================================================
# 摄影作品管理
# ============================================================

@admin_bp.route('/photos')
def photo_list():
    photos = get_backend().artworks.get_artworks(CATEGORY_PHOTOGRAPHY)
    return jsonify({
        'success': True,
        'subcategory_choices': SUBCATEGORY_CHOICES[CATEGORY_PHOTOGRAPHY],
        'photos': [p.to_dict() for p in photos],
    })


@admin_bp.route('/photos/new', methods=['POST'])
def photo_new():
    form = validate_form(PhotoForm())
    data = form_payload(form)
    data['category'] = CATEGORY_PHOTOGRAPHY
    photo = get_backend().artworks.create_artwork(data)
    return jsonify({'success': True, 'photo': photo.to_dict()}), 201


# ============================================================
# 联系记录
# ============================================================

@admin_bp.route('/contacts')
def contact_list():
    submissions = get_backend().contacts.get_submissions()
    status = request.args.get('status', '', type=str)
    if status:
        submissions = [s for s in submissions if s.status == status]
    return jsonify({'success': True, 'submissions': [s.to_dict() for s in submissions]})


@admin_bp.route('/contacts/<id>/status', methods=['POST'])
def contact_status(id):
    form = validate_form(StatusForm())
    get_backend().contacts.update_status(id, form.status.data)
    return jsonify({'success': True, 'status': form.status.data})


# ============================================================
# 访问统计
# ============================================================

@admin_bp.route('/analytics')
def analytics():
    days = request.args.get('days', current_app.config.get('PAGE_VIEW_DAYS', 30), type=int)
    page_views = get_backend().analytics.get_page_views(days)
    return jsonify({
        'success': True,
        'days': days,
        'total': len(page_views),
        'by_page': [{'page_path': p, 'views': n} for p, n in AnalyticsService.views_by_page(page_views)],
        'page_views': [v.to_dict() for v in page_views[:100]],
    })


# ============================================================
# 图片上传
# ============================================================

@admin_bp.route('/upload', methods=['POST'])
def upload():
    """上传图片到对象存储，返回公开 URL"""
    form = validate_form(UploadForm())
    uploader = get_backend().new_uploader(owner=current_user.get_id())
    file_data = form.file.data
    current_app.logger.info(f'Upload received: {file_data.filename} -> {form.folder.data}/')

    url = uploader.upload(file_data, folder=form.folder.data)
    return jsonify({
        'success': True,
        'url': url,
        'state': uploader.state,
        'max_size': format_size(uploader.max_size_mb * 1024 * 1024),
    }), 201
