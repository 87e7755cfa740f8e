from flask import request, jsonify, current_app

from portfolio.blueprints.site import site_bp
from portfolio.blueprints.site.forms import ContactForm
from portfolio.exceptions import NotFound
from portfolio.extensions import get_backend
from portfolio.models.content import ARTWORK_CATEGORIES
from portfolio.services.blog_service import SORT_OPTIONS
from portfolio.services.diagnostics import run_self_test
from portfolio.utils.forms import form_payload, validate_form
from portfolio.utils.listing import paginate

SKILLS = [
    {'name': '3D Modeling', 'level': 95, 'category': '3D'},
    {'name': 'Blender', 'level': 90, 'category': '3D'},
    {'name': 'Maya', 'level': 85, 'category': '3D'},
    {'name': 'Digital Painting', 'level': 92, 'category': '2D'},
    {'name': 'Photoshop', 'level': 95, 'category': '2D'},
    {'name': 'Illustrator', 'level': 88, 'category': '2D'},
    {'name': 'Photography', 'level': 87, 'category': 'Photo'},
    {'name': 'Lightroom', 'level': 90, 'category': 'Photo'},
    {'name': 'Video Editing', 'level': 83, 'category': 'Video'},
    {'name': 'After Effects', 'level': 80, 'category': 'Video'},
]

# 不计入访问统计的端点
UNTRACKED_ENDPOINTS = {'site.test_backend'}


@site_bp.after_request
def track_page_view(response):
    """公开页面 GET 成功后记录访问 (失败只记录日志)"""
    if (current_app.config.get('TRACK_PAGE_VIEWS')
            and request.method == 'GET'
            and response.status_code == 200
            and request.endpoint not in UNTRACKED_ENDPOINTS):
        get_backend().analytics.track_page_view(
            request.path,
            user_agent=request.user_agent.string or None,
            referrer=request.referrer,
        )
    return response


@site_bp.route('/')
def index():
    """首页：最新文章与精选作品"""
    services = get_backend()
    posts = services.blog.get_published_posts()
    artworks = services.artworks.get_artworks()
    return jsonify({
        'success': True,
        'latest_posts': [p.to_dict() for p in posts[:3]],
        'featured_artworks': [a.to_dict() for a in artworks if a.featured][:6],
    })


@site_bp.route('/about')
def about():
    return jsonify({'success': True, 'skills': SKILLS})


@site_bp.route('/blog')
def blog_index():
    """博客列表：搜索、分类筛选、排序与分页都在内存中完成"""
    search = request.args.get('search', '', type=str)
    category = request.args.get('category', 'All', type=str)
    sort = request.args.get('sort', 'newest', type=str)
    if sort not in SORT_OPTIONS:
        sort = 'newest'
    page = request.args.get('page', 1, type=int)

    services = get_backend()
    posts = services.blog.get_published_posts()
    filtered = services.blog.filter_posts(posts, search=search, category=category, sort=sort)
    pagination = paginate(filtered, page, current_app.config.get('POSTS_PER_PAGE', 6))
    featured = next((p for p in posts if p.featured), None)

    pagination['items'] = [p.to_dict() for p in pagination['items']]
    return jsonify({
        'success': True,
        'categories': ['All'] + services.blog.list_categories(posts),
        'current_category': category,
        'sort': sort,
        'featured_post': featured.to_dict() if featured else None,
        'pagination': pagination,
    })


@site_bp.route('/blog/<slug>')
def blog_detail(slug):
    """文章详情，同时增加阅读数"""
    services = get_backend()
    post = services.blog.get_post_by_slug(slug)
    if post is None:
        raise NotFound('Post not found')
    services.blog.increment_views(post.id)
    return jsonify({'success': True, 'post': post.to_dict()})


@site_bp.route('/contact', methods=['POST'])
def contact():
    """公开联系表单"""
    form = validate_form(ContactForm())
    submission = get_backend().contacts.submit_contact(form_payload(form))
    return jsonify({'success': True, 'submission': submission.to_dict()}), 201


@site_bp.route('/work')
def work_index():
    """全部作品及各画廊数量"""
    artworks = get_backend().artworks.get_artworks()
    counts = {c: sum(1 for a in artworks if a.category == c) for c in ARTWORK_CATEGORIES}
    return jsonify({
        'success': True,
        'counts': counts,
        'artworks': [a.to_dict() for a in artworks],
    })


@site_bp.route('/work/<any("2d", "3d", "photography"):category>')
def gallery(category):
    """分类画廊：?subcategory= 与 ?search= 在内存中筛选"""
    subcategory = request.args.get('subcategory', 'All', type=str)
    search = request.args.get('search', '', type=str)
    artworks, subcategories = get_backend().artworks.gallery(category, subcategory, search)
    return jsonify({
        'success': True,
        'category': category,
        'subcategories': ['All'] + subcategories,
        'current_subcategory': subcategory,
        'artworks': [a.to_dict() for a in artworks],
    })


@site_bp.route('/test-backend')
def test_backend():
    """后端连通性自检页"""
    result = run_self_test(get_backend(), current_app.config)
    return jsonify(result), 200 if result['status'] == 'success' else 500
