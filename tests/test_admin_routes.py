import io

import pytest

from tests.conftest import ADMIN_EMAIL, ADMIN_PASSWORD
from tests.helpers import make_post

IMAGE_URL = 'https://test-project.supabase.co/storage/v1/object/public/images/artwork/neon.png'


@pytest.mark.parametrize('method, path', [
    ('get', '/admin/'),
    ('get', '/admin/blog'),
    ('post', '/admin/blog/new'),
    ('get', '/admin/contacts'),
    ('post', '/admin/upload'),
])
def test_admin_routes_require_login(client, method, path):
    response = getattr(client, method)(path)

    assert response.status_code == 401
    assert response.get_json()['error'] == 'Authentication required'


def test_login_with_wrong_password(client):
    response = client.post('/auth/login', json={'email': ADMIN_EMAIL, 'password': 'wrong'})

    assert response.status_code == 401
    assert response.get_json()['error'] == 'Invalid login credentials'
    assert client.get('/auth/me').get_json()['authenticated'] is False


def test_login_requires_valid_email(client):
    response = client.post('/auth/login', json={'email': 'admin', 'password': ADMIN_PASSWORD})

    assert response.status_code == 400


def test_me_and_logout(admin_client):
    me = admin_client.get('/auth/me').get_json()
    assert me['authenticated'] is True
    assert me['user']['email'] == ADMIN_EMAIL

    assert admin_client.post('/auth/logout').status_code == 200
    assert admin_client.get('/admin/').status_code == 401
    assert admin_client.get('/auth/me').get_json()['authenticated'] is False


def test_dashboard(admin_client, services):
    make_post(services, published=True)

    stats = admin_client.get('/admin/').get_json()['stats']

    assert stats['blog_posts'] == 1
    assert stats['published_posts'] == 1


def test_new_post_is_draft_unless_published(admin_client):
    draft = admin_client.post('/admin/blog/new', json={
        'title': 'Lighting Basics', 'content': 'Three point lighting explained.',
    }).get_json()['post']
    live = admin_client.post('/admin/blog/new', json={
        'title': 'Rendering Tips', 'content': 'Use denoising.', 'published': True, 'tags': ['render', 'tips'],
    }).get_json()['post']

    assert draft['published'] is False
    assert draft['published_at'] is None
    assert draft['slug'] == 'lighting-basics'
    assert live['published'] is True
    assert live['published_at'] is not None
    assert live['tags'] == ['render', 'tips']


def test_new_post_requires_content(admin_client, fake_client):
    response = admin_client.post('/admin/blog/new', json={'title': 'Empty'})

    assert response.status_code == 400
    assert 'content' in response.get_json()['errors']
    assert fake_client.calls_to('blog_posts') == []


def test_edit_post_only_touches_submitted_fields(admin_client, services):
    post = make_post(services, featured=True)

    response = admin_client.post(f'/admin/blog/edit/{post.id}', json={
        'title': 'Color Theory, Revisited', 'content': 'New body text.',
    })

    updated = response.get_json()['post']
    assert updated['title'] == 'Color Theory, Revisited'
    assert updated['tags'] == ['color', 'painting']
    assert updated['featured'] is True
    assert updated['published'] is False


def test_edit_missing_post_is_404(admin_client):
    assert admin_client.get('/admin/blog/edit/missing').status_code == 404


def test_toggle_publish(admin_client, services, client):
    post = make_post(services)

    published = admin_client.post(f'/admin/blog/{post.id}/toggle-publish').get_json()['post']
    assert published['published'] is True
    assert published['published_at'] is not None
    assert client.get(f'/blog/{post.slug}').status_code == 200

    unpublished = admin_client.post(f'/admin/blog/{post.id}/toggle-publish').get_json()['post']
    assert unpublished['published'] is False
    assert unpublished['published_at'] is None


def test_delete_post(admin_client, services):
    post = make_post(services)

    assert admin_client.post(f'/admin/blog/{post.id}/delete').status_code == 200
    assert admin_client.get(f'/admin/blog/edit/{post.id}').status_code == 404


def test_admin_blog_list_includes_drafts(admin_client, services):
    make_post(services)
    make_post(services, title='Live', published=True)

    posts = admin_client.get('/admin/blog').get_json()['posts']

    assert sorted(p['title'] for p in posts) == ['Color Theory Guide', 'Live']


def test_created_artwork_appears_only_in_its_gallery(admin_client):
    response = admin_client.post('/admin/art/new', json={
        'title': 'Neon Alley', 'image_url': IMAGE_URL, 'category': '2d', 'subcategory': 'Illustration',
    })
    assert response.status_code == 201

    def titles(path):
        return [a['title'] for a in admin_client.get(path).get_json()['artworks']]

    assert titles('/work/2d') == ['Neon Alley']
    assert titles('/work/3d') == []
    assert titles('/work/photography') == []


@pytest.mark.parametrize('payload', [
    {'title': 'Bust', 'image_url': IMAGE_URL, 'category': 'sculpture', 'subcategory': 'Props'},
    {'title': 'Bust', 'image_url': IMAGE_URL, 'category': '3d'},
    {'title': 'Bust', 'category': '3d', 'subcategory': 'Props'},
])
def test_invalid_artwork_is_rejected(admin_client, fake_client, payload):
    response = admin_client.post('/admin/art/new', json=payload)

    assert response.status_code == 400
    assert fake_client.calls_to('artworks') == []


def test_photo_is_stored_as_photography(admin_client):
    response = admin_client.post('/admin/photos/new', json={
        'title': 'Misty Ridge', 'image_url': IMAGE_URL, 'subcategory': 'Landscape', 'camera': 'X100V',
    })

    assert response.status_code == 201
    assert response.get_json()['photo']['category'] == 'photography'
    photos = admin_client.get('/admin/photos').get_json()['photos']
    assert [p['title'] for p in photos] == ['Misty Ridge']
    assert admin_client.get('/admin/art').get_json()['artworks'] == []


def test_edit_and_delete_artwork(admin_client, fake_client):
    artwork = admin_client.post('/admin/art/new', json={
        'title': 'Neon Alley', 'image_url': IMAGE_URL, 'category': '2d', 'subcategory': 'Illustration',
    }).get_json()['artwork']

    edited = admin_client.post(f"/admin/art/{artwork['id']}/edit", json={
        'title': 'Neon Alley', 'image_url': IMAGE_URL, 'subcategory': 'Concept Art',
    }).get_json()['artwork']
    assert edited['subcategory'] == 'Concept Art'

    assert admin_client.post(f"/admin/art/{artwork['id']}/delete").status_code == 200
    assert fake_client.tables['artworks'] == []
    assert fake_client.storage.remove_calls == [('images', ['artwork/neon.png'])]


def test_contact_status_workflow(admin_client, services):
    submission = services.contacts.submit_contact({
        'name': 'Jane', 'email': 'jane@x.com', 'subject': 'Commission', 'message': 'Hi',
    })

    response = admin_client.post(f'/admin/contacts/{submission.id}/status', json={'status': 'read'})
    assert response.status_code == 200

    unread = admin_client.get('/admin/contacts?status=new').get_json()['submissions']
    read = admin_client.get('/admin/contacts?status=read').get_json()['submissions']
    assert unread == []
    assert [s['name'] for s in read] == ['Jane']

    bad = admin_client.post(f'/admin/contacts/{submission.id}/status', json={'status': 'spam'})
    assert bad.status_code == 400


def test_analytics_summary(admin_client):
    admin_client.get('/about')
    admin_client.get('/about')
    admin_client.get('/work')

    data = admin_client.get('/admin/analytics?days=7').get_json()

    assert data['days'] == 7
    assert data['total'] == 3
    assert data['by_page'] == [{'page_path': '/about', 'views': 2}, {'page_path': '/work', 'views': 1}]


def test_upload_image(admin_client, fake_client):
    response = admin_client.post('/admin/upload', data={
        'file': (io.BytesIO(b'\x89PNG' + b'\0' * 512), 'shot.png', 'image/png'),
        'folder': 'photos',
    }, content_type='multipart/form-data')

    assert response.status_code == 201
    data = response.get_json()
    assert '/storage/v1/object/public/images/photos/' in data['url']
    assert data['url'].endswith('.png')
    assert data['state'] == 'success'
    assert len(fake_client.storage.upload_calls) == 1


def test_upload_rejects_oversized_image(app, admin_client, fake_client):
    app.config['UPLOAD_MAX_MB'] = 5

    response = admin_client.post('/admin/upload', data={
        'file': (io.BytesIO(b'\0' * (10 * 1024 * 1024)), 'huge.png', 'image/png'),
        'folder': 'blog',
    }, content_type='multipart/form-data')

    assert response.status_code == 400
    assert response.get_json()['error'] == 'File size must be less than 5MB'
    assert fake_client.storage.upload_calls == []


def test_upload_requires_file(admin_client):
    response = admin_client.post('/admin/upload', data={'folder': 'blog'}, content_type='multipart/form-data')

    assert response.status_code == 400


def test_status_update_for_missing_submission_is_404(admin_client):
    response = admin_client.post('/admin/contacts/missing/status', json={'status': 'read'})

    assert response.status_code == 404
