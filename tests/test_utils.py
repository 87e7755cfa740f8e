import pytest

from portfolio.utils.file_helper import format_size, generate_unique_filename, get_file_extension, safe_folder
from portfolio.utils.listing import paginate
from portfolio.utils.storage import storage_path_from_url
from portfolio.utils.text import calculate_read_time, normalize_tags, slugify


@pytest.mark.parametrize('title, slug', [
    ('Color Theory Guide', 'color-theory-guide'),
    ('  Blender 4.0: What\'s New?  ', 'blender-4-0-what-s-new'),
    ('---', ''),
])
def test_slugify(title, slug):
    assert slugify(title) == slug


def test_read_time_minimum_is_one_minute():
    assert calculate_read_time('') == 1
    assert calculate_read_time('word ' * 200) == 1
    assert calculate_read_time('word ' * 201) == 2


def test_normalize_tags():
    assert normalize_tags(' art, 3d ,art,, ') == ['art', '3d']
    assert normalize_tags(None) == []


def test_paginate_clamps_page():
    items = list(range(13))

    first = paginate(items, page=1, per_page=6)
    last = paginate(items, page=99, per_page=6)

    assert first['items'] == [0, 1, 2, 3, 4, 5]
    assert first['has_prev'] is False and first['has_next'] is True
    assert last['page'] == 3
    assert last['items'] == [12]
    assert last['pages'] == 3


def test_paginate_empty_list_has_one_page():
    result = paginate([], page=1, per_page=6)

    assert result['pages'] == 1
    assert result['items'] == []


def test_storage_path_from_public_url():
    url = 'https://abc.supabase.co/storage/v1/object/public/images/photos/1700000000000-abc.jpg'

    assert storage_path_from_url(url) == 'photos/1700000000000-abc.jpg'
    assert storage_path_from_url(url + '?t=1') == 'photos/1700000000000-abc.jpg'
    assert storage_path_from_url(None) is None


def test_file_helpers():
    assert get_file_extension('Cover.PNG') == 'png'
    assert get_file_extension('blob', 'image/svg+xml') == 'svg'
    assert generate_unique_filename('webp').endswith('.webp')
    assert safe_folder('../etc') == 'etc'
    assert safe_folder('') == 'uploads'
    assert format_size(5 * 1024 * 1024) == '5.0 MB'
